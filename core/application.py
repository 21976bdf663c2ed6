"""Main application class that ties everything together."""

import numpy as np
import pygame
from pygame.locals import *
from OpenGL.GL import *
from OpenGL.GLU import *

from config import boids as config
from .camera import Camera
from .input_handler import InputHandler
from rendering import BoundsGrid, FlockRenderer, ObstacleRenderer, TextRenderer
from boids import Bounds, Flock, build_obstacles


class Application:
    """Main application managing the game loop and rendering."""

    def __init__(self):
        pygame.init()
        pygame.display.set_mode(
            (config.WINDOW["width"], config.WINDOW["height"]),
            DOUBLEBUF | OPENGL
        )
        pygame.display.set_caption(config.WINDOW["title"])

        # Simulation
        dim = config.BOIDS["bounds"]
        self.bounds = Bounds.cube(dim)
        self.rng = np.random.default_rng(config.BOIDS["seed"])
        self.obstacles = build_obstacles(config.obstacle_layout(dim))
        self.flock = Flock.spawn(
            config.BOIDS["count"],
            self.bounds,
            rng=self.rng,
            groups=config.BOIDS["groups"],
            obstacles=self.obstacles,
        )
        print(f"[Boids] {len(self.obstacles)} obstacles in scene")

        # Core components
        self.camera = Camera()
        self.input_handler = InputHandler(self.camera, self.flock)
        self.follow_index = 0

        # Rendering components
        self.grid = BoundsGrid()
        self.flock_renderer = FlockRenderer()
        self.obstacle_renderer = ObstacleRenderer()
        self.text_renderer = TextRenderer()

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 0

        self._setup_gl()

    def _setup_gl(self):
        """Initialize OpenGL settings."""
        glClearColor(*config.COLORS["background"])
        glEnable(GL_DEPTH_TEST)
        glEnable(GL_FOG)
        glFogi(GL_FOG_MODE, GL_LINEAR)
        glFogfv(GL_FOG_COLOR, config.COLORS["background"])
        glFogf(GL_FOG_START, 50.0)
        glFogf(GL_FOG_END, config.CAMERA["far_clip"] * 0.8)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(
            config.CAMERA["fov"],
            config.WINDOW["width"] / config.WINDOW["height"],
            config.CAMERA["near_clip"],
            config.CAMERA["far_clip"]
        )
        glMatrixMode(GL_MODELVIEW)

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if not self.input_handler.handle_event(event):
                self.running = False

    def _update(self, dt: float):
        """Advance the flock one frame and move the camera."""
        self.input_handler.handle_continuous_input(dt)
        self.flock.step()
        self.camera.update(dt)

        if len(self.flock) == 0:
            return
        if self.flock.frame % config.CAMERA["follow_switch_frames"] == 0:
            self.follow_index = int(self.rng.integers(len(self.flock)))
        followed = self.flock.agents[self.follow_index]
        self.camera.track(followed.position, followed.velocity)

    def _hud_lines(self) -> list:
        t = self.flock.tuning
        w = t.weights
        return [
            f"Boids: {len(self.flock)}  |  FPS: {self.fps:.0f}  |  Frame: {self.flock.frame}",
            f"[1] align {w.align:.2f}  [2] cohere {w.cohere:.2f}  [3] separate {w.separate:.2f}",
            f"[4] avoid {w.avoid:.2f}  [5] center {w.center:.2f}  [+/-] speed x{t.speed_factor:.2f}",
            f"[V] FOV {'on' if t.field_of_view else 'off'}  [K] keep-to-center {'on' if t.keep_to_center else 'off'}"
            f"  [F] {'follow' if self.camera.follow else 'free'} camera",
        ]

    def _render(self):
        """Render the scene."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self.camera.apply()

        self.grid.draw(self.bounds)
        self.obstacle_renderer.draw(self.obstacles, show_walls=self.input_handler.show_walls)
        self.flock_renderer.draw(self.flock.render_states())

        screen_size = (config.WINDOW["width"], config.WINDOW["height"])
        self.text_renderer.draw_lines(self._hud_lines(), 10, 10, screen_size)

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        while self.running:
            dt = min(self.clock.tick(60) / 1000.0, 0.05)
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update(dt)
            self._render()

        pygame.quit()

"""Input handling for keyboard and mouse events."""

import pygame
from pygame.locals import *
from config import boids as config

from .camera import Camera

# Number keys raise a weight, shift + number lowers it
WEIGHT_KEYS = {
    K_1: "align_weight",
    K_2: "cohere_weight",
    K_3: "separate_weight",
    K_4: "avoid_weight",
    K_5: "keep_to_center_weight",
}


class InputHandler:
    """Handles keyboard and mouse input for the camera and flock tuning."""

    def __init__(self, camera: Camera, flock):
        self.camera = camera
        self.flock = flock
        self.mouse_dragging = False
        self.last_mouse_pos = (0, 0)
        self.show_walls = False

    def _handle_key(self, event: pygame.event.Event):
        tuning = self.flock.tuning
        shift = bool(event.mod & KMOD_SHIFT)

        if event.key in WEIGHT_KEYS:
            step = config.TUNING["weight_step"]
            self.flock.tuning = tuning.nudge(WEIGHT_KEYS[event.key], -step if shift else step)
        elif event.key in (K_EQUALS, K_PLUS, K_KP_PLUS):
            self.flock.tuning = tuning.nudge("speed_factor", config.TUNING["speed_step"])
        elif event.key in (K_MINUS, K_KP_MINUS):
            self.flock.tuning = tuning.nudge("speed_factor", -config.TUNING["speed_step"])
        elif event.key == K_v:
            self.flock.tuning = tuning.with_changes(field_of_view=not tuning.field_of_view)
        elif event.key == K_k:
            self.flock.tuning = tuning.with_changes(keep_to_center=not tuning.keep_to_center)
        elif event.key == K_f:
            self.camera.toggle_follow()
        elif event.key == K_b:
            self.show_walls = not self.show_walls

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
            self._handle_key(event)
        elif event.type == MOUSEBUTTONDOWN:
            if event.button == 1:
                self.mouse_dragging = True
                self.last_mouse_pos = pygame.mouse.get_pos()
        elif event.type == MOUSEBUTTONUP:
            if event.button == 1:
                self.mouse_dragging = False
        elif event.type == MOUSEWHEEL:
            self.camera.zoom_smooth(-event.y * config.CAMERA["keyboard_zoom_speed"] * 0.5)

        return True

    def handle_continuous_input(self, dt: float):
        """Handle continuous keyboard input (called each frame)."""
        keys = pygame.key.get_pressed()
        rot_speed = config.CAMERA["keyboard_rotate_speed"] * dt
        zoom_speed = config.CAMERA["keyboard_zoom_speed"] * dt

        if keys[K_a]:
            self.camera.rotate(-rot_speed, 0)
        if keys[K_d]:
            self.camera.rotate(rot_speed, 0)
        if keys[K_w]:
            self.camera.rotate(0, rot_speed)
        if keys[K_s]:
            self.camera.rotate(0, -rot_speed)

        if keys[K_q]:
            self.camera.zoom(-zoom_speed)
        if keys[K_e]:
            self.camera.zoom(zoom_speed)

        if self.mouse_dragging:
            current_pos = pygame.mouse.get_pos()
            dx = current_pos[0] - self.last_mouse_pos[0]
            dy = current_pos[1] - self.last_mouse_pos[1]
            self.camera.rotate(
                dx * config.CAMERA["mouse_sensitivity"],
                -dy * config.CAMERA["mouse_sensitivity"]
            )
            self.last_mouse_pos = current_pos

"""Solid rendering of the obstacle field."""

import numpy as np
from OpenGL.GL import *
from OpenGL.GLU import *

from config import boids as config
from boids.obstacles import Box, Sphere

# Corner signs for each face of a unit box, wound counter-clockwise from outside
BOX_FACES = [
    ((1, 0, 0), [(1, -1, -1), (1, 1, -1), (1, 1, 1), (1, -1, 1)]),
    ((-1, 0, 0), [(-1, -1, 1), (-1, 1, 1), (-1, 1, -1), (-1, -1, -1)]),
    ((0, 1, 0), [(-1, 1, -1), (-1, 1, 1), (1, 1, 1), (1, 1, -1)]),
    ((0, -1, 0), [(-1, -1, 1), (-1, -1, -1), (1, -1, -1), (1, -1, 1)]),
    ((0, 0, 1), [(-1, -1, 1), (1, -1, 1), (1, 1, 1), (-1, 1, 1)]),
    ((0, 0, -1), [(1, -1, -1), (-1, -1, -1), (-1, 1, -1), (1, 1, -1)]),
]


class ObstacleRenderer:
    """Draws boxes as flat-shaded quads and spheres as GLU quadrics."""

    def __init__(self, sphere_slices: int = 24):
        self.color = config.COLORS["obstacle"]
        self.wall_color = config.COLORS["wall"]
        self.sphere_slices = sphere_slices
        self._quadric = None

    def draw(self, field, show_walls: bool = False):
        """
        Draw every obstacle in an ObstacleField.

        Args:
            field: boids.ObstacleField to draw
            show_walls: Also draw the faces that close off the bounds
        """
        for obstacle in field.obstacles:
            if obstacle.wall and not show_walls:
                continue
            if isinstance(obstacle, Box):
                self._draw_box(obstacle)
            elif isinstance(obstacle, Sphere):
                self._draw_sphere(obstacle)

    def _shade(self, obstacle, normal):
        base = self.wall_color if obstacle.wall else self.color
        # Cheap fixed light from above
        light = 0.55 + 0.45 * max(0.0, float(normal[1]) * 0.8 + 0.2)
        glColor3f(base[0] * light, base[1] * light, base[2] * light)

    def _draw_box(self, box: Box):
        half = box.size * 0.5
        glBegin(GL_QUADS)
        for normal, corners in BOX_FACES:
            self._shade(box, box.matrix @ np.array(normal, dtype=np.float64))
            for corner in corners:
                p = box.center + box.matrix @ (half * np.array(corner, dtype=np.float64))
                glVertex3f(*p)
        glEnd()

    def _draw_sphere(self, sphere: Sphere):
        if self._quadric is None:
            self._quadric = gluNewQuadric()
        self._shade(sphere, (0.0, 1.0, 0.0))
        glPushMatrix()
        glTranslatef(*sphere.center)
        gluSphere(self._quadric, sphere.radius, self.sphere_slices, self.sphere_slices)
        glPopMatrix()

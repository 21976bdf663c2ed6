"""Wireframe rendering of the containment bounds."""

from OpenGL.GL import *
from config import boids as config


class BoundsGrid:
    """Draws the flock's bounds box as a wireframe for spatial reference."""

    def __init__(self):
        self.color = config.GRID["color"]

    def draw(self, bounds):
        """
        Draw the twelve edges of the box.

        Args:
            bounds: boids.Bounds to outline
        """
        (x0, y0, z0), (x1, y1, z1) = bounds.start, bounds.end
        corners = [
            ((x0, y0, z0), (x1, y0, z0)), ((x0, y1, z0), (x1, y1, z0)),
            ((x0, y0, z1), (x1, y0, z1)), ((x0, y1, z1), (x1, y1, z1)),
            ((x0, y0, z0), (x0, y1, z0)), ((x1, y0, z0), (x1, y1, z0)),
            ((x0, y0, z1), (x0, y1, z1)), ((x1, y0, z1), (x1, y1, z1)),
            ((x0, y0, z0), (x0, y0, z1)), ((x1, y0, z0), (x1, y0, z1)),
            ((x0, y1, z0), (x0, y1, z1)), ((x1, y1, z0), (x1, y1, z1)),
        ]

        glBegin(GL_LINES)
        glColor3f(*self.color)
        for a, b in corners:
            glVertex3f(*a)
            glVertex3f(*b)
        glEnd()

"""Text rendering for HUD elements."""

import pygame
from OpenGL.GL import *

from config import boids as config


class TextRenderer:
    """Renders text overlays using pygame fonts and OpenGL."""

    def __init__(self, font_name: str = "monospace", font_size: int = 16):
        pygame.font.init()
        self.font = pygame.font.SysFont(font_name, font_size)
        self.color = tuple(int(c * 255) for c in config.COLORS["text"])
        self.line_height = font_size + 6

    def draw_text(self, text: str, x: int, y: int, screen_size: tuple):
        """
        Draw text at the given screen position.

        Args:
            text: The string to render
            x: X position from left edge
            y: Y position from top edge
            screen_size: (width, height) of the screen
        """
        text_surface = self.font.render(text, True, self.color)
        text_data = pygame.image.tostring(text_surface, "RGBA", True)
        w, h = text_surface.get_size()

        # Pixel-space overlay projection
        glMatrixMode(GL_PROJECTION)
        glPushMatrix()
        glLoadIdentity()
        glOrtho(0, screen_size[0], 0, screen_size[1], -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glPushMatrix()
        glLoadIdentity()

        # HUD draws over the scene, blended and ignoring depth
        glDisable(GL_DEPTH_TEST)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glRasterPos2f(x, screen_size[1] - y - h)
        glDrawPixels(w, h, GL_RGBA, GL_UNSIGNED_BYTE, text_data)
        glDisable(GL_BLEND)
        glEnable(GL_DEPTH_TEST)

        # Back to the scene projection
        glPopMatrix()
        glMatrixMode(GL_PROJECTION)
        glPopMatrix()
        glMatrixMode(GL_MODELVIEW)

    def draw_lines(self, lines, x: int, y: int, screen_size: tuple):
        """Draw several lines of text stacked downward from (x, y)."""
        for i, line in enumerate(lines):
            self.draw_text(line, x, y + i * self.line_height, screen_size)

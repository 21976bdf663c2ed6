"""Rendering components for the 3D boids simulation."""

from .grid import BoundsGrid
from .text import TextRenderer
from .flock_renderer import FlockRenderer
from .obstacles import ObstacleRenderer

__all__ = ["BoundsGrid", "TextRenderer", "FlockRenderer", "ObstacleRenderer"]

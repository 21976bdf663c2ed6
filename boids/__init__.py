"""Boid agents, steering behaviors, and the flock simulation step."""

from .agent import Agent
from .bounds import Bounds, wrap_position
from .flock import Flock, RenderState
from .neighbors import LinearScanSelector, SpatialGridSelector, is_valid_neighbor, make_selector
from .obstacles import Box, Hit, NO_OBSTACLES, ObstacleField, Sphere, build_obstacles
from .tuning import Tuning, Weights

__all__ = [
    "Agent", "Bounds", "wrap_position", "Flock", "RenderState",
    "LinearScanSelector", "SpatialGridSelector", "is_valid_neighbor", "make_selector",
    "Box", "Hit", "NO_OBSTACLES", "ObstacleField", "Sphere", "build_obstacles",
    "Tuning", "Weights",
]

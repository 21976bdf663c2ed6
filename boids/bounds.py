"""Axis-aligned containment box and the wrap-around boundary policy."""

import numpy as np
from dataclasses import dataclass


@dataclass(frozen=True, eq=False)
class Bounds:
    """
    Axis-aligned box shared by every agent in the flock.

    Attributes:
        start: Minimum corner
        end: Maximum corner
    """
    start: np.ndarray
    end: np.ndarray

    def __post_init__(self):
        start = np.array(self.start, dtype=np.float64).reshape(3)
        end = np.array(self.end, dtype=np.float64).reshape(3)
        if np.any(start > end):
            raise ValueError(f"Bounds start {start} exceeds end {end}")
        start.flags.writeable = False
        end.flags.writeable = False
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @classmethod
    def cube(cls, half_size: float) -> "Bounds":
        """Cube centered on the origin spanning +/- half_size on each axis."""
        h = float(half_size)
        return cls(np.array([-h, -h, -h]), np.array([h, h, h]))

    @property
    def center(self) -> np.ndarray:
        return (self.start + self.end) * 0.5

    @property
    def size(self) -> np.ndarray:
        return self.end - self.start

    @property
    def shortest_half_extent(self) -> float:
        return float(np.min(self.size)) * 0.5

    def contains(self, point: np.ndarray) -> bool:
        return bool(np.all(point >= self.start) and np.all(point <= self.end))

    def random_point(self, rng: np.random.Generator, spread: float = 1.0) -> np.ndarray:
        """Uniform point inside the box, scaled toward its center by spread."""
        center = self.center
        return center + (rng.uniform(self.start, self.end) - center) * spread


def wrap_position(position: np.ndarray, bounds: Bounds) -> np.ndarray:
    """
    Wrap a position that has left the box onto the opposite face.

    Each axis is handled independently: beyond the end face teleports to the
    start face and vice versa. Velocity is not touched.
    """
    wrapped = position.copy()
    for axis in range(3):
        if wrapped[axis] > bounds.end[axis]:
            wrapped[axis] = bounds.start[axis]
        elif wrapped[axis] < bounds.start[axis]:
            wrapped[axis] = bounds.end[axis]
    return wrapped

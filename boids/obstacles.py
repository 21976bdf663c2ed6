"""Ray queries against solid obstacles used by obstacle avoidance."""

import math
import numpy as np
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Protocol, Sequence

from .vector import euler_to_matrix, normalize


@dataclass(eq=False)
class Hit:
    """Nearest ray intersection: world point, unit surface normal, distance along the ray."""
    point: np.ndarray
    normal: Optional[np.ndarray]
    distance: float

    @property
    def is_degenerate(self) -> bool:
        """True when the hit carries no usable surface normal or distance."""
        if self.normal is None or not math.isfinite(self.distance):
            return True
        n = np.asarray(self.normal, dtype=np.float64)
        return n.shape != (3,) or not np.all(np.isfinite(n)) or not np.any(n)


class ObstacleQuery(Protocol):
    """Anything that can report the nearest obstacle along a ray."""

    def nearest_hit(self, origin: np.ndarray, direction: np.ndarray) -> Optional[Hit]:
        ...


@dataclass(eq=False)
class Sphere:
    """Solid sphere; only hits on its outside surface count."""
    center: np.ndarray
    radius: float
    wall: bool = False

    def __post_init__(self):
        self.center = np.asarray(self.center, dtype=np.float64)
        self.radius = float(self.radius)

    def intersect(self, origin: np.ndarray, direction: np.ndarray) -> Optional[Hit]:
        oc = origin - self.center
        b = float(np.dot(oc, direction))
        c = float(np.dot(oc, oc)) - self.radius * self.radius
        disc = b * b - c
        if disc < 0 or c < 0:
            # Missed, or the ray starts inside
            return None
        t = -b - math.sqrt(disc)
        if t < 0:
            return None
        point = origin + direction * t
        return Hit(point, normalize(point - self.center), t)


@dataclass(eq=False)
class Box:
    """
    Solid oriented box.

    Attributes:
        center: World center
        size: Edge lengths along the box's local axes
        rotation: XYZ Euler angles in radians
        wall: Marks the translucent faces of the bounds for rendering
    """
    center: np.ndarray
    size: np.ndarray
    rotation: Optional[Sequence[float]] = None
    wall: bool = False
    matrix: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        self.center = np.asarray(self.center, dtype=np.float64)
        self.size = np.asarray(self.size, dtype=np.float64)
        rx, ry, rz = self.rotation if self.rotation is not None else (0.0, 0.0, 0.0)
        self.matrix = euler_to_matrix(rx, ry, rz)

    def intersect(self, origin: np.ndarray, direction: np.ndarray) -> Optional[Hit]:
        """Slab test in the box's local frame; rays starting inside never hit."""
        local_origin = self.matrix.T @ (origin - self.center)
        local_dir = self.matrix.T @ direction
        half = self.size * 0.5

        t_near = -math.inf
        t_far = math.inf
        near_axis = -1
        near_sign = 0.0

        for axis in range(3):
            o = local_origin[axis]
            d = local_dir[axis]
            if abs(d) < 1e-12:
                if o < -half[axis] or o > half[axis]:
                    return None
                continue
            t1 = (-half[axis] - o) / d
            t2 = (half[axis] - o) / d
            sign = -1.0
            if t1 > t2:
                t1, t2 = t2, t1
                sign = 1.0
            if t1 > t_near:
                t_near = t1
                near_axis = axis
                near_sign = sign
            t_far = min(t_far, t2)
            if t_near > t_far:
                return None

        if near_axis < 0 or t_near < 0:
            return None

        local_normal = np.zeros(3)
        local_normal[near_axis] = near_sign
        return Hit(origin + direction * t_near, self.matrix @ local_normal, float(t_near))


class ObstacleField:
    """A read-only collection of obstacles answering nearest-hit ray queries."""

    def __init__(self, obstacles: Iterable = ()):
        self.obstacles: List = list(obstacles)

    def __len__(self):
        return len(self.obstacles)

    def nearest_hit(self, origin: np.ndarray, direction: np.ndarray) -> Optional[Hit]:
        direction = normalize(np.asarray(direction, dtype=np.float64))
        if not direction.any():
            return None

        nearest = None
        for obstacle in self.obstacles:
            hit = obstacle.intersect(origin, direction)
            if hit is None or hit.is_degenerate:
                continue
            if nearest is None or hit.distance < nearest.distance:
                nearest = hit
        return nearest


NO_OBSTACLES = ObstacleField()


def build_obstacles(layout: Iterable[dict]) -> ObstacleField:
    """
    Build an obstacle field from declarative entries (see config.obstacle_layout).

    Raises:
        ValueError: On an unknown obstacle kind
    """
    obstacles = []
    for entry in layout:
        kind = entry.get("kind")
        if kind == "box":
            obstacles.append(Box(entry["center"], entry["size"], entry.get("rotation"), entry.get("wall", False)))
        elif kind == "sphere":
            obstacles.append(Sphere(entry["center"], entry["radius"], entry.get("wall", False)))
        else:
            raise ValueError(f"Unknown obstacle kind: {kind!r}")
    return ObstacleField(obstacles)

"""Individual boid entity with position, velocity, and steering state."""

import numpy as np
from typing import Hashable, Optional

from config import boids as config
from .bounds import Bounds, wrap_position
from .neighbors import is_valid_neighbor
from .tuning import Tuning, Weights
from .vector import lerp, normalize, quaternion_from_unit_vectors, random_unit_vector

FORWARD = np.array([0.0, 0.0, -1.0])


class Agent:
    """
    A single boid (bird-oid object) in the simulation.

    Attributes:
        position: World-space location
        velocity: True heading; its length is max_speed after every update
        smoothed_velocity: Exponentially smoothed velocity that moves position
        acceleration: Per-frame force accumulator (reset every update)
        perception_radius: Neighbor and obstacle sensing distance
        group: Optional tag; align and cohere only see the same tag
        field_of_view: Enable the bearing filter on neighbors
        weights: Behavior weights
        bounds: Containment box
    """

    def __init__(
        self,
        bounds: Bounds,
        rng: Optional[np.random.Generator] = None,
        group: Optional[Hashable] = None,
        base_max_speed: float = config.BOIDS["base_max_speed"],
        base_max_force: float = config.BOIDS["base_max_force"],
    ):
        rng = rng if rng is not None else np.random.default_rng()

        self.bounds = bounds
        self.group = group
        self.base_max_speed = float(base_max_speed)
        self.base_max_force = float(base_max_force)
        self.max_speed = self.base_max_speed
        self.max_force = self.base_max_force

        self.position = np.zeros(3)
        self.velocity = random_unit_vector(rng) * self.base_max_speed
        self.smoothed_velocity = np.zeros(3)
        self.acceleration = np.zeros(3)

        self.perception_radius = 5.0
        self.field_of_view = False
        self.keep_to_center = False
        self.weights = Weights()

    def __repr__(self):
        return f"Agent(position={self.position}, velocity={self.velocity}, group={self.group!r})"

    @property
    def orientation(self) -> np.ndarray:
        """Quaternion (x, y, z, w) turning the forward axis (0, 0, -1) onto the heading."""
        direction = normalize(self.velocity)
        if not direction.any():
            return np.array([0.0, 0.0, 0.0, 1.0])
        return quaternion_from_unit_vectors(FORWARD, direction)

    def apply_tuning(self, tuning: Tuning):
        """Take on this frame's tuning; limits are recomputed from the base values."""
        self.weights = tuning.weights
        self.max_speed = self.base_max_speed * tuning.speed_factor
        self.max_force = self.base_max_force * tuning.force_factor
        self.perception_radius = tuning.perception_radius
        self.field_of_view = tuning.field_of_view
        self.keep_to_center = tuning.keep_to_center
        if tuning.bounds is not None:
            self.bounds = tuning.bounds

    def is_valid_neighbor(self, other: "Agent", ignore_group: bool = False) -> bool:
        return is_valid_neighbor(self, other, ignore_group)

    def apply_force(self, force: np.ndarray):
        """Add a force to the boid's acceleration."""
        self.acceleration += force

    def edges(self):
        """Wrap the position onto the opposite face when it has left the bounds."""
        self.position = wrap_position(self.position, self.bounds)

    def update(self, smoothing: float = config.BOIDS["velocity_smoothing"]):
        """
        Advance one frame.

        The position moves by the smoothed velocity from the previous frame,
        then the accumulated force turns the velocity, which is rescaled to
        exactly max_speed. A force that cancels the velocity outright keeps
        the previous heading.
        """
        self.position = self.position + self.smoothed_velocity

        heading = normalize(self.velocity + self.acceleration)
        if not heading.any():
            heading = normalize(self.velocity)
        self.velocity = heading * self.max_speed

        self.acceleration = np.zeros(3)
        self.smoothed_velocity = lerp(self.smoothed_velocity, self.velocity, smoothing)

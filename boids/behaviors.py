"""
Steering behaviors.

Each behavior takes an agent plus the candidate neighbors handed out by the
selector, filters them through is_valid_neighbor, and returns a force vector
already multiplied by the behavior's weight. Behaviors only read state; the
caller adds the result to the agent's acceleration.
"""

import math
import numpy as np
from typing import Iterable, Optional

from config import boids as config
from .bounds import Bounds
from .neighbors import is_valid_neighbor
from .obstacles import Hit, ObstacleQuery
from .vector import (
    clamp_length, normalize, random_unit_vector, rotate_axis_angle,
)

AVOID_ANGLE = math.radians(config.BOIDS["avoid_angle"])
JITTER_FRACTION = config.BOIDS["jitter_fraction"]

# Keep-to-center pull starts past this fraction of the half-extent
CENTER_DEAD_ZONE = 0.25


def align(agent, candidates: Iterable) -> np.ndarray:
    """Steer toward the average heading of same-group neighbors."""
    steering = np.zeros(3)
    total = 0

    for other in candidates:
        if is_valid_neighbor(agent, other):
            steering += other.velocity
            total += 1

    if total > 0:
        steering /= total
        steering -= agent.velocity
        steering = clamp_length(steering, 0.0, agent.max_force)

    return steering * agent.weights.align


def cohere(agent, candidates: Iterable) -> np.ndarray:
    """Steer toward the centroid of same-group neighbors."""
    steering = np.zeros(3)
    total = 0

    for other in candidates:
        if is_valid_neighbor(agent, other):
            steering += other.position
            total += 1

    if total > 0:
        steering /= total
        steering -= agent.position
        steering -= agent.velocity
        steering = clamp_length(steering, 0.0, agent.max_force)

    return steering * agent.weights.cohere


def separate(agent, candidates: Iterable) -> np.ndarray:
    """
    Steer away from nearby agents of any group.

    Each neighbor pushes along the unit vector from it to the agent, scaled by
    1 / distance, so closer neighbors push harder.
    """
    steering = np.zeros(3)
    total = 0

    for other in candidates:
        if is_valid_neighbor(agent, other, ignore_group=True):
            diff = agent.position - other.position
            d = float(np.linalg.norm(diff))
            if d > 0:
                steering += normalize(diff) / d
            total += 1

    if total > 0:
        steering /= total
        steering -= agent.velocity
        steering = clamp_length(steering, 0.0, agent.max_force)

    return steering * agent.weights.separate


def random_jitter(agent, rng: np.random.Generator) -> np.ndarray:
    """Small random push that breaks perfectly symmetric stalls."""
    return random_unit_vector(rng) * (agent.max_force * JITTER_FRACTION)


def avoidance_steering(agent, hit: Hit) -> np.ndarray:
    """
    Steering away from a known obstacle hit.

    The surface normal is turned by AVOID_ANGLE about (normal x velocity) and
    the velocity subtracted. The result falls off quadratically with the hit
    distance and is not force-clamped.
    """
    radius = agent.perception_radius
    if radius <= 0 or hit.distance >= radius:
        return np.zeros(3)

    scale = 1.0 - hit.distance / radius
    scale = min(max(scale, 0.0), 1.0) ** 2

    # Heading straight into the surface gives a zero axis and an unrotated normal
    axis = np.cross(hit.normal, agent.velocity)
    avoid_normal = rotate_axis_angle(hit.normal, axis, AVOID_ANGLE)

    steering = avoid_normal - agent.velocity
    return steering * (agent.weights.avoid * scale)


def avoid_obstacle(agent, obstacles: ObstacleQuery) -> np.ndarray:
    """Cast a ray along the agent's heading and steer away from what it hits."""
    direction = normalize(agent.velocity)
    if not direction.any():
        return np.zeros(3)

    hit: Optional[Hit] = obstacles.nearest_hit(agent.position, direction)
    if hit is None or hit.is_degenerate or hit.distance >= agent.perception_radius:
        return np.zeros(3)
    return avoidance_steering(agent, hit)


def keep_to_center(agent, bounds: Optional[Bounds] = None) -> np.ndarray:
    """
    Soft pull toward the center of the bounds.

    Nothing happens inside the dead zone around the center; past it the pull
    grows quadratically until it peaks at the faces of the box.
    """
    bounds = bounds or agent.bounds
    normalizer = bounds.shortest_half_extent
    if normalizer <= 0:
        return np.zeros(3)

    to_center = bounds.center - agent.position
    distance = float(np.linalg.norm(to_center))

    factor = min(max(distance / normalizer - CENTER_DEAD_ZONE, 0.0), 1.0) / (1.0 - CENTER_DEAD_ZONE)
    factor = factor ** 2
    if factor == 0.0:
        return np.zeros(3)

    desired = normalize(to_center) * agent.max_speed
    steering = clamp_length(desired - agent.velocity, 0.0, agent.max_force)
    return steering * (factor * 2.0 * agent.weights.center)

"""Shared fixtures for the boids tests."""

import numpy as np
import pytest

from boids import Agent, Bounds, Tuning, Weights


@pytest.fixture
def bounds():
    return Bounds.cube(80.0)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def tuning(bounds):
    """Default tuning: max speed 0.2, max force 0.008, perception radius 7."""
    return Tuning(
        weights=Weights(align=1.0, cohere=2.0, separate=3.0, avoid=3.0, center=1.0),
        speed_factor=2.0,
        force_factor=1.0,
        perception_radius=7.0,
        bounds=bounds,
    )


@pytest.fixture
def make_agent(bounds, rng, tuning):
    """Factory placing a tuned agent at a position with an optional velocity."""
    def _make(position=(0.0, 0.0, 0.0), velocity=None, group=None, tuning_override=None):
        agent = Agent(bounds, rng=rng, group=group)
        agent.apply_tuning(tuning_override or tuning)
        agent.position = np.array(position, dtype=np.float64)
        if velocity is not None:
            agent.velocity = np.array(velocity, dtype=np.float64)
        return agent
    return _make

"""Flock management: spawning agents and the two-pass per-frame step."""

import numpy as np
from dataclasses import dataclass
from typing import Hashable, List, Optional, Sequence

from config import boids as config
from .agent import Agent
from .behaviors import align, avoid_obstacle, cohere, keep_to_center, random_jitter, separate
from .bounds import Bounds
from .neighbors import make_selector
from .obstacles import NO_OBSTACLES, ObstacleQuery
from .tuning import Tuning


@dataclass(frozen=True, eq=False)
class RenderState:
    """What the renderer copies onto its scene object for one boid."""
    position: np.ndarray
    orientation: np.ndarray
    velocity: np.ndarray
    group: Optional[Hashable]


class Flock:
    """
    A population of agents stepped synchronously once per frame.

    Each step is split in two passes. The first applies the frame's tuning and
    accumulates every steering force while positions and velocities are
    untouched, so all agents see the same snapshot of the previous frame. The
    second wraps and integrates each agent independently.
    """

    def __init__(
        self,
        agents: Sequence[Agent] = (),
        obstacles: ObstacleQuery = NO_OBSTACLES,
        selector=None,
        rng: Optional[np.random.Generator] = None,
        tuning: Optional[Tuning] = None,
    ):
        self.agents: List[Agent] = list(agents)
        self.obstacles = obstacles
        self.selector = selector if selector is not None else make_selector(config.BOIDS["neighbor_selector"])
        self.rng = rng if rng is not None else np.random.default_rng(config.BOIDS["seed"])
        self.tuning = tuning if tuning is not None else Tuning.from_config()
        self.frame = 0

    @classmethod
    def spawn(
        cls,
        count: int,
        bounds: Bounds,
        rng: Optional[np.random.Generator] = None,
        groups: int = 0,
        spread: float = config.BOIDS["spawn_spread"],
        **kwargs
    ) -> "Flock":
        """
        Create count agents at random positions inside bounds.

        Args:
            count: Number of agents
            bounds: Containment box shared by the flock
            rng: Random source for positions, headings, groups and jitter
            groups: Hand out group tags 0..groups-1 at random (0 leaves agents untagged)
            spread: Positions are drawn from the box scaled toward its center by this
        """
        if count < 0:
            raise ValueError(f"Agent count must be non-negative, got {count}")
        rng = rng if rng is not None else np.random.default_rng(config.BOIDS["seed"])

        agents = []
        for _ in range(count):
            group = int(rng.integers(groups)) if groups > 0 else None
            agent = Agent(bounds, rng=rng, group=group)
            agent.position = bounds.random_point(rng, spread)
            agents.append(agent)

        flock = cls(agents, rng=rng, **kwargs)
        if flock.tuning.bounds is None:
            flock.tuning = flock.tuning.with_changes(bounds=bounds)
        print(f"[Boids] Initialized {count:,} boids ({flock.selector.name} neighbor selector)")
        return flock

    def __len__(self):
        return len(self.agents)

    def accumulate(self, agent: Agent):
        """Pass 1 for one agent: add every steering contribution to its acceleration."""
        candidates = self.selector.candidates(agent)
        agent.apply_force(separate(agent, candidates))
        agent.apply_force(align(agent, candidates))
        agent.apply_force(cohere(agent, candidates))
        agent.apply_force(avoid_obstacle(agent, self.obstacles))
        agent.apply_force(random_jitter(agent, self.rng))
        if agent.keep_to_center:
            agent.apply_force(keep_to_center(agent))

    def step(self, tuning: Optional[Tuning] = None):
        """
        Advance every agent by one frame.

        Args:
            tuning: Values for this frame; when given it also becomes the
                flock's current tuning
        """
        if tuning is not None:
            self.tuning = tuning

        for agent in self.agents:
            agent.apply_tuning(self.tuning)

        self.selector.rebuild(self.agents)

        for agent in self.agents:
            self.accumulate(agent)

        for agent in self.agents:
            agent.edges()
            agent.update()

        self.frame += 1

    def render_states(self) -> List[RenderState]:
        """Copy out the state the renderer needs for every agent."""
        return [
            RenderState(a.position.copy(), a.orientation, a.velocity.copy(), a.group)
            for a in self.agents
        ]

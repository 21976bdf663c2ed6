"""Tests for neighbor rules and the candidate selectors."""

import math
import numpy as np
import pytest

from boids import Flock, LinearScanSelector, SpatialGridSelector, make_selector


class TestValidNeighbor:
    def test_self_is_never_a_neighbor(self, make_agent):
        """An agent does not see itself."""
        a = make_agent()
        assert not a.is_valid_neighbor(a)

    def test_identical_copy_is_a_neighbor(self, make_agent):
        """Identity, not equal state, decides self-exclusion."""
        a = make_agent((1.0, 2.0, 3.0), velocity=(0.2, 0, 0))
        b = make_agent((1.0, 2.0, 3.0), velocity=(0.2, 0, 0))
        assert a.is_valid_neighbor(b)

    def test_distance_is_strict(self, make_agent):
        """A neighbor exactly at the perception radius is out of range."""
        a = make_agent((0.0, 0.0, 0.0))
        at_edge = make_agent((7.0, 0.0, 0.0))
        inside = make_agent((6.999, 0.0, 0.0))
        assert not a.is_valid_neighbor(at_edge)
        assert a.is_valid_neighbor(inside)

    def test_groups_must_match(self, make_agent):
        """Tagged agents only see the same tag unless groups are ignored."""
        a = make_agent((0, 0, 0), group=1)
        b = make_agent((1, 0, 0), group=2)
        c = make_agent((1, 0, 0), group=1)
        assert not a.is_valid_neighbor(b)
        assert a.is_valid_neighbor(b, ignore_group=True)
        assert a.is_valid_neighbor(c)

    def test_untagged_sees_everyone(self, make_agent):
        """The group rule needs both agents tagged."""
        a = make_agent((0, 0, 0), group=None)
        b = make_agent((1, 0, 0), group=3)
        assert a.is_valid_neighbor(b)
        assert b.is_valid_neighbor(a)


class TestFieldOfView:
    @pytest.fixture
    def heading_z(self, make_agent, tuning):
        fov = tuning.with_changes(field_of_view=True)
        return make_agent((0, 0, 0), velocity=(0, 0, 0.2), tuning_override=fov)

    def test_forward_cone_is_excluded(self, heading_z, make_agent):
        """Neighbors dead ahead fall inside the half-angle and are skipped."""
        ahead = make_agent((0, 0, 2))
        assert not heading_z.is_valid_neighbor(ahead)

    def test_outside_cone_is_kept(self, heading_z, make_agent):
        """Neighbors to the side or behind are kept."""
        side = make_agent((2, 0, 0))
        behind = make_agent((0, 0, -2))
        off_axis = make_agent((2 * math.sin(math.radians(60)), 0, 2 * math.cos(math.radians(60))))
        assert heading_z.is_valid_neighbor(side)
        assert heading_z.is_valid_neighbor(behind)
        assert heading_z.is_valid_neighbor(off_axis)

    def test_disabled_sees_ahead(self, make_agent):
        """Without field of view the bearing does not matter."""
        a = make_agent((0, 0, 0), velocity=(0, 0, 0.2))
        ahead = make_agent((0, 0, 2))
        assert a.is_valid_neighbor(ahead)


class TestSelectors:
    def _valid_sets(self, flock, selector):
        selector.rebuild(flock.agents)
        return [
            {id(o) for o in selector.candidates(a) if a.is_valid_neighbor(o, ignore_group=True)}
            for a in flock.agents
        ]

    def test_grid_matches_linear_scan(self, bounds, tuning):
        """Both selectors produce the same valid neighbors for every agent."""
        flock = Flock.spawn(250, bounds, rng=np.random.default_rng(7), groups=3)
        for agent in flock.agents:
            agent.apply_tuning(tuning)
        assert self._valid_sets(flock, SpatialGridSelector()) == self._valid_sets(flock, LinearScanSelector())

    def test_grid_handles_positions_outside_bounds(self, bounds, tuning):
        """Agents that drifted past a face still find their neighbors."""
        flock = Flock.spawn(60, bounds, rng=np.random.default_rng(3))
        for i, agent in enumerate(flock.agents):
            agent.apply_tuning(tuning)
            agent.position = np.array([80.0 + (i % 5) * 0.5, (i // 5) * 0.7, 0.0])
        assert self._valid_sets(flock, SpatialGridSelector(max_cells_per_axis=4)) == \
            self._valid_sets(flock, LinearScanSelector())

    def test_grid_empty(self, make_agent):
        """An empty grid hands out no candidates."""
        grid = SpatialGridSelector()
        grid.rebuild([])
        assert list(grid.candidates(make_agent())) == []

    def test_unknown_selector(self):
        """Unknown selector names are rejected."""
        with pytest.raises(ValueError):
            make_selector("octree")

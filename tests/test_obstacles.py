"""Tests for obstacle ray queries."""

import math
import numpy as np
import pytest

from boids import Box, Hit, NO_OBSTACLES, ObstacleField, Sphere, build_obstacles
from config import boids as config

DOWN_Z = np.array([0.0, 0.0, -1.0])


class TestSphere:
    def test_hit_distance_and_normal(self):
        """A ray straight at a sphere hits its near surface."""
        hit = Sphere((0, 0, -10), 2).intersect(np.zeros(3), DOWN_Z)
        assert hit.distance == pytest.approx(8.0)
        assert hit.normal == pytest.approx([0, 0, 1])
        assert hit.point == pytest.approx([0, 0, -8])

    def test_miss(self):
        """A ray passing beside the sphere misses."""
        assert Sphere((5, 0, -10), 2).intersect(np.zeros(3), DOWN_Z) is None

    def test_behind_and_inside(self):
        """Spheres behind the origin, or around it, are not hit."""
        assert Sphere((0, 0, 10), 2).intersect(np.zeros(3), DOWN_Z) is None
        assert Sphere((0, 0, 0), 2).intersect(np.zeros(3), DOWN_Z) is None


class TestBox:
    def test_axis_aligned(self):
        """The near face of an axis-aligned box is hit with its outward normal."""
        hit = Box((0, 0, 0), (2, 2, 6)).intersect(np.array([0.0, 0.0, 10.0]), DOWN_Z)
        assert hit.distance == pytest.approx(7.0)
        assert hit.normal == pytest.approx([0, 0, 1])

    def test_rotation_changes_extent(self):
        """A quarter turn about X swaps which edge length faces the ray."""
        box = Box((0, 0, 0), (2, 2, 6), rotation=(math.pi / 2, 0.0, 0.0))
        hit = box.intersect(np.array([0.0, 0.0, 10.0]), DOWN_Z)
        assert hit.distance == pytest.approx(9.0)
        assert hit.normal == pytest.approx([0, 0, 1], abs=1e-12)

    def test_inside_is_no_hit(self):
        """Rays starting inside a box never hit it."""
        assert Box((0, 0, 0), (4, 4, 4)).intersect(np.zeros(3), DOWN_Z) is None

    def test_parallel_miss(self):
        """A ray parallel to a slab and outside it misses."""
        assert Box((5, 0, 0), (2, 2, 2)).intersect(np.array([0.0, 0.0, 10.0]), DOWN_Z) is None


class TestObstacleField:
    def test_nearest_wins(self):
        """The closest of several obstacles is reported."""
        field = ObstacleField([Sphere((0, 0, -20), 1), Box((0, 0, -6), (2, 2, 2))])
        hit = field.nearest_hit(np.zeros(3), DOWN_Z)
        assert hit.distance == pytest.approx(5.0)

    def test_direction_is_normalized(self):
        """Distances are world units even for unnormalized directions."""
        field = ObstacleField([Sphere((0, 0, -10), 2)])
        assert field.nearest_hit(np.zeros(3), DOWN_Z * 5).distance == pytest.approx(8.0)

    def test_empty_and_zero_direction(self):
        """No obstacles or no direction means no hit."""
        assert NO_OBSTACLES.nearest_hit(np.zeros(3), DOWN_Z) is None
        assert ObstacleField([Sphere((0, 0, -10), 2)]).nearest_hit(np.zeros(3), np.zeros(3)) is None

    def test_degenerate_hits_are_skipped(self):
        """Obstacles reporting no normal are ignored."""
        class Flat:
            wall = False

            def intersect(self, origin, direction):
                return Hit(origin, np.zeros(3), 0.5)

        field = ObstacleField([Flat(), Sphere((0, 0, -10), 2)])
        assert field.nearest_hit(np.zeros(3), DOWN_Z).distance == pytest.approx(8.0)


class TestBuildObstacles:
    def test_default_layout(self):
        """The configured scene builds every obstacle."""
        layout = config.obstacle_layout(80.0)
        field = build_obstacles(layout)
        assert len(field) == len(layout)
        assert sum(1 for o in field.obstacles if isinstance(o, Sphere)) == 1

    def test_unknown_kind(self):
        """Unknown obstacle kinds are rejected."""
        with pytest.raises(ValueError):
            build_obstacles([{"kind": "torus", "center": (0, 0, 0)}])

    def test_hit_degenerate_flags(self):
        """Hits without a finite, non-zero normal are degenerate."""
        assert Hit(np.zeros(3), None, 1.0).is_degenerate
        assert Hit(np.zeros(3), np.array([0.0, np.nan, 1.0]), 1.0).is_degenerate
        assert not Hit(np.zeros(3), np.array([0.0, 0.0, 1.0]), 1.0).is_degenerate

"""Tests for per-frame tuning."""

import numpy as np
import pytest

from boids import Bounds, Tuning
from config import boids as config


class TestFromConfig:
    def test_defaults(self):
        """Missing keys take the configured defaults."""
        t = Tuning.from_config()
        defaults = config.TUNING["defaults"]
        assert t.weights.align == defaults["align_weight"]
        assert t.weights.separate == defaults["separate_weight"]
        assert t.perception_radius == defaults["perception_radius"]
        assert t.as_config() == defaults

    def test_unknown_key(self):
        """Unknown keys are rejected."""
        with pytest.raises(ValueError, match="Unknown tuning key"):
            Tuning.from_config({"gravity": 1.0})

    @pytest.mark.parametrize("key,value", [
        ("align_weight", -1.0),
        ("speed_factor", 11.0),
        ("perception_radius", 51.0),
    ])
    def test_out_of_range(self, key, value):
        """Values outside their range are rejected."""
        with pytest.raises(ValueError, match="outside"):
            Tuning.from_config({key: value})

    def test_carries_bounds(self):
        """Bounds pass straight through."""
        b = Bounds.cube(10)
        assert Tuning.from_config(bounds=b).bounds is b


class TestAdjusting:
    def test_negative_values_clamped(self):
        """Directly built tuning never holds negative limits."""
        t = Tuning(speed_factor=-1.0, force_factor=-2.0, perception_radius=-5.0)
        assert (t.speed_factor, t.force_factor, t.perception_radius) == (0.0, 0.0, 0.0)

    def test_with_changes_reaches_weights(self):
        """Weight names are routed into the weights."""
        t = Tuning().with_changes(align=4.0, field_of_view=True)
        assert t.weights.align == 4.0
        assert t.weights.cohere == Tuning().weights.cohere
        assert t.field_of_view

    def test_keep_to_center_flag_and_weight_are_separate(self):
        """The on/off switch and the center weight change independently."""
        t = Tuning().with_changes(keep_to_center=True)
        assert t.keep_to_center is True
        assert t.weights.center == Tuning().weights.center

        t = t.with_changes(center=0.5)
        assert t.keep_to_center is True
        assert t.weights.center == 0.5
        assert t.as_config()["keep_to_center_weight"] == 0.5
        assert t.as_config()["keep_to_center"] is True

    def test_nudge_stays_in_range(self):
        """Nudging past the top of a range stops at the limit."""
        t = Tuning.from_config({"align_weight": 9.9})
        assert t.nudge("align_weight", 1.0).weights.align == 10.0
        assert t.nudge("align_weight", -1.0).weights.align == pytest.approx(8.9)

    def test_nudge_unknown(self):
        """Only ranged values can be nudged."""
        with pytest.raises(ValueError):
            Tuning().nudge("field_of_view", 1.0)


class TestBounds:
    def test_inverted_bounds_rejected(self):
        """A box whose start exceeds its end is invalid."""
        with pytest.raises(ValueError):
            Bounds((1, 0, 0), (0, 1, 1))

    def test_geometry(self):
        """Center and shortest half-extent come from the corners."""
        b = Bounds((0, 0, 0), (10, 4, 20))
        assert list(b.center) == [5, 2, 10]
        assert b.shortest_half_extent == 2.0

    def test_random_point_scales_toward_center(self):
        """Scaled random points stay around the box center, not the origin."""
        b = Bounds((100, 100, 100), (110, 120, 140))
        rng = np.random.default_rng(0)
        for _ in range(50):
            p = b.random_point(rng, 0.5)
            assert b.contains(p)
            assert np.all(np.abs(p - b.center) <= b.size * 0.25)

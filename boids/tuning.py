"""Per-frame tuning parameters passed into each flock step."""

from dataclasses import dataclass, field, fields, replace
from typing import Mapping, Optional

from config import boids as config
from .bounds import Bounds


@dataclass(frozen=True)
class Weights:
    """Scalar multipliers applied to each steering behavior's output."""
    align: float = 1.0
    cohere: float = 2.0
    separate: float = 3.0
    avoid: float = 3.0
    center: float = 1.0


@dataclass(frozen=True)
class Tuning:
    """
    Everything an external control surface may change between frames.

    Attributes:
        weights: Behavior weights
        speed_factor: Multiplier on each agent's base max speed
        force_factor: Multiplier on each agent's base max force
        perception_radius: Neighbor and obstacle sensing distance
        bounds: Containment box (None keeps each agent's current box)
        field_of_view: Enable the bearing filter on neighbors
        keep_to_center: Enable the soft pull toward the box center
    """
    weights: Weights = field(default_factory=Weights)
    speed_factor: float = 2.0
    force_factor: float = 1.0
    perception_radius: float = 7.0
    bounds: Optional[Bounds] = None
    field_of_view: bool = False
    keep_to_center: bool = False

    def __post_init__(self):
        # The core never trusts these blindly; negative values collapse to zero
        object.__setattr__(self, "speed_factor", max(0.0, float(self.speed_factor)))
        object.__setattr__(self, "force_factor", max(0.0, float(self.force_factor)))
        object.__setattr__(self, "perception_radius", max(0.0, float(self.perception_radius)))

    @classmethod
    def from_config(cls, values: Optional[Mapping] = None, bounds: Optional[Bounds] = None) -> "Tuning":
        """
        Build tuning from flat config values, rejecting anything out of range.

        Args:
            values: Flat mapping using the keys of config.TUNING["defaults"];
                missing keys take their default
            bounds: Containment box to carry along

        Raises:
            ValueError: On an unknown key or a value outside its configured range
        """
        merged = dict(config.TUNING["defaults"])
        for key, value in (values or {}).items():
            if key not in merged:
                raise ValueError(f"Unknown tuning key: {key!r}")
            merged[key] = value

        for key, (lo, hi) in config.TUNING["ranges"].items():
            value = merged[key]
            if not lo <= value <= hi:
                raise ValueError(f"Tuning value {key}={value} outside [{lo}, {hi}]")

        weights = Weights(
            align=merged["align_weight"],
            cohere=merged["cohere_weight"],
            separate=merged["separate_weight"],
            avoid=merged["avoid_weight"],
            center=merged["keep_to_center_weight"],
        )
        return cls(
            weights=weights,
            speed_factor=merged["speed_factor"],
            force_factor=merged["force_factor"],
            perception_radius=merged["perception_radius"],
            bounds=bounds,
            field_of_view=bool(merged["field_of_view"]),
            keep_to_center=bool(merged["keep_to_center"]),
        )

    def with_changes(self, **changes) -> "Tuning":
        """Copy with top-level fields replaced; weight names go through to Weights."""
        weight_names = {f.name for f in fields(Weights)} - {f.name for f in fields(Tuning)}
        weight_changes = {k: changes.pop(k) for k in list(changes) if k in weight_names}
        if weight_changes:
            changes["weights"] = replace(self.weights, **weight_changes)
        return replace(self, **changes)

    def nudge(self, key: str, delta: float) -> "Tuning":
        """Copy with one flat config value moved by delta, held inside its range."""
        if key not in config.TUNING["ranges"]:
            raise ValueError(f"Tuning value {key!r} is not adjustable")
        lo, hi = config.TUNING["ranges"][key]
        values = self.as_config()
        values[key] = min(hi, max(lo, values[key] + delta))
        return Tuning.from_config(values, bounds=self.bounds)

    def as_config(self) -> dict:
        """Flat representation matching config.TUNING["defaults"]."""
        return {
            "align_weight": self.weights.align,
            "cohere_weight": self.weights.cohere,
            "separate_weight": self.weights.separate,
            "avoid_weight": self.weights.avoid,
            "keep_to_center_weight": self.weights.center,
            "speed_factor": self.speed_factor,
            "force_factor": self.force_factor,
            "perception_radius": self.perception_radius,
            "field_of_view": self.field_of_view,
            "keep_to_center": self.keep_to_center,
        }

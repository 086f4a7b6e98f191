"""
Simulation configuration.

The numeric parameters fed in by the UI: initial angles, arm lengths and
masses, time step, gravity, speed multiplier, trail settings and rendering
flags. Values outside the documented ranges are rejected here so the core
never has to defend against them.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Tuple

from pendelview.physics import PhysicalParams

SPEED_CHOICES: Tuple[int, ...] = (1, 2, 5, 10)

# Fields whose change re-initializes the pendulum and clears the trail.
RESET_FIELDS: FrozenSet[str] = frozenset({"theta1_deg", "theta2_deg", "l1", "l2", "m1", "m2"})

RANGES: Dict[str, Tuple[float, float]] = {
    "theta1_deg": (-360.0, 360.0),
    "theta2_deg": (-360.0, 360.0),
    "l1": (10.0, 500.0),
    "l2": (10.0, 500.0),
    "m1": (1.0, 100.0),
    "m2": (1.0, 100.0),
    "h": (0.001, 0.2),
    "g": (0.0, 10.0),
    "trail_length": (1, 100_000),
    "stroke_width": (0.1, 10.0),
}

DEFAULT_VIEWPORT: Tuple[int, int] = (1200, 800)


class ConfigError(ValueError):
    """Raised for configuration values outside their documented range."""


@dataclass(frozen=True)
class SimConfig:
    theta1_deg: float = 45.0
    theta2_deg: float = 22.5
    l1: float = 130.0
    l2: float = 130.0
    m1: float = 20.0
    m2: float = 20.0
    h: float = 0.05
    g: float = 1.0
    speed: int = 1
    trail_length: int = 1000
    persistent_trail: bool = False
    stroke_width: float = 2.0
    running: bool = True
    dark_mode: bool = True

    def validate(self) -> "SimConfig":
        for name, (lo, hi) in RANGES.items():
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number, got {value!r}")
            if not lo <= value <= hi:
                raise ConfigError(f"{name}={value} outside [{lo}, {hi}]")
        # 2.0 == 2, so membership alone would let a float through
        if type(self.speed) is not int or self.speed not in SPEED_CHOICES:
            raise ConfigError(f"speed must be one of {SPEED_CHOICES}, got {self.speed!r}")
        if isinstance(self.trail_length, float) and not self.trail_length.is_integer():
            raise ConfigError(f"trail_length must be an integer, got {self.trail_length}")
        return self

    def replace(self, **changes: Any) -> "SimConfig":
        """Return a validated copy with the given fields changed."""
        unknown = set(changes) - {f.name for f in dataclasses.fields(self)}
        if unknown:
            raise ConfigError(f"unknown configuration field(s): {', '.join(sorted(unknown))}")
        return dataclasses.replace(self, **changes).validate()

    def changed_fields(self, other: "SimConfig") -> FrozenSet[str]:
        return frozenset(
            f.name for f in dataclasses.fields(self) if getattr(self, f.name) != getattr(other, f.name)
        )

    def params(self) -> PhysicalParams:
        return PhysicalParams(L1=float(self.l1), L2=float(self.l2), m1=float(self.m1), m2=float(self.m2), g=float(self.g))

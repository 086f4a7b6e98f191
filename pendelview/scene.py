"""
Plot-library independent description of one rendered frame.

Coordinates are world units (screen pixels at zoom 1, y pointing down);
sizes are screen pixels and stay constant while zooming.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from pendelview.camera import Bounds, GridSpec, Transform

Point = Tuple[float, float]


@dataclass(frozen=True)
class Theme:
    background: str
    grid_minor: str
    grid_major: str
    trail: str
    arms: str
    bob1: str
    bob2: str
    pivot: str


DARK_THEME = Theme(
    background="#0f172a",
    grid_minor="rgba(255,255,255,0.03)",
    grid_major="rgba(255,255,255,0.08)",
    trail="#ef4444",
    arms="rgba(255,255,255,0.4)",
    bob1="#10b981",
    bob2="#ef4444",
    pivot="#ffffff",
)

LIGHT_THEME = Theme(
    background="#ffffff",
    grid_minor="rgba(0,0,0,0.03)",
    grid_major="rgba(0,0,0,0.08)",
    trail="#dc2626",
    arms="rgba(0,0,0,0.4)",
    bob1="#10b981",
    bob2="#ef4444",
    pivot="#000000",
)


def theme_for(dark_mode: bool) -> Theme:
    return DARK_THEME if dark_mode else LIGHT_THEME


@dataclass(frozen=True)
class GridLayer:
    xs: List[float]
    ys: List[float]
    width: float  # px
    color: str


@dataclass(frozen=True)
class Marker:
    x: float
    y: float
    radius: float  # px
    color: str


@dataclass(frozen=True)
class Telemetry:
    theta1_deg: float
    theta2_deg: float
    zoom_percent: int
    speed: int
    energy: float
    trail_points: int
    status: str
    fault: Optional[str] = None


@dataclass(frozen=True)
class RenderFrame:
    width: float
    height: float
    transform: Transform
    bounds: Bounds
    grid: GridSpec
    theme: Theme
    minor_grid: GridLayer
    major_grid: GridLayer
    trail: List[Point]
    trail_width: float
    linkage: List[Point]
    linkage_width: float
    bobs: List[Marker]
    pivot: Marker
    telemetry: Telemetry

    @property
    def faulted(self) -> bool:
        return self.telemetry.fault is not None

"""
Viewport camera, screen transform and adaptive grid.

The camera keeps two copies of (zoom, pan_x, pan_y): the *target*, written by
pointer and wheel input, and the *current* one used for rendering, which eases
toward the target once per frame.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

MIN_ZOOM = 0.1
MAX_ZOOM = 100.0
LERP_FACTOR = 0.15
WHEEL_BASE = 1.1
BASE_GRID_DENSITY = 100.0


def clamp_zoom(zoom: float) -> float:
    return max(MIN_ZOOM, min(zoom, MAX_ZOOM))


def pivot_anchor(width: float, height: float) -> Tuple[float, float]:
    """Screen position of the pendulum pivot for an unpanned camera."""
    # horizontally centered, one third down
    return width / 2.0, height / 3.0


@dataclass(frozen=True)
class Transform:
    """World-to-screen affine map: screen = origin + world * zoom."""

    zoom: float
    origin_x: float
    origin_y: float

    def to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return self.origin_x + x * self.zoom, self.origin_y + y * self.zoom

    def to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        return (sx - self.origin_x) / self.zoom, (sy - self.origin_y) / self.zoom


@dataclass(frozen=True)
class Bounds:
    left: float
    right: float
    top: float
    bottom: float


@dataclass(frozen=True)
class GridSpec:
    minor: float
    major: float


@dataclass
class Camera:
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    target_zoom: float = 1.0
    target_x: float = 0.0
    target_y: float = 0.0

    def relax(self, factor: float = LERP_FACTOR) -> None:
        """Move the current camera a fixed fraction of the way to the target."""
        self.zoom += (self.target_zoom - self.zoom) * factor
        self.pan_x += (self.target_x - self.pan_x) * factor
        self.pan_y += (self.target_y - self.pan_y) * factor

    def apply_zoom_at(self, cursor_x: float, cursor_y: float, delta_y: float, width: float, height: float) -> None:
        """Zoom the target camera so the point under the cursor stays put.

        The anchor is computed from the target transform, so while the current
        camera is still easing toward an older target the anchor drifts a little.
        """
        factor = math.pow(WHEEL_BASE, -delta_y / 100.0)
        new_zoom = clamp_zoom(self.target_zoom * factor)

        pivot_x, pivot_y = pivot_anchor(width, height)
        dx = cursor_x - pivot_x
        dy = cursor_y - pivot_y

        self.target_x = dx - ((dx - self.target_x) / self.target_zoom) * new_zoom
        self.target_y = dy - ((dy - self.target_y) / self.target_zoom) * new_zoom
        self.target_zoom = new_zoom

    def pan_by(self, dx: float, dy: float) -> None:
        # panning tracks the pointer directly, no easing
        self.target_x += dx
        self.target_y += dy
        self.pan_x += dx
        self.pan_y += dy

    def reset(self) -> None:
        self.zoom = self.target_zoom = 1.0
        self.pan_x = self.target_x = 0.0
        self.pan_y = self.target_y = 0.0

    def reset_target(self) -> None:
        self.target_zoom = 1.0
        self.target_x = 0.0
        self.target_y = 0.0

    def transform(self, width: float, height: float) -> Transform:
        pivot_x, pivot_y = pivot_anchor(width, height)
        return Transform(self.zoom, pivot_x + self.pan_x, pivot_y + self.pan_y)

    def target_transform(self, width: float, height: float) -> Transform:
        pivot_x, pivot_y = pivot_anchor(width, height)
        return Transform(self.target_zoom, pivot_x + self.target_x, pivot_y + self.target_y)

    @property
    def zoom_percent(self) -> int:
        return int(round(self.zoom * 100.0))


def grid_spec(zoom: float, base_density: float = BASE_GRID_DENSITY) -> GridSpec:
    """Pick grid steps so the on-screen spacing stays within one decade."""
    exponent = math.floor(math.log10(1.0 / zoom))
    minor = base_density * math.pow(10.0, exponent)
    return GridSpec(minor=minor, major=minor * 10.0)


def visible_bounds(transform: Transform, width: float, height: float) -> Bounds:
    """World-space rectangle covered by the viewport."""
    corners = [
        transform.to_world(0.0, 0.0),
        transform.to_world(width, 0.0),
        transform.to_world(0.0, height),
        transform.to_world(width, height),
    ]
    xs = [c[0] for c in corners]
    ys = [c[1] for c in corners]
    return Bounds(left=min(xs), right=max(xs), top=min(ys), bottom=max(ys))


def grid_lines(lo: float, hi: float, step: float) -> List[float]:
    """Grid coordinates covering [lo, hi], snapped outward to the step."""
    first = math.floor(lo / step)
    last = math.ceil(hi / step)
    return [i * step for i in range(first, last + 1)]

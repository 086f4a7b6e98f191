from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from pendelview.camera import Camera, grid_lines, grid_spec, visible_bounds
from pendelview.config import DEFAULT_VIEWPORT, RESET_FIELDS, SimConfig
from pendelview.physics import (
    DynamicalState,
    SimulationFault,
    checked_step,
    positions,
    total_energy,
    wrap_degrees,
)
from pendelview.scene import GridLayer, Marker, RenderFrame, Telemetry, theme_for
from pendelview.trail import TrailBuffer

logger = logging.getLogger(__name__)

STATUS_RUNNING = "running"
STATUS_PAUSED = "paused"
STATUS_FAULT = "fault"

PIVOT_RADIUS = 4.0
ARM_WIDTH = 2.0
MINOR_GRID_WIDTH = 1.0
MAJOR_GRID_WIDTH = 2.0


def bob_radius(mass: float) -> float:
    """Marker radius in screen pixels for a bob of the given mass."""
    return 8.0 + mass / 10.0


def _trail_bound(config: SimConfig) -> Optional[int]:
    return None if config.persistent_trail else int(config.trail_length)


@dataclass
class SimulationSession:
    """Holds the simulation, trail and camera state and drives one frame at a time."""

    config: SimConfig = field(default_factory=SimConfig)
    width: float = float(DEFAULT_VIEWPORT[0])
    height: float = float(DEFAULT_VIEWPORT[1])
    camera: Camera = field(default_factory=Camera)
    state: DynamicalState = field(init=False)
    trail: TrailBuffer = field(init=False)
    fault: Optional[str] = field(default=None, init=False)
    telemetry: Optional[Telemetry] = field(default=None, init=False)
    frame_count: int = field(default=0, init=False)

    _dragging: bool = field(default=False, init=False, repr=False)
    _last_pointer: Tuple[float, float] = field(default=(0.0, 0.0), init=False, repr=False)

    def __post_init__(self) -> None:
        self.config.validate()
        self.state = DynamicalState.at_rest(self.config.theta1_deg, self.config.theta2_deg)
        self.trail = TrailBuffer(_trail_bound(self.config))

    # --- status -----------------------------------------------------------

    @property
    def running(self) -> bool:
        return self.config.running

    @property
    def status(self) -> str:
        if self.fault is not None:
            return STATUS_FAULT
        return STATUS_RUNNING if self.config.running else STATUS_PAUSED

    def set_running(self, running: bool) -> None:
        if running != self.config.running:
            self.config = self.config.replace(running=bool(running))

    def toggle_running(self) -> bool:
        self.set_running(not self.config.running)
        return self.config.running

    # --- configuration ----------------------------------------------------

    def configure(self, **changes: Any) -> SimConfig:
        """Apply configuration changes; rejected changes leave the session untouched."""
        new_config = self.config.replace(**changes)
        changed = new_config.changed_fields(self.config)
        if not changed:
            return self.config
        self.config = new_config
        logger.debug("Configuration changed: %s", ", ".join(sorted(changed)))
        if changed & RESET_FIELDS:
            self._reset_state()
        if changed & {"trail_length", "persistent_trail"}:
            self.trail.set_max_len(_trail_bound(self.config))
        return self.config

    def resize(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport must have a positive size, got {width}x{height}")
        self.width = float(width)
        self.height = float(height)

    # --- commands ---------------------------------------------------------

    def _reset_state(self) -> None:
        self.state = DynamicalState.at_rest(self.config.theta1_deg, self.config.theta2_deg)
        self.trail.clear()
        self.fault = None

    def reset(self) -> None:
        """Back to the configured initial angles at rest, empty trail, default camera."""
        self._reset_state()
        self.camera.reset()
        logger.info("Simulation reset to theta1=%.2f deg, theta2=%.2f deg",
                    self.config.theta1_deg, self.config.theta2_deg)

    def reset_view(self) -> None:
        self.camera.reset_target()

    def clear_trail(self) -> None:
        self.trail.clear()

    # --- pointer input ----------------------------------------------------

    def on_wheel(self, x: float, y: float, delta_y: float) -> None:
        self.camera.apply_zoom_at(x, y, delta_y, self.width, self.height)

    def on_pointer_down(self, x: float, y: float, button: int = 0) -> None:
        if button == 0:
            self._dragging = True
            self._last_pointer = (x, y)

    def on_pointer_move(self, x: float, y: float) -> None:
        if not self._dragging:
            return
        last_x, last_y = self._last_pointer
        self.camera.pan_by(x - last_x, y - last_y)
        self._last_pointer = (x, y)

    def on_pointer_up(self) -> None:
        self._dragging = False

    # --- frame ------------------------------------------------------------

    def _integrate(self) -> None:
        params = self.config.params()
        h = self.config.h
        for _ in range(self.config.speed):
            try:
                self.state = checked_step(self.state, params, h)
            except SimulationFault as exc:
                self.fault = str(exc)
                logger.error("Simulation halted at frame %d: %s", self.frame_count, exc)
                return
            _, (x2, y2) = positions(self.state, params)
            self.trail.append(x2, y2)

    def _telemetry(self) -> Telemetry:
        return Telemetry(
            theta1_deg=wrap_degrees(math.degrees(self.state.theta1)),
            theta2_deg=wrap_degrees(math.degrees(self.state.theta2)),
            zoom_percent=self.camera.zoom_percent,
            speed=self.config.speed,
            energy=total_energy(self.state, self.config.params()),
            trail_points=len(self.trail),
            status=self.status,
            fault=self.fault,
        )

    def advance(self) -> RenderFrame:
        """Run one display tick and describe what to draw."""
        self.camera.relax()
        if self.config.running and self.fault is None:
            self._integrate()
        self.telemetry = self._telemetry()
        self.frame_count += 1
        return self._compose()

    def _compose(self) -> RenderFrame:
        config = self.config
        theme = theme_for(config.dark_mode)
        transform = self.camera.transform(self.width, self.height)
        bounds = visible_bounds(transform, self.width, self.height)
        spec = grid_spec(self.camera.zoom)

        minor = GridLayer(
            xs=grid_lines(bounds.left, bounds.right, spec.minor),
            ys=grid_lines(bounds.top, bounds.bottom, spec.minor),
            width=MINOR_GRID_WIDTH,
            color=theme.grid_minor,
        )
        major = GridLayer(
            xs=grid_lines(bounds.left, bounds.right, spec.major),
            ys=grid_lines(bounds.top, bounds.bottom, spec.major),
            width=MAJOR_GRID_WIDTH,
            color=theme.grid_major,
        )

        (x1, y1), (x2, y2) = positions(self.state, config.params())
        linkage: List[Tuple[float, float]] = [(0.0, 0.0), (x1, y1), (x2, y2)]
        bobs = [
            Marker(x1, y1, bob_radius(config.m1), theme.bob1),
            Marker(x2, y2, bob_radius(config.m2), theme.bob2),
        ]
        return RenderFrame(
            width=self.width,
            height=self.height,
            transform=transform,
            bounds=bounds,
            grid=spec,
            theme=theme,
            minor_grid=minor,
            major_grid=major,
            trail=self.trail.points(),
            trail_width=config.stroke_width,
            linkage=linkage,
            linkage_width=ARM_WIDTH,
            bobs=bobs,
            pivot=Marker(0.0, 0.0, PIVOT_RADIUS, theme.pivot),
            telemetry=self.telemetry,
        )

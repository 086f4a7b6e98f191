"""
Numerical physics for the double pendulum.

This module provides:
- The dynamical state and physical parameter types
- The closed-form Lagrangian derivative of the double pendulum
- A classical RK4 step (generic and typed) with fault detection
- Energy computation and angle normalization helpers
- Position helpers for visualization (screen pixels, y pointing down)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

Vector = List[float]
Point = Tuple[float, float]


class SimulationFault(ArithmeticError):
    """Raised when an integration step produces non-finite values."""


@dataclass(frozen=True)
class DynamicalState:
    theta1: float
    theta2: float
    omega1: float = 0.0
    omega2: float = 0.0

    @classmethod
    def at_rest(cls, theta1_deg: float, theta2_deg: float) -> "DynamicalState":
        return cls(math.radians(theta1_deg), math.radians(theta2_deg), 0.0, 0.0)

    @classmethod
    def from_vector(cls, values: Sequence[float]) -> "DynamicalState":
        th1, th2, w1, w2 = values[:4]
        return cls(float(th1), float(th2), float(w1), float(w2))

    def as_vector(self) -> Vector:
        return [self.theta1, self.theta2, self.omega1, self.omega2]

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in self.as_vector())


@dataclass(frozen=True)
class PhysicalParams:
    L1: float = 130.0
    L2: float = 130.0
    m1: float = 20.0
    m2: float = 20.0
    g: float = 1.0


def double_pendulum_derivatives(state: Sequence[float], params: PhysicalParams) -> Vector:
    """Return derivatives [dth1, dth2, dw1, dw2] for a double pendulum.

    Angles are measured from the downward vertical. The two denominators differ
    only by the arm length they are scaled with. No guard is applied to them:
    a degenerate configuration has to surface as a non-finite result.
    """
    th1, th2, w1, w2 = state[:4]
    L1, L2 = params.L1, params.L2
    m1, m2 = params.m1, params.m2
    g = params.g

    delta = th1 - th2
    sin_delta = math.sin(delta)
    cos_delta = math.cos(delta)
    denom = 2.0 * m1 + m2 - m2 * math.cos(2.0 * th1 - 2.0 * th2)

    # First bob angular acceleration
    num1 = -g * (2.0 * m1 + m2) * math.sin(th1)
    num1 -= m2 * g * math.sin(th1 - 2.0 * th2)
    num1 -= 2.0 * sin_delta * m2 * (w2 * w2 * L2 + w1 * w1 * L1 * cos_delta)
    a1 = num1 / (L1 * denom)

    # Second bob angular acceleration
    num2 = 2.0 * sin_delta * (
        w1 * w1 * L1 * (m1 + m2)
        + g * (m1 + m2) * math.cos(th1)
        + w2 * w2 * L2 * m2 * cos_delta
    )
    a2 = num2 / (L2 * denom)

    return [w1, w2, a1, a2]


def derivatives(state: DynamicalState, params: PhysicalParams) -> DynamicalState:
    """Typed wrapper: the rates of change packed into a DynamicalState."""
    return DynamicalState.from_vector(double_pendulum_derivatives(state.as_vector(), params))


def rk4_step(
    state: Sequence[float],
    dt: float,
    params: PhysicalParams,
    deriv_func: Callable[[Sequence[float], PhysicalParams], Vector],
) -> Vector:
    """Perform one classical RK4 step for arbitrary state dimension."""
    s1 = list(state)
    k1 = deriv_func(s1, params)
    s2 = [s1[i] + 0.5 * dt * k1[i] for i in range(len(s1))]
    k2 = deriv_func(s2, params)
    s3 = [s1[i] + 0.5 * dt * k2[i] for i in range(len(s1))]
    k3 = deriv_func(s3, params)
    s4 = [s1[i] + dt * k3[i] for i in range(len(s1))]
    k4 = deriv_func(s4, params)
    return [s1[i] + (dt / 6.0) * (k1[i] + 2.0 * k2[i] + 2.0 * k3[i] + k4[i]) for i in range(len(s1))]


def step(state: DynamicalState, params: PhysicalParams, h: float) -> DynamicalState:
    """Advance the double pendulum by one fixed RK4 step of size h."""
    return DynamicalState.from_vector(rk4_step(state.as_vector(), h, params, double_pendulum_derivatives))


def checked_step(state: DynamicalState, params: PhysicalParams, h: float) -> DynamicalState:
    """Like step(), but raise SimulationFault instead of returning NaN/inf."""
    try:
        new_state = step(state, params, h)
    except (ZeroDivisionError, OverflowError, ValueError) as exc:
        raise SimulationFault(f"integration failed: {exc}") from exc
    if not new_state.is_finite():
        raise SimulationFault(f"non-finite state after step: {new_state.as_vector()}")
    return new_state


def positions(state: DynamicalState, params: PhysicalParams) -> Tuple[Point, Point]:
    """Compute bob positions relative to the pivot at (0, 0).

    Returns ((x1, y1), (x2, y2)). Positive y is downwards (screen space).
    """
    x1 = params.L1 * math.sin(state.theta1)
    y1 = params.L1 * math.cos(state.theta1)
    x2 = x1 + params.L2 * math.sin(state.theta2)
    y2 = y1 + params.L2 * math.cos(state.theta2)
    return (x1, y1), (x2, y2)


def total_energy(state: DynamicalState, params: PhysicalParams) -> float:
    """Total mechanical energy (kinetic + potential).

    Reference height is the pivot. Positive y is downwards, so the potential
    energy of a hanging bob is negative.
    """
    th1, th2, w1, w2 = state.as_vector()
    L1, L2 = params.L1, params.L2
    m1, m2 = params.m1, params.m2
    # velocities
    x1dot = L1 * w1 * math.cos(th1)
    y1dot = -L1 * w1 * math.sin(th1)
    x2dot = x1dot + L2 * w2 * math.cos(th2)
    y2dot = y1dot - L2 * w2 * math.sin(th2)
    KE = 0.5 * m1 * (x1dot * x1dot + y1dot * y1dot) + 0.5 * m2 * (x2dot * x2dot + y2dot * y2dot)
    (_, y1), (_, y2) = positions(state, params)
    PE = -(m1 * params.g * y1 + m2 * params.g * y2)
    return KE + PE


def wrap_degrees(angle_deg: float) -> float:
    """Normalize an angle in degrees to [-180, 180) for display."""
    a = (angle_deg + 180.0) % 360.0
    if a < 0:
        a += 360.0
    return a - 180.0

from __future__ import annotations

import logging
from typing import Any, Dict

import streamlit as st

from pendelview.config import RANGES, SPEED_CHOICES, ConfigError
from pendelview.logging_config import setup_logging
from pendelview.render import build_figure
from pendelview.sim_session import STATUS_FAULT, SimulationSession

logger = logging.getLogger(__name__)

FRAME_INTERVAL = 0.05  # s, Streamlit cannot redraw a chart at display rate
PAN_STEP = 60.0  # px per pan button press
WHEEL_STEP = 100.0  # one wheel notch


def _ensure_session() -> SimulationSession:
    if "sim" not in st.session_state:
        setup_logging()
        st.session_state.sim = SimulationSession()
    return st.session_state.sim


def _slider(label: str, name: str, value: float, step: float) -> float:
    lo, hi = RANGES[name]
    return st.sidebar.slider(label, min_value=float(lo), max_value=float(hi), value=float(value), step=step, key=name)


def _update_params_from_sidebar(sim: SimulationSession) -> None:
    cfg = sim.config
    values: Dict[str, Any] = {}

    st.sidebar.subheader("Pendulum 1")
    values["theta1_deg"] = _slider("θ₁ (deg)", "theta1_deg", cfg.theta1_deg, 1.0)
    values["l1"] = _slider("L₁ (px)", "l1", cfg.l1, 1.0)
    values["m1"] = _slider("m₁", "m1", cfg.m1, 1.0)

    st.sidebar.subheader("Pendulum 2")
    values["theta2_deg"] = _slider("θ₂ (deg)", "theta2_deg", cfg.theta2_deg, 1.0)
    values["l2"] = _slider("L₂ (px)", "l2", cfg.l2, 1.0)
    values["m2"] = _slider("m₂", "m2", cfg.m2, 1.0)

    st.sidebar.subheader("Rendering")
    values["stroke_width"] = _slider("Stroke width", "stroke_width", cfg.stroke_width, 0.1)
    values["trail_length"] = int(st.sidebar.number_input(
        "Trail length", min_value=1, max_value=int(RANGES["trail_length"][1]), value=int(cfg.trail_length), step=100, key="trail_length"))
    values["persistent_trail"] = st.sidebar.checkbox("Persistent trail", value=cfg.persistent_trail, key="persistent_trail")
    values["dark_mode"] = st.sidebar.toggle("Dark mode", value=cfg.dark_mode, key="dark_mode")

    st.sidebar.subheader("Simulation")
    values["h"] = _slider("Time step (h)", "h", cfg.h, 0.001)
    values["g"] = _slider("Gravity (g)", "g", cfg.g, 0.1)
    values["speed"] = st.sidebar.radio(
        "Speed", SPEED_CHOICES, index=SPEED_CHOICES.index(cfg.speed), horizontal=True, format_func=lambda s: f"{s}x", key="speed")

    try:
        sim.configure(**values)
    except ConfigError as exc:
        logger.warning("Rejected configuration: %s", exc)
        st.sidebar.error(str(exc))


def _controls(sim: SimulationSession) -> None:
    col_a, col_b, col_c, col_d = st.columns(4)
    with col_a:
        if st.button("Pause" if sim.running else "Start", type="secondary" if sim.running else "primary"):
            sim.toggle_running()
    with col_b:
        if st.button("Clear"):
            sim.clear_trail()
    with col_c:
        if st.button("Reset"):
            sim.reset()
    with col_d:
        if st.button("Reset view"):
            sim.reset_view()

    # zoom and pan buttons stand in for wheel and drag gestures
    cx, cy = sim.width / 2.0, sim.height / 3.0
    z_in, z_out, left, right, up, down = st.columns(6)
    if z_in.button("Zoom +"):
        sim.on_wheel(cx, cy, -WHEEL_STEP)
    if z_out.button("Zoom −"):
        sim.on_wheel(cx, cy, WHEEL_STEP)
    for col, label, (dx, dy) in (
        (left, "←", (-PAN_STEP, 0.0)),
        (right, "→", (PAN_STEP, 0.0)),
        (up, "↑", (0.0, -PAN_STEP)),
        (down, "↓", (0.0, PAN_STEP)),
    ):
        if col.button(label):
            sim.on_pointer_down(cx, cy)
            sim.on_pointer_move(cx + dx, cy + dy)
            sim.on_pointer_up()


@st.fragment(run_every=FRAME_INTERVAL)
def _frame(sim: SimulationSession) -> None:
    frame = sim.advance()
    t = frame.telemetry
    st.caption(f"Zoom: {t.zoom_percent}% | Speed: {t.speed}x | Status: {t.status}")
    st.plotly_chart(build_figure(frame), use_container_width=False, config={"staticPlot": True, "displayModeBar": False})

    col_a, col_b, col_c = st.columns(3)
    col_a.metric("θ₁", f"{t.theta1_deg:.2f}°")
    col_b.metric("θ₂", f"{t.theta2_deg:.2f}°")
    col_c.metric("Energy", f"{t.energy:.2f}")
    if t.status == STATUS_FAULT:
        st.error(f"Simulation halted: {t.fault}. Reset to continue.")


def main() -> None:
    st.set_page_config(page_title="Pendulum Precision", layout="wide")
    sim = _ensure_session()

    st.title("Pendulum Precision")
    _update_params_from_sidebar(sim)
    _controls(sim)
    _frame(sim)


if __name__ == "__main__":
    main()

"""Headless runner: drive the simulator on a timer loop and log telemetry."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from pendelview.config import SPEED_CHOICES, ConfigError, SimConfig
from pendelview.frame_loop import FrameLoop
from pendelview.logging_config import setup_logging
from pendelview.sim_session import SimulationSession

logger = logging.getLogger("pendelview.headless")


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pendelview-headless", description=__doc__)
    parser.add_argument("--frames", type=int, default=600, help="number of frames to run")
    parser.add_argument("--fps", type=float, default=60.0)
    parser.add_argument("--theta1", type=float, default=45.0, help="initial angle of arm 1 (deg)")
    parser.add_argument("--theta2", type=float, default=22.5, help="initial angle of arm 2 (deg)")
    parser.add_argument("--h", type=float, default=0.05, help="integrator time step")
    parser.add_argument("--g", type=float, default=1.0)
    parser.add_argument("--speed", type=int, default=1, choices=SPEED_CHOICES)
    parser.add_argument("--report-every", type=int, default=60, help="log telemetry every N frames")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    package_logger = setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)
    package_logger.info("Headless run: %d frames at %.0f fps, speed %dx", args.frames, args.fps, args.speed)

    try:
        config = SimConfig(theta1_deg=args.theta1, theta2_deg=args.theta2, h=args.h, g=args.g, speed=args.speed).validate()
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2
    session = SimulationSession(config=config)

    def on_frame() -> None:
        frame = session.advance()
        t = frame.telemetry
        if session.frame_count % args.report_every == 0:
            logger.info("frame %d: theta1=%.2f deg theta2=%.2f deg E=%.4f trail=%d",
                        session.frame_count, t.theta1_deg, t.theta2_deg, t.energy, t.trail_points)
        if frame.faulted:
            loop.stop()

    loop = FrameLoop(on_frame, interval=1.0 / args.fps, max_frames=args.frames)
    loop.start()
    try:
        loop.wait()
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        loop.stop()

    if session.fault is not None:
        logger.error("Simulation fault: %s", session.fault)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""
Timer-driven frame loop for hosts without their own refresh scheduler.

Each tick runs the callback once and schedules the next one. stop() cancels
the pending timer, so no callback fires after teardown.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 1.0 / 60.0


class FrameLoop:
    def __init__(self, callback: Callable[[], object], interval: float = DEFAULT_INTERVAL, max_frames: Optional[int] = None) -> None:
        if interval <= 0:
            raise ValueError(f"frame interval must be positive, got {interval}")
        self.callback = callback
        self.interval = float(interval)
        self.max_frames = max_frames
        self.frames = 0
        self.failures = 0
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._running = False
        self._generation = 0
        self._done = threading.Event()

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self._generation += 1
            self._done.clear()
            self._schedule(0.0)
        logger.info("Frame loop started (%.1f Hz)", 1.0 / self.interval)

    def stop(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._halt()
        logger.info("Frame loop stopped after %d frames", self.frames)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the loop stops; True if it did within the timeout."""
        return self._done.wait(timeout)

    def _halt(self) -> None:
        # caller holds the lock
        self._running = False
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._done.set()

    def _schedule(self, delay: float) -> None:
        # caller holds the lock
        timer = threading.Timer(delay, self._tick, args=(self._generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _tick(self, generation: int) -> None:
        # a tick from before the last start() belongs to a dead chain
        if not self._running or generation != self._generation:
            return
        started = time.monotonic()
        try:
            self.callback()
        except Exception:
            # a failed frame is skipped, the loop keeps going
            self.failures += 1
            logger.exception("Frame %d failed", self.frames)
        self.frames += 1

        with self._lock:
            if not self._running or generation != self._generation:
                return
            if self.max_frames is not None and self.frames >= self.max_frames:
                self._halt()
            else:
                elapsed = time.monotonic() - started
                self._schedule(max(0.0, self.interval - elapsed))
                return
        logger.info("Frame loop stopped after %d frames", self.frames)

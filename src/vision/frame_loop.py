"""
Cooperative per-frame loops.

A FrameLoop runs its step, then asks its scheduler for the next invocation.
Stopping the loop cancels the pending request and prevents any further
rescheduling. Schedulers are host-specific (see ui.scheduler for the Qt one).
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameTick:
    """Timing for one loop invocation."""
    delta: float    # Seconds since the previous tick
    elapsed: float  # Seconds since the loop started
    index: int


class FrameScheduler:
    """Host per-frame callback primitive."""

    def request(self, callback: Callable[[], None]) -> None:
        """Invoke callback once, at the next frame."""
        raise NotImplementedError

    def cancel(self) -> None:
        """Drop any pending request."""
        raise NotImplementedError


class FrameLoop:
    """
    Run step, then request the next invocation.

    Args:
        step: Called with a FrameTick on every invocation
        scheduler: Provides the next-frame callback
        name: Used in log messages
        clock: Monotonic seconds source
    """

    def __init__(self, step: Callable[[FrameTick], None], scheduler: FrameScheduler,
                 name: str = "loop", clock: Callable[[], float] = time.perf_counter):
        self._step = step
        self._scheduler = scheduler
        self._name = name
        self._clock = clock

        self._is_running = False
        self._start_time: Optional[float] = None
        self._last_time: Optional[float] = None
        self._tick_count = 0
        self._fault_count = 0

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def fault_count(self) -> int:
        return self._fault_count

    def start(self) -> None:
        if self._is_running:
            return
        self._is_running = True
        self._start_time = self._clock()
        self._last_time = self._start_time
        logger.debug("Frame loop '%s' started", self._name)
        self._scheduler.request(self._run)

    def stop(self) -> None:
        """Stop rescheduling and cancel the pending invocation."""
        if not self._is_running:
            return
        self._is_running = False
        self._scheduler.cancel()
        logger.debug("Frame loop '%s' stopped after %d ticks", self._name, self._tick_count)

    def _run(self) -> None:
        if not self._is_running:
            return

        now = self._clock()
        tick = FrameTick(
            delta=max(0.0, now - self._last_time),
            elapsed=now - self._start_time,
            index=self._tick_count,
        )
        self._last_time = now
        self._tick_count += 1

        try:
            self._step(tick)
        except Exception:
            # Never raise into the host's callback
            self._fault_count += 1
            logger.exception("Frame loop '%s' step %d failed", self._name, tick.index)

        # The step may have stopped the loop
        if self._is_running:
            self._scheduler.request(self._run)

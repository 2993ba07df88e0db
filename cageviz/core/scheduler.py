"""Fixed-rate animation loop.

FrameScheduler calls a tick function (render, then drain events) over and
over on an asyncio event loop. After every frame it measures how long the
work took and shortens the next delay by that amount, so the frame rate
stays close to the target even when individual frames vary in cost.

Frames are chained with ``loop.call_later`` rather than by calling tick()
recursively, so other tasks on the loop run between frames and the stack
never grows.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol

logger = logging.getLogger(__name__)

DEFAULT_FPS = 36
MIN_DELAY_MS = 1.0


class SchedulerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TimerLoop(Protocol):
    """The part of an asyncio loop the scheduler relies on."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class FrameScheduler:
    """Drives a tick function at a target frame rate.

    Args:
        tick_fn: Work done every frame.
        fps: Target frames per second.
        loop: Event loop used to schedule frames. Defaults to the running
            asyncio loop at start().
        clock: Millisecond clock. Defaults to ``time.monotonic``.
        min_delay_ms: Lower bound for the delay between frames.
    """

    def __init__(
        self,
        tick_fn: Callable[[], object],
        fps: float = DEFAULT_FPS,
        loop: TimerLoop | None = None,
        clock: Callable[[], float] = _monotonic_ms,
        min_delay_ms: float = MIN_DELAY_MS,
    ):
        if fps <= 0:
            raise ValueError("fps must be positive.")
        if min_delay_ms <= 0:
            raise ValueError("min_delay_ms must be positive.")
        self._tick_fn = tick_fn
        self.fps = fps
        self._loop = loop
        self._clock = clock
        self._min_delay_ms = min_delay_ms

        self._state = SchedulerState.IDLE
        self._handle: TimerHandle | None = None
        self._done: asyncio.Future | None = None
        # Bumped by every start(); a tick that sees it change owns no chain.
        self._generation = 0
        self.last_frame = 0.0
        self.last_delay = 0.0
        self.frames = 0

    @property
    def frame_period_ms(self) -> float:
        return 1000.0 / self.fps

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is SchedulerState.RUNNING

    def reset_clock(self) -> None:
        """Forget pacing history from a previous run."""
        self.last_frame = 0.0
        self.last_delay = 0.0
        self.frames = 0

    def next_delay(self, now: float) -> float:
        """Delay in ms before the next frame, given the current time.

        The time since the previous frame minus the delay that was waited
        is the cost of the frame's work; it is subtracted from the frame
        period.
        """
        work_time = now - self.last_frame - self.last_delay
        return max(self._min_delay_ms, self.frame_period_ms - work_time)

    def start(self) -> None:
        """Begin running and process the first frame immediately.

        Raises:
            RuntimeError: If no loop was given and no asyncio loop is running.
        """
        if self.is_running:
            return
        if self._loop is None:
            try:
                self._loop = asyncio.get_running_loop()
            except RuntimeError:
                raise RuntimeError(
                    "FrameScheduler.start() needs a running asyncio loop; "
                    "pass loop= or await run() instead."
                ) from None
        self._state = SchedulerState.RUNNING
        self._generation += 1
        logger.info("Frame scheduler started at %s fps", self.fps)
        self.tick()

    def stop(self) -> None:
        """Cancel any pending frame. Safe to call at any time."""
        if not self._halt():
            return
        logger.info("Frame scheduler stopped after %d frames", self.frames)
        if self._done is not None and not self._done.done():
            self._done.set_result(None)

    def _halt(self) -> bool:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        was_running = self.is_running
        self._state = SchedulerState.IDLE
        return was_running

    def tick(self) -> None:
        """Run one frame and schedule the next.

        If the tick function raises, the scheduler stops and the error
        propagates. If the tick function restarts the scheduler, the new
        chain started by that start() is the only one left scheduled.
        """
        self._handle = None
        generation = self._generation
        try:
            self._tick_fn()
        except Exception as e:
            logger.error("Frame %d failed: %s", self.frames, e)
            self._halt()
            raise
        self.frames += 1
        if generation != self._generation:
            return

        now = self._clock()
        delay = self.next_delay(now)
        if self.is_running:
            self._handle = self._loop.call_later(delay / 1000.0, self._scheduled_tick)
        self.last_frame = now
        self.last_delay = delay

    async def run(self) -> None:
        """Start and wait until stop() is called.

        Raises:
            Exception: Whatever error stopped the loop.
        """
        self._loop = asyncio.get_running_loop()
        self._done = self._loop.create_future()
        try:
            self.start()
            await self._done
        finally:
            self._done = None

    def _scheduled_tick(self) -> None:
        if not self.is_running:
            return
        try:
            self.tick()
        except Exception as e:
            if self._done is None or self._done.done():
                raise
            self._done.set_exception(e)

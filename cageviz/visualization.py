"""Top-level object that wires the cage visualization together.

Usage::

    from collections import deque
    from cageviz import Visualization

    events = deque()                       # the engine appends here
    viz = Visualization({"0": "Alice", "1": "Bob"}, events)
    viz.init()
    viz.reset()
    await viz.run()                        # until viz.stop()

Each frame renders the current tables and then drains every event queued
since the previous frame.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from cageviz.config import VisualizationConfig
from cageviz.core.mouse import ParticipantDirectory
from cageviz.core.processor import EventProcessor, EventQueue
from cageviz.core.registry import EntityRegistry
from cageviz.core.scheduler import FrameScheduler, TimerLoop
from cageviz.instrumentation.series import SeriesAggregator, TimeSeriesTable
from cageviz.visual.renderer import MatplotlibRenderer, Renderer

logger = logging.getLogger(__name__)


class Visualization:
    """Lifecycle facade over the processor, series, scheduler and renderer.

    Args:
        participants: Participant id -> label (or ``[label, ...]``).
        event_queue: Queue the simulation engine appends events to.
        renderer: Drawing surface. Defaults to a MatplotlibRenderer.
        config: Frame rate and narration settings.
        loop: Event loop for frame scheduling; the running loop by default.
    """

    def __init__(
        self,
        participants: ParticipantDirectory | Mapping[Any, str | Sequence[Any]],
        event_queue: EventQueue,
        renderer: Renderer | None = None,
        config: VisualizationConfig | None = None,
        loop: TimerLoop | None = None,
    ):
        self.config = config or VisualizationConfig()
        self.participants = _directory(participants)
        self.event_queue = event_queue
        self.renderer = renderer or MatplotlibRenderer(output_path=self.config.output_path)

        self.registry = EntityRegistry(self.participants.order)
        self.series = SeriesAggregator(self.participants)
        self.processor = EventProcessor(
            self.registry, self.series, self.participants, narrate=self.config.narrate
        )
        self.scheduler = FrameScheduler(
            self.tick,
            fps=self.config.fps,
            loop=loop,
            min_delay_ms=self.config.min_delay_ms,
        )
        self._initialized = False

    @property
    def round_number(self) -> int:
        return self.processor.round_number

    @property
    def tables(self) -> dict[str, TimeSeriesTable]:
        return self.series.tables

    def init(self) -> None:
        """One-time renderer setup. Later calls do nothing."""
        if self._initialized:
            return
        self.renderer.setup(self.tables)
        self._initialized = True

    def reset(
        self, participants: ParticipantDirectory | Mapping[Any, Any] | None = None
    ) -> None:
        """Stop the animation and clear all state for a new run."""
        self.stop()
        if participants is not None:
            self.participants = _directory(participants)
        self.processor.reset(self.participants)
        self.scheduler.reset_clock()
        if self._initialized:
            self.renderer.setup(self.tables)

    def start(self) -> None:
        """Start animating on the configured loop.

        Without ``loop=`` this must be called while an asyncio loop is
        running; otherwise use ``await run()``.
        """
        self.init()
        self.scheduler.start()

    def stop(self) -> None:
        self.scheduler.stop()

    async def run(self) -> None:
        """Animate until stop() is called or an event breaks the contract."""
        self.init()
        await self.scheduler.run()

    def tick(self) -> None:
        """Render the current tables, then apply every queued event."""
        self.renderer.draw(self.tables)
        self.processor.drain(self.event_queue)


def _directory(participants: ParticipantDirectory | Mapping[Any, Any]) -> ParticipantDirectory:
    if isinstance(participants, ParticipantDirectory):
        return participants
    return ParticipantDirectory(participants)

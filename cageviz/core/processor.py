"""Applies cage events to the registry and records statistics rows.

The processor drains the engine's event queue one event at a time. Every
event goes through three steps:

1. **Resolve**: look up each mouse the event references and work out the
   registry mutations it implies. Nothing is changed yet, so an event that
   references a dead mouse fails without leaving partial state behind.
2. **Narrate**: log one line describing what happened.
3. **Apply**: perform the mutations, then (for every event except an
   arrival) advance the round and emit a row to each series.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, MutableSequence
from functools import partial
from typing import Any, Union

from cageviz.core.events import (
    AbnormalTermination,
    Arrival,
    CageEvent,
    FightOutcome,
    FightResult,
    MateOutcome,
    MateResult,
    OverpopulationCull,
    Retirement,
    SimulationEnd,
    SimulationStart,
    parse_event,
)
from cageviz.core.mouse import ParticipantDirectory
from cageviz.core.registry import EntityRegistry
from cageviz.errors import SimulationEndedError, UnrecognizedEventKindError
from cageviz.instrumentation.series import POPULATION, SeriesAggregator
from cageviz.narrative import describe

logger = logging.getLogger(__name__)
narrative_logger = logging.getLogger("cageviz.narrative")

EventQueue = Union[deque, MutableSequence[Any]]
"""Anything the engine appends events to: a deque or a plain list."""

Mutation = Callable[[], object]


class EventProcessor:
    """Consumes cage events and keeps statistics in step with them.

    Args:
        registry: Live mice and their counts.
        series: Receives a snapshot after every non-arrival event.
        participants: Labels used for narration.
        narrate: Log a line per event on the ``cageviz.narrative`` logger.

    Attributes:
        round_number: Number of non-arrival events processed since reset.
        events_processed: Number of events of any kind processed since reset.
        ended: The SimulationEnd event, once one has been processed.
    """

    def __init__(
        self,
        registry: EntityRegistry,
        series: SeriesAggregator,
        participants: ParticipantDirectory,
        narrate: bool = True,
    ):
        self._registry = registry
        self._series = series
        self._participants = participants
        self._narrate = narrate
        self.round_number = 0
        self.events_processed = 0
        self.ended: SimulationEnd | None = None

        self._resolvers: dict[type, Callable[[Any], list[Mutation]]] = {
            Arrival: self._resolve_arrival,
            SimulationStart: self._resolve_start,
            FightOutcome: self._resolve_fight,
            MateOutcome: self._resolve_mate,
            Retirement: self._resolve_removal,
            OverpopulationCull: self._resolve_removal,
            AbnormalTermination: self._resolve_removal,
            SimulationEnd: self._resolve_end,
        }

    @property
    def participants(self) -> ParticipantDirectory:
        return self._participants

    def reset(self, participants: ParticipantDirectory | None = None) -> None:
        """Clear the registry, series and round counter for a new run."""
        if participants is not None:
            self._participants = participants
        self._registry.reset(self._participants.order)
        self._series.reset(self._participants)
        self.round_number = 0
        self.events_processed = 0
        self.ended = None
        logger.info("Processor reset for %d participants", len(self._participants))

    def drain(self, queue: EventQueue) -> int:
        """Process queued events in order until the queue is empty.

        Returns:
            The number of events processed.

        Raises:
            CageVizError: On the first event that violates the engine
                contract. That event stays at the head of the queue, with
                the events behind it still queued.
        """
        count = 0
        while queue:
            self.process(queue[0])
            if isinstance(queue, deque):
                queue.popleft()
            else:
                queue.pop(0)
            count += 1
        if count:
            logger.debug("Drained %d events, round is now %d", count, self.round_number)
        return count

    def process(self, record: CageEvent | dict[str, Any]) -> CageEvent:
        """Apply a single event.

        Returns:
            The typed event that was applied.
        """
        event = parse_event(record)
        if self.ended is not None:
            raise SimulationEndedError(
                f"{type(event).__name__} received after the game ended ({self.ended.cause})"
            )

        resolver = self._resolvers.get(type(event))
        if resolver is None:
            raise UnrecognizedEventKindError(f"No handler for {type(event).__name__}")
        mutations = resolver(event)

        if self._narrate:
            self._log_narrative(event)

        for mutation in mutations:
            mutation()
        self.events_processed += 1

        if not isinstance(event, Arrival):
            self.round_number += 1
            self._series.emit(self._registry.snapshot(), self.round_number)
        return event

    def _log_narrative(self, event: CageEvent) -> None:
        try:
            line = describe(event, self._registry, self._participants)
        except Exception:
            logger.warning("Could not narrate %s", type(event).__name__, exc_info=True)
            return
        narrative_logger.info(line)

    # ------------------------------------------------------------------
    # Resolvers: validate references and return the mutations to apply
    # ------------------------------------------------------------------

    def _remove(self, mouse_id: int | None) -> Mutation:
        self._registry.get(mouse_id)
        return partial(self._registry.remove, mouse_id)

    def _resolve_arrival(self, event: Arrival) -> list[Mutation]:
        self._registry.check_addable(event.mouse)
        return [partial(self._registry.add, event.mouse)]

    def _resolve_start(self, event: SimulationStart) -> list[Mutation]:
        if self._series[POPULATION]:
            return []
        # Baseline row for the initial population, before the round advances.
        return [lambda: self._series.emit(self._registry.snapshot(), self.round_number)]

    def _resolve_fight(self, event: FightOutcome) -> list[Mutation]:
        self._registry.get(event.instigator_id)
        if event.result.needs_opponent:
            if event.opponent_id is None:
                raise UnrecognizedEventKindError(f"FIGHT {event.result.value} has no opponent")
            self._registry.get(event.opponent_id)

        if event.result in (FightResult.SELF, FightResult.LOSS):
            return [self._remove(event.instigator_id)]
        if event.result is FightResult.WIN:
            return [self._remove(event.opponent_id)]
        return []

    def _resolve_mate(self, event: MateOutcome) -> list[Mutation]:
        self._registry.get(event.proposer_id)
        if event.result.needs_partner:
            if event.partner_id is None:
                raise UnrecognizedEventKindError(f"MATE {event.result.value} has no partner")
            self._registry.get(event.partner_id)

        if event.result is MateResult.MATE_EXPLODED:
            return [self._remove(event.partner_id)]
        if event.result is MateResult.SUCCESS:
            if event.offspring is None:
                raise UnrecognizedEventKindError("MATE SUCCESS has no offspring")
            self._registry.check_addable(event.offspring)
            return [partial(self._registry.add, event.offspring)]
        return []

    def _resolve_removal(
        self, event: Retirement | OverpopulationCull | AbnormalTermination
    ) -> list[Mutation]:
        return [self._remove(event.mouse_id)]

    def _resolve_end(self, event: SimulationEnd) -> list[Mutation]:
        def finish() -> None:
            self.ended = event

        return [finish]

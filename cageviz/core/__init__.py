"""Event bookkeeping and frame pacing for the cage visualization."""

from cageviz.core.mouse import Behavior, Mouse, ParticipantDirectory, Sex
from cageviz.core.registry import EntityRegistry, RegistrySnapshot
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
    TerminationKind,
    parse_event,
)
from cageviz.core.processor import EventProcessor
from cageviz.core.scheduler import FrameScheduler, SchedulerState

__all__ = [
    "AbnormalTermination",
    "Arrival",
    "Behavior",
    "CageEvent",
    "EntityRegistry",
    "EventProcessor",
    "FightOutcome",
    "FightResult",
    "FrameScheduler",
    "MateOutcome",
    "MateResult",
    "Mouse",
    "OverpopulationCull",
    "ParticipantDirectory",
    "RegistrySnapshot",
    "Retirement",
    "SchedulerState",
    "Sex",
    "SimulationEnd",
    "SimulationStart",
    "TerminationKind",
    "parse_event",
]

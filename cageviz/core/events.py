"""Cage events emitted by the simulation engine.

Each event kind is its own frozen dataclass carrying only the fields that
kind needs. The engine itself speaks in plain dicts tagged with a ``TYPE``
key; parse_event() turns one of those records into the matching dataclass
so the processor only ever dispatches on types.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union

from cageviz.core.mouse import Mouse
from cageviz.errors import UnrecognizedEventKindError


class FightResult(str, Enum):
    NONE = "NONE"
    INVALID = "INVALID"
    SELF = "SELF"
    WIN = "WIN"
    TIE = "TIE"
    LOSS = "LOSS"

    @property
    def needs_opponent(self) -> bool:
        return self in (FightResult.WIN, FightResult.TIE, FightResult.LOSS)


class MateResult(str, Enum):
    NONE = "NONE"
    INVALID = "INVALID"
    SELF = "SELF"
    INCOMPATIBLE = "INCOMPATIBLE"
    INFERTILE = "INFERTILE"
    MATE_EXPLODED = "MATE_EXPLODED"
    REJECTION = "REJECTION"
    SUCCESS = "SUCCESS"

    @property
    def needs_partner(self) -> bool:
        return self not in (MateResult.NONE, MateResult.INVALID, MateResult.SELF)


class TerminationKind(str, Enum):
    """Why a player's code killed its mouse."""

    EXPLODE = "EXPLODE"  # raised an error
    SPIN = "SPIN"  # never returned


@dataclass(frozen=True)
class Arrival:
    """A mouse was placed in the cage before or during the game."""

    kind: ClassVar[str] = "ADD"
    mouse: Mouse


@dataclass(frozen=True)
class SimulationStart:
    """The initial population is complete and rounds begin."""

    kind: ClassVar[str] = "START_GAME"


@dataclass(frozen=True)
class FightOutcome:
    """A mouse was asked to pick a fight.

    Attributes:
        instigator_id: The mouse that picked (or declined) the fight.
        result: How the fight went.
        opponent_id: The chosen opponent, for WIN, TIE and LOSS.
    """

    kind: ClassVar[str] = "FIGHT"
    instigator_id: int
    result: FightResult
    opponent_id: int | None = None


@dataclass(frozen=True)
class MateOutcome:
    """A mouse was asked to choose a mate.

    Attributes:
        proposer_id: The mouse that proposed.
        result: How the proposal went.
        partner_id: The mouse that was asked, when one was picked.
        offspring: The newborn, for SUCCESS only.
    """

    kind: ClassVar[str] = "MATE"
    proposer_id: int
    result: MateResult
    partner_id: int | None = None
    offspring: Mouse | None = None


@dataclass(frozen=True)
class Retirement:
    kind: ClassVar[str] = "RETIRE"
    mouse_id: int


@dataclass(frozen=True)
class OverpopulationCull:
    kind: ClassVar[str] = "OVERPOPULATION"
    mouse_id: int


@dataclass(frozen=True)
class AbnormalTermination:
    """A mouse died because the code controlling it misbehaved.

    Attributes:
        mouse_id: The mouse that died.
        termination: Whether the code raised or never returned.
        source: Name of the behavior function that was running.
        cause: Error text, for EXPLODE.
    """

    mouse_id: int
    termination: TerminationKind
    source: str = ""
    cause: str | None = None

    @property
    def kind(self) -> str:
        return self.termination.value


@dataclass(frozen=True)
class SimulationEnd:
    """The game is over. No events follow for this run."""

    kind: ClassVar[str] = "END_GAME"
    cause: str = ""
    pick_fight_winner: str | None = None
    choose_mate_winner: str | None = None
    mate_answer_winner: str | None = None


CageEvent = Union[
    Arrival,
    SimulationStart,
    FightOutcome,
    MateOutcome,
    Retirement,
    OverpopulationCull,
    AbnormalTermination,
    SimulationEnd,
]

EVENT_TYPES: tuple[type, ...] = (
    Arrival,
    SimulationStart,
    FightOutcome,
    MateOutcome,
    Retirement,
    OverpopulationCull,
    AbnormalTermination,
    SimulationEnd,
)


def _mouse(value: Any) -> Mouse:
    if isinstance(value, Mouse):
        return value
    return Mouse.from_dict(value)


def _optional_id(record: Mapping[str, Any], key: str) -> int | None:
    value = record.get(key)
    return None if value is None else int(value)


def _result(enum_cls: type[Enum], record: Mapping[str, Any]) -> Any:
    raw = record.get("RESULT")
    try:
        return enum_cls(raw)
    except ValueError:
        raise UnrecognizedEventKindError(
            f"Unknown {record.get('TYPE')} result {raw!r}"
        ) from None


def parse_event(record: CageEvent | Mapping[str, Any]) -> CageEvent:
    """Convert an engine record into a typed event.

    Typed events pass through unchanged.

    Raises:
        UnrecognizedEventKindError: If the ``TYPE`` tag or result tag is
            unknown, or a required field is missing.
    """
    if isinstance(record, EVENT_TYPES):
        return record
    if not isinstance(record, Mapping):
        raise UnrecognizedEventKindError(f"Cannot dispatch {type(record).__name__} event")

    kind = record.get("TYPE")
    try:
        if kind == "ADD":
            return Arrival(_mouse(record["MOUSE"]))
        if kind == "START_GAME":
            return SimulationStart()
        if kind == "FIGHT":
            return FightOutcome(
                instigator_id=int(record["ID"]),
                result=_result(FightResult, record),
                opponent_id=_optional_id(record, "OPT_OPPONENT"),
            )
        if kind == "MATE":
            offspring = record.get("OPT_OFFSPRING")
            return MateOutcome(
                proposer_id=int(record["ID"]),
                result=_result(MateResult, record),
                partner_id=_optional_id(record, "OPT_PARTNER"),
                offspring=None if offspring is None else _mouse(offspring),
            )
        if kind == "RETIRE":
            return Retirement(int(record["ID"]))
        if kind == "OVERPOPULATION":
            return OverpopulationCull(int(record["ID"]))
        if kind in ("EXPLODE", "SPIN"):
            return AbnormalTermination(
                mouse_id=int(record["ID"]),
                termination=TerminationKind(kind),
                source=str(record.get("SOURCE", "")),
                cause=record.get("CAUSE"),
            )
        if kind == "END_GAME":
            return SimulationEnd(
                cause=str(record.get("CAUSE", "")),
                pick_fight_winner=record.get("PICK_FIGHT_WINNER"),
                choose_mate_winner=record.get("CHOOSE_MATE_WINNER"),
                mate_answer_winner=record.get("MATE_ANSWER_WINNER"),
            )
    except UnrecognizedEventKindError:
        raise
    except KeyError as e:
        raise UnrecognizedEventKindError(f"{kind} event is missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise UnrecognizedEventKindError(f"Malformed {kind} event: {e}") from e
    raise UnrecognizedEventKindError(f"Unknown event type {kind!r}")

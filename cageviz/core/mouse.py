"""Mouse records and the participant directory they refer to.

Mice are produced by the simulation engine. The visualization only reads
them: sex and the three behavior owners drive the aggregate counts, while
size, aggressiveness and fertility are shown in log lines.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Sex(str, Enum):
    """Sex of a mouse. Declaration order is the population chart column order."""

    HERMAPHRODITE = "Hermaphrodite"
    MALE = "Male"
    FEMALE = "Female"


class Behavior(str, Enum):
    """The three behaviors whose strategy is owned by a participant."""

    PICK_FIGHT = "pickFight"
    CHOOSE_MATE = "chooseMate"
    MATE_ANSWER = "mateAnswer"

    @property
    def owner_attr(self) -> str:
        """Name of the Mouse attribute holding this behavior's owner."""
        return _OWNER_ATTRS[self]


_OWNER_ATTRS = {
    Behavior.PICK_FIGHT: "pick_fight_owner",
    Behavior.CHOOSE_MATE: "choose_mate_owner",
    Behavior.MATE_ANSWER: "mate_answer_owner",
}


@dataclass(frozen=True)
class Mouse:
    """An individual in the cage.

    Attributes:
        id: Unique identifier assigned by the engine.
        sex: Sex category.
        pick_fight_owner: Participant whose code decides whom to fight.
        choose_mate_owner: Participant whose code decides whom to court.
        mate_answer_owner: Participant whose code answers mating requests.
        size: Display only.
        start_aggressiveness: Display only.
        start_fertility: Display only.
    """

    id: int
    sex: Sex
    pick_fight_owner: str
    choose_mate_owner: str
    mate_answer_owner: str
    size: int = 0
    start_aggressiveness: int = 0
    start_fertility: int = 0

    def owner(self, behavior: Behavior) -> str:
        return getattr(self, behavior.owner_attr)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Mouse:
        """Build a Mouse from an engine payload.

        Accepts the engine's camelCase keys (``pickFightOwner``,
        ``startAggressiveness``...) as well as the attribute names.
        """

        def pick(snake: str, camel: str, default: Any = None) -> Any:
            if snake in data:
                return data[snake]
            if camel in data:
                return data[camel]
            if default is None:
                raise KeyError(f"Mouse payload is missing '{camel}'")
            return default

        return cls(
            id=int(data["id"]),
            sex=Sex(data["sex"]),
            pick_fight_owner=str(pick("pick_fight_owner", "pickFightOwner")),
            choose_mate_owner=str(pick("choose_mate_owner", "chooseMateOwner")),
            mate_answer_owner=str(pick("mate_answer_owner", "mateAnswerOwner")),
            size=pick("size", "size", 0),
            start_aggressiveness=pick("start_aggressiveness", "startAggressiveness", 0),
            start_fertility=pick("start_fertility", "startFertility", 0),
        )

    def info(self) -> str:
        """One-line description of every attribute of this mouse."""
        return (
            f"Mouse{self.id}(sex:{self.sex.value} , size:{self.size} , "
            f"aggressiveness:{self.start_aggressiveness} , "
            f"fertility:{self.start_fertility} , "
            f"pickFight:{self.pick_fight_owner}/chooseMate:{self.choose_mate_owner}"
            f"/mateAnswer:{self.mate_answer_owner})"
        )


class ParticipantDirectory(Mapping[str, str]):
    """Ordered mapping of participant id to display label.

    Iteration order is the column order used by every owner-count chart and
    is fixed for the lifetime of the directory.

    Values of the source mapping may be plain labels or sequences whose first
    element is the label, which is how the engine describes its players.
    """

    def __init__(self, participants: Mapping[Any, str | Sequence[Any]]):
        labels: dict[str, str] = {}
        for participant_id, value in participants.items():
            if isinstance(value, str):
                label = value
            else:
                label = str(value[0])
            labels[str(participant_id)] = label
        self._labels = labels

    @property
    def order(self) -> tuple[str, ...]:
        return tuple(self._labels)

    def label(self, participant_id: str) -> str:
        return self._labels[str(participant_id)]

    def __getitem__(self, participant_id: str) -> str:
        return self._labels[participant_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __repr__(self) -> str:
        return f"ParticipantDirectory({self._labels!r})"

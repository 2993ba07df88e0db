"""Live mouse table with running per-category counts.

EntityRegistry is the single owner of which mice are alive. Alongside the
id -> Mouse table it keeps four count tables (sex, and one per behavior
owner) that are updated on every add/remove so statistics never need a
full recount while the animation is running.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from cageviz.core.mouse import Behavior, Mouse, Sex
from cageviz.errors import (
    DuplicateEntityError,
    RegistryInconsistencyError,
    UnknownEntityError,
    UnknownParticipantError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrySnapshot:
    """Immutable copy of the registry counts at one point in time.

    Attributes:
        sexes: Count of live mice per sex.
        owners: For each behavior, count of live mice per owning participant.
    """

    sexes: Mapping[Sex, int]
    owners: Mapping[Behavior, Mapping[str, int]]

    @property
    def population(self) -> int:
        return sum(self.sexes.values())

    def owner_counts(self, behavior: Behavior) -> Mapping[str, int]:
        return self.owners[behavior]


class EntityRegistry:
    """Owns the live mice and keeps the count tables consistent with them.

    Args:
        participant_order: Participant ids that may own behaviors. Owner
            count tables are keyed by exactly these ids.
    """

    def __init__(self, participant_order: Iterable[str] = ()):
        self._mice: dict[int, Mouse] = {}
        self._participants: tuple[str, ...] = ()
        self._sexes: dict[Sex, int] = {}
        self._owners: dict[Behavior, dict[str, int]] = {}
        self.reset(participant_order)

    def reset(self, participant_order: Iterable[str] | None = None) -> None:
        """Forget every mouse and zero all counts.

        Args:
            participant_order: New participant ids. Keeps the current ones
                when omitted.
        """
        if participant_order is not None:
            self._participants = tuple(participant_order)
        self._mice = {}
        self._sexes = {sex: 0 for sex in Sex}
        self._owners = {
            behavior: {pid: 0 for pid in self._participants} for behavior in Behavior
        }
        logger.debug("Registry reset with %d participants", len(self._participants))

    @property
    def participant_order(self) -> tuple[str, ...]:
        return self._participants

    @property
    def mice(self) -> Mapping[int, Mouse]:
        """Read-only view of the live mice keyed by id."""
        return MappingProxyType(self._mice)

    def get(self, mouse_id: int) -> Mouse:
        """Return the live mouse with this id.

        Raises:
            UnknownEntityError: If no such mouse is live.
        """
        try:
            return self._mice[mouse_id]
        except KeyError:
            raise UnknownEntityError(mouse_id) from None

    def check_addable(self, mouse: Mouse) -> None:
        """Raise the error add() would raise, without mutating anything."""
        if mouse.id in self._mice:
            raise DuplicateEntityError(mouse.id)
        for behavior in Behavior:
            owner = mouse.owner(behavior)
            if owner not in self._owners[behavior]:
                raise UnknownParticipantError(owner, behavior.value)

    def add(self, mouse: Mouse) -> None:
        """Insert a mouse and count it in all four tables.

        Raises:
            DuplicateEntityError: If the id is already live.
            UnknownParticipantError: If an owner is not a known participant.
        """
        self.check_addable(mouse)
        self._mice[mouse.id] = mouse
        self._sexes[mouse.sex] += 1
        for behavior in Behavior:
            self._owners[behavior][mouse.owner(behavior)] += 1

    def remove(self, mouse_id: int) -> Mouse:
        """Delete a live mouse and uncount it from all four tables.

        Returns:
            The removed mouse.

        Raises:
            UnknownEntityError: If the id is not live.
        """
        mouse = self.get(mouse_id)
        self._sexes[mouse.sex] -= 1
        for behavior in Behavior:
            self._owners[behavior][mouse.owner(behavior)] -= 1
        del self._mice[mouse_id]
        return mouse

    def snapshot(self) -> RegistrySnapshot:
        """Copy the counts so later add/remove calls cannot alter them."""
        return RegistrySnapshot(
            sexes=MappingProxyType(dict(self._sexes)),
            owners=MappingProxyType(
                {
                    behavior: MappingProxyType(dict(counts))
                    for behavior, counts in self._owners.items()
                }
            ),
        )

    def recount(self) -> RegistrySnapshot:
        """Counts rebuilt from scratch out of the live mice."""
        sexes = {sex: 0 for sex in Sex}
        owners = {behavior: {pid: 0 for pid in self._participants} for behavior in Behavior}
        for mouse in self._mice.values():
            sexes[mouse.sex] += 1
            for behavior in Behavior:
                counts = owners[behavior]
                owner = mouse.owner(behavior)
                counts[owner] = counts.get(owner, 0) + 1
        return RegistrySnapshot(sexes=sexes, owners=owners)

    def verify(self) -> None:
        """Check running counts against a full recount.

        Raises:
            RegistryInconsistencyError: If any count disagrees.
        """
        expected = self.recount()
        if dict(expected.sexes) != self._sexes:
            raise RegistryInconsistencyError(
                f"Sex counts {self._sexes} do not match live mice {dict(expected.sexes)}"
            )
        for behavior in Behavior:
            if dict(expected.owners[behavior]) != self._owners[behavior]:
                raise RegistryInconsistencyError(
                    f"{behavior.value} owner counts {self._owners[behavior]} do not "
                    f"match live mice {dict(expected.owners[behavior])}"
                )

    def __contains__(self, mouse_id: object) -> bool:
        return mouse_id in self._mice

    def __len__(self) -> int:
        return len(self._mice)

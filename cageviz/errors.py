"""Exceptions raised when the simulation engine breaks its event contract.

Every error here signals a producer-side contract violation or a corrupted
bookkeeping state. None of them are retried; they propagate so the host can
halt the run instead of rendering inconsistent statistics.
"""

from __future__ import annotations


class CageVizError(Exception):
    """Base class for all cageviz errors."""


class DuplicateEntityError(CageVizError, ValueError):
    """A mouse was added while a mouse with the same id is still live."""

    def __init__(self, mouse_id: int):
        super().__init__(f"Mouse {mouse_id} is already in the cage.")
        self.mouse_id = mouse_id


class UnknownEntityError(CageVizError, KeyError):
    """An event referenced a mouse id that is not live."""

    def __init__(self, mouse_id: int):
        super().__init__(mouse_id)
        self.mouse_id = mouse_id

    def __str__(self) -> str:
        return f"Mouse {self.mouse_id} is not in the cage."


class UnknownParticipantError(CageVizError, KeyError):
    """A mouse names a behavior owner missing from the participant directory."""

    def __init__(self, participant_id: str, behavior: str):
        super().__init__(participant_id)
        self.participant_id = participant_id
        self.behavior = behavior

    def __str__(self) -> str:
        return f"Unknown {self.behavior} owner {self.participant_id!r}."


class UnrecognizedEventKindError(CageVizError, ValueError):
    """An event (or one of its result tags) could not be dispatched."""


class SimulationEndedError(CageVizError, RuntimeError):
    """An event arrived after the simulation already reported its end."""


class RegistryInconsistencyError(CageVizError, RuntimeError):
    """Running counts no longer agree with the live mice."""


class SeriesOrderError(CageVizError, ValueError):
    """A row was appended out of round order."""

"""Round-indexed time series fed to the charts.

A TimeSeriesTable is an append-only list of rows ``(round, v1, v2, ...)``
with a fixed column header. SeriesAggregator owns the four tables the
visualization draws and appends one row to each whenever it is handed a
registry snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

import pandas as pd

from cageviz.core.mouse import Behavior, ParticipantDirectory, Sex
from cageviz.core.registry import RegistrySnapshot
from cageviz.errors import SeriesOrderError

logger = logging.getLogger(__name__)

TIME_COLUMN = "Time"

POPULATION = "population"
PICK_FIGHT = "pick_fight"
CHOOSE_MATE = "choose_mate"
MATE_ANSWER = "mate_answer"

BEHAVIOR_SERIES: dict[Behavior, str] = {
    Behavior.PICK_FIGHT: PICK_FIGHT,
    Behavior.CHOOSE_MATE: CHOOSE_MATE,
    Behavior.MATE_ANSWER: MATE_ANSWER,
}

SERIES_TITLES: dict[str, str] = {
    POPULATION: "Population",
    PICK_FIGHT: "Pick Fight",
    CHOOSE_MATE: "Choose Mate",
    MATE_ANSWER: "Mate Answer",
}


class TimeSeriesTable:
    """Append-only rows of one metric keyed by round number.

    Args:
        name: Identifier of the series.
        labels: Column labels for the values, in row order.
        title: Human readable title for charts.
    """

    def __init__(self, name: str, labels: Sequence[str], title: str = ""):
        self.name = name
        self.title = title or name
        self._labels = tuple(labels)
        self._rows: list[tuple[int, ...]] = []

    @property
    def columns(self) -> tuple[str, ...]:
        """Full header, starting with the time column."""
        return (TIME_COLUMN, *self._labels)

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    @property
    def rows(self) -> tuple[tuple[int, ...], ...]:
        return tuple(self._rows)

    @property
    def last_round(self) -> int | None:
        return self._rows[-1][0] if self._rows else None

    def append(self, round_number: int, values: Sequence[int]) -> None:
        """Add one row.

        Raises:
            SeriesOrderError: If the row is not the next round, or has the
                wrong width.
        """
        if len(values) != len(self._labels):
            raise SeriesOrderError(
                f"{self.name}: row has {len(values)} values, expected {len(self._labels)}"
            )
        last = self.last_round
        if last is None:
            if round_number < 0:
                raise SeriesOrderError(f"{self.name}: negative round {round_number}")
        elif round_number != last + 1:
            raise SeriesOrderError(
                f"{self.name}: round {round_number} does not follow round {last}"
            )
        self._rows.append((round_number, *values))

    def rounds(self) -> list[int]:
        return [row[0] for row in self._rows]

    def column(self, label: str) -> list[int]:
        """Values of one labelled column across all rows."""
        index = self._labels.index(label) + 1
        return [row[index] for row in self._rows]

    def to_dataframe(self) -> pd.DataFrame:
        """Rows as a DataFrame with the header as columns."""
        return pd.DataFrame(list(self._rows), columns=list(self.columns))

    def __len__(self) -> int:
        return len(self._rows)

    def __bool__(self) -> bool:
        return len(self._rows) > 0

    def __repr__(self) -> str:
        return f"TimeSeriesTable({self.name!r}, rows={len(self._rows)})"


class SeriesAggregator:
    """Converts registry snapshots into one row per tracked series.

    Owner-count columns follow the participant order captured at reset and
    are never reordered during a run.
    """

    def __init__(self, participants: ParticipantDirectory | None = None):
        self._participant_order: tuple[str, ...] = ()
        self._tables: dict[str, TimeSeriesTable] = {}
        self.reset(participants or ParticipantDirectory({}))

    def reset(self, participants: ParticipantDirectory) -> None:
        """Rebuild empty tables labelled for the given participants."""
        self._participant_order = participants.order
        player_labels = [participants.label(pid) for pid in self._participant_order]
        self._tables = {
            POPULATION: TimeSeriesTable(
                POPULATION, [sex.value for sex in Sex], SERIES_TITLES[POPULATION]
            ),
        }
        for name in BEHAVIOR_SERIES.values():
            self._tables[name] = TimeSeriesTable(name, player_labels, SERIES_TITLES[name])
        logger.debug("Series reset for players %s", player_labels)

    @property
    def participant_order(self) -> tuple[str, ...]:
        return self._participant_order

    @property
    def tables(self) -> dict[str, TimeSeriesTable]:
        return dict(self._tables)

    def emit(self, snapshot: RegistrySnapshot, round_number: int) -> None:
        """Append one row per series for the given round."""
        self._tables[POPULATION].append(
            round_number, [snapshot.sexes[sex] for sex in Sex]
        )
        for behavior, name in BEHAVIOR_SERIES.items():
            counts = snapshot.owner_counts(behavior)
            self._tables[name].append(
                round_number, [counts[pid] for pid in self._participant_order]
            )

    def to_frames(self) -> dict[str, pd.DataFrame]:
        return {name: table.to_dataframe() for name, table in self._tables.items()}

    def __getitem__(self, name: str) -> TimeSeriesTable:
        return self._tables[name]

    def __iter__(self) -> Iterator[TimeSeriesTable]:
        return iter(self._tables.values())

    def __len__(self) -> int:
        return len(self._tables)

"""Display configuration for the four cage charts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cageviz.instrumentation.series import (
    CHOOSE_MATE,
    MATE_ANSWER,
    PICK_FIGHT,
    POPULATION,
    SERIES_TITLES,
)

POPULATION_COLORS = ("#AA8CC5", "#ADD8E6", "#FFB5C1")


@dataclass
class Chart:
    """How one TimeSeriesTable is drawn.

    Args:
        series: Name of the table to read rows from.
        title: Chart title.
        kind: ``"area"`` or ``"line"``.
        stacked: Stack area layers on top of each other.
        colors: One CSS color per value column, or empty for defaults.
        x_label: X-axis label text.
        y_min: Fixed Y-axis minimum.
    """

    series: str
    title: str = ""
    kind: str = "line"
    stacked: bool = False
    colors: tuple[str, ...] = field(default_factory=tuple)
    x_label: str = "Time"
    y_min: float | None = 0

    def __post_init__(self) -> None:
        if self.kind not in ("area", "line"):
            raise ValueError(f"Unknown chart kind {self.kind!r}")

    def to_config(self) -> dict[str, Any]:
        return {
            "series": self.series,
            "title": self.title,
            "kind": self.kind,
            "stacked": self.stacked,
            "colors": list(self.colors),
            "x_label": self.x_label,
            "y_min": self.y_min,
        }


def default_charts() -> list[Chart]:
    """Stacked population area plus one line chart per behavior."""
    return [
        Chart(
            POPULATION,
            title=SERIES_TITLES[POPULATION],
            kind="area",
            stacked=True,
            colors=POPULATION_COLORS,
        ),
        Chart(PICK_FIGHT, title=SERIES_TITLES[PICK_FIGHT]),
        Chart(CHOOSE_MATE, title=SERIES_TITLES[CHOOSE_MATE]),
        Chart(MATE_ANSWER, title=SERIES_TITLES[MATE_ANSWER]),
    ]

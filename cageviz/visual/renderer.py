"""Rendering surfaces the frame scheduler redraws every tick.

A renderer is handed the current series tables once at setup and then on
every frame. It must tolerate being asked to draw when nothing changed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol

from matplotlib.figure import Figure

from cageviz.instrumentation.series import TimeSeriesTable
from cageviz.visual.charts import Chart, default_charts

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def setup(self, tables: Mapping[str, TimeSeriesTable]) -> None: ...

    def draw(self, tables: Mapping[str, TimeSeriesTable]) -> None: ...


class NullRenderer:
    """Draws nothing; counts calls so headless runs can be inspected."""

    def __init__(self) -> None:
        self.setups = 0
        self.draws = 0

    def setup(self, tables: Mapping[str, TimeSeriesTable]) -> None:
        self.setups += 1

    def draw(self, tables: Mapping[str, TimeSeriesTable]) -> None:
        self.draws += 1


class MatplotlibRenderer:
    """Draws every chart into one matplotlib Figure.

    The figure is created without pyplot so it works under any backend.
    When ``output_path`` is given the figure is saved there on every draw.

    Args:
        charts: Chart layout. Defaults to the four cage charts.
        output_path: Optional image file written on each draw.
        figsize: Figure size in inches.
    """

    def __init__(
        self,
        charts: Sequence[Chart] | None = None,
        output_path: str | Path | None = None,
        figsize: tuple[float, float] = (12.0, 8.0),
    ):
        self.charts = list(charts) if charts is not None else default_charts()
        self.output_path = Path(output_path) if output_path is not None else None
        self._figsize = figsize
        self.figure: Figure | None = None
        self._axes: dict[str, object] = {}
        self.draws = 0

    def setup(self, tables: Mapping[str, TimeSeriesTable]) -> None:
        self.figure = Figure(figsize=self._figsize)
        cols = 2 if len(self.charts) > 1 else 1
        rows = (len(self.charts) + cols - 1) // cols
        self._axes = {}
        for i, chart in enumerate(self.charts):
            self._axes[chart.series] = self.figure.add_subplot(rows, cols, i + 1)
        if self.output_path is not None:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Matplotlib renderer set up with %d charts", len(self.charts))

    def draw(self, tables: Mapping[str, TimeSeriesTable]) -> None:
        if self.figure is None:
            self.setup(tables)
        for chart in self.charts:
            self._draw_chart(self._axes[chart.series], chart, tables[chart.series])
        self.figure.tight_layout()
        if self.output_path is not None:
            self.figure.savefig(self.output_path)
        self.draws += 1

    def _draw_chart(self, ax, chart: Chart, table: TimeSeriesTable) -> None:
        ax.clear()
        ax.set_title(chart.title or table.title)
        ax.set_xlabel(chart.x_label)
        if table:
            x = table.rounds()
            ys = [table.column(label) for label in table.labels]
            colors = list(chart.colors) or None
            if chart.kind == "area" and chart.stacked:
                ax.stackplot(x, *ys, labels=table.labels, colors=colors)
            elif chart.kind == "area":
                for i, (label, y) in enumerate(zip(table.labels, ys)):
                    color = colors[i % len(colors)] if colors else None
                    ax.fill_between(x, y, label=label, color=color, alpha=0.5)
            else:
                for i, (label, y) in enumerate(zip(table.labels, ys)):
                    color = colors[i % len(colors)] if colors else None
                    ax.plot(x, y, label=label, color=color)
            ax.legend(loc="upper left", fontsize="small")
        if chart.y_min is not None:
            ax.set_ylim(bottom=chart.y_min)

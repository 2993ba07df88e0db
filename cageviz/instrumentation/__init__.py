"""Round-indexed statistics series."""

from cageviz.instrumentation.series import SeriesAggregator, TimeSeriesTable

__all__ = ["SeriesAggregator", "TimeSeriesTable"]

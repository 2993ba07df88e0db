"""Rendering surfaces for the cage charts."""

from cageviz.visual.charts import Chart, default_charts
from cageviz.visual.renderer import MatplotlibRenderer, NullRenderer, Renderer

__all__ = ["Chart", "MatplotlibRenderer", "NullRenderer", "Renderer", "default_charts"]

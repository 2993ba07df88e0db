"""Runtime settings for the visualization.

Settings can be passed explicitly or read from environment variables:

    CAGEVIZ_FPS: Target frames per second (default 36).
    CAGEVIZ_NARRATE: "0" disables per-event log lines.
    CAGEVIZ_OUTPUT: Image path the matplotlib renderer saves to.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from cageviz.core.scheduler import DEFAULT_FPS, MIN_DELAY_MS


@dataclass(frozen=True)
class VisualizationConfig:
    """Settings for one Visualization.

    Attributes:
        fps: Target frame rate of the animation loop.
        min_delay_ms: Smallest delay ever scheduled between frames.
        narrate: Log one line per processed event.
        output_path: Where the default renderer saves its figure, if anywhere.
    """

    fps: float = DEFAULT_FPS
    min_delay_ms: float = MIN_DELAY_MS
    narrate: bool = True
    output_path: Path | None = None

    def __post_init__(self) -> None:
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.min_delay_ms <= 0:
            raise ValueError(f"min_delay_ms must be positive, got {self.min_delay_ms}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> VisualizationConfig:
        """Build a config from ``CAGEVIZ_*`` environment variables."""
        env = os.environ if environ is None else environ
        fps = env.get("CAGEVIZ_FPS", "")
        narrate = env.get("CAGEVIZ_NARRATE", "")
        output = env.get("CAGEVIZ_OUTPUT", "")
        try:
            fps_value = float(fps) if fps else DEFAULT_FPS
        except ValueError:
            raise ValueError(f"CAGEVIZ_FPS must be a number, got {fps!r}") from None
        return cls(
            fps=fps_value,
            narrate=narrate != "0" if narrate else True,
            output_path=Path(output) if output else None,
        )

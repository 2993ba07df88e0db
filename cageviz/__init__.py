"""cageviz: live statistics and charts for a mouse-cage genetics game.

Consumes the event stream of a cage simulation, keeps population and
behavior-ownership counts, and animates them as time-series charts.

Logging is silent by default; see ``cageviz.logging_config``.
"""

import logging

from cageviz.config import VisualizationConfig
from cageviz.core import (
    AbnormalTermination,
    Arrival,
    Behavior,
    EntityRegistry,
    EventProcessor,
    FightOutcome,
    FightResult,
    FrameScheduler,
    MateOutcome,
    MateResult,
    Mouse,
    OverpopulationCull,
    ParticipantDirectory,
    Retirement,
    Sex,
    SimulationEnd,
    SimulationStart,
    TerminationKind,
    parse_event,
)
from cageviz.errors import (
    CageVizError,
    DuplicateEntityError,
    RegistryInconsistencyError,
    SeriesOrderError,
    SimulationEndedError,
    UnknownEntityError,
    UnknownParticipantError,
    UnrecognizedEventKindError,
)
from cageviz.instrumentation import SeriesAggregator, TimeSeriesTable
from cageviz.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    enable_narrative_log,
    set_level,
    set_module_level,
)
from cageviz.visual import Chart, MatplotlibRenderer, NullRenderer
from cageviz.visualization import Visualization

logging.getLogger("cageviz").addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "AbnormalTermination",
    "Arrival",
    "Behavior",
    "CageVizError",
    "Chart",
    "DuplicateEntityError",
    "EntityRegistry",
    "EventProcessor",
    "FightOutcome",
    "FightResult",
    "FrameScheduler",
    "MateOutcome",
    "MateResult",
    "MatplotlibRenderer",
    "Mouse",
    "NullRenderer",
    "OverpopulationCull",
    "ParticipantDirectory",
    "RegistryInconsistencyError",
    "Retirement",
    "SeriesAggregator",
    "SeriesOrderError",
    "Sex",
    "SimulationEnd",
    "SimulationEndedError",
    "SimulationStart",
    "TerminationKind",
    "TimeSeriesTable",
    "UnknownEntityError",
    "UnknownParticipantError",
    "UnrecognizedEventKindError",
    "Visualization",
    "VisualizationConfig",
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "enable_narrative_log",
    "parse_event",
    "set_level",
    "set_module_level",
]

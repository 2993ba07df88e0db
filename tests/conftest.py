"""
Shared pytest fixtures for cageviz tests.
"""

import logging
from collections import deque
from pathlib import Path

import pytest

from cageviz.core.mouse import Mouse, ParticipantDirectory, Sex
from cageviz.core.processor import EventProcessor
from cageviz.core.registry import EntityRegistry
from cageviz.instrumentation.series import SeriesAggregator


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Returns the root test_output directory. Created once per test session.
    Files here persist after tests complete for easy access.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Returns a directory for the current test to write output files.
    Directory structure: test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_name = request.node.name

    test_dir = test_output_root / module_name / test_name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture(autouse=True)
def reset_cageviz_logging():
    """Give every test a clean ``cageviz`` logger (NullHandler, NOTSET)."""
    names = ("cageviz", "cageviz.narrative")

    def clean():
        for name in names:
            logger = logging.getLogger(name)
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)
                if not isinstance(handler, logging.NullHandler):
                    handler.close()
            logger.setLevel(logging.NOTSET)
        logging.getLogger("cageviz").addHandler(logging.NullHandler())

    clean()
    yield
    clean()


# === Cage fixtures ===


@pytest.fixture
def participants() -> ParticipantDirectory:
    return ParticipantDirectory({"P1": ["Alice", "alice@example.com"], "P2": "Bob", "P3": "Carol"})


@pytest.fixture
def registry(participants) -> EntityRegistry:
    return EntityRegistry(participants.order)


@pytest.fixture
def series(participants) -> SeriesAggregator:
    return SeriesAggregator(participants)


@pytest.fixture
def processor(registry, series, participants) -> EventProcessor:
    return EventProcessor(registry, series, participants)


@pytest.fixture
def queue() -> deque:
    return deque()


@pytest.fixture
def make_mouse():
    """Factory for mice whose three behaviors belong to ``owner`` unless overridden."""

    def _make(mouse_id: int, sex: Sex = Sex.MALE, owner: str = "P1", **kwargs) -> Mouse:
        return Mouse(
            id=mouse_id,
            sex=sex,
            pick_fight_owner=kwargs.pop("pick_fight_owner", owner),
            choose_mate_owner=kwargs.pop("choose_mate_owner", owner),
            mate_answer_owner=kwargs.pop("mate_answer_owner", owner),
            **kwargs,
        )

    return _make

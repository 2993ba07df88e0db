"""Tests for parsing engine records into typed cage events."""

import pytest

from cageviz.core.events import (
    AbnormalTermination,
    Arrival,
    FightOutcome,
    FightResult,
    MateOutcome,
    MateResult,
    OverpopulationCull,
    Retirement,
    SimulationEnd,
    SimulationStart,
    TerminationKind,
    parse_event,
)
from cageviz.core.mouse import Sex
from cageviz.errors import UnrecognizedEventKindError

MOUSE = {
    "id": 4,
    "sex": "Male",
    "size": 2,
    "startAggressiveness": 3,
    "startFertility": 4,
    "pickFightOwner": "P1",
    "chooseMateOwner": "P2",
    "mateAnswerOwner": "P3",
}


class TestParseEvent:
    def test_add(self):
        event = parse_event({"TYPE": "ADD", "MOUSE": MOUSE})
        assert isinstance(event, Arrival)
        assert event.mouse.id == 4
        assert event.mouse.sex is Sex.MALE

    def test_start_game(self):
        assert isinstance(parse_event({"TYPE": "START_GAME"}), SimulationStart)

    def test_fight_with_opponent(self):
        event = parse_event({"TYPE": "FIGHT", "ID": 1, "RESULT": "WIN", "OPT_OPPONENT": 2})
        assert event == FightOutcome(1, FightResult.WIN, 2)

    def test_fight_without_opponent(self):
        event = parse_event({"TYPE": "FIGHT", "ID": 1, "RESULT": "NONE"})
        assert event.opponent_id is None
        assert not event.result.needs_opponent

    def test_mate_success_parses_offspring(self):
        event = parse_event(
            {"TYPE": "MATE", "ID": 1, "RESULT": "SUCCESS", "OPT_PARTNER": 2, "OPT_OFFSPRING": MOUSE}
        )
        assert isinstance(event, MateOutcome)
        assert event.result is MateResult.SUCCESS
        assert event.partner_id == 2
        assert event.offspring.id == 4

    @pytest.mark.parametrize(
        "record, expected",
        [
            ({"TYPE": "RETIRE", "ID": 3}, Retirement(3)),
            ({"TYPE": "OVERPOPULATION", "ID": 3}, OverpopulationCull(3)),
            (
                {"TYPE": "EXPLODE", "ID": 3, "SOURCE": "pickFight", "CAUSE": "TypeError"},
                AbnormalTermination(3, TerminationKind.EXPLODE, "pickFight", "TypeError"),
            ),
            (
                {"TYPE": "SPIN", "ID": 3, "SOURCE": "chooseMate"},
                AbnormalTermination(3, TerminationKind.SPIN, "chooseMate"),
            ),
        ],
    )
    def test_removal_events(self, record, expected):
        assert parse_event(record) == expected

    def test_abnormal_termination_kind_follows_tag(self):
        event = parse_event({"TYPE": "SPIN", "ID": 3, "SOURCE": "mateAnswer"})
        assert event.kind == "SPIN"

    def test_end_game(self):
        event = parse_event(
            {
                "TYPE": "END_GAME",
                "CAUSE": "ONE_LEFT",
                "PICK_FIGHT_WINNER": "P1",
                "CHOOSE_MATE_WINNER": "P2",
                "MATE_ANSWER_WINNER": None,
            }
        )
        assert event == SimulationEnd("ONE_LEFT", "P1", "P2", None)

    def test_typed_event_passes_through(self):
        event = Retirement(9)
        assert parse_event(event) is event


class TestParseErrors:
    def test_unknown_type(self):
        with pytest.raises(UnrecognizedEventKindError, match="Unknown event type"):
            parse_event({"TYPE": "DANCE", "ID": 1})

    def test_unknown_result(self):
        with pytest.raises(UnrecognizedEventKindError, match="result"):
            parse_event({"TYPE": "FIGHT", "ID": 1, "RESULT": "SURRENDER"})

    def test_missing_field(self):
        with pytest.raises(UnrecognizedEventKindError, match="missing"):
            parse_event({"TYPE": "RETIRE"})

    def test_malformed_mouse(self):
        with pytest.raises(UnrecognizedEventKindError):
            parse_event({"TYPE": "ADD", "MOUSE": dict(MOUSE, sex="Robot")})

    def test_non_mapping(self):
        with pytest.raises(UnrecognizedEventKindError):
            parse_event("FIGHT")

"""Tests for mouse names and event narration."""

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
)
from cageviz.core.mouse import Sex
from cageviz.narrative import describe, mouse_name, romanize


class TestRomanize:
    @pytest.mark.parametrize(
        "value, expected",
        [(1, "I"), (4, "IV"), (9, "IX"), (14, "XIV"), (40, "XL"), (1994, "MCMXCIV"), (3999, "MMMCMXCIX")],
    )
    def test_values(self, value, expected):
        assert romanize(value) == expected

    @pytest.mark.parametrize("value", [0, -3, 4000])
    def test_out_of_range_stays_arabic(self, value):
        assert romanize(value) == str(value)


class TestMouseName:
    def test_male_name(self, participants, make_mouse):
        assert mouse_name(make_mouse(1, Sex.MALE), participants) == "Chris"

    def test_female_name(self, participants, make_mouse):
        assert mouse_name(make_mouse(0, Sex.FEMALE), participants) == "Monica"

    def test_hermaphrodite_by_parity(self, participants, make_mouse):
        assert mouse_name(make_mouse(2, Sex.HERMAPHRODITE), participants) == "Zena"
        assert mouse_name(make_mouse(3, Sex.HERMAPHRODITE), participants) == "Camden"

    @pytest.mark.parametrize(
        "mouse_id, expected",
        [(0, "Monica"), (1, "Chris"), (4, "Katie"), (7, "Zeke"), (26, "Zena III")],
    )
    def test_hermaphrodite_parity_beyond_small_ids(self, participants, make_mouse, mouse_id, expected):
        assert mouse_name(make_mouse(mouse_id, Sex.HERMAPHRODITE), participants) == expected

    def test_ordinal_suffix(self, participants, make_mouse):
        assert mouse_name(make_mouse(13, Sex.MALE), participants) == "Chris II"
        assert mouse_name(make_mouse(12 * 4 + 4, Sex.FEMALE), participants) == "Katie V"

    def test_genes_and_stats(self, participants, make_mouse):
        mouse = make_mouse(
            1, Sex.MALE, pick_fight_owner="P1", choose_mate_owner="P2", mate_answer_owner="P3", size=7
        )
        name = mouse_name(mouse, participants, show_stats=True, show_genes=True)
        assert name == "Chris (Male Bob/Carol/Alice) [id:1/size:7/sex: Male]"

    def test_unknown_label_raises(self, participants, make_mouse):
        with pytest.raises(KeyError):
            mouse_name(make_mouse(1, owner="P9"), participants, show_genes=True)


class TestDescribe:
    @pytest.fixture
    def cage(self, registry, make_mouse):
        registry.add(make_mouse(1, Sex.MALE, "P1"))
        registry.add(make_mouse(2, Sex.FEMALE, "P2"))
        return registry

    @pytest.mark.parametrize(
        "event, fragment",
        [
            (FightOutcome(1, FightResult.NONE), "Chris elected to never fight again."),
            (FightOutcome(1, FightResult.INVALID), "confused and wont fight"),
            (FightOutcome(1, FightResult.SELF), "put it out of its misery"),
            (FightOutcome(1, FightResult.WIN, 2), "Chris fights and kills Zena."),
            (FightOutcome(1, FightResult.TIE, 2), "Chris fights Zena to a draw."),
            (FightOutcome(1, FightResult.LOSS, 2), "Chris fights and is killed by Zena."),
            (MateOutcome(1, MateResult.NONE), "never mate again"),
            (MateOutcome(1, MateResult.INVALID), "confused wont mate"),
            (MateOutcome(1, MateResult.SELF), "mate with itself"),
            (MateOutcome(1, MateResult.INCOMPATIBLE, 2), "another Male"),
            (MateOutcome(1, MateResult.INFERTILE, 2), "because Zena is sterile"),
            (MateOutcome(1, MateResult.MATE_EXPLODED, 2), "Zena exploded after Chris asked it out."),
            (MateOutcome(1, MateResult.REJECTION, 2), "The answer is NO!"),
            (Retirement(1), "Chris dies after a productive life."),
            (OverpopulationCull(2), "too cramped Zena"),
            (AbnormalTermination(1, TerminationKind.EXPLODE, "pickFight", "boom"), "exploded in pickFight because boom"),
            (AbnormalTermination(1, TerminationKind.SPIN, "chooseMate"), "spun in circles after chooseMate"),
            (SimulationStart(), "Game started with 2 mice."),
            (SimulationEnd("ONE_LEFT", "P1", "P2", "P3"), "PickFight Winner: P1"),
        ],
    )
    def test_lines(self, cage, participants, event, fragment):
        assert fragment in describe(event, cage, participants)

    def test_arrival_and_birth_show_genes(self, cage, participants, make_mouse):
        newcomer = make_mouse(3, Sex.HERMAPHRODITE, "P3")
        assert describe(Arrival(newcomer), cage, participants).endswith("added to game.")

        line = describe(MateOutcome(1, MateResult.SUCCESS, 2, newcomer), cage, participants)
        assert "The answer is YES!" in line
        assert "(Hermaphrodite Carol/Carol/Carol)" in line
        assert line.endswith("was born!")

    def test_dead_mouse_raises(self, cage, participants):
        with pytest.raises(KeyError):
            describe(Retirement(42), cage, participants)

"""Tests for EntityRegistry count bookkeeping."""

import random

import pytest

from cageviz.core.mouse import Behavior, Sex
from cageviz.core.registry import EntityRegistry
from cageviz.errors import (
    DuplicateEntityError,
    RegistryInconsistencyError,
    UnknownEntityError,
    UnknownParticipantError,
)


class TestAdd:
    def test_add_counts_sex_and_owners(self, registry, make_mouse):
        registry.add(make_mouse(1, Sex.FEMALE, "P2"))

        snap = registry.snapshot()
        assert snap.sexes == {Sex.HERMAPHRODITE: 0, Sex.MALE: 0, Sex.FEMALE: 1}
        for behavior in Behavior:
            assert snap.owner_counts(behavior) == {"P1": 0, "P2": 1, "P3": 0}
        assert 1 in registry
        assert len(registry) == 1

    def test_mixed_owners_counted_per_behavior(self, registry, make_mouse):
        registry.add(make_mouse(1, pick_fight_owner="P1", choose_mate_owner="P2", mate_answer_owner="P3"))

        snap = registry.snapshot()
        assert snap.owner_counts(Behavior.PICK_FIGHT)["P1"] == 1
        assert snap.owner_counts(Behavior.CHOOSE_MATE)["P2"] == 1
        assert snap.owner_counts(Behavior.MATE_ANSWER)["P3"] == 1
        assert snap.owner_counts(Behavior.PICK_FIGHT)["P2"] == 0

    def test_duplicate_id_rejected_without_mutation(self, registry, make_mouse):
        registry.add(make_mouse(1, Sex.MALE))
        before = registry.snapshot()

        with pytest.raises(DuplicateEntityError):
            registry.add(make_mouse(1, Sex.FEMALE, "P2"))

        assert registry.snapshot() == before
        assert registry.get(1).sex is Sex.MALE

    def test_unknown_owner_rejected_without_mutation(self, registry, make_mouse):
        with pytest.raises(UnknownParticipantError):
            registry.add(make_mouse(1, mate_answer_owner="P9"))
        assert len(registry) == 0
        assert registry.snapshot().population == 0


class TestRemove:
    def test_remove_uncounts(self, registry, make_mouse):
        registry.add(make_mouse(1, Sex.MALE, "P1"))
        registry.add(make_mouse(2, Sex.FEMALE, "P2"))

        removed = registry.remove(2)

        assert removed.id == 2
        assert 2 not in registry
        snap = registry.snapshot()
        assert snap.sexes[Sex.FEMALE] == 0
        assert snap.owner_counts(Behavior.PICK_FIGHT) == {"P1": 1, "P2": 0, "P3": 0}

    def test_remove_unknown_raises(self, registry):
        with pytest.raises(UnknownEntityError):
            registry.remove(42)

    def test_double_remove_raises(self, registry, make_mouse):
        registry.add(make_mouse(1))
        registry.remove(1)
        with pytest.raises(UnknownEntityError):
            registry.remove(1)
        assert registry.snapshot().sexes[Sex.MALE] == 0

    def test_unknown_entity_is_key_error(self, registry):
        with pytest.raises(KeyError):
            registry.get(7)


class TestSnapshot:
    def test_snapshot_not_live(self, registry, make_mouse):
        registry.add(make_mouse(1, Sex.MALE))
        snap = registry.snapshot()
        registry.add(make_mouse(2, Sex.MALE))

        assert snap.sexes[Sex.MALE] == 1
        assert registry.snapshot().sexes[Sex.MALE] == 2

    def test_snapshot_is_read_only(self, registry):
        snap = registry.snapshot()
        with pytest.raises(TypeError):
            snap.sexes[Sex.MALE] = 5
        with pytest.raises(TypeError):
            snap.owners[Behavior.PICK_FIGHT]["P1"] = 5


class TestReset:
    def test_reset_clears_everything(self, registry, make_mouse):
        registry.add(make_mouse(1))
        registry.reset()
        assert len(registry) == 0
        assert registry.snapshot().population == 0
        assert registry.participant_order == ("P1", "P2", "P3")

    def test_reset_with_new_participants(self, registry, make_mouse):
        registry.reset(["X", "Y"])
        assert registry.snapshot().owner_counts(Behavior.CHOOSE_MATE) == {"X": 0, "Y": 0}
        with pytest.raises(UnknownParticipantError):
            registry.add(make_mouse(1, owner="P1"))


class TestCountConsistency:
    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_counts_match_recount_after_every_operation(self, seed, make_mouse):
        rng = random.Random(seed)
        owners = ["P1", "P2", "P3"]
        registry = EntityRegistry(owners)
        next_id = 0

        for _ in range(300):
            if registry.mice and rng.random() < 0.45:
                registry.remove(rng.choice(list(registry.mice)))
            else:
                registry.add(
                    make_mouse(
                        next_id,
                        rng.choice(list(Sex)),
                        pick_fight_owner=rng.choice(owners),
                        choose_mate_owner=rng.choice(owners),
                        mate_answer_owner=rng.choice(owners),
                    )
                )
                next_id += 1

            registry.verify()
            snap = registry.snapshot()
            for sex in Sex:
                expected = sum(1 for m in registry.mice.values() if m.sex is sex)
                assert snap.sexes[sex] == expected
            for behavior in Behavior:
                for owner in owners:
                    expected = sum(1 for m in registry.mice.values() if m.owner(behavior) == owner)
                    assert snap.owner_counts(behavior)[owner] == expected

    def test_verify_detects_corruption(self, registry, make_mouse):
        registry.add(make_mouse(1))
        registry._sexes[Sex.MALE] = 3
        with pytest.raises(RegistryInconsistencyError):
            registry.verify()

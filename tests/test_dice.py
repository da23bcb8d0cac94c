"""
Tests for the dice roll and the rolling-mode randomizer.
"""

import pytest

from yorinde_core.config_loader import load_config
from yorinde_core.dice import DiceRoll, DiceRoller


@pytest.fixture
def config():
    return load_config()


class TestDiceRoll:
    """Test slot filling."""

    def test_fills_left_to_right(self, config):
        roll = DiceRoll(config)
        roll.add(3)
        roll.add(6)
        assert roll.slots == [3, 6, None, None, None]
        assert roll.count == 2
        assert roll.total == 9

    def test_sixth_die_rejected(self, config):
        roll = DiceRoll(config)
        for v in (1, 2, 3, 4, 5):
            assert roll.add(v)
        assert roll.is_full
        assert not roll.add(6)
        assert roll.slots == [1, 2, 3, 4, 5]

    @pytest.mark.parametrize("value", [0, 7, -1])
    def test_invalid_face(self, config, value):
        roll = DiceRoll(config)
        with pytest.raises(ValueError):
            roll.add(value)

    def test_reset_and_restore(self, config):
        roll = DiceRoll(config)
        roll.add(2)
        snapshot = roll.slots
        roll.reset()
        assert roll.is_empty
        roll.restore(snapshot)
        assert roll.slots == [2, None, None, None, None]

    def test_bool_is_not_a_face(self, config):
        roll = DiceRoll(config)
        with pytest.raises(ValueError):
            roll.add(True)
        assert roll.is_empty

    def test_restore_wrong_length(self, config):
        roll = DiceRoll(config)
        with pytest.raises(ValueError):
            roll.restore([1, 2])

    @pytest.mark.parametrize("slots", [
        [None, 3, None, None, None],
        [1, 2, None, 4, None],
        [0, None, None, None, None],
        [True, None, None, None, None],
    ])
    def test_restore_rejects_invalid_snapshot(self, config, slots):
        roll = DiceRoll(config)
        roll.add(6)
        with pytest.raises(ValueError):
            roll.restore(slots)
        assert roll.slots == [6, None, None, None, None]


class TestDiceRoller:
    """Test seeded randomizer."""

    def test_deterministic_with_seed(self, config):
        """Same seed should produce same sequence."""
        r1 = DiceRoller(config, seed=42)
        r2 = DiceRoller(config, seed=42)
        assert r1.roll(50) == r2.roll(50)

    def test_values_in_range(self, config):
        roller = DiceRoller(config, seed=7)
        for value in roller.roll(500):
            assert 1 <= value <= 6

    def test_all_faces_appear(self, config):
        roller = DiceRoller(config, seed=1)
        assert set(roller.roll(600)) == {1, 2, 3, 4, 5, 6}

    def test_reset_restores_sequence(self, config):
        roller = DiceRoller(config, seed=3)
        first = roller.roll(10)
        roller.reset(seed=3)
        assert roller.roll(10) == first

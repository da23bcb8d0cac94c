"""
Tests for the score engine: dice intake, scoring, undo and game flow.
"""

from dataclasses import replace
from datetime import datetime

import pytest

from yorinde_core.config_loader import load_config
from yorinde_core.categories import (
    CHANCE,
    FIVE_OF_A_KIND,
    FULL_HOUSE,
    LARGE_STREET,
    THREE_OF_A_KIND,
)
from yorinde_core.dice import DiceRoller
from yorinde_core.engine import ScoreEngine
from yorinde_core.labels import get_label


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def engine(config):
    return ScoreEngine(config)


def enter(engine, dice):
    for value in dice:
        engine.add_rolled_dice(value)


def fill_board(engine, skip=()):
    """Score every category except `skip` with a roll of five sixes."""
    for index in range(13):
        if index in skip:
            continue
        enter(engine, [6, 6, 6, 6, 6])
        engine.set_points(index)


class TestDiceIntake:
    """Test add_rolled_dice and derived roll values."""

    def test_count_and_sum(self, engine):
        enter(engine, [2, 2, 2, 5])
        assert engine.rolled_dice_count == 4
        assert engine.rolled_dice_sum == 11
        assert engine.rolled_dice == [2, 2, 2, 5, None]
        assert engine.rolled_dice_counter.tolist() == [0, 3, 0, 0, 1, 0]

    def test_sixth_die_warns(self, engine):
        enter(engine, [1, 2, 3, 4, 5])
        assert not engine.add_rolled_dice(6)
        assert engine.rolled_dice == [1, 2, 3, 4, 5]
        assert engine.rolled_dice_count == 5
        assert engine.current_error == get_label("de", "alreadyFiveDices")
        assert engine.current_error_is_only_warning

    def test_roll_fills_free_slots(self, engine, config):
        engine.add_rolled_dice(4)
        rolled = engine.roll(DiceRoller(config, seed=42))
        assert len(rolled) == 4
        assert engine.rolled_dice_count == 5
        assert engine.rolled_dice[0] == 4
        assert engine.rolled_dice[1:] == rolled

    def test_roll_on_full_roll_is_noop(self, engine, config):
        enter(engine, [1, 1, 1, 1, 1])
        assert engine.roll(DiceRoller(config, seed=1)) == []
        assert engine.rolled_dice == [1, 1, 1, 1, 1]

    def test_longest_run(self, engine):
        enter(engine, [6, 4, 5, 3, 1])
        assert engine.longest_run() == 4


class TestSetPoints:
    """Test the scoring action."""

    def test_reward_when_satisfied(self, engine):
        enter(engine, [2, 2, 2, 5, 5])
        result = engine.set_points(FULL_HOUSE)
        assert result.accepted
        assert result.points == 25
        assert engine.points[FULL_HOUSE] == 25

    def test_zero_when_not_satisfied(self, engine):
        enter(engine, [2, 2, 2, 5, 5])
        result = engine.set_points(FIVE_OF_A_KIND)
        assert result.points == 0
        assert engine.points[FIVE_OF_A_KIND] == 0

    def test_roll_cleared_and_undo_pushed(self, engine):
        """Both outcomes clear the roll and push exactly one undo entry."""
        enter(engine, [1, 2, 3, 4, 5])
        engine.set_points(LARGE_STREET)
        assert engine.rolled_dice == [None] * 5
        assert len(engine.undo_stack) == 1
        assert engine.undo_stack[0].category_index == LARGE_STREET
        assert engine.undo_stack[0].dice == (1, 2, 3, 4, 5)

        enter(engine, [1, 1, 2, 3, 6])
        engine.set_points(FIVE_OF_A_KIND)
        assert engine.rolled_dice == [None] * 5
        assert len(engine.undo_stack) == 2

    def test_already_checked(self, engine):
        enter(engine, [3, 3, 3, 1, 1])
        engine.set_points(THREE_OF_A_KIND)
        enter(engine, [6, 6, 6, 6, 6])
        before = list(engine.points)

        result = engine.set_points(THREE_OF_A_KIND)

        assert not result.accepted
        assert engine.points == before
        assert engine.rolled_dice == [6, 6, 6, 6, 6]
        assert len(engine.undo_stack) == 1
        assert engine.current_error == get_label("de", "alreadyChecked")
        assert engine.current_error_is_only_warning

    def test_invalid_category(self, engine):
        with pytest.raises(IndexError):
            engine.set_points(13)

    def test_preview_does_not_mutate(self, engine):
        enter(engine, [2, 2, 2, 5, 5])
        assert engine.preview_points(THREE_OF_A_KIND) == 16
        assert engine.points[THREE_OF_A_KIND] is None
        assert engine.rolled_dice_count == 5


class TestFinishing:
    """Test game completion and high-score insertion."""

    def test_finishing_stores_highscore(self, engine):
        fill_board(engine, skip=(CHANCE,))
        assert not engine.is_finished

        enter(engine, [6, 6, 6, 6, 6])
        result = engine.set_points(CHANCE, timestamp=datetime(2024, 1, 1))

        assert engine.is_finished
        assert result.finished
        assert result.highscore_rank == 0
        assert len(engine.highscores) == 1
        entry = engine.highscores[0]
        assert entry.points == engine.calc_points().as_tuple()
        assert entry.timestamp == datetime(2024, 1, 1)
        assert engine.current_error == get_label("de", "finished") + " HighScore! (1)"
        assert not engine.current_error_is_only_warning

    def test_finished_without_highscore(self, config):
        small = replace(config, highscore=replace(config.highscore, max_entries=1))
        engine = ScoreEngine(small)
        engine.highscores.insert((1000, 0, 0))

        fill_board(engine)

        assert engine.is_finished
        assert engine.current_error == get_label("de", "finished")
        assert engine.highscores.totals == [1000]

    def test_calc_points_of_full_board(self, engine):
        fill_board(engine)
        # sixes only score in the sixes slot (30); 3k/4k/chance 30 each, 5k 50
        assert engine.calc_points().as_tuple() == (30, 0, 140)
        assert engine.summarize_points() == "30 + 140 = 170"


class TestUndo:
    """Test undo in rolling and manual mode."""

    def test_rolling_mode_restores_dice(self, engine):
        enter(engine, [2, 2, 2, 5, 5])
        engine.set_points(FULL_HOUSE)

        assert engine.undo()

        assert engine.points[FULL_HOUSE] is None
        assert engine.rolled_dice == [2, 2, 2, 5, 5]
        assert engine.undo_stack == []

    def test_manual_mode_keeps_current_roll(self, engine):
        engine.rolling_mode = False
        enter(engine, [2, 2, 2, 5, 5])
        engine.set_points(FULL_HOUSE)
        enter(engine, [1, 3])

        assert engine.undo()

        assert engine.points[FULL_HOUSE] is None
        assert engine.rolled_dice == [1, 3, None, None, None]

    def test_empty_stack_is_noop(self, engine):
        enter(engine, [4])
        assert not engine.undo()
        assert engine.rolled_dice == [4, None, None, None, None]
        assert engine.points == [None] * 13

    def test_undo_is_last_in_first_out(self, engine):
        enter(engine, [1, 1, 1, 1, 1])
        engine.set_points(0)
        enter(engine, [2, 2, 2, 2, 2])
        engine.set_points(1)

        engine.undo()
        assert engine.points[:2] == [5, None]
        assert engine.rolled_dice == [2, 2, 2, 2, 2]


class TestSession:
    """Test new game, error channel and locale."""

    def test_new_game_keeps_highscores(self, engine):
        fill_board(engine)
        highscores = engine.highscores.entries
        engine.rolling_mode = False
        engine.add_rolled_dice(3)

        engine.new_game()

        assert engine.points == [None] * 13
        assert engine.rolled_dice == [None] * 5
        assert engine.undo_stack == []
        assert engine.current_error is None
        assert engine.highscores.entries == highscores
        assert engine.rolling_mode is False

    def test_error_channel_overwrites(self, engine):
        engine.set_error("first", True)
        engine.set_error("second")
        assert engine.current_error == "second"
        assert not engine.current_error_is_only_warning
        engine.unset_error()
        assert engine.current_error is None

    def test_toggle_locale(self, engine):
        assert engine.current_locale == "de"
        assert engine.toggle_locale() == "en"
        assert engine.toggle_locale() == "de"

    def test_messages_follow_locale(self, engine):
        engine.toggle_locale()
        enter(engine, [1, 2, 3, 4, 5])
        engine.add_rolled_dice(6)
        assert engine.current_error == get_label("en", "alreadyFiveDices")

    def test_get_info(self, engine):
        enter(engine, [2, 2, 2, 5, 5])
        engine.set_points(FULL_HOUSE)
        engine.add_rolled_dice(4)
        info = engine.get_info()
        assert info["dice"] == [4, None, None, None, None]
        assert info["points"][FULL_HOUSE] == 25
        assert info["total"] == 25
        assert info["points_to_bonus"] == 63
        assert info["undo_depth"] == 1
        assert info["is_finished"] is False

    def test_points_to_bonus(self, engine):
        enter(engine, [6, 6, 6, 6, 1])
        engine.set_points(5)
        assert engine.points_to_bonus() == 63 - 24

"""
Score Engine
============

Main score board state combining dice, categories, scoring and high scores.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from yorinde_core.config_loader import GameConfig, get_config
from yorinde_core.categories import CategoryTable, longest_run
from yorinde_core.dice import DiceRoll, DiceRoller
from yorinde_core.highscore import HighScoreBoard
from yorinde_core.labels import get_label
from yorinde_core.scoring import ScoreCalculator, ScoreSummary


@dataclass(frozen=True)
class UndoEntry:
    """A scoring action that can be taken back."""
    category_index: int
    dice: Tuple[Optional[int], ...]


@dataclass
class ScoreResult:
    """Result of a single scoring action."""
    category_index: int
    accepted: bool
    points: Optional[int]
    finished: bool = False
    highscore_rank: Optional[int] = None  # 0-based; None if not on the board


class ScoreEngine:
    """
    Score board for one player session.

    Holds:
    - The roll in progress
    - The 13 category slots
    - The undo stack
    - The high-score board
    - Session flags (locale, rolling mode, display options, player name)
    - The current error/warning message

    The engine is owned by the caller; persistence and UI work on it directly.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize engine.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config

        # Subsystems
        self._categories = CategoryTable(config)
        self._calculator = ScoreCalculator(config)
        self.dice = DiceRoll(config)
        self.highscores = HighScoreBoard(config)

        # Game state
        self.points: List[Optional[int]] = [None] * config.num_categories
        self.undo_stack: List[UndoEntry] = []

        # Session flags
        self.current_error: Optional[str] = None
        self.current_error_is_only_warning: bool = False
        self.current_locale: str = config.locale.default
        self.rolling_mode: bool = True
        self.controls_switched: bool = True
        self.extra_points_left_mode: bool = False
        self.player_name: str = "Player"

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def rolled_dice(self) -> List[Optional[int]]:
        """Current roll slots."""
        return self.dice.slots

    @property
    def rolled_dice_counter(self) -> np.ndarray:
        """Face-count array of the current roll."""
        return self.dice.counter

    @property
    def rolled_dice_count(self) -> int:
        """Number of dice entered for the current roll."""
        return self.dice.count

    @property
    def rolled_dice_sum(self) -> int:
        """Pip sum of the current roll."""
        return self.dice.total

    @property
    def is_finished(self) -> bool:
        """True once every category is set."""
        return all(p is not None for p in self.points)

    def longest_run(self) -> int:
        """Longest run of consecutive faces in the current roll."""
        return longest_run(self.rolled_dice_counter)

    def _label(self, key: str) -> str:
        return get_label(self.current_locale, key, self._config)

    # Dice intake

    def add_rolled_dice(self, value: int) -> bool:
        """
        Enter a die value into the next free slot.

        Sets the "already five dice" warning if the roll is complete.

        Args:
            value: Face value in [1, 6].

        Returns:
            True if the value was added.
        """
        if not self.dice.add(value):
            self.set_error(self._label("alreadyFiveDices"), True)
            return False
        return True

    def reset_rolled_dice(self) -> None:
        """Clear the current roll."""
        self.dice.reset()

    def roll(self, roller: DiceRoller) -> List[int]:
        """
        Fill every free slot from a randomizer (rolling mode).

        Args:
            roller: Source of face values.

        Returns:
            The values that were rolled.
        """
        rolled = roller.roll(len(self.dice) - self.dice.count)
        for value in rolled:
            self.dice.add(value)
        return rolled

    # Scoring

    def preview_points(self, category_index: int) -> int:
        """Points `set_points` would store for the current roll, without scoring."""
        return self._categories.points_for(
            category_index, self.rolled_dice_counter, self.rolled_dice_sum
        )

    def set_points(
        self,
        category_index: int,
        timestamp: Optional[datetime] = None
    ) -> ScoreResult:
        """
        Score the current roll in a category.

        A category that is already set is left alone and the "already checked"
        warning is raised. Otherwise the category gets its reward, or 0 if the
        roll does not satisfy it; the roll is pushed onto the undo stack and
        cleared. Finishing the board stores the game in the high scores.

        Args:
            category_index: Index of the category in [0, 13).
            timestamp: Finish time recorded for a high score. Defaults to now.

        Returns:
            ScoreResult describing the action.

        Raises:
            IndexError: If category_index is out of range.
        """
        category = self._categories[category_index]

        if self.points[category_index] is not None:
            self.set_error(self._label("alreadyChecked"), True)
            return ScoreResult(category_index=category_index, accepted=False, points=None)

        points = category.evaluate(self.rolled_dice_counter, self.rolled_dice_sum)
        self.points[category_index] = points

        self.undo_stack.append(UndoEntry(category_index, tuple(self.dice.slots)))
        self.reset_rolled_dice()

        result = ScoreResult(category_index=category_index, accepted=True, points=points)

        if self.is_finished:
            rank = self.store_highscore(timestamp)
            message = self._label("finished")
            if rank is not None:
                message += f" HighScore! ({rank + 1})"
            self.set_error(message)
            result.finished = True
            result.highscore_rank = rank

        return result

    def store_highscore(self, timestamp: Optional[datetime] = None) -> Optional[int]:
        """
        Put the current board on the high-score list if it qualifies.

        Returns:
            0-based rank, or None if the score did not make the list.
        """
        return self.highscores.insert(self.calc_points().as_tuple(), timestamp)

    def calc_points(self) -> ScoreSummary:
        """Face points, bonus and combination points of the board."""
        return self._calculator.calc_points(self.points)

    def summarize_points(self) -> str:
        """Display string, e.g. "70 + 35 + 120 = 225"."""
        return str(self.calc_points())

    def points_to_bonus(self) -> int:
        """Face points still missing for the bonus."""
        return self._calculator.points_to_bonus(self.points)

    # Game flow

    def undo(self) -> bool:
        """
        Take back the last scoring action.

        In rolling mode the dice of that action come back as well; in manual
        mode the current roll is kept.

        Returns:
            False if there was nothing to undo.
        """
        if not self.undo_stack:
            return False

        entry = self.undo_stack.pop()
        self.points[entry.category_index] = None
        if self.rolling_mode:
            self.dice.restore(entry.dice)
        return True

    def new_game(self) -> None:
        """Clear the board, roll, message and undo stack. High scores stay."""
        for i in range(len(self.points)):
            self.points[i] = None
        self.reset_rolled_dice()
        self.unset_error()
        self.undo_stack.clear()

    # Messages and session

    def set_error(self, message: str, is_warning: bool = False) -> None:
        self.current_error = message
        self.current_error_is_only_warning = is_warning

    def unset_error(self) -> None:
        self.current_error = None

    def toggle_locale(self) -> str:
        """Switch to the other supported locale and return it."""
        first, second = self._config.locale.supported
        self.current_locale = second if self.current_locale == first else first
        return self.current_locale

    def get_info(self) -> Dict[str, Any]:
        """Summary of the session for display."""
        summary = self.calc_points()
        return {
            "player_name": self.player_name,
            "dice": self.rolled_dice,
            "points": list(self.points),
            "face_points": summary.face_points,
            "bonus": summary.bonus,
            "combination_points": summary.combination_points,
            "total": summary.total,
            "points_to_bonus": self.points_to_bonus(),
            "is_finished": self.is_finished,
            "undo_depth": len(self.undo_stack),
            "locale": self.current_locale,
            "rolling_mode": self.rolling_mode,
            "message": self.current_error,
        }

"""
Yorinde Core - Score board for a Yatzy-style dice game.

This module provides the scoring engine and all supporting systems
(dice, category table, scoring, high scores, persistence).

Main exports:
- ScoreEngine: The score board state and all operations on it
- DiceRoller: Seeded randomizer for rolling mode
- CategoryTable: The 13 scoring categories
- HighScoreBoard: Capped, sorted leaderboard
- GameConfig: Configuration loaded from game_config.yaml
"""

from yorinde_core.config_loader import GameConfig, load_config
from yorinde_core.categories import Category, CategoryTable, face_counts, longest_run
from yorinde_core.dice import DiceRoll, DiceRoller
from yorinde_core.scoring import ScoreCalculator, ScoreSummary
from yorinde_core.highscore import HighScoreBoard, HighScoreEntry
from yorinde_core.labels import get_label, category_name
from yorinde_core.engine import ScoreEngine, ScoreResult, UndoEntry
from yorinde_core.persistence import (
    engine_to_dict,
    engine_from_dict,
    save_state,
    load_state,
)

__all__ = [
    "GameConfig",
    "load_config",
    "Category",
    "CategoryTable",
    "face_counts",
    "longest_run",
    "DiceRoll",
    "DiceRoller",
    "ScoreCalculator",
    "ScoreSummary",
    "HighScoreBoard",
    "HighScoreEntry",
    "get_label",
    "category_name",
    "ScoreEngine",
    "ScoreResult",
    "UndoEntry",
    "engine_to_dict",
    "engine_from_dict",
    "save_state",
    "load_state",
]

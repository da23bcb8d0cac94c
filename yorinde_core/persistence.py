"""
Persistence
===========

Serializes the full engine state to plain data and JSON files so a session
can be continued later.

Usage:
    from yorinde_core import ScoreEngine, save_state, load_state

    engine = load_state("yorinde_state.json")
    engine.add_rolled_dice(6)
    ...
    save_state(engine, "yorinde_state.json")
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from yorinde_core.config_loader import GameConfig, get_config
from yorinde_core.engine import ScoreEngine, UndoEntry
from yorinde_core.highscore import HighScoreBoard, HighScoreEntry


STATE_VERSION = 1


def engine_to_dict(engine: ScoreEngine) -> Dict[str, Any]:
    """
    Get the engine state as a JSON-compatible dictionary.

    Args:
        engine: The engine to serialize.

    Returns:
        Dictionary containing the roll, board, undo stack, high scores and
        session flags.
    """
    return {
        "version": STATE_VERSION,
        "rolled_dice": engine.rolled_dice,
        "points": list(engine.points),
        "undo_stack": [
            [entry.category_index, list(entry.dice)]
            for entry in engine.undo_stack
        ],
        "highscore": [
            [entry.timestamp.isoformat(), list(entry.points)]
            for entry in engine.highscores
        ],
        "current_error": engine.current_error,
        "current_error_is_only_warning": engine.current_error_is_only_warning,
        "current_locale": engine.current_locale,
        "rolling_mode": engine.rolling_mode,
        "controls_switched": engine.controls_switched,
        "extra_points_left_mode": engine.extra_points_left_mode,
        "player_name": engine.player_name,
    }


def _parse_slot(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)


def engine_from_dict(
    data: Dict[str, Any],
    config: Optional[GameConfig] = None
) -> ScoreEngine:
    """
    Rebuild an engine from `engine_to_dict` output.

    High scores are kept in the stored order; the next insertion sorts and
    caps them.

    Args:
        data: Serialized state.
        config: Game configuration. Uses default if None.

    Returns:
        Restored ScoreEngine.

    Raises:
        ValueError: If the data is malformed.
    """
    if config is None:
        config = get_config()

    engine = ScoreEngine(config)

    try:
        points = [_parse_slot(p) for p in data.get("points", engine.points)]
        if len(points) != config.num_categories:
            raise ValueError(
                f"Expected {config.num_categories} category slots, got {len(points)}"
            )
        for p in points:
            if p is not None and p < 0:
                raise ValueError(f"Category points must be non-negative, got {p}")
        engine.points = points

        engine.dice.restore(data.get("rolled_dice", engine.rolled_dice))

        engine.undo_stack = [
            UndoEntry(int(index), tuple(engine.dice.validate_slots(dice)))
            for index, dice in data.get("undo_stack", [])
        ]

        engine.highscores = HighScoreBoard(config, [
            HighScoreEntry(
                timestamp=datetime.fromisoformat(timestamp),
                points=tuple(int(p) for p in points)
            )
            for timestamp, points in data.get("highscore", [])
        ])

        engine.current_error = data.get("current_error")
        engine.current_error_is_only_warning = bool(data.get("current_error_is_only_warning", False))
        engine.current_locale = str(data.get("current_locale", config.locale.default))
        engine.rolling_mode = bool(data.get("rolling_mode", True))
        engine.controls_switched = bool(data.get("controls_switched", True))
        engine.extra_points_left_mode = bool(data.get("extra_points_left_mode", False))
        engine.player_name = str(data.get("player_name", "Player"))
    except (TypeError, KeyError) as e:
        raise ValueError(f"Malformed engine state: {e}") from e

    if engine.current_locale not in config.locale.supported:
        raise ValueError(f"Unsupported locale in state: {engine.current_locale}")

    for entry in engine.undo_stack:
        if not 0 <= entry.category_index < config.num_categories:
            raise ValueError(f"Invalid category index in undo stack: {entry.category_index}")

    return engine


def save_state(engine: ScoreEngine, path: Union[str, Path]) -> Path:
    """
    Save the engine state to a JSON file.

    Args:
        engine: The engine to save.
        path: Destination file. Parent directories are created.

    Returns:
        Path where the state was saved.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(engine_to_dict(engine), f, indent=2, ensure_ascii=False)

    print(f"State saved: {path}")
    return path


def load_state(
    path: Union[str, Path],
    config: Optional[GameConfig] = None
) -> ScoreEngine:
    """
    Load an engine from a JSON file.

    A missing file starts a fresh session.

    Args:
        path: State file.
        config: Game configuration. Uses default if None.

    Returns:
        The restored (or new) ScoreEngine.

    Raises:
        ValueError: If the file is not valid state JSON.
    """
    path = Path(path)
    if not path.exists():
        return ScoreEngine(config)

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"State file is not valid JSON: {path}") from e

    if not isinstance(data, dict):
        raise ValueError(f"State file must contain an object: {path}")

    print(f"State loaded: {path}")
    return engine_from_dict(data, config)

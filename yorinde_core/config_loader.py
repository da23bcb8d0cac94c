"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml


# Number of scoring categories on the board (6 face + 7 combination)
NUM_CATEGORIES = 13

# Label keys every locale must provide
REQUIRED_LABEL_KEYS = ("alreadyFiveDices", "alreadyChecked", "finished")

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "game_config.yaml")


@dataclass(frozen=True)
class DiceConfig:
    """Dice geometry."""
    count: int   # Dice per roll
    faces: int   # Faces per die


@dataclass(frozen=True)
class BonusConfig:
    """Face-category bonus rule."""
    threshold: int
    amount: int


@dataclass(frozen=True)
class RewardsConfig:
    """Fixed rewards for the constant-value combinations."""
    full_house: int
    small_street: int
    large_street: int
    five_of_a_kind: int


@dataclass(frozen=True)
class HighScoreConfig:
    """Leaderboard limits."""
    max_entries: int


@dataclass(frozen=True)
class LocaleLabels:
    """Display texts for one locale."""
    messages: Dict[str, str]
    categories: Tuple[str, ...]


@dataclass(frozen=True)
class LocaleConfig:
    """Supported locales and their label tables."""
    default: str
    supported: Tuple[str, ...]
    labels: Dict[str, LocaleLabels]


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    dice: DiceConfig
    bonus: BonusConfig
    rewards: RewardsConfig
    highscore: HighScoreConfig
    locale: LocaleConfig

    @property
    def num_categories(self) -> int:
        """Total number of scoring categories."""
        return NUM_CATEGORIES

    @property
    def num_face_categories(self) -> int:
        """Number of single-face categories (one per die face)."""
        return self.dice.faces


def _parse_labels(labels_data: dict) -> LocaleLabels:
    """Parse the label table of a single locale from YAML."""
    messages = {
        str(key): str(value)
        for key, value in labels_data.items()
        if key != "categories"
    }
    categories = tuple(str(name) for name in labels_data.get("categories", ()))
    return LocaleLabels(messages=messages, categories=categories)


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    # The category table is built for six-sided dice
    if config.dice.faces != 6:
        raise ValueError(f"dice.faces must be 6, got {config.dice.faces}")

    if config.dice.count != 5:
        raise ValueError(f"dice.count must be 5, got {config.dice.count}")

    if config.highscore.max_entries < 1:
        raise ValueError(
            f"highscore.max_entries must be positive, got {config.highscore.max_entries}"
        )

    if config.bonus.threshold < 0 or config.bonus.amount < 0:
        raise ValueError("bonus threshold and amount must be non-negative")

    if len(config.locale.supported) != 2:
        raise ValueError(
            f"Exactly two locales must be supported, got {list(config.locale.supported)}"
        )

    if config.locale.default not in config.locale.supported:
        raise ValueError(
            f"Default locale '{config.locale.default}' is not in supported "
            f"locales {list(config.locale.supported)}"
        )

    for locale in config.locale.supported:
        if locale not in config.locale.labels:
            raise ValueError(f"Missing labels for locale '{locale}'")
        labels = config.locale.labels[locale]
        for key in REQUIRED_LABEL_KEYS:
            if key not in labels.messages:
                raise ValueError(f"Locale '{locale}' is missing label '{key}'")
        if len(labels.categories) != NUM_CATEGORIES:
            raise ValueError(
                f"Locale '{locale}' must name {NUM_CATEGORIES} categories, "
                f"got {len(labels.categories)}"
            )


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    dice_data = raw["dice"]
    dice = DiceConfig(
        count=int(dice_data.get("count", 5)),
        faces=int(dice_data.get("faces", 6))
    )

    bonus_data = raw["bonus"]
    bonus = BonusConfig(
        threshold=int(bonus_data["threshold"]),
        amount=int(bonus_data["amount"])
    )

    rewards_data = raw["rewards"]
    rewards = RewardsConfig(
        full_house=int(rewards_data["full_house"]),
        small_street=int(rewards_data["small_street"]),
        large_street=int(rewards_data["large_street"]),
        five_of_a_kind=int(rewards_data["five_of_a_kind"])
    )

    hs_data = raw.get("highscore", {})
    highscore = HighScoreConfig(
        max_entries=int(hs_data.get("max_entries", 10))
    )

    locale_data = raw["locale"]
    labels_data = raw.get("labels", {})
    locale = LocaleConfig(
        default=str(locale_data.get("default", "de")),
        supported=tuple(str(l) for l in locale_data["supported"]),
        labels={
            str(name): _parse_labels(table)
            for name, table in labels_data.items()
        }
    )

    config = GameConfig(
        dice=dice,
        bonus=bonus,
        rewards=rewards,
        highscore=highscore,
        locale=locale
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config

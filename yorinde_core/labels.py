"""
Labels
======

Locale-dependent display texts, read from the `labels` section of
game_config.yaml.
"""

from __future__ import annotations

from typing import Optional

from yorinde_core.config_loader import GameConfig, get_config


def get_label(locale: str, key: str, config: Optional[GameConfig] = None) -> str:
    """
    Look up a message text.

    Args:
        locale: Locale identifier, e.g. "de".
        key: Message key, e.g. "alreadyChecked".
        config: Game configuration. Uses default if None.

    Raises:
        KeyError: If the locale or key is unknown.
    """
    if config is None:
        config = get_config()

    labels = config.locale.labels.get(locale)
    if labels is None:
        raise KeyError(f"Unknown locale: {locale}")
    if key not in labels.messages:
        raise KeyError(f"Unknown label '{key}' for locale '{locale}'")
    return labels.messages[key]


def category_name(locale: str, index: int, config: Optional[GameConfig] = None) -> str:
    """Display name of a scoring category."""
    if config is None:
        config = get_config()

    labels = config.locale.labels.get(locale)
    if labels is None:
        raise KeyError(f"Unknown locale: {locale}")
    return labels.categories[index]

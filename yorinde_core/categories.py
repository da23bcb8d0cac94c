"""
Category Table
==============

The 13 scoring categories as one ordered table of (validator, reward) pairs.

Every validator and reward is a pure function of the current roll's face-count
array and its pip sum, so the table can be evaluated for previews as well as
for scoring.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from yorinde_core.config_loader import GameConfig, get_config


Validator = Callable[[np.ndarray, int], bool]
Reward = Callable[[np.ndarray, int], int]

# Category indices
ONES, TWOS, THREES, FOURS, FIVES, SIXES = range(6)
THREE_OF_A_KIND = 6
FOUR_OF_A_KIND = 7
FULL_HOUSE = 8
SMALL_STREET = 9
LARGE_STREET = 10
CHANCE = 11
FIVE_OF_A_KIND = 12


def face_counts(dice: Sequence[Optional[int]], faces: int = 6) -> np.ndarray:
    """
    Count how many dice show each face.

    Args:
        dice: Roll slots; unset slots (None) are ignored.
        faces: Number of die faces.

    Returns:
        Array of length `faces` where index i counts dice showing face i+1.
    """
    values = [v - 1 for v in dice if v is not None]
    return np.bincount(np.asarray(values, dtype=np.int64), minlength=faces)[:faces]


def longest_run(counts: np.ndarray) -> int:
    """Length of the longest stretch of consecutive faces with a non-zero count."""
    longest = 0
    current = 0
    for count in counts:
        if count > 0:
            current += 1
        else:
            longest = max(longest, current)
            current = 0
    return max(longest, current)


def _always(counts: np.ndarray, total: int) -> bool:
    return True


def _face_reward(face: int) -> Reward:
    """Reward for a single-face category: count of that face times its value."""
    def reward(counts: np.ndarray, total: int) -> int:
        return int(counts[face - 1]) * face
    return reward


def _sum_reward(counts: np.ndarray, total: int) -> int:
    return int(total)


def _fixed_reward(points: int) -> Reward:
    def reward(counts: np.ndarray, total: int) -> int:
        return points
    return reward


def _at_least_of_a_kind(n: int) -> Validator:
    def validator(counts: np.ndarray, total: int) -> bool:
        return bool(np.any(counts >= n))
    return validator


def _exactly_of_a_kind(n: int) -> Validator:
    def validator(counts: np.ndarray, total: int) -> bool:
        return bool(np.any(counts == n))
    return validator


def _full_house(counts: np.ndarray, total: int) -> bool:
    return bool(np.any(counts == 2) and np.any(counts == 3))


def _street(length: int) -> Validator:
    def validator(counts: np.ndarray, total: int) -> bool:
        return longest_run(counts) >= length
    return validator


@dataclass(frozen=True)
class Category:
    """A scoring category: a predicate over the roll and the points it awards."""
    id: int
    key: str
    validator: Validator
    reward: Reward

    @property
    def is_face(self) -> bool:
        """True for the six single-face categories."""
        return self.id < 6

    def evaluate(self, counts: np.ndarray, total: int) -> int:
        """Points this category awards for the roll (0 if not satisfied)."""
        if not self.validator(counts, total):
            return 0
        return self.reward(counts, total)

    def __repr__(self) -> str:
        return f"Category({self.id}: {self.key})"


def build_categories(config: GameConfig) -> Tuple[Category, ...]:
    """Build the ordered category table from configuration."""
    rewards = config.rewards
    faces = [
        Category(i, key, _always, _face_reward(i + 1))
        for i, key in enumerate(("ones", "twos", "threes", "fours", "fives", "sixes"))
    ]
    combinations = [
        Category(THREE_OF_A_KIND, "three_of_a_kind", _at_least_of_a_kind(3), _sum_reward),
        Category(FOUR_OF_A_KIND, "four_of_a_kind", _at_least_of_a_kind(4), _sum_reward),
        Category(FULL_HOUSE, "full_house", _full_house, _fixed_reward(rewards.full_house)),
        Category(SMALL_STREET, "small_street", _street(4), _fixed_reward(rewards.small_street)),
        Category(LARGE_STREET, "large_street", _street(5), _fixed_reward(rewards.large_street)),
        Category(CHANCE, "chance", _always, _sum_reward),
        Category(FIVE_OF_A_KIND, "five_of_a_kind", _exactly_of_a_kind(5),
                 _fixed_reward(rewards.five_of_a_kind)),
    ]
    return tuple(faces + combinations)


class CategoryTable:
    """
    Collection of all scoring categories.

    Provides indexed access and helpers to evaluate a roll.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize table from game config.

        Args:
            config: GameConfig instance. If None, loads from default location.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._categories = build_categories(config)

    def __len__(self) -> int:
        return len(self._categories)

    def __getitem__(self, index: int) -> Category:
        """Get category by index."""
        if 0 <= index < len(self._categories):
            return self._categories[index]
        raise IndexError(f"Category index {index} out of range [0, {len(self._categories)})")

    def __iter__(self):
        return iter(self._categories)

    @property
    def face_categories(self) -> List[Category]:
        return [c for c in self._categories if c.is_face]

    @property
    def combination_categories(self) -> List[Category]:
        return [c for c in self._categories if not c.is_face]

    def is_satisfied(self, index: int, counts: np.ndarray, total: int) -> bool:
        """Check whether the roll satisfies a category's validator."""
        return self[index].validator(counts, total)

    def points_for(self, index: int, counts: np.ndarray, total: int) -> int:
        """Points a category awards for the roll (0 if the validator fails)."""
        return self[index].evaluate(counts, total)

    def evaluate_all(self, counts: np.ndarray, total: int) -> List[int]:
        """Points every category would award for the roll."""
        return [c.evaluate(counts, total) for c in self._categories]

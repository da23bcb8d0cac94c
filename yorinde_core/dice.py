"""
Dice
====

The roll in progress (five ordered slots) and the seeded randomizer used in
rolling mode.
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

import numpy as np

from yorinde_core.config_loader import GameConfig, get_config
from yorinde_core.categories import face_counts


class DiceRoll:
    """
    Ordered dice slots, each unset (None) or a face value.

    Slots fill left to right; no more than `config.dice.count` are ever occupied.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._slots: List[Optional[int]] = [None] * config.dice.count

    @property
    def slots(self) -> List[Optional[int]]:
        """Copy of the current slots."""
        return list(self._slots)

    @property
    def count(self) -> int:
        """Number of occupied slots."""
        return sum(1 for v in self._slots if v is not None)

    @property
    def is_full(self) -> bool:
        return self.count >= len(self._slots)

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    @property
    def total(self) -> int:
        """Pip sum of all occupied slots."""
        return sum(v for v in self._slots if v is not None)

    @property
    def counter(self) -> np.ndarray:
        """Face-count array (index i counts dice showing face i+1)."""
        return face_counts(self._slots, self._config.dice.faces)

    def add(self, value: int) -> bool:
        """
        Put a face value into the first unoccupied slot.

        Args:
            value: Face value in [1, faces].

        Returns:
            False if every slot is already occupied (roll unchanged).

        Raises:
            ValueError: If value is not a valid face.
        """
        value = self._check_face(value)

        count = self.count
        if count >= len(self._slots):
            return False
        self._slots[count] = value
        return True

    def reset(self) -> None:
        """Clear all slots."""
        for i in range(len(self._slots)):
            self._slots[i] = None

    def restore(self, slots: Sequence[Optional[int]]) -> None:
        """
        Overwrite the slots with a previous snapshot.

        Args:
            slots: Slot values, same length as the roll. Occupied slots must
                come first.

        Raises:
            ValueError: If the snapshot has the wrong length, a gap before an
                occupied slot, or an invalid face.
        """
        self._slots[:] = self.validate_slots(slots)

    def validate_slots(self, slots: Sequence[Optional[int]]) -> List[Optional[int]]:
        """Check a slot snapshot and return it as a list of ints and Nones."""
        if len(slots) != len(self._slots):
            raise ValueError(
                f"Expected {len(self._slots)} dice slots, got {len(slots)}"
            )
        checked: List[Optional[int]] = []
        for value in slots:
            if value is None:
                checked.append(None)
            elif checked and checked[-1] is None:
                raise ValueError(f"Dice slots must fill left to right, got {list(slots)}")
            else:
                checked.append(self._check_face(value))
        return checked

    def _check_face(self, value) -> int:
        faces = self._config.dice.faces
        if (isinstance(value, bool) or not isinstance(value, (int, np.integer))
                or not 1 <= value <= faces):
            raise ValueError(f"Dice value must be in [1, {faces}], got {value!r}")
        return int(value)

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self):
        return iter(list(self._slots))

    def __repr__(self) -> str:
        return f"DiceRoll({self._slots})"


class DiceRoller:
    """
    Randomizer for rolling mode.

    Produces uniformly distributed face values from a seeded generator so a
    session can be replayed.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize roller.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = random.Random(seed)

    def roll_one(self) -> int:
        """Roll a single die."""
        return self._rng.randint(1, self._config.dice.faces)

    def roll(self, count: int) -> List[int]:
        """Roll `count` dice."""
        return [self.roll_one() for _ in range(count)]

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the generator.

        Args:
            seed: New random seed. Random if None.
        """
        self._rng = random.Random(seed)

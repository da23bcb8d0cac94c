"""
Scoring System
==============

Sums the category slots into face points, bonus and combination points.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from yorinde_core.config_loader import GameConfig, get_config


@dataclass(frozen=True)
class ScoreSummary:
    """Breakdown of a board's points."""
    face_points: int
    bonus: int
    combination_points: int

    @property
    def total(self) -> int:
        return self.face_points + self.bonus + self.combination_points

    def as_tuple(self) -> Tuple[int, int, int]:
        """The (face sum, bonus, combination sum) triple stored in high scores."""
        return (self.face_points, self.bonus, self.combination_points)

    def __str__(self) -> str:
        if self.bonus:
            return (f"{self.face_points} + {self.bonus} + "
                    f"{self.combination_points} = {self.total}")
        return f"{self.face_points} + {self.combination_points} = {self.total}"


class ScoreCalculator:
    """
    Computes score summaries for a board of category slots.

    The bonus is awarded when the face categories reach the configured
    threshold (63 points for 35 extra by default).
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score calculator.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._num_faces = config.num_face_categories

    @property
    def bonus_threshold(self) -> int:
        return self._config.bonus.threshold

    @property
    def bonus_amount(self) -> int:
        return self._config.bonus.amount

    def face_points(self, points: Sequence[Optional[int]]) -> int:
        """Sum of the set face-category slots."""
        return sum(p for p in points[:self._num_faces] if p is not None)

    def combination_points(self, points: Sequence[Optional[int]]) -> int:
        """Sum of the set combination-category slots."""
        return sum(p for p in points[self._num_faces:] if p is not None)

    def bonus_for(self, face_points: int) -> int:
        """Bonus earned by a face-category sum."""
        return self.bonus_amount if face_points >= self.bonus_threshold else 0

    def calc_points(self, points: Sequence[Optional[int]]) -> ScoreSummary:
        """
        Summarize a board. Unset slots count as 0.

        Args:
            points: The category slots.

        Returns:
            ScoreSummary with face points, bonus and combination points.
        """
        faces = self.face_points(points)
        return ScoreSummary(
            face_points=faces,
            bonus=self.bonus_for(faces),
            combination_points=self.combination_points(points)
        )

    def points_to_bonus(self, points: Sequence[Optional[int]]) -> int:
        """Face points still missing for the bonus (0 once reached)."""
        return max(0, self.bonus_threshold - self.face_points(points))

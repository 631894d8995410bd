"""Difficulty tiers for puzzle sources."""

from __future__ import annotations
from enum import Enum
from typing import Tuple


class Difficulty(Enum):
    """Difficulty levels for Sudoku puzzles, ordered easiest first."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    VERY_HARD = "very_hard"

    @property
    def clue_range(self) -> Tuple[int, int]:
        """Get the range of clues for this difficulty (min, max)."""
        ranges = {
            Difficulty.EASY: (36, 45),
            Difficulty.MEDIUM: (28, 35),
            Difficulty.HARD: (22, 27),
            Difficulty.VERY_HARD: (17, 21),  # 17 is the minimum for a unique solution
        }
        return ranges[self]

    def harder(self) -> Difficulty:
        """Next harder tier; VERY_HARD stays VERY_HARD."""
        order = list(Difficulty)
        return order[min(order.index(self) + 1, len(order) - 1)]

    def easier(self) -> Difficulty:
        """Next easier tier; EASY stays EASY."""
        order = list(Difficulty)
        return order[max(order.index(self) - 1, 0)]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def from_name(cls, name: str) -> Difficulty:
        """Parse 'easy', 'very-hard', 'VeryHard', ... into a tier."""
        key = name.strip().lower().replace("-", "_").replace(" ", "_")
        if key == "veryhard":
            key = "very_hard"
        try:
            return cls(key)
        except ValueError:
            raise ValueError(
                f"Unknown difficulty {name!r}; expected one of "
                f"{', '.join(d.value for d in cls)}"
            ) from None

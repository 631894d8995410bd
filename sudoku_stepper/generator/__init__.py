"""Generator module: difficulty tiers and puzzle sources."""

from .difficulty import Difficulty
from .generator import SudokuGenerator, count_solutions, has_unique_solution
from .provider import PuzzleProvider, CorpusProvider, GeneratedProvider

__all__ = [
    "Difficulty",
    "SudokuGenerator",
    "count_solutions",
    "has_unique_solution",
    "PuzzleProvider",
    "CorpusProvider",
    "GeneratedProvider",
]

"""Puzzle sources: anything that turns a difficulty into an 81-digit line."""

from __future__ import annotations
import logging
import os
import random
from typing import Dict, List, Mapping, Optional, Protocol, Sequence

from ..core.board import parse_line
from .difficulty import Difficulty
from .generator import SudokuGenerator

logger = logging.getLogger(__name__)


class PuzzleProvider(Protocol):
    """Capability injected into a session to supply starting grids."""

    def get_line(self, difficulty: Difficulty) -> str:
        """Return one 81-character line of 0-9 for the given tier."""
        ...


class CorpusProvider:
    """
    Serves puzzle lines picked at random from a fixed corpus per difficulty.

    Lines are returned as stored; validating them is left to `parse_line`
    at load time.
    """

    def __init__(self, lines: Mapping[Difficulty, Sequence[str]], seed: Optional[int] = None):
        self.lines: Dict[Difficulty, List[str]] = {
            difficulty: [line.rstrip("\r\n") for line in entries if line.strip()]
            for difficulty, entries in lines.items()
        }
        self.rng = random.Random(seed)

    @classmethod
    def from_directory(cls, path: str, seed: Optional[int] = None) -> CorpusProvider:
        """
        Read `<difficulty>.txt` files (one puzzle per line) from a directory.
        Tiers without a file are left out.
        """
        lines: Dict[Difficulty, List[str]] = {}
        for difficulty in Difficulty:
            file_path = os.path.join(path, f"{difficulty.value}.txt")
            if not os.path.exists(file_path):
                continue
            with open(file_path, "r") as f:
                lines[difficulty] = f.readlines()
            logger.debug("Read %d lines from %s", len(lines[difficulty]), file_path)
        if not lines:
            raise FileNotFoundError(f"No puzzle corpus files found in {path}")
        return cls(lines, seed=seed)

    def get_line(self, difficulty: Difficulty) -> str:
        entries = self.lines.get(difficulty)
        if not entries:
            raise KeyError(f"No puzzles for difficulty {difficulty.value}")
        return self.rng.choice(entries)

    def reseed(self, seed: Optional[int]) -> None:
        """Restart the random line choice from a new seed."""
        self.rng.seed(seed)

    def __len__(self) -> int:
        return sum(len(entries) for entries in self.lines.values())


class GeneratedProvider:
    """Produces a fresh puzzle with SudokuGenerator on every request."""

    def __init__(self, seed: Optional[int] = None):
        self.generator = SudokuGenerator(seed=seed)

    def get_line(self, difficulty: Difficulty) -> str:
        return self.generator.generate_line(difficulty)

    def reseed(self, seed: Optional[int]) -> None:
        self.generator.rng.seed(seed)


__all__ = ["PuzzleProvider", "CorpusProvider", "GeneratedProvider", "parse_line"]

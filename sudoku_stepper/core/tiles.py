"""Tile values and the small enums shared by the grid and the search engine."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class TileKind(Enum):
    """Who owns the digit in a cell."""
    EMPTY = "empty"
    GIVEN = "given"      # clue from the loaded puzzle
    SOLVER = "solver"    # placed by the backtracking search
    USER = "user"        # entered by hand while the search is idle


@dataclass(frozen=True)
class Tile:
    """
    A single cell value: a kind tag plus its digit payload.

    EMPTY tiles carry digit 0, every other kind carries a digit 1-9.
    """
    kind: TileKind = TileKind.EMPTY
    digit: int = 0

    def __post_init__(self):
        if self.kind is TileKind.EMPTY:
            if self.digit != 0:
                raise ValueError(f"Empty tile cannot carry digit {self.digit}")
        elif not 1 <= self.digit <= 9:
            raise ValueError(f"Digit must be 1-9, got {self.digit}")

    @classmethod
    def empty(cls) -> Tile:
        return EMPTY

    @classmethod
    def given(cls, digit: int) -> Tile:
        return cls(TileKind.GIVEN, digit)

    @classmethod
    def solver(cls, digit: int) -> Tile:
        return cls(TileKind.SOLVER, digit)

    @classmethod
    def user(cls, digit: int) -> Tile:
        return cls(TileKind.USER, digit)

    @property
    def is_empty(self) -> bool:
        return self.kind is TileKind.EMPTY

    @property
    def is_fixed(self) -> bool:
        """True for tiles the search must step over (clues and user digits)."""
        return self.kind is TileKind.GIVEN or self.kind is TileKind.USER

    @property
    def has_digit(self) -> bool:
        return self.kind is not TileKind.EMPTY

    def __str__(self) -> str:
        return str(self.digit) if self.digit else "."


EMPTY = Tile()


class Direction(Enum):
    """Whether the search cursor is advancing or retreating."""
    FORWARD = "forward"
    BACKWARD = "backward"


class SolverState(Enum):
    """Lifecycle of the backtracking search."""
    IDLE = "idle"
    RUNNING = "running"
    SOLUTION_FOUND = "solution_found"
    NO_SOLUTION = "no_solution"

    @property
    def is_terminal(self) -> bool:
        return self in (SolverState.SOLUTION_FOUND, SolverState.NO_SOLUTION)

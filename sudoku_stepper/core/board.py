"""The 81-cell tile grid edited by the user and the search engine."""

from __future__ import annotations
import numpy as np
from typing import Iterable, List, Optional

from .candidates import CandidateIndex, CELLS, SIZE, BOX_SIZE
from .errors import FormatError
from .tiles import EMPTY, Tile, TileKind


def parse_line(line: str) -> List[Tile]:
    """
    Map a puzzle line to tiles: 0 becomes EMPTY, 1-9 become clues.

    A single trailing newline is tolerated.

    Raises:
        FormatError: If the line is not exactly 81 characters of 0-9.
    """
    line = line.rstrip("\r\n")
    if len(line) != CELLS:
        raise FormatError(f"Puzzle line must have {CELLS} characters, got {len(line)}", line)
    tiles = []
    for pos, ch in enumerate(line):
        if ch not in "0123456789":
            raise FormatError(f"Invalid character {ch!r} at position {pos}", line, pos)
        tiles.append(EMPTY if ch == "0" else Tile.given(int(ch)))
    return tiles


class TileGrid:
    """
    A 9x9 Sudoku grid stored row-major as 81 tiles (index = row * 9 + col).

    Public mutators keep the grid free of duplicate digits in any row,
    column or box. `_set` is the unchecked write reserved for the search
    engine, which consults the candidate index before every placement.
    """

    def __init__(self, tiles: Optional[Iterable[Tile]] = None):
        """
        Initialize a grid.

        Args:
            tiles: Optional 81 initial tiles. If None, creates an empty grid.
        """
        if tiles is None:
            self.tiles: List[Tile] = [EMPTY] * CELLS
        else:
            self.tiles = list(tiles)
            if len(self.tiles) != CELLS:
                raise ValueError(f"Grid needs {CELLS} tiles, got {len(self.tiles)}")
        self.candidates = CandidateIndex(self)

    def copy(self) -> TileGrid:
        """Create an independent copy of the grid."""
        return TileGrid(self.tiles)

    @staticmethod
    def _check_index(index: int) -> None:
        if not 0 <= index < CELLS:
            raise IndexError(f"Cell index must be 0-{CELLS - 1}, got {index}")

    def get(self, index: int) -> Tile:
        self._check_index(index)
        return self.tiles[index]

    def __getitem__(self, index: int) -> Tile:
        return self.get(index)

    def __len__(self) -> int:
        return CELLS

    def __iter__(self):
        return iter(self.tiles)

    def _set(self, index: int, tile: Tile) -> None:
        """Write a tile without any legality check."""
        self._check_index(index)
        self.tiles[index] = tile

    def try_insert(self, index: int, tile: Tile) -> bool:
        """
        Place a tile if the move keeps the grid legal.

        Clues are never overwritten. Emptying any other cell always succeeds;
        a digit is accepted only if no peer cell already holds it.

        Returns:
            True if the grid was changed.
        """
        current = self.get(index)
        if current.kind is TileKind.GIVEN:
            return False
        if tile.has_digit:
            used = self.candidates.used_digits(index, ignore_self=True)
            if used & (1 << tile.digit):
                return False
        self.tiles[index] = tile
        return True

    def clear_solver_digits(self) -> None:
        """Turn every search-placed digit back into an empty cell."""
        self.tiles = [EMPTY if t.kind is TileKind.SOLVER else t for t in self.tiles]

    def clear(self) -> None:
        """Empty every cell, clues included."""
        self.tiles = [EMPTY] * CELLS

    def count_empty(self) -> int:
        return sum(1 for t in self.tiles if t.is_empty)

    def count_filled(self) -> int:
        return CELLS - self.count_empty()

    def count_kind(self, kind: TileKind) -> int:
        return sum(1 for t in self.tiles if t.kind is kind)

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return all(t.has_digit for t in self.tiles)

    def digits(self) -> np.ndarray:
        """The digits as a 9x9 int array, 0 for empty cells."""
        return np.array([t.digit for t in self.tiles], dtype=np.int32).reshape(SIZE, SIZE)

    def is_valid(self) -> bool:
        """
        Check that no row, column or box repeats a digit.
        Empty cells are ignored; completeness is not required.
        """
        grid = self.digits()
        units = [grid[i, :] for i in range(SIZE)]
        units += [grid[:, j] for j in range(SIZE)]
        units += [
            grid[r:r + BOX_SIZE, c:c + BOX_SIZE].flatten()
            for r in range(0, SIZE, BOX_SIZE)
            for c in range(0, SIZE, BOX_SIZE)
        ]
        for unit in units:
            non_zero = unit[unit != 0]
            if len(non_zero) != len(np.unique(non_zero)):
                return False
        return True

    def is_solved(self) -> bool:
        """Check if the grid is completely and correctly filled."""
        return self.is_complete() and self.is_valid()

    def to_string(self) -> str:
        """Compact 81-character line, 0 for empty cells."""
        return "".join(str(t.digit) for t in self.tiles)

    @classmethod
    def from_string(cls, line: str) -> TileGrid:
        """
        Create a grid of clues from an 81-character line.

        Raises:
            FormatError: If the line is not 81 characters of 0-9.
        """
        return cls(parse_line(line))

    def __str__(self) -> str:
        """Pretty-print the grid."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(SIZE):
                row_str += f' {self.tiles[i * SIZE + j]}'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"TileGrid(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TileGrid):
            return False
        return self.tiles == other.tiles

    def __hash__(self) -> int:
        return hash(tuple(self.tiles))

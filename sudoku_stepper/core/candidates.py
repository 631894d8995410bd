"""Bitmask candidate computation for cells of a 9x9 grid."""

from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from .board import TileGrid


SIZE = 9
BOX_SIZE = 3
CELLS = SIZE * SIZE

# Bits 1-9 set; bit 0 is never used.
FULL_MASK = 0b1111111110


def _build_units(index: int) -> Tuple[Tuple[int, ...], Tuple[int, ...], Tuple[int, ...]]:
    row, col = divmod(index, SIZE)
    box_row = (row // BOX_SIZE) * BOX_SIZE
    box_col = (col // BOX_SIZE) * BOX_SIZE
    row_cells = tuple(row * SIZE + c for c in range(SIZE))
    col_cells = tuple(r * SIZE + col for r in range(SIZE))
    box_cells = tuple(
        (box_row + i) * SIZE + box_col + j
        for i in range(BOX_SIZE)
        for j in range(BOX_SIZE)
    )
    return row_cells, col_cells, box_cells


# UNITS[i] is the (row, column, box) triple of cell i; each unit contains i.
UNITS = tuple(_build_units(i) for i in range(CELLS))

# PEERS[i] holds the 21 distinct cells sharing a unit with i, plus i itself.
PEERS = tuple(
    tuple(sorted(set(row) | set(col) | set(box)))
    for row, col, box in UNITS
)


class CandidateIndex:
    """
    Derives which digits are still legal for a cell.

    The index holds no state of its own; every query reads the grid it was
    built on, so it never goes stale across edits, loads or search steps.
    """

    def __init__(self, grid: TileGrid):
        self.grid = grid

    def used_digits(self, index: int, ignore_self: bool = False) -> int:
        """
        Bitmask of digits present in the row, column and box of a cell.

        Args:
            index: Cell index 0-80.
            ignore_self: Leave the cell's own digit out of the mask.

        Returns:
            Integer with bit d set for every digit d already in use.
        """
        tiles = self.grid.tiles
        mask = 0
        for unit in UNITS[index]:
            for j in unit:
                if ignore_self and j == index:
                    continue
                digit = tiles[j].digit
                if digit:
                    mask |= 1 << digit
        return mask

    def next_available_digit(self, index: int, after: int = 0) -> Optional[int]:
        """Smallest digit above `after` that is not used around the cell."""
        used = self.used_digits(index)
        for digit in range(after + 1, SIZE + 1):
            if not used & (1 << digit):
                return digit
        return None

    def is_available(self, index: int, digit: int) -> bool:
        return not self.used_digits(index) & (1 << digit)

    def candidates(self, index: int) -> List[int]:
        """Digits that could be written into the cell, ascending."""
        used = self.used_digits(index, ignore_self=True)
        return [d for d in range(1, SIZE + 1) if not used & (1 << d)]

    def lookahead_ok(self, index: int) -> bool:
        """
        Forward check after an assignment at `index`.

        Fails when some empty cell in the row, column or box of `index` is
        left with no legal digit. Cells outside those three units are not
        inspected.
        """
        tiles = self.grid.tiles
        for j in PEERS[index]:
            if tiles[j].is_empty and self.used_digits(j) == FULL_MASK:
                return False
        return True

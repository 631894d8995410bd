"""Sudoku puzzle generator with configurable difficulty levels."""

from __future__ import annotations
import os
import random
from typing import List, Optional, Set, Tuple
import numpy as np

from ..core.board import TileGrid, parse_line
from .difficulty import Difficulty

SIZE = 9
BOX_SIZE = 3


def _candidates(grid: np.ndarray, row: int, col: int) -> Set[int]:
    """Values 1-9 not yet used in the row, column or box of (row, col)."""
    box_row = (row // BOX_SIZE) * BOX_SIZE
    box_col = (col // BOX_SIZE) * BOX_SIZE
    used = set(grid[row, :]) | set(grid[:, col])
    used |= set(grid[box_row:box_row + BOX_SIZE, box_col:box_col + BOX_SIZE].flatten())
    return set(range(1, SIZE + 1)) - used


def _empty_cells(grid: np.ndarray) -> List[Tuple[int, int]]:
    return [(int(r), int(c)) for r, c in zip(*np.nonzero(grid == 0))]


def count_solutions(grid: np.ndarray, limit: int = 2) -> int:
    """
    Count the number of solutions for a puzzle (up to limit).

    Stops early once limit is reached.

    Args:
        grid: 9x9 array, 0 for empty cells. Not modified.
        limit: Maximum solutions to count before stopping.
    """
    work = grid.copy()
    count = [0]

    def backtrack() -> bool:
        """Returns True if limit reached."""
        empty = _empty_cells(work)
        if not empty:
            count[0] += 1
            return count[0] >= limit

        # MRV: branch on the cell with the fewest candidates
        best_cell = None
        best_candidates: Set[int] = set()
        for cell in empty:
            candidates = _candidates(work, *cell)
            if not candidates:
                return False
            if best_cell is None or len(candidates) < len(best_candidates):
                best_cell, best_candidates = cell, candidates
                if len(candidates) == 1:
                    break

        row, col = best_cell
        for val in sorted(best_candidates):
            work[row, col] = val
            if backtrack():
                return True
            work[row, col] = 0
        return False

    backtrack()
    return count[0]


def has_unique_solution(grid: np.ndarray) -> bool:
    """Check if a puzzle has exactly one solution."""
    return count_solutions(grid, limit=2) == 1


def to_line(grid: np.ndarray) -> str:
    return "".join(str(int(v)) for v in grid.flatten())


class SudokuGenerator:
    """
    Generator for Sudoku puzzles with various difficulty levels.

    Algorithm:
    1. Generate a complete valid Sudoku solution using backtracking
    2. Remove cells based on difficulty level
    3. Keep a removal only if the puzzle still has a unique solution
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
        """
        self.rng = random.Random(seed)

    def generate(self, difficulty: Difficulty = Difficulty.MEDIUM) -> TileGrid:
        """
        Generate a puzzle with the specified difficulty.

        Returns:
            A TileGrid holding the clues only.
        """
        return self.generate_with_solution(difficulty)[0]

    def generate_line(self, difficulty: Difficulty = Difficulty.MEDIUM) -> str:
        """Generate a puzzle as an 81-character line."""
        solution = self._generate_complete_grid()
        return to_line(self._remove_cells(solution, difficulty))

    def generate_batch(self, count: int, difficulty: Difficulty = Difficulty.MEDIUM) -> List[TileGrid]:
        """Generate multiple puzzles of the same difficulty."""
        return [self.generate(difficulty) for _ in range(count)]

    def generate_with_solution(self, difficulty: Difficulty = Difficulty.MEDIUM) -> Tuple[TileGrid, TileGrid]:
        """
        Generate a puzzle along with its solution.

        Returns:
            Tuple of (puzzle, solution) grids, both made of clue tiles.
        """
        solution = self._generate_complete_grid()
        puzzle = self._remove_cells(solution, difficulty)
        return TileGrid(parse_line(to_line(puzzle))), TileGrid(parse_line(to_line(solution)))

    def _generate_complete_grid(self) -> np.ndarray:
        """Generate a complete valid grid using backtracking."""
        grid = np.zeros((SIZE, SIZE), dtype=np.int32)

        # Diagonal boxes share no row, column or box, so fill them freely.
        for box_idx in range(BOX_SIZE):
            self._fill_box(grid, box_idx * BOX_SIZE, box_idx * BOX_SIZE)

        if not self._solve_remaining(grid):
            raise RuntimeError("Could not complete a grid from the diagonal boxes")
        return grid

    def _fill_box(self, grid: np.ndarray, start_row: int, start_col: int) -> None:
        """Fill a single box with random values."""
        values = list(range(1, SIZE + 1))
        self.rng.shuffle(values)
        grid[start_row:start_row + BOX_SIZE, start_col:start_col + BOX_SIZE] = (
            np.array(values, dtype=np.int32).reshape(BOX_SIZE, BOX_SIZE)
        )

    def _solve_remaining(self, grid: np.ndarray) -> bool:
        """Fill remaining cells using backtracking with random ordering."""
        empty = _empty_cells(grid)
        if not empty:
            return True

        row, col = min(empty, key=lambda cell: len(_candidates(grid, *cell)))
        candidates = sorted(_candidates(grid, row, col))
        self.rng.shuffle(candidates)

        for val in candidates:
            grid[row, col] = val
            if self._solve_remaining(grid):
                return True
            grid[row, col] = 0

        return False

    def _remove_cells(self, solution: np.ndarray, difficulty: Difficulty) -> np.ndarray:
        """
        Remove cells from a complete solution to create a puzzle.

        Ensures the resulting puzzle has a unique solution.
        """
        puzzle = solution.copy()
        min_clues, max_clues = difficulty.clue_range
        cells_to_remove = SIZE * SIZE - self.rng.randint(min_clues, max_clues)

        filled_cells = [(r, c) for r in range(SIZE) for c in range(SIZE)]
        self.rng.shuffle(filled_cells)

        removed = 0
        for row, col in filled_cells:
            if removed >= cells_to_remove:
                break

            original_value = puzzle[row, col]
            puzzle[row, col] = 0

            if has_unique_solution(puzzle):
                removed += 1
            else:
                puzzle[row, col] = original_value

        return puzzle

    @staticmethod
    def save_to_folder(puzzles: List[TileGrid], folder_path: str, prefix: str = "puzzle") -> None:
        """
        Save a list of puzzles to a folder as individual text files.

        Args:
            puzzles: List of TileGrid objects.
            folder_path: Directory to save the puzzles.
            prefix: Prefix for the filename (default: "puzzle").
        """
        os.makedirs(folder_path, exist_ok=True)

        for i, puzzle in enumerate(puzzles, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            with open(file_path, "w") as f:
                f.write(puzzle.to_string())
                f.write("\n\nPretty format:\n")
                f.write(str(puzzle))

    @staticmethod
    def save_corpus(lines: List[str], folder_path: str, difficulty: Difficulty) -> str:
        """
        Append puzzle lines to `<folder>/<difficulty>.txt`, the layout
        CorpusProvider reads.

        Returns:
            Path of the corpus file.
        """
        os.makedirs(folder_path, exist_ok=True)
        file_path = os.path.join(folder_path, f"{difficulty.value}.txt")
        with open(file_path, "a") as f:
            for line in lines:
                f.write(line + "\n")
        return file_path

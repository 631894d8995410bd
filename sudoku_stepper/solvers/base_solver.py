"""Base solver interface and run statistics."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import logging
import time
import tracemalloc

from ..core.board import TileGrid

logger = logging.getLogger(__name__)


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0

    # Search metrics
    steps: int = 0
    backtracks: int = 0
    ticks: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "steps": self.steps,
            "backtracks": self.backtracks,
            "ticks": self.ticks,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for solvers that run a grid to completion."""

    name: str = "BaseSolver"

    def __init__(self):
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, grid: TileGrid) -> tuple[Optional[TileGrid], SolverStats]:
        """
        Solve a puzzle with timing and memory tracking.

        Args:
            grid: The puzzle to solve. It is not modified.

        Returns:
            Tuple of (solution or None, stats).
        """
        self.stats = SolverStats(algorithm=self.name)

        tracemalloc.start()
        start_time = time.perf_counter()

        try:
            solution = self._solve(grid.copy())
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            _, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self.stats.memory_bytes = peak

        self.stats.solved = solution is not None and solution.is_solved()
        logger.debug("%s finished in %.4fs", self.name, self.stats.time_seconds)
        return solution, self.stats

    @abstractmethod
    def _solve(self, grid: TileGrid) -> Optional[TileGrid]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            grid: A copy of the puzzle to solve (can be modified).

        Returns:
            The solved grid, or None if no solution found.
        """
        pass

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)

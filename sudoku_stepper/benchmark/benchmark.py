"""Benchmarking the stepping search with and without lookahead."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
import json
import logging
import os

from tqdm import tqdm

from ..core.board import TileGrid
from ..generator import Difficulty, PuzzleProvider, SudokuGenerator
from ..solvers import BaseSolver, StepSolver

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    puzzle_id: int
    difficulty: str
    algorithm: str
    solved: bool
    time_seconds: float
    memory_bytes: int
    steps: int
    backtracks: int
    ticks: int
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "difficulty": self.difficulty,
            "algorithm": self.algorithm,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "steps": self.steps,
            "backtracks": self.backtracks,
            "ticks": self.ticks,
            **self.extra
        }


class Benchmark:
    """
    Runs each solver on puzzles of every requested difficulty and collects
    step counts, backtracks and timings.
    """

    def __init__(
        self,
        puzzles_per_difficulty: int = 5,
        difficulties: Optional[List[Difficulty]] = None,
        solvers: Optional[Dict[str, BaseSolver]] = None,
        provider: Optional[PuzzleProvider] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles_per_difficulty: Number of puzzles per difficulty.
            difficulties: List of difficulties to test (default: all).
            solvers: Dict of solver_name -> solver_instance (default: the
                stepping search with and without lookahead).
            provider: Puzzle source. If None, puzzles are generated.
            seed: Random seed for generated puzzles.
        """
        self.puzzles_per_difficulty = puzzles_per_difficulty
        self.difficulties = difficulties or list(Difficulty)
        self.provider = provider
        self.seed = seed

        if solvers is None:
            # Plain backtracking can explore millions of steps on hard grids.
            self.solvers: Dict[str, BaseSolver] = {
                "Lookahead": StepSolver(steps_per_frame=10000, lookahead=True, max_ticks=100),
                "Plain": StepSolver(steps_per_frame=10000, lookahead=False, max_ticks=100),
            }
        else:
            self.solvers = solvers

        self.puzzles: Dict[str, List[TileGrid]] = {}
        self.results: List[BenchmarkResult] = []

    def load_puzzles(self) -> None:
        """Collect all puzzles for benchmarking."""
        generator = SudokuGenerator(seed=self.seed)

        print("Preparing puzzles...")
        for difficulty in tqdm(self.difficulties, desc="Difficulties"):
            if self.provider is None:
                self.puzzles[difficulty.value] = generator.generate_batch(
                    self.puzzles_per_difficulty, difficulty
                )
            else:
                self.puzzles[difficulty.value] = [
                    TileGrid.from_string(self.provider.get_line(difficulty))
                    for _ in range(self.puzzles_per_difficulty)
                ]

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        if not self.puzzles:
            self.load_puzzles()

        self.results = []
        total_tests = sum(len(p) for p in self.puzzles.values()) * len(self.solvers)
        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for difficulty_name, puzzles in self.puzzles.items():
            for puzzle_id, puzzle in enumerate(puzzles):
                for solver_name, solver in self.solvers.items():
                    _, stats = solver.solve(puzzle)
                    self.results.append(BenchmarkResult(
                        puzzle_id=puzzle_id,
                        difficulty=difficulty_name,
                        algorithm=solver_name,
                        solved=stats.solved,
                        time_seconds=stats.time_seconds,
                        memory_bytes=stats.memory_bytes,
                        steps=stats.steps,
                        backtracks=stats.backtracks,
                        ticks=stats.ticks,
                        extra=dict(stats.extra),
                    ))
                    pbar.update(1)

        pbar.close()
        return self.results

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary: Dict[str, Any] = {
            "solvers_tested": list(self.solvers.keys()),
            "difficulties": [d.value for d in self.difficulties],
            "results_by_algorithm": {},
            "results_by_difficulty": {},
        }

        for solver_name in self.solvers:
            solver_results = [r for r in self.results if r.algorithm == solver_name]
            if not solver_results:
                continue
            solved = [r for r in solver_results if r.solved]
            steps = [r.steps for r in solver_results]
            times = [r.time_seconds for r in solver_results]
            summary["results_by_algorithm"][solver_name] = {
                "accuracy": len(solved) / len(solver_results) * 100,
                "avg_steps": sum(steps) / len(steps),
                "max_steps": max(steps),
                "avg_time_seconds": sum(times) / len(times),
                "total_solved": len(solved),
                "total_tested": len(solver_results),
            }

        for difficulty in self.difficulties:
            diff_results = [r for r in self.results if r.difficulty == difficulty.value]
            if not diff_results:
                continue
            by_solver = {}
            for solver_name in self.solvers:
                rows = [r for r in diff_results if r.algorithm == solver_name]
                if rows:
                    by_solver[solver_name] = {
                        "avg_steps": sum(r.steps for r in rows) / len(rows),
                        "avg_backtracks": sum(r.backtracks for r in rows) / len(rows),
                        "solved": sum(1 for r in rows if r.solved),
                        "tested": len(rows),
                    }
            summary["results_by_difficulty"][difficulty.value] = by_solver

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and puzzles to files."""
        os.makedirs(output_dir, exist_ok=True)

        with open(os.path.join(output_dir, "benchmark_results.json"), "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        with open(os.path.join(output_dir, "benchmark_summary.json"), "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        puzzles_dir = os.path.join(output_dir, "puzzles")
        for difficulty, puzzles in self.puzzles.items():
            SudokuGenerator.save_to_folder(
                puzzles, os.path.join(puzzles_dir, difficulty), prefix=f"puzzle_{difficulty}"
            )

        logger.info("Benchmark results written to %s", output_dir)
        print(f"Results and puzzles saved to {output_dir}")

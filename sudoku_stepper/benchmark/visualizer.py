"""Charts for benchmark results and search traces."""

from __future__ import annotations
import os
from typing import List, Sequence

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult
from ..solvers.backtrack_engine import EngineSnapshot


class Visualizer:
    """
    Chart generator for stepping-search benchmark results.

    Compares solvers by step count and backtracks per difficulty, and
    plots the cursor position over the course of a single search.
    """

    COLORS = {
        "Lookahead": "#2ecc71",  # Green
        "Plain": "#e74c3c",      # Red
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_metric_by_difficulty("steps", "Average Steps", "steps_by_difficulty.png"),
            self.plot_metric_by_difficulty("backtracks", "Average Backtracks",
                                           "backtracks_by_difficulty.png"),
        ]

    def plot_metric_by_difficulty(self, metric: str, ylabel: str, filename: str) -> str:
        """Grouped bar chart of a per-run metric by difficulty and solver."""
        fig, ax = plt.subplots(figsize=(12, 6))

        algorithms = sorted(set(r.algorithm for r in self.results))
        difficulties = list(dict.fromkeys(r.difficulty for r in self.results))

        x = np.arange(len(difficulties))
        width = 0.8 / max(len(algorithms), 1)

        for i, algo in enumerate(algorithms):
            values = []
            for diff in difficulties:
                rows = [
                    getattr(r, metric) for r in self.results
                    if r.algorithm == algo and r.difficulty == diff
                ]
                values.append(np.mean(rows) if rows else 0)

            offset = (i - len(algorithms) / 2 + 0.5) * width
            ax.bar(x + offset, values, width,
                   label=algo,
                   color=self.COLORS.get(algo, "#95a5a6"),
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel(ylabel, fontsize=12)
        ax.set_yscale('log')
        ax.set_title(f'{ylabel} by Difficulty', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([d.replace("_", " ").title() for d in difficulties])
        ax.legend(title='Solver')

        plt.tight_layout()
        path = os.path.join(self.output_dir, filename)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return path

    def plot_cursor_trace(self, trace: Sequence[EngineSnapshot],
                          filename: str = "cursor_trace.png") -> str:
        """Line chart of the cursor index against the step number."""
        fig, ax = plt.subplots(figsize=(12, 5))

        steps = [s.step_count for s in trace]
        cursor = [s.active_index for s in trace]
        ax.plot(steps, cursor, linewidth=0.6, color="#3498db")

        ax.set_xlabel('Step', fontsize=12)
        ax.set_ylabel('Cursor Index', fontsize=12)
        ax.set_ylim(0, 81)
        ax.set_title('Search Cursor Over Time', fontsize=14, fontweight='bold')

        plt.tight_layout()
        path = os.path.join(self.output_dir, filename)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return path

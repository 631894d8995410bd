"""Runs the stepping engine tick by tick until the search terminates."""

from __future__ import annotations
from typing import List, Optional

from .backtrack_engine import BacktrackEngine, EngineSnapshot
from .base_solver import BaseSolver
from .pacing import PacingController
from ..core.board import TileGrid
from ..core.tiles import SolverState


class StepSolver(BaseSolver):
    """
    Solver that drives a BacktrackEngine the way a frame loop would.

    Each tick calls `engine.step()` once, so the rate decides how many
    search steps a tick performs. Useful for benchmarking and for
    recording the cursor trace of a search.
    """

    name = "Stepwise Backtracking"

    def __init__(
        self,
        steps_per_frame: float = 1000.0,
        lookahead: bool = True,
        max_ticks: Optional[int] = None,
        record_trace: bool = False,
        unbounded: bool = False,
        min_rate: float = 0.005,
        max_rate: float = 100000.0,
    ):
        """
        Initialize the solver.

        Args:
            steps_per_frame: Search steps per tick (may be fractional).
            lookahead: Use forward checking after each assignment.
            max_ticks: Give up after this many ticks (None for no limit).
            record_trace: Keep a snapshot after every single step.
            unbounded: Run each tick until the search stops.
            min_rate: Lowest rate the pacing controller allows.
            max_rate: Highest rate the pacing controller allows.
        """
        super().__init__()
        self.min_rate = min_rate
        self.max_rate = max_rate
        self.steps_per_frame = min(max(steps_per_frame, min_rate), max_rate)
        self.lookahead = lookahead
        self.max_ticks = max_ticks
        self.record_trace = record_trace
        self.unbounded = unbounded
        self.trace: List[EngineSnapshot] = []
        if not lookahead:
            self.name = "Stepwise Backtracking (no lookahead)"
            self.stats.algorithm = self.name

    def make_engine(self, grid: TileGrid) -> BacktrackEngine:
        pacing = PacingController(
            steps_per_frame=self.steps_per_frame,
            min_rate=self.min_rate,
            max_rate=self.max_rate,
            unbounded=self.unbounded,
        )
        return BacktrackEngine(grid, pacing, lookahead=self.lookahead)

    def _solve(self, grid: TileGrid) -> Optional[TileGrid]:
        engine = self.make_engine(grid)
        engine.start()
        self.trace = []

        ticks = 0
        while engine.is_running():
            if self.max_ticks is not None and ticks >= self.max_ticks:
                self.stats.extra["error"] = "Tick limit reached"
                break
            ticks += 1
            if self.record_trace:
                # Single steps so that every intermediate state is captured.
                budget = engine.pacing.next_budget()
                taken = 0
                while (budget is None or taken < budget) and engine.step_once():
                    taken += 1
                    self.trace.append(engine.snapshot())
            else:
                engine.step()

        self.stats.steps = engine.step_count
        self.stats.backtracks = engine.backtracks
        self.stats.ticks = ticks
        self.stats.extra["final_state"] = engine.state.value

        if engine.state is SolverState.SOLUTION_FOUND:
            return engine.grid
        return None

"""Resumable backtracking search driven one bounded batch of steps per tick."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.board import TileGrid, parse_line
from ..core.candidates import CELLS
from ..core.tiles import EMPTY, Direction, SolverState, Tile, TileKind
from .pacing import PacingController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineSnapshot:
    """Observable search position after a step."""
    active_index: int
    direction: Direction
    state: SolverState
    grid: str
    step_count: int


class BacktrackEngine:
    """
    Backtracking search kept as plain data instead of a call stack.

    The search walks a single cursor over the cells in index order, trying
    digits in ascending order. Fixed tiles are stepped over in the current
    direction. After each assignment an optional lookahead check rejects
    digits that leave a peer cell with no candidates; the next step then
    tries the following digit at the same cell.

    Because progress lives in `active_index`, `direction`, `state` and the
    grid, the search can be paused, reset or resumed between any two steps.
    The grid belongs to the engine while RUNNING and to outside editors
    otherwise.
    """

    name = "Stepwise Backtracking"

    def __init__(
        self,
        grid: Optional[TileGrid] = None,
        pacing: Optional[PacingController] = None,
        lookahead: bool = True,
    ):
        """
        Initialize the engine.

        Args:
            grid: Starting grid. If None, an empty grid is used.
            pacing: Tick pacing. If None, one step per tick.
            lookahead: Reject assignments that empty a peer's candidate set.
        """
        self.grid = grid if grid is not None else TileGrid()
        self.pacing = pacing if pacing is not None else PacingController()
        self.lookahead = lookahead
        self._state = SolverState.IDLE
        self.active_index = 0
        self.direction = Direction.FORWARD
        self.step_count = 0
        self.backtracks = 0

    @property
    def state(self) -> SolverState:
        return self._state

    def is_running(self) -> bool:
        return self._state is SolverState.RUNNING

    # -- setup and editing -------------------------------------------------

    def load(self, tiles: Iterable[Tile]) -> None:
        """Replace the grid and return the search to IDLE at cell 0."""
        self.grid = TileGrid(tiles)
        self._reset_cursor()
        self._state = SolverState.IDLE

    def load_line(self, line: str) -> None:
        """
        Load an 81-character puzzle line.

        Raises:
            FormatError: If the line is malformed; the current grid is kept.
        """
        self.load(parse_line(line))

    def try_insert(self, index: int, tile: Tile) -> bool:
        """Place a tile while idle; see TileGrid.try_insert."""
        if self.is_running():
            return False
        return self.grid.try_insert(index, tile)

    def used_digits(self, index: int) -> int:
        return self.grid.candidates.used_digits(index)

    def _reset_cursor(self) -> None:
        self.active_index = 0
        self.direction = Direction.FORWARD
        self.step_count = 0
        self.backtracks = 0
        self.pacing.reset()

    def reset(self) -> None:
        """Drop search progress: clear search digits and rewind the cursor."""
        self.grid.clear_solver_digits()
        self._reset_cursor()

    # -- lifecycle ---------------------------------------------------------

    def start(self) -> None:
        """Begin a fresh search from cell 0."""
        self.reset()
        self._state = SolverState.RUNNING
        logger.debug("Search started with %d empty cells", self.grid.count_empty())

    def stop(self) -> None:
        """Abandon the search, whatever its state, and return to IDLE."""
        self.reset()
        self._state = SolverState.IDLE
        logger.debug("Search stopped")

    def toggle(self) -> SolverState:
        """Start when IDLE; otherwise stop. Returns the new state."""
        if self._state is SolverState.IDLE:
            self.start()
        else:
            self.stop()
        return self._state

    def clear_result(self) -> bool:
        """Remove the search's digits while not running."""
        if self.is_running():
            return False
        self.stop()
        return True

    def clear_board(self) -> bool:
        """Empty every cell while not running."""
        if self.is_running():
            return False
        self.grid.clear()
        self.stop()
        return True

    def set_rate(self, multiplier: float) -> float:
        return self.pacing.set_rate(multiplier)

    # -- search ------------------------------------------------------------

    def _finish(self, state: SolverState) -> None:
        self._state = state
        logger.info(
            "Search finished: %s after %d steps (%d backtracks)",
            state.value, self.step_count, self.backtracks,
        )

    def _retreat(self) -> None:
        """Move the cursor back one cell; there is nothing before cell 0."""
        self.direction = Direction.BACKWARD
        if self.active_index == 0:
            self._finish(SolverState.NO_SOLUTION)
        else:
            self.active_index -= 1

    def step_once(self) -> bool:
        """
        Perform one unit of search work.

        Returns:
            True if a step was taken; False if the engine is not running or
            the search has just terminated.
        """
        if not self.is_running():
            return False

        index = self.active_index
        if index >= CELLS:
            if self.grid.is_solved():
                self._finish(SolverState.SOLUTION_FOUND)
            else:
                self._finish(SolverState.NO_SOLUTION)
            return False

        self.step_count += 1
        tile = self.grid.tiles[index]

        if tile.is_fixed:
            if self.direction is Direction.FORWARD:
                self.active_index += 1
            else:
                self._retreat()
            return True

        if tile.kind is TileKind.SOLVER and self.direction is Direction.FORWARD:
            # Already passed lookahead when it was placed.
            self.active_index += 1
            return True

        candidates = self.grid.candidates
        digit = candidates.next_available_digit(index, tile.digit)
        if digit is not None:
            self.grid._set(index, Tile.solver(digit))
            if not self.lookahead or candidates.lookahead_ok(index):
                self.direction = Direction.FORWARD
            else:
                self.direction = Direction.BACKWARD
            return True

        self.grid._set(index, EMPTY)
        self.backtracks += 1
        self._retreat()
        return True

    def step(self) -> int:
        """
        Run one external tick's worth of steps.

        Returns:
            Number of steps taken this tick.
        """
        if not self.is_running():
            return 0
        budget = self.pacing.next_budget()
        taken = 0
        while budget is None or taken < budget:
            if not self.step_once():
                break
            taken += 1
        return taken

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            active_index=self.active_index,
            direction=self.direction,
            state=self._state,
            grid=self.grid.to_string(),
            step_count=self.step_count,
        )

    def __repr__(self) -> str:
        return (
            f"BacktrackEngine(state={self._state.value}, index={self.active_index}, "
            f"steps={self.step_count})"
        )

"""Session state behind an interactive front end: puzzle choice, editing and pacing."""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from .config import EngineConfig
from .core.errors import FormatError
from .core.tiles import EMPTY, SolverState, Tile
from .generator.difficulty import Difficulty
from .generator.provider import PuzzleProvider
from .solvers.backtrack_engine import BacktrackEngine
from .solvers.pacing import PacingController

logger = logging.getLogger(__name__)


class SolverSession:
    """
    Everything a front end needs besides drawing and input mapping.

    The front end calls `tick()` once per frame and forwards user actions
    to the other methods. Edits are refused while the search is running.
    """

    def __init__(
        self,
        provider: PuzzleProvider,
        config: Optional[EngineConfig] = None,
        difficulty: Difficulty = Difficulty.EASY,
    ):
        self.provider = provider
        self.config = config or EngineConfig()
        if self.config.seed is not None:
            reseed = getattr(provider, "reseed", None)
            if reseed is None:
                logger.warning("Provider %s cannot be seeded; ignoring seed %d",
                               type(provider).__name__, self.config.seed)
            else:
                reseed(self.config.seed)
        self.difficulty = difficulty
        self.selected: Optional[int] = None
        pacing = PacingController(
            steps_per_frame=self.config.steps_per_frame,
            min_rate=self.config.min_rate,
            max_rate=self.config.max_rate,
            unbounded=self.config.unbounded,
        )
        self.engine = BacktrackEngine(pacing=pacing, lookahead=self.config.lookahead)

    # -- puzzles -----------------------------------------------------------

    def load_random(self) -> None:
        """
        Load a new puzzle of the current difficulty.

        Malformed lines are skipped up to `config.load_attempts` times.

        Raises:
            FormatError: If every attempt returned a malformed line. The
                previous grid is left in place.
        """
        last_error: Optional[FormatError] = None
        for attempt in range(1, self.config.load_attempts + 1):
            line = self.provider.get_line(self.difficulty)
            try:
                self.engine.load_line(line)
            except FormatError as e:
                logger.warning("Skipping malformed puzzle line (attempt %d): %s", attempt, e)
                last_error = e
                continue
            logger.info("Loaded %s puzzle with %d clues", self.difficulty.value,
                        self.engine.grid.count_filled())
            return
        raise last_error

    def harder(self) -> bool:
        """Switch to the next harder tier and load a puzzle from it."""
        if self.difficulty is Difficulty.VERY_HARD:
            return False
        self._change_difficulty(self.difficulty.harder())
        return True

    def easier(self) -> bool:
        """Switch to the next easier tier and load a puzzle from it."""
        if self.difficulty is Difficulty.EASY:
            return False
        self._change_difficulty(self.difficulty.easier())
        return True

    def _change_difficulty(self, difficulty: Difficulty) -> None:
        # The tier only moves once a puzzle from it is on the board.
        previous = self.difficulty
        self.difficulty = difficulty
        try:
            self.load_random()
        except (FormatError, KeyError):
            self.difficulty = previous
            raise

    # -- editing -----------------------------------------------------------

    def write_tile(self, index: int, digit: int) -> bool:
        """
        Enter a user digit (1-9) or erase a cell (0).

        Any previous search result is discarded first.

        Returns:
            True if the cell changed; False when running or the move is illegal.
        """
        if self.engine.is_running():
            return False
        self.engine.clear_result()
        tile = EMPTY if digit == 0 else Tile.user(digit)
        return self.engine.try_insert(index, tile)

    def write_selected(self, digit: int) -> bool:
        if self.selected is None:
            return False
        return self.write_tile(self.selected, digit)

    def select(self, index: Optional[int]) -> None:
        """Pick the cell that keyboard digits go to; ignored while running."""
        if self.engine.is_running():
            return
        if index is not None and not 0 <= index < len(self.engine.grid):
            raise IndexError(f"Cell index must be 0-80, got {index}")
        self.selected = index

    def clear_result(self) -> bool:
        return self.engine.clear_result()

    def clear_board(self) -> bool:
        return self.engine.clear_board()

    def available_digits(self, index: int) -> List[int]:
        """Digits that could still go in a cell, for hint display."""
        return self.engine.grid.candidates.candidates(index)

    # -- search ------------------------------------------------------------

    def toggle_solver(self) -> SolverState:
        return self.engine.toggle()

    def tick(self) -> int:
        """Advance the search by one frame; returns the steps taken."""
        return self.engine.step()

    def faster(self, dt: float) -> float:
        """Speed up in proportion to how long the key has been held this frame."""
        return self.engine.set_rate(1.0 + 5.0 * dt)

    def slower(self, dt: float) -> float:
        return self.engine.set_rate(1.0 / (1.0 + 5.0 * dt))

    def scroll(self, lines: float) -> float:
        """Mouse-wheel rate change; each line is a 50% step."""
        multiplier = 1.0 + 0.5 * lines
        if multiplier <= 0:
            return self.engine.pacing.steps_per_frame
        return self.engine.set_rate(multiplier)

    def status(self) -> Dict[str, Any]:
        """Values a front end shows next to the grid."""
        pacing = self.engine.pacing
        return {
            "state": self.engine.state.value,
            "running": self.engine.is_running(),
            "steps_per_frame": pacing.steps_per_frame,
            "effective_rate": pacing.effective_rate,
            "step_count": self.engine.step_count,
            "active_index": self.engine.active_index,
            "difficulty": self.difficulty.label,
        }

"""Resumable, speed-controlled backtracking Sudoku solver."""

from .core import Tile, TileKind, Direction, SolverState, TileGrid, CandidateIndex, FormatError
from .solvers import BacktrackEngine, PacingController, StepSolver
from .generator import Difficulty, PuzzleProvider, CorpusProvider, GeneratedProvider
from .config import EngineConfig, load_config
from .session import SolverSession

__version__ = "1.0.0"

__all__ = [
    "Tile",
    "TileKind",
    "Direction",
    "SolverState",
    "TileGrid",
    "CandidateIndex",
    "FormatError",
    "BacktrackEngine",
    "PacingController",
    "StepSolver",
    "Difficulty",
    "PuzzleProvider",
    "CorpusProvider",
    "GeneratedProvider",
    "EngineConfig",
    "load_config",
    "SolverSession",
]

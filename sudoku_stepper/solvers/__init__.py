"""Solvers module: the stepping search engine and its drivers."""

from .base_solver import BaseSolver, SolverStats
from .pacing import PacingController
from .backtrack_engine import BacktrackEngine, EngineSnapshot
from .step_solver import StepSolver

__all__ = [
    "BaseSolver",
    "SolverStats",
    "PacingController",
    "BacktrackEngine",
    "EngineSnapshot",
    "StepSolver",
]

"""Core module for the tile grid and candidate computation."""

from .tiles import Tile, TileKind, Direction, SolverState, EMPTY
from .errors import FormatError
from .candidates import CandidateIndex, FULL_MASK, PEERS, UNITS
from .board import TileGrid, parse_line

__all__ = [
    "Tile",
    "TileKind",
    "Direction",
    "SolverState",
    "EMPTY",
    "FormatError",
    "CandidateIndex",
    "FULL_MASK",
    "PEERS",
    "UNITS",
    "TileGrid",
    "parse_line",
]

"""Exceptions raised while loading puzzles."""

from __future__ import annotations
from typing import Optional


class FormatError(ValueError):
    """
    A puzzle line is not 81 characters drawn from 0-9.

    Attributes:
        line: The offending line (stripped of its trailing newline).
        position: Index of the first bad character, or None for a length error.
    """

    def __init__(self, message: str, line: str = "", position: Optional[int] = None):
        super().__init__(message)
        self.line = line
        self.position = position

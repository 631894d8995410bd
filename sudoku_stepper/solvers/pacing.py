"""Converts a steps-per-frame rate into a per-tick budget of search steps."""

from __future__ import annotations
import math
from typing import Optional


class PacingController:
    """
    Decides how many search steps run on each external tick.

    Rates of one or more run floor(rate) steps per tick. Rates below one
    count ticks in `substeps` and release a single step once
    floor(1 / rate) ticks have been counted.

    In unbounded mode every tick runs the search to completion.
    """

    def __init__(
        self,
        steps_per_frame: float = 1.0,
        min_rate: float = 0.005,
        max_rate: float = 100000.0,
        unbounded: bool = False,
    ):
        if min_rate <= 0 or max_rate < min_rate:
            raise ValueError(f"Invalid rate bounds [{min_rate}, {max_rate}]")
        self.min_rate = min_rate
        self.max_rate = max_rate
        self.unbounded = unbounded
        self.substeps = 0
        self._rate = self._clamp(steps_per_frame)

    def _clamp(self, rate: float) -> float:
        return min(self.max_rate, max(self.min_rate, rate))

    @property
    def steps_per_frame(self) -> float:
        return self._rate

    @steps_per_frame.setter
    def steps_per_frame(self, rate: float) -> None:
        self._rate = self._clamp(rate)

    def set_rate(self, multiplier: float) -> float:
        """
        Scale the current rate, then clamp it to the configured bounds.

        Returns:
            The new rate.
        """
        if multiplier <= 0:
            raise ValueError(f"Rate multiplier must be positive, got {multiplier}")
        self._rate = self._clamp(self._rate * multiplier)
        return self._rate

    @property
    def effective_rate(self) -> float:
        """Rate shown to the user; not used for pacing itself."""
        if self._rate >= 1:
            return float(math.floor(self._rate))
        return 1.0 / (math.floor(1.0 / self._rate) + 1)

    def next_budget(self) -> Optional[int]:
        """
        Number of steps to run on this tick.

        Returns:
            A step count, or None when the caller should run until the
            search stops.
        """
        if self.unbounded:
            return None
        if self._rate >= 1:
            return math.floor(self._rate)
        self.substeps += 1
        if self.substeps >= math.floor(1.0 / self._rate):
            self.substeps = 0
            return 1
        return 0

    def reset(self) -> None:
        self.substeps = 0

    def __repr__(self) -> str:
        return f"PacingController(steps_per_frame={self._rate:.3f}, unbounded={self.unbounded})"

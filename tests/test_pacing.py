"""Unit tests for tick pacing."""

import pytest
from sudoku_stepper.solvers import PacingController


class TestPacingController:
    """Tests for PacingController budgets and rate changes."""

    def test_whole_rate(self):
        pacing = PacingController(steps_per_frame=3.7)
        assert [pacing.next_budget() for _ in range(5)] == [3] * 5

    def test_fractional_rate(self):
        pacing = PacingController(steps_per_frame=0.1)
        budgets = [pacing.next_budget() for _ in range(30)]
        assert sum(budgets) == 3
        assert [i for i, b in enumerate(budgets, 1) if b == 1] == [10, 20, 30]

    def test_quarter_rate(self):
        pacing = PacingController(steps_per_frame=0.25)
        assert [pacing.next_budget() for _ in range(8)] == [0, 0, 0, 1, 0, 0, 0, 1]

    def test_unbounded(self):
        pacing = PacingController(unbounded=True)
        assert pacing.next_budget() is None

    def test_clamping(self):
        pacing = PacingController(steps_per_frame=1e9)
        assert pacing.steps_per_frame == 100000
        pacing.steps_per_frame = 0.0001
        assert pacing.steps_per_frame == 0.005

    def test_set_rate_is_multiplicative(self):
        pacing = PacingController(steps_per_frame=1.0)
        pacing.set_rate(2.0)
        pacing.set_rate(2.0)
        assert pacing.steps_per_frame == 4.0
        pacing.set_rate(1 / 16)
        assert pacing.steps_per_frame == 0.25

    def test_set_rate_clamps(self):
        pacing = PacingController(steps_per_frame=1.0, min_rate=0.5, max_rate=8.0)
        for _ in range(10):
            pacing.set_rate(2.0)
        assert pacing.steps_per_frame == 8.0
        for _ in range(10):
            pacing.set_rate(0.5)
        assert pacing.steps_per_frame == 0.5

    def test_set_rate_rejects_non_positive(self):
        with pytest.raises(ValueError):
            PacingController().set_rate(0)

    def test_invalid_bounds(self):
        with pytest.raises(ValueError):
            PacingController(min_rate=10, max_rate=1)

    def test_effective_rate(self):
        assert PacingController(steps_per_frame=3.7).effective_rate == 3.0
        assert PacingController(steps_per_frame=0.1).effective_rate == pytest.approx(1 / 11)
        assert PacingController(steps_per_frame=0.25).effective_rate == pytest.approx(0.2)

    def test_reset_clears_substeps(self):
        pacing = PacingController(steps_per_frame=0.25)
        pacing.next_budget()
        pacing.next_budget()
        pacing.reset()
        assert [pacing.next_budget() for _ in range(4)] == [0, 0, 0, 1]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

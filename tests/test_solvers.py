"""Unit tests for the tick-driven solver, benchmark and CLI."""

import json

import pytest
from sudoku_stepper.benchmark import Benchmark
from sudoku_stepper.cli import main
from sudoku_stepper.core import TileGrid
from sudoku_stepper.generator import CorpusProvider, Difficulty
from sudoku_stepper.solvers import StepSolver


class TestStepSolver:
    """Tests for StepSolver."""

    def test_solve_puzzle(self, classic_puzzle, classic_solution):
        grid = TileGrid.from_string(classic_puzzle)
        solver = StepSolver(steps_per_frame=100)

        solution, stats = solver.solve(grid)

        assert stats.solved
        assert solution is not None
        assert solution.to_string() == classic_solution
        assert grid.to_string() == classic_puzzle

    def test_stats_collected(self, classic_puzzle):
        solver = StepSolver(steps_per_frame=100)
        _, stats = solver.solve(TileGrid.from_string(classic_puzzle))

        assert stats.steps > 81
        # The tick after the last step notices the cursor has left the grid.
        assert stats.ticks == stats.steps // 100 + 1
        assert stats.time_seconds > 0
        assert stats.extra["final_state"] == "solution_found"
        assert stats.to_dict()["algorithm"] == "Stepwise Backtracking"

    def test_tick_limit(self, classic_puzzle):
        solver = StepSolver(steps_per_frame=1, max_ticks=10)
        solution, stats = solver.solve(TileGrid.from_string(classic_puzzle))

        assert solution is None
        assert not stats.solved
        assert stats.steps == 10
        assert stats.extra["error"] == "Tick limit reached"

    def test_trace_matches_steps(self, classic_puzzle):
        solver = StepSolver(steps_per_frame=0.5, record_trace=True)
        _, stats = solver.solve(TileGrid.from_string(classic_puzzle))

        assert len(solver.trace) == stats.steps
        assert [s.step_count for s in solver.trace[:3]] == [1, 2, 3]
        assert solver.trace[-1].grid.count("0") == 0

    def test_rate_bounds_reach_engine(self, classic_puzzle):
        solver = StepSolver(steps_per_frame=500, max_rate=50)
        assert solver.steps_per_frame == 50
        engine = solver.make_engine(TileGrid.from_string(classic_puzzle))
        assert engine.pacing.steps_per_frame == 50
        assert engine.set_rate(10) == 50
        assert engine.set_rate(1e-9) == 0.005

    def test_no_lookahead_name(self):
        assert "no lookahead" in StepSolver(lookahead=False).name

    def test_unsolvable(self):
        solver = StepSolver(steps_per_frame=10, unbounded=True)
        solution, stats = solver.solve(TileGrid.from_string("023456789" + "100000000" + "0" * 63))
        assert solution is None
        assert stats.extra["final_state"] == "no_solution"
        assert stats.ticks == 1


class TestBenchmark:
    """Tests for the benchmark runner."""

    def test_run_and_summary(self, tmp_path, classic_puzzle):
        provider = CorpusProvider({Difficulty.EASY: [classic_puzzle]})
        benchmark = Benchmark(
            puzzles_per_difficulty=2,
            difficulties=[Difficulty.EASY],
            provider=provider,
        )
        results = benchmark.run(show_progress=False)

        assert len(results) == 4
        assert all(r.solved for r in results)
        summary = benchmark.get_summary()
        assert summary["results_by_algorithm"]["Lookahead"]["accuracy"] == 100
        lookahead = summary["results_by_difficulty"]["easy"]["Lookahead"]["avg_steps"]
        plain = summary["results_by_difficulty"]["easy"]["Plain"]["avg_steps"]
        assert lookahead <= plain

        benchmark.save_results(str(tmp_path))
        saved = json.loads((tmp_path / "benchmark_results.json").read_text())
        assert saved[0]["steps"] > 0


class TestCli:
    """Tests for the command-line entry point."""

    def test_solve(self, capsys, classic_puzzle, classic_solution):
        main(["solve", "--puzzle", classic_puzzle, "--rate", "500"])
        out = capsys.readouterr().out
        assert "Solved" in out
        assert "| 5 3 4 |" in out

    def test_solve_bad_puzzle(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["solve", "--puzzle", "12345"])
        assert exc_info.value.code == 1
        assert "Error parsing puzzle" in capsys.readouterr().out

    def test_solve_unsolvable_exit_code(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["solve", "--puzzle", "023456789" + "100000000" + "0" * 63, "--instant"])
        assert exc_info.value.code == 2

    def test_solve_uses_config_rate_bounds(self, tmp_path, capsys, classic_puzzle):
        path = tmp_path / "engine.json"
        path.write_text(json.dumps({"max_rate": 5}))
        main(["--config", str(path), "solve", "--puzzle", classic_puzzle, "--rate", "500"])
        out = capsys.readouterr().out
        assert "at 5 steps per tick" in out
        assert "Solved" in out

    def test_generate_uses_config_seed(self, tmp_path):
        config_path = tmp_path / "engine.json"
        config_path.write_text(json.dumps({"seed": 3}))
        outputs = []
        for name in ("a.json", "b.json"):
            out_path = tmp_path / name
            main(["--config", str(config_path), "generate", "--count", "1",
                  "--difficulty", "easy", "--output", str(out_path)])
            outputs.append(json.loads(out_path.read_text()))
        assert outputs[0] == outputs[1]

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

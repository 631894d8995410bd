"""Unit tests for difficulty tiers, puzzle sources and the generator."""

import pytest
from sudoku_stepper.core import FormatError, SolverState, TileGrid
from sudoku_stepper.generator import (
    CorpusProvider,
    Difficulty,
    GeneratedProvider,
    SudokuGenerator,
    count_solutions,
    has_unique_solution,
)
from sudoku_stepper.solvers import BacktrackEngine, PacingController


class TestDifficulty:
    """Tests for difficulty transitions."""

    def test_harder_saturates(self):
        assert Difficulty.EASY.harder() is Difficulty.MEDIUM
        assert Difficulty.HARD.harder() is Difficulty.VERY_HARD
        assert Difficulty.VERY_HARD.harder() is Difficulty.VERY_HARD

    def test_easier_saturates(self):
        assert Difficulty.VERY_HARD.easier() is Difficulty.HARD
        assert Difficulty.EASY.easier() is Difficulty.EASY

    def test_from_name(self):
        assert Difficulty.from_name("VeryHard") is Difficulty.VERY_HARD
        assert Difficulty.from_name("very-hard") is Difficulty.VERY_HARD
        assert Difficulty.from_name(" Easy ") is Difficulty.EASY
        with pytest.raises(ValueError):
            Difficulty.from_name("impossible")

    def test_clue_ranges_shrink(self):
        tiers = list(Difficulty)
        for easier, harder in zip(tiers, tiers[1:]):
            assert easier.clue_range[0] > harder.clue_range[1]

    def test_label(self):
        assert Difficulty.VERY_HARD.label == "Very Hard"


class TestCorpusProvider:
    """Tests for CorpusProvider."""

    def test_returns_lines_for_tier(self, classic_puzzle):
        provider = CorpusProvider({Difficulty.EASY: [classic_puzzle + "\n"]}, seed=1)
        assert provider.get_line(Difficulty.EASY) == classic_puzzle
        assert len(provider) == 1

    def test_missing_tier(self, classic_puzzle):
        provider = CorpusProvider({Difficulty.EASY: [classic_puzzle]})
        with pytest.raises(KeyError):
            provider.get_line(Difficulty.HARD)

    def test_malformed_lines_fail_at_load_time(self):
        provider = CorpusProvider({Difficulty.EASY: ["12x"]})
        line = provider.get_line(Difficulty.EASY)
        with pytest.raises(FormatError):
            TileGrid.from_string(line)

    def test_seeded_choice_is_reproducible(self, classic_puzzle, classic_solution):
        lines = {Difficulty.MEDIUM: [classic_puzzle, classic_solution] * 5}
        picks_a = [CorpusProvider(lines, seed=3).get_line(Difficulty.MEDIUM) for _ in range(3)]
        picks_b = [CorpusProvider(lines, seed=3).get_line(Difficulty.MEDIUM) for _ in range(3)]
        assert picks_a == picks_b

    def test_from_directory(self, tmp_path, classic_puzzle):
        (tmp_path / "hard.txt").write_text(classic_puzzle + "\n\n")
        provider = CorpusProvider.from_directory(str(tmp_path))
        assert provider.get_line(Difficulty.HARD) == classic_puzzle
        with pytest.raises(KeyError):
            provider.get_line(Difficulty.EASY)

    def test_from_empty_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            CorpusProvider.from_directory(str(tmp_path))


class TestSudokuGenerator:
    """Tests for SudokuGenerator."""

    def test_count_solutions(self, classic_puzzle):
        grid = TileGrid.from_string(classic_puzzle).digits()
        assert count_solutions(grid) == 1
        assert has_unique_solution(grid)
        grid[0, :] = 0
        grid[1, :] = 0
        assert count_solutions(grid, limit=2) == 2

    def test_generate_creates_valid_puzzle(self):
        generator = SudokuGenerator(seed=42)
        puzzle = generator.generate(Difficulty.EASY)
        assert puzzle.is_valid()
        assert puzzle.count_empty() > 0
        assert puzzle.count_filled() >= Difficulty.EASY.clue_range[0]
        assert has_unique_solution(puzzle.digits())

    def test_generate_with_solution(self):
        generator = SudokuGenerator(seed=7)
        puzzle, solution = generator.generate_with_solution(Difficulty.EASY)
        assert solution.is_solved()
        for given, solved in zip(puzzle, solution):
            if given.has_digit:
                assert given.digit == solved.digit

    def test_engine_finds_generated_solution(self):
        puzzle, solution = SudokuGenerator(seed=11).generate_with_solution(Difficulty.EASY)
        engine = BacktrackEngine(pacing=PacingController(unbounded=True))
        engine.load(puzzle.tiles)
        engine.start()
        engine.step()
        assert engine.state is SolverState.SOLUTION_FOUND
        assert engine.grid.to_string() == solution.to_string()

    def test_seed_is_reproducible(self):
        line_a = SudokuGenerator(seed=5).generate_line(Difficulty.EASY)
        line_b = SudokuGenerator(seed=5).generate_line(Difficulty.EASY)
        assert line_a == line_b
        assert len(line_a) == 81

    def test_generated_provider(self):
        line = GeneratedProvider(seed=3).get_line(Difficulty.EASY)
        assert TileGrid.from_string(line).is_valid()

    def test_save_corpus_round_trip(self, tmp_path, classic_puzzle):
        SudokuGenerator.save_corpus([classic_puzzle], str(tmp_path), Difficulty.MEDIUM)
        provider = CorpusProvider.from_directory(str(tmp_path))
        assert provider.get_line(Difficulty.MEDIUM) == classic_puzzle

    def test_save_to_folder(self, tmp_path, classic_puzzle):
        SudokuGenerator.save_to_folder([TileGrid.from_string(classic_puzzle)], str(tmp_path))
        text = (tmp_path / "puzzle_1.txt").read_text()
        assert text.startswith(classic_puzzle)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

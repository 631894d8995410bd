"""Command-line interface for the stepping Sudoku solver."""

import argparse
import json
import logging
import sys

from .benchmark import Benchmark
from .benchmark.visualizer import Visualizer
from .config import load_config
from .core.board import TileGrid
from .core.errors import FormatError
from .generator import Difficulty, SudokuGenerator
from .solvers import StepSolver


DIFFICULTY_CHOICES = [d.value for d in Difficulty] + ["all"]


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Resumable, speed-controlled backtracking Sudoku solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 5 hard puzzles into a corpus directory
  sudoku-stepper generate --count 5 --difficulty hard --corpus puzzles/

  # Solve a puzzle at 250 steps per tick and print the cursor trace
  sudoku-stepper solve --puzzle "530070000600..." --rate 250 --trace

  # Compare the search with and without lookahead
  sudoku-stepper benchmark --puzzles 3 --output results/
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON file with engine settings"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate Sudoku puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=5,
        help="Number of puzzles to generate (default: 5)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d", choices=DIFFICULTY_CHOICES, default="medium",
        help="Difficulty level (default: medium)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--corpus", type=str, default=None,
        help="Append lines to <corpus>/<difficulty>.txt"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility (default: from config)"
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 for empty cells)"
    )
    solve_parser.add_argument(
        "--rate", "-r", type=float, default=None,
        help="Steps per tick (default: from config)"
    )
    solve_parser.add_argument(
        "--instant", action="store_true",
        help="Run the whole search in a single tick"
    )
    solve_parser.add_argument(
        "--no-lookahead", action="store_true",
        help="Disable forward checking after each assignment"
    )
    solve_parser.add_argument(
        "--max-ticks", type=int, default=None,
        help="Give up after this many ticks"
    )
    solve_parser.add_argument(
        "--trace", action="store_true",
        help="Print cursor position after every step"
    )
    solve_parser.add_argument(
        "--plot", type=str, default=None,
        help="Directory to save a cursor trace chart"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run solver benchmarks")
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=3,
        help="Puzzles per difficulty (default: 3)"
    )
    bench_parser.add_argument(
        "--difficulty", "-d", choices=DIFFICULTY_CHOICES, default="all",
        help="Difficulty to benchmark (default: all)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility (default: from config, else 42)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "generate":
        cmd_generate(args)
    elif args.command == "solve":
        cmd_solve(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def _difficulties(name):
    if name == "all":
        return list(Difficulty)
    return [Difficulty(name)]


def _seed(args, default=None):
    """The --seed flag, falling back to the config file's seed."""
    if args.seed is not None:
        return args.seed
    seed = load_config(args.config).seed
    return default if seed is None else seed


def cmd_generate(args):
    """Handle the generate command."""
    generator = SudokuGenerator(seed=_seed(args))
    all_puzzles = []

    for difficulty in _difficulties(args.difficulty):
        print(f"\nGenerating {args.count} {difficulty.label} puzzles...")
        lines = [generator.generate_line(difficulty) for _ in range(args.count)]

        for i, line in enumerate(lines, 1):
            puzzle = TileGrid.from_string(line)
            all_puzzles.append({
                "difficulty": difficulty.value,
                "index": i,
                "puzzle": line,
                "clues": puzzle.count_filled()
            })
            print(f"\n--- {difficulty.label} Puzzle {i} ({puzzle.count_filled()} clues) ---")
            print(puzzle)

        if args.corpus:
            path = SudokuGenerator.save_corpus(lines, args.corpus, difficulty)
            print(f"\nAppended {len(lines)} lines to {path}")

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_puzzles, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")

    print(f"\nTotal puzzles generated: {len(all_puzzles)}")


def cmd_solve(args):
    """Handle the solve command."""
    config = load_config(args.config)

    try:
        grid = TileGrid.from_string(args.puzzle)
    except FormatError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)

    print("Input puzzle:")
    print(grid)
    print()

    solver = StepSolver(
        steps_per_frame=args.rate if args.rate is not None else config.steps_per_frame,
        lookahead=config.lookahead and not args.no_lookahead,
        max_ticks=args.max_ticks,
        record_trace=args.trace or args.plot is not None,
        unbounded=config.unbounded or args.instant,
        min_rate=config.min_rate,
        max_rate=config.max_rate,
    )
    print(f"Solving with {solver.name} at {solver.steps_per_frame:g} steps per tick...")
    solution, stats = solver.solve(grid)

    if args.trace:
        for snap in solver.trace:
            print(f"{snap.step_count:>8}  cell {snap.active_index:>2}  "
                  f"{snap.direction.value:<8}  {snap.grid}")

    if stats.solved:
        print(f"✓ Solved in {stats.steps:,} steps over {stats.ticks:,} ticks "
              f"({stats.time_seconds:.4f}s)")
        print(f"  Backtracks: {stats.backtracks:,}")
        print(solution)
    else:
        reason = stats.extra.get("error", stats.extra.get("final_state", "unknown"))
        print(f"✗ No solution ({reason}) after {stats.steps:,} steps")

    if args.plot:
        path = Visualizer([], args.plot).plot_cursor_trace(solver.trace)
        print(f"Cursor trace saved to {path}")

    if not stats.solved:
        sys.exit(2)


def cmd_benchmark(args):
    """Handle the benchmark command."""
    difficulties = _difficulties(args.difficulty)

    print("=" * 60)
    print("STEPPING SEARCH BENCHMARK")
    print("=" * 60)
    print(f"Puzzles per difficulty: {args.puzzles}")
    print(f"Difficulties: {[d.value for d in difficulties]}")

    benchmark = Benchmark(
        puzzles_per_difficulty=args.puzzles,
        difficulties=difficulties,
        seed=_seed(args, default=42)
    )

    print(f"Solvers: {', '.join(benchmark.solvers.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for algo, stats in summary["results_by_algorithm"].items():
        print(f"\n{algo}:")
        print(f"  Solved: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Steps: {stats['avg_steps']:,.0f} (max {stats['max_steps']:,})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        charts = Visualizer(results, args.output).generate_all()
        for chart in charts:
            print(f"  - {chart}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()

"""Command-line interface for solving and generating puzzles."""

import argparse
import json
import logging
import sys

from .core.errors import SudokuError
from .core.text import format_puzzle, parse
from .generator import PuzzleGenerator
from .solvers import ALL_STRATEGIES, DEFAULT_STRATEGIES, DeductionSolver

SAMPLE_PUZZLE = """
2__ 4__ 6__
_13 _28 __7
_76 _5_ 8__

9__ ___ _6_
__5 ___ 3__
_3_ ___ __9

__4 _3_ 92_
3__ 74_ 51_
__8 __5 __3
"""


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku solver and puzzle generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a puzzle given on stdin, showing each deduction
  cat problem.txt | sudoku-logic -v solve

  # Solve the built-in sample problem with every deduction pass
  sudoku-logic solve --sample --full

  # Generate 5 puzzles reproducibly
  sudoku-logic generate --count 5 --seed 42

  # Keep generating from seeds 1..200, printing each new sparsest puzzle
  sudoku-logic hunt --attempts 200
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Print every deduction step"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a puzzle")
    source = solve_parser.add_mutually_exclusive_group()
    source.add_argument(
        "--puzzle", "-p", type=str, default=None,
        help="Puzzle text (81 cells, '_' or '.' for empty cells)"
    )
    source.add_argument(
        "--file", "-f", type=str, default=None,
        help="Read the puzzle from a file"
    )
    source.add_argument(
        "--sample", "-s", action="store_true",
        help="Solve a built-in sample puzzle"
    )
    solve_parser.add_argument(
        "--full", action="store_true",
        help="Use every deduction pass before falling back to search"
    )
    solve_parser.add_argument(
        "--no-backtracking", action="store_true",
        help="Stop where deduction stalls instead of searching"
    )

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=1,
        help="Number of puzzles to generate (default: 1)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    gen_parser.add_argument(
        "--full", action="store_true",
        help="Allow removals that need the extra deduction passes"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--folder", type=str, default=None,
        help="Also save each puzzle as a text file in this folder"
    )

    # Hunt command
    hunt_parser = subparsers.add_parser("hunt", help="Search seeds for sparse puzzles")
    hunt_parser.add_argument(
        "--attempts", "-n", type=int, default=100,
        help="Number of seeds to try (default: 100)"
    )
    hunt_parser.add_argument(
        "--first-seed", type=int, default=1,
        help="Seed to start from (default: 1)"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Compare solve pipelines")
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=10,
        help="Number of puzzles to generate (default: 10)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "solve":
            cmd_solve(args)
        elif args.command == "generate":
            cmd_generate(args)
        elif args.command == "hunt":
            cmd_hunt(args)
        elif args.command == "benchmark":
            cmd_benchmark(args)
    except SudokuError as e:
        print_fatal(f"error: {e}")


def print_fatal(msg: str) -> None:
    print(msg, file=sys.stderr)
    sys.exit(1)


def load_problem(args) -> str:
    """Puzzle text from --puzzle, --file, --sample or stdin."""
    if args.puzzle is not None:
        return args.puzzle
    if args.sample:
        return SAMPLE_PUZZLE
    if args.file is not None:
        try:
            with open(args.file) as f:
                return f.read()
        except OSError as e:
            print_fatal(f"Failed reading {args.file}. {e}")
    return sys.stdin.read()


def cmd_solve(args):
    """Handle the solve command."""
    grid = parse(load_problem(args))
    print("PROBLEM:")
    print(grid)

    strategies = ALL_STRATEGIES if args.full else DEFAULT_STRATEGIES
    solver = DeductionSolver(strategies, use_backtracking=not args.no_backtracking)
    stats = solver.solve(grid)

    if stats.solved:
        print("SOLUTION:")
    else:
        print("STALLED:")
    print(grid)
    print(f"{stats.sweeps} sweeps in {stats.time_seconds:.4f}s"
          + (", search needed" if stats.backtracked else ""))
    if not stats.solved:
        sys.exit(1)


def cmd_generate(args):
    """Handle the generate command."""
    strategies = ALL_STRATEGIES if args.full else DEFAULT_STRATEGIES
    generator = PuzzleGenerator(seed=args.seed, strategies=strategies)
    puzzles = generator.generate_batch(args.count, show_progress=args.count > 1)

    for i, result in enumerate(puzzles, 1):
        print(f"\n--- Puzzle {i} ({result.clues} filled) ---")
        print(format_puzzle(result.puzzle))

    if args.folder:
        PuzzleGenerator.save_to_folder(puzzles, args.folder)
        print(f"Puzzles saved individually in '{args.folder}/'")

    if args.output:
        with open(args.output, "w") as f:
            json.dump([p.to_dict() for p in puzzles], f, indent=2)
        print(f"All puzzles saved to {args.output}")


def cmd_hunt(args):
    """Handle the hunt command."""
    generator = PuzzleGenerator()
    for result in generator.hunt(args.attempts, first_seed=args.first_seed, show_progress=True):
        print(f"{result.seed} seed puzzle ({result.clues} filled):")
        print(result.puzzle)


def cmd_benchmark(args):
    """Handle the benchmark command."""
    from .benchmark import Benchmark

    print("=" * 60)
    print("SOLVE PIPELINE BENCHMARK")
    print("=" * 60)

    benchmark = Benchmark(puzzle_count=args.puzzles, seed=args.seed)
    print(f"Puzzles: {args.puzzles}")
    print(f"Solvers: {', '.join(benchmark.solvers.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\nBy Solver:")
    print("-" * 50)
    for name, stats in summary["results_by_algorithm"].items():
        print(f"\n{name}:")
        print(f"  Accuracy: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Needed search: {stats['backtracked']}")

    benchmark.save_results(args.output)

    if not args.no_charts:
        import matplotlib
        matplotlib.use("Agg")
        from .benchmark.visualizer import Visualizer

        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        for chart in charts:
            print(f"  - {chart}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()

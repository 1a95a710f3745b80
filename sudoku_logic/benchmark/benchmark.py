"""Benchmarking framework for comparing solve pipelines on generated puzzles."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
import json
import logging
import os

import numpy as np
from tqdm import tqdm

from ..core.errors import SudokuError
from ..core.grid import Grid
from ..generator import PuzzleGenerator, GeneratedPuzzle
from ..solvers import (
    ALL_STRATEGIES,
    BaseSolver,
    BacktrackingSolver,
    DeductionSolver,
)

log = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single solver run on one puzzle."""
    puzzle_id: int
    clues: int
    algorithm: str
    solved: bool
    time_seconds: float
    sweeps: int
    backtracked: bool
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "clues": self.clues,
            "algorithm": self.algorithm,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "sweeps": self.sweeps,
            "backtracked": self.backtracked,
            **self.extra
        }


class Benchmark:
    """
    Benchmark comparing solve pipelines.

    Generates puzzles, runs every solver on its own copy of each one and
    collects timings and whether search was needed.
    """

    def __init__(
        self,
        puzzle_count: int = 10,
        solvers: Optional[Dict[str, BaseSolver]] = None,
        seed: Optional[int] = None,
        puzzles: Optional[List[Grid]] = None,
    ):
        """
        Initialize the benchmark.

        Args:
            puzzle_count: Number of puzzles to generate.
            solvers: Dict of solver_name -> solver_instance (default: the
                minimal pipeline, the full pipeline and pure backtracking).
            seed: Random seed for reproducible puzzle generation.
            puzzles: Puzzles to use instead of generating them.
        """
        self.puzzle_count = puzzle_count if puzzles is None else len(puzzles)
        self.seed = seed

        if solvers is None:
            self.solvers = {
                "Deduction": DeductionSolver(),
                "Full deduction": DeductionSolver(ALL_STRATEGIES),
                "Backtracking": BacktrackingSolver(),
            }
        else:
            self.solvers = solvers

        self.puzzles: List[Grid] = list(puzzles) if puzzles is not None else []
        self.generated: List[GeneratedPuzzle] = []
        self.results: List[BenchmarkResult] = []

    def generate_puzzles(self, show_progress: bool = True) -> None:
        """Generate all puzzles for benchmarking."""
        generator = PuzzleGenerator(seed=self.seed)
        log.info("Generating %d puzzles", self.puzzle_count)
        self.generated = generator.generate_batch(self.puzzle_count, show_progress=show_progress)
        self.puzzles = [g.puzzle for g in self.generated]

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run every solver on every puzzle.

        Returns:
            List of BenchmarkResult objects.
        """
        if not self.puzzles:
            self.generate_puzzles(show_progress)

        self.results = []
        total_tests = len(self.puzzles) * len(self.solvers)
        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for puzzle_id, puzzle in enumerate(self.puzzles):
            for solver_name, solver in self.solvers.items():
                self.results.append(self._run_single(puzzle, puzzle_id, solver_name, solver))
                pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        puzzle: Grid,
        puzzle_id: int,
        solver_name: str,
        solver: BaseSolver
    ) -> BenchmarkResult:
        """Run a single solver on a copy of a single puzzle."""
        grid = puzzle.copy()
        try:
            stats = solver.solve(grid)
        except SudokuError as e:
            log.warning("%s failed on puzzle %d: %s", solver_name, puzzle_id, e)
            stats = solver.stats
        return BenchmarkResult(
            puzzle_id=puzzle_id,
            clues=puzzle.count_filled(),
            algorithm=solver_name,
            solved=stats.solved,
            time_seconds=stats.time_seconds,
            sweeps=stats.sweeps,
            backtracked=stats.backtracked,
            extra=dict(stats.extra),
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        clue_counts = [p.count_filled() for p in self.puzzles]
        summary = {
            "total_puzzles": len(self.puzzles),
            "solvers_tested": list(self.solvers.keys()),
            "clues": {
                "min": int(np.min(clue_counts)) if clue_counts else 0,
                "max": int(np.max(clue_counts)) if clue_counts else 0,
                "mean": float(np.mean(clue_counts)) if clue_counts else 0.0,
            },
            "results_by_algorithm": {},
        }

        for solver_name in self.solvers:
            solver_results = [r for r in self.results if r.algorithm == solver_name]
            if not solver_results:
                continue
            times = np.array([r.time_seconds for r in solver_results])
            summary["results_by_algorithm"][solver_name] = {
                "accuracy": sum(r.solved for r in solver_results) / len(solver_results) * 100,
                "avg_time_seconds": float(times.mean()),
                "max_time_seconds": float(times.max()),
                "min_time_seconds": float(times.min()),
                "backtracked": sum(r.backtracked for r in solver_results),
                "avg_sweeps": float(np.mean([r.sweeps for r in solver_results])),
                "total_solved": sum(r.solved for r in solver_results),
                "total_tested": len(solver_results),
            }

        return summary

    def save_results(self, output_dir: str) -> List[str]:
        """Save benchmark results and the puzzles to files."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        paths = [results_file, summary_file]
        if self.generated:
            paths += PuzzleGenerator.save_to_folder(
                self.generated, os.path.join(output_dir, "puzzles")
            )
        log.info("Results saved to %s", output_dir)
        return paths

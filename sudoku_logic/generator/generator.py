"""Puzzle generator: random solved grid, then cell removal while deduction still solves it."""

from __future__ import annotations
import logging
import os
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from tqdm import tqdm

from ..core.errors import NoSolution
from ..core.grid import CELL_COUNT, SIZE, Grid
from ..core.text import format_puzzle, to_string
from ..solvers.backtracking import is_solvable
from ..solvers.deduction_solver import MAX_ITERATIONS, solve_with_deduction
from ..solvers.strategies import DEFAULT_STRATEGIES, Strategy

log = logging.getLogger(__name__)

# Consecutive fruitless removal attempts before the puzzle is declared done.
MAX_RETRIES = 100


@dataclass
class GeneratedPuzzle:
    """A generated puzzle together with the grid it was carved from."""
    puzzle: Grid
    solution: Grid
    seed: Optional[int] = None
    attempts: int = 0
    # Filled-cell count after every removal attempt
    clue_history: List[int] = field(default_factory=list)

    @property
    def clues(self) -> int:
        """Filled cells left in the puzzle; fewer is harder."""
        return self.puzzle.count_filled()

    def to_dict(self):
        return {
            "seed": self.seed,
            "clues": self.clues,
            "puzzle": to_string(self.puzzle),
            "solution": to_string(self.solution),
        }


class PuzzleGenerator:
    """
    Generator for puzzles that the deduction passes can solve on their own.

    Algorithm:
    1. Fill an empty grid cell by cell (row-major) with random values,
       checking with backtracking search that each choice keeps the grid
       completable.
    2. Clear random cells one at a time, keeping each removal only if the
       deduction passes still solve the grid without search. Stop after
       ``max_retries`` consecutive attempts that remove nothing.

    Puzzles are solvable but not guaranteed to have a unique solution.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        strategies: Sequence[Strategy] = DEFAULT_STRATEGIES,
        max_retries: int = MAX_RETRIES,
        max_iterations: int = MAX_ITERATIONS,
    ):
        """
        Initialize the generator.

        Args:
            seed: Seed for a private random source. Ignored if ``rng`` is given.
            rng: Random source to draw from; the same seeded source
                reproduces the same puzzles.
            strategies: Deduction passes used as the removal oracle.
            max_retries: Fruitless removal attempts allowed in a row.
            max_iterations: Sweep cap handed to the deduction loop.
        """
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.strategies = tuple(strategies)
        self.max_retries = max_retries
        self.max_iterations = max_iterations

    def generate(self) -> GeneratedPuzzle:
        """
        Generate one puzzle.

        Returns:
            The puzzle, its solution and the removal history.
        """
        solution = self.fill_grid()
        result = self.remove_cells(solution)
        result.seed = self.seed
        log.info("generated puzzle with %d clues after %d removal attempts",
                 result.clues, result.attempts)
        return result

    def generate_batch(self, count: int, show_progress: bool = False) -> List[GeneratedPuzzle]:
        """
        Generate multiple puzzles from this generator's random stream.

        Args:
            count: Number of puzzles to generate.
            show_progress: Display a progress bar.
        """
        return [
            self.generate()
            for _ in tqdm(range(count), desc="Generating", disable=not show_progress)
        ]

    def fill_grid(self) -> Grid:
        """
        Build a random, fully solved grid.

        Raises:
            NoSolution: if a cell runs out of values that keep the grid
                completable, which the invariant rules out.
        """
        grid = Grid()
        for row in range(SIZE):
            for col in range(SIZE):
                value = self._find_value_that_fits(grid, row, col)
                grid.assign(row, col, value)
        log.debug("filled grid:\n%s", grid)
        return grid

    def _find_value_that_fits(self, grid: Grid, row: int, col: int) -> int:
        """Draw candidates at random until one leaves the grid completable."""
        untried = grid.cell(row, col).candidate_values()
        while untried:
            value = self.rng.choice(untried)
            trial = grid.copy()
            trial.assign(row, col, value)
            if is_solvable(trial):
                return value
            log.debug("value %d at %d,%d leaves the grid unsolvable", value, row, col)
            untried.remove(value)
        raise NoSolution(f"no value keeps the grid completable at {row},{col}")

    def remove_cells(self, solution: Grid) -> GeneratedPuzzle:
        """
        Clear cells from a solved grid while deduction alone still solves it.

        Args:
            solution: A fully solved grid; left untouched.

        Returns:
            The resulting puzzle with its solution and removal history.
        """
        values = solution.values()
        history = [sum(1 for v in values if v)]
        attempts = 0
        failures = 0
        while failures < self.max_retries:
            attempts += 1
            row, col = self.rng.randrange(SIZE), self.rng.randrange(SIZE)
            idx = row * SIZE + col
            if values[idx] and self._can_remove(values, idx):
                values[idx] = 0
                failures = 0
                log.debug("cleared cell %d,%d", row, col)
            else:
                failures += 1
            history.append(CELL_COUNT - values.count(0))

        return GeneratedPuzzle(
            puzzle=Grid.from_values(values),
            solution=solution.copy(),
            attempts=attempts,
            clue_history=history,
        )

    def _can_remove(self, values: List[int], idx: int) -> bool:
        trial_values = list(values)
        trial_values[idx] = 0
        trial = Grid.from_values(trial_values)
        return solve_with_deduction(trial, self.strategies, self.max_iterations)

    def hunt(self, attempts: int, first_seed: int = 1, show_progress: bool = False) -> List[GeneratedPuzzle]:
        """
        Look for sparse puzzles by generating from consecutive seeds.

        Each seed gets a fresh random source, so any puzzle found can be
        regenerated from its seed alone.

        Returns:
            Every puzzle that had fewer clues than all before it, in order.
        """
        best = CELL_COUNT + 1
        found = []
        for seed in tqdm(range(first_seed, first_seed + attempts), desc="Hunting",
                         disable=not show_progress):
            generator = PuzzleGenerator(
                seed=seed,
                strategies=self.strategies,
                max_retries=self.max_retries,
                max_iterations=self.max_iterations,
            )
            result = generator.generate()
            if result.clues < best:
                best = result.clues
                found.append(result)
                log.info("seed %d puzzle (%d filled)", seed, result.clues)
        return found

    @staticmethod
    def save_to_folder(puzzles: List[GeneratedPuzzle], folder_path: str, prefix: str = "puzzle") -> List[str]:
        """
        Save a list of puzzles to a folder as individual text files.

        Args:
            puzzles: Generated puzzles.
            folder_path: Directory to save the puzzles.
            prefix: Prefix for the filename (default: "puzzle").

        Returns:
            Paths of the written files.
        """
        os.makedirs(folder_path, exist_ok=True)

        paths = []
        for i, result in enumerate(puzzles, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            with open(file_path, "w") as f:
                f.write(format_puzzle(result.puzzle))
            paths.append(file_path)
        return paths

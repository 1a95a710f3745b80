"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import logging
import time

from ..core.errors import SudokuError
from ..core.grid import Grid
from ..core.validator import is_solved

log = logging.getLogger(__name__)


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    sweeps: int = 0

    # Whether the search fallback had to run
    backtracked: bool = False

    # Changes made per deduction pass, keyed by pass name
    strategy_counts: Dict[str, int] = field(default_factory=dict)

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def record(self, strategy_name: str) -> None:
        """Count one productive application of a deduction pass."""
        self.strategy_counts[strategy_name] = self.strategy_counts.get(strategy_name, 0) + 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "sweeps": self.sweeps,
            "backtracked": self.backtracked,
            "strategy_counts": dict(self.strategy_counts),
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for Sudoku solvers."""

    name: str = "BaseSolver"

    def __init__(self):
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, grid: Grid) -> SolverStats:
        """
        Solve a puzzle in place with timing.

        The grid is mutated towards its solution. Errors are recorded in
        ``stats.extra["error"]`` and then re-raised: a failed solve never
        comes back looking like a success.

        Args:
            grid: The puzzle to solve. Owned by the solver for the call.

        Returns:
            Statistics for the run.
        """
        self.stats = SolverStats(algorithm=self.name)

        start_time = time.perf_counter()
        try:
            self._solve(grid)
        except SudokuError as e:
            self.stats.extra["error"] = str(e)
            log.debug("%s failed: %s", self.name, e)
            raise
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time

        self.stats.solved = is_solved(grid)
        return self.stats

    @abstractmethod
    def _solve(self, grid: Grid) -> Optional[Grid]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            grid: The puzzle to solve, modified in place.

        Returns:
            The same grid, for chaining.
        """
        pass

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)

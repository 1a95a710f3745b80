"""Deduction-driven solver with a backtracking fallback."""

from __future__ import annotations
import logging
from typing import Optional, Sequence

from .base_solver import BaseSolver, SolverStats
from .backtracking import solve_by_backtracking
from .strategies import ALL_STRATEGIES, DEFAULT_STRATEGIES, Strategy
from ..core.errors import NonConvergent
from ..core.grid import Grid
from ..core.validator import is_solved

log = logging.getLogger(__name__)

# Upper bound on deduction sweeps; never reached on a 9x9 grid.
MAX_ITERATIONS = 10000


def apply_until_fixed_point(
    grid: Grid,
    strategies: Sequence[Strategy] = DEFAULT_STRATEGIES,
    max_iterations: int = MAX_ITERATIONS,
    stats: Optional[SolverStats] = None,
) -> int:
    """
    Run the strategies in order, sweep after sweep, until a sweep changes nothing.

    Args:
        grid: Grid to narrow in place.
        strategies: Passes applied in order on every sweep.
        max_iterations: Sweeps allowed before giving up.
        stats: Optional stats to record sweeps and productive passes in.

    Returns:
        The number of sweeps run, including the final quiet one.

    Raises:
        NonConvergent: if no fixed point is reached within ``max_iterations``.
        ContradictionDetected: from the sanity check, if it is in the list.
    """
    for sweep in range(1, max_iterations + 1):
        log.debug("sweep %d:\n%s", sweep, grid)
        changes_made = False
        for strategy in strategies:
            if strategy.fn(grid):
                log.debug("...done applying: %s", strategy.name)
                if stats is not None:
                    stats.record(strategy.name)
                changes_made = True
        if stats is not None:
            stats.sweeps = sweep
        if not changes_made:
            return sweep
    raise NonConvergent(
        f"no fixed point after {max_iterations} deduction sweeps"
    )


def solve_with_deduction(
    grid: Grid,
    strategies: Sequence[Strategy] = DEFAULT_STRATEGIES,
    max_iterations: int = MAX_ITERATIONS,
) -> bool:
    """
    Deduction-only solvability oracle.

    Returns:
        True if the strategies alone fill the grid. The grid is left at the
        fixed point either way.
    """
    apply_until_fixed_point(grid, strategies, max_iterations)
    return is_solved(grid)


class DeductionSolver(BaseSolver):
    """
    Solver that applies logical deduction passes to a fixed point and then,
    if cells remain, falls back to backtracking search.

    The default pass list is the minimal one (sanity check, naked single,
    hidden single, pointing pair). Pass ``ALL_STRATEGIES`` to add claiming
    pairs, naked pairs, hidden pairs and x-wings before the fallback.
    """

    name = "Deduction"

    def __init__(
        self,
        strategies: Sequence[Strategy] = DEFAULT_STRATEGIES,
        use_backtracking: bool = True,
        max_iterations: int = MAX_ITERATIONS,
    ):
        """
        Initialize the solver.

        Args:
            strategies: Deduction passes, applied in order on each sweep.
            use_backtracking: If True, search when deduction stalls.
            max_iterations: Sweep cap for the deduction loop.
        """
        super().__init__()
        self.strategies = tuple(strategies)
        self.use_backtracking = use_backtracking
        self.max_iterations = max_iterations
        if self.strategies != DEFAULT_STRATEGIES:
            self.name = f"Deduction ({len(self.strategies)} passes)"
            self.stats.algorithm = self.name

    def _solve(self, grid: Grid) -> Optional[Grid]:
        apply_until_fixed_point(grid, self.strategies, self.max_iterations, self.stats)

        if not is_solved(grid) and self.use_backtracking:
            log.debug("Unsolved by deduction. Applying backtracking.")
            self.stats.backtracked = True
            solve_by_backtracking(grid)
        return grid


def solve(grid: Grid, strategies: Sequence[Strategy] = DEFAULT_STRATEGIES) -> SolverStats:
    """
    Solve ``grid`` in place: deduction first, then search.

    Raises:
        ContradictionDetected, NonConvergent, NoSolution: the puzzle cannot
            be solved; the grid is left wherever the failure happened.
    """
    return DeductionSolver(strategies).solve(grid)


def solve_full(grid: Grid) -> SolverStats:
    """Like :func:`solve` but with every deduction pass enabled."""
    return solve(grid, ALL_STRATEGIES)

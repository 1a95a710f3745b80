"""Solvers module: deduction passes, backtracking search and solve pipelines."""

from .base_solver import BaseSolver, SolverStats
from .strategies import (
    Strategy,
    DEFAULT_STRATEGIES,
    ALL_STRATEGIES,
    STRATEGIES_BY_NAME,
    naked_single,
    hidden_single,
    pointing_pair,
    claiming_pair,
    naked_pair,
    hidden_pair,
    x_wing,
)
from .backtracking import BacktrackingSolver, backtrack, is_solvable, solve_by_backtracking
from .deduction_solver import (
    DeductionSolver,
    MAX_ITERATIONS,
    apply_until_fixed_point,
    solve,
    solve_full,
    solve_with_deduction,
)

__all__ = [
    "BaseSolver",
    "SolverStats",
    "Strategy",
    "DEFAULT_STRATEGIES",
    "ALL_STRATEGIES",
    "STRATEGIES_BY_NAME",
    "naked_single",
    "hidden_single",
    "pointing_pair",
    "claiming_pair",
    "naked_pair",
    "hidden_pair",
    "x_wing",
    "BacktrackingSolver",
    "backtrack",
    "is_solvable",
    "solve_by_backtracking",
    "DeductionSolver",
    "MAX_ITERATIONS",
    "apply_until_fixed_point",
    "solve",
    "solve_full",
    "solve_with_deduction",
]

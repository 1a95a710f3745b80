"""Sudoku solving by constraint propagation and backtracking, and generation of deduction-solvable puzzles."""

from .core import (
    Grid,
    parse,
    format_puzzle,
    SudokuError,
    InvalidPuzzleText,
    InvalidAssignment,
    ContradictionDetected,
    NonConvergent,
    NoSolution,
)
from .solvers import solve, solve_full
from .generator import PuzzleGenerator

__version__ = "1.0.0"

__all__ = [
    "Grid",
    "parse",
    "format_puzzle",
    "SudokuError",
    "InvalidPuzzleText",
    "InvalidAssignment",
    "ContradictionDetected",
    "NonConvergent",
    "NoSolution",
    "solve",
    "solve_full",
    "PuzzleGenerator",
]

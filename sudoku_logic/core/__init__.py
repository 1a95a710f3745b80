"""Core module for the grid model, puzzle text and validation."""

from .errors import (
    SudokuError,
    InvalidPuzzleText,
    InvalidAssignment,
    ContradictionDetected,
    NonConvergent,
    NoSolution,
)
from .grid import Grid, Cell, Nonagon
from .text import parse, format_puzzle, format_table, to_string
from .validator import sanity_check, is_solved, validate_solution

__all__ = [
    "SudokuError",
    "InvalidPuzzleText",
    "InvalidAssignment",
    "ContradictionDetected",
    "NonConvergent",
    "NoSolution",
    "Grid",
    "Cell",
    "Nonagon",
    "parse",
    "format_puzzle",
    "format_table",
    "to_string",
    "sanity_check",
    "is_solved",
    "validate_solution",
]

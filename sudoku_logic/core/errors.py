"""Exceptions raised by the grid model, the solvers and the generator."""


class SudokuError(Exception):
    """Base class for every error raised by sudoku_logic."""


class InvalidPuzzleText(SudokuError, ValueError):
    """Puzzle text does not describe 81 cells of digits and placeholders."""


class InvalidAssignment(SudokuError, ValueError):
    """
    An assignment broke the grid contract.

    Raised for out-of-range coordinates or values, for assigning a cell
    that is already set, and for assigning a value that earlier deductions
    have already ruled out for the cell.
    """


class ContradictionDetected(SudokuError):
    """The grid can no longer be completed (duplicate value or a value with nowhere to go)."""


class NonConvergent(SudokuError):
    """The deduction loop did not reach a fixed point within its iteration cap."""


class NoSolution(SudokuError):
    """Exhaustive search found no valid completion."""

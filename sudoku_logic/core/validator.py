"""Validation utilities for Sudoku grids."""

from __future__ import annotations
import logging
from typing import Sequence

from .errors import ContradictionDetected
from .grid import ALL_CANDIDATES, CELL_COUNT, GROUP_NAMES, GROUPS, SIZE, VALUES, Grid

log = logging.getLogger(__name__)


def find_duplicate(values: Sequence[int]):
    """
    Find a value that appears twice in a row, column or block.

    Args:
        values: 81 row-major values, 0 for empty.

    Returns:
        ``(group_name, value)`` for the first duplicate, or None.
    """
    for name, indices in zip(GROUP_NAMES, GROUPS):
        seen = set()
        for idx in indices:
            value = values[idx]
            if not value:
                continue
            if value in seen:
                return name, value
            seen.add(value)
    return None


def check_givens(values: Sequence[int]) -> None:
    """
    Reject a value snapshot whose givens already clash.

    Raises:
        ContradictionDetected: naming the group holding the duplicate.
    """
    duplicate = find_duplicate(values)
    if duplicate is not None:
        name, value = duplicate
        raise ContradictionDetected(f"{name} has two values set for {value}")


def sanity_check(grid: Grid) -> bool:
    """
    Check the grid has not reached an impossible state.

    Every set cell must hold 1-9 and every unset cell must keep at least one
    candidate. In every row, column and block each value must either be set
    exactly once or still be a candidate somewhere.

    Returns:
        Always False: the check never changes the grid.

    Raises:
        ContradictionDetected: describing the first violation found.
    """
    for cell in grid.cells:
        if cell.value:
            if not 1 <= cell.value <= SIZE:
                raise ContradictionDetected(
                    f"cell {cell.row},{cell.col} marked set but holds {cell.value}"
                )
        elif not cell.candidates & ALL_CANDIDATES:
            raise ContradictionDetected(
                f"cell {cell.row},{cell.col} marked unset but no candidates available"
            )

    for group in grid.groups:
        placed = 0
        available = 0
        for cell in group.cells:
            if cell.value:
                mask = 1 << cell.value
                if placed & mask:
                    raise ContradictionDetected(
                        f"{group.name} two values set for {cell.value}"
                    )
                placed |= mask
            else:
                available |= cell.candidates
        missing = ALL_CANDIDATES & ~placed & ~available
        if missing:
            value = next(v for v in VALUES if missing & (1 << v))
            raise ContradictionDetected(
                f"{group.name} no candidates available for {value}"
            )
    return False


def is_solved(grid: Grid) -> bool:
    """Check every cell is set and no group repeats a value."""
    if not grid.is_complete():
        return False
    return find_duplicate(grid.values()) is None


def validate_solution(puzzle: Grid, solution: Grid) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if the solution is complete, valid and keeps every clue.
    """
    puzzle_values = puzzle.values()
    solution_values = solution.values()
    for idx in range(CELL_COUNT):
        if puzzle_values[idx] and puzzle_values[idx] != solution_values[idx]:
            log.debug("solution changes clue at index %d", idx)
            return False
    return is_solved(solution)

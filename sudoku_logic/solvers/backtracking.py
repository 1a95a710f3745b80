"""Chronological backtracking over a plain value snapshot."""

from __future__ import annotations
import logging
from typing import List, Optional, Sequence

from .base_solver import BaseSolver
from ..core.errors import NoSolution
from ..core.grid import ALL_CANDIDATES, CELL_COUNT, SIZE, Grid, block_index
from ..core.validator import find_duplicate

log = logging.getLogger(__name__)

_ROW_OF = tuple(i // SIZE for i in range(CELL_COUNT))
_COL_OF = tuple(i % SIZE for i in range(CELL_COUNT))
_BLOCK_OF = tuple(block_index(i // SIZE, i % SIZE) for i in range(CELL_COUNT))


def backtrack(values: Sequence[int]) -> List[int]:
    """
    Complete a value snapshot by depth-first search.

    Cells are visited in row-major order and values tried 1 to 9, keeping
    the first that does not repeat in the cell's row, column or block. No
    propagation happens during the search. Givens that already clash are
    rejected before searching. Uniqueness is not checked: the first
    completion found is returned.

    Args:
        values: 81 row-major values, 0 for empty.

    Returns:
        A new list with every cell filled.

    Raises:
        NoSolution: if the givens clash or the search space is exhausted.
    """
    if len(values) != CELL_COUNT:
        raise ValueError(f"Expected {CELL_COUNT} values, got {len(values)}")
    cells = [int(v) for v in values]
    duplicate = find_duplicate(cells)
    if duplicate is not None:
        name, value = duplicate
        raise NoSolution(f"failed to converge: {name} has two values set for {value}")

    # Used-value masks per row, column and block.
    rows = [0] * SIZE
    cols = [0] * SIZE
    blocks = [0] * SIZE
    for idx, value in enumerate(cells):
        if value:
            mask = 1 << value
            rows[_ROW_OF[idx]] |= mask
            cols[_COL_OF[idx]] |= mask
            blocks[_BLOCK_OF[idx]] |= mask

    def search(idx: int) -> bool:
        while idx < CELL_COUNT and cells[idx]:
            idx += 1
        if idx == CELL_COUNT:
            return True

        r, c, b = _ROW_OF[idx], _COL_OF[idx], _BLOCK_OF[idx]
        free = ALL_CANDIDATES & ~(rows[r] | cols[c] | blocks[b])
        value = 1
        while free >> value:
            mask = 1 << value
            if free & mask:
                cells[idx] = value
                rows[r] |= mask
                cols[c] |= mask
                blocks[b] |= mask
                if search(idx + 1):
                    return True
                rows[r] &= ~mask
                cols[c] &= ~mask
                blocks[b] &= ~mask
            value += 1
        cells[idx] = 0
        return False

    if not search(0):
        raise NoSolution("failed to converge: no completion exists for this grid")
    return cells


def is_solvable(grid: Grid) -> bool:
    """Answer whether the grid's current values can be completed."""
    try:
        backtrack(grid.values())
    except NoSolution:
        return False
    return True


def solve_by_backtracking(grid: Grid) -> None:
    """
    Fill every empty cell with the first completion the search finds.

    The completion is written back through :meth:`Grid.assign`, so a grid
    whose candidates rule the completion out raises ``InvalidAssignment``.
    """
    solution = backtrack(grid.values())
    for cell, value in zip(grid.cells, solution):
        if not cell.value:
            grid.assign(cell.row, cell.col, value)


class BacktrackingSolver(BaseSolver):
    """
    Solver that skips deduction entirely and searches straight away.

    Useful as the reference point the deduction pipelines are measured
    against.
    """

    name = "Backtracking"

    def _solve(self, grid: Grid) -> Optional[Grid]:
        self.stats.backtracked = True
        solve_by_backtracking(grid)
        return grid

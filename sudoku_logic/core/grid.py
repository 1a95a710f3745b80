"""9x9 grid of cells with candidate bitmask bookkeeping."""

from __future__ import annotations
from dataclasses import dataclass
from functools import cached_property
from typing import List, NamedTuple, Sequence, Tuple

import numpy as np

from .errors import InvalidAssignment

SIZE = 9
BOX_SIZE = 3
CELL_COUNT = SIZE * SIZE
VALUES = range(1, SIZE + 1)

# Bit v is set when value v is still possible; bit 0 is never used.
ALL_CANDIDATES = 0b1111111110


def bit(value: int) -> int:
    """Candidate mask holding just ``value``."""
    return 1 << value


def mask_values(mask: int) -> List[int]:
    """Values whose bits are set in ``mask``, ascending."""
    return [value for value in VALUES if mask & (1 << value)]


def index_of(row: int, col: int) -> int:
    return row * SIZE + col


def block_index(row: int, col: int) -> int:
    """Get the block index (0 to 8, row-major) for a cell."""
    return (row // BOX_SIZE) * BOX_SIZE + (col // BOX_SIZE)


ROWS: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(index_of(row, col) for col in range(SIZE)) for row in range(SIZE)
)
COLS: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(index_of(row, col) for row in range(SIZE)) for col in range(SIZE)
)
BLOCKS: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(
        index_of(row, col)
        for row in range(block_row, block_row + BOX_SIZE)
        for col in range(block_col, block_col + BOX_SIZE)
    )
    for block_row in range(0, SIZE, BOX_SIZE)
    for block_col in range(0, SIZE, BOX_SIZE)
)

# Rows, then columns, then blocks.
GROUPS = ROWS + COLS + BLOCKS
GROUP_KINDS = ("row",) * SIZE + ("column",) * SIZE + ("block",) * SIZE
GROUP_NAMES = (
    tuple(f"row {row}" for row in range(SIZE))
    + tuple(f"column {col}" for col in range(SIZE))
    + tuple(f"block {b // BOX_SIZE} {b % BOX_SIZE}" for b in range(SIZE))
)

PEERS: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(sorted(
        (set(ROWS[i // SIZE]) | set(COLS[i % SIZE]) | set(BLOCKS[block_index(i // SIZE, i % SIZE)]))
        - {i}
    ))
    for i in range(CELL_COUNT)
)


@dataclass(eq=False)
class Cell:
    """
    A single square of the grid.

    A set cell holds ``value`` in 1..9 and tracks no candidates. An unset
    cell has ``value`` 0 and a candidate bitmask that must never be empty
    while the grid is solvable.
    """
    row: int
    col: int
    value: int = 0
    candidates: int = ALL_CANDIDATES

    @property
    def is_set(self) -> bool:
        return self.value != 0

    @property
    def block(self) -> int:
        return block_index(self.row, self.col)

    def has_candidate(self, value: int) -> bool:
        return self.value == 0 and bool(self.candidates & (1 << value))

    def candidate_values(self) -> List[int]:
        if self.value:
            return []
        return mask_values(self.candidates)

    def candidate_count(self) -> int:
        return 0 if self.value else bin(self.candidates).count("1")

    def __str__(self) -> str:
        if self.value:
            return f"[{self.row},{self.col} => {self.value}]"
        return f"[{self.row},{self.col} ? {mask_values(self.candidates)}]"


class Nonagon(NamedTuple):
    """Read-only view of the nine cells of a row, column or block."""
    name: str
    kind: str
    cells: Tuple[Cell, ...]


class Grid:
    """
    A 9x9 Sudoku grid.

    Cells are only ever set through :meth:`assign`, which also strikes the
    value from the candidates of every peer. Deduction passes may narrow
    candidates further with :meth:`eliminate` and :meth:`restrict`; nothing
    ever widens a candidate set or clears a set cell.
    """

    def __init__(self):
        """Create an empty grid where every cell has all nine candidates."""
        self._cells = [Cell(row, col) for row in range(SIZE) for col in range(SIZE)]

    @classmethod
    def from_values(cls, values: Sequence[int]) -> Grid:
        """
        Build a grid from 81 row-major values (0 for empty) via :meth:`assign`.

        Raises:
            ValueError: if there are not exactly 81 values.
            InvalidAssignment: if a value conflicts with an earlier one.
        """
        if len(values) != CELL_COUNT:
            raise ValueError(f"Expected {CELL_COUNT} values, got {len(values)}")
        grid = cls()
        for idx, value in enumerate(values):
            if value:
                row, col = divmod(idx, SIZE)
                grid.assign(row, col, int(value))
        return grid

    @classmethod
    def from_array(cls, array: np.ndarray) -> Grid:
        """Create a grid from a 9x9 integer array (0 for empty)."""
        arr = np.asarray(array)
        if arr.shape != (SIZE, SIZE):
            raise ValueError(f"Array shape must be ({SIZE}, {SIZE}), got {arr.shape}")
        return cls.from_values(arr.flatten().tolist())

    def copy(self) -> Grid:
        """Create an independent copy (groups are rebuilt lazily for the copy)."""
        new_grid = Grid.__new__(Grid)
        new_grid._cells = [Cell(c.row, c.col, c.value, c.candidates) for c in self._cells]
        return new_grid

    @property
    def cells(self) -> List[Cell]:
        """All 81 cells in row-major order."""
        return self._cells

    def _index(self, row: int, col: int) -> int:
        """Flat index of a cell, rejecting coordinates off the grid."""
        if not (0 <= row < SIZE and 0 <= col < SIZE):
            raise InvalidAssignment(f"cell {row},{col} is outside the grid")
        return index_of(row, col)

    def cell(self, row: int, col: int) -> Cell:
        return self._cells[self._index(row, col)]

    @cached_property
    def groups(self) -> Tuple[Nonagon, ...]:
        """The 27 rows, columns and blocks, built once per grid."""
        return tuple(
            Nonagon(name, kind, tuple(self._cells[i] for i in indices))
            for name, kind, indices in zip(GROUP_NAMES, GROUP_KINDS, GROUPS)
        )

    @property
    def rows(self) -> Tuple[Nonagon, ...]:
        return self.groups[:SIZE]

    @property
    def columns(self) -> Tuple[Nonagon, ...]:
        return self.groups[SIZE:2 * SIZE]

    @property
    def blocks(self) -> Tuple[Nonagon, ...]:
        return self.groups[2 * SIZE:]

    def assign(self, row: int, col: int, value: int) -> None:
        """
        Set a cell and remove the value from the candidates of its peers.

        Raises:
            InvalidAssignment: if the coordinates or value are out of range,
                the cell is already set, or ``value`` is no longer one of the
                cell's candidates.
        """
        idx = self._index(row, col)
        if not 1 <= value <= SIZE:
            raise InvalidAssignment(f"value must be 1-{SIZE}, got {value}")
        cell = self._cells[idx]
        if cell.value:
            raise InvalidAssignment(f"cell {row},{col} is already set to {cell.value}")
        mask = 1 << value
        if not cell.candidates & mask:
            raise InvalidAssignment(f"{value} is no longer a candidate for cell {row},{col}")

        cell.value = value
        cell.candidates = 0
        keep = ~mask
        for peer in PEERS[idx]:
            self._cells[peer].candidates &= keep

    def eliminate(self, row: int, col: int, value: int) -> bool:
        """
        Remove ``value`` from the candidates of an unset cell.

        Returns:
            True if the candidate was present and has been removed.
        """
        if not 1 <= value <= SIZE:
            raise InvalidAssignment(f"value must be 1-{SIZE}, got {value}")
        cell = self._cells[self._index(row, col)]
        mask = 1 << value
        if cell.value or not cell.candidates & mask:
            return False
        cell.candidates &= ~mask
        return True

    def restrict(self, row: int, col: int, mask: int) -> bool:
        """
        Keep only the candidates of an unset cell that are also in ``mask``.

        Returns:
            True if any candidate was removed.
        """
        cell = self._cells[self._index(row, col)]
        if cell.value:
            return False
        narrowed = cell.candidates & mask
        if narrowed == cell.candidates:
            return False
        cell.candidates = narrowed
        return True

    def values(self) -> List[int]:
        """Row-major snapshot of the 81 values, 0 for empty cells."""
        return [cell.value for cell in self._cells]

    def to_array(self) -> np.ndarray:
        """The values as a 9x9 int32 array."""
        return np.array(self.values(), dtype=np.int32).reshape(SIZE, SIZE)

    def count_filled(self) -> int:
        return sum(1 for cell in self._cells if cell.value)

    def count_empty(self) -> int:
        return CELL_COUNT - self.count_filled()

    def is_complete(self) -> bool:
        """Check if all cells are set."""
        return all(cell.value for cell in self._cells)

    def __str__(self) -> str:
        from .text import format_table
        return format_table(self)

    def __repr__(self) -> str:
        return f"Grid(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return False
        return self.values() == other.values()

"""
Logical deduction passes over a candidate grid.

Every pass has the signature ``fn(grid) -> bool``: it narrows candidates or
sets cells and reports whether anything changed. Passes only ever narrow,
and each one repeats its sweep until the sweep finds nothing new, so calling
a pass twice in a row never changes the grid the second time. Cells, groups
and values are always scanned in ascending order.
"""

from __future__ import annotations
import functools
import logging
from collections import Counter
from itertools import combinations
from typing import Callable, Dict, List, NamedTuple, Tuple

from ..core.errors import ContradictionDetected
from ..core.grid import ALL_CANDIDATES, VALUES, Grid, mask_values
from ..core.validator import sanity_check

log = logging.getLogger(__name__)

Pass = Callable[[Grid], bool]


class Strategy(NamedTuple):
    """A named deduction pass."""
    name: str
    fn: Pass


def until_stable(sweep: Pass) -> Pass:
    """Repeat ``sweep`` until it makes no change; report whether any sweep did."""
    @functools.wraps(sweep)
    def run(grid: Grid) -> bool:
        changed = False
        while sweep(grid):
            changed = True
        return changed
    return run


@until_stable
def naked_single(grid: Grid) -> bool:
    """
    Set every unset cell that has exactly one candidate left.

    Raises:
        ContradictionDetected: an unset cell has no candidates at all.
    """
    changed = False
    for cell in grid.cells:
        candidates = cell.candidates
        if not cell.value and not candidates:
            raise ContradictionDetected(
                f"cell {cell.row},{cell.col} marked unset but no candidates available"
            )
        # candidates is a mask between 2^1 and 2^9
        if not cell.value and not candidates & (candidates - 1):
            value = candidates.bit_length() - 1
            grid.assign(cell.row, cell.col, value)
            log.debug("cell %d,%d has single value %d", cell.row, cell.col, value)
            changed = True
    return changed


@until_stable
def hidden_single(grid: Grid) -> bool:
    """Set a value where it fits only one cell of a row, column or block."""
    changed = False
    for group in grid.groups:
        once = 0
        twice = 0
        for cell in group.cells:
            if not cell.value:
                twice |= once & cell.candidates
                once |= cell.candidates
        singles = once & ~twice
        if not singles:
            continue
        for value in VALUES:
            mask = 1 << value
            if not singles & mask:
                continue
            for cell in group.cells:
                if not cell.value and cell.candidates & mask:
                    grid.assign(cell.row, cell.col, value)
                    log.debug("%s has hidden single at %d,%d for value %d",
                              group.name, cell.row, cell.col, value)
                    changed = True
                    break
    return changed


@until_stable
def pointing_pair(grid: Grid) -> bool:
    """
    Inside a block, a value confined to one row (or column) cannot appear
    in the rest of that row (or column) outside the block.
    """
    changed = False
    for block in grid.blocks:
        for value in VALUES:
            places = [cell for cell in block.cells if cell.has_candidate(value)]
            if not places:
                continue
            rows = {cell.row for cell in places}
            cols = {cell.col for cell in places}
            block_id = places[0].block

            if len(rows) == 1:
                row = places[0].row
                impacting = False
                for cell in grid.rows[row].cells:
                    if cell.block != block_id:
                        impacting |= grid.eliminate(cell.row, cell.col, value)
                if impacting:
                    log.debug("row %d pointing pair for value %d", row, value)
                changed |= impacting

            if len(cols) == 1:
                col = places[0].col
                impacting = False
                for cell in grid.columns[col].cells:
                    if cell.block != block_id:
                        impacting |= grid.eliminate(cell.row, cell.col, value)
                if impacting:
                    log.debug("column %d pointing pair for value %d", col, value)
                changed |= impacting
    return changed


@until_stable
def claiming_pair(grid: Grid) -> bool:
    """
    When a value's only places in a row or column share one block, no other
    cell of that block can hold it.
    """
    changed = False
    for line in grid.rows + grid.columns:
        for value in VALUES:
            places = [cell for cell in line.cells if cell.has_candidate(value)]
            if not places:
                continue
            block_ids = {cell.block for cell in places}
            if len(block_ids) != 1:
                continue
            impacting = False
            for cell in grid.blocks[block_ids.pop()].cells:
                if cell in line.cells:
                    continue
                impacting |= grid.eliminate(cell.row, cell.col, value)
            if impacting:
                log.debug("%s claiming pair for value %d", line.name, value)
            changed |= impacting
    return changed


@until_stable
def naked_pair(grid: Grid) -> bool:
    """
    Two cells of a group sharing the same two candidates take those two
    values; strike them from every other cell of the group.
    """
    changed = False
    for group in grid.groups:
        counts = Counter(cell.candidates for cell in group.cells if not cell.value)
        for mask in sorted(counts):
            if counts[mask] != 2 or bin(mask).count("1") != 2:
                continue
            impacting = False
            for cell in group.cells:
                if not cell.value and cell.candidates != mask:
                    impacting |= grid.restrict(cell.row, cell.col, ALL_CANDIDATES & ~mask)
            if impacting:
                log.debug("%s naked pair for candidates %s", group.name, mask_values(mask))
            changed |= impacting
    return changed


@until_stable
def hidden_pair(grid: Grid) -> bool:
    """
    Two values that can only go in the same two cells of a group claim
    those cells; strip every other candidate from them.
    """
    changed = False
    for group in grid.groups:
        for v1, v2 in combinations(VALUES, 2):
            pair = (1 << v1) | (1 << v2)
            matches = []
            mismatch = False
            for cell in group.cells:
                if cell.value:
                    continue
                shared = cell.candidates & pair
                if shared == pair:
                    matches.append(cell)
                elif shared:
                    mismatch = True
                    break
            if mismatch or len(matches) != 2:
                continue
            impacting = False
            for cell in matches:
                impacting |= grid.restrict(cell.row, cell.col, pair)
            if impacting:
                log.debug("%s hidden pair for values %d&%d", group.name, v1, v2)
            changed |= impacting
    return changed


def _x_wing_axis(grid: Grid, value: int, lines, crossing, axis: str) -> bool:
    """
    X-wing along one axis: ``lines`` are scanned for the value's positions and
    ``crossing`` are the perpendicular lines eliminations happen on.
    """
    mask = 1 << value
    slots: Dict[Tuple[int, int], List[int]] = {}
    for line_id, line in enumerate(lines):
        positions = tuple(
            pos for pos, cell in enumerate(line.cells)
            if not cell.value and cell.candidates & mask
        )
        if len(positions) == 2:
            slots.setdefault(positions, []).append(line_id)

    changed = False
    for positions in sorted(slots):
        line_ids = slots[positions]
        if len(line_ids) != 2:
            continue
        impacting = False
        for pos in positions:
            for line_id, cell in enumerate(crossing[pos].cells):
                if line_id not in line_ids:
                    impacting |= grid.eliminate(cell.row, cell.col, value)
        if impacting:
            log.debug("%s based x-wing on %s for value %d", axis, line_ids, value)
        changed |= impacting
    return changed


@until_stable
def x_wing(grid: Grid) -> bool:
    """
    When a value fits exactly two cells in each of two rows, and those cells
    share the same two columns, no other row can hold it in those columns.
    The same holds with rows and columns swapped.
    """
    changed = False
    for value in VALUES:
        changed |= _x_wing_axis(grid, value, grid.rows, grid.columns, "row")
        changed |= _x_wing_axis(grid, value, grid.columns, grid.rows, "column")
    return changed


SANITY_CHECK = Strategy("sanity check", sanity_check)
NAKED_SINGLE = Strategy("naked single", naked_single)
HIDDEN_SINGLE = Strategy("hidden single", hidden_single)
POINTING_PAIR = Strategy("pointing pair", pointing_pair)
CLAIMING_PAIR = Strategy("claiming pair", claiming_pair)
NAKED_PAIR = Strategy("naked pair", naked_pair)
HIDDEN_PAIR = Strategy("hidden pair", hidden_pair)
X_WING = Strategy("x-wing", x_wing)

# What the solver runs by default before falling back to search.
DEFAULT_STRATEGIES: Tuple[Strategy, ...] = (
    SANITY_CHECK,
    NAKED_SINGLE,
    HIDDEN_SINGLE,
    POINTING_PAIR,
)

ALL_STRATEGIES: Tuple[Strategy, ...] = DEFAULT_STRATEGIES + (
    CLAIMING_PAIR,
    NAKED_PAIR,
    HIDDEN_PAIR,
    X_WING,
)

STRATEGIES_BY_NAME: Dict[str, Strategy] = {s.name: s for s in ALL_STRATEGIES}

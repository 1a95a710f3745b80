"""Unit tests for the deduction passes.

Each pass is set up on an otherwise empty grid whose candidates have been
narrowed by hand, at positions drawn from the seeded ``arbitrary`` fixture.
"""

import pytest

from puzzles import ONE_MISSING
from sudoku_logic.core.errors import ContradictionDetected
from sudoku_logic.core.grid import VALUES, Grid
from sudoku_logic.core.text import parse
from sudoku_logic.solvers.strategies import (
    ALL_STRATEGIES,
    DEFAULT_STRATEGIES,
    STRATEGIES_BY_NAME,
    claiming_pair,
    hidden_pair,
    hidden_single,
    naked_pair,
    naked_single,
    pointing_pair,
    x_wing,
)

X_WING_PROBLEM = """
___ __5 __9
_8_ 4__ ___
___ _7_ __4

_32 748 9__
__6 539 _42
___ 216 37_

__4 _57 293
__5 _21 4_7
2__ __4 ___
"""


def apply(fn, grid):
    assert fn(grid), f"{fn.__name__} made no changes"


def no_op_check(fn, grid):
    """Running a pass again straight away must change nothing."""
    assert not fn(grid), f"{fn.__name__} made unexpected changes"


def block_start(n):
    return n - n % 3


class TestNakedSingle:
    """Tests for the naked single pass."""

    def test_fills_last_candidate(self):
        grid = parse(ONE_MISSING)
        cell = grid.cell(0, 1)
        assert not cell.is_set
        assert cell.candidate_values() == [2]

        apply(naked_single, grid)

        assert cell.is_set
        assert cell.value == 2
        no_op_check(naked_single, grid)

    def test_nothing_on_empty_grid(self):
        no_op_check(naked_single, Grid())

    def test_cell_without_candidates(self):
        """A wiped-out cell is reported rather than skipped."""
        grid = parse(ONE_MISSING)
        grid.eliminate(0, 1, 2)
        with pytest.raises(ContradictionDetected, match="cell 0,1"):
            naked_single(grid)

    def test_two_cells_forced_to_one_value(self):
        """Filling one forced cell leaves its twin in the row with nothing."""
        grid = Grid()
        grid.restrict(4, 0, 1 << 6)
        grid.restrict(4, 8, 1 << 6)
        with pytest.raises(ContradictionDetected, match="cell 4,8"):
            naked_single(grid)
        assert grid.cell(4, 0).value == 6


class TestHiddenSingle:
    """Tests for the hidden single pass."""

    def test_found_in_row(self, arbitrary):
        grid = Grid()
        row, col, n = arbitrary.row(), arbitrary.col(), arbitrary.value()
        for c in range(9):
            if c != col:
                grid.eliminate(row, c, n)

        assert not grid.cell(row, (col - 1) % 9).has_candidate(n)
        assert grid.cell(row, col).has_candidate(n)
        assert not grid.cell(row, (col + 1) % 9).has_candidate(n)

        apply(hidden_single, grid)

        assert grid.cell(row, col).value == n
        no_op_check(hidden_single, grid)

    def test_found_in_column(self, arbitrary):
        grid = Grid()
        row, col, n = arbitrary.row(), arbitrary.col(), arbitrary.value()
        for r in range(9):
            if r != row:
                grid.eliminate(r, col, n)

        apply(hidden_single, grid)

        assert grid.cell(row, col).value == n
        no_op_check(hidden_single, grid)

    def test_found_in_block(self, arbitrary):
        grid = Grid()
        row, col, n = arbitrary.row(), arbitrary.col(), arbitrary.value()
        for r in range(block_start(row), block_start(row) + 3):
            for c in range(block_start(col), block_start(col) + 3):
                if (r, c) != (row, col):
                    grid.eliminate(r, c, n)

        apply(hidden_single, grid)

        assert grid.cell(row, col).value == n
        no_op_check(hidden_single, grid)

    def test_fills_multiple_singles(self, arbitrary):
        grid = Grid()
        row1, row2 = arbitrary.two()
        col = arbitrary.col()
        n1, n2 = arbitrary.two_values()
        for r in range(9):
            if r != row1:
                grid.eliminate(r, col, n1)
            if r != row2:
                grid.eliminate(r, col, n2)

        apply(hidden_single, grid)

        assert grid.cell(row1, col).value == n1
        assert grid.cell(row2, col).value == n2
        no_op_check(hidden_single, grid)


class TestPointingPair:
    """Tests for the pointing pair pass."""

    def test_horizontal_removes_from_row(self, arbitrary):
        grid = Grid()
        row = arbitrary.row()
        col1, col2 = arbitrary.two_same_block()
        n = arbitrary.value()
        br, bc = block_start(row), block_start(col1)
        for r in range(br, br + 3):
            for c in range(bc, bc + 3):
                if r != row or c not in (col1, col2):
                    grid.eliminate(r, c, n)

        outside = [c for c in range(9) if c // 3 != bc // 3]
        assert all(grid.cell(row, c).has_candidate(n) for c in outside)

        apply(pointing_pair, grid)

        assert not any(grid.cell(row, c).has_candidate(n) for c in outside)
        assert grid.cell(row, col1).has_candidate(n)
        assert grid.cell(row, col2).has_candidate(n)
        no_op_check(pointing_pair, grid)

    def test_vertical_removes_from_column(self, arbitrary):
        grid = Grid()
        row1, row2 = arbitrary.two_same_block()
        col = arbitrary.col()
        n = arbitrary.value()
        br, bc = block_start(row1), block_start(col)
        for r in range(br, br + 3):
            for c in range(bc, bc + 3):
                if c != col or r not in (row1, row2):
                    grid.eliminate(r, c, n)

        outside = [r for r in range(9) if r // 3 != br // 3]
        assert all(grid.cell(r, col).has_candidate(n) for r in outside)

        apply(pointing_pair, grid)

        assert not any(grid.cell(r, col).has_candidate(n) for r in outside)
        no_op_check(pointing_pair, grid)


class TestClaimingPair:
    """Tests for the claiming pair pass."""

    def test_row_claims_block(self, arbitrary):
        grid = Grid()
        row, col, n = arbitrary.row(), arbitrary.col(), arbitrary.value()
        br, bc = block_start(row), block_start(col)
        for c in range(9):
            if c // 3 != bc // 3:
                grid.eliminate(row, c, n)

        others = [(r, c) for r in range(br, br + 3) if r != row for c in range(bc, bc + 3)]
        assert all(grid.cell(r, c).has_candidate(n) for r, c in others)

        apply(claiming_pair, grid)

        assert not any(grid.cell(r, c).has_candidate(n) for r, c in others)
        no_op_check(claiming_pair, grid)

    def test_column_claims_block(self, arbitrary):
        grid = Grid()
        row, col, n = arbitrary.row(), arbitrary.col(), arbitrary.value()
        br, bc = block_start(row), block_start(col)
        for r in range(9):
            if r // 3 != br // 3:
                grid.eliminate(r, col, n)

        others = [(r, c) for r in range(br, br + 3) for c in range(bc, bc + 3) if c != col]

        apply(claiming_pair, grid)

        assert not any(grid.cell(r, c).has_candidate(n) for r, c in others)
        no_op_check(claiming_pair, grid)


def keep_only(grid, row, col, n1, n2):
    for n in VALUES:
        if n not in (n1, n2):
            grid.eliminate(row, col, n)


class TestNakedPair:
    """Tests for the naked pair pass."""

    def test_row(self, arbitrary):
        grid = Grid()
        row = arbitrary.row()
        col1, col2 = arbitrary.two()
        n1, n2 = arbitrary.two_values()
        keep_only(grid, row, col1, n1, n2)
        keep_only(grid, row, col2, n1, n2)

        apply(naked_pair, grid)

        for c in range(9):
            cell = grid.cell(row, c)
            if c in (col1, col2):
                assert cell.candidate_values() == sorted((n1, n2))
            else:
                assert not cell.has_candidate(n1)
                assert not cell.has_candidate(n2)
                assert cell.candidate_count() == 7
        no_op_check(naked_pair, grid)

    def test_column(self, arbitrary):
        grid = Grid()
        row1, row2 = arbitrary.two()
        col = arbitrary.col()
        n1, n2 = arbitrary.two_values()
        keep_only(grid, row1, col, n1, n2)
        keep_only(grid, row2, col, n1, n2)

        apply(naked_pair, grid)

        for r in range(9):
            if r not in (row1, row2):
                cell = grid.cell(r, col)
                assert not cell.has_candidate(n1)
                assert not cell.has_candidate(n2)
                assert cell.candidate_count() == 7
        no_op_check(naked_pair, grid)

    def test_block(self, arbitrary):
        grid = Grid()
        row1, row2 = arbitrary.two_same_block()
        col1, col2 = arbitrary.two_same_block()
        n1, n2 = arbitrary.two_values()
        keep_only(grid, row1, col1, n1, n2)
        keep_only(grid, row2, col2, n1, n2)

        apply(naked_pair, grid)

        br, bc = block_start(row1), block_start(col1)
        for r in range(br, br + 3):
            for c in range(bc, bc + 3):
                cell = grid.cell(r, c)
                if (r, c) in ((row1, col1), (row2, col2)):
                    assert cell.has_candidate(n1) and cell.has_candidate(n2)
                else:
                    assert not cell.has_candidate(n1)
                    assert not cell.has_candidate(n2)
        no_op_check(naked_pair, grid)


class TestHiddenPair:
    """Tests for the hidden pair pass."""

    def test_row(self, arbitrary):
        grid = Grid()
        row = arbitrary.row()
        col1, col2 = arbitrary.two()
        n1, n2 = arbitrary.two_values()
        for c in range(9):
            if c not in (col1, col2):
                grid.eliminate(row, c, n1)
                grid.eliminate(row, c, n2)

        assert grid.cell(row, col1).candidate_count() == 9

        apply(hidden_pair, grid)

        assert grid.cell(row, col1).candidate_values() == sorted((n1, n2))
        assert grid.cell(row, col2).candidate_values() == sorted((n1, n2))
        no_op_check(hidden_pair, grid)

    def test_column(self, arbitrary):
        grid = Grid()
        row1, row2 = arbitrary.two()
        col = arbitrary.col()
        n1, n2 = arbitrary.two_values()
        for r in range(9):
            if r not in (row1, row2):
                grid.eliminate(r, col, n1)
                grid.eliminate(r, col, n2)

        apply(hidden_pair, grid)

        assert grid.cell(row1, col).candidate_values() == sorted((n1, n2))
        assert grid.cell(row2, col).candidate_values() == sorted((n1, n2))
        no_op_check(hidden_pair, grid)

    def test_block(self, arbitrary):
        grid = Grid()
        row1, row2 = arbitrary.two_same_block()
        col1, col2 = arbitrary.two_same_block()
        n1, n2 = arbitrary.two_values()
        br, bc = block_start(row1), block_start(col1)
        for r in range(br, br + 3):
            for c in range(bc, bc + 3):
                if (r, c) not in ((row1, col1), (row2, col2)):
                    grid.eliminate(r, c, n1)
                    grid.eliminate(r, c, n2)

        apply(hidden_pair, grid)

        assert grid.cell(row1, col1).candidate_values() == sorted((n1, n2))
        assert grid.cell(row2, col2).candidate_values() == sorted((n1, n2))
        no_op_check(hidden_pair, grid)


class TestXWing:
    """Tests for the x-wing pass."""

    def test_row_based(self, arbitrary):
        grid = Grid()
        row1, row2 = arbitrary.two()
        col1, col2 = arbitrary.two()
        n = arbitrary.value()
        for c in range(9):
            if c not in (col1, col2):
                grid.eliminate(row1, c, n)
                grid.eliminate(row2, c, n)

        apply(x_wing, grid)

        for r in range(9):
            if r not in (row1, row2):
                assert not grid.cell(r, col1).has_candidate(n)
                assert not grid.cell(r, col2).has_candidate(n)
        assert grid.cell(row1, col1).has_candidate(n)
        no_op_check(x_wing, grid)

    def test_column_based(self, arbitrary):
        grid = Grid()
        row1, row2 = arbitrary.two()
        col1, col2 = arbitrary.two()
        n = arbitrary.value()
        for r in range(9):
            if r not in (row1, row2):
                grid.eliminate(r, col1, n)
                grid.eliminate(r, col2, n)

        apply(x_wing, grid)

        for c in range(9):
            if c not in (col1, col2):
                assert not grid.cell(row1, c).has_candidate(n)
                assert not grid.cell(row2, c).has_candidate(n)
        no_op_check(x_wing, grid)

    def test_sample_problem(self):
        """The x-wing on 8 in columns 2 and 8 opens a hidden single at 0,4."""
        grid = parse(X_WING_PROBLEM)
        givens = grid.values()
        assert grid.cell(8, 4).has_candidate(8)

        apply(x_wing, grid)
        assert not grid.cell(8, 4).has_candidate(8)
        assert grid.cell(0, 4).value == 0

        apply(hidden_single, grid)
        assert grid.cell(0, 4).value == 8
        assert all(v == g for v, g in zip(grid.values(), givens) if g)


class TestStrategyLists:
    """Tests for the published pass lists."""

    def test_default_is_prefix_of_all(self):
        assert ALL_STRATEGIES[:len(DEFAULT_STRATEGIES)] == DEFAULT_STRATEGIES
        assert [s.name for s in DEFAULT_STRATEGIES] == [
            "sanity check", "naked single", "hidden single", "pointing pair",
        ]

    def test_lookup_by_name(self):
        assert STRATEGIES_BY_NAME["x-wing"].fn is x_wing
        assert len(STRATEGIES_BY_NAME) == 8

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES, ids=lambda s: s.name)
    def test_every_pass_idempotent_on_puzzle(self, strategy):
        grid = parse(X_WING_PROBLEM)
        strategy.fn(grid)
        no_op_check(strategy.fn, grid)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

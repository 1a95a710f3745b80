"""Unit tests for the backtracking search."""

import pytest

from puzzles import SAMPLE_PROBLEMS, SIMPLEST_SOLUTION
from sudoku_logic.core.errors import NoSolution
from sudoku_logic.core.text import format_puzzle, parse
from sudoku_logic.solvers.backtracking import (
    BacktrackingSolver,
    backtrack,
    is_solvable,
    solve_by_backtracking,
)

UNSOLVABLE = """
1_3 456 729
426 789 1_3
789 123 456

214 365 897
365 897 214
897 214 365

531 642 978
642 978 531
978 531 642
"""

EMPTY = "___ ___ ___\n" * 9

# The search keeps the first completion in row-major, ascending-value order.
EMPTY_COMPLETION = """
123 456 789
456 789 123
789 123 456

214 365 897
365 897 214
897 214 365

531 642 978
642 978 531
978 531 642
"""

SINGLE_ONE = EMPTY[:12 * 4] + "___ _1_ ___\n" + EMPTY[12 * 5:]

SINGLE_ONE_COMPLETION = """
123 456 789
456 789 123
789 123 456

214 365 897
367 918 245
598 247 361

631 892 574
845 671 932
972 534 618
"""

MISSING_EIGHTS = """
123 456 7_9
456 7_9 123
7_9 123 456

234 567 _91
567 _91 234
_91 234 567

345 67_ 912
67_ 912 345
912 345 67_
"""


def run_backtrack(problem, expected):
    grid = parse(problem)
    solve_by_backtracking(grid)
    assert format_puzzle(grid) == format_puzzle(expected)


class TestBacktrack:
    """Tests for the search over value snapshots."""

    def test_unsolvable_problem(self):
        grid = parse(UNSOLVABLE)
        with pytest.raises(NoSolution, match="failed to converge"):
            backtrack(grid.values())
        assert not is_solvable(grid)

    def test_all_empty(self):
        """An empty grid fills with the lexicographically first completion."""
        run_backtrack(EMPTY, EMPTY_COMPLETION)

    def test_single_element(self):
        """Uniqueness is not checked: one given still yields a completion."""
        assert SINGLE_ONE.count("1") == 1
        run_backtrack(SINGLE_ONE, SINGLE_ONE_COMPLETION)

    def test_leaves_input_untouched(self):
        values = parse(MISSING_EIGHTS).values()
        before = list(values)
        solved = backtrack(values)
        assert values == before
        assert 0 not in solved

    def test_clashing_givens(self):
        """Givens that already repeat a value are refused without searching."""
        with pytest.raises(NoSolution, match="row 0 has two values set for 5"):
            backtrack([5, 5] + [0] * 79)
        values = [0] * 81
        values[0] = values[10] = 3
        with pytest.raises(NoSolution, match="block 0 0"):
            backtrack(values)

    def test_wrong_length(self):
        with pytest.raises(ValueError):
            backtrack([0] * 80)

    def test_missing_eights(self):
        run_backtrack(MISSING_EIGHTS, SIMPLEST_SOLUTION)

    @pytest.mark.parametrize(
        "name,problem,solution", SAMPLE_PROBLEMS, ids=[p[0] for p in SAMPLE_PROBLEMS]
    )
    def test_valid_problems(self, name, problem, solution):
        run_backtrack(problem, solution)


class TestBacktrackingSolver:
    """Tests for the search-only solver."""

    def test_solve(self):
        _, problem, solution = SAMPLE_PROBLEMS[-1]
        grid = parse(problem)
        stats = BacktrackingSolver().solve(grid)

        assert stats.solved
        assert stats.backtracked
        assert stats.algorithm == "Backtracking"
        assert grid == parse(solution)

    def test_failure_is_recorded_and_raised(self):
        solver = BacktrackingSolver()
        with pytest.raises(NoSolution):
            solver.solve(parse(UNSOLVABLE))
        assert not solver.stats.solved
        assert "failed to converge" in solver.stats.extra["error"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

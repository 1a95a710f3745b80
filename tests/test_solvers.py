"""Unit tests for the deduction pipeline and its search fallback."""

import pytest

from puzzles import ONE_MISSING, SAMPLE_PROBLEMS, SIMPLEST_SOLUTION, TOO_HARD
from sudoku_logic import solve, solve_full
from sudoku_logic.core.errors import ContradictionDetected, NonConvergent
from sudoku_logic.core.grid import Grid
from sudoku_logic.core.text import format_puzzle, parse
from sudoku_logic.core.validator import is_solved
from sudoku_logic.solvers import (
    ALL_STRATEGIES,
    DEFAULT_STRATEGIES,
    DeductionSolver,
    apply_until_fixed_point,
    solve_with_deduction,
)
from sudoku_logic.solvers.base_solver import SolverStats

SAMPLE_IDS = [p[0] for p in SAMPLE_PROBLEMS]


class TestSolve:
    """Black-box tests: puzzle text in, solution text out."""

    @pytest.mark.parametrize("name,problem,solution", SAMPLE_PROBLEMS, ids=SAMPLE_IDS)
    def test_default_pipeline(self, name, problem, solution):
        grid = parse(problem)
        stats = solve(grid)
        assert stats.solved
        assert format_puzzle(grid) == format_puzzle(solution)

    @pytest.mark.parametrize("name,problem,solution", SAMPLE_PROBLEMS, ids=SAMPLE_IDS)
    def test_full_pipeline(self, name, problem, solution):
        grid = parse(problem)
        stats = solve_full(grid)
        assert stats.solved
        assert format_puzzle(grid) == format_puzzle(solution)

    def test_simple_puzzles_need_no_search(self):
        grid = parse(SAMPLE_PROBLEMS[0][1])
        stats = solve(grid)
        assert not stats.backtracked
        assert stats.strategy_counts["naked single"] >= 1

    def test_hardest_falls_back_to_search(self):
        stats = solve(parse(TOO_HARD))
        assert stats.solved
        assert stats.backtracked

    def test_solution_keeps_givens(self):
        puzzle = parse(ONE_MISSING)
        grid = puzzle.copy()
        solve(grid)
        assert grid == parse(SIMPLEST_SOLUTION)
        assert all(g == v for g, v in zip(puzzle.values(), grid.values()) if g)


class TestDeductionSolver:
    """Tests for the configurable solver."""

    def test_names(self):
        assert DeductionSolver().name == "Deduction"
        solver = DeductionSolver(ALL_STRATEGIES)
        assert solver.name == "Deduction (8 passes)"
        assert solver.stats.algorithm == solver.name

    def test_stats_collected(self):
        stats = DeductionSolver().solve(parse(SAMPLE_PROBLEMS[2][1]))
        assert isinstance(stats, SolverStats)
        assert stats.sweeps >= 2
        assert stats.time_seconds > 0
        assert stats.to_dict()["algorithm"] == "Deduction"

    def test_without_backtracking_stalls(self):
        """Deduction alone stops at its fixed point and leaves cells open."""
        grid = parse(TOO_HARD)
        stats = DeductionSolver(use_backtracking=False).solve(grid)
        assert not stats.solved
        assert not stats.backtracked
        assert not grid.is_complete()

    def test_contradiction_is_raised(self):
        grid = Grid()
        for col in range(9):
            grid.eliminate(0, col, 1)
        solver = DeductionSolver()
        with pytest.raises(ContradictionDetected):
            solver.solve(grid)
        assert "no candidates available for 1" in solver.stats.extra["error"]

    def test_sweep_cap(self):
        with pytest.raises(NonConvergent):
            DeductionSolver(max_iterations=1).solve(parse(SAMPLE_PROBLEMS[1][1]))


class TestFixedPoint:
    """Tests for the deduction loop itself."""

    def test_fixed_point_is_stable(self):
        grid = parse(SAMPLE_PROBLEMS[4][1])
        apply_until_fixed_point(grid, ALL_STRATEGIES)
        before = [(c.value, c.candidates) for c in grid.cells]
        assert apply_until_fixed_point(grid, ALL_STRATEGIES) == 1
        assert [(c.value, c.candidates) for c in grid.cells] == before

    def test_oracle(self):
        assert solve_with_deduction(parse(ONE_MISSING))
        assert not solve_with_deduction(parse(TOO_HARD), DEFAULT_STRATEGIES)

    def test_empty_grid_is_already_stable(self):
        grid = Grid()
        assert apply_until_fixed_point(grid) == 1
        assert not is_solved(grid)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

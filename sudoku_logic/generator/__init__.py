"""Generator module for creating puzzles solvable by deduction."""

from .generator import PuzzleGenerator, GeneratedPuzzle, MAX_RETRIES

__all__ = ["PuzzleGenerator", "GeneratedPuzzle", "MAX_RETRIES"]

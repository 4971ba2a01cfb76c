"""Beans: generator and validator for single-solution bean placement puzzles."""

from .core import PuzzleBoard, Position, validate_placement, count_solutions
from .generator import PuzzleGenerator, generate_puzzle

__all__ = [
    "PuzzleBoard",
    "Position",
    "validate_placement",
    "count_solutions",
    "PuzzleGenerator",
    "generate_puzzle",
]

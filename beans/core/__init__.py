"""Core module for Beans board representation and validation."""

from .board import PuzzleBoard, Position
from .validator import (
    is_non_adjacent,
    is_valid_solution,
    validate_placement,
    count_solutions,
    has_unique_solution,
    ValidationResult,
    RowCount,
    ColumnCount,
    RegionCount,
    Adjacent,
)

__all__ = [
    "PuzzleBoard",
    "Position",
    "is_non_adjacent",
    "is_valid_solution",
    "validate_placement",
    "count_solutions",
    "has_unique_solution",
    "ValidationResult",
    "RowCount",
    "ColumnCount",
    "RegionCount",
    "Adjacent",
]

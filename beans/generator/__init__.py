"""Generator module for creating Beans puzzles."""

from .generator import (
    PuzzleGenerator,
    GenerationState,
    GenerationStatus,
    GenerationStats,
    generate_puzzle,
)
from .regions import RegionPartitioner, is_region_connected
from .solution import SolutionGenerator

__all__ = [
    "PuzzleGenerator",
    "GenerationState",
    "GenerationStatus",
    "GenerationStats",
    "generate_puzzle",
    "RegionPartitioner",
    "is_region_connected",
    "SolutionGenerator",
]

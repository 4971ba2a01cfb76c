"""Beans puzzle generator: solution, regions and uniqueness check."""

from __future__ import annotations
import logging
import os
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..core.board import PuzzleBoard, Position
from ..core.validator import count_solutions
from .regions import RegionPartitioner, all_regions_connected
from .regions import DEFAULT_MAX_ATTEMPTS as DEFAULT_MAX_PARTITION_ATTEMPTS
from .solution import SolutionGenerator, check_size
from .solution import DEFAULT_MAX_ATTEMPTS as DEFAULT_MAX_SOLUTION_ATTEMPTS

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 8
DEFAULT_MAX_UNIQUENESS_ATTEMPTS = 500


class GenerationState(Enum):
    """Steps of the generation loop."""
    GENERATING_SOLUTION = "generating_solution"
    PARTITIONING_REGIONS = "partitioning_regions"
    COUNTING_SOLUTIONS = "counting_solutions"
    REGENERATING_REGIONS = "regenerating_regions"
    DONE = "done"


class GenerationStatus(Enum):
    """How the returned puzzle was obtained."""
    UNIQUE = "unique"
    CANNED = "canned"
    NON_UNIQUE = "non_unique"


@dataclass
class GenerationStats:
    """Statistics from a generator run."""
    size: int = DEFAULT_SIZE
    solution_attempts: int = 0
    used_fallback_solution: bool = False
    partition_attempts: int = 0
    disconnected_partitions: int = 0
    stalls: int = 0
    uniqueness_attempts: int = 0
    solution_count: int = 0
    status: GenerationStatus = GenerationStatus.UNIQUE
    time_seconds: float = 0.0
    
    @property
    def degraded(self) -> bool:
        return self.status is not GenerationStatus.UNIQUE
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "size": self.size,
            "solution_attempts": self.solution_attempts,
            "used_fallback_solution": self.used_fallback_solution,
            "partition_attempts": self.partition_attempts,
            "disconnected_partitions": self.disconnected_partitions,
            "stalls": self.stalls,
            "uniqueness_attempts": self.uniqueness_attempts,
            "solution_count": self.solution_count,
            "status": self.status.value,
            "time_seconds": self.time_seconds,
        }


def canned_regions(solution: Sequence[Sequence[int]], size: int) -> np.ndarray:
    """
    Region map that forces a single answer for the given solution.
    
    Markers 0..N-2 each get a one-cell region and every other cell joins
    region N-1. Those singletons pin N-1 markers, leaving one free row and
    one free column for the last one.
    """
    grid = np.full((size, size), size - 1, dtype=np.int32)
    for region, (row, col) in enumerate(solution[:-1]):
        grid[row, col] = region
    return grid


class PuzzleGenerator:
    """
    Generator for Beans puzzles.
    
    Algorithm:
    1. Generate a valid marker placement (the hidden solution)
    2. Grow one connected region around each marker
    3. Count the placements the regions allow; repartition until exactly one
    
    The solution is never regenerated inside the loop, since region shape
    is what decides how many placements fit.
    """
    
    def __init__(
        self,
        size: int = DEFAULT_SIZE,
        seed: Optional[int] = None,
        max_solution_attempts: int = DEFAULT_MAX_SOLUTION_ATTEMPTS,
        max_partition_attempts: int = DEFAULT_MAX_PARTITION_ATTEMPTS,
        max_uniqueness_attempts: int = DEFAULT_MAX_UNIQUENESS_ATTEMPTS,
        balance_regions: bool = False
    ):
        """
        Initialize the generator.
        
        Args:
            size: Board size (default 8).
            seed: Random seed for reproducibility.
            max_solution_attempts: Shuffles before the fallback solution.
            max_partition_attempts: Regrowths before accepting split regions.
            max_uniqueness_attempts: Partitions tried before the canned puzzle.
            balance_regions: Even out region sizes before counting.
        """
        check_size(size)
        self.size = size
        self.max_uniqueness_attempts = max_uniqueness_attempts
        self.rng = random.Random(seed)
        self.solution_generator = SolutionGenerator(size, max_solution_attempts, self.rng)
        self.partitioner = RegionPartitioner(size, max_partition_attempts, self.rng,
                                             balance=balance_regions)
        self.state = GenerationState.DONE
        self.stats = GenerationStats(size=size)
    
    def generate(self) -> PuzzleBoard:
        """
        Generate a puzzle.
        
        Returns:
            A PuzzleBoard with its region map and solution.
        """
        board, _ = self.generate_with_stats()
        return board
    
    def generate_with_stats(self) -> Tuple[PuzzleBoard, GenerationStats]:
        """
        Generate a puzzle along with statistics about how it was found.
        
        Returns:
            Tuple of (board, stats).
        """
        self.stats = GenerationStats(size=self.size)
        start_time = time.perf_counter()
        
        self._enter(GenerationState.GENERATING_SOLUTION)
        solution = self.solution_generator.generate()
        self.stats.solution_attempts = self.solution_generator.attempts
        self.stats.used_fallback_solution = self.solution_generator.used_fallback
        
        regions = self._find_unique_regions(solution)
        
        self._enter(GenerationState.DONE)
        self.stats.time_seconds = time.perf_counter() - start_time
        logger.info("Generated %dx%d puzzle (%s) after %d partition(s) in %.3fs",
                    self.size, self.size, self.stats.status.value,
                    self.stats.uniqueness_attempts, self.stats.time_seconds)
        
        return PuzzleBoard(self.size, regions, solution), self.stats
    
    def generate_batch(self, count: int) -> List[PuzzleBoard]:
        """
        Generate multiple puzzles.
        
        Args:
            count: Number of puzzles to generate.
            
        Returns:
            List of PuzzleBoard puzzles.
        """
        return [self.generate() for _ in range(count)]
    
    def _find_unique_regions(self, solution: List[Position]) -> np.ndarray:
        """Partition and count until exactly one placement fits."""
        regions = None
        while self.stats.uniqueness_attempts < self.max_uniqueness_attempts:
            self._enter(GenerationState.PARTITIONING_REGIONS)
            self.stats.uniqueness_attempts += 1
            regions = self._partition(solution)
            
            if not all_regions_connected(regions, self.size):
                logger.warning("Attempt %d: partition still has split regions, regenerating",
                               self.stats.uniqueness_attempts)
                self._enter(GenerationState.REGENERATING_REGIONS)
                continue
            
            self._enter(GenerationState.COUNTING_SOLUTIONS)
            count = count_solutions(regions, self.size, limit=2)
            self.stats.solution_count = count
            logger.debug("Attempt %d: found %d solution(s)", self.stats.uniqueness_attempts, count)
            
            if count == 1:
                self.stats.status = GenerationStatus.UNIQUE
                return regions
            
            if count == 0:
                logger.error("Region map admits no placement although the solution was seeded")
            self._enter(GenerationState.REGENERATING_REGIONS)
        
        logger.error("No unique partition after %d attempts, falling back to canned regions",
                     self.stats.uniqueness_attempts)
        canned = canned_regions(solution, self.size)
        if all_regions_connected(canned, self.size) and count_solutions(canned, self.size) == 1:
            self.stats.status = GenerationStatus.CANNED
            self.stats.solution_count = 1
            return canned
        
        logger.error("Canned regions failed verification, accepting a non-unique puzzle")
        self.stats.status = GenerationStatus.NON_UNIQUE
        return regions if regions is not None else canned
    
    def _partition(self, solution: List[Position]) -> np.ndarray:
        regions = self.partitioner.partition(solution)
        partition_stats = self.partitioner.stats
        self.stats.partition_attempts += partition_stats.attempts
        self.stats.disconnected_partitions += partition_stats.disconnected
        self.stats.stalls += partition_stats.stalls
        return regions
    
    def _enter(self, state: GenerationState) -> None:
        logger.debug("%s -> %s", self.state.value, state.value)
        self.state = state
    
    @staticmethod
    def save_to_folder(puzzles: List[PuzzleBoard], folder_path: str, prefix: str = "puzzle") -> None:
        """
        Save a list of puzzles to a folder as individual text files.
        
        Args:
            puzzles: List of PuzzleBoard objects.
            folder_path: Directory to save the puzzles.
            prefix: Prefix for the filename (default: "puzzle").
        """
        os.makedirs(folder_path, exist_ok=True)
        
        for i, puzzle in enumerate(puzzles, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            with open(file_path, "w") as f:
                f.write(puzzle.to_string())
                f.write("\n")
                f.write(" ".join(f"{row},{col}" for row, col in puzzle.solution))
                f.write("\n\nPretty format:\n")
                f.write(str(puzzle))


def generate_puzzle(size: int = DEFAULT_SIZE, seed: Optional[int] = None) -> PuzzleBoard:
    """
    Generate a single Beans puzzle.
    
    Args:
        size: Board size (default 8).
        seed: Random seed for reproducibility.
        
    Returns:
        A PuzzleBoard with its region map and solution.
    """
    return PuzzleGenerator(size=size, seed=seed).generate()

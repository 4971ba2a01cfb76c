"""Randomized generation of a valid marker placement."""

from __future__ import annotations
import logging
import random
from typing import List, Optional

from ..core.board import Position
from ..core.validator import is_non_adjacent, is_valid_solution

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1000

# Known valid 8x8 placement (one per row and column, none touching)
REFERENCE_SOLUTION_8 = [
    Position(0, 0), Position(1, 4), Position(2, 7), Position(3, 5),
    Position(4, 2), Position(5, 6), Position(6, 1), Position(7, 3),
]


def check_size(size: int) -> None:
    """Reject board sizes with no non-touching placement."""
    if size < 1:
        raise ValueError(f"Size must be positive, got {size}")
    if size in (2, 3):
        raise ValueError(f"No non-touching placement exists on a {size}x{size} board")


def fallback_solution(size: int) -> List[Position]:
    """
    Deterministic valid placement for a board size.
    
    For sizes other than 1 and 8 this places the odd columns first and
    then the even ones, which keeps consecutive rows at least two columns
    apart.
    """
    check_size(size)
    if size == 1:
        return [Position(0, 0)]
    if size == 8:
        return list(REFERENCE_SOLUTION_8)
    cols = list(range(1, size, 2)) + list(range(0, size, 2))
    return [Position(row, col) for row, col in enumerate(cols)]


class SolutionGenerator:
    """
    Generates the hidden solution of a puzzle.
    
    Algorithm:
    1. Shuffle the column order
    2. For each row take the first unused column that touches no earlier marker
    3. Restart with a fresh shuffle if some row has no such column
    
    After max_attempts failed restarts a precomputed pattern is used.
    """
    
    def __init__(self, size: int = 8, max_attempts: int = DEFAULT_MAX_ATTEMPTS,
                 rng: Optional[random.Random] = None):
        """
        Initialize the generator.
        
        Args:
            size: Board size.
            max_attempts: Number of shuffles to try before the fallback.
            rng: Random source (a fresh unseeded one if None).
        """
        check_size(size)
        self.size = size
        self.max_attempts = max_attempts
        self.rng = rng or random.Random()
        self.attempts = 0
        self.used_fallback = False
    
    def generate(self) -> List[Position]:
        """
        Generate a placement with one marker per row and column, none touching.
        
        Returns:
            List of N positions, ordered by row.
        """
        self.attempts = 0
        self.used_fallback = False
        
        solution = None
        while solution is None and self.attempts < self.max_attempts:
            self.attempts += 1
            solution = self._attempt()
        
        if solution is None:
            logger.error("Failed to generate a solution in %d attempts, using fallback", self.attempts)
            solution = fallback_solution(self.size)
            self.used_fallback = True
        elif not is_valid_solution(solution, self.size):
            logger.error("Generated solution %s failed validation, using fallback", solution)
            solution = fallback_solution(self.size)
            self.used_fallback = True
        
        logger.debug("Solution after %d attempt(s): %s", self.attempts, solution)
        return solution
    
    def _attempt(self) -> Optional[List[Position]]:
        """One randomized pass over the rows. Returns None on a dead end."""
        cols = list(range(self.size))
        self.rng.shuffle(cols)
        
        placed: List[Position] = []
        used_cols = set()
        for row in range(self.size):
            for col in cols:
                if col in used_cols:
                    continue
                if is_non_adjacent((row, col), placed):
                    placed.append(Position(row, col))
                    used_cols.add(col)
                    break
            else:
                return None
        
        return placed

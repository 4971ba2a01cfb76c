"""Constraint checks for Beans placements and region maps."""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Union

from .board import Position, as_region_grid, to_positions

logger = logging.getLogger(__name__)


def is_non_adjacent(candidate: Sequence[int], existing: Iterable[Sequence[int]]) -> bool:
    """
    Check that a candidate position touches none of the existing positions.
    
    Two positions touch when both their row and column distances are at
    most 1, so diagonal neighbours and exact duplicates both fail.
    
    Args:
        candidate: (row, col) of the marker to place.
        existing: Markers already placed.
        
    Returns:
        True if the candidate can be placed without touching.
    """
    row, col = candidate
    for other_row, other_col in existing:
        if abs(other_row - row) <= 1 and abs(other_col - col) <= 1:
            return False
    return True


def is_valid_solution(positions: Sequence[Sequence[int]], size: int) -> bool:
    """
    Check a full marker placement: N markers, distinct rows and columns,
    no touching pair. Every violation found is logged.
    """
    valid = True
    if len(positions) != size:
        logger.error("Solution has %d markers, expected %d", len(positions), size)
        valid = False
    
    rows_used = set()
    cols_used = set()
    for row, col in positions:
        if not (0 <= row < size and 0 <= col < size):
            logger.error("Marker (%d, %d) is off the board", row, col)
            valid = False
        if row in rows_used:
            logger.error("Multiple markers in row %d", row)
            valid = False
        rows_used.add(row)
        if col in cols_used:
            logger.error("Multiple markers in column %d", col)
            valid = False
        cols_used.add(col)
    
    for i in range(len(positions)):
        for j in range(i + 1, len(positions)):
            if not is_non_adjacent(positions[i], [positions[j]]):
                logger.error("Markers at %s and %s are touching", tuple(positions[i]), tuple(positions[j]))
                valid = False
    
    return valid


# Violations reported by validate_placement

@dataclass(frozen=True, order=True)
class RowCount:
    """A row holding a number of markers other than one."""
    row: int
    count: int


@dataclass(frozen=True, order=True)
class ColumnCount:
    """A column holding a number of markers other than one."""
    col: int
    count: int


@dataclass(frozen=True, order=True)
class RegionCount:
    """A region holding a number of markers other than one."""
    region: int
    count: int


@dataclass(frozen=True, order=True)
class Adjacent:
    """Two markers touching each other. Stored with a <= b."""
    a: Position
    b: Position


Violation = Union[RowCount, ColumnCount, RegionCount, Adjacent]


@dataclass
class ValidationResult:
    """Outcome of validating a candidate placement."""
    valid: bool
    violations: List[Violation] = field(default_factory=list)
    
    def of_type(self, kind: type) -> List[Violation]:
        """Violations of a single kind, e.g. result.of_type(RowCount)."""
        return [v for v in self.violations if isinstance(v, kind)]
    
    def __bool__(self) -> bool:
        return self.valid


def validate_placement(candidate: Iterable[Sequence[int]], regions, size: int) -> ValidationResult:
    """
    Validate a candidate placement against all four rules.
    
    Every row, column and region must hold exactly one marker and no two
    markers may touch. Unlike the generator's checks this reports every
    violation instead of stopping at the first, and the report does not
    depend on the order of the candidate positions.
    
    Args:
        candidate: Marker positions, any order.
        regions: Region map, flat (N*N) or 2D.
        size: Board size N.
        
    Returns:
        ValidationResult with the sorted list of violations.
        
    Raises:
        ValueError: If the region map has the wrong shape or a position is
            off the board.
    """
    grid = as_region_grid(regions, size)
    positions = sorted(to_positions(candidate))
    for row, col in positions:
        if not (0 <= row < size and 0 <= col < size):
            raise ValueError(f"Position ({row}, {col}) is off the {size}x{size} board")
    
    row_counts = [0] * size
    col_counts = [0] * size
    region_counts = [0] * size
    for row, col in positions:
        row_counts[row] += 1
        col_counts[col] += 1
        region_counts[int(grid[row, col])] += 1
    
    violations: List[Violation] = []
    violations.extend(RowCount(i, n) for i, n in enumerate(row_counts) if n != 1)
    violations.extend(ColumnCount(j, n) for j, n in enumerate(col_counts) if n != 1)
    violations.extend(RegionCount(r, n) for r, n in enumerate(region_counts) if n != 1)
    
    # positions are sorted, so every pair comes out with a <= b
    for i in range(len(positions)):
        for j in range(i + 1, len(positions)):
            if not is_non_adjacent(positions[i], [positions[j]]):
                violations.append(Adjacent(positions[i], positions[j]))
    
    return ValidationResult(valid=not violations, violations=violations)


def count_solutions(regions, size: int, limit: int = 2) -> int:
    """
    Count the placements that satisfy a region map (up to limit).
    
    Backtracks row by row, reserving a column and a region for each
    marker. Stops early once limit is reached, so a limit of 2 is enough
    to tell a unique puzzle from an ambiguous one.
    
    Args:
        regions: Region map, flat (N*N) or 2D.
        size: Board size N.
        limit: Maximum solutions to count before stopping.
        
    Returns:
        Number of solutions found (up to limit).
    """
    grid = as_region_grid(regions, size).tolist()
    used_cols = [False] * size
    used_regions = [False] * size
    placed: List[Position] = []
    count = [0]  # Use list to allow modification in nested function
    
    def backtrack(row: int) -> bool:
        """Returns True if limit reached."""
        if row == size:
            count[0] += 1
            return count[0] >= limit
        
        for col in range(size):
            if used_cols[col]:
                continue
            region = grid[row][col]
            if used_regions[region]:
                continue
            if not is_non_adjacent((row, col), placed):
                continue
            
            placed.append(Position(row, col))
            used_cols[col] = True
            used_regions[region] = True
            
            stop = backtrack(row + 1)
            
            placed.pop()
            used_cols[col] = False
            used_regions[region] = False
            
            if stop:
                return True
        
        return False
    
    backtrack(0)
    return count[0]


def has_unique_solution(regions, size: int) -> bool:
    """
    Check if a region map admits exactly one placement.
    
    Args:
        regions: Region map, flat (N*N) or 2D.
        size: Board size N.
        
    Returns:
        True if the puzzle has exactly one solution.
    """
    return count_solutions(regions, size, limit=2) == 1

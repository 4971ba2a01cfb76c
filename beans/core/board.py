"""Beans board representation: region map plus the generated solution."""

from __future__ import annotations
import numpy as np
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple


class Position(NamedTuple):
    """A cell on the board, 0-indexed."""
    row: int
    col: int


def to_positions(cells: Iterable[Sequence[int]]) -> List[Position]:
    """Convert (row, col) pairs into Position tuples."""
    return [Position(int(r), int(c)) for r, c in cells]


def as_region_grid(regions, size: int) -> np.ndarray:
    """
    Coerce a region map into a (size, size) int32 array.
    
    Accepts either a flat sequence of size*size region ids (indexed
    row*size+col) or a nested row-major sequence / 2D array. Every id
    must lie in [0, size).
    """
    arr = np.asarray(regions, dtype=np.int32)
    if arr.size != size * size:
        raise ValueError(f"Region map must have {size * size} cells, got {arr.size}")
    if arr.size and (arr.min() < 0 or arr.max() >= size):
        raise ValueError(f"Region ids must be in [0, {size}), got {arr.min()}..{arr.max()}")
    return arr.reshape(size, size)


def region_char(region: int) -> str:
    """Single-character code for a region id: 0-9 then A-Z."""
    if region < 10:
        return str(region)
    return chr(ord('A') + region - 10)


class PuzzleBoard:
    """
    A generated Beans puzzle.
    
    The board is an N x N grid split into N connected regions. A solved
    board places one bean in every row, column and region with no two
    beans touching, diagonals included.
    
    The region grid is read-only once the board is built; a new puzzle
    means a new PuzzleBoard.
    """
    
    def __init__(self, size: int, regions, solution: Optional[Iterable[Sequence[int]]] = None):
        """
        Initialize a puzzle board.
        
        Args:
            size: Board size N (N rows, N columns, N regions).
            regions: Region map, flat (N*N) or 2D (N x N), ids in [0, N).
            solution: Optional list of N (row, col) positions.
        """
        if size < 1:
            raise ValueError(f"Size must be positive, got {size}")
        
        grid = as_region_grid(regions, size).copy()
        grid.setflags(write=False)
        
        self.size = size
        self.regions = grid
        self.solution: Tuple[Position, ...] = tuple(to_positions(solution if solution is not None else ()))
        
        for row, col in self.solution:
            if not (0 <= row < size and 0 <= col < size):
                raise ValueError(f"Solution position ({row}, {col}) is off the board")
    
    def copy(self) -> PuzzleBoard:
        """Create an independent copy of the board."""
        return PuzzleBoard(self.size, self.regions, self.solution)
    
    def region_at(self, row: int, col: int) -> int:
        """Get the region id of (row, col)."""
        return int(self.regions[row, col])
    
    def region_cells(self, region: int) -> List[Position]:
        """Get all cells belonging to a region, in row-major order."""
        rows, cols = np.nonzero(self.regions == region)
        return [Position(int(r), int(c)) for r, c in zip(rows, cols)]
    
    def region_sizes(self) -> List[int]:
        """Number of cells in each region, indexed by region id."""
        return np.bincount(self.regions.ravel(), minlength=self.size).tolist()
    
    def region_count(self) -> int:
        """Number of distinct region ids in use."""
        return len(np.unique(self.regions))
    
    def flat_regions(self) -> List[int]:
        """Region ids as a flat list indexed by row*size+col."""
        return self.regions.ravel().tolist()
    
    def is_solution_cell(self, row: int, col: int) -> bool:
        return (row, col) in self.solution
    
    def to_string(self) -> str:
        """
        Convert the region map to a compact string, one char per cell.
        Uses 0-9 for the first ten regions and A-Z after that.
        """
        return ''.join(region_char(int(r)) for r in self.regions.ravel())
    
    @classmethod
    def from_string(cls, s: str, size: int = 8,
                    solution: Optional[Iterable[Sequence[int]]] = None) -> PuzzleBoard:
        """
        Create a board from a region string.
        
        Args:
            s: String of length size*size, 0-9 then A-Z per cell.
            size: Board size.
            solution: Optional solution positions.
        """
        if len(s) != size * size:
            raise ValueError(f"String length must be {size*size}, got {len(s)}")
        
        ids = []
        for c in s:
            if c.isdigit():
                ids.append(int(c))
            else:
                ids.append(ord(c.upper()) - ord('A') + 10)
        
        return cls(size, ids, solution)
    
    @classmethod
    def from_2d_list(cls, data: List[List[int]],
                     solution: Optional[Iterable[Sequence[int]]] = None) -> PuzzleBoard:
        """Create a board from a 2D list of region ids."""
        arr = np.array(data, dtype=np.int32)
        return cls(arr.shape[0], arr, solution)
    
    def __str__(self) -> str:
        """Pretty-print the region map, marking solution cells with '*'."""
        border = '+' + '-' * (self.size * 3) + '+'
        lines = [border]
        for i in range(self.size):
            row_str = '|'
            for j in range(self.size):
                marker = '*' if self.is_solution_cell(i, j) else ' '
                row_str += f' {region_char(self.region_at(i, j))}{marker}'
            lines.append(row_str + '|')
        lines.append(border)
        return '\n'.join(lines)
    
    def __repr__(self) -> str:
        return f"PuzzleBoard(size={self.size}, regions={self.region_count()})"
    
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PuzzleBoard):
            return False
        return (self.size == other.size
                and np.array_equal(self.regions, other.regions)
                and self.solution == other.solution)
    
    def __hash__(self) -> int:
        return hash((self.to_string(), self.solution))

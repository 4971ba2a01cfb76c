"""Growing connected colored regions around a marker placement."""

from __future__ import annotations
import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Sequence, Set

import numpy as np

from ..core.board import Position

logger = logging.getLogger(__name__)

UNASSIGNED = -1
DEFAULT_MAX_ATTEMPTS = 10
MAX_BALANCE_SWEEPS = 100


def orthogonal_neighbors(row: int, col: int, size: int) -> List[Position]:
    """In-bounds cells sharing an edge with (row, col)."""
    neighbors = []
    for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        r, c = row + dr, col + dc
        if 0 <= r < size and 0 <= c < size:
            neighbors.append(Position(r, c))
    return neighbors


def is_region_connected(regions, size: int, region: int) -> bool:
    """
    Check that every cell of a region is reachable from any other one.
    
    Flood-fills over edge-sharing cells from the first member found. A
    region with zero or one cell counts as connected.
    
    Args:
        regions: Region map, flat (N*N) or 2D. Unassigned cells may be -1.
        size: Board size.
        region: Region id to check.
    """
    flat = np.asarray(regions).reshape(-1)
    members = np.flatnonzero(flat == region)
    if len(members) <= 1:
        return True
    
    start = int(members[0])
    visited = {start}
    queue = deque([start])
    while queue:
        index = queue.popleft()
        for r, c in orthogonal_neighbors(index // size, index % size, size):
            neighbor = r * size + c
            if neighbor not in visited and flat[neighbor] == region:
                visited.add(neighbor)
                queue.append(neighbor)
    
    return len(visited) == len(members)


def all_regions_connected(regions, size: int) -> bool:
    """Check connectivity of every region id in [0, size)."""
    return all(is_region_connected(regions, size, r) for r in range(size))


def nearest_region(regions: np.ndarray, size: int, index: int) -> int:
    """
    Region of the closest assigned cell to a flat cell index.
    
    Scans square rings of growing radius around the cell and returns the
    first assigned cell found, row-major within each ring.
    """
    row, col = divmod(index, size)
    for distance in range(1, size):
        for dr in range(-distance, distance + 1):
            if abs(dr) == distance:
                cols = range(-distance, distance + 1)
            else:
                cols = (-distance, distance)
            for dc in cols:
                r, c = row + dr, col + dc
                if 0 <= r < size and 0 <= c < size:
                    region = regions[r * size + c]
                    if region != UNASSIGNED:
                        return int(region)
    return 0


def fill_unassigned(regions: np.ndarray, size: int) -> int:
    """
    Give each unassigned cell the region of its nearest assigned cell.
    
    Cells are filled in index order, so a cell filled earlier can be the
    nearest neighbour of a later one. Returns the number of cells filled.
    """
    filled = 0
    for index in np.flatnonzero(regions == UNASSIGNED):
        regions[index] = nearest_region(regions, size, int(index))
        filled += 1
    return filled


@dataclass
class PartitionStats:
    """Statistics from one partition() call."""
    attempts: int = 0
    disconnected: int = 0
    stalls: int = 0
    degraded: bool = False


class RegionPartitioner:
    """
    Partitions the board into one connected region per solution marker.
    
    Regions grow simultaneously in round-robin order, one cell per region
    per round, which keeps them roughly the same size. A partition in
    which any region ends up split is thrown away and regrown, at most
    max_attempts times.
    """
    
    def __init__(self, size: int = 8, max_attempts: int = DEFAULT_MAX_ATTEMPTS,
                 rng: Optional[random.Random] = None, balance: bool = False):
        """
        Initialize the partitioner.
        
        Args:
            size: Board size.
            max_attempts: Regrowth attempts before accepting a disconnected map.
            rng: Random source (a fresh unseeded one if None).
            balance: Run the size-balancing pass after growth.
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        
        self.size = size
        self.max_attempts = max_attempts
        self.rng = rng or random.Random()
        self.balance = balance
        self.stats = PartitionStats()
    
    def partition(self, solution: Sequence[Sequence[int]]) -> np.ndarray:
        """
        Build a region map where region i is grown from solution[i].
        
        Args:
            solution: N marker positions.
            
        Returns:
            (size, size) int32 array of region ids.
        """
        if len(solution) != self.size:
            raise ValueError(f"Expected {self.size} markers, got {len(solution)}")
        
        self.stats = PartitionStats()
        regions = None
        
        while self.stats.attempts < self.max_attempts:
            self.stats.attempts += 1
            regions = self._grow(solution)
            if self.balance:
                self._balance(regions, solution)
            
            disconnected = [r for r in range(self.size)
                            if not is_region_connected(regions, self.size, r)]
            if not disconnected:
                logger.debug("Regions verified as connected after %d attempt(s)", self.stats.attempts)
                return regions.reshape(self.size, self.size)
            
            self.stats.disconnected += 1
            logger.warning("Regions %s not connected, regrowing (attempt %d)",
                           disconnected, self.stats.attempts)
        
        logger.error("Gave up on connected regions after %d attempts, using last partition",
                     self.stats.attempts)
        self.stats.degraded = True
        return regions.reshape(self.size, self.size)
    
    def _grow(self, solution: Sequence[Sequence[int]]) -> np.ndarray:
        """Round-robin flood fill from the markers. Returns a flat array."""
        size = self.size
        regions = np.full(size * size, UNASSIGNED, dtype=np.int32)
        queues: List[Deque[Position]] = []
        
        for region, (row, col) in enumerate(solution):
            regions[row * size + col] = region
            queues.append(deque([Position(row, col)]))
        
        unassigned = size * size - size
        while unassigned > 0:
            claimed = 0
            for region, queue in enumerate(queues):
                if self._claim(regions, queue, region):
                    claimed += 1
            unassigned -= claimed
            
            if claimed == 0:
                logger.warning("Region growth stalled with %d cells left, filling from nearest regions",
                               unassigned)
                self.stats.stalls += 1
                fill_unassigned(regions, size)
                break
        
        return regions
    
    def _claim(self, regions: np.ndarray, queue: Deque[Position], region: int) -> bool:
        """
        Take one turn for a region: dequeue a single frontier cell and claim
        its first free neighbour in random order.
        
        Only the claimed neighbour is enqueued. A dequeued cell with no free
        neighbour ends the turn without a claim.
        """
        if not queue:
            return False
        
        current = queue.popleft()
        neighbors = orthogonal_neighbors(current.row, current.col, self.size)
        self.rng.shuffle(neighbors)
        
        for neighbor in neighbors:
            index = neighbor.row * self.size + neighbor.col
            if regions[index] == UNASSIGNED:
                regions[index] = region
                queue.append(neighbor)
                return True
        
        return False
    
    def _balance(self, regions: np.ndarray, solution: Sequence[Sequence[int]]) -> int:
        """
        Move boundary cells from oversized regions into undersized neighbours.
        
        A move is undone when it splits the region it came from. Solution
        cells never move. Returns the number of cells moved.
        """
        size = self.size
        target = size
        sizes = np.bincount(regions[regions != UNASSIGNED], minlength=size)
        fixed: Set[int] = {row * size + col for row, col in solution}
        moved = 0
        
        for _ in range(MAX_BALANCE_SWEEPS):
            changed = False
            for index in range(size * size):
                current = int(regions[index])
                if sizes[current] <= target or index in fixed:
                    continue
                
                row, col = divmod(index, size)
                neighbor_regions = {int(regions[r * size + c])
                                    for r, c in orthogonal_neighbors(row, col, size)}
                for other in sorted(neighbor_regions):
                    if other == current or sizes[other] >= target:
                        continue
                    regions[index] = other
                    if is_region_connected(regions, size, current):
                        sizes[current] -= 1
                        sizes[other] += 1
                        moved += 1
                        changed = True
                        break
                    regions[index] = current
            
            if not changed:
                break
        
        if moved:
            logger.debug("Balancing moved %d cell(s)", moved)
        return moved

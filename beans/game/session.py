"""A player's session on one generated puzzle."""

from __future__ import annotations
import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Set

from ..core.board import PuzzleBoard, Position
from ..core.validator import ValidationResult, validate_placement


class MoveResult(Enum):
    """Outcome of a place_bean or toggle_x call."""
    BEAN_PLACED = "bean_placed"
    BEAN_REMOVED = "bean_removed"
    X_PLACED = "x_placed"
    X_REMOVED = "x_removed"
    BLOCKED_BY_X = "blocked_by_x"
    BLOCKED_BY_BEAN = "blocked_by_bean"
    AUTO_X_LOCKED = "auto_x_locked"
    BEAN_LIMIT = "bean_limit"
    INACTIVE = "inactive"


class CheckStatus(Enum):
    INCOMPLETE = "incomplete"
    INCORRECT = "incorrect"
    SOLVED = "solved"
    INACTIVE = "inactive"


@dataclass
class CheckResult:
    """Outcome of checking the player's beans."""
    status: CheckStatus
    validation: Optional[ValidationResult] = None


class GameSession:
    """
    Player state for one puzzle: placed beans and X markers.
    
    The puzzle board itself is never modified. Automatic X markers are
    derived from the beans on demand, so removing a bean clears the
    markers it caused.
    """
    
    def __init__(self, board: PuzzleBoard, auto_x: bool = True):
        """
        Start a session.
        
        Args:
            board: The generated puzzle.
            auto_x: Mark cells ruled out by placed beans automatically.
        """
        self.board = board
        self.size = board.size
        self.auto_x = auto_x
        self.beans: List[Position] = []
        self.x_markers: Set[Position] = set()
        self.active = True
        self.solution_revealed = False
        self._start_time = time.perf_counter()
        self._end_time: Optional[float] = None
    
    def _check_bounds(self, row: int, col: int) -> Position:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise ValueError(f"Cell ({row}, {col}) is off the {self.size}x{self.size} board")
        return Position(row, col)
    
    def auto_x_markers(self) -> Set[Position]:
        """
        Empty cells ruled out by the beans on the board.
        
        A cell is ruled out when it shares a row, column or region with a
        bean, or touches one. Cells holding a bean or a manual X are left out.
        """
        if not self.auto_x:
            return set()
        
        marked = set()
        bean_regions = {self.board.region_at(r, c) for r, c in self.beans}
        for i in range(self.size):
            for j in range(self.size):
                cell = Position(i, j)
                if cell in self.beans or cell in self.x_markers:
                    continue
                if self.board.region_at(i, j) in bean_regions:
                    marked.add(cell)
                    continue
                for bean_row, bean_col in self.beans:
                    if (i == bean_row or j == bean_col
                            or (abs(i - bean_row) <= 1 and abs(j - bean_col) <= 1)):
                        marked.add(cell)
                        break
        return marked
    
    def place_bean(self, row: int, col: int) -> MoveResult:
        """Place a bean on an empty cell, or remove the bean already there."""
        cell = self._check_bounds(row, col)
        if not self.active:
            return MoveResult.INACTIVE
        
        if cell in self.beans:
            self.beans.remove(cell)
            return MoveResult.BEAN_REMOVED
        if cell in self.x_markers or cell in self.auto_x_markers():
            return MoveResult.BLOCKED_BY_X
        if len(self.beans) >= self.size:
            return MoveResult.BEAN_LIMIT
        
        self.beans.append(cell)
        return MoveResult.BEAN_PLACED
    
    def toggle_x(self, row: int, col: int) -> MoveResult:
        """Place or remove a manual X marker."""
        cell = self._check_bounds(row, col)
        if not self.active:
            return MoveResult.INACTIVE
        
        if cell in self.beans:
            return MoveResult.BLOCKED_BY_BEAN
        if cell in self.x_markers:
            self.x_markers.discard(cell)
            return MoveResult.X_REMOVED
        if cell in self.auto_x_markers():
            return MoveResult.AUTO_X_LOCKED
        
        self.x_markers.add(cell)
        return MoveResult.X_PLACED
    
    def check(self) -> CheckResult:
        """
        Check the placed beans against the puzzle rules.
        
        All beans must be placed before checking. A correct placement
        ends the session.
        
        Once the session has ended, by a win or a revealed solution,
        nothing is validated and the status is INACTIVE.
        """
        if not self.active:
            return CheckResult(CheckStatus.INACTIVE)
        
        if len(self.beans) != self.size:
            return CheckResult(CheckStatus.INCOMPLETE)
        
        validation = validate_placement(self.beans, self.board.regions, self.size)
        if not validation.valid:
            return CheckResult(CheckStatus.INCORRECT, validation)
        
        self._finish()
        return CheckResult(CheckStatus.SOLVED, validation)
    
    def clear(self) -> None:
        """Remove all beans and X markers."""
        self.beans = []
        self.x_markers = set()
    
    def reveal_solution(self) -> List[Position]:
        """Replace the player's beans with the solution and end the session."""
        self.clear()
        self.beans = list(self.board.solution)
        self.solution_revealed = True
        self._finish()
        return list(self.beans)
    
    def elapsed_seconds(self) -> float:
        """Seconds played, frozen once the session ends."""
        end = self._end_time if self._end_time is not None else time.perf_counter()
        return end - self._start_time
    
    def _finish(self) -> None:
        self.active = False
        if self._end_time is None:
            self._end_time = time.perf_counter()

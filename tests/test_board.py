"""Unit tests for the Beans board."""

import pytest
import numpy as np
from beans.core.board import PuzzleBoard, Position, as_region_grid

from helpers import rows_map


class TestPuzzleBoard:
    """Tests for PuzzleBoard class."""
    
    def test_create_from_flat_regions(self):
        """Test creating a board from a flat region list."""
        board = PuzzleBoard(4, rows_map(4))
        assert board.size == 4
        assert board.regions.shape == (4, 4)
        assert board.region_at(2, 3) == 2
        assert board.solution == ()
    
    def test_flat_and_2d_regions_agree(self):
        """Test that flat and nested region maps build the same board."""
        flat = PuzzleBoard(4, rows_map(4))
        nested = PuzzleBoard.from_2d_list([[r] * 4 for r in range(4)])
        assert flat == nested
        assert nested.flat_regions() == rows_map(4)
    
    def test_region_cells_and_sizes(self):
        """Test region queries."""
        board = PuzzleBoard(4, rows_map(4))
        assert board.region_cells(1) == [Position(1, c) for c in range(4)]
        assert board.region_sizes() == [4, 4, 4, 4]
        assert board.region_count() == 4
    
    def test_regions_are_read_only(self):
        """Test that the region grid cannot be modified after creation."""
        board = PuzzleBoard(4, rows_map(4))
        with pytest.raises(ValueError):
            board.regions[0, 0] = 3
    
    def test_source_array_not_shared(self):
        """Test that the board copies the region array it was given."""
        source = np.array(rows_map(4), dtype=np.int32)
        board = PuzzleBoard(4, source)
        source[0] = 3
        assert board.region_at(0, 0) == 0
    
    def test_invalid_region_ids(self):
        """Test that ids outside [0, size) are rejected."""
        with pytest.raises(ValueError):
            PuzzleBoard(4, [0] * 15 + [4])
        with pytest.raises(ValueError):
            PuzzleBoard(4, [-1] + [0] * 15)
    
    def test_wrong_region_count(self):
        """Test that a region map of the wrong length is rejected."""
        with pytest.raises(ValueError):
            PuzzleBoard(4, [0] * 15)
    
    def test_solution_off_board(self):
        """Test that solution positions must be on the board."""
        with pytest.raises(ValueError):
            PuzzleBoard(4, rows_map(4), [(0, 1), (1, 3), (2, 0), (4, 2)])
    
    def test_to_string(self):
        """Test converting the region map to a string."""
        board = PuzzleBoard(4, rows_map(4))
        assert board.to_string() == "0000111122223333"
    
    def test_to_string_letters_above_nine(self):
        """Test that region ids above 9 use letters."""
        board = PuzzleBoard(12, [11] * 144)
        assert board.to_string() == "B" * 144
    
    def test_from_string(self):
        """Test creating a board from a string."""
        board = PuzzleBoard.from_string("0000111122223333", size=4,
                                        solution=[(0, 1), (1, 3), (2, 0), (3, 2)])
        assert board.region_at(3, 0) == 3
        assert board.solution[1] == Position(1, 3)
    
    def test_from_string_wrong_length(self):
        with pytest.raises(ValueError):
            PuzzleBoard.from_string("0" * 63, size=8)
    
    def test_copy(self, forced_board):
        """Test board copy."""
        copy = forced_board.copy()
        assert copy == forced_board
        assert hash(copy) == hash(forced_board)
        assert copy.regions is not forced_board.regions
    
    def test_str_marks_solution(self, forced_board):
        """Test that pretty printing marks solution cells."""
        text = str(forced_board)
        assert text.count("*") == 8
        assert len(text.splitlines()) == 10


class TestAsRegionGrid:
    
    def test_reshapes_flat(self):
        grid = as_region_grid(rows_map(3), 3)
        assert grid.shape == (3, 3)
        assert grid[2, 0] == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""Unit tests for placement and uniqueness checks."""

import logging
import random

import pytest
from beans.core.board import Position
from beans.core.validator import (
    is_non_adjacent,
    is_valid_solution,
    validate_placement,
    count_solutions,
    has_unique_solution,
    RowCount,
    ColumnCount,
    RegionCount,
    Adjacent,
)

from helpers import rows_map


class TestIsNonAdjacent:
    """Tests for the touching rule."""
    
    def test_far_apart(self):
        assert is_non_adjacent((0, 0), [(2, 0), (0, 2), (5, 5)])
    
    def test_orthogonal_neighbour(self):
        assert not is_non_adjacent((3, 3), [(3, 4)])
        assert not is_non_adjacent((3, 3), [(2, 3)])
    
    def test_diagonal_neighbour(self):
        """Diagonal contact counts as touching."""
        assert not is_non_adjacent((3, 3), [(4, 4)])
        assert not is_non_adjacent((3, 3), [(2, 4)])
    
    def test_duplicate(self):
        assert not is_non_adjacent((1, 1), [(1, 1)])
    
    def test_empty(self):
        assert is_non_adjacent((0, 0), [])
    
    def test_reference_solution_pairwise(self, reference_solution):
        """No pair of the reference solution touches."""
        for i, pos in enumerate(reference_solution):
            others = reference_solution[:i] + reference_solution[i + 1:]
            assert is_non_adjacent(pos, others)


class TestIsValidSolution:
    
    def test_reference_solution(self, reference_solution):
        assert is_valid_solution(reference_solution, 8)
    
    def test_duplicate_column(self, caplog):
        with caplog.at_level(logging.ERROR):
            assert not is_valid_solution([(0, 1), (1, 3), (2, 1), (3, 3)], 4)
        assert "column 1" in caplog.text
    
    def test_touching(self):
        assert not is_valid_solution([(0, 1), (1, 2), (2, 0), (3, 3)], 4)
    
    def test_wrong_length(self):
        assert not is_valid_solution([(0, 1), (1, 3), (2, 0)], 4)


class TestValidatePlacement:
    """Tests for full placement validation."""
    
    def test_correct_placement(self, forced_board, reference_solution):
        """The solution validates against its own regions."""
        result = validate_placement(reference_solution, forced_board.regions, 8)
        assert result.valid
        assert result
        assert result.violations == []
    
    def test_two_in_row_zero(self):
        """Two markers in one row give a RowCount, not a false Adjacent."""
        result = validate_placement([(0, 0), (0, 3)], rows_map(8), 8)
        
        assert not result.valid
        assert RowCount(0, 2) in result.violations
        assert RegionCount(0, 2) in result.violations
        assert result.of_type(Adjacent) == []
    
    def test_reports_all_missing_lines(self):
        """Rows, columns and regions with no marker are all reported."""
        result = validate_placement([(0, 0), (0, 3)], rows_map(8), 8)
        
        assert RowCount(5, 0) in result.violations
        assert ColumnCount(7, 0) in result.violations
        assert ColumnCount(0, 1) not in result.violations
        assert len(result.of_type(RowCount)) == 8
        assert len(result.of_type(ColumnCount)) == 6
    
    def test_adjacent_pair(self):
        result = validate_placement([(1, 1), (0, 0)], rows_map(4), 4)
        assert result.of_type(Adjacent) == [Adjacent(Position(0, 0), Position(1, 1))]
    
    def test_order_independent(self, reference_solution):
        """Permuting the candidate leaves the violations unchanged."""
        candidate = reference_solution[:6] + [(6, 2), (7, 2)]
        expected = validate_placement(candidate, rows_map(8), 8)
        
        rng = random.Random(3)
        for _ in range(5):
            shuffled = list(candidate)
            rng.shuffle(shuffled)
            assert validate_placement(shuffled, rows_map(8), 8) == expected
    
    def test_idempotent(self):
        candidate = [(0, 0), (1, 1), (3, 3)]
        first = validate_placement(candidate, rows_map(4), 4)
        second = validate_placement(candidate, rows_map(4), 4)
        assert first == second
    
    def test_flat_and_2d_regions(self):
        flat = rows_map(4)
        nested = [flat[i:i + 4] for i in range(0, 16, 4)]
        candidate = [(0, 1), (1, 3), (2, 0), (3, 2)]
        assert validate_placement(candidate, flat, 4) == validate_placement(candidate, nested, 4)
    
    def test_empty_placement(self):
        result = validate_placement([], rows_map(4), 4)
        assert len(result.violations) == 12
    
    def test_off_board_raises(self):
        with pytest.raises(ValueError):
            validate_placement([(0, 4)], rows_map(4), 4)


class TestCountSolutions:
    """Tests for the uniqueness counter."""
    
    def test_forced_board_is_unique(self, forced_board):
        assert count_solutions(forced_board.regions, 8) == 1
        assert has_unique_solution(forced_board.flat_regions(), 8)
    
    def test_rows_as_regions_size_4(self):
        """With rows as regions only the two king-free permutations fit."""
        assert count_solutions(rows_map(4), 4, limit=10) == 2
    
    def test_rows_as_regions_size_5(self):
        assert count_solutions(rows_map(5), 5, limit=100) == 14
    
    def test_stops_at_limit(self):
        assert count_solutions(rows_map(5), 5, limit=2) == 2
        assert not has_unique_solution(rows_map(5), 5)
    
    def test_single_cell(self):
        assert count_solutions([0], 1) == 1
    
    def test_no_solution(self):
        """A region map with no valid placement counts zero."""
        assert count_solutions([0, 0, 1, 1], 2) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

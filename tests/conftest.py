"""Shared fixtures for Beans tests."""

import pytest

from beans.core.board import Position, PuzzleBoard
from beans.generator.generator import canned_regions
from beans.generator.solution import REFERENCE_SOLUTION_8


@pytest.fixture
def reference_solution():
    return [Position(r, c) for r, c in REFERENCE_SOLUTION_8]


@pytest.fixture
def forced_board(reference_solution):
    """8x8 board whose regions admit only the reference solution."""
    return PuzzleBoard(8, canned_regions(reference_solution, 8), reference_solution)

"""
Pytest configuration and shared fixtures.
"""
import random

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Cell, Engine, BestTime


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible layouts."""
    return random.Random(1234)


@pytest.fixture
def default_board(rng: random.Random) -> Board:
    """Create a default 10x10 board with 15 mines placed."""
    board = Board()
    board.reset(rng)
    return board


@pytest.fixture
def small_board() -> Board:
    """Create a 3x3 board with its single mine in the center."""
    board = Board(BoardConfig(3, 3, 1))
    board.load_mines([(1, 1)])
    return board


@pytest.fixture
def corner_board() -> Board:
    """
    Create a 5x5 board with one mine in the bottom-right corner.

    Revealing (0, 0) cascades over everything except the mine.
    """
    board = Board(BoardConfig(5, 5, 1))
    board.load_mines([(4, 4)])
    return board


@pytest.fixture
def wall_board() -> Board:
    """
    Create a 5x5 board split by a column of mines.

        . . * . .
        . . * . .
        . . * . .
        . . * . .
        . . * . .
    """
    board = Board(BoardConfig(5, 5, 5))
    board.load_mines([(row, 2) for row in range(5)])
    return board


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def small_engine(rng: random.Random) -> Engine:
    """Create an engine on a 3x3 board with a known layout."""
    engine = Engine(BoardConfig(3, 3, 1), rng=rng)
    engine.board.load_mines([(1, 1)])
    return engine


@pytest.fixture
def shared_best_time() -> BestTime:
    """Best-time record with no games finished yet."""
    return BestTime()


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(10, 10, 15)

"""
Pytest configuration and shared fixtures.
"""
import random

import pytest
import sys
from pathlib import Path

# Add src (package) and repo root (console entry point) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from minesweeper import Board, BoardConfig, Cell


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible layouts."""
    return random.Random(1234)


@pytest.fixture
def default_board(rng: random.Random) -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board(rng=rng)


@pytest.fixture
def corner_board() -> Board:
    """
    5x5 board with a single mine in the bottom-right corner.

    Revealing (0, 0) opens everything except the mine.
    """
    return Board.from_layout([
        ".....",
        ".....",
        ".....",
        ".....",
        "....*",
    ], rng=random.Random(7))


@pytest.fixture
def chord_board() -> Board:
    """
    3x4 board with mines at (0, 0) and (2, 3).

    Adjacent counts:
        * 1 0 0
        1 1 1 1
        0 0 1 *
    """
    return Board.from_layout([
        "*...",
        "....",
        "...*",
    ], rng=random.Random(7))


@pytest.fixture
def strip_board() -> Board:
    """1x4 board with a mine at the far right."""
    return Board.from_layout(["...*"], rng=random.Random(7))


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
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)

"""
Minesweeper game module.

Provides the core rules engine (board, cells, game state), text
rendering and a Gymnasium environment.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    GameState,
    VisualStatus,
    MIN_ROWS,
    MAX_ROWS,
    MIN_COLS,
    MAX_COLS,
)
from .render import render_board, render_compact
from .environment import MinesweeperEnv, make_vec_env

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "GameState",
    "VisualStatus",
    "MIN_ROWS",
    "MAX_ROWS",
    "MIN_COLS",
    "MAX_COLS",
    "render_board",
    "render_compact",
    "MinesweeperEnv",
    "make_vec_env",
]

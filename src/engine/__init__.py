"""
Minesweeper engine module.

Provides the board engine: cells, board generation and reveal logic,
and the session that tracks outcome, timer and level progression.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    OutOfBoundsError,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .session import GameState, Session, TimerRunning, TimerUnset, cap_mines
from .environment import MinesweeperEnv, render_board, status_line

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "OutOfBoundsError",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "GameState",
    "Session",
    "TimerRunning",
    "TimerUnset",
    "cap_mines",
    "MinesweeperEnv",
    "render_board",
    "status_line",
]

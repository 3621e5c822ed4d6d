"""
Minefield board engine.

Provides mine placement, adjacency counts, flood-fill reveal,
win/loss detection, and session timing for a minesweeper game.
"""
from .errors import MinefieldError, InvalidConfig, PlacementExhausted
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    GamePhase,
    RevealOutcome,
    DEFAULT_CONFIG,
)
from .engine import BestTime, BoardSnapshot, Engine, SessionStats
from .environment import MinefieldEnv

__all__ = [
    "MinefieldError",
    "InvalidConfig",
    "PlacementExhausted",
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "GamePhase",
    "RevealOutcome",
    "DEFAULT_CONFIG",
    "BestTime",
    "BoardSnapshot",
    "Engine",
    "SessionStats",
    "MinefieldEnv",
]

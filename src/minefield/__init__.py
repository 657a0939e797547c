"""
Minesweeper engine.

Provides the board engine with its change notifications, an elapsed-time
observer, the mine-free palette variant, a Gymnasium wrapper and a
terminal front end.
"""
from .cell import Cell, CellSnapshot, CellState
from .board import (
    Board,
    BoardConfig,
    GameState,
    SafeZone,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    PRESETS,
)
from .events import BoardListener
from .timer import ElapsedTimer, TICK_SECONDS
from .palette import PaletteBoard, PaletteListener, Tile, COLOR_STATES
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellSnapshot",
    "CellState",
    "Board",
    "BoardConfig",
    "GameState",
    "SafeZone",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "BoardListener",
    "ElapsedTimer",
    "TICK_SECONDS",
    "PaletteBoard",
    "PaletteListener",
    "Tile",
    "COLOR_STATES",
    "MinesweeperEnv",
]

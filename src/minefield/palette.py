"""
Palette board: the mine-free variant of the game.

Every tile starts blank. Clicking a blank tile reveals it in the first
color; clicking a revealed tile steps it through a fixed cycle of colors.
There is no way to win or lose.
"""
import logging
from dataclasses import dataclass
from typing import List

logger = logging.getLogger(__name__)

# Colors are numbered 1..COLOR_STATES; 0 means not yet revealed
COLOR_STATES = 6
DEFAULT_SIZE = 10


@dataclass
class Tile:
    """One palette tile."""

    revealed: bool = False
    color: int = 0

    def click(self) -> bool:
        """
        Reveal the tile or advance its color.

        Returns:
            True if this click revealed the tile.
        """
        if not self.revealed:
            self.revealed = True
            self.color = 1
            return True
        self.color = self.color % COLOR_STATES + 1
        return False


class PaletteListener:
    """Receives palette changes. Hooks are no-ops by default."""

    def on_tile_changed(self, row: int, col: int, color: int) -> None:
        pass

    def on_revealed_count_changed(self, count: int) -> None:
        pass


class PaletteBoard:
    """
    Square grid of color-cycling tiles.

    Start over by building a new board.
    """

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        if size < 1:
            raise ValueError("Board size must be positive")
        self.size = size
        self._tiles: List[List[Tile]] = [
            [Tile() for _ in range(size)] for _ in range(size)
        ]
        self._tiles_revealed = 0
        self._listeners: List[PaletteListener] = []

    @property
    def tiles_revealed(self) -> int:
        return self._tiles_revealed

    def subscribe(self, listener: PaletteListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: PaletteListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def get_tile(self, row: int, col: int) -> Tile:
        self._check_position(row, col)
        return self._tiles[row][col]

    def click(self, row: int, col: int) -> int:
        """
        Click a tile.

        Returns:
            The tile's color after the click.

        Raises:
            IndexError: If the position is off the board.
        """
        tile = self.get_tile(row, col)
        newly_revealed = tile.click()
        for listener in list(self._listeners):
            listener.on_tile_changed(row, col, tile.color)
        if newly_revealed:
            self._tiles_revealed += 1
            logger.debug(f"Tile ({row}, {col}) revealed, {self._tiles_revealed} total")
            for listener in list(self._listeners):
                listener.on_revealed_count_changed(self._tiles_revealed)
        return tile.color

    def _check_position(self, row: int, col: int) -> None:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(
                f"Position ({row}, {col}) is outside the {self.size}x{self.size} board"
            )

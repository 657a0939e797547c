"""
Cell module for the Minesweeper engine.

A cell holds whether it is mined, how many neighbors are mined, and
whether the player has revealed or flagged it.
"""
from dataclasses import dataclass
from enum import Enum, auto


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Player-visible state of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# Observation codes shared with the Gymnasium wrapper
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_MINE = 9


# ============================================================================
# Snapshot
# ============================================================================

@dataclass(frozen=True)
class CellSnapshot:
    """
    Immutable view of a cell handed to presentation code.

    Attributes:
        state: Hidden, revealed or flagged.
        is_mine: True only when the mine is visible to the player.
        neighbor_mines: Adjacent mine count, 0 until the cell is revealed.
    """

    state: CellState
    is_mine: bool = False
    neighbor_mines: int = 0

    @property
    def is_revealed(self) -> bool:
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state == CellState.FLAGGED


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    One grid position on the board.

    Revealed and flagged are two values of a single ``state`` field, so a
    cell can never be both.

    Attributes:
        is_mine: Whether this cell holds a mine.
        neighbor_mines: Mines among the up-to-8 neighbors (0-8).
        state: Hidden, revealed or flagged.
    """

    is_mine: bool = False
    neighbor_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Uncover the cell.

        Returns:
            False if the cell was not hidden.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Place or remove a flag.

        Returns:
            False if the cell is already revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.FLAGGED:
            self.state = CellState.HIDDEN
        else:
            self.state = CellState.FLAGGED
        return True

    @property
    def is_hidden(self) -> bool:
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state == CellState.FLAGGED

    def snapshot(self, expose: bool = False) -> CellSnapshot:
        """
        Build the presentation view of this cell.

        Args:
            expose: Show the mine even if the cell is not revealed
                (used once the game is lost).
        """
        mine_visible = self.is_mine and (self.is_revealed or expose)
        count = self.neighbor_mines if self.is_revealed else 0
        return CellSnapshot(self.state, mine_visible, count)

    def to_observation(self) -> int:
        """
        Encode the cell for the numpy observation grid.

        Returns:
            -1 hidden, -2 flagged, 0-8 revealed count, 9 revealed mine.
        """
        if self.state == CellState.HIDDEN:
            return OBS_HIDDEN
        if self.state == CellState.FLAGGED:
            return OBS_FLAGGED
        if self.is_mine:
            return OBS_MINE
        return self.neighbor_mines

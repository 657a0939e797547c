"""
Change notifications emitted by the board engine.

Presentation code subclasses ``BoardListener`` and overrides the hooks it
cares about, then attaches itself with ``Board.subscribe``.
"""
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .board import GameState
    from .cell import CellSnapshot


# ============================================================================
# Listener Interface
# ============================================================================

class BoardListener:
    """
    Receives board changes.

    Every hook is a no-op by default. Hooks fire only for accepted moves;
    a rejected reveal or flag produces no notification at all.
    """

    def on_cell_changed(
        self, row: int, col: int, snapshot: "CellSnapshot"
    ) -> None:
        """
        A single cell was revealed, flagged, unflagged or exposed.

        Args:
            row: Row index of the cell.
            col: Column index of the cell.
            snapshot: Everything needed to redraw that tile.
        """
        pass

    def on_state_changed(self, state: "GameState") -> None:
        """The game was won or lost. Fires once per game."""
        pass

    def on_mine_count_changed(self, remaining: int) -> None:
        """A flag was toggled; ``remaining`` may be negative."""
        pass

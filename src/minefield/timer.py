"""
Elapsed-time counter for a game in progress.

The timer only watches the board: it starts with the first move, freezes
when the game ends, and never changes board state.
"""
import math
import time
from typing import Callable, Optional

from .board import Board, GameState
from .cell import CellSnapshot
from .events import BoardListener

# Cadence at which presentation code is expected to call ``tick``
TICK_SECONDS = 1.0


class ElapsedTimer(BoardListener):
    """
    Counts whole seconds from the first move until the game ends.

    Args:
        clock: Monotonic time source in seconds, replaceable for tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._board: Optional[Board] = None
        self._started_at: Optional[float] = None
        self._stopped_at: Optional[float] = None

    def attach(self, board: Board) -> None:
        """Watch ``board``, detaching from any previous one and zeroing."""
        if self._board is not None:
            self._board.unsubscribe(self)
        self._board = board
        self._started_at = None
        self._stopped_at = None
        board.subscribe(self)
        if board.first_move_taken and board.is_playing:
            self._started_at = self._clock()

    def on_cell_changed(
        self, row: int, col: int, snapshot: CellSnapshot
    ) -> None:
        # Flags placed before the first reveal do not start the clock
        if self._started_at is None and self._board.first_move_taken:
            self._started_at = self._clock()

    def on_state_changed(self, state: GameState) -> None:
        if self._started_at is not None and self._stopped_at is None:
            self._stopped_at = self._clock()

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._stopped_at is None

    def tick(self) -> int:
        """Return elapsed whole seconds; 0 before the first move."""
        if self._started_at is None:
            return 0
        end = self._stopped_at if self._stopped_at is not None else self._clock()
        return int(math.floor(end - self._started_at))

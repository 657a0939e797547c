"""
Board module for the Minesweeper engine.

Implements the square game board: deferred mine placement around a safe
zone, flood-fill reveal, flagging, and the playing/won/lost state machine.
Presentation code observes changes through ``BoardListener``.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell, CellSnapshot
from .events import BoardListener

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class SafeZone(Enum):
    """Which cells the first reveal keeps mine-free."""

    # 3x3 around the click; falls back to CELL when too few cells remain
    NEIGHBORHOOD = "neighborhood"
    CELL = "cell"


@dataclass
class BoardConfig:
    """
    Configuration for a square Minesweeper board.

    Attributes:
        size: Number of rows and of columns.
        num_mines: Total mines to place.
        safe_zone: Mine-free area guaranteed around the first reveal.
    """

    size: int = 9
    num_mines: int = 10
    safe_zone: SafeZone = SafeZone.NEIGHBORHOOD

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.size < 1:
            raise ValueError("Board size must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.total_cells - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.size * self.size

    @property
    def safe_cells(self) -> int:
        """Cells that must be revealed to win."""
        return self.total_cells - self.num_mines


# Preset difficulty levels
BEGINNER = BoardConfig(9, 10)
INTERMEDIATE = BoardConfig(16, 40)
EXPERT = BoardConfig(24, 99)

PRESETS: Dict[str, BoardConfig] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    A board is used for exactly one game. Start a new game by building a
    new ``Board``.

    Attributes:
        config: Size, mine count and safe-zone policy.
        seed: Seed for random mine placement.
        mines: Optional fixed mine layout applied at the first reveal
            instead of random placement. Must hold exactly
            ``config.num_mines`` distinct on-board positions.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    seed: Optional[int] = None
    mines: Optional[Iterable[Position]] = None
    _grid: List[List[Cell]] = field(init=False, repr=False)
    _rng: np.random.Generator = field(init=False, repr=False)
    _listeners: List[BoardListener] = field(init=False, repr=False)
    _game_state: GameState = field(init=False, default=GameState.PLAYING)
    _mines_placed: bool = field(init=False, default=False)
    _revealed_count: int = field(init=False, default=0)
    _flagged_count: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        """Build the empty grid and check any fixed layout."""
        self._grid = [
            [Cell() for _ in range(self.config.size)]
            for _ in range(self.config.size)
        ]
        self._rng = np.random.default_rng(self.seed)
        self._listeners = []
        if self.mines is not None:
            self.mines = self._validate_layout(self.mines)

    def _validate_layout(self, mines: Iterable[Position]) -> FrozenSet[Position]:
        """Check a fixed mine layout against the configuration."""
        layout = frozenset((int(row), int(col)) for row, col in mines)
        if len(layout) != self.config.num_mines:
            raise ValueError(
                f"Mine layout has {len(layout)} distinct positions, "
                f"expected {self.config.num_mines}"
            )
        for row, col in layout:
            if not self._is_valid_position(row, col):
                raise ValueError(f"Mine position ({row}, {col}) is off the board")
        return layout

    # ========================================================================
    # Mine Placement (Low-level)
    # ========================================================================

    def place_mines(self, exclude_row: int, exclude_col: int) -> bool:
        """
        Lay out the mines, keeping the safe zone around a position clear.

        Called by the first ``reveal``. Neighbor counts are computed once
        here and never change afterwards.

        Args:
            exclude_row: Row of the first revealed cell.
            exclude_col: Column of the first revealed cell.

        Returns:
            False if mines were already placed.
        """
        self._check_position(exclude_row, exclude_col)
        if self._mines_placed:
            return False
        self._mines_placed = True

        if self.mines is not None:
            positions = sorted(self.mines)
        else:
            positions = self._pick_mine_positions(exclude_row, exclude_col)
        for row, col in positions:
            self._grid[row][col].is_mine = True
        self._calculate_neighbor_mines()

        logger.debug(
            f"Placed {len(positions)} mines on {self.config.size}x{self.config.size} "
            f"board, first reveal at ({exclude_row}, {exclude_col})"
        )
        return True

    def _pick_mine_positions(self, row: int, col: int) -> List[Position]:
        """Choose mine positions uniformly among cells outside the safe zone."""
        if self.config.num_mines == 0:
            return []
        excluded = self._safe_zone(row, col)
        eligible = [pos for pos in self._positions() if pos not in excluded]
        picks = self._rng.choice(
            len(eligible), size=self.config.num_mines, replace=False
        )
        return [eligible[int(index)] for index in picks]

    def _safe_zone(self, row: int, col: int) -> Set[Position]:
        """Positions that must stay mine-free for a first reveal at (row, col)."""
        clicked = {(row, col)}
        if self.config.safe_zone == SafeZone.CELL:
            return clicked

        zone = clicked | set(self._get_neighbors(row, col))
        if self.config.total_cells - len(zone) < self.config.num_mines:
            logger.info(
                f"Not enough room for {self.config.num_mines} mines outside the "
                f"3x3 safe zone at ({row}, {col}); only the clicked cell is kept safe"
            )
            return clicked
        return zone

    def _calculate_neighbor_mines(self) -> None:
        """Store the adjacent mine count on every non-mine cell."""
        for row, col in self._positions():
            cell = self._grid[row][col]
            if not cell.is_mine:
                cell.neighbor_mines = sum(
                    1 for n_row, n_col in self._get_neighbors(row, col)
                    if self._grid[n_row][n_col].is_mine
                )

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _positions(self) -> Iterator[Position]:
        """Iterate over every position in row-major order."""
        for row in range(self.config.size):
            for col in range(self.config.size):
                yield row, col

    def _get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Edge and corner cells have fewer than 8 neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.size and 0 <= col < self.config.size

    def _check_position(self, row: int, col: int) -> None:
        """Reject coordinates the caller should never have passed."""
        if not self._is_valid_position(row, col):
            raise IndexError(
                f"Position ({row}, {col}) is outside the "
                f"{self.config.size}x{self.config.size} board"
            )

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal a cell at the given position.

        The first reveal places the mines. Revealing a mine loses the game
        and exposes every mine. Revealing a cell with no adjacent mines
        uncovers its whole zero region plus the numbered border around it.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            True if the board changed, False for a no-op.

        Raises:
            IndexError: If the position is off the board.
        """
        self._check_position(row, col)
        if self._game_state != GameState.PLAYING:
            return False
        if not self._grid[row][col].is_hidden:
            return False

        if not self._mines_placed:
            self.place_mines(row, col)

        if self._grid[row][col].is_mine:
            self._detonate(row, col)
            return True

        self._flood_reveal(row, col)
        self._check_win_condition()
        return True

    def _uncover(self, row: int, col: int) -> None:
        """Reveal one cell and announce it."""
        self._grid[row][col].reveal()
        self._revealed_count += 1
        self._notify_cell(row, col)

    def _flood_reveal(self, row: int, col: int) -> None:
        """
        Reveal a safe cell and spread through zero-count neighbors.

        Cells are marked revealed before they are queued, so each one is
        visited at most once. Flagged cells stop the spread.
        """
        before = self._revealed_count
        self._uncover(row, col)
        queue = deque([(row, col)])
        while queue:
            current_row, current_col = queue.popleft()
            if self._grid[current_row][current_col].neighbor_mines != 0:
                continue
            for n_row, n_col in self._get_neighbors(current_row, current_col):
                if self._grid[n_row][n_col].is_hidden:
                    self._uncover(n_row, n_col)
                    queue.append((n_row, n_col))

        opened = self._revealed_count - before
        if opened > 1:
            logger.debug(f"Flood fill from ({row}, {col}) opened {opened} cells")

    def _detonate(self, row: int, col: int) -> None:
        """Lose the game on (row, col) and expose the remaining mines."""
        self._game_state = GameState.LOST
        self._uncover(row, col)
        for mine_row, mine_col in self.mine_positions():
            if (mine_row, mine_col) != (row, col):
                self._notify_cell(mine_row, mine_col)
        logger.info(f"Game lost: mine revealed at ({row}, {col})")
        self._notify_state()

    def _check_win_condition(self) -> None:
        """Win once every non-mine cell is revealed."""
        if self._revealed_count == self.config.safe_cells:
            self._game_state = GameState.WON
            logger.info(f"Game won with {self._flagged_count} flags placed")
            self._notify_state()

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Flagged cells cannot be revealed until unflagged.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if the flag was toggled, False otherwise.

        Raises:
            IndexError: If the position is off the board.
        """
        self._check_position(row, col)
        if self._game_state != GameState.PLAYING:
            return False
        cell = self._grid[row][col]
        if not cell.toggle_flag():
            return False

        self._flagged_count += 1 if cell.is_flagged else -1
        self._notify_cell(row, col)
        remaining = self.remaining_mine_estimate()
        for listener in list(self._listeners):
            listener.on_mine_count_changed(remaining)
        return True

    def remaining_mine_estimate(self) -> int:
        """Mines minus flags. Negative when the player over-flags."""
        return self.config.num_mines - self._flagged_count

    # ========================================================================
    # Notifications
    # ========================================================================

    def subscribe(self, listener: BoardListener) -> None:
        """Start sending change notifications to ``listener``."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: BoardListener) -> None:
        """Stop notifying ``listener``. Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_cell(self, row: int, col: int) -> None:
        snapshot = self.snapshot(row, col)
        for listener in list(self._listeners):
            listener.on_cell_changed(row, col, snapshot)

    def _notify_state(self) -> None:
        for listener in list(self._listeners):
            listener.on_state_changed(self._game_state)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def num_mines(self) -> int:
        return self.config.num_mines

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self._game_state == GameState.LOST

    @property
    def first_move_taken(self) -> bool:
        """True once the first reveal has placed the mines."""
        return self._mines_placed

    @property
    def revealed_count(self) -> int:
        return self._revealed_count

    @property
    def flagged_count(self) -> int:
        return self._flagged_count

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """
        Get cell at position, or None if invalid.

        The returned cell is for inspection only; change it through
        ``reveal`` and ``toggle_flag``.
        """
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def snapshot(self, row: int, col: int) -> CellSnapshot:
        """Presentation view of one cell; mines show once the game is lost."""
        self._check_position(row, col)
        return self._grid[row][col].snapshot(expose=self.is_lost)

    def mine_positions(self) -> List[Position]:
        """Positions of all mines, empty before the first reveal."""
        return [
            (row, col) for row, col in self._positions()
            if self._grid[row][col].is_mine
        ]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.size, self.config.size), dtype=np.int8)
        for row, col in self._positions():
            obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that can still be revealed.

        Returns:
            (row, col) positions of hidden, unflagged cells.
        """
        return [
            (row, col) for row, col in self._positions()
            if self._grid[row][col].is_hidden
        ]

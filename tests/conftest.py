"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import List, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, BoardListener, Cell, GameState


# ============================================================================
# Helpers
# ============================================================================

class RecordingListener(BoardListener):
    """Collects every notification a board sends."""

    def __init__(self) -> None:
        self.cells: List[Tuple] = []
        self.states: List[GameState] = []
        self.mine_counts: List[int] = []
        self.events: List[str] = []

    def on_cell_changed(self, row, col, snapshot) -> None:
        self.cells.append((row, col, snapshot))
        self.events.append("cell")

    def on_state_changed(self, state) -> None:
        self.states.append(state)
        self.events.append("state")

    def on_mine_count_changed(self, remaining) -> None:
        self.mine_counts.append(remaining)
        self.events.append("mines")


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a seeded 9x9 board with 10 mines."""
    return Board(BoardConfig(9, 10), seed=1234)


@pytest.fixture
def small_board() -> Board:
    """Create a small 3x3 board with 1 mine for testing."""
    return Board(BoardConfig(3, 1))


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 0))


@pytest.fixture
def two_mine_board() -> Board:
    """
    4x4 board with mines in the right-hand corners.

        0 0 1 *
        0 0 1 1
        0 0 1 1
        0 0 1 *

    Revealing (3, 0) opens columns 0-2 and leaves (1, 3) and (2, 3).
    """
    return Board(BoardConfig(4, 2), mines=[(0, 3), (3, 3)])


@pytest.fixture
def wall_board() -> Board:
    """5x5 board whose middle column is all mines."""
    return Board(BoardConfig(5, 5), mines=[(row, 2) for row in range(5)])


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


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(neighbor_mines=3)
    cell.reveal()
    return cell


# ============================================================================
# Observer Fixtures
# ============================================================================

@pytest.fixture
def recorder() -> RecordingListener:
    """Listener that records notifications."""
    return RecordingListener()


@pytest.fixture
def clock() -> FakeClock:
    """Clock starting at t=0."""
    return FakeClock()

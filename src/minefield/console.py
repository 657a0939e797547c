"""
Terminal presentation for the board engine and the palette board.

The views here never touch board state directly. They redraw from the
notifications the boards send and forward player commands to the public
board operations.
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from .board import Board, BoardConfig, GameState
from .cell import CellSnapshot
from .events import BoardListener
from .palette import DEFAULT_SIZE, PaletteBoard, PaletteListener
from .timer import ElapsedTimer

logger = logging.getLogger(__name__)


# ============================================================================
# Rendering Helpers
# ============================================================================

HIDDEN_GLYPH = "."
FLAG_GLYPH = "F"
DETONATED_GLYPH = "X"
MINE_GLYPH = "*"
EMPTY_GLYPH = " "

STATUS_TEXT = {
    GameState.PLAYING: "Playing",
    GameState.WON: "You win!",
    GameState.LOST: "Boom! Game over.",
}


def glyph(snapshot: CellSnapshot) -> str:
    """Single character for one cell."""
    if snapshot.is_flagged:
        return FLAG_GLYPH
    if snapshot.is_mine:
        return DETONATED_GLYPH if snapshot.is_revealed else MINE_GLYPH
    if not snapshot.is_revealed:
        return HIDDEN_GLYPH
    if snapshot.neighbor_mines == 0:
        return EMPTY_GLYPH
    return str(snapshot.neighbor_mines)


def format_grid(rows: List[List[str]]) -> str:
    """Lay out a square glyph grid with row and column labels."""
    size = len(rows)
    header = "   " + " ".join(str(col % 10) for col in range(size))
    lines = [header]
    for index, row in enumerate(rows):
        lines.append(f"{index:2d} " + " ".join(row))
    return "\n".join(lines)


def render_board(board: Board) -> str:
    """Draw the whole board from cell snapshots."""
    return format_grid([
        [glyph(board.snapshot(row, col)) for col in range(board.size)]
        for row in range(board.size)
    ])


# ============================================================================
# Views
# ============================================================================

class TerminalView(BoardListener):
    """Text rendering of one board, kept current from notifications."""

    def __init__(self, board: Board) -> None:
        self._grid = [
            [glyph(board.snapshot(row, col)) for col in range(board.size)]
            for row in range(board.size)
        ]
        self.remaining = board.remaining_mine_estimate()
        self.status = STATUS_TEXT[board.game_state]
        board.subscribe(self)

    def on_cell_changed(
        self, row: int, col: int, snapshot: CellSnapshot
    ) -> None:
        self._grid[row][col] = glyph(snapshot)

    def on_state_changed(self, state: GameState) -> None:
        self.status = STATUS_TEXT[state]

    def on_mine_count_changed(self, remaining: int) -> None:
        self.remaining = remaining

    def render(self, elapsed: int = 0) -> str:
        status = f"Mines: {self.remaining:>3}  Time: {elapsed:>3}  {self.status}"
        return status + "\n" + format_grid(self._grid)


class PaletteView(PaletteListener):
    """Text rendering of a palette board: color digits, '.' when blank."""

    def __init__(self, board: PaletteBoard) -> None:
        self._grid = [
            [self._glyph(board.get_tile(row, col).color) for col in range(board.size)]
            for row in range(board.size)
        ]
        self.tiles_revealed = board.tiles_revealed
        board.subscribe(self)

    @staticmethod
    def _glyph(color: int) -> str:
        return str(color) if color else HIDDEN_GLYPH

    def on_tile_changed(self, row: int, col: int, color: int) -> None:
        self._grid[row][col] = self._glyph(color)

    def on_revealed_count_changed(self, count: int) -> None:
        self.tiles_revealed = count

    def render(self) -> str:
        return f"Tiles revealed: {self.tiles_revealed}\n" + format_grid(self._grid)


# ============================================================================
# Commands
# ============================================================================

@dataclass(frozen=True)
class Command:
    """A parsed player command."""

    action: str
    row: Optional[int] = None
    col: Optional[int] = None


ALIASES = {
    "r": "reveal",
    "reveal": "reveal",
    "f": "flag",
    "flag": "flag",
    "c": "click",
    "click": "click",
    "n": "new",
    "new": "new",
    "q": "quit",
    "quit": "quit",
}
POSITIONAL_ACTIONS = {"reveal", "flag", "click"}


def parse_command(line: str) -> Command:
    """
    Parse one line of player input.

    Accepted forms are ``reveal R C``, ``flag R C``, ``click R C``,
    ``new`` and ``quit``, each with a one-letter alias.

    Raises:
        ValueError: If the line is not a valid command.
    """
    parts = line.strip().lower().split()
    if not parts:
        raise ValueError("Empty command")

    action = ALIASES.get(parts[0])
    if action is None:
        raise ValueError(f"Unknown command: {parts[0]}")

    args = parts[1:]
    if action in POSITIONAL_ACTIONS:
        if len(args) != 2:
            raise ValueError(f"Usage: {action} ROW COL")
        try:
            row, col = int(args[0]), int(args[1])
        except ValueError:
            raise ValueError("Row and column must be integers") from None
        return Command(action, row, col)

    if args:
        raise ValueError(f"'{action}' takes no arguments")
    return Command(action)


# ============================================================================
# Sessions
# ============================================================================

class PlaySession:
    """
    Interactive Minesweeper game over a sequence of boards.

    Args:
        config: Board configuration for every game.
        seed: Base seed; game ``n`` uses ``seed + n``.
        clock: Time source for the elapsed-time counter.
    """

    def __init__(
        self,
        config: BoardConfig,
        seed: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.seed = seed
        self.timer = ElapsedTimer(clock)
        self.games_started = 0
        self.done = False
        self.new_game()

    def new_game(self) -> None:
        """Discard the current board and start on a fresh one."""
        seed = None if self.seed is None else self.seed + self.games_started
        self.board = Board(self.config, seed=seed)
        self.view = TerminalView(self.board)
        self.timer.attach(self.board)
        self.games_started += 1
        logger.info(
            f"Game {self.games_started}: {self.config.size}x{self.config.size} "
            f"with {self.config.num_mines} mines"
        )

    def handle(self, line: str) -> str:
        """Apply one line of input and return a message for the player."""
        try:
            command = parse_command(line)
        except ValueError as exc:
            return str(exc)

        if command.action == "quit":
            self.done = True
            return "Bye."
        if command.action == "new":
            self.new_game()
            return "New game."
        if command.action == "click":
            return "Use 'reveal' or 'flag' in this game."

        row, col = command.row, command.col
        if not (0 <= row < self.config.size and 0 <= col < self.config.size):
            return f"({row}, {col}) is off the board."
        if command.action == "reveal":
            changed = self.board.reveal(row, col)
        else:
            changed = self.board.toggle_flag(row, col)
        if not changed:
            return "Nothing to do there."
        return ""

    def render(self) -> str:
        return self.view.render(self.timer.tick())


class PaintSession:
    """Interactive palette board."""

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        self.size = size
        self.done = False
        self.new_game()

    def new_game(self) -> None:
        self.board = PaletteBoard(self.size)
        self.view = PaletteView(self.board)

    def handle(self, line: str) -> str:
        try:
            command = parse_command(line)
        except ValueError as exc:
            return str(exc)

        if command.action == "quit":
            self.done = True
            return "Bye."
        if command.action == "new":
            self.new_game()
            return "Board cleared."
        if command.action != "click":
            return "Use 'click ROW COL' on the palette board."

        row, col = command.row, command.col
        if not (0 <= row < self.size and 0 <= col < self.size):
            return f"({row}, {col}) is off the board."
        self.board.click(row, col)
        return ""

    def render(self) -> str:
        return self.view.render()


def run_session(
    session,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """Drive a session until the player quits or input runs out."""
    write(session.render())
    while not session.done:
        try:
            line = read("> ")
        except EOFError:
            break
        message = session.handle(line)
        if message:
            write(message)
        if not session.done:
            write(session.render())

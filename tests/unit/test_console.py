"""
Unit tests for the terminal front end.
"""
import pytest
from minefield import Board, BoardConfig, CellSnapshot, CellState
from minefield.console import (
    Command,
    PaintSession,
    PlaySession,
    TerminalView,
    format_grid,
    glyph,
    parse_command,
    render_board,
    run_session,
)


# ============================================================================
# Rendering Tests
# ============================================================================

class TestGlyphs:
    """Test per-cell characters."""

    @pytest.mark.parametrize(
        "snapshot, expected",
        [
            (CellSnapshot(CellState.HIDDEN), "."),
            (CellSnapshot(CellState.FLAGGED), "F"),
            (CellSnapshot(CellState.FLAGGED, is_mine=True), "F"),
            (CellSnapshot(CellState.REVEALED), " "),
            (CellSnapshot(CellState.REVEALED, neighbor_mines=3), "3"),
            (CellSnapshot(CellState.REVEALED, is_mine=True), "X"),
            (CellSnapshot(CellState.HIDDEN, is_mine=True), "*"),
        ],
    )
    def test_glyph(self, snapshot: CellSnapshot, expected: str) -> None:
        assert glyph(snapshot) == expected

    def test_format_grid_labels(self) -> None:
        text = format_grid([["1", "."], [" ", "F"]])
        assert text.splitlines() == ["   0 1", " 0 1 .", " 1   F"]

    def test_render_board_after_reveal(self, two_mine_board: Board) -> None:
        two_mine_board.reveal(3, 0)
        lines = render_board(two_mine_board).splitlines()
        assert lines[1] == " 0 " + " ".join([" ", " ", "1", "."])


class TestTerminalView:
    """Test the notification-driven view."""

    def test_view_tracks_reveals(self, two_mine_board: Board) -> None:
        view = TerminalView(two_mine_board)
        two_mine_board.reveal(3, 0)
        assert view.render() == "Mines:   2  Time:   0  Playing\n" + render_board(two_mine_board)

    def test_view_tracks_flags(self, two_mine_board: Board) -> None:
        view = TerminalView(two_mine_board)
        two_mine_board.toggle_flag(0, 0)
        two_mine_board.toggle_flag(0, 1)
        two_mine_board.toggle_flag(0, 2)
        assert view.remaining == -1
        assert view.render().splitlines()[2] == " 0 F F F ."

    def test_view_shows_loss(self, two_mine_board: Board) -> None:
        view = TerminalView(two_mine_board)
        two_mine_board.reveal(0, 3)
        lines = view.render(elapsed=7).splitlines()
        assert lines[0] == "Mines:   2  Time:   7  Boom! Game over."
        assert lines[2].endswith("X")
        assert lines[5].endswith("*")


# ============================================================================
# Command Parsing Tests
# ============================================================================

class TestParseCommand:
    """Test player input parsing."""

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("r 1 2", Command("reveal", 1, 2)),
            ("Reveal 0 0", Command("reveal", 0, 0)),
            ("f 3 4", Command("flag", 3, 4)),
            ("  flag 3   4 ", Command("flag", 3, 4)),
            ("c 5 5", Command("click", 5, 5)),
            ("n", Command("new")),
            ("quit", Command("quit")),
        ],
    )
    def test_valid(self, line: str, expected: Command) -> None:
        assert parse_command(line) == expected

    @pytest.mark.parametrize(
        "line, message",
        [
            ("", "Empty command"),
            ("jump 1 1", "Unknown command"),
            ("r 1", "Usage: reveal ROW COL"),
            ("f a b", "must be integers"),
            ("q now", "takes no arguments"),
        ],
    )
    def test_invalid(self, line: str, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            parse_command(line)


# ============================================================================
# Session Tests
# ============================================================================

class TestPlaySession:
    """Test the interactive game session."""

    def test_reveal_and_win(self) -> None:
        session = PlaySession(BoardConfig(4, 0))
        assert session.handle("r 0 0") == ""
        assert session.board.is_won is True
        assert "You win!" in session.render()

    def test_rejected_move_message(self) -> None:
        session = PlaySession(BoardConfig(9, 10), seed=5)
        session.handle("r 4 4")
        assert session.handle("f 4 4") == "Nothing to do there."

    def test_off_board(self) -> None:
        session = PlaySession(BoardConfig(9, 10), seed=5)
        assert session.handle("r 9 0") == "(9, 0) is off the board."
        assert session.board.first_move_taken is False

    def test_bad_input_reports_error(self) -> None:
        session = PlaySession(BoardConfig(9, 10))
        assert session.handle("hello") == "Unknown command: hello"

    def test_click_not_supported(self) -> None:
        session = PlaySession(BoardConfig(9, 10))
        assert "reveal" in session.handle("c 1 1")

    def test_new_game_replaces_board(self) -> None:
        session = PlaySession(BoardConfig(4, 0))
        first = session.board
        session.handle("r 0 0")
        assert session.handle("new") == "New game."
        assert session.board is not first
        assert session.board.is_playing is True
        assert session.games_started == 2
        assert "Playing" in session.render()

    def test_seeded_games_differ(self) -> None:
        session = PlaySession(BoardConfig(9, 10), seed=11)
        session.handle("r 0 0")
        first_layout = session.board.mine_positions()
        session.handle("n")
        session.handle("r 0 0")
        assert session.board.mine_positions() != first_layout

    def test_timer_in_render(self, clock) -> None:
        session = PlaySession(BoardConfig(9, 30), seed=2, clock=clock)
        session.handle("r 4 4")
        clock.now = 12.0
        assert session.render().splitlines()[0].startswith("Mines:  30  Time:  12")

    def test_quit(self) -> None:
        session = PlaySession(BoardConfig(9, 10))
        assert session.handle("q") == "Bye."
        assert session.done is True


class TestPaintSession:
    """Test the palette session."""

    def test_click_and_render(self) -> None:
        session = PaintSession(3)
        session.handle("c 1 1")
        session.handle("c 1 1")
        lines = session.render().splitlines()
        assert lines[0] == "Tiles revealed: 1"
        assert lines[3] == " 1 . 2 ."

    def test_reveal_not_supported(self) -> None:
        session = PaintSession(3)
        assert "click" in session.handle("r 0 0")

    def test_new_clears(self) -> None:
        session = PaintSession(3)
        session.handle("c 0 0")
        session.handle("n")
        assert session.board.tiles_revealed == 0

    def test_off_board(self) -> None:
        session = PaintSession(3)
        assert session.handle("c 3 3") == "(3, 3) is off the board."


class TestRunSession:
    """Test the input loop."""

    def test_scripted_game(self) -> None:
        lines = iter(["r 0 0", "oops", "q"])
        output = []
        run_session(PlaySession(BoardConfig(4, 0)), lambda prompt: next(lines), output.append)
        assert "Unknown command: oops" in output
        assert output[-1] == "Bye."

    def test_stops_at_end_of_input(self) -> None:
        def read(prompt: str) -> str:
            raise EOFError

        output = []
        session = PaintSession(2)
        run_session(session, read, output.append)
        assert len(output) == 1
        assert session.done is False

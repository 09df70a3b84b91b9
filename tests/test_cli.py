"""Tests for the console driver using scripted input."""

import pytest

from c4bitboard.debug import debug, DebugLevel
from c4bitboard.interfaces.cli import SimpleCLI, main
from c4bitboard.utils import GameResult


class ScriptedIO:
    """Feeds prepared lines to the CLI and collects what it prints."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.output = []

    def input(self, prompt):
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)

    def print(self, text):
        self.output.append(text)

    @property
    def text(self):
        return "\n".join(self.output)


def make_cli(lines):
    io = ScriptedIO(lines)
    return SimpleCLI(input_fn=io.input, output_fn=io.print), io


class TestPlay:
    def test_vertical_win(self):
        cli, io = make_cli(["1", "2", "1", "2", "1", "2", "1"])
        assert cli.play_game() == GameResult.PLAYER_ONE_WIN
        assert "Player 1 won!" in io.text
        assert io.output[0].startswith("Player 1's turn:")
        assert io.output[1].startswith("Player 2's turn:")
        assert io.output[0].endswith("Choose column:")

    def test_invalid_input_reprompts(self):
        cli, io = make_cli(["x", "0", "8", "", "4", "q"])
        assert cli.play_game() == GameResult.IN_PROGRESS
        assert io.text.count("Invalid column") == 4
        assert cli.game.moves == [3]
        assert "Quitting game." in io.output[-1]

    def test_full_column_reprompts(self):
        cli, io = make_cli(["3"] * 7 + ["q"])
        cli.play_game()
        assert io.text.count("Column full") == 1
        assert cli.game.get_state().move_count == 6

    def test_draw(self):
        columns = [str(col + 1) for col in [0, 2, 1, 3, 4, 6, 5] * 6]
        cli, io = make_cli(columns)
        assert cli.play_game() == GameResult.DRAW
        assert "Game over! It's a draw." in io.output[-1]

    def test_end_of_input_stops(self):
        cli, io = make_cli(["4", "4"])
        assert cli.play_game() == GameResult.IN_PROGRESS
        assert io.output[-1] == "Quitting game."


class TestShow:
    def test_position_in_progress(self):
        cli, io = make_cli([])
        assert cli.show_position("4,4,5") is True
        assert "Moves played: 3" in io.text
        assert "Next to move: Player 2" in io.text

    def test_win_reported(self):
        cli, io = make_cli([])
        assert cli.show_position("1,2,1,2,1,2,1") is True
        assert "Player 1 has four in a row: (1,1), (2,1), (3,1), (4,1)" in io.text

    def test_bad_input(self):
        cli, io = make_cli([])
        assert cli.show_position("1,x") is False
        assert io.output[-1].startswith("Error parsing moves")
        assert cli.show_position("9") is False

    def test_move_after_win_rejected(self):
        cli, io = make_cli([])
        assert cli.show_position("1,2,1,2,1,2,1,3") is False
        assert io.output[-1] == "Move 8 (column 3) rejected: game is over"


class TestCommandLine:
    def test_show_command(self, capsys):
        assert main(["show", "--moves", "4"]) == 0
        assert "Moves played: 1" in capsys.readouterr().out

    def test_missing_command(self, capsys):
        assert main([]) == 1
        assert "Please specify a command" in capsys.readouterr().out

    def test_debug_flag_sets_level(self):
        cli, _ = make_cli([])
        cli.parse_args(["--debug", "show", "--moves", "1"])
        assert debug.level == DebugLevel.DEBUG

    def test_debug_level_option(self):
        cli, _ = make_cli([])
        cli.parse_args(["--debug_level", "error", "show", "--moves", "1"])
        assert debug.level == DebugLevel.ERROR

    def test_benchmark(self):
        cli, io = make_cli([])
        timings = cli.benchmark(iterations=20, seed=1)
        assert set(timings) == {'board_init', 'drops', 'win_check', 'rendering'}
        assert all(value is not None and value >= 0 for value in timings.values())
        assert io.output[0] == "Running benchmark with 20 iterations..."

    def test_unknown_debug_level_rejected(self):
        cli, _ = make_cli([])
        with pytest.raises(SystemExit):
            cli.parse_args(["--debug_level", "loud", "play"])

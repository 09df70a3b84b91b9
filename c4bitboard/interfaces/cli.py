"""
cli.py - Command-line interface for the Connect Four bitboard engine

This module provides a console driver for two human players, a command that
replays a list of moves and prints the resulting position, and a benchmark
of the core board operations.
"""

import argparse
import random
from typing import Callable, List, Optional

from c4bitboard.debug import debug, DebugLevel
from c4bitboard.utils import COLS, GameResult, parse_moves, is_valid_column
from c4bitboard.game.bitboard import BoardState
from c4bitboard.game.rules import ConnectFourGame


class SimpleCLI:
    """Simple command-line interface for playing and inspecting games."""

    def __init__(self, input_fn: Callable[[str], str] = input,
                 output_fn: Callable[[str], None] = print):
        self.game = ConnectFourGame()
        self.args = None
        self._input = input_fn
        self._output = output_fn

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Connect Four bitboard CLI')
        parser.add_argument('--debug', action='store_true',
                            help='Enable debug logging (same as --debug_level debug)')
        parser.add_argument('--debug_level',
                            choices=[level.name.lower() for level in DebugLevel],
                            default='warning',
                            help='Logging level: none, error, warning, info, debug, trace')
        parser.add_argument('--log_file', type=str, default=None,
                            help='Also write log messages to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        subparsers.add_parser('play', help='Play a two-player game in the console')

        show_parser = subparsers.add_parser('show', help='Replay moves and print the position')
        show_parser.add_argument('--moves', type=str, required=True,
                                 help='Comma-separated columns (1-7), e.g. 4,4,5,3')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark board operations')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of iterations for benchmarking')
        benchmark_parser.add_argument('--seed', type=int, default=None,
                                      help='Random seed for the benchmarked moves')
        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        self.args = self.build_parser().parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.configure(level=DebugLevel[self.args.debug_level.upper()])

        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the command selected on the command line and return an exit code."""
        if self.args is None:
            self.parse_args(argv)

        debug.debug(f"Running command {self.args.command}", "cli")
        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'show':
            return 0 if self.show_position(self.args.moves) else 1
        elif self.args.command == 'benchmark':
            self.benchmark(self.args.iterations, self.args.seed)
        else:
            self._output("Please specify a command. Use --help for options.")
            return 1
        return 0

    def read_column(self) -> Optional[int]:
        """
        Read one column choice from the player.

        Returns:
            0-based column, -1 to quit, or None for input that is not a valid column
        """
        try:
            text = self._input("").strip().lower()
        except EOFError:
            return -1

        if text == 'q':
            return -1

        try:
            column = int(text) - 1
        except ValueError:
            return None
        return column if is_valid_column(column) else None

    def play_game(self) -> GameResult:
        """
        Play a game between two humans sharing the console.

        Returns:
            The final result, IN_PROGRESS if the players quit early
        """
        self.game.reset()

        while True:
            player = self.game.get_current_player()
            self._output(f"Player {player.value}'s turn:\n{self.game.render()}\nChoose column:")

            column = self.read_column()
            if column == -1:
                self._output("Quitting game.")
                return self.game.result
            if column is None:
                self._output("Invalid column")
                continue

            if not self.game.make_move(column):
                self._output("Column full")
                continue

            if self.game.get_winner() is not None:
                self._output(f"Player {player.value} won!\n{self.game.render()}")
                return self.game.result

            if self.game.result == GameResult.DRAW:
                self._output(f"Game over! It's a draw.\n{self.game.render()}")
                return self.game.result

    def show_position(self, moves_text: str) -> bool:
        """
        Replay 1-based columns and print the resulting position.

        Returns:
            True if every move could be played
        """
        try:
            moves = parse_moves(moves_text)
        except ValueError as e:
            self._output(f"Error parsing moves: {e}")
            return False

        self.game.reset()
        for number, column in enumerate(moves, start=1):
            if not self.game.make_move(column):
                reason = "game is over" if self.game.is_game_over() else "column full"
                self._output(f"Move {number} (column {column + 1}) rejected: {reason}")
                return False

        board = self.game.get_state()
        self._output(self.game.render())
        self._output(f"Moves played: {board.move_count}")

        winner = self.game.get_winner()
        if winner is not None:
            cells = ", ".join(f"({row + 1},{col + 1})" for row, col in self.game.get_winning_line())
            self._output(f"Player {winner.value} has four in a row: {cells}")
        elif self.game.result == GameResult.DRAW:
            self._output("Board is full: draw")
        else:
            self._output(f"Next to move: Player {board.current_player.value}")
            self._output(f"Valid moves: {[col + 1 for col in board.valid_moves()]}")
        return True

    def benchmark(self, iterations: int, seed: Optional[int] = None) -> dict:
        """Time the core board operations and print a summary."""
        rng = random.Random(seed)
        self._output(f"Running benchmark with {iterations} iterations...")
        timings = {}

        debug.start_timer("board_init")
        for _ in range(iterations):
            BoardState.create()
        timings['board_init'] = debug.end_timer("board_init", "cli")

        board = BoardState.create()
        drops = 0
        debug.start_timer("drops")
        for _ in range(iterations):
            if board.drop(rng.randrange(COLS)):
                drops += 1
            if board.is_full():
                board = BoardState.create()
        timings['drops'] = debug.end_timer("drops", "cli")

        checks = 0
        debug.start_timer("win_check")
        for _ in range(iterations):
            board = BoardState.create()
            while not board.is_full():
                board.drop(rng.choice(board.valid_moves()))
                checks += 1
                if board.has_win():
                    break
        timings['win_check'] = debug.end_timer("win_check", "cli")

        debug.start_timer("rendering")
        for _ in range(iterations):
            board.render()
        timings['rendering'] = debug.end_timer("rendering", "cli")

        self._output(f"Board creation: {timings['board_init']:.6f} s for {iterations} boards")
        self._output(f"Drops: {timings['drops']:.6f} s for {drops} successful drops")
        self._output(f"Random games: {timings['win_check']:.6f} s for {checks} drops with win checks")
        self._output(f"Rendering: {timings['rendering']:.6f} s for {iterations} renders")
        return timings


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    raise SystemExit(main())

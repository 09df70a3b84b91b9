"""
bitboard.py - Bit-packed board state for Connect Four

This module implements BoardState, which keeps one integer bit set per player,
the next free bit index of every column and a move counter. Pieces are placed
by setting a single bit and four-in-a-row is found with shift-and-AND tests,
one per direction (see the layout diagram in c4bitboard.utils).
"""

from typing import Iterable, List, Optional, Tuple

import numpy as np

from c4bitboard.debug import debug
from c4bitboard.utils import (ROWS, COLS, CONNECT_N, MAX_MOVES, STRIDES, Player,
                              alignment_starts, bit_index, bit_position,
                              column_base, column_top, is_valid_column,
                              render_board)


class InvalidColumnError(ValueError):
    """Raised when a column index outside 0..COLS-1 reaches the board."""

    def __init__(self, column):
        super().__init__(f"Column {column} is out of range 0-{COLS - 1}")
        self.column = column


class BoardState:
    """
    State of a single Connect Four game.

    Player one (first mover) owns bit set 0 and player two owns bit set 1.
    Whose turn it is follows from the parity of the move counter.
    """

    def __init__(self):
        self._players = [0, 0]
        self._heights = [column_base(col) for col in range(COLS)]
        self._move_count = 0

    @classmethod
    def create(cls) -> 'BoardState':
        """Return an empty board."""
        return cls()

    @classmethod
    def from_moves(cls, columns: Iterable[int]) -> 'BoardState':
        """
        Build a board by replaying 0-based columns from an empty position.

        Raises:
            InvalidColumnError: If a column is out of range
            ValueError: If a move targets a full column
        """
        state = cls()
        for number, column in enumerate(columns):
            if not state.drop(column):
                raise ValueError(f"Move {number} targets full column {column}")
        return state

    def _check_column(self, column) -> int:
        if not is_valid_column(column):
            raise InvalidColumnError(column)
        # numpy integers from the environment would otherwise leak into the bit sets
        return int(column)

    @property
    def move_count(self) -> int:
        return self._move_count

    @property
    def current_player(self) -> Player:
        """The player who moves next."""
        return Player.from_index(self._move_count & 1)

    @property
    def last_player(self) -> Optional[Player]:
        """The player who made the most recent move, None before any move."""
        if self._move_count == 0:
            return None
        return Player.from_index(1 - (self._move_count & 1))

    def player_bits(self, player: Player) -> int:
        return self._players[player.index]

    def column_height(self, column: int) -> int:
        """Number of pieces in a column."""
        column = self._check_column(column)
        return self._heights[column] - column_base(column)

    def can_drop(self, column: int) -> bool:
        column = self._check_column(column)
        return self._heights[column] != column_top(column)

    def valid_moves(self) -> List[int]:
        return [col for col in range(COLS) if self._heights[col] != column_top(col)]

    def is_full(self) -> bool:
        return self._move_count == MAX_MOVES

    def drop(self, column: int) -> bool:
        """
        Drop a piece for the player to move into a 0-based column.

        Returns:
            True if the piece was placed, False if the column is full

        Raises:
            InvalidColumnError: If the column is out of range
        """
        column = self._check_column(column)

        if self._heights[column] == column_top(column):
            debug.debug(f"Column {column} is full", "board")
            return False

        index = self._heights[column]
        mover = self._move_count & 1
        self._players[mover] |= 1 << index
        self._heights[column] += 1
        self._move_count += 1

        debug.trace(f"Player {mover + 1} placed at bit {index} (column {column})", "board")
        return True

    def has_win(self) -> bool:
        """Whether the player who moved last has four in a row."""
        # the counter has already moved past the last move
        bits = self._players[1 - (self._move_count & 1)]

        for stride in STRIDES.values():
            if alignment_starts(bits, stride):
                return True
        return False

    def winning_line(self) -> List[Tuple[int, int]]:
        """
        Cells of one four-in-a-row owned by the most recent mover.

        Returns:
            Four (row, col) tuples ordered from the lowest bit index, or an
            empty list if there is no alignment
        """
        bits = self._players[1 - (self._move_count & 1)]

        for direction, stride in STRIDES.items():
            starts = alignment_starts(bits, stride)
            if starts:
                first = (starts & -starts).bit_length() - 1
                debug.trace(f"Alignment {direction.name} from bit {first}", "board")
                return [bit_position(first + stride * step) for step in range(CONNECT_N)]
        return []

    def _token(self, index: int) -> int:
        return ((self._players[0] >> index) & 1) + ((self._players[1] >> index) & 1) * 2

    def cell(self, row: int, col: int) -> Player:
        if not 0 <= row < ROWS:
            raise IndexError(f"Row {row} is out of range 0-{ROWS - 1}")
        return Player(self._token(bit_index(row, self._check_column(col))))

    def to_array(self) -> np.ndarray:
        """
        Board as a (ROWS, COLS) int8 array with the top row first.

        Values are 0 for empty, 1 for player one and 2 for player two.
        """
        grid = np.zeros((ROWS, COLS), dtype=np.int8)
        for col in range(COLS):
            for row in range(ROWS):
                grid[ROWS - 1 - row, col] = self._token(bit_index(row, col))
        return grid

    def copy(self) -> 'BoardState':
        new_state = BoardState()
        new_state._players = self._players.copy()
        new_state._heights = self._heights.copy()
        new_state._move_count = self._move_count
        return new_state

    def render(self, highlight: Optional[List[Tuple[int, int]]] = None) -> str:
        return render_board(self._players, highlight)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (f"BoardState(players=({self._players[0]:#x}, {self._players[1]:#x}), "
                f"move_count={self._move_count})")

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return (self._players == other._players
                and self._heights == other._heights
                and self._move_count == other._move_count)

    __hash__ = None


# Functional interface for drivers that prefer plain calls over methods

def create() -> BoardState:
    return BoardState.create()


def drop(state: BoardState, column: int) -> bool:
    return state.drop(column)


def has_win(state: BoardState) -> bool:
    return state.has_win()


def render(state: BoardState) -> str:
    return state.render()


def move_count(state: BoardState) -> int:
    return state.move_count

"""
utils.py - Constants, enumerations and helpers for the bitboard engine

Bit layout of a player's bit set. Each column owns a 7-bit lane; the top bit
of every lane is padding and is never set, so that shift-based alignment
checks cannot run from the top of one column into the bottom of the next.

     6 13 20 27 34 41 48      padding
   +---------------------+
   | 5 12 19 26 33 40 47 |    top row
   | 4 11 18 25 32 39 46 |
   | 3 10 17 24 31 38 45 |
   | 2  9 16 23 30 37 44 |
   | 1  8 15 22 29 36 43 |
   | 0  7 14 21 28 35 42 |    bottom row
   +---------------------+
"""

from enum import Enum, auto
from typing import Dict, List, Optional, Sequence, Tuple

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4
LANE_HEIGHT = ROWS + 1  # playable rows plus the padding bit
MAX_MOVES = ROWS * COLS


class Player(Enum):
    """Cell occupant; the values double as the rendering weights."""
    EMPTY = 0
    ONE = 1    # first mover, bit set 0
    TWO = 2    # second mover, bit set 1

    @property
    def index(self) -> int:
        """Position of this player's bit set (0 or 1)."""
        if self == Player.EMPTY:
            raise ValueError("EMPTY has no bit set")
        return self.value - 1

    @classmethod
    def from_index(cls, index: int) -> 'Player':
        return cls(index + 1)


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameResult.IN_PROGRESS

    @classmethod
    def win_for(cls, player: Player) -> 'GameResult':
        return cls.PLAYER_ONE_WIN if player == Player.ONE else cls.PLAYER_TWO_WIN


class Direction(Enum):
    """Alignment directions, named by how they look on the rendered grid."""
    DIAGONAL_DOWN = auto()  # "\" : one column right, one row down
    DIAGONAL_UP = auto()    # "/" : one column right, one row up
    HORIZONTAL = auto()
    VERTICAL = auto()


# Bit-index delta between neighbouring cells, in the order they are checked
STRIDES: Dict[Direction, int] = {
    Direction.DIAGONAL_DOWN: LANE_HEIGHT - 1,
    Direction.DIAGONAL_UP: LANE_HEIGHT + 1,
    Direction.HORIZONTAL: LANE_HEIGHT,
    Direction.VERTICAL: 1,
}


def column_base(column: int) -> int:
    """Bit index of the bottom cell of a column."""
    return column * LANE_HEIGHT


def column_top(column: int) -> int:
    """Bit index of a column's padding slot; a height equal to it means full."""
    return column * LANE_HEIGHT + ROWS


def bit_index(row: int, column: int) -> int:
    return column * LANE_HEIGHT + row


def bit_position(index: int) -> Tuple[int, int]:
    """Inverse of bit_index: (row, column) for a bit index."""
    column, row = divmod(index, LANE_HEIGHT)
    return row, column


PADDING_MASK = sum(1 << column_top(col) for col in range(COLS))
BOARD_MASK = sum(1 << bit_index(row, col) for col in range(COLS) for row in range(ROWS))


def alignment_starts(bits: int, stride: int) -> int:
    """
    Bits that start a run of CONNECT_N set bits spaced `stride` apart.

    Args:
        bits: A player's bit set
        stride: Bit-index delta between consecutive cells of the run

    Returns:
        Non-zero iff such a run exists; each set bit is a run's lowest cell
    """
    result = bits
    for step in range(1, CONNECT_N):
        result &= bits >> (stride * step)
    return result


def is_valid_column(column: int) -> bool:
    return 0 <= column < COLS


def parse_moves(text: str) -> List[int]:
    """
    Parse a comma-separated list of 1-based columns into 0-based indices.

    Raises:
        ValueError: If an entry is not a number or is out of range
    """
    moves = []
    for raw in text.split(','):
        raw = raw.strip()
        if not raw:
            continue
        column = int(raw) - 1
        if not is_valid_column(column):
            raise ValueError(f"Column {raw} is out of range 1-{COLS}")
        moves.append(column)
    return moves


def render_board(players: Sequence[int], highlight: Optional[Sequence[Tuple[int, int]]] = None) -> str:
    """
    Render two player bit sets as the bordered, column-numbered grid.

    Args:
        players: Bit sets of player one and player two
        highlight: Optional (row, col) cells drawn with a trailing '*'
            instead of a space, e.g. a winning line

    Returns:
        Text block of 23-character lines, top row first
    """
    marked = set(highlight or ())
    width = COLS * 3
    lines = [
        "╭" + "".join(f" {col + 1} " for col in range(COLS)) + "╮",
        "├" + "─" * width + "┤",
    ]

    for row in range(ROWS - 1, -1, -1):
        cells = []
        for col in range(COLS):
            index = bit_index(row, col)
            token = ((players[0] >> index) & 1) + ((players[1] >> index) & 1) * 2
            cells.append(f" {token}{'*' if (row, col) in marked else ' '}")
        lines.append("│" + "".join(cells) + "│")

    lines.append("╰" + "─" * width + "╯")
    return "\n".join(lines)

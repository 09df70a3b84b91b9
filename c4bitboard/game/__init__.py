"""
c4bitboard.game - Core game mechanics for Connect Four

This package contains the bit-packed board state, the game manager and the
Gymnasium environment built on top of it.
"""

from c4bitboard.game.bitboard import (BoardState, InvalidColumnError,
                                      create, drop, has_win, render, move_count)
from c4bitboard.game.rules import ConnectFourGame, ConnectFourEnv

__all__ = ['BoardState', 'InvalidColumnError', 'ConnectFourGame', 'ConnectFourEnv',
           'create', 'drop', 'has_win', 'render', 'move_count']

"""
c4bitboard - Bit-packed Connect Four engine

This package provides a compact Connect Four board kept as one bit set per
player, with bit-parallel win detection, a game manager, a Gymnasium
environment and a console driver.
"""

__version__ = '0.1.0'

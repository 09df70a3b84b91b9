"""
c4bitboard.interfaces - User interfaces for the Connect Four engine

This package contains the console driver.
"""

# Don't import anything here to avoid circular imports
__all__ = []

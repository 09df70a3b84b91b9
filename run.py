#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four bitboard engine

Examples:
    python run.py play
    python run.py show --moves 4,4,5,5,6,6,7
    python run.py --debug_level info benchmark --iterations 5000
"""

import sys

from c4bitboard.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())

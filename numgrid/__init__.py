"""
Numgrid - Arithmetic Territory Game Engine

A deterministic, command-driven engine for a two-player game played on a
checkerboard of number and operator tiles. The engine provides:
- Board generation from configurable dice
- A move/turn state machine
- Selection legality and expression evaluation
- Territory pruning, scoring and game-over detection
"""

__version__ = "0.1.0"

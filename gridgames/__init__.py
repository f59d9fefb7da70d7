"""
gridgames - Tic-tac-toe and connect-four with a heuristic computer opponent

This package provides the board representations and win detection for both
games, a one-ply heuristic tic-tac-toe player, turn management, a Gymnasium
environment and a terminal interface.
"""

# Version number
__version__ = '0.1.0'

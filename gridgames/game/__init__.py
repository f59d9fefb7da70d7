"""
gridgames.game - Boards and win detection for the grid games

Turn management and the Gymnasium environment live in gridgames.game.rules.
"""

from gridgames.game.tictactoe import TicTacToeBoard
from gridgames.game.connect4 import ConnectFourBoard

__all__ = ['TicTacToeBoard', 'ConnectFourBoard']

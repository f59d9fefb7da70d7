"""
gridgames.ai - Computer opponents

Only tic-tac-toe has a computer opponent; connect-four is human-vs-human.
"""

from gridgames.ai.heuristic import HeuristicAI

__all__ = ['HeuristicAI']

"""
utils.py - Constants, token enumerations and helpers shared by both grid games

This module provides the board dimensions, the cell token enumeration used by
both the tic-tac-toe and connect-four boards, and small index/rendering helpers.
"""

from enum import Enum, IntEnum, auto
from typing import List, Sequence

from gridgames.debug import debug

# Tic-tac-toe constants
TTT_SIZE = 3
TTT_CELLS = TTT_SIZE * TTT_SIZE

# Connect-four constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
C4_CELLS = ROWS * COLS

# Characters used to display each token
TOKENS = ("-", "X", "O")


class Player(IntEnum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> "Player":
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        return TOKENS[self.value]


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @classmethod
    def for_winner(cls, winner: Player) -> "GameResult":
        """Map a winning token to the matching result."""
        if winner == Player.ONE:
            return cls.PLAYER_ONE_WIN
        if winner == Player.TWO:
            return cls.PLAYER_TWO_WIN
        return cls.IN_PROGRESS


def validate_player(player) -> Player:
    """
    Convert a placement token to a Player, rejecting EMPTY and unknown values.

    Raises:
        ValueError: if the token is not Player.ONE or Player.TWO
    """
    try:
        token = Player(player)
    except ValueError:
        debug.error(f"Invalid player token: {player!r}", "board")
        raise
    if token == Player.EMPTY:
        debug.error("Cannot place the EMPTY token", "board")
        raise ValueError("Cannot place the EMPTY token")
    return token


def check_index(index: int, size: int, what: str = "cell") -> int:
    """
    Ensure an index lies in [0, size).

    Raises:
        IndexError: if the index is outside the board
    """
    if not 0 <= index < size:
        debug.error(f"Invalid {what} index {index} (must be 0-{size - 1})", "board")
        raise IndexError(f"{what} index {index} out of range 0-{size - 1}")
    return int(index)


def tokens_to_string(cells: Sequence[int]) -> str:
    """Join a line of cells into a string of token digits, e.g. '1102'."""
    return "".join(str(int(cell)) for cell in cells)


def render_rows(rows: List[Sequence[int]], separator: str = "|") -> str:
    """
    Render rows of tokens as text, one board row per line.

    Args:
        rows: Rows to render, top row first
        separator: String placed between cells

    Returns:
        ASCII representation of the rows
    """
    return "\n".join(separator.join(TOKENS[int(cell)] for cell in row) for row in rows)

"""
tictactoe.py - Board representation and win detection for 3x3 tic-tac-toe

The board is a flat, row-major array of nine tokens (index = row * 3 + column).
Win detection uses a table built once at import: every one of the eight lines
is attributed to the lowest cell it contains, so a scan over the table visits
each line exactly once.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from gridgames.debug import debug
from gridgames.utils import (TTT_SIZE, TTT_CELLS, Player, check_index,
                             render_rows, validate_player)

WinConditions = Tuple[Tuple[Tuple[int, int], ...], ...]


def all_lines() -> List[Tuple[int, int, int]]:
    """Return the 8 winning lines: rows, then columns, then the two diagonals."""
    lines = []
    for row in range(TTT_SIZE):
        lines.append(tuple(row * TTT_SIZE + col for col in range(TTT_SIZE)))
    for col in range(TTT_SIZE):
        lines.append(tuple(row * TTT_SIZE + col for row in range(TTT_SIZE)))
    lines.append(tuple(i * TTT_SIZE + i for i in range(TTT_SIZE)))
    lines.append(tuple(i * TTT_SIZE + (TTT_SIZE - 1 - i) for i in range(TTT_SIZE)))
    return lines


def build_win_conditions() -> WinConditions:
    """
    Build the partner-pair table used for win scans.

    Returns:
        A tuple indexed by cell; entry i holds the (partner1, partner2) pairs of
        the lines whose lowest cell is i.
    """
    table: List[List[Tuple[int, int]]] = [[] for _ in range(TTT_CELLS)]
    for line in all_lines():
        first, second, third = sorted(line)
        table[first].append((second, third))
    return tuple(tuple(pairs) for pairs in table)


WIN_CONDITIONS = build_win_conditions()


class TicTacToeBoard:
    """
    Represents a tic-tac-toe board.

    Placement never overwrites a token; occupied cells are reported with a
    False return and out-of-range indexes raise.
    """

    win_conditions: WinConditions = WIN_CONDITIONS

    def __init__(self, state: Optional[Sequence[int]] = None):
        """
        Create a board, empty unless a nine-token state is given.

        Args:
            state: Optional row-major tokens to start from (copied)
        """
        if state is None:
            self.cells = np.zeros(TTT_CELLS, dtype=np.int8)
        else:
            cells = np.array(state, dtype=np.int8)
            if cells.shape != (TTT_CELLS,):
                raise ValueError(f"A tic-tac-toe state needs exactly {TTT_CELLS} cells")
            if not np.isin(cells, [p.value for p in Player]).all():
                raise ValueError(f"Invalid tokens in state: {list(state)}")
            self.cells = cells

    def clone(self) -> "TicTacToeBoard":
        """Create an independent copy of the board."""
        debug.trace("Cloning tic-tac-toe board", "board")
        return TicTacToeBoard(self.cells)

    def set_cell(self, index: int, player: Player) -> bool:
        """
        Place a token on an empty cell.

        Args:
            index: Cell index (0-8)
            player: Player.ONE or Player.TWO

        Returns:
            True if the token was placed, False if the cell was occupied
        """
        index = check_index(index, TTT_CELLS)
        player = validate_player(player)

        if self.cells[index] != Player.EMPTY:
            debug.debug(f"Cell {index} already holds {Player(int(self.cells[index])).name}", "board")
            return False

        self.cells[index] = player
        debug.trace(f"Player {player.name} placed at cell {index}", "board")
        return True

    def has_empty_cells(self) -> bool:
        return bool((self.cells == Player.EMPTY).any())

    def empty_cells(self) -> List[int]:
        """Indexes of the empty cells in ascending order."""
        return [int(i) for i in np.flatnonzero(self.cells == Player.EMPTY)]

    def has_winner(self) -> Player:
        """
        Scan the win-condition table for a completed line.

        Returns:
            The token owning the first completed line, or Player.EMPTY
        """
        for index, pairs in enumerate(self.win_conditions):
            token = self.cells[index]
            if token == Player.EMPTY:
                continue
            for first, second in pairs:
                if self.cells[first] == token and self.cells[second] == token:
                    return Player(int(token))

        return Player.EMPTY

    def get_state(self) -> np.ndarray:
        """Copy of the nine cell tokens."""
        return self.cells.copy()

    def render(self) -> str:
        return render_rows(self.cells.reshape(TTT_SIZE, TTT_SIZE).tolist())

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"TicTacToeBoard({self.cells.tolist()})"

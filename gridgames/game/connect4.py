"""
connect4.py - Board representation and win detection for 7x6 connect-four

The board is a flat array of 42 tokens indexed column + row * 7, with row 0 at
the bottom. Tokens fall to the lowest empty cell of a column. Fullness and the
landing row are always found by scanning the column; no height is stored.

Win detection looks at the lines through the topmost token of one column.
The diagonal anchor arithmetic below is specific to the 7x6 grid.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from gridgames.debug import debug
from gridgames.utils import (ROWS, COLS, CONNECT_N, C4_CELLS, Player,
                             check_index, render_rows, tokens_to_string,
                             validate_player)

# Step between consecutive cells of a line
STEP_VERTICAL = COLS
STEP_HORIZONTAL = 1
STEP_RISING = COLS + 1    # column + 1, row + 1
STEP_FALLING = COLS - 1   # column - 1, row + 1


def rising_diagonal(x: int, y: int) -> Optional[Tuple[int, int]]:
    """
    Locate the "/" diagonal through (x, y).

    Returns:
        (start index, last step number) walked in steps of +8 from the
        lower-left anchor, or None if the diagonal has fewer than 4 cells
    """
    sub = y - x
    dx = max(-sub, 0)
    dy = max(sub, 0)
    length = min(6 - dx, 5 - dy)
    if length < CONNECT_N - 1:
        return None
    return dy * COLS + dx, length


def falling_diagonal(x: int, y: int) -> Optional[Tuple[int, int]]:
    """
    Locate the "\\" diagonal through (x, y).

    Returns:
        (start index, last step number) walked in steps of +6 from the
        lower-right anchor, or None if the diagonal has fewer than 4 cells
    """
    sub = y - (6 - x)
    dx = max(-sub, 0)
    dy = max(sub, 0)
    length = min(6 - dx, 5 - dy)
    if length < CONNECT_N - 1:
        return None
    return dy * COLS + (6 - dx), length


class ConnectFourBoard:
    """
    Represents a connect-four board.

    Placement goes through add_to_column only, so no token can float above an
    empty cell.
    """

    def __init__(self, state: Optional[Sequence[int]] = None):
        """
        Create a board, empty unless a 42-token state is given.

        Args:
            state: Optional tokens indexed column + row * 7 (copied)
        """
        if state is None:
            self.cells = np.zeros(C4_CELLS, dtype=np.int8)
        else:
            cells = np.array(state, dtype=np.int8)
            if cells.shape != (C4_CELLS,):
                raise ValueError(f"A connect-four state needs exactly {C4_CELLS} cells")
            if not np.isin(cells, [p.value for p in Player]).all():
                raise ValueError("Invalid tokens in connect-four state")
            grid = cells.reshape(ROWS, COLS) != Player.EMPTY
            if (grid[1:] & ~grid[:-1]).any():
                raise ValueError("Connect-four state has a token above an empty cell")
            self.cells = cells

    def clone(self) -> "ConnectFourBoard":
        """Create an independent copy of the board."""
        debug.trace("Cloning connect-four board", "board")
        return ConnectFourBoard(self.cells)

    @staticmethod
    def index(column: int, row: int) -> int:
        return column + row * COLS

    def is_column_full(self, column: int) -> bool:
        column = check_index(column, COLS, "column")
        return self.cells[self.index(column, ROWS - 1)] != Player.EMPTY

    def valid_columns(self) -> List[int]:
        """Columns that can still take a token."""
        return [col for col in range(COLS) if not self.is_column_full(col)]

    def has_empty_cells(self) -> bool:
        return bool((self.cells == Player.EMPTY).any())

    def add_to_column(self, column: int, player: Player) -> bool:
        """
        Drop a token into a column.

        Args:
            column: Column index (0-6)
            player: Player.ONE or Player.TWO

        Returns:
            True if the token was placed, False if the column is full
        """
        column = check_index(column, COLS, "column")
        player = validate_player(player)

        if self.is_column_full(column):
            debug.debug(f"Column {column} is full", "board")
            return False

        index = column
        while self.cells[index] != Player.EMPTY:
            index += STEP_VERTICAL

        self.cells[index] = player
        debug.trace(f"Player {player.name} placed at ({column}, {index // COLS})", "board")
        return True

    def top_index(self, column: int) -> Optional[int]:
        """Index of the topmost token in a column, or None if it is empty."""
        column = check_index(column, COLS, "column")
        top = None
        index = column
        while index < C4_CELLS and self.cells[index] != Player.EMPTY:
            top = index
            index += STEP_VERTICAL
        return top

    def _lines_through(self, index: int) -> List[List[int]]:
        """Index lists of the lines checked for a win, in checking order."""
        x = index % COLS
        y = index // COLS

        lines = [
            [x + row * STEP_VERTICAL for row in range(ROWS)],
            [y * COLS + col * STEP_HORIZONTAL for col in range(COLS)],
        ]
        for locate, step in ((rising_diagonal, STEP_RISING), (falling_diagonal, STEP_FALLING)):
            diagonal = locate(x, y)
            if diagonal is None:
                continue
            start, length = diagonal
            lines.append([start + step * i for i in range(length + 1)])
        return lines

    def has_winner(self, column: int) -> Player:
        """
        Check for four in a row through the last token played in a column.

        Checks vertical, horizontal, rising and falling diagonal in that order.

        Returns:
            The winning token, or Player.EMPTY
        """
        index = self.top_index(column)
        if index is None:
            return Player.EMPTY

        token = Player(int(self.cells[index]))
        to_match = str(token.value) * CONNECT_N

        for line in self._lines_through(index):
            if to_match in tokens_to_string(self.cells[line]):
                debug.debug(f"Player {token.name} has four in a row through column {column}", "board")
                return token

        return Player.EMPTY

    def get_winning_line(self, column: int) -> List[Tuple[int, int]]:
        """
        Get the (column, row) positions of the winning run through a column.

        Returns:
            The four or more positions of the first winning run, or an empty list
        """
        index = self.top_index(column)
        if index is None:
            return []

        token = self.cells[index]
        for line in self._lines_through(index):
            run: List[int] = []
            for cell in line:
                if self.cells[cell] == token:
                    run.append(cell)
                elif len(run) >= CONNECT_N:
                    break
                else:
                    run = []
            if len(run) >= CONNECT_N:
                return [(cell % COLS, cell // COLS) for cell in run]

        return []

    def get_state(self) -> np.ndarray:
        """Copy of the 42 cell tokens."""
        return self.cells.copy()

    def render(self) -> str:
        """Render the board top row first, with column numbers below."""
        grid = self.cells.reshape(ROWS, COLS)[::-1].tolist()
        footer = "|".join(str(col + 1) for col in range(COLS))
        return render_rows(grid) + "\n" + footer

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ConnectFourBoard({self.cells.tolist()})"

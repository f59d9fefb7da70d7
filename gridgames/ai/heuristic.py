"""
heuristic.py - One-ply heuristic computer opponent for tic-tac-toe

The player looks at every empty cell once:
1. Take an immediate win if there is one
2. Otherwise block any cell where the opponent would win next move
3. Otherwise score each cell by the lines it keeps open, with a bonus for
   two-in-a-line that is withdrawn when the opponent's forced reply would
   leave them with a threat of their own

Ties are broken by a uniform choice over the best cells.
"""

import random
from typing import Dict, List, Optional, Sequence

from gridgames.debug import debug
from gridgames.game.tictactoe import TicTacToeBoard
from gridgames.utils import Player, validate_player


class HeuristicAI:
    """
    A tic-tac-toe player that picks cells with a fixed one-ply heuristic.

    This is not a perfect player: it never looks further ahead than the
    opponent's immediate reply to a two-in-a-line threat.
    """

    def __init__(self, player: Player = Player.TWO, rng: Optional[random.Random] = None):
        """
        Initialize the heuristic player.

        Args:
            player: Token the AI plays with (default: Player.TWO)
            rng: Random source for tie-breaking (default: a fresh random.Random)
        """
        self.player = validate_player(player)
        self.opponent = self.player.other()
        self.rng = rng if rng is not None else random.Random()
        self.positions_evaluated = 0  # For performance tracking

    def select_cell(self, board: TicTacToeBoard) -> Optional[int]:
        """
        Choose the cell to play.

        Args:
            board: The current board (left untouched)

        Returns:
            The chosen cell index, or None if the board is full
        """
        candidates = self.candidate_cells(board)
        if not candidates:
            debug.warning("No empty cells left to select", "ai")
            return None

        cell = candidates[0] if len(candidates) == 1 else self.rng.choice(candidates)
        debug.debug(f"AI selects cell {cell} from {candidates}", "ai")
        return cell

    def candidate_cells(self, board: TicTacToeBoard) -> List[int]:
        """
        All cells the AI considers equally good.

        Returns:
            A single winning cell, every blocking cell, or every cell with the
            highest heuristic score, in ascending order
        """
        self.positions_evaluated = 0
        debug.start_timer("ai_select")

        scores: Dict[int, int] = {}
        opponent_wins: List[int] = []

        for cell in board.empty_cells():
            if self._has_imminent_win(board, cell, self.player):
                debug.debug(f"Winning move available at cell {cell}", "ai")
                debug.end_timer("ai_select", "ai")
                return [cell]
            if self._has_imminent_win(board, cell, self.opponent):
                opponent_wins.append(cell)
            scores[cell] = self.process_game_state(board, cell)

        debug.end_timer("ai_select", "ai")
        debug.trace(f"Scores {scores} after {self.positions_evaluated} positions", "ai")

        if opponent_wins:
            debug.debug(f"Blocking opponent at {opponent_wins}", "ai")
            return opponent_wins

        if not scores:
            return []

        highest = max(scores.values())
        return [cell for cell, score in scores.items() if score == highest]

    def process_game_state(self, board: TicTacToeBoard, cell: int) -> int:
        """
        Score placing the AI token at a cell.

        Every line through the cell that the opponent has not touched counts one
        point. A line that then holds two AI tokens and one gap counts another,
        minus the threats the opponent would make by filling that gap.
        """
        new_board = self._simulate(board, cell, self.player)
        state = new_board.cells
        wins = 0

        for index, first, second in self._lines_through(new_board, cell, self.player):
            wins += 1

            line = (index, first, second)
            if self._count(state, line, self.player) == 2:
                wins += 1
                target = next(c for c in line if state[c] == Player.EMPTY)
                wins -= self.process_opponent_state(new_board, target)

        return wins

    def process_opponent_state(self, board: TicTacToeBoard, cell: int) -> int:
        """
        Count the threats the opponent makes by playing at a cell.

        A threat is a line through the cell with two opponent tokens, one gap
        and no AI token.
        """
        new_board = self._simulate(board, cell, self.opponent)
        state = new_board.cells

        return sum(
            1 for line in self._lines_through(new_board, cell, self.opponent)
            if self._count(state, line, self.opponent) == 2
        )

    def _has_imminent_win(self, board: TicTacToeBoard, cell: int, player: Player) -> bool:
        return self._simulate(board, cell, player).has_winner() != Player.EMPTY

    def _simulate(self, board: TicTacToeBoard, cell: int, player: Player) -> TicTacToeBoard:
        """Clone the board and play a cell that must be empty."""
        self.positions_evaluated += 1
        new_board = board.clone()
        if not new_board.set_cell(cell, player):
            debug.error(f"Invalid cell index {cell} tested by AI for player {player.name}", "ai")
            raise RuntimeError(f"AI simulated a move on occupied cell {cell}")
        return new_board

    @staticmethod
    def _lines_through(board: TicTacToeBoard, cell: int, player: Player):
        """Yield the lines containing cell that hold only player tokens or gaps."""
        state = board.cells

        def is_open(index: int) -> bool:
            return state[index] == player or state[index] == Player.EMPTY

        for index, pairs in enumerate(board.win_conditions):
            if not is_open(index):
                continue
            for first, second in pairs:
                if cell not in (index, first, second):
                    continue
                if is_open(first) and is_open(second):
                    yield index, first, second

    @staticmethod
    def _count(state: Sequence[int], line: Sequence[int], player: Player) -> int:
        return sum(1 for c in line if state[c] == player)

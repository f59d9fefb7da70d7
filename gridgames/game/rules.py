"""
rules.py - Turn management and Gymnasium environment for the grid games

This module provides:
1. Game managers that own a live board, alternate players and track the result
2. A gymnasium-compatible tic-tac-toe environment against the heuristic AI
"""

import random
from typing import Dict, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from gridgames.ai.heuristic import HeuristicAI
from gridgames.debug import debug
from gridgames.game.connect4 import ConnectFourBoard
from gridgames.game.tictactoe import TicTacToeBoard
from gridgames.utils import TTT_CELLS, GameResult, Player


class TicTacToeGame:
    """
    Tic-tac-toe between a human (Player.ONE) and the heuristic AI (Player.TWO).

    The game does no input handling; callers pass cell indexes and ask the AI
    to move when it is its turn.
    """

    def __init__(self, ai_first: bool = False, rng: Optional[random.Random] = None):
        """
        Initialize a new game.

        Args:
            ai_first: Whether the AI makes the first move
            rng: Random source handed to the AI for tie-breaking
        """
        debug.debug("Initializing TicTacToeGame", "game")
        self.ai = HeuristicAI(Player.TWO, rng=rng)
        self.ai_first = ai_first
        self.reset()

    def reset(self) -> None:
        """Reset the game to its initial state."""
        self.board = TicTacToeBoard()
        self.current_player = Player.TWO if self.ai_first else Player.ONE
        self.result = GameResult.IN_PROGRESS
        self.moves_made: List[int] = []

    def is_ai_turn(self) -> bool:
        return not self.is_game_over() and self.current_player == self.ai.player

    def make_move(self, index: int) -> bool:
        """
        Play a cell for the current player.

        Returns:
            True if the move was made, False if the cell is occupied or the
            game is over
        """
        if self.is_game_over():
            debug.debug("Move rejected: game is over", "game")
            return False

        if not self.board.set_cell(index, self.current_player):
            return False

        self.moves_made.append(index)
        self._update_result()
        if not self.is_game_over():
            self.current_player = self.current_player.other()
        return True

    def ai_move(self) -> Optional[int]:
        """
        Let the AI play its turn.

        Returns:
            The cell the AI played, or None if it is not the AI's turn
        """
        if not self.is_ai_turn():
            return None

        cell = self.ai.select_cell(self.board)
        if cell is None or not self.make_move(cell):
            raise RuntimeError(f"AI selected an unplayable cell: {cell}")
        return cell

    def _update_result(self) -> None:
        winner = self.board.has_winner()
        if winner != Player.EMPTY:
            self.result = GameResult.for_winner(winner)
            debug.info(f"Player {winner.name} wins after {len(self.moves_made)} moves", "game")
        elif not self.board.has_empty_cells():
            self.result = GameResult.DRAW
            debug.info("Game ends in a draw", "game")

    def is_game_over(self) -> bool:
        return self.result.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """The winning player, or None if no winner yet or draw."""
        if self.result == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        if self.result == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    def render(self) -> str:
        return self.board.render()


class ConnectFourGame:
    """Human-vs-human connect-four manager."""

    def __init__(self):
        debug.debug("Initializing ConnectFourGame", "game")
        self.reset()

    def reset(self) -> None:
        """Reset the game to its initial state."""
        self.board = ConnectFourBoard()
        self.current_player = Player.ONE
        self.result = GameResult.IN_PROGRESS
        self.moves_made: List[int] = []
        self.last_column: Optional[int] = None

    def make_move(self, column: int) -> bool:
        """
        Drop a token for the current player.

        Returns:
            True if the move was made, False if the column is full or the game
            is over
        """
        if self.is_game_over():
            debug.debug("Move rejected: game is over", "game")
            return False

        if not self.board.add_to_column(column, self.current_player):
            return False

        self.moves_made.append(column)
        self.last_column = column

        winner = self.board.has_winner(column)
        if winner != Player.EMPTY:
            self.result = GameResult.for_winner(winner)
            debug.info(f"Player {winner.name} wins in column {column}", "game")
        elif not self.board.has_empty_cells():
            self.result = GameResult.DRAW
            debug.info("Game ends in a draw", "game")
        else:
            self.current_player = self.current_player.other()

        return True

    def get_valid_moves(self) -> List[int]:
        if self.is_game_over():
            return []
        return self.board.valid_columns()

    def get_winning_line(self) -> List[Tuple[int, int]]:
        if self.get_winner() is None:
            return []
        return self.board.get_winning_line(self.last_column)

    def is_game_over(self) -> bool:
        return self.result.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """The winning player, or None if no winner yet or draw."""
        if self.result == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        if self.result == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    def render(self) -> str:
        return self.board.render()


class TicTacToeEnv(gym.Env):
    """
    Tic-tac-toe environment following the Gymnasium interface.

    The agent plays Player.ONE; after every valid agent move the heuristic AI
    answers as Player.TWO.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None):
        debug.debug("Initializing TicTacToeEnv", "env")

        self.action_space = spaces.Discrete(TTT_CELLS)
        # Observation space: nine cells with 3 possible values (0, 1, 2)
        self.observation_space = spaces.Box(low=0, high=2, shape=(TTT_CELLS,), dtype=np.int8)

        self.render_mode = render_mode
        self.game = TicTacToeGame()

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment; the seed also seeds the AI's tie-breaking.

        Returns:
            Initial observation and info dictionary
        """
        super().reset(seed=seed)
        self.game.ai.rng = random.Random(int(self.np_random.integers(2 ** 32)))
        self.game.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play a cell, then let the AI answer.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")
        action = int(action)

        if self.game.is_game_over() or not self.action_space.contains(action) \
                or self.game.board.cells[action] != Player.EMPTY:
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        self.game.make_move(action)
        if not self.game.is_game_over():
            self.game.ai_move()

        reward = self.reward_step
        terminated = self.game.is_game_over()
        if self.game.result == GameResult.PLAYER_ONE_WIN:
            reward = self.reward_win
        elif self.game.result == GameResult.PLAYER_TWO_WIN:
            reward = self.reward_lose
        elif self.game.result == GameResult.DRAW:
            reward = self.reward_draw

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state()

    def _get_info(self) -> Dict:
        valid_moves = [] if self.game.is_game_over() else self.game.board.empty_cells()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'game_result': self.game.result.name,
            'moves_made': len(self.game.moves_made),
        }


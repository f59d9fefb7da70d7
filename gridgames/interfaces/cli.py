"""
cli.py - Command-line interface for playing the grid games

Tic-tac-toe is played against the heuristic AI; connect-four is played by two
humans sharing the terminal.
"""

import argparse
import random
import sys
from typing import Callable, List, Optional

from gridgames.debug import debug, DebugLevel
from gridgames.game.rules import ConnectFourGame, TicTacToeGame
from gridgames.utils import COLS, TTT_SIZE, Player

STALEMATE_MESSAGE = "There are no remaining moves to play. Stalemate!!!"


def validate_input(text: str, upper: int) -> Optional[int]:
    """
    Parse a 1-based board coordinate typed by the user.

    Args:
        text: Raw user input
        upper: Largest accepted value

    Returns:
        The 0-based value, or None if the input is not a number in [1, upper]
    """
    try:
        number = int(text.strip())
    except ValueError:
        return None

    if number < 1 or number > upper:
        return None

    return number - 1


class GameCLI:
    """Simple terminal interface around the game managers."""

    def __init__(self, input_func: Callable[[str], str] = input,
                 output_func: Callable[[str], None] = print):
        self.input = input_func
        self.write = output_func

    def play_tictactoe(self, game: TicTacToeGame) -> Optional[Player]:
        """
        Play one tic-tac-toe game against the AI.

        Returns:
            The winner, or None for a stalemate
        """
        self.write("Enter a column then a row (1-3) to play a cell.")
        if not game.is_ai_turn():
            self.write(game.render())

        while not game.is_game_over():
            if game.is_ai_turn():
                cell = game.ai_move()
                column = cell % TTT_SIZE
                row = cell // TTT_SIZE
                self.write(f"AI selects cell at column {column + 1} and row {row + 1}.")
                self.write(game.render())
                continue

            cell = self._prompt_cell()
            if game.make_move(cell):
                self.write(game.render())
            else:
                self.write("The selected cell has already been played on. "
                           "A cell must be empty in order to be played.")

        return self._announce(game.get_winner())

    def play_connect4(self, game: ConnectFourGame) -> Optional[Player]:
        """
        Play one connect-four game between two humans.

        Returns:
            The winner, or None for a stalemate
        """
        self.write(game.render())

        while not game.is_game_over():
            column = self._prompt(f"Player {game.current_player.value}, enter a column: ",
                                  COLS, f"Column must be a valid number between 1 and {COLS}.")
            if game.make_move(column):
                self.write(game.render())
            else:
                self.write("This column is full. Please play a different column.")

        return self._announce(game.get_winner())

    def _prompt_cell(self) -> int:
        column = self._prompt("Enter a column: ", TTT_SIZE,
                              f"Column input must be a valid number between 1 and {TTT_SIZE}.")
        row = self._prompt("Enter a row: ", TTT_SIZE,
                           f"Row input must be a valid number between 1 and {TTT_SIZE}.")
        return row * TTT_SIZE + column

    def _prompt(self, message: str, upper: int, error: str) -> int:
        while True:
            value = validate_input(self.input(message), upper)
            if value is not None:
                return value
            self.write(error)

    def _announce(self, winner: Optional[Player]) -> Optional[Player]:
        if winner is not None:
            self.write(f"Player {winner.value} wins!")
        else:
            self.write(STALEMATE_MESSAGE)
        return winner


def configure_debug(args: argparse.Namespace) -> None:
    """Configure the debug level from --debug or --debug_level."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.set_from_string(args.debug_level)

    if args.log_file:
        debug.configure(log_file=args.log_file)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Tic-tac-toe and connect-four in the terminal',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

    # Play tic-tac-toe against the heuristic AI
    python run.py tictactoe

    # Let the AI open, with reproducible tie-breaking
    python run.py tictactoe --first ai --seed 42

    # Play connect-four with two human players
    python run.py connect4 --debug_level debug
    """)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--debug', action='store_true', help='Enable debug output')
    common.add_argument('--debug_level', default='info',
                        choices=[level.name.lower() for level in DebugLevel],
                        help='Debug output level')
    common.add_argument('--log_file', default=None, help='Also write debug output to this file')

    subparsers = parser.add_subparsers(dest='game', help='Game to play')

    ttt_parser = subparsers.add_parser('tictactoe', parents=[common],
                                       help='Play tic-tac-toe against the AI')
    ttt_parser.add_argument('--first', choices=['human', 'ai'], default='human',
                            help='Who makes the first move')
    ttt_parser.add_argument('--seed', type=int, default=None,
                            help='Seed for the AI tie-breaking')

    subparsers.add_parser('connect4', parents=[common],
                          help='Play connect-four with two human players')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the chosen game."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.game:
        parser.print_help()
        return 1

    configure_debug(args)
    cli = GameCLI()

    try:
        if args.game == 'tictactoe':
            rng = random.Random(args.seed)
            cli.play_tictactoe(TicTacToeGame(ai_first=args.first == 'ai', rng=rng))
        else:
            cli.play_connect4(ConnectFourGame())
    except (KeyboardInterrupt, EOFError):
        print("\nQuitting game.")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

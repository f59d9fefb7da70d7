"""Terminal interface driven with scripted input."""

import itertools
import random

import pytest

from gridgames.game.rules import ConnectFourGame, TicTacToeGame
from gridgames.interfaces.cli import STALEMATE_MESSAGE, GameCLI, build_parser, main, validate_input
from gridgames.utils import Player


def scripted(answers):
    answers = iter(answers)

    def fake_input(prompt):
        return next(answers)

    return fake_input


@pytest.mark.parametrize("text,expected", [
    ("1", 0), (" 3 ", 2), ("0", None), ("4", None), ("x", None), ("", None),
])
def test_validate_input(text, expected):
    assert validate_input(text, 3) == expected


def test_tictactoe_session_reprompts_and_finishes():
    cells = [str(n) for pair in itertools.product("123", repeat=2) for n in pair]
    answers = itertools.chain(["abc", "4", "2", "2"], itertools.cycle(cells))
    output = []
    cli = GameCLI(input_func=scripted(answers), output_func=output.append)

    game = TicTacToeGame(ai_first=True, rng=random.Random(5))
    cli.play_tictactoe(game)

    assert game.is_game_over()
    assert "Column input must be a valid number between 1 and 3." in output
    assert any(line.startswith("The selected cell has already been played on.") for line in output)
    assert "AI selects cell at column 2 and row 2." in output
    assert output[-1] in ("Player 1 wins!", "Player 2 wins!", STALEMATE_MESSAGE)


def test_connect4_session_with_full_column():
    answers = ["1"] * 6 + ["9", "1"] + ["2", "3", "2", "3", "2", "3", "2"]
    output = []
    cli = GameCLI(input_func=scripted(answers), output_func=output.append)

    winner = cli.play_connect4(ConnectFourGame())

    assert winner == Player.ONE
    assert "Column must be a valid number between 1 and 7." in output
    assert "This column is full. Please play a different column." in output
    assert output[-1] == "Player 1 wins!"


def test_parser_options():
    args = build_parser().parse_args(["tictactoe", "--first", "ai", "--seed", "3"])
    assert args.game == "tictactoe"
    assert args.first == "ai"
    assert args.seed == 3
    assert args.debug_level == "info"


def test_main_without_game_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out

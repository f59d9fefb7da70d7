"""Tic-tac-toe board: placement, cloning and line-table win detection."""

import random

import pytest

from gridgames.game.tictactoe import TicTacToeBoard, WIN_CONDITIONS, all_lines
from gridgames.utils import Player


def random_board(seed):
    rng = random.Random(seed)
    return TicTacToeBoard([rng.choice([0, 0, 1, 2]) for _ in range(9)])


def test_win_condition_table_attributes_each_line_once():
    assert WIN_CONDITIONS == (
        ((1, 2), (3, 6), (4, 8)),
        ((4, 7),),
        ((5, 8), (4, 6)),
        ((4, 5),),
        (),
        (),
        ((7, 8),),
        (),
        (),
    )
    lines = {tuple(sorted((i, a, b))) for i, pairs in enumerate(WIN_CONDITIONS) for a, b in pairs}
    assert lines == {tuple(sorted(line)) for line in all_lines()}
    assert sum(len(pairs) for pairs in WIN_CONDITIONS) == 8


def test_set_cell_on_empty_and_occupied():
    b = TicTacToeBoard()
    assert b.set_cell(4, Player.ONE)
    before = b.get_state().tobytes()
    assert b.set_cell(4, Player.TWO) is False
    assert b.set_cell(4, Player.ONE) is False
    assert b.get_state().tobytes() == before
    assert b.get_state().tolist() == [0, 0, 0, 0, 1, 0, 0, 0, 0]


@pytest.mark.parametrize("index", [-1, 9, 42])
def test_out_of_range_index_fails_fast(index):
    b = TicTacToeBoard()
    with pytest.raises(IndexError):
        b.set_cell(index, Player.ONE)


@pytest.mark.parametrize("token", [0, 3, -1])
def test_invalid_token_is_rejected(token):
    b = TicTacToeBoard()
    with pytest.raises(ValueError):
        b.set_cell(0, token)
    assert b.get_state().tolist() == [0] * 9


def test_state_must_have_nine_valid_tokens():
    with pytest.raises(ValueError):
        TicTacToeBoard([0] * 8)
    with pytest.raises(ValueError):
        TicTacToeBoard([0] * 8 + [5])


@pytest.mark.parametrize("seed", range(20))
def test_clone_shares_no_storage(seed):
    original = random_board(seed)
    snapshot = original.get_state().tolist()
    copy = original.clone()
    assert copy.get_state().tolist() == snapshot

    for cell in copy.empty_cells():
        copy.set_cell(cell, Player.TWO)
    assert original.get_state().tolist() == snapshot

    copy_snapshot = copy.get_state().tolist()
    for cell in original.empty_cells():
        original.set_cell(cell, Player.ONE)
    assert copy.get_state().tolist() == copy_snapshot


def test_has_empty_cells():
    b = TicTacToeBoard()
    assert b.has_empty_cells()
    assert b.empty_cells() == list(range(9))
    full = TicTacToeBoard([1, 2, 1, 1, 2, 2, 2, 1, 1])
    assert not full.has_empty_cells()
    assert full.empty_cells() == []


def test_empty_board_has_no_winner():
    assert TicTacToeBoard().has_winner() == Player.EMPTY
    assert TicTacToeBoard().has_winner() == 0


@pytest.mark.parametrize("line", all_lines())
@pytest.mark.parametrize("player", [Player.ONE, Player.TWO])
def test_every_line_is_detected(line, player):
    b = TicTacToeBoard()
    for cell in line:
        b.set_cell(cell, player)
    assert b.has_winner() == player


def test_drawn_board_has_no_winner():
    assert TicTacToeBoard([1, 2, 1, 1, 2, 2, 2, 1, 1]).has_winner() == Player.EMPTY


@pytest.mark.parametrize("seed", range(50))
def test_winner_iff_uniform_line(seed):
    b = random_board(seed)
    state = b.get_state().tolist()
    uniform = {state[a] for a, c, d in all_lines() if state[a] != 0 and state[a] == state[c] == state[d]}
    winner = b.has_winner()
    if uniform:
        assert winner in uniform
    else:
        assert winner == Player.EMPTY


def test_render_uses_tokens():
    b = TicTacToeBoard([1, 0, 2, 0, 0, 0, 0, 0, 1])
    assert b.render() == "X|-|O\n-|-|-\n-|-|X"

import random

import pytest

from connectibles.domains.games.entities import Difficulty
from connectibles.domains.games.tictactoe import best_move, check_winner, choose_move

_ = None


def test_check_winner_lines_and_draw():
    assert check_winner(["X", "X", "X", _, "O", "O", _, _, _]) == "X"
    assert check_winner(["O", "X", _, "O", "X", _, "O", _, _]) == "O"
    assert check_winner(["X", "O", _, "O", "X", _, _, _, "X"]) == "X"
    assert check_winner(["X", "O", "X", "X", "O", "O", "O", "X", "X"]) == "draw"
    assert check_winner([_] * 9) is None


def test_best_move_takes_the_win_before_blocking():
    board = ["O", "O", _, "X", "X", _, _, _, _]
    assert best_move(board, random.Random(0)) == 2


def test_best_move_blocks():
    board = ["X", "X", _, _, "O", _, _, _, _]
    assert best_move(board, random.Random(0)) == 2


def test_best_move_prefers_centre_then_corners():
    assert best_move(["X", _, _, _, _, _, _, _, _], random.Random(0)) == 4
    move = best_move([_, _, _, _, "X", _, _, _, _], random.Random(0))
    assert move in (0, 2, 6, 8)


@pytest.mark.parametrize("seed", range(20))
def test_hard_ai_always_blocks(seed):
    board = [_, "X", _, _, "X", _, _, _, "O"]
    assert choose_move(board, Difficulty.HARD, random.Random(seed)) == 7


def test_hard_ai_blocks_in_random_games():
    for seed in range(30):
        rng = random.Random(seed)
        board = [_] * 9
        while check_winner(board) is None:
            board[rng.choice([i for i, c in enumerate(board) if c is None])] = "X"
            if check_winner(board) is not None:
                break
            threats = [i for i in range(9) if board[i] is None and check_winner(_with(board, i, "X")) == "X"]
            move = choose_move(board, Difficulty.HARD, rng)
            if threats and check_winner(_with(board, move, "O")) != "O":
                assert move in threats
            board[move] = "O"


def _with(board, cell, mark):
    board = list(board)
    board[cell] = mark
    return board


def test_easy_ai_plays_an_empty_cell():
    board = ["X", "O", "X", _, "O", _, _, "X", _]
    for seed in range(20):
        assert board[choose_move(board, Difficulty.EASY, random.Random(seed))] is None


def test_full_board_has_no_move():
    with pytest.raises(ValueError):
        choose_move(["X", "O", "X", "X", "O", "O", "O", "X", "X"], Difficulty.HARD)

# connectibles/domains/games/tictactoe.py
"""
Tic-tac-toe rules and the computer opponent.

The board is a flat list of 9 cells holding "X", "O" or None, row by row.
The human plays X, the computer plays O.
"""
import random
from typing import List, Optional, Sequence

from connectibles.domains.games.entities import Difficulty

HUMAN = "X"
AI = "O"
CENTER = 4
CORNERS = (0, 2, 6, 8)
MEDIUM_BEST_MOVE_CHANCE = 0.6

LINES = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def empty_cells(board: Sequence[Optional[str]]) -> List[int]:
    return [i for i, cell in enumerate(board) if cell is None]


def check_winner(board: Sequence[Optional[str]]) -> Optional[str]:
    """"X" or "O" for a completed line, "draw" for a full board, else None."""
    for a, b, c in LINES:
        if board[a] and board[a] == board[b] == board[c]:
            return board[a]
    if not empty_cells(board):
        return "draw"
    return None


def _winning_cell(board: Sequence[Optional[str]], mark: str) -> Optional[int]:
    for cell in empty_cells(board):
        trial = list(board)
        trial[cell] = mark
        if check_winner(trial) == mark:
            return cell
    return None


def best_move(board: Sequence[Optional[str]], rng: random.Random, mark: str = AI) -> int:
    """Win, else block, else centre, else a corner, else anything."""
    opponent = HUMAN if mark == AI else AI

    cell = _winning_cell(board, mark)
    if cell is not None:
        return cell
    cell = _winning_cell(board, opponent)
    if cell is not None:
        return cell
    if board[CENTER] is None:
        return CENTER
    corners = [c for c in CORNERS if board[c] is None]
    if corners:
        return rng.choice(corners)
    return rng.choice(empty_cells(board))


def choose_move(
    board: Sequence[Optional[str]],
    difficulty: Difficulty,
    rng: Optional[random.Random] = None,
) -> int:
    rng = rng or random.Random()
    cells = empty_cells(board)
    if not cells:
        raise ValueError("Board is full")

    if difficulty == Difficulty.HARD:
        return best_move(board, rng)
    if difficulty == Difficulty.MEDIUM and rng.random() < MEDIUM_BEST_MOVE_CHANCE:
        return best_move(board, rng)
    return rng.choice(cells)

"""
Rules of TicTacToe as pure functions over a Board.
"""
from typing import List

from tictactoe.core.game_config import WIN_LINES
from tictactoe.models.board import Board, Mark
from tictactoe.models.outcome import Outcome
from tictactoe.services.validators import move_validator_obj, side_to_move, to_player


def apply_move(board: Board, index: int, player: Mark) -> Board:
    """
    Place `player`'s mark at `index` and return the resulting board.

    Raises:
        InvalidPosition: index is not 0-8.
        CellOccupied: the cell already holds a mark.
        NotYourTurn: `player` is not the side to move on this board.
    """
    move_validator_obj.validate_move(board, index, player)
    return board.place(index, to_player(player))


def evaluate(board: Board) -> Outcome:
    """Win on the first complete line in scan order, else Draw if full, else InProgress."""
    for line in WIN_LINES:
        a, b, c = line
        if board[a] is not None and board[a] is board[b] is board[c]:
            return Outcome.win(board[a], line)

    if board.is_full():
        return Outcome.draw()

    return Outcome.in_progress()


def legal_moves(board: Board) -> List[int]:
    """Return the empty cell indices in ascending order."""
    return [i for i, cell in enumerate(board) if cell is None]


def winners(board: Board) -> set:
    """Return every mark that owns a complete line."""
    wins = set()
    for a, b, c in WIN_LINES:
        if board[a] is not None and board[a] is board[b] is board[c]:
            wins.add(board[a])
    return wins


def is_legal_board(board: Board) -> bool:
    """Check if a board can be reached by legal play."""
    x_cnt = board.count(Mark.X)
    o_cnt = board.count(Mark.O)

    # X goes first, so x_cnt == o_cnt or x_cnt == o_cnt + 1
    if not (x_cnt == o_cnt or x_cnt == o_cnt + 1):
        return False

    # Can't have both winners
    return len(winners(board)) < 2


__all__ = [
    "apply_move",
    "evaluate",
    "legal_moves",
    "side_to_move",
    "winners",
    "is_legal_board",
]

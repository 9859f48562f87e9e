"""
Exhaustive minimax search for TicTacToe.

Scores are seen from the maximizing mark: a win is worth WIN_SCORE minus the
depth at which it happens and a loss is worth depth minus WIN_SCORE, so the
search prefers the fastest win and the slowest loss. No pruning is needed for
a 9-cell board; identical sub-positions are memoized instead.
"""
import logging
from functools import lru_cache
from typing import Optional

from tictactoe.core.exceptions import NoLegalMove
from tictactoe.core.game_config import WIN_SCORE, DRAW_SCORE
from tictactoe.models.board import Board, Mark
from tictactoe.models.outcome import OutcomeKind
from tictactoe.services.rules import evaluate, legal_moves

logger = logging.getLogger(__name__)


def _roles(maximizing_mark: Mark, minimizing_mark: Optional[Mark]):
    maximizing_mark = Mark(maximizing_mark)
    if minimizing_mark is None:
        minimizing_mark = maximizing_mark.opponent()
    minimizing_mark = Mark(minimizing_mark)
    if maximizing_mark is minimizing_mark:
        raise ValueError("Maximizing and minimizing marks must differ")
    return maximizing_mark, minimizing_mark


def best_move(board: Board, maximizing_mark: Mark, minimizing_mark: Optional[Mark] = None) -> int:
    """
    Find the optimal move for `maximizing_mark`.

    Every legal move is tried in ascending index order and scored with the
    opponent to move next. The first move with the strictly greatest score
    wins, so ties go to the lowest index.

    Args:
        board: Position to search from. Never modified.
        maximizing_mark: The mark to find a move for.
        minimizing_mark: The opponent (defaults to the other mark).

    Returns:
        Index of the chosen cell.

    Raises:
        NoLegalMove: the board is full.
    """
    maximizing_mark, minimizing_mark = _roles(maximizing_mark, minimizing_mark)

    moves = legal_moves(board)
    if not moves:
        raise NoLegalMove("No legal move left on a full board")

    best_score = float('-inf')
    best_index = moves[0]

    for index in moves:
        child = board.place(index, maximizing_mark)
        move_score = _score(child, 0, False, maximizing_mark, minimizing_mark)
        logger.debug(f"Move {index} for {maximizing_mark.value} scores {move_score}")

        if move_score > best_score:
            best_score = move_score
            best_index = index

    logger.debug(f"Best move for {maximizing_mark.value}: {best_index} (score: {best_score})")
    return best_index


def score(
    board: Board,
    depth: int,
    is_maximizing: bool,
    maximizing_mark: Mark,
    minimizing_mark: Optional[Mark] = None
) -> int:
    """
    Minimax value of `board` for `maximizing_mark`.

    Args:
        board: Position to score.
        depth: Plies already played below the root move.
        is_maximizing: True if the maximizing mark moves next.
        maximizing_mark: The mark the score is seen from.
        minimizing_mark: The opponent (defaults to the other mark).

    Returns:
        WIN_SCORE - depth for a win, depth - WIN_SCORE for a loss, 0 for a draw.
    """
    maximizing_mark, minimizing_mark = _roles(maximizing_mark, minimizing_mark)
    return _score(board, depth, is_maximizing, maximizing_mark, minimizing_mark)


@lru_cache(maxsize=None)
def _score(board: Board, depth: int, is_maximizing: bool,
           maximizing_mark: Mark, minimizing_mark: Mark) -> int:
    # Terminal states before recursion
    outcome = evaluate(board)
    if outcome.kind is OutcomeKind.WIN:
        if outcome.winner is maximizing_mark:
            return WIN_SCORE - depth
        return depth - WIN_SCORE
    if outcome.kind is OutcomeKind.DRAW:
        return DRAW_SCORE

    mark = maximizing_mark if is_maximizing else minimizing_mark
    child_scores = [
        _score(board.place(index, mark), depth + 1, not is_maximizing,
               maximizing_mark, minimizing_mark)
        for index in legal_moves(board)
    ]
    return max(child_scores) if is_maximizing else min(child_scores)


def clear_cache():
    """Clear the memoized scores."""
    _score.cache_clear()


def cache_size() -> int:
    """Return the number of memoized positions."""
    return _score.cache_info().currsize

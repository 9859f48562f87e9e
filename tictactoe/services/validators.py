from tictactoe.core.exceptions import (
    InvalidPosition, CellOccupied, NotYourTurn
)
from tictactoe.core.game_config import CELL_COUNT, is_valid_index
from tictactoe.models.board import Board, Mark


class MoveValidator:
    """Validates moves against the rules of the game."""

    def validate_move(self, board: Board, index: int, player: Mark) -> None:
        """Validate a move is legal on the given board."""
        # Validate position bounds
        if not is_valid_index(index):
            raise InvalidPosition(f"Position {index!r} is invalid, must be 0-{CELL_COUNT - 1}")

        # Check if cell is already occupied
        if board[index] is not None:
            raise CellOccupied(f"Cell {index} is already occupied by {board[index].value}")

        # Check if it's the player's turn
        player = to_player(player)
        if player is not side_to_move(board):
            raise NotYourTurn(f"It's not player {player.value}'s turn")


def to_player(player) -> Mark:
    """Coerce a player value to a Mark; anything else can never have the turn."""
    try:
        return Mark(player)
    except ValueError:
        raise NotYourTurn(f"Unknown player {player!r}, must be X or O") from None


def side_to_move(board: Board) -> Mark:
    """Infer the side to move from the mark counts (X plays first)."""
    return Mark.X if board.count(Mark.X) == board.count(Mark.O) else Mark.O


move_validator_obj = MoveValidator()

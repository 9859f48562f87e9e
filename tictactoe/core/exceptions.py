class GameException(Exception):
    """Base exception for game-related errors."""
    pass


class IllegalMove(GameException):
    """Raised when a move breaks the rules of the game."""
    pass


class InvalidPosition(IllegalMove):
    """Raised when a move targets an index outside the board."""
    pass


class CellOccupied(IllegalMove):
    """Raised when trying to move to an occupied cell."""
    pass


class NotYourTurn(IllegalMove):
    """Raised when a player tries to move out of turn."""
    pass


class NoLegalMove(GameException):
    """Raised when a move is searched for on a full board."""
    pass


class GameEnded(GameException):
    """Raised when trying to move in an ended game."""
    pass


class SessionNotFound(GameException):
    """Raised when a session is not found."""
    pass

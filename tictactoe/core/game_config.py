"""
Fixed constants for the 3x3 TicTacToe engine.
"""

BOARD_SIZE = 3
CELL_COUNT = BOARD_SIZE * BOARD_SIZE

# Scan order matters: rows, then columns, then diagonals
WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

# Minimax scoring
WIN_SCORE = 10
DRAW_SCORE = 0


def is_valid_index(index) -> bool:
    """Check if an index addresses a cell of the board."""
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < CELL_COUNT

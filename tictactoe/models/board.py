"""
Board and mark types for the TicTacToe engine.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from tictactoe.core.game_config import CELL_COUNT, BOARD_SIZE


class Mark(str, Enum):
    """The two marks a player can place. X always moves first."""
    X = "X"
    O = "O"

    def opponent(self) -> "Mark":
        """Get the other mark."""
        return Mark.O if self is Mark.X else Mark.X


Cell = Optional[Mark]


@dataclass(frozen=True)
class Board:
    """
    Immutable 3x3 board stored as 9 cells in row-major order.

    A cell is None when empty. Placing a mark returns a new board, so a
    board handed to the search or to a caller can never be changed under it.
    """

    cells: Tuple[Cell, ...] = (None,) * CELL_COUNT

    def __post_init__(self):
        if len(self.cells) != CELL_COUNT:
            raise ValueError(f"Board must have {CELL_COUNT} cells, got {len(self.cells)}")
        for cell in self.cells:
            if cell is not None and not isinstance(cell, Mark):
                raise ValueError(f"Invalid cell value: {cell!r}")

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def from_string(cls, layout: str) -> "Board":
        """
        Build a board from 9 characters, e.g. "XOX.O...X".

        'X' and 'O' are marks; '.', '-', '_' and ' ' are empty cells.
        Row separators ('/' or newlines, as in "XOX/XOO/OXX") are ignored.
        """
        symbols = [ch for ch in layout if ch not in "/\n"]
        cells = []
        for ch in symbols:
            if ch.upper() in ("X", "O"):
                cells.append(Mark(ch.upper()))
            elif ch in ".-_ ":
                cells.append(None)
            else:
                raise ValueError(f"Invalid board symbol: {ch!r}")
        return cls(tuple(cells))

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return CELL_COUNT

    def place(self, index: int, mark: Mark) -> "Board":
        """Return a copy of the board with `mark` at `index`. No rule checks."""
        cells = list(self.cells)
        cells[index] = mark
        return Board(tuple(cells))

    def count(self, mark: Mark) -> int:
        return sum(1 for cell in self.cells if cell is mark)

    def is_full(self) -> bool:
        return all(cell is not None for cell in self.cells)

    def rows(self) -> List[List[Cell]]:
        return [list(self.cells[r * BOARD_SIZE:(r + 1) * BOARD_SIZE]) for r in range(BOARD_SIZE)]

    def __str__(self) -> str:
        return "\n".join(
            " ".join(cell.value if cell is not None else "." for cell in row)
            for row in self.rows()
        )

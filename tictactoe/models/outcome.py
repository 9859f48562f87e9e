"""
Result of evaluating a board.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from tictactoe.models.board import Mark


class OutcomeKind(str, Enum):
    IN_PROGRESS = "in_progress"
    WIN = "won"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    winner: Optional[Mark] = None
    line: Optional[Tuple[int, int, int]] = None

    @classmethod
    def in_progress(cls) -> "Outcome":
        return cls(OutcomeKind.IN_PROGRESS)

    @classmethod
    def win(cls, winner: Mark, line: Tuple[int, int, int]) -> "Outcome":
        return cls(OutcomeKind.WIN, winner, tuple(line))

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(OutcomeKind.DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.kind is not OutcomeKind.IN_PROGRESS

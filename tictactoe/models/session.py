"""
Session-level types: game mode, score card and match state.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from tictactoe.models.board import Board, Mark
from tictactoe.models.outcome import Outcome


class GameMode(str, Enum):
    HUMAN_VS_HUMAN = "pvp"
    HUMAN_VS_AUTOMATED = "pve"


class MatchStatus(str, Enum):
    AWAITING_MOVE = "awaiting_move"
    FINISHED = "finished"


@dataclass(frozen=True)
class MatchState:
    """
    Either AwaitingMove(player) or Finished(outcome).

    Built from the board on every read, never stored.
    """
    status: MatchStatus
    to_move: Optional[Mark] = None
    outcome: Optional[Outcome] = None

    @classmethod
    def awaiting_move(cls, player: Mark) -> "MatchState":
        return cls(MatchStatus.AWAITING_MOVE, to_move=player)

    @classmethod
    def finished(cls, outcome: Outcome) -> "MatchState":
        return cls(MatchStatus.FINISHED, outcome=outcome)

    @property
    def is_finished(self) -> bool:
        return self.status is MatchStatus.FINISHED


@dataclass
class Score:
    """Wins per mark. Kept across resets, in memory only."""
    wins: Dict[Mark, int] = field(default_factory=lambda: {Mark.X: 0, Mark.O: 0})

    def record_win(self, mark: Mark) -> None:
        self.wins[mark] += 1

    def __getitem__(self, mark: Mark) -> int:
        return self.wins[mark]

    def to_dict(self) -> Dict[str, int]:
        return {mark.value: count for mark, count in self.wins.items()}


@dataclass(frozen=True)
class Ply:
    """One move made in a session."""
    index: int
    mark: Mark
    automated: bool = False


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything a client sees of a session, read in one go."""
    id: str
    mode: GameMode
    automated_mark: Mark
    board: Board
    outcome: Outcome
    state: MatchState
    legal_moves: List[int]
    score: Dict[str, int]

from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from tictactoe.core.game_config import CELL_COUNT
from tictactoe.models.board import Mark
from tictactoe.models.outcome import OutcomeKind
from tictactoe.models.session import GameMode, Ply
from tictactoe.services.session_service import GameSession


class SessionCreate(BaseModel):
    mode: Optional[GameMode] = Field(None, description="pvp (hot-seat) or pve (against the computer)")
    automated_mark: Optional[Mark] = Field(None, description="Mark played by the computer in pve mode")


class ModeUpdate(BaseModel):
    mode: GameMode = Field(..., description="New game mode; changing it resets the match")


class MoveCreate(BaseModel):
    index: int = Field(..., ge=0, le=CELL_COUNT - 1, description="Cell index, row-major 0-8")
    player: Optional[Mark] = Field(None, description="Mark to place; defaults to the side to move")


class PlyResponse(BaseModel):
    index: int
    mark: Mark
    automated: bool = False

    @classmethod
    def from_ply(cls, ply: Ply) -> "PlyResponse":
        return cls(index=ply.index, mark=ply.mark, automated=ply.automated)


class SessionState(BaseModel):
    id: str
    mode: GameMode
    automated_mark: Mark
    board: List[Optional[Mark]]
    status: OutcomeKind
    to_move: Optional[Mark]
    winner: Optional[Mark] = None
    winning_line: Optional[List[int]] = None
    legal_moves: List[int]
    score: Dict[str, int]

    @classmethod
    def from_session(cls, session: GameSession) -> "SessionState":
        snapshot = session.snapshot()
        outcome = snapshot.outcome
        return cls(
            id=snapshot.id,
            mode=snapshot.mode,
            automated_mark=snapshot.automated_mark,
            board=list(snapshot.board.cells),
            status=outcome.kind,
            to_move=snapshot.state.to_move,
            winner=outcome.winner,
            winning_line=list(outcome.line) if outcome.line else None,
            legal_moves=snapshot.legal_moves,
            score=snapshot.score,
        )


class MoveResponse(BaseModel):
    plies: List[PlyResponse]
    session: SessionState


class BestMoveResponse(BaseModel):
    index: int
    mark: Mark

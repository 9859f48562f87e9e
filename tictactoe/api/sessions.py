"""
Session-related API endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from tictactoe.api.deps import get_session_manager
from tictactoe.models.board import Mark
from tictactoe.schemas import game as game_schemas
from tictactoe.services.session_service import SessionManager

router = APIRouter(
    prefix="/sessions",
    tags=["sessions"],
    responses={404: {"description": "Session not found"}}
)


@router.post("", response_model=game_schemas.SessionState)
def create_session(
        body: game_schemas.SessionCreate,
        manager: SessionManager = Depends(get_session_manager)
):
    """
    Create a new session with an empty board.

    In pve mode the computer answers every human move. If the computer
    plays X it has already made its opening move in the response.
    """
    session = manager.create(mode=body.mode, automated_mark=body.automated_mark)
    return game_schemas.SessionState.from_session(session)


@router.get("/{session_id}", response_model=game_schemas.SessionState)
def get_session(
        session_id: str,
        manager: SessionManager = Depends(get_session_manager)
):
    """
    Get the current state of a session.

    Returns:
    - Board cells in row-major order
    - Status (in_progress, won, draw) and winning line
    - Side to move and legal moves
    - Score card
    """
    return game_schemas.SessionState.from_session(manager.get(session_id))


@router.post("/{session_id}/move", response_model=game_schemas.MoveResponse)
def make_move(
        session_id: str,
        move: game_schemas.MoveCreate,
        manager: SessionManager = Depends(get_session_manager)
):
    """
    Make a move in the session.

    Validates:
    - The game is not over
    - It's the player's turn
    - The cell is empty

    The response lists the human ply followed by the computer's reply, if any.
    """
    session = manager.get(session_id)
    if move.player is None:
        plies = session.play(move.index)
    else:
        plies = session.apply_move(move.index, move.player)
    return game_schemas.MoveResponse(
        plies=[game_schemas.PlyResponse.from_ply(ply) for ply in plies],
        session=game_schemas.SessionState.from_session(session),
    )


@router.post("/{session_id}/reset", response_model=game_schemas.SessionState)
def reset_session(
        session_id: str,
        manager: SessionManager = Depends(get_session_manager)
):
    """Clear the board and start a new match. The score is kept."""
    session = manager.get(session_id)
    session.reset()
    return game_schemas.SessionState.from_session(session)


@router.put("/{session_id}/mode", response_model=game_schemas.SessionState)
def switch_mode(
        session_id: str,
        body: game_schemas.ModeUpdate,
        manager: SessionManager = Depends(get_session_manager)
):
    """Switch between pvp and pve. A change of mode resets the match."""
    session = manager.get(session_id)
    session.switch_mode(body.mode)
    return game_schemas.SessionState.from_session(session)


@router.get("/{session_id}/best-move", response_model=game_schemas.BestMoveResponse)
def get_best_move(
        session_id: str,
        mark: Optional[Mark] = Query(None, description="Mark to search for; defaults to the side to move"),
        manager: SessionManager = Depends(get_session_manager)
):
    """Ask the minimax search for the optimal move in the current position."""
    index, mark = manager.get(session_id).suggest_move(mark)
    return game_schemas.BestMoveResponse(index=index, mark=mark)


@router.delete("/{session_id}", status_code=204)
def delete_session(
        session_id: str,
        manager: SessionManager = Depends(get_session_manager)
):
    """Drop a session and its score card."""
    manager.delete(session_id)
    return Response(status_code=204)

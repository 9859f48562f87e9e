"""
Session controller: turn alternation, automated replies, mode and score.
"""
import logging
import threading
import uuid
from collections import OrderedDict
from typing import List, Optional, Tuple

from tictactoe.core.config import settings
from tictactoe.core.exceptions import GameEnded, NotYourTurn, SessionNotFound
from tictactoe.models.board import Board, Mark
from tictactoe.models.outcome import Outcome, OutcomeKind
from tictactoe.models.session import GameMode, MatchState, Ply, Score, SessionSnapshot
from tictactoe.services import minimax
from tictactoe.services.rules import apply_move, evaluate, legal_moves
from tictactoe.services.validators import side_to_move, to_player

logger = logging.getLogger(__name__)


class GameSession:
    """
    One local match plus its score card.

    The board is the only match state kept; whose turn it is and whether the
    game is over are derived from it on every call. A human ply and the
    computer's answer are published as a single board update, so the computer
    is never seen with the turn.
    """

    def __init__(self, mode: GameMode = GameMode.HUMAN_VS_HUMAN,
                 automated_mark: Mark = Mark.O, session_id: Optional[str] = None):
        self.id = session_id or uuid.uuid4().hex
        self.mode = GameMode(mode)
        self.automated_mark = Mark(automated_mark)
        self.score = Score()
        self._lock = threading.RLock()

        # The automated side may own the opening move
        self.board, _ = self._with_automated_reply(Board.empty())

    @property
    def state(self) -> MatchState:
        return _match_state(self.board)

    def evaluate(self) -> Outcome:
        return evaluate(self.board)

    def legal_moves(self) -> List[int]:
        if self.state.is_finished:
            return []
        return legal_moves(self.board)

    def snapshot(self) -> SessionSnapshot:
        """Read board, outcome, turn, legal moves and score consistently."""
        with self._lock:
            board = self.board
            outcome = evaluate(board)
            return SessionSnapshot(
                id=self.id,
                mode=self.mode,
                automated_mark=self.automated_mark,
                board=board,
                outcome=outcome,
                state=_match_state(board),
                legal_moves=[] if outcome.is_terminal else legal_moves(board),
                score=self.score.to_dict(),
            )

    def is_automated(self, mark: Mark) -> bool:
        return self.mode is GameMode.HUMAN_VS_AUTOMATED and mark is self.automated_mark

    def play(self, index: int) -> List[Ply]:
        """Play `index` for whichever side is to move."""
        with self._lock:
            state = self.state
            if state.is_finished:
                raise GameEnded(f"Game in session {self.id} has already ended")
            return self.apply_move(index, state.to_move)

    def apply_move(self, index: int, player: Mark) -> List[Ply]:
        """
        Make a human move, then let the automated side answer if it is its turn.

        Returns:
            The plies made by this call, in order.
        """
        with self._lock:
            player = to_player(player)
            if self.state.is_finished:
                raise GameEnded(f"Game in session {self.id} has already ended")

            if self.is_automated(player):
                raise NotYourTurn(f"Player {player.value} is played by the computer")

            board = self._advance(self.board, index, player)
            board, replies = self._with_automated_reply(board)
            self.board = board
            return [Ply(index=index, mark=player)] + replies

    def suggest_move(self, maximizing_mark: Optional[Mark] = None) -> Tuple[int, Mark]:
        """Search the optimal move; returns the index and the mark it was searched for."""
        with self._lock:
            state = self.state
            if state.is_finished and state.outcome.kind is OutcomeKind.WIN:
                raise GameEnded(f"Game in session {self.id} has already ended")
            if maximizing_mark is None:
                mark = side_to_move(self.board)
            else:
                mark = to_player(maximizing_mark)
            return minimax.best_move(self.board, mark), mark

    def best_move(self, maximizing_mark: Optional[Mark] = None) -> int:
        """Search the optimal move for `maximizing_mark` (default: side to move)."""
        index, _ = self.suggest_move(maximizing_mark)
        return index

    def reset(self) -> List[Ply]:
        """Start a fresh match. The score is kept."""
        with self._lock:
            self.board, replies = self._with_automated_reply(Board.empty())
            logger.info(f"Session {self.id} reset")
            return replies

    def switch_mode(self, mode: GameMode) -> List[Ply]:
        """Change the game mode; a real change resets the match."""
        with self._lock:
            mode = GameMode(mode)
            if mode is self.mode:
                return []
            self.mode = mode
            logger.info(f"Session {self.id} switched to mode {mode.value}")
            return self.reset()

    def _advance(self, board: Board, index: int, player: Mark) -> Board:
        board = apply_move(board, index, player)

        outcome = evaluate(board)
        if outcome.kind is OutcomeKind.WIN:
            self.score.record_win(outcome.winner)
            logger.info(
                f"Player {outcome.winner.value} won session {self.id} on line {list(outcome.line)}"
            )
        elif outcome.kind is OutcomeKind.DRAW:
            logger.info(f"Session {self.id} ended in a draw")

        return board

    def _with_automated_reply(self, board: Board) -> Tuple[Board, List[Ply]]:
        state = _match_state(board)
        if state.is_finished or not self.is_automated(state.to_move):
            return board, []

        index = minimax.best_move(board, self.automated_mark)
        logger.info(f"Computer plays {self.automated_mark.value} at {index} in session {self.id}")
        board = self._advance(board, index, self.automated_mark)
        return board, [Ply(index=index, mark=self.automated_mark, automated=True)]


def _match_state(board: Board) -> MatchState:
    outcome = evaluate(board)
    if outcome.is_terminal:
        return MatchState.finished(outcome)
    return MatchState.awaiting_move(side_to_move(board))


class SessionManager:
    """In-memory registry of sessions, oldest evicted first when full."""

    def __init__(self, max_sessions: int = settings.MAX_SESSIONS):
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, GameSession]" = OrderedDict()
        self._lock = threading.Lock()

    def create(self, mode: Optional[GameMode] = None,
               automated_mark: Optional[Mark] = None) -> GameSession:
        session = GameSession(
            mode=mode if mode is not None else settings.DEFAULT_GAME_MODE,
            automated_mark=automated_mark if automated_mark is not None else settings.AUTOMATED_MARK,
        )

        with self._lock:
            while self._sessions and len(self._sessions) >= self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.info(f"Evicted session {evicted_id}")
            self._sessions[session.id] = session

        logger.info(f"Session {session.id} created in mode {session.mode.value}")
        return session

    def get(self, session_id: str) -> GameSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(f"Session {session_id} not found")
        return session

    def delete(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFound(f"Session {session_id} not found")
        logger.info(f"Session {session_id} deleted")

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)


session_manager_obj = SessionManager()

import random
import threading

import pytest

from tictactoe.core.exceptions import GameEnded, NotYourTurn, NoLegalMove, SessionNotFound, CellOccupied, IllegalMove
from tictactoe.models.board import Board, Mark
from tictactoe.models.outcome import Outcome, OutcomeKind
from tictactoe.models.session import GameMode, MatchState, MatchStatus, Ply
from tictactoe.schemas.game import SessionState
from tictactoe.services import minimax
from tictactoe.services.session_service import GameSession, SessionManager

DRAW_SEQUENCE = [0, 1, 2, 4, 3, 5, 7, 6, 8]
X_ROW_WIN = [0, 3, 1, 4, 2]


def play_all(session, indices):
    for index in indices:
        session.play(index)


class TestHumanVsHuman:

    def test_turns_alternate(self):
        session = GameSession()
        assert session.state == MatchState.awaiting_move(Mark.X)
        session.play(4)
        assert session.state == MatchState.awaiting_move(Mark.O)
        assert session.board[4] is Mark.X

    def test_win_finishes_and_scores(self):
        session = GameSession()
        play_all(session, X_ROW_WIN)
        state = session.state
        assert state.status is MatchStatus.FINISHED
        assert state.outcome == Outcome.win(Mark.X, (0, 1, 2))
        assert session.score[Mark.X] == 1
        assert session.score[Mark.O] == 0
        assert session.legal_moves() == []

    def test_draw_leaves_score(self):
        session = GameSession()
        play_all(session, DRAW_SEQUENCE)
        assert session.evaluate() == Outcome.draw()
        assert session.score.to_dict() == {"X": 0, "O": 0}

    def test_moves_after_finish_rejected(self):
        session = GameSession()
        play_all(session, X_ROW_WIN)
        with pytest.raises(GameEnded):
            session.play(8)
        with pytest.raises(GameEnded):
            session.apply_move(8, Mark.O)

    def test_wrong_player_rejected(self):
        session = GameSession()
        with pytest.raises(NotYourTurn):
            session.apply_move(0, Mark.O)
        session.apply_move(0, Mark.X)
        with pytest.raises(CellOccupied):
            session.apply_move(0, Mark.O)

    def test_reset_keeps_score(self):
        session = GameSession()
        play_all(session, X_ROW_WIN)
        session.reset()
        assert session.board == Board()
        assert session.state == MatchState.awaiting_move(Mark.X)
        play_all(session, X_ROW_WIN)
        assert session.score[Mark.X] == 2

    def test_best_move_hint(self):
        session = GameSession()
        play_all(session, [0, 4, 1])
        assert session.best_move() == 2
        assert session.best_move(Mark.X) == 2

    def test_suggest_move_reports_searched_mark(self):
        session = GameSession()
        play_all(session, [0, 4, 1])
        assert session.suggest_move() == (2, Mark.O)
        assert session.suggest_move("X") == (2, Mark.X)

    def test_unknown_player_is_illegal(self):
        session = GameSession()
        with pytest.raises(NotYourTurn):
            session.apply_move(0, "Z")
        with pytest.raises(IllegalMove):
            session.apply_move(0, None)
        assert session.board == Board.empty()

    def test_best_move_after_finish(self):
        session = GameSession()
        play_all(session, X_ROW_WIN)
        with pytest.raises(GameEnded):
            session.best_move()

        session.reset()
        play_all(session, DRAW_SEQUENCE)
        with pytest.raises(NoLegalMove):
            session.best_move()


class TestHumanVsAutomated:

    def test_computer_answers_immediately(self):
        session = GameSession(mode=GameMode.HUMAN_VS_AUTOMATED)
        plies = session.play(4)
        assert plies == [Ply(4, Mark.X), Ply(0, Mark.O, automated=True)]
        assert session.state == MatchState.awaiting_move(Mark.X)

    def test_human_cannot_play_computer_mark(self):
        session = GameSession(mode=GameMode.HUMAN_VS_AUTOMATED)
        session.play(4)
        with pytest.raises(NotYourTurn):
            session.apply_move(8, Mark.O)

    def test_computer_takes_corner_after_opposite_corner(self):
        session = GameSession(mode=GameMode.HUMAN_VS_AUTOMATED)
        session.play(4)
        plies = session.play(8)
        assert plies[-1] == Ply(2, Mark.O, automated=True)

    def test_computer_plays_first_as_x(self):
        session = GameSession(mode=GameMode.HUMAN_VS_AUTOMATED, automated_mark=Mark.X)
        assert session.board[0] is Mark.X
        assert session.state == MatchState.awaiting_move(Mark.O)
        session.reset()
        assert session.board.count(Mark.X) == 1

    def test_no_reply_after_winning_move(self):
        session = GameSession(mode=GameMode.HUMAN_VS_AUTOMATED, automated_mark=Mark.X)
        rng = random.Random(3)
        while not session.state.is_finished:
            plies = session.play(rng.choice(session.legal_moves()))
            assert plies[0].mark is Mark.O
            assert len(plies) <= 2
        assert session.evaluate().winner is not Mark.O

    def test_computer_turn_never_visible(self):
        session = GameSession(mode=GameMode.HUMAN_VS_AUTOMATED)
        seen = []
        stop = threading.Event()

        def read_sessions():
            while not stop.is_set():
                state = SessionState.from_session(session)
                if state.to_move is Mark.O:
                    seen.append(state.board)

        reader = threading.Thread(target=read_sessions)
        reader.start()
        try:
            for _ in range(20):
                minimax.clear_cache()
                session.play(4)
                session.reset()
        finally:
            stop.set()
            reader.join()

        assert seen == []

    def test_snapshot_is_consistent(self):
        session = GameSession(mode=GameMode.HUMAN_VS_AUTOMATED)
        session.play(4)
        snapshot = session.snapshot()
        assert snapshot.board.cells == session.board.cells
        assert snapshot.state == MatchState.awaiting_move(Mark.X)
        assert snapshot.legal_moves == [1, 2, 3, 5, 6, 7, 8]
        assert snapshot.score == {"X": 0, "O": 0}

    def test_random_human_never_wins(self):
        session = GameSession(mode=GameMode.HUMAN_VS_AUTOMATED)
        rng = random.Random(42)
        for _ in range(30):
            while not session.state.is_finished:
                session.play(rng.choice(session.legal_moves()))
            session.reset()
        assert session.score[Mark.X] == 0


class TestSwitchMode:

    def test_same_mode_is_noop(self):
        session = GameSession()
        session.play(4)
        assert session.switch_mode(GameMode.HUMAN_VS_HUMAN) == []
        assert session.board[4] is Mark.X

    def test_new_mode_resets_board_not_score(self):
        session = GameSession()
        play_all(session, X_ROW_WIN)
        session.switch_mode(GameMode.HUMAN_VS_AUTOMATED)
        assert session.mode is GameMode.HUMAN_VS_AUTOMATED
        assert session.board == Board.empty()
        assert session.score[Mark.X] == 1

    def test_accepts_mode_value(self):
        session = GameSession()
        session.switch_mode("pve")
        assert session.mode is GameMode.HUMAN_VS_AUTOMATED


class TestSessionManager:

    def test_create_and_get(self):
        manager = SessionManager()
        session = manager.create(mode=GameMode.HUMAN_VS_AUTOMATED)
        assert manager.get(session.id) is session
        assert manager.count() == 1

    def test_defaults_from_settings(self):
        session = SessionManager().create()
        assert session.mode is GameMode.HUMAN_VS_HUMAN
        assert session.automated_mark is Mark.O

    def test_delete(self):
        manager = SessionManager()
        session = manager.create()
        manager.delete(session.id)
        with pytest.raises(SessionNotFound):
            manager.get(session.id)
        with pytest.raises(SessionNotFound):
            manager.delete(session.id)

    def test_evicts_oldest(self):
        manager = SessionManager(max_sessions=2)
        first = manager.create()
        manager.create()
        manager.create()
        assert manager.count() == 2
        with pytest.raises(SessionNotFound):
            manager.get(first.id)


def test_outcome_kinds():
    assert not Outcome.in_progress().is_terminal
    assert Outcome.draw().kind is OutcomeKind.DRAW

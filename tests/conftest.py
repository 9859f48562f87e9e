import pytest
from fastapi.testclient import TestClient

from tictactoe.api.deps import get_session_manager
from tictactoe.models.board import Board
from tictactoe.services.session_service import SessionManager
from main import app


@pytest.fixture
def manager():
    return SessionManager(max_sessions=10)


@pytest.fixture
def client(manager):
    def override_get_session_manager():
        return manager

    app.dependency_overrides[get_session_manager] = override_get_session_manager
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def board_from():
    return Board.from_string

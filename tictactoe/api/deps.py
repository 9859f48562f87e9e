"""
Dependency injection for API endpoints.
"""
from tictactoe.services.session_service import SessionManager, session_manager_obj


def get_session_manager() -> SessionManager:
    """
    Session registry dependency, overridden in tests with a fresh manager.
    """
    return session_manager_obj

"""
An in-memory TicTacToe service with an optimal computer opponent.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tictactoe.api.router import include_routers
from tictactoe.core.config import settings
from tictactoe.core.exception_handlers import register_exception_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.DEBUG else logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# Lifespan context manager for startup/shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application lifecycle events."""
    logger.info(
        f"Starting TicTacToe (default mode: {settings.DEFAULT_GAME_MODE}, "
        f"computer plays {settings.AUTOMATED_MARK})"
    )

    yield

    logger.info("Shutting down TicTacToe API...")


# Create FastAPI application
app = FastAPI(
    title="TicTacToe",
    description="""
    Play TicTacToe hot-seat or against a minimax opponent that never loses.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Register exception handlers
register_exception_handlers(app)


# Include routers
include_routers(app)

# CLI entry point
if __name__ == "__main__":
    import uvicorn

    # Development server configuration
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
        access_log=True
    )

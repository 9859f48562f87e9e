from pydantic_settings import BaseSettings, SettingsConfigDict

from tictactoe.models.board import Mark
from tictactoe.models.session import GameMode


class Settings(BaseSettings):
    DEBUG: bool = True
    DEFAULT_GAME_MODE: GameMode = GameMode.HUMAN_VS_HUMAN
    AUTOMATED_MARK: Mark = Mark.O
    MAX_SESSIONS: int = 1000

    model_config = SettingsConfigDict(env_file=".env")


settings = Settings()

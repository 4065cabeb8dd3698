"""Application configuration loaded from environment variables and .env file."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = "sqlite:///./synapse.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = "synapse.log"

    # 세션 저장 / 대화 기록
    SAVE_FILE: str = "savegame.txt"
    TRANSCRIPT_FILE: str = "conversation_history.txt"
    AUTO_SAVE_INTERVAL: int = 5

    # HTTP: 끝난 세션을 기록 조회용으로 남겨 두는 개수
    ENDED_SESSION_RETENTION: int = 32

    # 콘솔 렌더링
    TEXT_DELAY_MS: int = 30
    GLITCH_RATE: float = 0.1
    SHOW_STATE_LINE: bool = True

    # None이면 매 실행마다 다른 난수
    RANDOM_SEED: Optional[int] = None


settings = Settings()

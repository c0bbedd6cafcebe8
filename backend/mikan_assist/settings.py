from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_BACKEND_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MIKAN_ASSIST_",
        env_file=(str(_BACKEND_DIR / ".env"), ".env", "backend/.env"),
        extra="ignore",
    )

    database_url: str = "sqlite+pysqlite:///./mikan_assist.db"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Stored conversation messages handed to the response engine as history.
    context_history_limit: int = 20
    response_history_default_limit: int = 10

    backend_host: str = "127.0.0.1"
    backend_port: int = 3333
    backend_log_level: str = "info"


settings = Settings()

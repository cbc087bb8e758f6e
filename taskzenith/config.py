"""TaskZenith settings, read from the environment and an optional ``.env`` file."""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Server and board-client configuration."""

    # Persistence; unset means the bundled SQLite file
    DATABASE_URL: Optional[str] = None

    APP_NAME: str = "TaskZenith"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    # Comma separated
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:9002"

    HOST: str = "0.0.0.0"
    PORT: int = Field(default=8000, ge=1, le=65535)

    # Where HttpTaskStore sends board fetches and moves
    TASK_STORE_URL: str = "http://localhost:8000"
    TASK_STORE_TOKEN: Optional[str] = None
    TASK_STORE_TIMEOUT: float = Field(default=10.0, gt=0, description="Seconds per store request")

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in (self.CORS_ORIGINS or "").split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()

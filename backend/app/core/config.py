from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Tic-Tac-Toe AI Server"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/game"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    WORKERS: int = 1

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:8080"]

    # Finished-game sweep
    CLEANUP_ENABLED: bool = True
    CLEANUP_INTERVAL_SECONDS: float = 300.0

    model_config = SettingsConfigDict(
        case_sensitive=True, env_file=".env", extra="ignore"
    )


settings = Settings()

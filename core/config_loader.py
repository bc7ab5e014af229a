from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "HR Records API"
    APP_VERSION: str = "0.1.0"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    PORT: int = 5000

    # Database
    DATABASE_URL: str = "sqlite:///./hr.db"
    DB_POOL_MIN: int = 2
    DB_POOL_MAX: int = 10
    DB_POOL_TIMEOUT: int = 60
    DB_ECHO: bool = False

    # CORS
    FRONTEND_URL: str = "http://localhost:5173"
    BACKEND_CORS_ORIGINS: List[str] = []

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cors_origins(self) -> List[str]:
        origins = [self.FRONTEND_URL, *self.BACKEND_CORS_ORIGINS]
        return [str(o).strip("/") for o in origins if o]


@lru_cache
def get_settings() -> Settings:
    return Settings()


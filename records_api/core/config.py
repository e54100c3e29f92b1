# records_api/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - JWT_SECRET (HS256 signing secret for access tokens)

    Optional:
      - DATABASE_URL (defaults to a local SQLite file)
      - DEFAULT_PERMISSIONS (JSON list granted to newly registered users)
      - CORS_ORIGINS (JSON list of allowed browser origins)
    """

    PROJECT_NAME: str = "Business Records API"
    API_PREFIX: str = ""
    STAGE: str = "dev"

    # Database
    DATABASE_URL: str = "sqlite:///./records.db"
    DB_ECHO: bool = False

    # JWT signing / verification
    JWT_SECRET: str
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Granted on /auth/register unless the admin passes an explicit list
    DEFAULT_PERMISSIONS: list[str] = [
        "customer:read",
        "customer:update",
        "invoice:read",
        "user:read",
        "user:update",
    ]

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()

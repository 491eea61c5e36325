# idp/core/config.py
import os
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent.parent

class Settings(BaseSettings):
    app_name: str = "IDP Self-Assessment"
    env: str = "local"
    DATABASE_URL: str
    DB_POOL_SIZE: int = 5

    # Supabase
    SUPABASE_URL: str
    SUPABASE_SERVICE_ROLE_KEY: str
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_AUDIENCE: str = "authenticated"
    SUPABASE_JWT_ALGORITHM: str = "HS256"

    # Edge function that delivers the "assessment shared with you" email
    SHARE_EMAIL_FUNCTION: str = "send-share-email"

    # Front-end origin; collaborator links are <APP_ORIGIN>/collaborate/<token>
    APP_ORIGIN: str = "http://localhost:5173"
    CORS_ALLOW_ORIGINS: str | None = None

    # Static reference data (roles, competencies, scale)
    REFERENCE_DATA_DIR: str = str(PROJECT_ROOT / "data")

    # Degraded-mode cache for responses when the store is unreachable
    LOCAL_CACHE_DIR: str = str(PROJECT_ROOT / ".local_cache")

    # Celery
    REDIS_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str | None = None
    NOTIFY_MAX_RETRIES: int = 3
    NOTIFY_RETRY_DELAY_SECONDS: int = 30

    # Autosave quiet period
    AUTOSAVE_DEBOUNCE_SECONDS: float = 2.0

    model_config = SettingsConfigDict(
        env_file=os.path.join(PROJECT_ROOT, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def collaborate_link(self, share_token: str) -> str:
        return f"{self.APP_ORIGIN.rstrip('/')}/collaborate/{share_token}"

settings = Settings()

from pathlib import Path
from typing import Literal, Optional, List

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from music_commerce.access.query import ListScopePolicy


class Settings(BaseSettings):

    # ---- Data roots ----
    data_root: Path = Path("data")

    # ---- app/runtime ----
    env: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ---- API server configuration ----
    api_host: str = "127.0.0.1"  # localhost for dev, 0.0.0.0 for docker/prod
    api_port: int = 8000
    api_reload: bool = True  # Auto-reload on code changes (dev only)
    api_workers: int = 1
    cors_origins: List[str] = ["*"]  # Allowed CORS origins (restrict in prod)

    # ---- authentication ----
    jwt_secret: SecretStr = SecretStr("dev-only-secret-key-change-me-in-production")
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = "HS256"
    access_token_expire_minutes: int = 30

    # ---- first admin, created at startup if missing ----
    bootstrap_admin_email: Optional[str] = None
    bootstrap_admin_name: str = "Administrator"

    # ---- list queries ----
    default_page_limit: int = 10
    max_page_limit: int = 100
    list_scope_policy: ListScopePolicy = ListScopePolicy.REJECT

    model_config = SettingsConfigDict(
        env_file = ".env",
        env_prefix="APP_",      # APP_ENV, APP_LOG_LEVEL, APP_LIST_SCOPE_POLICY, etc.
        extra = "ignore"
    )


def get_settings() -> Settings:
    """Accessor used by the app and the CLI; reads .env and APP_* variables."""
    return Settings()

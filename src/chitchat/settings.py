"""
chitchat.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the API, auth and persistence layers.
- Hide secrets from repr/logging (JWT secret).
- Offer a cached settings instance for the process entrypoint.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHITCHAT_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # dev/test create tables at startup; prod relies on Alembic.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "chitchat-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 5000
    api_prefix: str = ""
    cors_allowed_origins: str = "http://localhost:3000"

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "chitchat-api"
    jwt_audience: str = "chitchat"
    jwt_secret: str = Field(default="your-secret-key", repr=False)
    jwt_ttl_days: int = Field(default=7, ge=1)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./chitchat.db"
    seed_default_room: bool = True

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Tests build their own `Settings` and pass it to `create_app`; request handlers
# read it back from app.state (see `api.deps.settings_dep`), never from the cache.

"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables or .env
    - get_settings() is cached (lru_cache) — single instance per process
    - cors_origins is validated at startup; a bad entry stops the process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

import re
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ORIGIN_RE = re.compile(r"^https?://[A-Za-z0-9.\-]+(:\d{1,5})?$")


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "postgresql+asyncpg://records:records@db:5432/records"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgres:// URLs; asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str):
            for prefix in ("postgres://", "postgresql://"):
                if v.startswith(prefix):
                    return v.replace(prefix, "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 10
    database_max_overflow: int = 10
    database_timeout_seconds: float = 30.0
    database_pool_pre_ping: bool = True

    # HTTP
    host: str = "0.0.0.0"
    port: int = 5002
    environment: str = "development"
    cors_origins: list[str] = ["http://localhost:3000"]

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        origins = [o.strip().rstrip("/") for o in v if o.strip()]
        if not origins:
            raise ValueError("cors_origins must contain at least one origin")
        for origin in origins:
            if origin != "*" and not _ORIGIN_RE.match(origin):
                raise ValueError(f"invalid CORS origin: {origin!r}")
        if "*" in origins and len(origins) > 1:
            raise ValueError("'*' cannot be combined with explicit origins")
        return origins

    # Credentials
    password_hash_iterations: int = 600_000

    # Legacy superuser shortcut on /api/login (disable in production)
    admin_bypass_enabled: bool = True
    admin_bypass_email: str = "admin"
    admin_bypass_password: str = "admin123"

    # Privileged account created at startup when all three are set
    admin_seed_username: str | None = None
    admin_seed_email: str | None = None
    admin_seed_password: str | None = None

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def allow_any_origin(self) -> bool:
        return self.cors_origins == ["*"]

    @property
    def admin_seed_configured(self) -> bool:
        return bool(
            self.admin_seed_username
            and self.admin_seed_email
            and self.admin_seed_password
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()

"""Engine Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - oracle_max_attempts >= 1 (one attempt means no retries)
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Engine settings from environment variables (prefix MIXIT_)."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="MIXIT_", case_sensitive=False, extra="ignore",
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///mixit.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs come as postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    seed_starter_elements: bool = True

    # Oracle (Anthropic)
    anthropic_api_key: str = "sk-ant-placeholder"
    oracle_model: str = "claude-haiku-4-5"
    oracle_max_tokens: int = 256
    oracle_timeout_seconds: float = 20.0
    oracle_max_attempts: int = Field(default=3, ge=1)
    oracle_base_delay_ms: int = 500
    oracle_max_delay_ms: int = 8_000

    # Oracle response validation
    max_element_name_length: int = Field(default=40, ge=1, le=100)
    max_icon_length: int = Field(default=16, ge=1, le=32)

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()

"""
Configuration for the to-do API.

Values come from the process environment or a local .env file. Names are
case-insensitive; Supabase keys use the SUPABASE_ prefix, e.g.
SUPABASE_URL or SUPABASE_JWT_SECRET.
"""

from functools import lru_cache
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Todo Share API"
    app_version: str = "0.1.0"
    # Also enables the Swagger UI at /api/docs/ui
    debug: bool = False
    log_level: str = "INFO"

    # uvicorn, see run_api.py
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # Comma-separated in the environment: CORS_ORIGINS=https://a.com,https://b.com
    cors_origins: Annotated[list[str], NoDecode] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: Annotated[list[str], NoDecode] = ["*"]
    cors_allow_headers: Annotated[list[str], NoDecode] = ["*"]

    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""

    # Postgres URI for run_migrations.py; the API itself never connects directly
    supabase_db_url: str = ""

    @field_validator("cors_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def split_csv(cls, value):
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Settings for the process, read once."""
    return Settings()

"""Runtime configuration for the property-dedupe command line.

Loaded from environment variables and/or a ``.env`` file in the working
directory. The engine itself has no runtime configuration: its folding tables
are module constants.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defaults for CLI flags; explicit flags always win."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    log_level: str = Field(default="INFO", alias="PROPERTY_DEDUPE_LOG_LEVEL")
    log_format: str = Field(default="text", alias="PROPERTY_DEDUPE_LOG_FORMAT")  # "text" or "json"
    output_dir: Path = Field(default=Path("data/cli_output"), alias="PROPERTY_DEDUPE_OUTPUT_DIR")
    explain_limit: int = Field(default=10, alias="PROPERTY_DEDUPE_EXPLAIN_LIMIT", ge=0)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Ensure log format is valid."""
        lower = v.lower()
        if lower not in {"text", "json"}:
            raise ValueError("log_format must be 'text' or 'json'")
        return lower

    @property
    def json_logs(self) -> bool:
        return self.log_format == "json"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Call ``reload_settings()`` after changing the environment.
    """
    return Settings()


def reload_settings() -> Settings:
    get_settings.cache_clear()
    return get_settings()

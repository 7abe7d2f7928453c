"""Application configuration using Pydantic Settings.

This module centralizes runtime configuration for the event server. Values can
be provided via environment variables (preferred) or fall back to the defaults
below. A ``Settings`` instance is intended to be retrieved via ``get_settings``
which caches the object for reuse across the process.

Environment variable prefix: ``EVENT_SERVER_`` (e.g. ``EVENT_SERVER_HOST``).
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime application settings.

    Attributes map directly to environment variables using the ``EVENT_SERVER_``
    prefix (case-insensitive). For example, ``host`` <- ``EVENT_SERVER_HOST``.
    """

    # Server settings
    # These settings control the behavior of the server itself.
    host: str = Field(
        default="0.0.0.0",
        description="Host interface to bind the server",
    )  # fmt: skip
    port: int = Field(
        default=4000,
        description="Server port",
    )  # fmt: skip
    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Application log level",
    )
    reload: bool = Field(
        default=False,
        description="Enable auto-reload in development",
    )  # fmt: skip
    log_json: bool = Field(
        default=False,
        description="Write logs as JSON lines instead of colored text",
    )  # fmt: skip
    graphql_ide: bool = Field(
        default=True,
        description="Serve the GraphiQL IDE on GET /graphql",
    )  # fmt: skip

    # Data settings
    data_file: Path | None = Field(
        default=None,
        description="Seed dataset (JSON). None loads the bundled dataset.",
    )  # fmt: skip
    id_lookup: Literal["exact", "numeric"] = Field(
        default="exact",
        description="Identifier comparison: 'exact' string match, or 'numeric' parseInt-style legacy match",
    )  # fmt: skip
    id_strategy: Literal["uuid", "short"] = Field(
        default="uuid",
        description="Identifier generation for created records",
    )  # fmt: skip
    isolate_events: bool = Field(
        default=False,
        description="Deliver a deep copy of each published record to every subscriber and handler",
    )  # fmt: skip

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str:
        """Normalize and validate log level."""
        if v is None:
            return "INFO"

        # Normalize to uppercase
        v_upper = str(v).upper()

        # Validate against allowed values
        allowed = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR"}
        if v_upper not in allowed:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {', '.join(sorted(allowed))}")

        return v_upper

    @field_validator("id_lookup", "id_strategy", mode="before")
    @classmethod
    def normalize_choice(cls, v: str) -> str:
        """Accept choices in any case."""
        return str(v).lower()

    model_config = SettingsConfigDict(
        env_prefix="EVENT_SERVER_",  # Prefix for env vars
        case_sensitive=False,
        extra="ignore",  # Ignore unexpected env vars
        env_file=".env",  # Optional .env loading (if present)
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    """Return the cached ``Settings`` instance.

    The first invocation reads environment variables / .env file; subsequent
    calls reuse the same object to ensure consistent config.
    """

    return Settings()


__all__ = ["Settings", "get_settings"]

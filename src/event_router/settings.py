"""Router configuration using Pydantic Settings.

This module centralizes runtime configuration for the process-wide event
router. Values can be provided via environment variables (preferred) or fall
back to the defaults below. A ``Settings`` instance is intended to be
retrieved via ``get_settings`` which caches the object for reuse across the
process.

Environment variable prefix: ``EVENT_ROUTER_`` (e.g. ``EVENT_ROUTER_LOG_LEVEL``).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .router.core import CleanupPolicy


class Settings(BaseSettings):
    """Runtime router settings.

    Attributes map directly to environment variables using the
    ``EVENT_ROUTER_`` prefix (case-insensitive). For example,
    ``cleanup_policy`` <- ``EVENT_ROUTER_CLEANUP_POLICY``.
    """

    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Router log level",
    )
    cleanup_policy: CleanupPolicy = Field(
        default=CleanupPolicy.BUCKET,
        description="What unsubscribe removes once a handler group empties: bucket or event",
    )
    isolate_errors: bool = Field(
        default=False,
        description="Log failing handlers and keep dispatching instead of propagating the error",
    )  # fmt: skip

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str:
        """Normalize and validate log level."""
        if v is None:
            return "INFO"

        v_upper = str(v).upper()

        allowed = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR"}
        if v_upper not in allowed:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {', '.join(sorted(allowed))}")

        return v_upper

    @field_validator("cleanup_policy", mode="before")
    @classmethod
    def normalize_cleanup_policy(cls, v: str | CleanupPolicy) -> str | CleanupPolicy:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    model_config = SettingsConfigDict(
        env_prefix="EVENT_ROUTER_",
        case_sensitive=False,
        extra="ignore",
        env_file=".env",
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

"""Configuration for permstore.

Pydantic-validated settings shared by stores and the logging setup:
the fallback permission for undeclared fields and the log output options.

Direct os.environ/os.getenv usage is limited to load_store_config_from_env().
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field, field_validator

from .permissions import Permission


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StoreConfig(BaseModel):
    """Settings for stores built without an explicit default policy.

    Example::

        config = StoreConfig(default_policy="read-only", log_level="DEBUG")
        store = Store(config=config)
        store.default_policy  # Permission.READ_ONLY
    """

    default_policy: Permission = Field(
        default=Permission.READ_WRITE,
        description="Permission applied to fields without a declaration",
    )

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )

    @field_validator("default_policy", mode="before")
    @classmethod
    def validate_default_policy(cls, v: Union[str, Permission, None]) -> Permission:
        """Accept short and long permission spellings.

        InvalidPermission is a ValueError, so pydantic reports it as a
        ValidationError.
        """
        return Permission.coerce(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "extra": "forbid",
    }


def load_store_config_from_env() -> StoreConfig:
    """Load store configuration from environment variables.

    Environment variables:
    - STORE_DEFAULT_POLICY: r, w, rw, none (or read-only, write-only, read-write)
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)

    Returns:
        StoreConfig instance with values from environment or defaults.
    """
    import os

    return StoreConfig(
        default_policy=os.getenv("STORE_DEFAULT_POLICY", "rw"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_json=os.getenv("LOG_JSON", "false").lower() in ("true", "1", "yes"),
    )


__all__ = [
    "LogLevel",
    "StoreConfig",
    "load_store_config_from_env",
]

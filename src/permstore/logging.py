"""Logging for permstore.

Records from the store carry ``store`` (class name) and ``path`` extras.
Field values only reach a log line through :func:`preview_field`, which
hides them unless the owning store lets callers read the field.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import LogLevel, StoreConfig

HIDDEN = "[HIDDEN]"
LAZY = "<lazy>"

# Attributes every LogRecord has; anything else was passed through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def preview_value(value: Any, limit: int = 120) -> str:
    """One-line, bounded rendering of a stored value.

    Lazy values are never invoked; they render as ``<lazy>``.
    """
    if callable(value) and not isinstance(value, type):
        return LAZY
    if isinstance(value, (dict, list)):
        text = json.dumps(value, default=repr, ensure_ascii=False)
    else:
        text = repr(value)
    text = " ".join(text.split())
    return text if len(text) <= limit else text[: limit - 1] + "…"


def preview_field(store: Any, key: str, value: Any, limit: int = 120) -> str:
    """Preview ``value`` as stored under ``key``, or ``[HIDDEN]`` if the field is not readable."""
    if not store.allowed_to_read(key):
        return HIDDEN
    return preview_value(value, limit=limit)


class StoreLogFormatter(logging.Formatter):
    """Plain-text or JSON formatter that surfaces store / path context."""

    def __init__(self, json_format: bool = False, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and value is not None:
                data[key] = value if isinstance(value, str) else preview_value(value)
        data["message"] = record.getMessage()
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        if self.json_format:
            return json.dumps(data, default=str, ensure_ascii=False)

        context = " ".join(f"{k}={data[k]}" for k in ("store", "path") if k in data)
        head = f"[{data['timestamp']}] {data['level']} {data['logger']}"
        line = f"{head} {context}: {data['message']}" if context else f"{head}: {data['message']}"
        if "exception" in data:
            line = f"{line}\n{data['exception']}"
        return line


class StoreLoggerAdapter(logging.LoggerAdapter):
    """Adapter that tags records with a store name and an optional ``path=`` keyword.

    Usage:
        logger = get_store_logger(__name__, store=settings)
        logger.info("Loaded defaults", path="user:profile")
    """

    def __init__(self, logger: logging.Logger, store: Optional[str] = None):
        super().__init__(logger, {})
        self.store = store

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        store = kwargs.pop("store", self.store)
        path = kwargs.pop("path", None)
        if store:
            extra["store"] = store
        if path:
            extra["path"] = path
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(config: Optional[StoreConfig] = None, json_format: Optional[bool] = None) -> None:
    """Install a single StoreLogFormatter handler on the root logger.

    Args:
        config: StoreConfig instance (if None, loads from environment)
        json_format: Force JSON (True) or plain text (False); defaults to config.log_json
    """
    if config is None:
        from .config import load_store_config_from_env
        config = load_store_config_from_env()

    handler = logging.StreamHandler()
    handler.setFormatter(StoreLogFormatter(json_format=config.log_json if json_format is None else json_format))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(LogLevel(config.log_level).value)


def get_store_logger(name: str, store: Any = None) -> StoreLoggerAdapter:
    """Get a logger adapter bound to a store instance, class, or name."""
    if store is not None and not isinstance(store, str):
        store = store.__name__ if isinstance(store, type) else type(store).__name__
    return StoreLoggerAdapter(logging.getLogger(name), store=store)


__all__ = [
    "HIDDEN",
    "LAZY",
    "StoreLogFormatter",
    "StoreLoggerAdapter",
    "get_store_logger",
    "preview_field",
    "preview_value",
    "setup_logging",
]

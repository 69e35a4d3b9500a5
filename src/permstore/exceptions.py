"""Exception hierarchy for permstore.

Every error raised by the store inherits from StoreError. This module provides:
- Base exception with stable error codes
- ErrorRegistry for mapping codes back to classes

Usage:
    from permstore.exceptions import PermissionDenied

    try:
        store.read("secret")
    except PermissionDenied as e:
        print(e.code, e.details["path"])

Hosts may define thin subclasses for their own errors:
    @register_error("CONFIG_STORE_ERROR")
    class ConfigStoreError(StoreError):
        code = "CONFIG_STORE_ERROR"
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar, cast

__all__ = [
    "StoreError",
    "InvalidPermission",
    "PermissionDenied",
    "ErrorRegistry",
    "error_registry",
    "register_error",
]


# ---- Exception Hierarchy ----------------------------------------------------


class StoreError(Exception):
    """Base exception for permstore.

    Attributes:
        code: Stable error code string (e.g. "PERMISSION_DENIED").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "STORE_ERROR"
    message: str = "A store error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class InvalidPermission(StoreError, ValueError):
    """A permission value outside r / w / rw / none was declared."""

    code: str = "INVALID_PERMISSION"
    message: str = "Invalid permission"


class PermissionDenied(StoreError, PermissionError):
    """A read or write was attempted on a field whose effective permission forbids it."""

    code: str = "PERMISSION_DENIED"
    message: str = "Permission denied"


# ---- Error Registry ---------------------------------------------------------

_E = TypeVar("_E", bound=type[StoreError])


class ErrorRegistry:
    """Registry for mapping error codes to exception classes."""

    def __init__(self) -> None:
        self._errors: dict[str, type[StoreError]] = {}

    def register(self, code: str, error_cls: type[StoreError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[StoreError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[StoreError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("MY_CUSTOM_ERROR")
        class MyCustomError(StoreError):
            code = "MY_CUSTOM_ERROR"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


error_registry.register("STORE_ERROR", StoreError)
error_registry.register("INVALID_PERMISSION", InvalidPermission)
error_registry.register("PERMISSION_DENIED", PermissionDenied)

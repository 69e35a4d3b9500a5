"""Field permission declarations for store classes.

Provides:
- ``PermissionRegistry`` — (store class, field) → Permission mapping.
- ``restrict()`` — declare a field's permission in a class body.
- ``declare()`` — explicit registration for fields not written in the class body.

Declarations belong to the class, not the instance: every instance of a
store class (and of its subclasses) sees the same permissions.
"""

from __future__ import annotations

import logging
import weakref
from typing import Any, Callable, ClassVar, Optional, Union

from .constants import Permission

logger = logging.getLogger(__name__)


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class PermissionRegistry:
    """Class-level registry mapping store classes to field permissions.

    All methods are class methods; no instantiation is required.

    Lookup walks the MRO of the store's class, so the nearest declaration
    wins and subclasses inherit their parents' declarations::

        class Base(Store):
            token = restrict("w")

        class Child(Base):
            token = restrict("rw")

        PermissionRegistry.lookup(Base(), "token")   # Permission.WRITE_ONLY
        PermissionRegistry.lookup(Child(), "token")  # Permission.READ_WRITE
    """

    _declarations: ClassVar[weakref.WeakKeyDictionary[type, dict[str, Permission]]] = weakref.WeakKeyDictionary()

    @classmethod
    def register(
        cls,
        store_cls: type,
        field: str,
        permission: Optional[Union[str, Permission]] = None,
    ) -> Permission:
        """Attach a permission to ``field`` on ``store_cls``.

        Raises:
            InvalidPermission: If ``permission`` is not a known value.
                Nothing is registered in that case.
        """
        resolved = Permission.coerce(permission)
        cls._declarations.setdefault(store_cls, {})[field] = resolved
        logger.debug("Declared %s.%s as %s", store_cls.__name__, field, resolved.value)
        return resolved

    @classmethod
    def lookup(cls, store: Any, field: str) -> Optional[Permission]:
        """Return the declared permission for ``field``, or None if undeclared."""
        klass = store if isinstance(store, type) else type(store)
        for base in klass.__mro__:
            declared = cls._declarations.get(base)
            if declared and field in declared:
                return declared[field]
        return None

    @classmethod
    def declared_fields(cls, store: Any) -> dict[str, Permission]:
        """Merged view of every declaration visible to the store's class."""
        klass = store if isinstance(store, type) else type(store)
        merged: dict[str, Permission] = {}
        for base in reversed(klass.__mro__):
            merged.update(cls._declarations.get(base, {}))
        return merged

    @classmethod
    def clear(cls, store_cls: Optional[type] = None) -> None:
        """Remove declarations (primarily for test isolation)."""
        if store_cls is None:
            cls._declarations.clear()
        else:
            cls._declarations.pop(store_cls, None)


class Restricted:
    """Descriptor produced by :func:`restrict`.

    Registers its permission when bound into a class body and proxies
    attribute access to the store's raw field (no permission check, the
    same as item access).
    """

    __slots__ = ("permission", "default", "default_factory", "name")

    def __init__(
        self,
        permission: Permission,
        default: Any = MISSING,
        default_factory: Optional[Callable[[], Any]] = None,
    ) -> None:
        self.permission = permission
        self.default = default
        self.default_factory = default_factory
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        PermissionRegistry.register(owner, name, self.permission)

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return instance.get(self.name)

    def __set__(self, instance: Any, value: Any) -> None:
        instance[self.name] = value

    def __delete__(self, instance: Any) -> None:
        del instance[self.name]

    @property
    def has_default(self) -> bool:
        return self.default_factory is not None or self.default is not MISSING

    def initial_value(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default

    def __repr__(self) -> str:
        return f"Restricted(name={self.name!r}, permission={self.permission.value!r})"


def restrict(
    permission: Optional[Union[str, Permission]] = None,
    *,
    default: Any = MISSING,
    default_factory: Optional[Callable[[], Any]] = None,
) -> Restricted:
    """Declare a field's permission inside a store class body.

    The permission is validated immediately, so a bad value fails while
    the class is being defined. A missing permission means ``none``.

    Args:
        permission: ``"r"``, ``"w"``, ``"rw"``, ``"none"`` (or the long
            spelling / a :class:`Permission`). Defaults to ``none``.
        default: Initial field value for every new instance.
        default_factory: Zero-argument callable producing a fresh initial
            value per instance (e.g. a nested store).

    Raises:
        InvalidPermission: If ``permission`` is not a known value.
        ValueError: If both ``default`` and ``default_factory`` are given.

    Example::

        class UserStore(Store):
            name = restrict("r", default="John")
            password = restrict("w")
            profile = restrict("rw", default_factory=ProfileStore)
    """
    resolved = Permission.coerce(permission)
    if default is not MISSING and default_factory is not None:
        raise ValueError("Cannot specify both default and default_factory")
    return Restricted(resolved, default=default, default_factory=default_factory)


def declare(
    store_cls: type,
    field: str,
    permission: Optional[Union[str, Permission]] = None,
) -> Permission:
    """Register a permission for ``field`` on ``store_cls`` outside the class body.

    Example::

        declare(UserStore, "session", "w")
    """
    return PermissionRegistry.register(store_cls, field, permission)


__all__ = [
    "MISSING",
    "PermissionRegistry",
    "Restricted",
    "declare",
    "restrict",
]

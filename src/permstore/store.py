"""Permission-checked hierarchical store.

A Store is a mutable mapping of string keys to values. ``read`` and
``write`` take ``:``-delimited paths that walk into nested stores, plain
dicts / lists / objects, and lazy values (zero-argument callables)::

    class Profile(Store):
        default_policy = "none"
        name = restrict("rw", default="Ada")

    class User(Store):
        profile = restrict("r", default_factory=Profile)
        password = restrict("w")

    user = User()
    user.read("profile:name")            # "Ada", authorized by Profile
    user.write("password", "hunter2")
    user.read("password")                # PermissionDenied

Authorization happens once per store: the first segment is checked against
the store that owns it. When that segment holds a nested Store and the
path continues, the whole remainder is handed to the nested store, which
applies its own declarations and default policy.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any, Optional, Union

from .config import StoreConfig
from .exceptions import PermissionDenied
from .logging import get_store_logger, preview_field
from .permissions import Permission, PermissionRegistry, Restricted
from .types import StoreResult, StoreValue, ValueKind

PATH_SEPARATOR = ":"


def classify(value: Any) -> ValueKind:
    """Tag a field value for the path walk."""
    if isinstance(value, Store):
        return ValueKind.STORE
    if callable(value) and not isinstance(value, type):
        return ValueKind.THUNK
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.PRIMITIVE


def split_path(path: str) -> list[str]:
    if not isinstance(path, str):
        raise TypeError(f"Store path must be a string, got {type(path).__name__}")
    return path.split(PATH_SEPARATOR)


def _index(key: str) -> Optional[int]:
    return int(key) if key.isdecimal() else None


def _child(current: Any, key: str) -> Any:
    """Raw value at ``current[key]``; None when there is nothing there."""
    kind = classify(current)
    if kind in (ValueKind.STORE, ValueKind.MAPPING):
        return current.get(key)
    if kind is ValueKind.SEQUENCE:
        idx = _index(key)
        if idx is None or idx >= len(current):
            return None
        return current[idx]
    if current is None:
        return None
    return getattr(current, key, None)


def _assign(current: Any, key: str, value: Any) -> None:
    kind = classify(current)
    if kind in (ValueKind.STORE, ValueKind.MAPPING):
        current[key] = value
    elif kind is ValueKind.SEQUENCE:
        idx = _index(key)
        if idx is None or isinstance(current, tuple):
            raise TypeError(f"Cannot assign {key!r} into {type(current).__name__}")
        if idx >= len(current):
            current.extend([None] * (idx - len(current) + 1))
        current[idx] = value
    elif current is None or isinstance(current, (str, bytes, int, float, bool)):
        raise TypeError(f"Cannot assign {key!r} into {type(current).__name__}")
    else:
        setattr(current, key, value)


def _read_nested(keys: list[str], current: Any) -> Any:
    if not keys:
        return current
    key, rest = keys[0], keys[1:]
    value = _child(current, key)
    kind = classify(value)

    if kind is ValueKind.STORE:
        return _read_nested(rest, value)
    if kind is ValueKind.THUNK:
        return value() if not rest else _read_nested(rest, value())
    if rest:
        return _read_nested(rest, value)
    return value


def _write_nested(keys: list[str], value: Any, current: Any) -> None:
    key, rest = keys[0], keys[1:]
    if not rest:
        _assign(current, key, value)
        return

    child = _child(current, key)
    if child is None:
        child = {}
        _assign(current, key, child)
    _write_nested(rest, value, child)


def _declared_defaults(cls: type) -> dict[str, Restricted]:
    found: dict[str, Restricted] = {}
    for base in reversed(cls.__mro__):
        for name, attr in vars(base).items():
            if isinstance(attr, Restricted):
                found[name] = attr
    return {name: attr for name, attr in found.items() if attr.has_default}


class Store(MutableMapping):
    """Mapping of fields guarded by per-field permissions.

    Item access (``store[key]``), declared attribute access and
    :meth:`write_entries` are unchecked. :meth:`read`, :meth:`write` and
    :meth:`entries` enforce permissions.

    Args:
        entries: Initial fields, loaded with :meth:`write_entries`.
        default_policy: Permission for undeclared fields on this instance.
        config: StoreConfig supplying ``default_policy`` when the argument
            above is not given.
    """

    default_policy: Permission = Permission.READ_WRITE

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "default_policy" in cls.__dict__:
            cls.default_policy = Permission.coerce(cls.__dict__["default_policy"])

    def __init__(
        self,
        entries: Optional[Mapping[str, Any]] = None,
        *,
        default_policy: Optional[Union[str, Permission]] = None,
        config: Optional[StoreConfig] = None,
    ) -> None:
        self._fields: dict[str, Any] = {}
        self._log = get_store_logger(__name__, store=self)
        if default_policy is not None:
            self.default_policy = default_policy
        elif config is not None:
            self.default_policy = config.default_policy
        for name, declared in _declared_defaults(type(self)).items():
            self._fields[name] = declared.initial_value()
        if entries:
            self.write_entries(entries)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "default_policy":
            value = Permission.coerce(value)
        super().__setattr__(name, value)

    # ---- Mapping protocol (unchecked) ----

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._fields[key] = value

    def __delitem__(self, key: str) -> None:
        del self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(fields={list(self._fields)!r})"

    # ---- Permissions ----

    def allowed_to_read(self, key: str) -> bool:
        permission = PermissionRegistry.lookup(self, key)
        if permission is not None:
            return permission.can_read
        return self.default_policy.can_read

    def allowed_to_write(self, key: str) -> bool:
        permission = PermissionRegistry.lookup(self, key)
        if permission is not None:
            return permission.can_write
        return self.default_policy.can_write

    def _deny(self, operation: str, key: str, path: str) -> None:
        self._log.warning("Denied %s of field '%s'", operation, key, path=path)
        raise PermissionDenied(
            f"No permission for {operation} on '{key}'",
            operation=operation,
            field=key,
            path=path,
            store=type(self).__name__,
        )

    # ---- Path access ----

    def read(self, path: str) -> StoreResult:
        """Read the value at ``path``, evaluating lazy values.

        Missing fields and missing nested keys read as None.

        Raises:
            PermissionDenied: If the owning store forbids reading the field.
        """
        keys = split_path(path)
        key = keys[0]

        # Nested store owns every permission below it
        nested = self.get(key)
        if len(keys) > 1 and isinstance(nested, Store):
            self._log.debug("Delegating read to nested store at '%s'", key, path=path)
            return nested.read(PATH_SEPARATOR.join(keys[1:]))

        if not self.allowed_to_read(key):
            self._deny("read", key, path)

        result = nested if len(keys) == 1 else _read_nested(keys, self)
        self._log.debug("Read '%s'", path, path=path)
        return result() if classify(result) is ValueKind.THUNK else result

    def write(self, path: str, value: StoreValue) -> StoreValue:
        """Write ``value`` at ``path``, creating missing intermediate dicts.

        Returns:
            The value written.

        Raises:
            PermissionDenied: If the owning store forbids writing the field.
                Nothing is modified in that case.
        """
        keys = split_path(path)
        key = keys[0]

        nested = self.get(key)
        if len(keys) > 1 and isinstance(nested, Store):
            self._log.debug("Delegating write to nested store at '%s'", key, path=path)
            return nested.write(PATH_SEPARATOR.join(keys[1:]), value)

        if not self.allowed_to_write(key):
            self._deny("write", key, path)

        _write_nested(keys, value, self)
        self._log.debug("Wrote '%s' = %s", path, preview_field(self, key, value), path=path)
        return value

    # ---- Bulk operations ----

    def write_entries(self, entries: Mapping[str, Any]) -> None:
        """Assign every entry as a top-level field without permission checks."""
        for key in entries:
            self._fields[key] = entries[key]
        self._log.debug("Loaded %d entries", len(entries))

    def entries(self) -> dict[str, Any]:
        """Snapshot of fields that are declared and readable.

        Undeclared fields are left out even when the default policy would
        let :meth:`read` return them. Values are returned as stored.
        """
        declared = PermissionRegistry.declared_fields(self)
        return {key: value for key, value in self._fields.items() if key in declared and self.allowed_to_read(key)}


__all__ = [
    "PATH_SEPARATOR",
    "Store",
    "classify",
    "split_path",
]

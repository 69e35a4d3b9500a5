"""Permission levels for store fields.

Provides:
- ``Permission`` — the four levels a field can carry (``r``, ``w``, ``rw``, ``none``).
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from ..exceptions import InvalidPermission


class Permission(str, Enum):
    """Access level for a single store field.

    Values match the short spelling used in declarations::

        restrict("r")     # Permission.READ_ONLY
        restrict("rw")    # Permission.READ_WRITE
        restrict()        # Permission.NONE

    The long spelling (``"read-only"``, ``"write-only"``, ``"read-write"``)
    is accepted by :meth:`coerce` as well.
    """

    READ_ONLY = "r"
    WRITE_ONLY = "w"
    READ_WRITE = "rw"
    NONE = "none"

    @property
    def can_read(self) -> bool:
        return self in (Permission.READ_ONLY, Permission.READ_WRITE)

    @property
    def can_write(self) -> bool:
        return self in (Permission.WRITE_ONLY, Permission.READ_WRITE)

    @classmethod
    def coerce(cls, value: Optional[Union[str, "Permission"]]) -> "Permission":
        """Normalize a declared value into a Permission.

        ``None`` and the empty string mean "no access" (``NONE``). Spellings
        must match exactly: ``"RW"`` or ``" r "`` are rejected.

        Raises:
            InvalidPermission: If the value is not a known permission.
        """
        if isinstance(value, Permission):
            return value
        if value is None or value == "":
            return cls.NONE
        # Exact spellings only
        if isinstance(value, str) and value in _ALIASES:
            return _ALIASES[value]
        raise InvalidPermission(
            f"Invalid permission: {value!r}. Must be one of {[p.value for p in cls]}",
            permission=value,
        )


_ALIASES: dict[str, Permission] = {
    "r": Permission.READ_ONLY,
    "w": Permission.WRITE_ONLY,
    "rw": Permission.READ_WRITE,
    "none": Permission.NONE,
    "read-only": Permission.READ_ONLY,
    "write-only": Permission.WRITE_ONLY,
    "read-write": Permission.READ_WRITE,
}


__all__ = [
    "Permission",
]

"""Field-level permissions for permstore.

Defines:
- Permission: The four access levels (r / w / rw / none)
- PermissionRegistry: (store class, field) → Permission declarations
- restrict(): Declare a field's permission in a store class body
- declare(): Register a permission outside the class body
"""

from .constants import Permission
from .registry import (
    MISSING,
    PermissionRegistry,
    Restricted,
    declare,
    restrict,
)

__all__ = [
    "MISSING",
    "Permission",
    "PermissionRegistry",
    "Restricted",
    "declare",
    "restrict",
]

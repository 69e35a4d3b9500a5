from .config import LogLevel, StoreConfig, load_store_config_from_env
from .exceptions import (
    ErrorRegistry,
    InvalidPermission,
    PermissionDenied,
    StoreError,
    error_registry,
    register_error,
)
from .logging import (
    HIDDEN,
    LAZY,
    StoreLogFormatter,
    StoreLoggerAdapter,
    get_store_logger,
    preview_field,
    preview_value,
    setup_logging,
)
from .permissions import (
    MISSING,
    Permission,
    PermissionRegistry,
    Restricted,
    declare,
    restrict,
)
from .store import PATH_SEPARATOR, Store, classify, split_path
from .types import (
    JSONArray,
    JSONObject,
    JSONPrimitive,
    JSONValue,
    StoreResult,
    StoreValue,
    ValueKind,
)

__all__ = [
    'Store',
    'PATH_SEPARATOR',
    'classify',
    'split_path',
    'Permission',
    'PermissionRegistry',
    'Restricted',
    'MISSING',
    'declare',
    'restrict',
    'StoreError',
    'InvalidPermission',
    'PermissionDenied',
    'ErrorRegistry',
    'error_registry',
    'register_error',
    'StoreConfig',
    'LogLevel',
    'load_store_config_from_env',
    'HIDDEN',
    'LAZY',
    'preview_value',
    'preview_field',
    'StoreLogFormatter',
    'StoreLoggerAdapter',
    'setup_logging',
    'get_store_logger',
    'JSONArray',
    'JSONObject',
    'JSONPrimitive',
    'JSONValue',
    'StoreResult',
    'StoreValue',
    'ValueKind',
]

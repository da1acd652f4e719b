"""
oradialect public package initialization.

Oracle dialect adaptation: table prefix rewriting, savepoint emulation,
case-folded catalog introspection, and idempotent DDL.
"""

from .adapters import (  # noqa: F401
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterError,
    AdapterExecutionError,
    AdapterTransactionError,
    ConnectionConfig,
    OracleAdapter,
)
from .dialects import CaseFold, DDLOperation, OracleDialect  # noqa: F401
from .persistence import TransactionManager  # noqa: F401
from .query import replace_prefix  # noqa: F401
from .schema import DatabaseOptions, DDLExecutor, SchemaIntrospector  # noqa: F401

__all__ = [
    "AdapterError",
    "AdapterConfigurationError",
    "AdapterConnectionError",
    "AdapterExecutionError",
    "AdapterTransactionError",
    "CaseFold",
    "ConnectionConfig",
    "DDLExecutor",
    "DDLOperation",
    "DatabaseOptions",
    "OracleAdapter",
    "OracleDialect",
    "SchemaIntrospector",
    "TransactionManager",
    "replace_prefix",
]

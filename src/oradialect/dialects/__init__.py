"""
Dialect strategy registry.
"""

from .base import CaseFold, DDLOperation, Dialect, DialectCapabilities, quote_name
from .oracle import OracleCatalog, OracleDialect

__all__ = [
    "CaseFold",
    "DDLOperation",
    "Dialect",
    "DialectCapabilities",
    "OracleCatalog",
    "OracleDialect",
    "quote_name",
]

"""
Database adapter interfaces and the Oracle implementation.
"""

from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterError,
    AdapterExecutionError,
    AdapterTransactionError,
    ConnectionConfig,
    DatabaseAdapter,
)
from .error_codes import UNKNOWN_ERROR_CODE, extract_error_code
from .oracle import OracleAdapter
from .session import SessionConfigurator, SessionState

__all__ = [
    "ConnectionConfig",
    "DatabaseAdapter",
    "AdapterError",
    "AdapterConfigurationError",
    "AdapterConnectionError",
    "AdapterExecutionError",
    "AdapterTransactionError",
    "OracleAdapter",
    "SessionConfigurator",
    "SessionState",
    "UNKNOWN_ERROR_CODE",
    "extract_error_code",
]

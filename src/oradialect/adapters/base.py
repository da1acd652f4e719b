"""
Adapter protocol definitions for oradialect.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence

from ..dialects.base import CaseFold, Dialect
from ..dialects.oracle import DEFAULT_CHARSET, DEFAULT_DATE_FORMAT
from ..query.rewriter import DEFAULT_PLACEHOLDER
from ..security.dsns import DEFAULT_ORACLE_PORT, DSNConfig, parse_dsn

Params = Mapping[str, Any] | Sequence[Any]


class AdapterError(RuntimeError):
    """Base error for adapter-related failures."""


class AdapterConfigurationError(AdapterError):
    """Raised when configuration or required dependencies are invalid."""


class AdapterConnectionError(AdapterError):
    """Raised when establishing or configuring a connection fails."""


class AdapterExecutionError(AdapterError):
    """Raised when SQL execution fails; carries the native error code."""

    def __init__(self, message: str, *, code: int = 0, sql: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.sql = sql


class AdapterTransactionError(AdapterError):
    """Raised when transaction operations fail."""


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: str, *, key: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise AdapterConfigurationError(f"Invalid boolean value for '{key}': {value!r}")


def _parse_float(value: str, *, key: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise AdapterConfigurationError(f"Invalid float value for '{key}': {value!r}") from exc


def _parse_int(value: str, *, key: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise AdapterConfigurationError(f"Invalid integer value for '{key}': {value!r}") from exc


def _parse_case_fold(value: str | CaseFold, *, key: str) -> CaseFold:
    if isinstance(value, CaseFold):
        return value
    try:
        return CaseFold(value.strip().lower())
    except ValueError as exc:
        raise AdapterConfigurationError(
            f"Invalid case policy for '{key}': {value!r} (expected 'lower' or 'upper')"
        ) from exc


def _pop_bool(query: dict[str, str], key: str) -> bool | None:
    if key not in query:
        return None
    return _parse_bool(query.pop(key), key=key)


def _pop_float(query: dict[str, str], key: str) -> float | None:
    if key not in query:
        return None
    return _parse_float(query.pop(key), key=key)


def _parse_option_values(query: dict[str, str]) -> dict[str, Any]:
    options: dict[str, Any] = {}
    for key, value in query.items():
        if key in ("tcp_connect_timeout", "expire_time", "retry_count", "retry_delay"):
            options[key] = _parse_float(value, key=key)
        elif key in ("stmtcachesize", "sdu"):
            options[key] = _parse_int(value, key=key)
        else:
            options[key] = value
    return options


@dataclass
class ConnectionConfig:
    """
    Normalized connection configuration for the Oracle adapter.
    """

    url: str
    user: str | None = None
    password: str | None = None
    host: str | None = None
    port: int | None = None
    service_name: str | None = None
    autocommit: bool = True
    timeout: float | None = None
    options: dict[str, Any] | None = None
    dsn: DSNConfig | None = None
    source: str | None = None
    charset: str = DEFAULT_CHARSET
    date_format: str = DEFAULT_DATE_FORMAT
    schema: str | None = None
    table_prefix: str = ""
    placeholder: str = DEFAULT_PLACEHOLDER
    case_fold: CaseFold = CaseFold.LOWER

    def __post_init__(self) -> None:
        self.case_fold = _parse_case_fold(self.case_fold, key="case_fold")
        if not self.charset:
            self.charset = DEFAULT_CHARSET
        if not self.date_format:
            self.date_format = DEFAULT_DATE_FORMAT

    @classmethod
    def from_dsn(cls, dsn: str, **kwargs: Any) -> "ConnectionConfig":
        """
        Build a connection config by parsing the DSN string.
        """

        parsed = parse_dsn(dsn)
        if not parsed.is_oracle:
            raise AdapterConfigurationError(
                f"Unsupported DSN scheme {parsed.driver!r}; expected one of oracle, oracledb."
            )
        query = dict(parsed.query)

        parsed_autocommit = _pop_bool(query, "autocommit")
        parsed_timeout = _pop_float(query, "timeout")
        parsed_schema = query.pop("schema", None)
        parsed_charset = query.pop("charset", None)
        parsed_date_format = query.pop("date_format", None)
        parsed_prefix = query.pop("prefix", None)
        parsed_case = query.pop("case", None)
        options_from_dsn = _parse_option_values(query)

        options = dict(options_from_dsn)
        passed_options = kwargs.pop("options", None) or {}
        options.update(passed_options)

        autocommit = kwargs.pop("autocommit", parsed_autocommit)
        if autocommit is None:
            autocommit = True
        timeout = kwargs.pop("timeout", parsed_timeout)
        schema = kwargs.pop("schema", parsed_schema)
        charset = kwargs.pop("charset", parsed_charset) or DEFAULT_CHARSET
        date_format = kwargs.pop("date_format", parsed_date_format) or DEFAULT_DATE_FORMAT
        table_prefix = kwargs.pop("table_prefix", parsed_prefix) or ""
        case_fold = kwargs.pop("case_fold", parsed_case) or CaseFold.LOWER

        return cls(
            url=dsn,
            dsn=parsed,
            user=kwargs.pop("user", parsed.username),
            password=kwargs.pop("password", parsed.password),
            host=kwargs.pop("host", parsed.host),
            port=kwargs.pop("port", parsed.port),
            service_name=kwargs.pop("service_name", parsed.service_name),
            autocommit=autocommit,
            timeout=timeout,
            options=options or None,
            schema=schema,
            charset=charset,
            date_format=date_format,
            table_prefix=table_prefix,
            case_fold=_parse_case_fold(case_fold, key="case"),
            **kwargs,
        )

    @classmethod
    def from_env(cls, env_var: str, **kwargs: Any) -> "ConnectionConfig":
        """
        Build a config from an environment variable containing a DSN.
        """

        value = os.getenv(env_var)
        if not value:
            raise AdapterConfigurationError(f"Environment variable {env_var} is not set")
        return cls.from_dsn(value, source=env_var, **kwargs)

    @property
    def resolved_port(self) -> int:
        return self.port or DEFAULT_ORACLE_PORT

    def redacted_dsn(self) -> str:
        """
        Return a DSN safe for logging (credentials removed).
        """

        if self.dsn:
            return self.dsn.redacted()
        return self.url

    def descriptive_label(self) -> str:
        """
        Describe the config source for diagnostics.
        """

        redacted = self.redacted_dsn()
        if self.source:
            return f"{self.source} ({redacted})"
        return redacted


class DatabaseAdapter(Protocol):
    """
    Statement execution collaborator consumed by the transaction and schema layers.
    """

    dialect: Dialect
    config: ConnectionConfig
    slow_query_ms: int

    def connect(self) -> Any:
        """
        Establish the connection if needed and return the driver handle.
        """

    def disconnect(self) -> None:
        """
        Release the result cursor and close the connection. Idempotent.
        """

    def execute(self, sql: str, params: Params | None = None) -> Any:
        """
        Execute a single SQL statement returning the driver cursor.
        """

    def fetch_all(
        self,
        sql: str,
        params: Params | None = None,
        *,
        key: str | None = None,
        column: str | None = None,
    ) -> Any:
        """
        Execute a query and return its rows as dictionaries.
        """

    def fetch_column(self, sql: str, params: Params | None = None) -> list[Any]:
        """
        Execute a query and return the first column of every row.
        """

    def fetch_value(self, sql: str, params: Params | None = None) -> Any:
        """
        Execute a query and return the first column of the first row.
        """

    def begin(self) -> None:
        """
        Open the physical transaction.
        """

    def commit(self) -> None:
        """
        Commit the physical transaction.
        """

    def rollback(self) -> None:
        """
        Roll back the physical transaction.
        """

    def use_lowercase_field_names(self) -> bool:
        """
        Report the live connection's case-fold policy.
        """

    def normalize_table_name(self, table: str) -> str:
        """
        Substitute the table prefix and fold to catalog storage case.
        """

    def error_code(self) -> int:
        """
        Native error code of the last failed statement, 0 when unknown.
        """

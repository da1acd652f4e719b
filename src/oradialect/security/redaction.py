"""Redaction helpers for DSNs and logged bind values."""

from __future__ import annotations

from typing import Any

REDACTED_VALUE = "***"

_SENSITIVE_KEY_TOKENS = (
    "password",
    "passwd",
    "pwd",
    "secret",
    "token",
    "wallet_password",
    "private_key",
    "privatekey",
)

_SENSITIVE_VALUE_TOKENS = (
    "password",
    "passwd",
    "secret",
    "token",
    "identified by",
    "bearer",
)


def _compact(value: str) -> str:
    return "".join(ch for ch in value if ch.isalnum())


def is_sensitive_key(key: str) -> bool:
    normalized = key.lower()
    compact = _compact(normalized)
    for token in _SENSITIVE_KEY_TOKENS:
        if token in normalized or _compact(token) in compact:
            return True
    return False


def is_sensitive_value(value: str) -> bool:
    normalized = value.lower()
    return any(token in normalized for token in _SENSITIVE_VALUE_TOKENS)


def redact_query_params(query: dict[str, str]) -> dict[str, str]:
    return {key: REDACTED_VALUE if is_sensitive_key(key) else val for key, val in query.items()}


def redact_value(value: Any, *, key: str | None = None) -> Any:
    if key is not None and is_sensitive_key(str(key)):
        return REDACTED_VALUE
    if isinstance(value, dict):
        return {k: redact_value(v, key=str(k)) for k, v in value.items()}
    if isinstance(value, tuple):
        return tuple(redact_value(item) for item in value)
    if isinstance(value, list):
        return [redact_value(item) for item in value]
    if isinstance(value, str):
        if is_sensitive_value(value):
            return REDACTED_VALUE
        return value
    return value


def redact_sql(sql: str) -> str:
    """
    Mask the password clause of ``CREATE USER``/``ALTER USER`` statements.
    """

    marker = " IDENTIFIED BY "
    upper = sql.upper()
    start = upper.find(marker)
    if start == -1:
        return sql
    value_start = start + len(marker)
    if sql.startswith('"', value_start):
        # Quoted passwords may contain spaces; they cannot contain '"'.
        value_end = sql.find('"', value_start + 1)
        value_end = len(sql) if value_end == -1 else value_end + 1
    else:
        value_end = upper.find(" ", value_start)
        if value_end == -1:
            value_end = len(sql)
    return f"{sql[:value_start]}{REDACTED_VALUE}{sql[value_end:]}"

"""
Session-scoped settings issued right after a connection is established.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..dialects.oracle import DEFAULT_CHARSET, DEFAULT_DATE_FORMAT
from ..utils import get_logger
from .base import AdapterConnectionError, AdapterExecutionError

if TYPE_CHECKING:
    from ..dialects.base import Dialect
    from .base import ConnectionConfig, DatabaseAdapter


@dataclass
class SessionState:
    charset: str = DEFAULT_CHARSET
    date_format: str = DEFAULT_DATE_FORMAT
    schema: str | None = None

    @classmethod
    def from_config(cls, config: "ConnectionConfig") -> "SessionState":
        return cls(
            charset=config.charset or DEFAULT_CHARSET,
            date_format=config.date_format or DEFAULT_DATE_FORMAT,
            schema=config.schema,
        )


class SessionConfigurator:
    """
    Applies the active schema and NLS date formats to a live session.
    """

    def __init__(self, adapter: "DatabaseAdapter", dialect: "Dialect", state: SessionState) -> None:
        self.adapter = adapter
        self.dialect = dialect
        self.state = state
        self.logger = get_logger("adapters.session")

    def configure(self) -> None:
        if self.state.schema:
            self.adapter.execute(
                f"ALTER SESSION SET CURRENT_SCHEMA = {self.dialect.quote_identifier(self.state.schema)}"
            )
        if not self.set_date_format(self.state.date_format):
            raise AdapterConnectionError(
                f"Failed to apply session date format {self.state.date_format!r}."
            )

    def set_date_format(self, date_format: str) -> bool:
        """
        Set NLS_DATE_FORMAT and NLS_TIMESTAMP_FORMAT; keep the old value on failure.
        """

        literal = self.dialect.quote_literal(date_format)
        for parameter in ("NLS_DATE_FORMAT", "NLS_TIMESTAMP_FORMAT"):
            try:
                self.adapter.execute(f"ALTER SESSION SET {parameter} = {literal}")
            except AdapterExecutionError as exc:
                self.logger.warning(
                    "Could not set %s to %r (code %s); keeping %r",
                    parameter,
                    date_format,
                    exc.code,
                    self.state.date_format,
                )
                return False
        self.state.date_format = date_format
        return True

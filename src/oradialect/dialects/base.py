"""
Dialect strategy interfaces and shared identifier policies.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Protocol


class CaseFold(str, Enum):
    """
    Case applied to identifiers returned from metadata queries.
    """

    LOWER = "lower"
    UPPER = "upper"

    def apply(self, name: str) -> str:
        if self is CaseFold.LOWER:
            return name.lower()
        return name.upper()


class DDLOperation(str, Enum):
    COPY_TABLE = "copy_table"
    DROP_TABLE = "drop_table"
    DROP_DATABASE = "drop_database"
    CREATE_DATABASE = "create_database"
    RENAME_TABLE = "rename_table"
    LOCK_TABLE = "lock_table"


@dataclass(frozen=True)
class DialectCapabilities:
    """
    Feature flags describing backend capabilities.
    """

    supports_savepoint_release: bool = True


def quote_name(name: str, name_quote: str) -> str:
    """
    Wrap ``name`` in quote characters.

    A single character quotes both sides; two characters are used as the
    opening and closing quote respectively. No case change is applied.
    """

    if not name_quote:
        return name
    if len(name_quote) == 1:
        return f"{name_quote}{name}{name_quote}"
    return f"{name_quote[0]}{name}{name_quote[1]}"


class Dialect(Protocol):
    """
    Strategy interface consumed across adapter, transaction, and schema layers.
    """

    @property
    def name(self) -> str: ...

    @property
    def name_quote(self) -> str: ...

    @property
    def capabilities(self) -> DialectCapabilities: ...

    @property
    def storage_case(self) -> CaseFold: ...

    @property
    def benign_error_codes(self) -> Mapping[DDLOperation, frozenset[int]]: ...

    def quote_identifier(self, identifier: str) -> str: ...

    def format_table(self, table_name: str) -> str: ...

    def quote_literal(self, value: str) -> str: ...

    def parameter_placeholder(self, name: str) -> str: ...

    def savepoint_name(self, depth: int) -> str: ...

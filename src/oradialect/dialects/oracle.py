"""
Oracle dialect implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping

from .base import CaseFold, DDLOperation, Dialect, DialectCapabilities, quote_name

# Native ORA- error numbers the DDL layer cares about.
ORA_NAME_ALREADY_USED: Final[int] = 955
ORA_TABLE_DOES_NOT_EXIST: Final[int] = 942
ORA_USER_DOES_NOT_EXIST: Final[int] = 1918
ORA_USER_ALREADY_EXISTS: Final[int] = 1920

DEFAULT_CHARSET: Final[str] = "AL32UTF8"
DEFAULT_DATE_FORMAT: Final[str] = "RRRR-MM-DD HH24:MI:SS"

_BENIGN_ERROR_CODES: Mapping[DDLOperation, frozenset[int]] = MappingProxyType(
    {
        DDLOperation.COPY_TABLE: frozenset({ORA_NAME_ALREADY_USED}),
        DDLOperation.DROP_TABLE: frozenset({ORA_TABLE_DOES_NOT_EXIST}),
        DDLOperation.DROP_DATABASE: frozenset({ORA_USER_DOES_NOT_EXIST}),
        DDLOperation.CREATE_DATABASE: frozenset({ORA_USER_ALREADY_EXISTS}),
        DDLOperation.RENAME_TABLE: frozenset(),
        DDLOperation.LOCK_TABLE: frozenset(),
    }
)


@dataclass(frozen=True)
class OracleCatalog:
    """
    Names of the catalog views and functions read by the introspector.
    """

    tables: str = "all_tables"
    columns: str = "all_tab_columns"
    constraints: str = "all_constraints"
    constraint_columns: str = "all_cons_columns"
    database_properties: str = "database_properties"
    nls_parameters: str = "nls_database_parameters"
    ddl_function: str = "dbms_metadata.get_ddl"
    dual: str = "dual"


class OracleDialect:
    """
    Oracle dialect using named bind parameters and double-quoted identifiers.
    """

    name: Final[str] = "oracle"
    name_quote: Final[str] = '"'
    savepoint_prefix: Final[str] = "SP_"
    storage_case: Final[CaseFold] = CaseFold.UPPER
    connected_query: Final[str] = "SELECT 1 FROM dual"
    capabilities: Final[DialectCapabilities] = DialectCapabilities(supports_savepoint_release=False)
    catalog: Final[OracleCatalog] = OracleCatalog()
    benign_error_codes: Final[Mapping[DDLOperation, frozenset[int]]] = _BENIGN_ERROR_CODES

    def quote_identifier(self, identifier: str) -> str:
        return quote_name(identifier, self.name_quote)

    def format_table(self, table_name: str) -> str:
        return ".".join(self.quote_identifier(part) for part in table_name.split("."))

    def quote_literal(self, value: str) -> str:
        escaped = value.replace("'", "''")
        return f"'{escaped}'"

    def parameter_placeholder(self, name: str) -> str:
        return f":{name}"

    def savepoint_name(self, depth: int) -> str:
        return f"{self.savepoint_prefix}{depth}"

    def normalize_identifier(self, identifier: str) -> str:
        """
        Fold an identifier to the case Oracle stores it in the catalog.
        """

        return self.storage_case.apply(identifier)


def get_oracle_dialect() -> Dialect:
    return OracleDialect()

"""
Catalog introspection for tables, columns, and constraints.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Tuple

from ..dialects.base import CaseFold
from ..dialects.oracle import OracleDialect
from ..utils import get_logger

if TYPE_CHECKING:
    from ..adapters.oracle import OracleAdapter


class SchemaIntrospector:
    """
    Reads Oracle catalog views through an adapter.

    Table names are always filtered in catalog storage case (upper). The
    adapter's live case-fold policy only decides how keys of the returned
    rows and mappings are spelled, and it is consulted on every call.
    """

    def __init__(self, adapter: "OracleAdapter", dialect: OracleDialect | None = None) -> None:
        self.adapter = adapter
        self.dialect = dialect or adapter.dialect
        self.catalog = self.dialect.catalog
        self.logger = get_logger("schema.introspection")

    def list_tables(
        self, schema: str | None = None, include_schema: bool = False
    ) -> List[str] | List[Tuple[str, str]]:
        columns = "owner, table_name" if include_schema else "table_name"
        sql = f"SELECT {columns} FROM {self.catalog.tables}"
        params: Dict[str, Any] = {}
        if schema:
            sql += f" WHERE owner = {self.dialect.parameter_placeholder('owner')}"
            params["owner"] = self.dialect.normalize_identifier(schema)
        sql += " ORDER BY table_name"

        if not include_schema:
            return self.adapter.fetch_column(sql, params)

        fold = self._fold()
        owner_key, table_key = fold.apply("owner"), fold.apply("table_name")
        return [(row[owner_key], row[table_key]) for row in self.adapter.fetch_all(sql, params)]

    def table_columns(self, table: str, type_only: bool = True) -> Dict[str, Any]:
        table_name = self.adapter.normalize_table_name(table)
        sql = (
            f"SELECT * FROM {self.catalog.columns}"
            f" WHERE table_name = {self.dialect.parameter_placeholder('table_name')}"
            " ORDER BY column_id"
        )
        rows = self.adapter.fetch_all(sql, {"table_name": table_name})

        fold = self._fold()
        name_key, type_key = fold.apply("column_name"), fold.apply("data_type")
        columns: Dict[str, Any] = {}
        for row in rows:
            name = row[name_key]
            if fold is CaseFold.LOWER:
                name = name.lower()
            columns[name] = row[type_key] if type_only else row
        return columns

    def table_keys(self, table: str) -> List[Dict[str, Any]]:
        table_name = self.adapter.normalize_table_name(table)
        sql = (
            f"SELECT * FROM {self.catalog.constraints} NATURAL JOIN {self.catalog.constraint_columns}"
            f" WHERE table_name = {self.dialect.parameter_placeholder('table_name')}"
        )
        return self.adapter.fetch_all(sql, {"table_name": table_name})

    def table_create_statement(self, tables: str | Iterable[str]) -> Dict[str, str | None]:
        """
        Reconstruct CREATE TABLE statements with DBMS_METADATA.

        Requires SELECT_CATALOG_ROLE or ownership of the tables. Results are
        keyed by the names exactly as passed in.
        """

        if isinstance(tables, str):
            tables = [tables]

        placeholder = self.dialect.parameter_placeholder
        sql = (
            f"SELECT {self.catalog.ddl_function}("
            f"{placeholder('object_type')}, {placeholder('table_name')}, {placeholder('schema')})"
            f" FROM {self.catalog.dual}"
        )
        result: Dict[str, str | None] = {}
        for table in tables:
            normalized = self.adapter.normalize_table_name(table)
            schema, _, table_name = normalized.rpartition(".")
            if not schema:
                schema = self.adapter.default_schema()
            result[table] = self.adapter.fetch_value(
                sql,
                {"object_type": "TABLE", "table_name": table_name, "schema": schema},
            )
        return result

    def server_version(self) -> str | None:
        sql = (
            f"SELECT value FROM {self.catalog.nls_parameters}"
            f" WHERE parameter = {self.dialect.parameter_placeholder('parameter')}"
        )
        return self.adapter.fetch_value(sql, {"parameter": "NLS_RDBMS_VERSION"})

    def default_tablespaces(self) -> Tuple[str | None, str | None]:
        """
        Return the database default (permanent, temporary) tablespaces.
        """

        sql = (
            f"SELECT property_value FROM {self.catalog.database_properties}"
            f" WHERE property_name = {self.dialect.parameter_placeholder('property_name')}"
        )
        permanent = self.adapter.fetch_value(sql, {"property_name": "DEFAULT_PERMANENT_TABLESPACE"})
        temporary = self.adapter.fetch_value(sql, {"property_name": "DEFAULT_TEMP_TABLESPACE"})
        return permanent, temporary

    def _fold(self) -> CaseFold:
        return CaseFold.LOWER if self.adapter.use_lowercase_field_names() else CaseFold.UPPER

"""
Idempotent DDL execution.

Oracle has no ``IF EXISTS``/``IF NOT EXISTS`` for most DDL, so an operation
whose effect is already in place fails with a native error. Each operation
lists the codes that mean "already done"; those failures become no-ops and
everything else propagates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Mapping, Sequence

from ..adapters.base import AdapterConfigurationError, AdapterExecutionError
from ..dialects.base import DDLOperation
from ..dialects.oracle import OracleDialect
from ..utils import get_logger
from .builder import OracleSchemaBuilder
from .introspection import SchemaIntrospector

if TYPE_CHECKING:
    from ..adapters.oracle import OracleAdapter


@dataclass
class DatabaseOptions:
    """
    Options for creating an Oracle user, the equivalent of a database elsewhere.
    """

    name: str | None
    password: str | None
    default_tablespace: str | None = None
    temporary_tablespace: str | None = None
    quota: str = "UNLIMITED"


class DDLExecutor:
    """
    Runs DDL statements, treating per-operation benign error codes as success.
    """

    def __init__(
        self,
        adapter: "OracleAdapter",
        dialect: OracleDialect | None = None,
        *,
        benign_codes: Mapping[DDLOperation | str, Iterable[int]] | None = None,
    ) -> None:
        self.adapter = adapter
        self.dialect = dialect or adapter.dialect
        self.benign_codes: dict[DDLOperation, frozenset[int]] = dict(self.dialect.benign_error_codes)
        for operation, codes in (benign_codes or {}).items():
            self.benign_codes[DDLOperation(operation)] = frozenset(codes)
        self.builder = OracleSchemaBuilder(self.dialect, adapter.normalize_table_name)
        self.introspector = SchemaIntrospector(adapter, self.dialect)
        self.logger = get_logger("schema.ddl")

    def is_benign(self, operation: DDLOperation, code: int) -> bool:
        return code in self.benign_codes.get(operation, frozenset())

    def run(self, operation: DDLOperation, statements: Sequence[str]) -> bool:
        """
        Execute ``statements`` in order.

        Returns True when every statement ran, False when one failed with a
        code that is benign for ``operation`` (the remaining statements are
        skipped). Other failures raise ``AdapterExecutionError``.
        """

        for sql in statements:
            try:
                self.adapter.execute(sql)
            except AdapterExecutionError as exc:
                if not self.is_benign(operation, exc.code):
                    raise
                self.logger.info(
                    "%s already in effect (code %s); treating as no-op",
                    operation.value,
                    exc.code,
                )
                return False
        self.adapter.free_result()
        return True

    def copy_table(self, from_table: str, to_table: str, with_data: bool = False) -> bool:
        sql = self.builder.copy_table_sql(from_table, to_table, with_data=with_data)
        return self.run(DDLOperation.COPY_TABLE, [sql])

    def drop_table(self, table: str) -> bool:
        return self.run(DDLOperation.DROP_TABLE, [self.builder.drop_table_sql(table)])

    def drop_database(self, name: str) -> bool:
        return self.run(DDLOperation.DROP_DATABASE, [self.builder.drop_user_sql(name)])

    def create_database(self, options: DatabaseOptions | None) -> bool:
        if options is None:
            raise AdapterConfigurationError("Database options must not be None.")
        if not options.name:
            raise AdapterConfigurationError("Database options must have name set.")
        if not options.password:
            raise AdapterConfigurationError("Database options must have password set.")

        default_tablespace = options.default_tablespace
        temporary_tablespace = options.temporary_tablespace
        if default_tablespace is None or temporary_tablespace is None:
            permanent, temporary = self.introspector.default_tablespaces()
            default_tablespace = default_tablespace or permanent
            temporary_tablespace = temporary_tablespace or temporary
        if not default_tablespace or not temporary_tablespace:
            raise AdapterConfigurationError(
                "Could not resolve default and temporary tablespaces for the new user."
            )

        statements = [
            self.builder.create_user_sql(
                options.name,
                options.password,
                default_tablespace=default_tablespace,
                temporary_tablespace=temporary_tablespace,
                quota=options.quota or "UNLIMITED",
            ),
            *self.builder.grant_sql(options.name),
        ]
        return self.run(DDLOperation.CREATE_DATABASE, statements)

    def rename_table(self, old_table: str, new_table: str) -> bool:
        return self.run(DDLOperation.RENAME_TABLE, [self.builder.rename_table_sql(old_table, new_table)])

    def lock_table(self, table: str) -> bool:
        return self.run(DDLOperation.LOCK_TABLE, [self.builder.lock_table_sql(table)])

    def unlock_tables(self) -> None:
        # Table locks are held until the end of the transaction.
        self.adapter.execute("COMMIT")
        self.adapter.free_result()

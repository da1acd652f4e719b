"""
Oracle database adapter implementation.
"""

from __future__ import annotations

from contextlib import contextmanager, suppress
from dataclasses import dataclass
from typing import Any, Generator

from ..dialects.base import CaseFold
from ..dialects.oracle import OracleDialect
from ..persistence.transaction import TransactionManager
from ..query.rewriter import replace_prefix
from ..security.redaction import redact_sql, redact_value
from ..utils import get_logger, resolve_slow_query_ms, time_call
from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterExecutionError,
    AdapterTransactionError,
    ConnectionConfig,
    DatabaseAdapter,
    Params,
)
from .error_codes import extract_error_code, format_error_code
from .session import SessionConfigurator, SessionState


def _load_driver():
    try:
        import oracledb

        return oracledb
    except ImportError:
        return None


@dataclass
class OracleConnectionState:
    connection: Any
    config: ConnectionConfig
    driver: Any
    session: SessionState
    configurator: SessionConfigurator
    case_fold: CaseFold


class OracleAdapter(DatabaseAdapter):
    """
    Adapter wrapping the python-oracledb driver.

    The connection is opened lazily on first use. Every statement is passed
    through the table prefix rewriter before it reaches the driver, and at
    most one result cursor is kept open at a time.
    """

    def __init__(self, config: ConnectionConfig, *, slow_query_ms: int | None = None) -> None:
        self.config = config
        self.dialect = OracleDialect()
        self._state: OracleConnectionState | None = None
        self._cursor: Any = None
        self._last_error: BaseException | None = None
        self.logger = get_logger("adapters.oracle")
        self.slow_query_ms = resolve_slow_query_ms(default=100, override=slow_query_ms)
        self.transactions = TransactionManager(self, self.dialect)

    @staticmethod
    def is_supported() -> bool:
        return _load_driver() is not None

    # ------------------------------------------------------------------ #
    # Connection management
    # ------------------------------------------------------------------ #
    def connect(self) -> Any:
        if self._state:
            return self._state.connection

        driver = _load_driver()
        if driver is None:
            raise AdapterConfigurationError("oracledb is required to use OracleAdapter.")

        config = self.config
        options = dict(config.options or {})
        if config.timeout and "tcp_connect_timeout" not in options:
            options["tcp_connect_timeout"] = float(config.timeout)

        self.logger.info(
            "Connecting to Oracle %s (autocommit=%s)",
            config.descriptive_label(),
            config.autocommit,
        )

        try:
            connection = driver.connect(
                user=config.user,
                password=config.password,
                dsn=self._connect_descriptor(driver, config),
                **options,
            )
        except Exception as exc:
            raise AdapterConnectionError("Failed to connect to Oracle.") from exc
        connection.autocommit = bool(config.autocommit)

        session = SessionState.from_config(config)
        self._state = OracleConnectionState(
            connection=connection,
            config=config,
            driver=driver,
            session=session,
            configurator=SessionConfigurator(self, self.dialect, session),
            case_fold=config.case_fold,
        )
        try:
            self._state.configurator.configure()
        except AdapterExecutionError as exc:
            self.disconnect()
            raise AdapterConnectionError("Failed to configure Oracle session.") from exc
        except AdapterConnectionError:
            self.disconnect()
            raise
        return connection

    def disconnect(self) -> None:
        if not self._state:
            return
        state = self._state
        try:
            self.free_result()
        finally:
            self._state = None
            self.transactions.reset()
            state.connection.close()
            self.logger.debug("Disconnected from Oracle %s", state.config.descriptive_label())

    close = disconnect

    def __enter__(self) -> "OracleAdapter":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    def __del__(self) -> None:
        if getattr(self, "_state", None) is None:
            return
        with suppress(Exception):
            self.disconnect()

    def _ensure_connection(self) -> Any:
        if not self._state:
            self.connect()
        assert self._state is not None
        return self._state.connection

    @staticmethod
    def _connect_descriptor(driver: Any, config: ConnectionConfig) -> str:
        if config.host or config.service_name:
            return driver.makedsn(
                config.host or "localhost",
                config.resolved_port,
                service_name=config.service_name,
            )
        return config.url

    def connected(self) -> bool:
        if not self._state:
            return False
        try:
            self.fetch_value(self.dialect.connected_query)
        except AdapterExecutionError:
            return False
        return True

    # ------------------------------------------------------------------ #
    # Execution helpers
    # ------------------------------------------------------------------ #
    def replace_prefix(self, sql: str) -> str:
        return replace_prefix(sql, self.config.table_prefix, self.config.placeholder)

    def normalize_table_name(self, table: str) -> str:
        prefixed = table.replace(self.config.placeholder, self.config.table_prefix)
        return self.dialect.normalize_identifier(prefixed)

    def execute(self, sql: str, params: Params | None = None) -> Any:
        connection = self._ensure_connection()
        assert self._state is not None
        self.free_result()
        self._last_error = None

        sql = self.replace_prefix(sql)
        cursor = connection.cursor()
        try:
            with time_call(
                "oracle.execute",
                self.logger,
                sql=redact_sql(sql),
                params=redact_value(params) if params else None,
                threshold_ms=self.slow_query_ms,
            ):
                if params:
                    cursor.execute(sql, params)
                else:
                    cursor.execute(sql)
        except self._state.driver.DatabaseError as exc:
            cursor.close()
            self._last_error = exc
            code = extract_error_code(exc)
            raise AdapterExecutionError(
                f"{format_error_code(code)} while executing statement: {exc}",
                code=code,
                sql=sql,
            ) from exc
        except BaseException as exc:
            # Interface errors and interrupts still release the cursor.
            cursor.close()
            self._last_error = exc
            raise
        self._cursor = cursor
        return cursor

    def free_result(self) -> None:
        cursor = self._cursor
        if cursor is None:
            return
        self._cursor = None
        cursor.close()

    def fetch_all(
        self,
        sql: str,
        params: Params | None = None,
        *,
        key: str | None = None,
        column: str | None = None,
    ) -> Any:
        """
        Return rows as dictionaries whose keys follow the live case-fold policy.

        ``key`` returns a mapping of that column's value to the row; ``column``
        narrows each row to a single value. Both names are folded the same
        way as the row keys before lookup.
        """

        cursor = self.execute(sql, params)
        try:
            rows = self._rows(cursor)
        finally:
            self.free_result()

        fold = self._case_fold()
        if column:
            column = fold.apply(column)
        if key:
            key = fold.apply(key)
            return {row[key]: (row[column] if column else row) for row in rows}
        if column:
            return [row[column] for row in rows]
        return rows

    def fetch_column(self, sql: str, params: Params | None = None) -> list[Any]:
        cursor = self.execute(sql, params)
        try:
            return [self._read_lob(row[0]) for row in cursor.fetchall()]
        finally:
            self.free_result()

    def fetch_value(self, sql: str, params: Params | None = None) -> Any:
        cursor = self.execute(sql, params)
        try:
            rows = cursor.fetchall()
            if not rows:
                return None
            return self._read_lob(rows[0][0])
        finally:
            self.free_result()

    def error_code(self) -> int:
        return extract_error_code(self._last_error)

    def _rows(self, cursor: Any) -> list[dict[str, Any]]:
        fold = self._case_fold()
        names = [fold.apply(desc[0]) for desc in (cursor.description or ())]
        return [dict(zip(names, row)) for row in cursor.fetchall()]

    @staticmethod
    def _read_lob(value: Any) -> Any:
        if hasattr(value, "read"):
            return value.read()
        return value

    # ------------------------------------------------------------------ #
    # Identifier casing
    # ------------------------------------------------------------------ #
    def use_lowercase_field_names(self) -> bool:
        return self._case_fold() is CaseFold.LOWER

    def to_lower(self) -> None:
        self._ensure_connection()
        assert self._state is not None
        self._state.case_fold = CaseFold.LOWER

    def to_upper(self) -> None:
        self._ensure_connection()
        assert self._state is not None
        self._state.case_fold = CaseFold.UPPER

    def _case_fold(self) -> CaseFold:
        self._ensure_connection()
        assert self._state is not None
        return self._state.case_fold

    # ------------------------------------------------------------------ #
    # Session
    # ------------------------------------------------------------------ #
    def set_date_format(self, date_format: str) -> bool:
        self._ensure_connection()
        assert self._state is not None
        return self._state.configurator.set_date_format(date_format)

    def get_date_format(self) -> str:
        if self._state:
            return self._state.session.date_format
        return self.config.date_format

    def get_collation(self) -> str:
        if self._state:
            return self._state.session.charset
        return self.config.charset

    get_connection_collation = get_collation

    def default_schema(self) -> str:
        """
        Schema used for unqualified catalog lookups: the session schema, else the user.
        """

        schema = self._state.session.schema if self._state else self.config.schema
        schema = schema or self.config.user
        if not schema:
            raise AdapterConfigurationError(
                "A schema or user must be configured to resolve unqualified table names."
            )
        return self.dialect.normalize_identifier(schema)

    # ------------------------------------------------------------------ #
    # Transactions
    # ------------------------------------------------------------------ #
    def begin(self) -> None:
        connection = self._ensure_connection()
        connection.autocommit = False
        self.logger.debug("Physical transaction started")

    def commit(self) -> None:
        self._end_transaction("commit")

    def rollback(self) -> None:
        self._end_transaction("rollback")

    def _end_transaction(self, action: str) -> None:
        connection = self._ensure_connection()
        assert self._state is not None
        try:
            getattr(connection, action)()
        except self._state.driver.DatabaseError as exc:
            self._last_error = exc
            raise AdapterTransactionError(f"Oracle {action} failed: {exc}") from exc
        finally:
            connection.autocommit = bool(self._state.config.autocommit)
        self.logger.debug("Physical transaction %s", "committed" if action == "commit" else "rolled back")

    @property
    def transaction_depth(self) -> int:
        return self.transactions.depth

    def transaction_start(self, as_savepoint: bool = False) -> None:
        self.transactions.start(as_savepoint)

    def transaction_commit(self, to_savepoint: bool = False) -> None:
        self.transactions.commit(to_savepoint)

    def transaction_rollback(self, to_savepoint: bool = False) -> None:
        self.transactions.rollback(to_savepoint)

    @contextmanager
    def transaction(self) -> Generator[None, None, None]:
        with self.transactions.transaction():
            yield

"""
Schema builder rendering Oracle DDL statements.
"""

from __future__ import annotations

from typing import Callable, List

from ..dialects.oracle import OracleDialect
from ..utils import get_logger

USER_GRANTS = (
    "create session",
    "create table",
    "create view",
    "create any trigger",
    "create any procedure",
    "create sequence",
    "create synonym",
)


class OracleSchemaBuilder:
    """
    Produces Oracle SQL for table and user (schema) manipulation.

    Table names go through ``normalize_table`` (prefix substitution and
    upper-casing by default) before being quoted; user names are only
    upper-cased.
    """

    def __init__(
        self,
        dialect: OracleDialect,
        normalize_table: Callable[[str], str] | None = None,
    ) -> None:
        self.dialect = dialect
        self.normalize_table = normalize_table or dialect.normalize_identifier
        self.logger = get_logger("schema.builder")

    def copy_table_sql(self, from_table: str, to_table: str, *, with_data: bool = False) -> str:
        # 11 = 1 copies the structure only.
        condition = "11 = 11" if with_data else "11 = 1"
        return (
            f"CREATE TABLE {self._table(to_table)} AS SELECT * FROM {self._table(from_table)}"
            f" WHERE {condition}"
        )

    def drop_table_sql(self, table: str) -> str:
        table_name = self._table(table)
        self.logger.warning("DROP TABLE generated for %s.", table_name)
        return f"DROP TABLE {table_name}"

    def rename_table_sql(self, old_table: str, new_table: str) -> str:
        return f"RENAME {self._table(old_table)} TO {self._table(new_table)}"

    def lock_table_sql(self, table: str) -> str:
        return f"LOCK TABLE {self._table(table)} IN EXCLUSIVE MODE"

    def drop_user_sql(self, name: str) -> str:
        user = self._user(name)
        self.logger.warning("DROP USER generated for %s.", user)
        return f"DROP USER {user} CASCADE"

    def create_user_sql(
        self,
        name: str,
        password: str,
        *,
        default_tablespace: str,
        temporary_tablespace: str,
        quota: str = "UNLIMITED",
    ) -> str:
        quote = self.dialect.quote_identifier
        return (
            f"CREATE USER {self._user(name)} IDENTIFIED BY {quote(password)}"
            f" DEFAULT TABLESPACE {quote(default_tablespace)}"
            f" TEMPORARY TABLESPACE {quote(temporary_tablespace)}"
            f" QUOTA {quota} ON {quote(default_tablespace)}"
        )

    def grant_sql(self, name: str) -> List[str]:
        user = self._user(name)
        return [f"GRANT {privilege} TO {user}" for privilege in USER_GRANTS]

    def _table(self, table: str) -> str:
        return self.dialect.format_table(self.normalize_table(table))

    def _user(self, name: str) -> str:
        return self.dialect.quote_identifier(self.dialect.normalize_identifier(name))

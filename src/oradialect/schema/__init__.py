"""
Schema introspection and DDL utilities.
"""

from .builder import OracleSchemaBuilder
from .ddl import DatabaseOptions, DDLExecutor
from .introspection import SchemaIntrospector

__all__ = ["DatabaseOptions", "DDLExecutor", "OracleSchemaBuilder", "SchemaIntrospector"]

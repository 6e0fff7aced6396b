"""SQLite connector implementation using SQLAlchemy."""

from __future__ import annotations

from rxt.core.type_mapper import TypeMapper
from rxt.operators.sql.connector import SQLConnector
from rxt.operators.sqlite.type_mapper import SQLiteTypeMapper


class SQLiteConnector(SQLConnector):
    """SQLite connector using SQLAlchemy.

    userName and userPassword are accepted but SQLite ignores them.

    Examples:
        >>> config = ExtractorConfig.from_mapping({
        ...     "driver": "sqlite",
        ...     "url": "sqlite:///path/to/database.db",
        ...     "userName": "",
        ...     "userPassword": "",
        ...     "query": "SELECT * FROM orders",
        ... })
        >>> with SQLiteConnector(config) as conn:
        ...     print(conn.is_connected)
    """

    def _get_type_mapper(self) -> TypeMapper:
        return SQLiteTypeMapper(self.dbapi)

    def _get_database_name(self) -> str:
        return "SQLite"

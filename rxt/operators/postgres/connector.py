"""PostgreSQL connector implementation using SQLAlchemy."""

from __future__ import annotations

from rxt.core.type_mapper import TypeMapper
from rxt.operators.postgres.type_mapper import PostgresTypeMapper
from rxt.operators.sql.connector import SQLConnector


class PostgresConnector(SQLConnector):
    """PostgreSQL connector using SQLAlchemy.

    Works with any PostgreSQL DB-API driver SQLAlchemy supports
    (``postgresql+psycopg2``, ``postgresql+psycopg``, ...). With
    RXT_STREAM_RESULTS enabled the query runs on a server-side cursor.

    Examples:
        >>> config = ExtractorConfig.from_mapping({
        ...     "driver": "postgresql+psycopg2",
        ...     "url": "postgresql://localhost:5432/sales",
        ...     "userName": "etl",
        ...     "userPassword": "secret",
        ...     "query": "SELECT * FROM public.orders",
        ... })
        >>> connector = PostgresConnector(config)
    """

    def _get_type_mapper(self) -> TypeMapper:
        return PostgresTypeMapper(self.dbapi)

    def _get_database_name(self) -> str:
        return "PostgreSQL"

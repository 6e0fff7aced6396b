"""PostgreSQL operators."""

from rxt.operators.postgres.connector import PostgresConnector
from rxt.operators.postgres.type_mapper import PostgresTypeMapper

__all__ = ["PostgresConnector", "PostgresTypeMapper"]

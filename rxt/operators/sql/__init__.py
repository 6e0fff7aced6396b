"""Generic SQL operators for SQLAlchemy-based databases.

This package provides concrete classes for relational extraction:
- SQLConnector: Driver loading and connection management using SQLAlchemy
- SQLExtractor: Pull-based record extraction from an arbitrary query
- SQLTypeMapper: DB-API type code to canonical type mapping

These classes work with any SQL database supported by SQLAlchemy.
Database-specific subclasses (PostgresConnector, SQLiteConnector) only
swap in a more precise type mapper.
"""

from rxt.operators.sql.connector import SQLConnector
from rxt.operators.sql.cursor import ResultCursor
from rxt.operators.sql.extractor import SQLExtractor
from rxt.operators.sql.type_mapper import SQLTypeMapper, map_type_code

__all__ = ["ResultCursor", "SQLConnector", "SQLExtractor", "SQLTypeMapper", "map_type_code"]

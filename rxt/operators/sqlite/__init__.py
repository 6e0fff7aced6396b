"""SQLite operators."""

from rxt.operators.sqlite.connector import SQLiteConnector
from rxt.operators.sqlite.type_mapper import SQLiteTypeMapper

__all__ = ["SQLiteConnector", "SQLiteTypeMapper"]

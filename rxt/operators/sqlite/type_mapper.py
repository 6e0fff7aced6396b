"""SQLite type mapper implementation.

This module provides type conversion from SQLite declared types to RXT's
canonical types.
"""

from __future__ import annotations

from typing import Any

from rxt.models.field import TypeTag
from rxt.operators.sql.type_mapper import SQLTypeMapper


class SQLiteTypeMapper(SQLTypeMapper):
    """Type mapper for SQLite.

    The sqlite3 module (the pysqlite dialect) reports None as the type code
    of every result column, so columns read through it map to TypeTag.ANY.
    The affinity rules below only serve third-party SQLite drivers that
    report declared type names as type codes; they are never reached
    through sqlite3.

    Examples:
        >>> mapper = SQLiteTypeMapper()
        >>> mapper.from_source(None)
        <TypeTag.ANY: 'any'>
        >>> mapper.from_source("UNSIGNED BIG INT")
        <TypeTag.LONG: 'long'>
        >>> mapper.from_source("NATIVE CHARACTER(70)")
        <TypeTag.STRING: 'string'>
    """

    def from_source(self, type_code: Any) -> TypeTag:
        """Convert a SQLite type code or declared type to a canonical type."""
        tag = super().from_source(type_code)
        if tag != TypeTag.ANY or not isinstance(type_code, str):
            return tag

        normalized = self.normalize_source_type(type_code)

        # SQLite type affinity rules
        # If type contains "INT" -> INTEGER affinity
        if "int" in normalized:
            return TypeTag.LONG
        # If type contains "CHAR", "CLOB", or "TEXT" -> TEXT affinity
        if any(keyword in normalized for keyword in ["char", "clob", "text"]):
            return TypeTag.STRING
        # If type contains "BLOB" -> BLOB affinity
        if "blob" in normalized:
            return TypeTag.BINARY
        # If type contains "REAL", "FLOA", or "DOUB" -> REAL affinity
        if any(keyword in normalized for keyword in ["real", "floa", "doub"]):
            return TypeTag.DOUBLE

        return TypeTag.ANY

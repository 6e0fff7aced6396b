"""Base TypeMapper abstract class.

This module defines the TypeMapper interface for converting the native
column type codes reported by a source driver into RXT's canonical types.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from rxt.models.field import TypeTag


class TypeMapper(ABC):
    """Base class for converting native type codes to canonical TypeTags.

    A type code is whatever the DB-API driver reports as the second item of
    each ``cursor.description`` entry: an integer OID for PostgreSQL
    drivers, a Python type for pyodbc, a type name for some drivers, or
    None for sqlite3.

    Mapping never fails. Codes without a mapping yield TypeTag.ANY so an
    exotic column only loses its type metadata and never aborts extraction.

    Examples:
        >>> mapper = PostgresTypeMapper()
        >>> mapper.from_source(20)
        <TypeTag.LONG: 'long'>
        >>> mapper.from_source(99999)
        <TypeTag.ANY: 'any'>
    """

    @abstractmethod
    def from_source(self, type_code: Any) -> TypeTag:
        """Convert a native type code to a canonical type.

        Args:
            type_code: Driver-reported type code (may be None)

        Returns:
            Corresponding TypeTag, or TypeTag.ANY if the code is not mapped
        """
        pass

    def normalize_source_type(self, source_type: str) -> str:
        """Normalize a type name for consistent mapping.

        Removes parameters and converts to lowercase.

        Examples:
            "VARCHAR(255)" -> "varchar"
            "NUMERIC(10,2)" -> "numeric"
        """
        normalized = source_type.lower().strip()

        if "(" in normalized:
            normalized = normalized.split("(")[0].strip()

        return normalized

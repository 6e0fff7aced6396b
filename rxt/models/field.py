"""Column and type models for RXT.

This module defines RXT's canonical type enumeration and the column
schema built from a query's result metadata.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field as PydanticField


class TypeTag(str, Enum):
    """Canonical column types.

    Every native type code reported by a source driver is mapped onto one
    of these tags. ANY is used when a code has no mapping; values of such
    columns are passed through untouched.
    """

    BOOLEAN = "boolean"
    BYTE = "byte"
    SHORT = "short"
    INTEGER = "integer"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    DATE = "date"
    DATETIME = "datetime"
    STRING = "string"
    BINARY = "binary"
    ANY = "any"


class Column(BaseModel):
    """A single result column: its name and canonical type."""

    name: str = PydanticField(
        ...,
        description="Column name as reported by the result metadata",
    )

    dtype: TypeTag = PydanticField(
        TypeTag.ANY,
        description="Canonical type mapped from the native type code",
    )

    native_type: Optional[str] = PydanticField(
        None,
        description="String form of the driver's native type code, if any",
    )

    model_config = {"extra": "forbid", "frozen": True}


class ColumnSchema(BaseModel):
    """Ordered column layout of a result set.

    Built once per extraction, right after the query is executed, and never
    changed afterwards. Column positions are 0-based.

    Examples:
        >>> schema = ColumnSchema(columns=(
        ...     Column(name="id", dtype=TypeTag.INTEGER),
        ...     Column(name="name", dtype=TypeTag.STRING),
        ... ))
        >>> schema.names
        ('id', 'name')
        >>> schema.get_type("name")
        <TypeTag.STRING: 'string'>
    """

    columns: tuple[Column, ...] = PydanticField(
        default_factory=tuple,
        description="Columns in result-set order",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def names(self) -> tuple[str, ...]:
        """Column names in result-set order."""
        return tuple(column.name for column in self.columns)

    @property
    def types(self) -> tuple[TypeTag, ...]:
        """Canonical column types in result-set order."""
        return tuple(column.dtype for column in self.columns)

    def get_type(self, name: str) -> TypeTag:
        """Get the canonical type of a column by name.

        Args:
            name: Column name

        Returns:
            The column's TypeTag

        Raises:
            KeyError: If no column has that name
        """
        for column in self.columns:
            if column.name == name:
                return column.dtype
        raise KeyError(name)

    def __len__(self) -> int:
        return len(self.columns)

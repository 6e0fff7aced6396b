"""Generic SQL type mapper.

This module maps the type codes DB-API drivers report in
``cursor.description`` to RXT's canonical types, without knowing which
database is behind the driver.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from types import ModuleType
from typing import Any, Optional

from rxt.core.type_mapper import TypeMapper
from rxt.models.field import TypeTag


class SQLTypeMapper(TypeMapper):
    """Type mapper for any DB-API driver.

    Type codes are tried in this order:
    1. Python types (pyodbc reports ``str``, ``int``, ``Decimal`` ...)
    2. Type names, normalized and looked up in SOURCE_TO_RXT
    3. The driver module's DB-API type objects (STRING, BINARY, NUMBER,
       DATETIME, ROWID), which compare equal to the codes they cover

    Anything else maps to TypeTag.ANY.

    Examples:
        >>> mapper = SQLTypeMapper()
        >>> mapper.from_source("BIGINT")
        <TypeTag.LONG: 'long'>
        >>> mapper.from_source("VARCHAR(255)")
        <TypeTag.STRING: 'string'>
        >>> mapper.from_source(Decimal)
        <TypeTag.DECIMAL: 'decimal'>
        >>> mapper.from_source("GEOMETRY")
        <TypeTag.ANY: 'any'>
    """

    # Type name -> RXT type mappings
    SOURCE_TO_RXT = {
        # Boolean
        "boolean": TypeTag.BOOLEAN,
        "bool": TypeTag.BOOLEAN,
        # Single byte / char
        "tinyint": TypeTag.BYTE,
        "char": TypeTag.BYTE,
        # Integers
        "smallint": TypeTag.SHORT,
        "int2": TypeTag.SHORT,
        "integer": TypeTag.INTEGER,
        "int": TypeTag.INTEGER,
        "int4": TypeTag.INTEGER,
        "bigint": TypeTag.LONG,
        "int8": TypeTag.LONG,
        # Floating point
        "float": TypeTag.FLOAT,
        "real": TypeTag.FLOAT,
        "float4": TypeTag.FLOAT,
        "double": TypeTag.DOUBLE,
        "double precision": TypeTag.DOUBLE,
        "float8": TypeTag.DOUBLE,
        # Fixed point
        "decimal": TypeTag.DECIMAL,
        "numeric": TypeTag.DECIMAL,
        # Temporal
        "date": TypeTag.DATE,
        "timestamp": TypeTag.DATETIME,
        "datetime": TypeTag.DATETIME,
        # Character
        "varchar": TypeTag.STRING,
        "nvarchar": TypeTag.STRING,
        "longvarchar": TypeTag.STRING,
        "longnvarchar": TypeTag.STRING,
        "text": TypeTag.STRING,
        # Binary
        "binary": TypeTag.BINARY,
        "varbinary": TypeTag.BINARY,
        "blob": TypeTag.BINARY,
    }

    # Python type -> RXT type mappings (bool before int: bool subclasses int)
    PYTHON_TO_RXT = (
        (bool, TypeTag.BOOLEAN),
        (int, TypeTag.LONG),
        (float, TypeTag.DOUBLE),
        (Decimal, TypeTag.DECIMAL),
        (datetime, TypeTag.DATETIME),
        (date, TypeTag.DATE),
        (str, TypeTag.STRING),
        (bytes, TypeTag.BINARY),
        (bytearray, TypeTag.BINARY),
    )

    # DB-API type object name -> RXT type mappings
    DBAPI_TO_RXT = (
        ("STRING", TypeTag.STRING),
        ("BINARY", TypeTag.BINARY),
        ("NUMBER", TypeTag.DECIMAL),
        ("DATETIME", TypeTag.DATETIME),
        ("ROWID", TypeTag.LONG),
    )

    def __init__(self, dbapi: Optional[ModuleType] = None):
        """Initialize type mapper.

        Args:
            dbapi: The driver's DB-API module, used for type object comparison
        """
        self.dbapi = dbapi

    def from_source(self, type_code: Any) -> TypeTag:
        """Convert a DB-API type code to a canonical type.

        Args:
            type_code: Second item of a ``cursor.description`` entry

        Returns:
            Corresponding TypeTag, or TypeTag.ANY
        """
        if type_code is None:
            return TypeTag.ANY

        if isinstance(type_code, type):
            for python_type, tag in self.PYTHON_TO_RXT:
                if issubclass(type_code, python_type):
                    return tag
            return TypeTag.ANY

        if isinstance(type_code, str):
            normalized = self.normalize_source_type(type_code)
            if normalized in self.SOURCE_TO_RXT:
                return self.SOURCE_TO_RXT[normalized]

        return self._from_dbapi_type_objects(type_code)

    def _from_dbapi_type_objects(self, type_code: Any) -> TypeTag:
        """Compare a type code against the driver's DB-API type objects."""
        if self.dbapi is None:
            return TypeTag.ANY

        for name, tag in self.DBAPI_TO_RXT:
            type_object = getattr(self.dbapi, name, None)
            if type_object is not None and type_code == type_object:
                return tag

        return TypeTag.ANY


_generic_mapper = SQLTypeMapper()


def map_type_code(type_code: Any) -> TypeTag:
    """Map a type code with the generic rules (no driver type objects)."""
    return _generic_mapper.from_source(type_code)

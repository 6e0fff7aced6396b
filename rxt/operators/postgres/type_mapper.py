"""PostgreSQL type mapper implementation.

psycopg and psycopg2 report type OIDs in ``cursor.description``; this
mapper translates the built-in OIDs to RXT canonical types.
"""

from __future__ import annotations

from typing import Any

from rxt.models.field import TypeTag
from rxt.operators.sql.type_mapper import SQLTypeMapper


class PostgresTypeMapper(SQLTypeMapper):
    """Type mapper for PostgreSQL.

    OIDs not listed in OID_TO_RXT fall back to the generic rules, so type
    names and the driver's DB-API type objects still apply.

    Examples:
        >>> mapper = PostgresTypeMapper()
        >>> mapper.from_source(23)
        <TypeTag.INTEGER: 'integer'>
        >>> mapper.from_source(1184)
        <TypeTag.DATETIME: 'datetime'>
    """

    # PostgreSQL type OID -> RXT type mappings
    OID_TO_RXT = {
        16: TypeTag.BOOLEAN,  # bool
        17: TypeTag.BINARY,  # bytea
        18: TypeTag.BYTE,  # "char" (single byte)
        19: TypeTag.STRING,  # name
        20: TypeTag.LONG,  # int8
        21: TypeTag.SHORT,  # int2
        23: TypeTag.INTEGER,  # int4
        25: TypeTag.STRING,  # text
        26: TypeTag.LONG,  # oid
        700: TypeTag.FLOAT,  # float4
        701: TypeTag.DOUBLE,  # float8
        1042: TypeTag.STRING,  # bpchar, character(n)
        1043: TypeTag.STRING,  # varchar
        1082: TypeTag.DATE,  # date
        1114: TypeTag.DATETIME,  # timestamp
        1184: TypeTag.DATETIME,  # timestamptz
        1700: TypeTag.DECIMAL,  # numeric
    }

    def from_source(self, type_code: Any) -> TypeTag:
        """Convert a PostgreSQL type OID (or other code) to a canonical type."""
        if isinstance(type_code, int) and not isinstance(type_code, bool):
            if type_code in self.OID_TO_RXT:
                return self.OID_TO_RXT[type_code]
        return super().from_source(type_code)

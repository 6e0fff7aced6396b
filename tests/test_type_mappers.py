"""Tests for native type code mapping."""

from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from rxt.models.field import TypeTag
from rxt.operators.postgres import PostgresTypeMapper
from rxt.operators.sql import SQLTypeMapper, map_type_code
from rxt.operators.sqlite import SQLiteTypeMapper


class TypeObject:
    """DB-API style type object comparing equal to several codes."""

    def __init__(self, *codes):
        self.codes = codes

    def __eq__(self, other):
        return other in self.codes

    __hash__ = None


@pytest.fixture
def dbapi():
    """Fake DB-API module exposing type objects."""
    return SimpleNamespace(
        STRING=TypeObject(253, 254),
        BINARY=TypeObject(252),
        NUMBER=TypeObject(1, 3, 8),
        DATETIME=TypeObject(7, 12),
        ROWID=TypeObject(),
    )


class TestSQLTypeMapper:
    """Test the generic mapper."""

    @pytest.mark.parametrize(
        "type_name, expected",
        [
            ("BOOLEAN", TypeTag.BOOLEAN),
            ("SMALLINT", TypeTag.SHORT),
            ("INTEGER", TypeTag.INTEGER),
            ("BIGINT", TypeTag.LONG),
            ("FLOAT", TypeTag.FLOAT),
            ("DOUBLE", TypeTag.DOUBLE),
            ("DECIMAL(10,2)", TypeTag.DECIMAL),
            ("DATE", TypeTag.DATE),
            ("TIMESTAMP", TypeTag.DATETIME),
            ("VARCHAR(255)", TypeTag.STRING),
            ("LONGNVARCHAR", TypeTag.STRING),
            ("LONGVARCHAR", TypeTag.STRING),
            ("BINARY", TypeTag.BINARY),
            ("BLOB", TypeTag.BINARY),
            ("CHAR", TypeTag.BYTE),
            ("TINYINT", TypeTag.BYTE),
        ],
    )
    def test_type_names(self, type_name, expected):
        """Test the type name table."""
        assert SQLTypeMapper().from_source(type_name) == expected

    def test_python_types(self):
        """Test Python type codes as reported by pyodbc."""
        mapper = SQLTypeMapper()
        assert mapper.from_source(bool) == TypeTag.BOOLEAN
        assert mapper.from_source(int) == TypeTag.LONG
        assert mapper.from_source(float) == TypeTag.DOUBLE
        assert mapper.from_source(Decimal) == TypeTag.DECIMAL
        assert mapper.from_source(datetime) == TypeTag.DATETIME
        assert mapper.from_source(date) == TypeTag.DATE
        assert mapper.from_source(str) == TypeTag.STRING
        assert mapper.from_source(bytearray) == TypeTag.BINARY
        assert mapper.from_source(list) == TypeTag.ANY

    def test_dbapi_type_objects(self, dbapi):
        """Test codes matched through the driver's type objects."""
        mapper = SQLTypeMapper(dbapi)
        assert mapper.from_source(253) == TypeTag.STRING
        assert mapper.from_source(252) == TypeTag.BINARY
        assert mapper.from_source(3) == TypeTag.DECIMAL
        assert mapper.from_source(12) == TypeTag.DATETIME
        assert mapper.from_source(999) == TypeTag.ANY

    def test_unmapped_codes_are_any(self):
        """Test unknown codes never raise."""
        mapper = SQLTypeMapper()
        assert mapper.from_source(None) == TypeTag.ANY
        assert mapper.from_source("GEOMETRY") == TypeTag.ANY
        assert mapper.from_source(1043) == TypeTag.ANY
        assert mapper.from_source(object()) == TypeTag.ANY

    def test_map_type_code(self):
        """Test the module-level mapping function."""
        assert map_type_code("bigint") == TypeTag.LONG
        assert map_type_code(None) == TypeTag.ANY

    def test_normalize_source_type(self):
        """Test type name normalization."""
        mapper = SQLTypeMapper()
        assert mapper.normalize_source_type("VARCHAR(255)") == "varchar"
        assert mapper.normalize_source_type("  NUMERIC (10,2) ") == "numeric"


class TestPostgresTypeMapper:
    """Test PostgreSQL OID mapping."""

    @pytest.mark.parametrize(
        "oid, expected",
        [
            (16, TypeTag.BOOLEAN),
            (17, TypeTag.BINARY),
            (18, TypeTag.BYTE),
            (20, TypeTag.LONG),
            (21, TypeTag.SHORT),
            (23, TypeTag.INTEGER),
            (25, TypeTag.STRING),
            (700, TypeTag.FLOAT),
            (701, TypeTag.DOUBLE),
            (1043, TypeTag.STRING),
            (1082, TypeTag.DATE),
            (1114, TypeTag.DATETIME),
            (1184, TypeTag.DATETIME),
            (1700, TypeTag.DECIMAL),
        ],
    )
    def test_oids(self, oid, expected):
        assert PostgresTypeMapper().from_source(oid) == expected

    def test_unknown_oid(self):
        """Test an unmapped OID (jsonb) falls back to ANY."""
        assert PostgresTypeMapper().from_source(3802) == TypeTag.ANY

    def test_falls_back_to_generic_rules(self, dbapi):
        """Test names and type objects still apply."""
        mapper = PostgresTypeMapper(dbapi)
        assert mapper.from_source("bigint") == TypeTag.LONG
        assert mapper.from_source(253) == TypeTag.STRING


class TestSQLiteTypeMapper:
    """Test SQLite affinity mapping."""

    def test_sqlite3_reports_no_codes(self):
        assert SQLiteTypeMapper().from_source(None) == TypeTag.ANY

    @pytest.mark.parametrize(
        "declared, expected",
        [
            ("INTEGER", TypeTag.INTEGER),
            ("UNSIGNED BIG INT", TypeTag.LONG),
            ("MEDIUMINT", TypeTag.LONG),
            ("NATIVE CHARACTER(70)", TypeTag.STRING),
            ("CLOB", TypeTag.STRING),
            ("BLOB", TypeTag.BINARY),
            ("DOUBLE PRECISION", TypeTag.DOUBLE),
            ("FLOATING POINT", TypeTag.LONG),  # contains "INT"
            ("REAL", TypeTag.FLOAT),
            ("JSON", TypeTag.ANY),
        ],
    )
    def test_affinity(self, declared, expected):
        assert SQLiteTypeMapper().from_source(declared) == expected

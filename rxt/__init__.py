"""RXT - Relational record extractor."""

__version__ = "0.1.0"

# Re-export key models for convenience
from rxt.models import (
    Column,
    ColumnSchema,
    CursorState,
    ExtractorConfig,
    ExtractorDescription,
    ExtractorState,
    ParameterDescription,
    TypeTag,
)

# Re-export core classes for custom drivers
from rxt.core import (
    Connector,
    DriverRegistry,
    Extractor,
    TypeMapper,
    register_driver,
    resolve_driver,
)

# Re-export the SQL implementation
from rxt.operators.sql import SQLConnector, SQLExtractor, SQLTypeMapper, map_type_code

__all__ = [
    # Version
    "__version__",
    # Models
    "TypeTag",
    "Column",
    "ColumnSchema",
    "CursorState",
    "ExtractorConfig",
    "ExtractorDescription",
    "ExtractorState",
    "ParameterDescription",
    # Core ABCs
    "Connector",
    "Extractor",
    "TypeMapper",
    # Drivers
    "DriverRegistry",
    "register_driver",
    "resolve_driver",
    # SQL
    "SQLConnector",
    "SQLExtractor",
    "SQLTypeMapper",
    "map_type_code",
]

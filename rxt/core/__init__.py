"""RXT core package.

This package contains abstract base classes and internal framework logic
that define the interfaces for all extensible components.
"""

from rxt.core.connector import Connector
from rxt.core.driver import DriverRegistry, register_driver, resolve_driver
from rxt.core.extractor import Extractor, Record
from rxt.core.type_mapper import TypeMapper

__all__ = [
    "Connector",
    "DriverRegistry",
    "Extractor",
    "Record",
    "TypeMapper",
    "register_driver",
    "resolve_driver",
]

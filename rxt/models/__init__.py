"""RXT models package.

This package contains the pydantic models and value types shared by
extractors and their consumers.
"""

from rxt.models.config import ExtractorConfig
from rxt.models.description import ExtractorDescription, ParameterDescription
from rxt.models.field import Column, ColumnSchema, TypeTag
from rxt.models.state import CursorState, ExtractorState

__all__ = [
    # Type models
    "TypeTag",
    "Column",
    "ColumnSchema",
    # Configuration
    "ExtractorConfig",
    "ExtractorDescription",
    "ParameterDescription",
    # State
    "CursorState",
    "ExtractorState",
]

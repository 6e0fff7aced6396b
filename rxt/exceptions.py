"""RXT exception hierarchy."""

from __future__ import annotations

from typing import Optional


class RXTError(Exception):
    """Base exception for all RXT errors."""

    pass


class ConfigurationError(RXTError):
    """Raised when the driver cannot be loaded or the connection cannot be opened."""

    pass


class ExtractionError(RXTError):
    """Raised when query execution or reading the result cursor fails.

    Attributes:
        query: The query text that was being executed or iterated
        progress: Extractor progress at the time of the failure
    """

    def __init__(self, message: str, query: Optional[str] = None, progress: int = -1):
        super().__init__(message)
        self.query = query
        self.progress = progress


class ExhaustionError(RXTError):
    """Raised when next() is called and no record is available."""

    pass


class ExtractorStateError(RXTError):
    """Raised when an extractor operation is not valid in its current state."""

    pass

"""Base Connector abstract class.

This module defines the Connector interface for managing the single
connection an extractor owns for its lifetime.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from rxt.core.type_mapper import TypeMapper
from rxt.models.config import ExtractorConfig


class Connector(ABC):
    """Base class for managing a connection to a relational source.

    A Connector is what a driver id resolves to: it knows how to load the
    driver, open exactly one connection, and which TypeMapper interprets
    the driver's type codes. Connectors are composed by extractors rather
    than inherited.

    Examples:
        Using a connector as a context manager:
        >>> with SQLiteConnector(config) as conn:
        ...     print(conn.is_connected)
    """

    def __init__(self, config: ExtractorConfig):
        """Initialize connector with configuration.

        Args:
            config: Extractor configuration holding driver, url and credentials

        Raises:
            ConfigurationError: If the driver cannot be loaded
        """
        self.config = config
        self.connection: Optional[Any] = None

    @abstractmethod
    def connect(self) -> Any:
        """Open the connection to the data system.

        Returns:
            The open connection

        Raises:
            ConfigurationError: If the connection cannot be established
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close the connection to the data system.

        Should handle cases where connection is already closed gracefully.
        """
        pass

    @abstractmethod
    def get_type_mapper(self) -> TypeMapper:
        """Get the TypeMapper for this connector's driver."""
        pass

    def __enter__(self) -> Connector:
        """Context manager entry: establish connection.

        Returns:
            Self
        """
        self.connect()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit: close connection."""
        self.disconnect()

    @property
    def is_connected(self) -> bool:
        """Check if connection is established.

        Returns:
            True if connected, False otherwise
        """
        return self.connection is not None

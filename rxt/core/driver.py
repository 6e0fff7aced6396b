"""Driver registry.

Maps driver identifiers to the Connector classes that serve them. A driver
id is a SQLAlchemy driver name such as ``"sqlite"`` or
``"postgresql+psycopg2"``; the part before ``+`` is the backend.
"""

from __future__ import annotations

import importlib
import logging
from typing import Callable, Optional

from rxt.core.connector import Connector
from rxt.exceptions import ConfigurationError
from rxt.models.config import ExtractorConfig

logger = logging.getLogger(__name__)

DriverFactory = Callable[[ExtractorConfig], Connector]

# Default connector per backend, as full module paths
DEFAULT_DRIVERS: dict[str, str] = {
    "sqlite": "rxt.operators.sqlite.SQLiteConnector",
    "postgresql": "rxt.operators.postgres.PostgresConnector",
}

GENERIC_DRIVER = "rxt.operators.sql.SQLConnector"


def get_backend_name(driver_id: str) -> str:
    """Return the backend part of a driver id.

    Examples:
        >>> get_backend_name("postgresql+psycopg2")
        'postgresql'
        >>> get_backend_name("sqlite")
        'sqlite'
    """
    return driver_id.split("+")[0].strip().lower()


class DriverRegistry:
    """Resolves driver ids to connector factories.

    Resolution order:
    1. Exact registration for the driver id
    2. Registration for the backend name
    3. Built-in default connector for the backend
    4. The generic SQLConnector

    Examples:
        >>> registry = DriverRegistry()
        >>> registry.register("mssql", MSSQLConnector)
        >>> factory = registry.resolve("mssql+pyodbc")
    """

    def __init__(self) -> None:
        self._drivers: dict[str, DriverFactory] = {}

    def register(self, driver_id: str, factory: DriverFactory) -> None:
        """Register (or replace) the factory for a driver id or backend name."""
        self._drivers[driver_id.strip().lower()] = factory

    def unregister(self, driver_id: str) -> None:
        """Remove a registration. Unknown ids are ignored."""
        self._drivers.pop(driver_id.strip().lower(), None)

    def resolve(self, driver_id: str) -> DriverFactory:
        """Find the factory for a driver id.

        Args:
            driver_id: SQLAlchemy driver name

        Returns:
            Factory producing a Connector for the given configuration

        Raises:
            ConfigurationError: If the driver id is empty or a built-in
                connector module cannot be imported
        """
        key = driver_id.strip().lower() if driver_id else ""
        if not key:
            raise ConfigurationError("Driver id must not be empty")

        if key in self._drivers:
            return self._drivers[key]

        backend = get_backend_name(key)
        if backend in self._drivers:
            return self._drivers[backend]

        full_path = DEFAULT_DRIVERS.get(backend, GENERIC_DRIVER)
        logger.debug("Resolved driver '%s' to %s", driver_id, full_path)
        return self._load_connector_class(full_path)

    def _load_connector_class(self, full_path: str) -> type[Connector]:
        """Import and return a connector class from its full module path."""
        parts = full_path.split(".")
        class_name = parts[-1]
        module_path = ".".join(parts[:-1])
        try:
            module = importlib.import_module(module_path)
            return getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            raise ConfigurationError(
                f"Failed to load connector '{full_path}': {e}"
            ) from e


_default_registry: Optional[DriverRegistry] = None


def get_default_registry() -> DriverRegistry:
    """Return the process-wide driver registry."""
    global _default_registry
    if _default_registry is None:
        _default_registry = DriverRegistry()
    return _default_registry


def register_driver(driver_id: str, factory: DriverFactory) -> None:
    """Register a driver factory in the process-wide registry."""
    get_default_registry().register(driver_id, factory)


def resolve_driver(driver_id: str) -> DriverFactory:
    """Resolve a driver id using the process-wide registry."""
    return get_default_registry().resolve(driver_id)

"""SQL-based connector base class using SQLAlchemy.

This module provides the connector that loads a SQLAlchemy dialect and
its DB-API driver, and opens the one connection an extractor owns.
"""

from __future__ import annotations

import logging
from types import ModuleType
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection, Engine, make_url
from sqlalchemy.exc import ArgumentError, NoSuchModuleError
from sqlalchemy.pool import NullPool

from rxt.core.config import config as rxt_config
from rxt.core.connector import Connector
from rxt.core.driver import get_backend_name
from rxt.core.type_mapper import TypeMapper
from rxt.exceptions import ConfigurationError
from rxt.models.config import ExtractorConfig
from rxt.operators.sql.type_mapper import SQLTypeMapper

logger = logging.getLogger(__name__)


class SQLConnector(Connector):
    """Connector for any SQL database supported by SQLAlchemy.

    Provides:
    - Dialect and DB-API driver loading from the configured driver id
    - Connection URL assembly from url, userName and userPassword
    - A single, unpooled connection (pooling is left to the orchestrator)

    Can be used directly for any SQLAlchemy dialect. Database-specific
    subclasses override _get_type_mapper() and _get_database_name().

    Examples:
        >>> config = ExtractorConfig.from_mapping({
        ...     "driver": "postgresql+psycopg2",
        ...     "url": "postgresql://db.internal:5432/sales",
        ...     "userName": "etl",
        ...     "userPassword": "secret",
        ...     "query": "SELECT * FROM orders",
        ... })
        >>> connector = SQLConnector(config)
        >>> connection = connector.connect()
    """

    def __init__(self, config: ExtractorConfig):
        """Initialize SQL connector.

        Args:
            config: Extractor configuration

        Raises:
            ConfigurationError: If the URL is malformed, does not match the
                driver, or the dialect/driver cannot be loaded
        """
        super().__init__(config)
        self.url: URL = self._build_url()
        self.dbapi: ModuleType = self._load_dbapi()
        self.engine: Optional[Engine] = None
        self.connection: Optional[Connection] = None
        self.type_mapper: TypeMapper = self._get_type_mapper()

    def _get_type_mapper(self) -> TypeMapper:
        """Get database-specific type mapper.

        Returns:
            TypeMapper instance for this database
        """
        return SQLTypeMapper(self.dbapi)

    def _get_database_name(self) -> str:
        """Get database name for error messages."""
        return self.url.get_backend_name()

    def get_type_mapper(self) -> TypeMapper:
        return self.type_mapper

    @property
    def display_url(self) -> str:
        """Connection URL with the password masked, safe for logs."""
        return self.url.render_as_string(hide_password=True)

    def _build_url(self) -> URL:
        """Assemble the SQLAlchemy URL from url, driver and credentials.

        The URL's backend must match the driver's backend. A driver id that
        names a DB-API (``backend+dbapi``) overrides the URL's driver.

        Raises:
            ConfigurationError: If the URL cannot be parsed or does not match
        """
        driver = self.config.driver.strip()
        try:
            url = make_url(self.config.url)
        except ArgumentError as e:
            raise ConfigurationError(f"Invalid connection url '{self.config.url}': {e}") from e

        if url.get_backend_name() != get_backend_name(driver):
            raise ConfigurationError(
                f"Connection url '{url.render_as_string(hide_password=True)}' "
                f"does not match driver '{driver}'"
            )

        if "+" in driver:
            url = url.set(drivername=driver)
        if self.config.username:
            url = url.set(username=self.config.username)
        password = self.config.password.get_secret_value()
        if password:
            url = url.set(password=password)
        return url

    def _load_dbapi(self) -> ModuleType:
        """Load the dialect and import its DB-API module.

        Raises:
            ConfigurationError: If the dialect or DB-API driver is not installed
        """
        try:
            dialect_cls = self.url.get_dialect()
            return dialect_cls.import_dbapi()
        except (NoSuchModuleError, ImportError) as e:
            raise ConfigurationError(f"Driver '{self.url.drivername}' not found: {e}") from e

    def connect(self) -> Connection:
        """Open the connection.

        Raises:
            ConfigurationError: If the connection cannot be established
        """
        if self.connection is not None:
            return self.connection

        logger.info("Connecting to %s", self.display_url)
        try:
            self.engine = create_engine(
                self.url,
                poolclass=NullPool,
                echo=rxt_config.echo_sql,
            )
            self.connection = self.engine.connect()
        except Exception as e:
            self._dispose_engine()
            raise ConfigurationError(
                f"Error on connecting to {self._get_database_name()} url '{self.display_url}' using user "
                f"'{self.config.username}' and the password provided: {e}"
            ) from e
        return self.connection

    def disconnect(self) -> None:
        """Close the connection and dispose the engine.

        Safe to call even if already disconnected.
        """
        connection, self.connection = self.connection, None
        try:
            if connection is not None:
                connection.close()
        finally:
            self._dispose_engine()

    def _dispose_engine(self) -> None:
        engine, self.engine = self.engine, None
        if engine is not None:
            engine.dispose()

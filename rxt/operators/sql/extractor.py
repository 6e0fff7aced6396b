"""Generic SQL extractor using SQLAlchemy.

This module provides the relational extractor: it runs an arbitrary SQL
query and hands out its rows one record at a time through the pull
protocol, together with progress counters and the column schema.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.engine import Connection, CursorResult, RootTransaction
from sqlalchemy.exc import SQLAlchemyError

from rxt.core.config import config as rxt_config
from rxt.core.driver import DriverRegistry, get_default_registry
from rxt.core.extractor import Extractor, Record
from rxt.exceptions import (
    ConfigurationError,
    ExhaustionError,
    ExtractionError,
    ExtractorStateError,
)
from rxt.models.config import ExtractorConfig
from rxt.models.field import Column, ColumnSchema
from rxt.models.state import CursorState, ExtractorState
from rxt.operators.sql.connector import SQLConnector
from rxt.operators.sql.cursor import ResultCursor

logger = logging.getLogger(__name__)


def _is_integral(value: Any) -> bool:
    """Whether a count value is an integer (bool excluded) or an integral Decimal."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value()


class SQLExtractor(Extractor):
    """Relational extractor for SQLAlchemy-supported databases.

    Owns one connection, one read transaction and one forward-only cursor
    for its lifetime. Rows are fetched one at a time; the result set is
    never buffered as a whole.

    has_next() advances the cursor and caches the outcome, so repeated
    calls without an intervening next() do not skip rows. next() may be
    called without has_next(); it advances on its own.

    Examples:
        >>> extractor = SQLExtractor()
        >>> extractor.configure({
        ...     "driver": "sqlite",
        ...     "url": "sqlite:///orders.db",
        ...     "userName": "",
        ...     "userPassword": "",
        ...     "query": "SELECT id, name FROM orders",
        ...     "queryCount": "SELECT COUNT(*) FROM orders",
        ... })
        >>> extractor.begin()
        >>> while extractor.has_next():
        ...     record = extractor.next()
        >>> extractor.end()
    """

    def __init__(self, registry: Optional[DriverRegistry] = None):
        """Initialize SQL extractor.

        Args:
            registry: Driver registry used to resolve the configured driver
                (defaults to the process-wide registry)
        """
        self.registry = registry or get_default_registry()
        self._config: Optional[ExtractorConfig] = None
        self._connector: Optional[SQLConnector] = None
        self._transaction: Optional[RootTransaction] = None
        self._cursor: Optional[ResultCursor] = None
        self._schema: Optional[ColumnSchema] = None
        self._lookahead: Optional[bool] = None
        self._cursor_state = CursorState()
        self._state = ExtractorState.NOT_STARTED

    @property
    def state(self) -> ExtractorState:
        return self._state

    @property
    def config(self) -> Optional[ExtractorConfig]:
        return self._config

    @property
    def schema(self) -> Optional[ColumnSchema]:
        """Column schema of the running query, None before begin() and after end()."""
        return self._schema

    @property
    def query(self) -> Optional[str]:
        return self._config.query if self._config is not None else None

    def get_name(self) -> str:
        return "sql"

    def get_progress(self) -> int:
        return self._cursor_state.progress

    def get_total(self) -> int:
        return self._cursor_state.total

    def configure(self, config: Union[ExtractorConfig, Mapping[str, Any]]) -> None:
        """Resolve the driver and open the connection.

        Args:
            config: ExtractorConfig or a mapping using the configuration keys

        Raises:
            ConfigurationError: If the configuration is invalid, the driver
                cannot be resolved or loaded, or the connection fails
            ExtractorStateError: If the extractor was already configured
        """
        self._require_state(ExtractorState.NOT_STARTED, "configure")

        if not isinstance(config, ExtractorConfig):
            try:
                config = ExtractorConfig.from_mapping(config)
            except PydanticValidationError as e:
                raise ConfigurationError(f"{self.get_name()}: invalid configuration: {e}") from e

        factory = self.registry.resolve(config.driver)
        connector = factory(config)
        connector.connect()

        self._config = config
        self._connector = connector
        self._state = ExtractorState.CONFIGURED

    def begin(self) -> None:
        """Run the count query, execute the extraction query, build the schema.

        Raises:
            ExtractionError: If the extraction query cannot be executed; the
                extractor is then FAILED and only end() is allowed
            ExtractorStateError: If the extractor is not CONFIGURED
        """
        self._require_state(ExtractorState.CONFIGURED, "begin")
        connection = self._connector.connection

        if self._config.count_query is not None:
            self._cursor_state.total = self._read_count(connection, self._config.count_query)

        query = self._config.query
        logger.info("%s: executing query '%s'", self.get_name(), query)
        result: Optional[CursorResult] = None
        try:
            self._transaction = connection.begin()
            result = connection.exec_driver_sql(
                query,
                execution_options={
                    "stream_results": rxt_config.stream_results,
                    "no_parameters": True,
                },
            )
            if not result.returns_rows:
                raise ExtractionError(
                    f"{self.get_name()}: query '{query}' does not return rows",
                    query=query,
                )
            schema = self._build_schema(result)
        except Exception as e:
            self._abort_begin(result)
            if isinstance(e, ExtractionError):
                raise
            raise ExtractionError(
                f"{self.get_name()}: error on executing query '{query}'",
                query=query,
            ) from e

        self._schema = schema
        self._cursor = ResultCursor(result, schema.names)
        self._cursor_state.progress = 0
        self._state = ExtractorState.READY
        logger.debug("%s: result has %d columns: %s", self.get_name(), len(schema), schema.names)

    def has_next(self) -> bool:
        """Return whether another record is available.

        Advances the cursor unless a lookahead is already cached.

        Raises:
            ExtractionError: If advancing the cursor fails
            ExtractorStateError: If begin() has not succeeded
        """
        self._require_state((ExtractorState.READY, ExtractorState.EXHAUSTED), "has_next")
        if self._lookahead is None:
            if self._state == ExtractorState.EXHAUSTED:
                return False
            self._lookahead = self._advance()
        return self._lookahead

    def next(self) -> Record:
        """Return the record at the next cursor position.

        Raises:
            ExhaustionError: If no record is available
            ExtractionError: If reading from the cursor fails
            ExtractorStateError: If begin() has not succeeded
        """
        self._require_state((ExtractorState.READY, ExtractorState.EXHAUSTED), "next")
        available = self._lookahead
        self._lookahead = None

        if available is None:
            if self._state == ExtractorState.EXHAUSTED:
                available = False
            else:
                available = self._advance()

        if not available:
            raise ExhaustionError(
                f"{self.get_name()}: no more records. Previous position was {self.get_progress()}"
            )

        try:
            return self._cursor.read_row()
        except SQLAlchemyError as e:
            raise ExtractionError(
                f"{self.get_name()}: error on reading record from resultset of query "
                f"'{self.query}'. Position was {self.get_progress()}",
                query=self.query,
                progress=self.get_progress(),
            ) from e

    def end(self) -> None:
        """Release cursor, transaction and connection, in that order.

        Each release is attempted even if an earlier one fails; failures are
        logged and never raised. Calling end() again is a no-op.
        """
        if self._state == ExtractorState.CLOSED:
            return

        cursor, self._cursor = self._cursor, None
        transaction, self._transaction = self._transaction, None
        connector, self._connector = self._connector, None

        if cursor is not None:
            self._release("cursor", cursor.close)
        if transaction is not None:
            self._release("transaction", transaction.rollback)
        if connector is not None:
            self._release("connection", connector.disconnect)

        self._schema = None
        self._lookahead = None
        self._state = ExtractorState.CLOSED
        logger.info(
            "%s: closed after %d %s (total: %d)",
            self.get_name(),
            max(self.get_progress(), 0),
            self.get_unit(),
            self.get_total(),
        )

    def _advance(self) -> bool:
        """Advance the cursor once, counting the row if there is one."""
        try:
            found = self._cursor.advance()
        except SQLAlchemyError as e:
            raise ExtractionError(
                f"{self.get_name()}: error on moving forward in resultset of query "
                f"'{self.query}'. Previous position was {self.get_progress()}",
                query=self.query,
                progress=self.get_progress(),
            ) from e

        if found:
            self._cursor_state.progress += 1
        else:
            self._cursor_state.exhausted = True
            self._state = ExtractorState.EXHAUSTED
            logger.debug("%s: resultset exhausted at %d", self.get_name(), self.get_progress())
        return found

    def _read_count(self, connection: Connection, count_query: str) -> int:
        """Run the count query and return its value, or -1 if unknown.

        The count is advisory and must be a single integer column. An empty
        result, extra columns, a non-integer value or a failing query all
        leave it unknown. The implicit transaction the
        query opened is rolled back so a failure cannot affect the
        extraction query.
        """
        total = -1
        try:
            row = connection.exec_driver_sql(
                count_query, execution_options={"no_parameters": True}
            ).first()
            if row is None:
                logger.warning("%s: count query '%s' returned no rows", self.get_name(), count_query)
            elif len(row) != 1:
                logger.warning(
                    "%s: count query '%s' returned %d columns, expected 1",
                    self.get_name(),
                    count_query,
                    len(row),
                )
            elif not _is_integral(row[0]):
                logger.warning(
                    "%s: count query '%s' did not return an integer: %r",
                    self.get_name(),
                    count_query,
                    row[0],
                )
            else:
                total = int(row[0])
        except SQLAlchemyError as e:
            logger.warning("%s: count query '%s' failed: %s", self.get_name(), count_query, e)
        finally:
            self._release("count transaction", connection.rollback)

        if total >= 0:
            logger.info("%s: expecting %d %s", self.get_name(), total, self.get_unit())
        return total

    def _build_schema(self, result: CursorResult) -> ColumnSchema:
        """Build the column schema from the result's metadata."""
        type_mapper = self._connector.get_type_mapper()
        names = tuple(str(name) for name in result.keys())

        description = None
        dbapi_cursor = getattr(result, "cursor", None)
        if dbapi_cursor is not None:
            description = dbapi_cursor.description

        columns = []
        for index, name in enumerate(names):
            type_code = None
            if description is not None and index < len(description):
                type_code = description[index][1]
            columns.append(
                Column(
                    name=name,
                    dtype=type_mapper.from_source(type_code),
                    native_type=None if type_code is None else str(type_code),
                )
            )
        return ColumnSchema(columns=tuple(columns))

    def _abort_begin(self, result: Optional[CursorResult]) -> None:
        """Drop everything a failed begin() created and mark the extractor FAILED."""
        if result is not None:
            self._release("cursor", result.close)
        transaction, self._transaction = self._transaction, None
        if transaction is not None:
            self._release("transaction", transaction.rollback)
        self._state = ExtractorState.FAILED

    def _release(self, resource: str, release: Any) -> None:
        """Run a release step, logging instead of raising on failure."""
        try:
            release()
        except Exception:
            logger.warning("%s: failed to release %s", self.get_name(), resource, exc_info=True)

    def _require_state(
        self,
        allowed: Union[ExtractorState, tuple[ExtractorState, ...]],
        operation: str,
    ) -> None:
        if isinstance(allowed, ExtractorState):
            allowed = (allowed,)
        if self._state not in allowed:
            raise ExtractorStateError(
                f"{self.get_name()}: cannot call {operation}() in state '{self._state.value}'"
            )

"""Forward-only result cursor.

Wraps a SQLAlchemy CursorResult behind two operations, advance() and
read_row(), so nothing driver-specific leaks to the extractor's callers.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.engine import CursorResult, Row

from rxt.exceptions import ExhaustionError


class ResultCursor:
    """Forward-only cursor over a query result.

    Examples:
        >>> cursor = ResultCursor(result, ("id", "name"))
        >>> while cursor.advance():
        ...     print(cursor.read_row())
        {'id': 1, 'name': 'a'}
        {'id': 2, 'name': 'b'}
    """

    def __init__(self, result: CursorResult, names: tuple[str, ...]):
        """Initialize cursor.

        Args:
            result: Result of the extraction query, positioned before the first row
            names: Column names, in result order, to key records by
        """
        self._result = result
        self._names = names
        self._row: Optional[Row] = None

    def advance(self) -> bool:
        """Move to the next row.

        Returns:
            True if the cursor now points at a row, False when exhausted

        Raises:
            sqlalchemy.exc.SQLAlchemyError: If fetching from the driver fails
        """
        self._row = self._result.fetchone()
        return self._row is not None

    def read_row(self) -> dict[str, Any]:
        """Build a record from the current row.

        Values are read by position and stored under the matching column
        name without any type conversion. Each call returns a new dict.

        Raises:
            ExhaustionError: If the cursor is not positioned on a row
        """
        if self._row is None:
            raise ExhaustionError("Cursor is not positioned on a row")
        row = self._row
        return {name: row[index] for index, name in enumerate(self._names)}

    def close(self) -> None:
        """Close the underlying result and drop the current row."""
        self._row = None
        self._result.close()

"""Base Extractor abstract class.

This module defines the Extractor interface: a pull-based iteration
protocol over records read from a source system.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator, Mapping, Union

from rxt.models.config import ExtractorConfig
from rxt.models.description import ExtractorDescription

Record = dict[str, Any]


class Extractor(ABC):
    """Base class for pulling records out of a source system.

    The orchestrator drives an extractor through a fixed sequence:
    configure() -> begin() -> has_next()/next() until exhausted -> end().
    An extractor instance serves a single run and is not reused.

    Calls are blocking and must not be made concurrently on one instance.

    Examples:
        Driving the protocol by hand:
        >>> extractor = SQLExtractor()
        >>> extractor.configure(config)
        >>> extractor.begin()
        >>> while extractor.has_next():
        ...     record = extractor.next()
        >>> extractor.end()

        Or as a context-managed iterator:
        >>> with SQLExtractor() as extractor:
        ...     extractor.configure(config)
        ...     extractor.begin()
        ...     for record in extractor:
        ...         print(record)
    """

    @abstractmethod
    def configure(self, config: Union[ExtractorConfig, Mapping[str, Any]]) -> None:
        """Load the driver and open the connection.

        Raises:
            ConfigurationError: If the configuration is invalid, the driver
                cannot be loaded or the connection cannot be established
        """
        pass

    @abstractmethod
    def begin(self) -> None:
        """Execute the queries and build the column schema.

        Raises:
            ExtractionError: If query execution fails
        """
        pass

    @abstractmethod
    def has_next(self) -> bool:
        """Return whether another record is available.

        May advance the underlying cursor.

        Raises:
            ExtractionError: If advancing the cursor fails
        """
        pass

    @abstractmethod
    def next(self) -> Record:
        """Return the next record.

        Raises:
            ExhaustionError: If no record is available
            ExtractionError: If reading the record fails
        """
        pass

    @abstractmethod
    def end(self) -> None:
        """Release every resource held by the extractor. Safe to call twice."""
        pass

    @abstractmethod
    def get_progress(self) -> int:
        """Return the number of records reached so far (-1 before begin)."""
        pass

    @abstractmethod
    def get_total(self) -> int:
        """Return the advisory total record count, or -1 when unknown."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Return the extractor's name."""
        pass

    def get_unit(self) -> str:
        """Return the unit progress is counted in."""
        return "records"

    def get_configuration(self) -> ExtractorDescription:
        """Describe the configuration parameters this extractor accepts."""
        return ExtractorConfig.describe(self.get_name())

    def __iter__(self) -> Iterator[Record]:
        while self.has_next():
            yield self.next()

    def __enter__(self) -> Extractor:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.end()

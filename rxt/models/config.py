"""Extractor configuration model.

This module defines ExtractorConfig, the immutable set of connection and
query settings handed to an extractor by the orchestrator. Keys follow
the configuration contract (``driver``, ``url``, ``userName``,
``userPassword``, ``query``, ``queryCount``); variables inside the values
are expected to be resolved already.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field as PydanticField, SecretStr, field_validator

from rxt.models.description import ExtractorDescription, ParameterDescription


class ExtractorConfig(BaseModel):
    """Connection and query settings for a relational extractor.

    Examples:
        From a configuration mapping:
        >>> config = ExtractorConfig.from_mapping({
        ...     "driver": "sqlite",
        ...     "url": "sqlite:///orders.db",
        ...     "userName": "",
        ...     "userPassword": "",
        ...     "query": "SELECT id, name FROM orders",
        ... })
        >>> config.count_query is None
        True
    """

    driver: str = PydanticField(
        ...,
        description="SQLAlchemy driver name (e.g. 'sqlite', 'postgresql+psycopg2')",
    )

    url: str = PydanticField(
        ...,
        description="Connection URL",
    )

    username: str = PydanticField(
        ...,
        alias="userName",
        description="User name",
    )

    password: SecretStr = PydanticField(
        ...,
        alias="userPassword",
        description="User password",
    )

    query: str = PydanticField(
        ...,
        description="Query that extracts records",
    )

    count_query: Optional[str] = PydanticField(
        None,
        alias="queryCount",
        description="Query that returns the count to have a correct progress status",
    )

    model_config = {"extra": "forbid", "frozen": True, "populate_by_name": True}

    @field_validator("driver", "url", "query")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty driver, url and query values."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("count_query")
    @classmethod
    def validate_count_query(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank count query as not configured."""
        if v is not None and not v.strip():
            return None
        return v

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ExtractorConfig:
        """Build a config from a mapping using the contract's key names.

        Raises:
            pydantic.ValidationError: If required keys are missing, unknown
                keys are present, or values are invalid
        """
        return cls.model_validate(dict(data))

    @classmethod
    def describe(cls, name: str) -> ExtractorDescription:
        """Describe the recognized configuration keys.

        Args:
            name: Name of the extractor the description is for

        Returns:
            ExtractorDescription listing every key in declaration order
        """
        parameters = [
            ParameterDescription(
                name=field.alias or field_name,
                optional=not field.is_required(),
                description=field.description or "",
            )
            for field_name, field in cls.model_fields.items()
        ]
        return ExtractorDescription(name=name, parameters=parameters, output="record")

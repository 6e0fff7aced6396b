"""Self-description models.

An extractor publishes the parameters it accepts so an orchestrator can
render help text or configuration forms without knowing the extractor.
"""

from __future__ import annotations

from pydantic import BaseModel, Field as PydanticField


class ParameterDescription(BaseModel):
    """One recognized configuration parameter."""

    name: str = PydanticField(..., description="Configuration key")
    optional: bool = PydanticField(False, description="Whether the key may be omitted")
    description: str = PydanticField("", description="Human-readable purpose")

    model_config = {"extra": "forbid", "frozen": True}


class ExtractorDescription(BaseModel):
    """Structured description of an extractor's configuration and output."""

    name: str = PydanticField(..., description="Extractor name")
    parameters: list[ParameterDescription] = PydanticField(
        default_factory=list,
        description="Recognized parameters in declaration order",
    )
    output: str = PydanticField(
        "record",
        description="Element type produced by the extractor",
    )

    model_config = {"extra": "forbid"}

    def get_parameter(self, name: str) -> ParameterDescription:
        """Look up a parameter description by configuration key.

        Raises:
            KeyError: If the extractor does not recognize the key
        """
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        raise KeyError(name)

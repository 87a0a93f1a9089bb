"""Reusable pydantic base models for wire and configuration data."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    A base model that maps snake_case fields to camelCase keys.

    For example, the field name `round_changes` in a Python model is read from
    and written to JSON as `roundChanges`, matching the exporter's wire format.

    Unknown keys are ignored so newer exporter versions do not break parsing.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        arbitrary_types_allowed=True,
        frozen=True,
    )


class StrictBaseModel(CamelModel):
    """A strict, immutable pydantic base model that rejects unknown keys."""

    model_config = CamelModel.model_config | {
        "extra": "forbid",
        "strict": True,
    }

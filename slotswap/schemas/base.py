"""
Base schemas with standardized JSON conventions for API payloads.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StandardizedModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python, enums as values."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        from_attributes=True,
    )


class StrictRequestModel(StandardizedModel):
    """Request body base that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")


class MessageResponse(StandardizedModel):
    """Simple acknowledgement payload."""

    message: str

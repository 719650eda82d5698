"""Base classes for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Base class for all value objects.

    Value objects are immutable and compared by value, not identity.
    """

    model_config = ConfigDict(
        frozen=True,  # All value objects are immutable
        arbitrary_types_allowed=True,
    )


class PayloadObject(ValueObject):
    """Value object for provider-supplied payloads.

    Unknown keys are kept so the stored payload stays a faithful copy of
    what the provider sent.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
    )

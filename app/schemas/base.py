from typing import Any, ClassVar, Tuple

from pydantic import BaseModel, ConfigDict, model_validator


class BaseSchema(BaseModel):
    """Base schema shared by all request and response models."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class RequestSchema(BaseSchema):
    """Base for request bodies; unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")


class UpdateSchema(RequestSchema):
    """
    Base for partial updates.

    Every field is optional so it can be left out, but fields backed by a
    NOT NULL column may not be sent as an explicit ``null``.
    """

    non_nullable_fields: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def reject_explicit_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            nulls = [
                field
                for field in cls.non_nullable_fields
                if field in data and data[field] is None
            ]
            if nulls:
                raise ValueError(f"{', '.join(nulls)} cannot be null")
        return data

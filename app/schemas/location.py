"""Location-related schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, EmailStr, Field, computed_field

from app.schemas.base import BaseSchema, RequestSchema, UpdateSchema
from app.schemas.resource import ResourceItemResponse


class LocationCreate(RequestSchema):
    """Create a new location."""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    address: str = Field(..., min_length=1, max_length=500)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field("US", min_length=2, max_length=2)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    is_primary: bool = False


class LocationUpdate(UpdateSchema):
    """Update a location."""

    non_nullable_fields = (
        "name", "address", "city", "state", "zip_code", "country",
        "is_primary", "is_active",
    )

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    address: Optional[str] = Field(None, min_length=1, max_length=500)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    state: Optional[str] = Field(None, min_length=1, max_length=100)
    zip_code: Optional[str] = Field(None, min_length=1, max_length=20)
    country: Optional[str] = Field(None, min_length=2, max_length=2)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    is_primary: Optional[bool] = None
    is_active: Optional[bool] = None


class LocationResponse(BaseSchema):
    """Location response with its active resources."""

    id: str
    organization_id: str
    name: str
    description: Optional[str] = None
    address: str
    city: str
    state: str
    zip_code: str
    country: str
    phone: Optional[str] = None
    email: Optional[str] = None
    is_primary: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime
    resources: List[ResourceItemResponse] = Field(
        default_factory=list,
        validation_alias=AliasChoices("active_resources", "resources"),
    )

    @computed_field
    @property
    def resource_count(self) -> int:
        """Number of active resources at this location."""
        return len(self.resources)

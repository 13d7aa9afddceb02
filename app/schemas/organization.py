"""Organization-related schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, EmailStr, Field

from app.schemas.base import BaseSchema, RequestSchema, UpdateSchema
from app.schemas.location import LocationResponse
from app.schemas.resource import ResourceItemResponse
from app.schemas.settings import OrganizationSettingsResponse

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
URL_PATTERN = r"^https?://\S+$"


class OrganizationCreate(RequestSchema):
    """Create a new organization."""

    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(
        ...,
        min_length=1,
        max_length=255,
        pattern=SLUG_PATTERN,
        description="Unique slug for URL identification",
    )
    description: Optional[str] = None
    website: Optional[str] = Field(None, max_length=255, pattern=URL_PATTERN)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=20)
    country: str = Field("US", min_length=2, max_length=2)
    timezone: str = Field("UTC", max_length=64)
    currency: str = Field("USD", min_length=3, max_length=3)
    business_type: str = Field("gym", max_length=50)


class OrganizationUpdate(UpdateSchema):
    """Update an organization. The slug is fixed once created."""

    non_nullable_fields = (
        "name", "country", "timezone", "currency", "business_type", "is_active",
    )

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    website: Optional[str] = Field(None, max_length=255, pattern=URL_PATTERN)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=20)
    country: Optional[str] = Field(None, min_length=2, max_length=2)
    timezone: Optional[str] = Field(None, max_length=64)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    business_type: Optional[str] = Field(None, max_length=50)
    is_active: Optional[bool] = None


class OrganizationCounts(BaseSchema):
    """Number of related records, including inactive ones."""

    users: int = 0
    locations: int = 0
    resources: int = 0
    services: int = 0


class OrganizationResponse(BaseSchema):
    """Organization response with settings and active facilities."""

    id: str
    name: str
    slug: str
    description: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: str
    timezone: str
    currency: str
    business_type: str
    subscription_tier: str
    is_active: bool
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    settings: Optional[OrganizationSettingsResponse] = None
    locations: List[LocationResponse] = Field(
        default_factory=list,
        validation_alias=AliasChoices("active_locations", "locations"),
    )
    resources: List[ResourceItemResponse] = Field(
        default_factory=list,
        validation_alias=AliasChoices("active_resources", "resources"),
    )
    counts: Optional[OrganizationCounts] = None

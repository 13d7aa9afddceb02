"""Resource-related schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.models.resource import ResourceType
from app.schemas.base import BaseSchema, RequestSchema, UpdateSchema


class ResourceCreate(RequestSchema):
    """Create a new resource."""

    name: str = Field(..., min_length=1, max_length=200)
    type: ResourceType
    description: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=1, description="Capacity (for rooms/spaces)")
    location_id: Optional[str] = None
    is_bookable: bool = True


class ResourceUpdate(UpdateSchema):
    """Update a resource."""

    non_nullable_fields = ("name", "type", "is_bookable", "is_active")

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[ResourceType] = None
    description: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=1)
    location_id: Optional[str] = None
    is_bookable: Optional[bool] = None
    is_active: Optional[bool] = None


class LocationSummary(BaseSchema):
    """Minimal location reference embedded in other payloads."""

    id: str
    name: str
    address: Optional[str] = None


class ResourceItemResponse(BaseSchema):
    """Resource fields without related objects."""

    id: str
    organization_id: str
    location_id: Optional[str] = None
    name: str
    type: ResourceType
    description: Optional[str] = None
    capacity: Optional[int] = None
    is_bookable: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ResourceResponse(ResourceItemResponse):
    """Resource response including its location."""

    location: Optional[LocationSummary] = None

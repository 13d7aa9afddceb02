"""Service (bookable offering) schemas."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_validator

from app.models.service import ServiceType
from app.schemas.base import BaseSchema, RequestSchema, UpdateSchema
from app.schemas.resource import LocationSummary


def _dedupe(ids: List[str]) -> List[str]:
    """Drop repeated IDs while keeping first-seen order."""
    return list(dict.fromkeys(ids))


class ServiceCreate(RequestSchema):
    """Create a new service/class."""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    type: ServiceType
    duration: int = Field(..., ge=1, description="Default duration in minutes")
    capacity: Optional[int] = Field(None, ge=1)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    bookable: bool = True
    requires_approval: bool = False
    allow_waitlist: bool = True
    location_id: Optional[str] = None
    primary_instructor_id: Optional[str] = None
    assistant_instructor_id: Optional[str] = None
    resource_ids: List[str] = Field(default_factory=list)
    color: Optional[str] = Field(None, max_length=20)

    @field_validator("resource_ids")
    @classmethod
    def dedupe_resource_ids(cls, v: List[str]) -> List[str]:
        return _dedupe(v)


class ServiceUpdate(UpdateSchema):
    """Update a service/class."""

    non_nullable_fields = (
        "name", "type", "duration", "bookable", "requires_approval",
        "allow_waitlist", "resource_ids", "is_active",
    )

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    type: Optional[ServiceType] = None
    duration: Optional[int] = Field(None, ge=1)
    capacity: Optional[int] = Field(None, ge=1)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    bookable: Optional[bool] = None
    requires_approval: Optional[bool] = None
    allow_waitlist: Optional[bool] = None
    location_id: Optional[str] = None
    primary_instructor_id: Optional[str] = None
    assistant_instructor_id: Optional[str] = None
    resource_ids: Optional[List[str]] = None
    color: Optional[str] = Field(None, max_length=20)
    is_active: Optional[bool] = None

    @field_validator("resource_ids")
    @classmethod
    def dedupe_resource_ids(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _dedupe(v) if v is not None else v


class OrganizationSummary(BaseSchema):
    """Minimal organization reference."""

    id: str
    name: str


class InstructorSummary(BaseSchema):
    """Minimal instructor reference."""

    id: str
    first_name: str
    last_name: str
    specialty: Optional[str] = None


class ServiceResponse(BaseSchema):
    """Service response with related summaries."""

    id: str
    organization_id: str
    name: str
    description: Optional[str] = None
    type: ServiceType
    duration: int
    capacity: Optional[int] = None
    price: Optional[Decimal] = None
    bookable: bool
    requires_approval: bool
    allow_waitlist: bool
    color: Optional[str] = None
    location_id: Optional[str] = None
    primary_instructor_id: Optional[str] = None
    assistant_instructor_id: Optional[str] = None
    resource_ids: List[str] = Field(default_factory=list)
    is_active: bool
    created_at: datetime
    updated_at: datetime
    organization: Optional[OrganizationSummary] = None
    location: Optional[LocationSummary] = None
    primary_instructor: Optional[InstructorSummary] = None
    assistant_instructor: Optional[InstructorSummary] = None

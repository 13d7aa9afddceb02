"""Staff roster schemas."""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.models.user import STAFF_ROLES, Role
from app.schemas.base import BaseSchema, RequestSchema, UpdateSchema


def _staff_role(role: Optional[Role]) -> Optional[Role]:
    if role is not None and role not in STAFF_ROLES:
        raise ValueError("role must be one of: admin, staff, instructor")
    return role


class StaffCreate(RequestSchema):
    """Add a staff member or instructor to an organization."""

    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    role: Role = Role.STAFF
    specialty: Optional[str] = Field(None, max_length=200)

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: Role) -> Role:
        return _staff_role(v)


class StaffUpdate(UpdateSchema):
    """Update a staff member."""

    non_nullable_fields = ("email", "first_name", "last_name", "role", "is_active")

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    role: Optional[Role] = None
    specialty: Optional[str] = Field(None, max_length=200)
    is_active: Optional[bool] = None

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: Optional[Role]) -> Optional[Role]:
        return _staff_role(v)


class StaffResponse(BaseSchema):
    """Staff member response."""

    id: str
    organization_id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    phone: Optional[str] = None
    role: Role
    specialty: Optional[str] = None
    is_active: bool
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

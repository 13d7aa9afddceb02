"""Organization settings schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from app.schemas.base import BaseSchema, UpdateSchema

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}){1,2}$"
URL_PATTERN = r"^https?://\S+$"


class BusinessHours(BaseSchema):
    """Opening hours for one day of the week (Sunday=0)."""

    day_of_week: int = Field(..., ge=0, le=6, description="Day of week (0-6, Sunday=0)")
    open_time: str = Field(..., pattern=TIME_PATTERN, description="Opening time (HH:MM)")
    close_time: str = Field(..., pattern=TIME_PATTERN, description="Closing time (HH:MM)")
    is_open: bool

    @model_validator(mode="after")
    def validate_time_range(self):
        """An open day must close after it opens."""
        # Zero-padded HH:MM strings compare correctly as text
        if self.is_open and self.close_time <= self.open_time:
            raise ValueError("close_time must be after open_time on open days")
        return self


class OrganizationSettingsUpdate(UpdateSchema):
    """Partial update (or initial values) for organization settings."""

    non_nullable_fields = (
        "booking_window_days", "cancellation_window_hours", "late_cancel_penalty",
        "no_show_penalty", "waitlist_enabled", "default_class_duration",
        "allow_recurring_bookings", "send_confirmation_emails",
        "send_reminder_emails", "reminder_hours", "require_membership_for_booking",
        "allow_guest_bookings", "minimum_advance_booking", "maximum_advance_booking",
        "first_day_of_week", "date_format", "time_format", "enable_check_in",
        "enable_payments", "enable_analytics", "enable_reviews",
    )

    booking_window_days: Optional[int] = Field(None, ge=1)
    cancellation_window_hours: Optional[int] = Field(None, ge=0)
    late_cancel_penalty: Optional[bool] = None
    no_show_penalty: Optional[bool] = None
    waitlist_enabled: Optional[bool] = None
    max_waitlist_size: Optional[int] = Field(None, ge=1)
    default_class_duration: Optional[int] = Field(None, ge=1, description="Minutes")
    allow_recurring_bookings: Optional[bool] = None
    max_bookings_per_member: Optional[int] = Field(None, ge=1)
    send_confirmation_emails: Optional[bool] = None
    send_reminder_emails: Optional[bool] = None
    reminder_hours: Optional[int] = Field(None, ge=1)
    primary_color: Optional[str] = Field(None, pattern=COLOR_PATTERN)
    secondary_color: Optional[str] = Field(None, pattern=COLOR_PATTERN)
    logo_url: Optional[str] = Field(None, max_length=500, pattern=URL_PATTERN)
    favicon_url: Optional[str] = Field(None, max_length=500, pattern=URL_PATTERN)
    custom_domain: Optional[str] = Field(None, max_length=255)
    require_membership_for_booking: Optional[bool] = None
    allow_guest_bookings: Optional[bool] = None
    minimum_advance_booking: Optional[int] = Field(None, ge=0, description="Minutes")
    maximum_advance_booking: Optional[int] = Field(None, ge=1, description="Minutes")
    default_time_zone: Optional[str] = Field(None, max_length=64)
    first_day_of_week: Optional[int] = Field(None, ge=0, le=6)
    date_format: Optional[str] = Field(None, max_length=20)
    time_format: Optional[str] = Field(None, pattern=r"^(12h|24h)$")
    enable_check_in: Optional[bool] = None
    enable_payments: Optional[bool] = None
    enable_analytics: Optional[bool] = None
    enable_reviews: Optional[bool] = None
    business_hours: Optional[List[BusinessHours]] = None

    @field_validator("business_hours")
    @classmethod
    def validate_unique_days(
        cls, v: Optional[List[BusinessHours]]
    ) -> Optional[List[BusinessHours]]:
        """Allow at most one entry per day of the week."""
        if v is None:
            return v
        days = [entry.day_of_week for entry in v]
        if len(days) != len(set(days)):
            raise ValueError("business_hours may contain only one entry per day")
        return v

    @model_validator(mode="after")
    def validate_advance_window(self):
        """Minimum advance booking cannot exceed the maximum."""
        if (
            self.minimum_advance_booking is not None
            and self.maximum_advance_booking is not None
            and self.minimum_advance_booking > self.maximum_advance_booking
        ):
            raise ValueError(
                "minimum_advance_booking cannot exceed maximum_advance_booking"
            )
        return self


class OrganizationSettingsResponse(BaseSchema):
    """Organization settings response."""

    id: str
    organization_id: str
    booking_window_days: int
    cancellation_window_hours: int
    late_cancel_penalty: bool
    no_show_penalty: bool
    waitlist_enabled: bool
    max_waitlist_size: Optional[int] = None
    default_class_duration: int
    allow_recurring_bookings: bool
    max_bookings_per_member: Optional[int] = None
    send_confirmation_emails: bool
    send_reminder_emails: bool
    reminder_hours: int
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    logo_url: Optional[str] = None
    favicon_url: Optional[str] = None
    custom_domain: Optional[str] = None
    require_membership_for_booking: bool
    allow_guest_bookings: bool
    minimum_advance_booking: int
    maximum_advance_booking: int
    default_time_zone: Optional[str] = None
    first_day_of_week: int
    date_format: str
    time_format: str
    enable_check_in: bool
    enable_payments: bool
    enable_analytics: bool
    enable_reviews: bool
    business_hours: Optional[List[BusinessHours]] = None
    created_at: datetime
    updated_at: datetime

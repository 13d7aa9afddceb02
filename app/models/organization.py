"""Organization (tenant root) and its settings record."""

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence
from uuid import uuid4

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, String, Text, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column, relationship, selectinload

from core.db import Base, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from app.models.location import Location
    from app.models.resource import Resource
    from app.models.service import Service
    from app.models.user import User


# Settings every new organization starts with.
DEFAULT_SETTINGS: Dict[str, Any] = {
    "booking_window_days": 30,
    "cancellation_window_hours": 24,
    "late_cancel_penalty": False,
    "no_show_penalty": True,
    "waitlist_enabled": True,
    "max_waitlist_size": 10,
    "default_class_duration": 60,
    "allow_recurring_bookings": True,
    "max_bookings_per_member": 10,
    "send_confirmation_emails": True,
    "send_reminder_emails": True,
    "reminder_hours": 24,
    "primary_color": "#007bff",
    "secondary_color": "#6c757d",
    "require_membership_for_booking": False,
    "allow_guest_bookings": True,
    "minimum_advance_booking": 0,
    "maximum_advance_booking": 43200,  # 30 days in minutes
}


class Organization(Base, TimestampMixin, SoftDeleteMixin):
    """Tenant organization: a gym, studio or wellness business."""

    __tablename__ = "organizations"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    zip_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    country: Mapped[str] = mapped_column(String(2), default="US", nullable=False)
    timezone: Mapped[str] = mapped_column(String(64), default="UTC", nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    business_type: Mapped[str] = mapped_column(
        String(50), default="gym", nullable=False
    )
    subscription_tier: Mapped[str] = mapped_column(
        String(50), default="basic", nullable=False
    )

    settings: Mapped[Optional["OrganizationSettings"]] = relationship(
        "OrganizationSettings",
        back_populates="organization",
        uselist=False,
        cascade="all, delete-orphan",
    )
    locations: Mapped[List["Location"]] = relationship(
        "Location", back_populates="organization"
    )
    resources: Mapped[List["Resource"]] = relationship(
        "Resource", back_populates="organization"
    )
    services: Mapped[List["Service"]] = relationship(
        "Service", back_populates="organization"
    )
    users: Mapped[List["User"]] = relationship("User", back_populates="organization")

    # Read-only views over active children, used for eager-loaded responses
    active_locations: Mapped[List["Location"]] = relationship(
        "Location",
        primaryjoin="and_(Organization.id == Location.organization_id, "
        "Location.is_active == True)",
        order_by="Location.name",
        viewonly=True,
    )
    active_resources: Mapped[List["Resource"]] = relationship(
        "Resource",
        primaryjoin="and_(Organization.id == Resource.organization_id, "
        "Resource.is_active == True)",
        order_by="Resource.name",
        viewonly=True,
    )

    @classmethod
    def detail_options(cls) -> tuple:
        """Loader options for the full organization detail payload."""
        from app.models.location import Location

        return (
            selectinload(cls.settings),
            selectinload(cls.active_locations).selectinload(
                Location.active_resources
            ),
            selectinload(cls.active_resources),
        )

    @classmethod
    async def get_by_id(
        cls, db_session: AsyncSession, id: str
    ) -> Optional["Organization"]:
        """Get organization by ID with settings and active children loaded."""
        result = await db_session.execute(
            select(cls)
            .where(cls.id == id)
            .options(*cls.detail_options())
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    @classmethod
    async def get_by_slug(
        cls, db_session: AsyncSession, slug: str
    ) -> Optional["Organization"]:
        """Get organization by slug with settings and active children loaded."""
        result = await db_session.execute(
            select(cls)
            .where(cls.slug == slug)
            .options(*cls.detail_options())
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    @classmethod
    async def exists(cls, db_session: AsyncSession, id: str) -> bool:
        """Check whether an organization row exists, active or not."""
        result = await db_session.execute(select(cls.id).where(cls.id == id))
        return result.first() is not None

    @classmethod
    async def slug_exists(cls, db_session: AsyncSession, slug: str) -> bool:
        """Check whether any organization, active or not, already uses a slug."""
        result = await db_session.execute(select(cls.id).where(cls.slug == slug))
        return result.first() is not None

    @classmethod
    async def get_all(
        cls, db_session: AsyncSession, is_active: Optional[bool] = None
    ) -> Sequence["Organization"]:
        """Get all organizations, newest first."""
        query = select(cls).options(*cls.detail_options())
        if is_active is not None:
            query = query.where(cls.is_active == is_active)
        result = await db_session.execute(
            query.order_by(cls.created_at.desc(), cls.name)
        )
        return result.scalars().all()

    def __repr__(self) -> str:
        return f"Organization(id={self.id}, slug={self.slug})"


class OrganizationSettings(Base, TimestampMixin):
    """Per-organization booking policy, notification and branding settings."""

    __tablename__ = "organization_settings"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    # Booking policy
    booking_window_days: Mapped[int] = mapped_column(Integer, default=30, nullable=False)
    cancellation_window_hours: Mapped[int] = mapped_column(
        Integer, default=24, nullable=False
    )
    late_cancel_penalty: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    no_show_penalty: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    waitlist_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    max_waitlist_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    default_class_duration: Mapped[int] = mapped_column(
        Integer, default=60, nullable=False
    )
    allow_recurring_bookings: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )
    max_bookings_per_member: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    require_membership_for_booking: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    allow_guest_bookings: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    minimum_advance_booking: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False
    )  # minutes
    maximum_advance_booking: Mapped[int] = mapped_column(
        Integer, default=43200, nullable=False
    )  # minutes

    # Notifications
    send_confirmation_emails: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )
    send_reminder_emails: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    reminder_hours: Mapped[int] = mapped_column(Integer, default=24, nullable=False)

    # Branding
    primary_color: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    secondary_color: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    logo_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    favicon_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    custom_domain: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Locale
    default_time_zone: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    first_day_of_week: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    date_format: Mapped[str] = mapped_column(
        String(20), default="MM/DD/YYYY", nullable=False
    )
    time_format: Mapped[str] = mapped_column(String(3), default="12h", nullable=False)

    # Feature toggles
    enable_check_in: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    enable_payments: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    enable_analytics: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    enable_reviews: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # List of {day_of_week, open_time, close_time, is_open}
    business_hours: Mapped[Optional[List[Dict[str, Any]]]] = mapped_column(
        JSON, nullable=True
    )

    organization: Mapped["Organization"] = relationship(
        "Organization", back_populates="settings"
    )

    @classmethod
    async def get_by_organization(
        cls, db_session: AsyncSession, organization_id: str
    ) -> Optional["OrganizationSettings"]:
        """Get the settings row belonging to an organization."""
        result = await db_session.execute(
            select(cls)
            .where(cls.organization_id == organization_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    def __repr__(self) -> str:
        return f"OrganizationSettings(organization_id={self.organization_id})"

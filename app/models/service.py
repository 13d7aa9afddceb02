import enum
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional, Sequence
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    select,
)
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column, relationship, selectinload

from core.db import Base, OrganizationMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from app.models.location import Location
    from app.models.organization import Organization
    from app.models.user import User


class ServiceType(str, enum.Enum):
    """Kinds of bookable offerings."""
    CLASS = "CLASS"
    APPOINTMENT = "APPOINTMENT"
    WORKSHOP = "WORKSHOP"
    PERSONAL_TRAINING = "PERSONAL_TRAINING"


class Service(Base, TimestampMixin, SoftDeleteMixin, OrganizationMixin):
    """A bookable offering: class, appointment, workshop or personal training."""

    __tablename__ = "services"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    type: Mapped[ServiceType] = mapped_column(
        Enum(ServiceType, native_enum=False, length=30),
        nullable=False,
        index=True,
    )
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes
    capacity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    bookable: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    requires_approval: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    allow_waitlist: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    color: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    resource_ids: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)

    location_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("locations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    primary_instructor_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    assistant_instructor_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    organization: Mapped["Organization"] = relationship(
        "Organization", back_populates="services"
    )
    location: Mapped[Optional["Location"]] = relationship("Location")
    primary_instructor: Mapped[Optional["User"]] = relationship(
        "User", foreign_keys=[primary_instructor_id]
    )
    assistant_instructor: Mapped[Optional["User"]] = relationship(
        "User", foreign_keys=[assistant_instructor_id]
    )

    __table_args__ = (
        Index("ix_services_organization_name", "organization_id", "name"),
    )

    @classmethod
    def detail_options(cls) -> tuple:
        """Loader options for the related summaries rendered with a service."""
        return (
            selectinload(cls.organization),
            selectinload(cls.location),
            selectinload(cls.primary_instructor),
            selectinload(cls.assistant_instructor),
        )

    @classmethod
    async def get_for_organization(
        cls,
        db_session: AsyncSession,
        organization_id: str,
        id: str,
        include_inactive: bool = False,
    ) -> Optional["Service"]:
        """Get a service that belongs to the given organization."""
        query = select(cls).where(cls.id == id, cls.organization_id == organization_id)
        if not include_inactive:
            query = query.where(cls.is_active == True)
        result = await db_session.execute(
            query.options(*cls.detail_options()).execution_options(
                populate_existing=True
            )
        )
        return result.scalars().first()

    @classmethod
    async def get_by_name(
        cls,
        db_session: AsyncSession,
        organization_id: str,
        name: str,
        exclude_id: Optional[str] = None,
    ) -> Optional["Service"]:
        """Find a service, active or not, with this name in an organization."""
        query = select(cls).where(
            cls.organization_id == organization_id, cls.name == name
        )
        if exclude_id:
            query = query.where(cls.id != exclude_id)
        result = await db_session.execute(query)
        return result.scalars().first()

    @classmethod
    async def get_active_by_organization(
        cls,
        db_session: AsyncSession,
        organization_id: str,
        type: Optional[ServiceType] = None,
    ) -> Sequence["Service"]:
        """Get active services of an organization ordered by name."""
        query = select(cls).where(
            cls.organization_id == organization_id, cls.is_active == True
        )
        if type is not None:
            query = query.where(cls.type == type)
        result = await db_session.execute(
            query.options(*cls.detail_options()).order_by(cls.name)
        )
        return result.scalars().all()

    def __repr__(self) -> str:
        return f"Service(id={self.id}, name={self.name}, type={self.type})"

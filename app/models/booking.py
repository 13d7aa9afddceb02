import enum
from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import uuid4

from sqlalchemy import DateTime, Enum, ForeignKey, String, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base, OrganizationMixin, TimestampMixin

if TYPE_CHECKING:
    from app.models.service import Service
    from app.models.user import User


class BookingStatus(str, enum.Enum):
    """Lifecycle states of a booking."""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"
    NO_SHOW = "NO_SHOW"


class Booking(Base, TimestampMixin, OrganizationMixin):
    """A member's reservation of a service occurrence."""

    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    service_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("services.id"), nullable=False, index=True
    )
    user_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    resource_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("resources.id", ondelete="SET NULL"), nullable=True
    )
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, native_enum=False, length=20),
        default=BookingStatus.CONFIRMED,
        nullable=False,
    )

    service: Mapped["Service"] = relationship("Service")
    user: Mapped[Optional["User"]] = relationship("User")

    @classmethod
    async def exists_for_service(cls, db_session: AsyncSession, service_id: str) -> bool:
        """Check whether any booking, in any status, references a service."""
        result = await db_session.execute(
            select(cls.id).where(cls.service_id == service_id).limit(1)
        )
        return result.first() is not None

    def __repr__(self) -> str:
        return f"Booking(id={self.id}, service_id={self.service_id}, status={self.status})"

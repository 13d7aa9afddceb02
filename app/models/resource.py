import enum
from typing import TYPE_CHECKING, Optional, Sequence
from uuid import uuid4

from sqlalchemy import Boolean, Enum, ForeignKey, Integer, String, Text, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column, relationship, selectinload

from core.db import Base, OrganizationMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from app.models.location import Location
    from app.models.organization import Organization


class ResourceType(str, enum.Enum):
    """Kinds of bookable resources."""
    ROOM = "ROOM"
    EQUIPMENT = "EQUIPMENT"


class Resource(Base, TimestampMixin, SoftDeleteMixin, OrganizationMixin):
    """A bookable room or piece of equipment."""

    __tablename__ = "resources"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[ResourceType] = mapped_column(
        Enum(ResourceType, native_enum=False, length=20),
        nullable=False,
        index=True,
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    capacity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_bookable: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    location_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("locations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    organization: Mapped["Organization"] = relationship(
        "Organization", back_populates="resources"
    )
    location: Mapped[Optional["Location"]] = relationship(
        "Location", back_populates="resources"
    )

    @classmethod
    async def get_for_organization(
        cls,
        db_session: AsyncSession,
        organization_id: str,
        id: str,
        include_inactive: bool = False,
    ) -> Optional["Resource"]:
        """Get a resource that belongs to the given organization."""
        query = select(cls).where(cls.id == id, cls.organization_id == organization_id)
        if not include_inactive:
            query = query.where(cls.is_active == True)
        result = await db_session.execute(
            query.options(selectinload(cls.location)).execution_options(
                populate_existing=True
            )
        )
        return result.scalars().first()

    @classmethod
    async def get_active_by_organization(
        cls,
        db_session: AsyncSession,
        organization_id: str,
        type: Optional[ResourceType] = None,
        location_id: Optional[str] = None,
    ) -> Sequence["Resource"]:
        """Get active resources of an organization, optionally filtered."""
        query = select(cls).where(
            cls.organization_id == organization_id, cls.is_active == True
        )
        if type is not None:
            query = query.where(cls.type == type)
        if location_id:
            query = query.where(cls.location_id == location_id)

        result = await db_session.execute(
            query.options(selectinload(cls.location)).order_by(cls.type, cls.name)
        )
        return result.scalars().all()

    @classmethod
    async def count_active_in(
        cls, db_session: AsyncSession, organization_id: str, ids: Sequence[str]
    ) -> int:
        """Count how many of the given IDs are active resources of an organization."""
        result = await db_session.execute(
            select(cls.id).where(
                cls.id.in_(set(ids)),
                cls.organization_id == organization_id,
                cls.is_active == True,
            )
        )
        return len(result.scalars().all())

    def __repr__(self) -> str:
        return f"Resource(id={self.id}, name={self.name}, type={self.type})"

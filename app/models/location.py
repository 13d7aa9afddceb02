from typing import TYPE_CHECKING, List, Optional, Sequence
from uuid import uuid4

from sqlalchemy import Boolean, String, Text, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column, relationship, selectinload

from core.db import Base, OrganizationMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from app.models.organization import Organization
    from app.models.resource import Resource


class Location(Base, TimestampMixin, SoftDeleteMixin, OrganizationMixin):
    """Physical site of an organization (a gym floor, a studio, a clinic)."""

    __tablename__ = "locations"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(20), nullable=False)
    country: Mapped[str] = mapped_column(String(2), default="US", nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    organization: Mapped["Organization"] = relationship(
        "Organization", back_populates="locations"
    )
    resources: Mapped[List["Resource"]] = relationship(
        "Resource", back_populates="location"
    )
    active_resources: Mapped[List["Resource"]] = relationship(
        "Resource",
        primaryjoin="and_(Location.id == Resource.location_id, "
        "Resource.is_active == True)",
        order_by="Resource.name",
        viewonly=True,
    )

    @classmethod
    async def get_for_organization(
        cls,
        db_session: AsyncSession,
        organization_id: str,
        id: str,
        include_inactive: bool = False,
    ) -> Optional["Location"]:
        """Get a location that belongs to the given organization."""
        query = select(cls).where(cls.id == id, cls.organization_id == organization_id)
        if not include_inactive:
            query = query.where(cls.is_active == True)
        result = await db_session.execute(
            query.options(selectinload(cls.active_resources)).execution_options(
                populate_existing=True
            )
        )
        return result.scalars().first()

    @classmethod
    async def get_active_by_organization(
        cls, db_session: AsyncSession, organization_id: str
    ) -> Sequence["Location"]:
        """Get all active locations of an organization ordered by name."""
        result = await db_session.execute(
            select(cls)
            .where(cls.organization_id == organization_id, cls.is_active == True)
            .options(selectinload(cls.active_resources))
            .order_by(cls.name)
        )
        return result.scalars().all()

    def __repr__(self) -> str:
        return f"Location(id={self.id}, name={self.name})"

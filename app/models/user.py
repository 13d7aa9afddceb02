import enum
from typing import TYPE_CHECKING, Iterable, Optional, Sequence
from uuid import uuid4

from sqlalchemy import Enum, Index, String, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base, OrganizationMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from app.models.organization import Organization


class Role(str, enum.Enum):
    """Roles a person can hold inside an organization."""
    ADMIN = "admin"
    STAFF = "staff"
    INSTRUCTOR = "instructor"
    MEMBER = "member"


# Roles that make up an organization's staff roster
STAFF_ROLES = (Role.ADMIN, Role.STAFF, Role.INSTRUCTOR)


class User(Base, TimestampMixin, SoftDeleteMixin, OrganizationMixin):
    """Member or staff record belonging to an organization."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    role: Mapped[Role] = mapped_column(
        Enum(Role, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        default=Role.MEMBER,
        nullable=False,
    )
    specialty: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    organization: Mapped["Organization"] = relationship(
        "Organization", back_populates="users"
    )

    __table_args__ = (
        Index(
            "ix_users_organization_email",
            "organization_id",
            "email",
            unique=True,
        ),
    )

    @property
    def full_name(self) -> str:
        """Get user's full name."""
        return f"{self.first_name} {self.last_name}".strip()

    @staticmethod
    def normalize_email(email: str) -> str:
        """Normalize emails so uniqueness checks are case-insensitive."""
        return email.strip().lower()

    @classmethod
    async def get_in_organization(
        cls, db_session: AsyncSession, organization_id: str, id: str
    ) -> Optional["User"]:
        """Get an active user that belongs to the given organization."""
        result = await db_session.execute(
            select(cls).where(
                cls.id == id,
                cls.organization_id == organization_id,
                cls.is_active == True,
            )
        )
        return result.scalars().first()

    @classmethod
    async def get_for_organization(
        cls,
        db_session: AsyncSession,
        organization_id: str,
        id: str,
        roles: Iterable[Role] = STAFF_ROLES,
        include_inactive: bool = False,
    ) -> Optional["User"]:
        """Get a user of the organization holding one of ``roles``."""
        query = select(cls).where(
            cls.id == id,
            cls.organization_id == organization_id,
            cls.role.in_(list(roles)),
        )
        if not include_inactive:
            query = query.where(cls.is_active == True)
        result = await db_session.execute(query.execution_options(populate_existing=True))
        return result.scalars().first()

    @classmethod
    async def get_by_email(
        cls,
        db_session: AsyncSession,
        organization_id: str,
        email: str,
        exclude_id: Optional[str] = None,
    ) -> Optional["User"]:
        """Find a user, active or not, by normalized email within an organization."""
        query = select(cls).where(
            cls.organization_id == organization_id,
            cls.email == cls.normalize_email(email),
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
        roles: Iterable[Role] = STAFF_ROLES,
    ) -> Sequence["User"]:
        """Get active users of an organization holding one of ``roles``, by name."""
        result = await db_session.execute(
            select(cls)
            .where(
                cls.organization_id == organization_id,
                cls.is_active == True,
                cls.role.in_(list(roles)),
            )
            .order_by(cls.last_name, cls.first_name)
        )
        return result.scalars().all()

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"

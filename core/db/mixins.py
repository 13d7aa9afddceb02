from datetime import datetime, timezone
from typing import Optional, TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, String, func, true
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

if TYPE_CHECKING:
    from app.models.organization import Organization


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamp columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )


class SoftDeleteMixin:
    """Mixin that adds soft delete semantics through the is_active flag.

    Rows are never removed; deactivation clears ``is_active`` and stamps
    ``deleted_at`` so the record can be restored later.
    """

    @declared_attr.directive
    def is_active(cls) -> Mapped[bool]:  # type: ignore[override]
        return mapped_column(
            Boolean,
            default=True,
            server_default=true(),
            nullable=False,
            index=True,
        )

    @declared_attr.directive
    def deleted_at(cls) -> Mapped[Optional[datetime]]:  # type: ignore[override]
        return mapped_column(DateTime(timezone=True), nullable=True)

    def soft_delete(self) -> None:
        """Mark the record inactive without removing it."""
        self.is_active = False
        self.deleted_at = datetime.now(timezone.utc)

    def restore(self) -> None:
        """Reactivate a previously soft-deleted record."""
        self.is_active = True
        self.deleted_at = None

    def set_active(self, active: bool) -> None:
        """Restore or soft delete depending on the flag."""
        if active:
            self.restore()
        elif self.is_active:
            self.soft_delete()


class OrganizationMixin:
    """Mixin that adds multi-tenant organization scoping."""

    @declared_attr.directive
    def organization_id(cls) -> Mapped[str]:  # type: ignore[override]
        return mapped_column(
            String(36),
            ForeignKey("organizations.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


__all__ = ["TimestampMixin", "SoftDeleteMixin", "OrganizationMixin"]

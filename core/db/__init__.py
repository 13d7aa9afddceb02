from core.db.base import Base
from core.db.mixins import OrganizationMixin, SoftDeleteMixin, TimestampMixin
from core.db.session import engine, get_db

__all__ = [
    "Base",
    "OrganizationMixin",
    "SoftDeleteMixin",
    "TimestampMixin",
    "engine",
    "get_db",
]

"""Staff roster management: admins, front-desk staff and instructors."""

from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import STAFF_ROLES, Role, User
from app.schemas.user import StaffCreate, StaffUpdate
from app.services.organization_service import OrganizationService
from app.utils.errors import is_unique_violation, service_operation
from core.exceptions.base import ConflictException, NotFoundException
from core.logging import get_logger

logger = get_logger(__name__)

EMAIL_CONFLICT = "Email already exists in this organization"


class StaffService:
    """Service for the staff members of an organization."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session
        self.organization_service = OrganizationService(db_session)

    async def get_staff(
        self, organization_id: str, user_id: str, include_inactive: bool = False
    ) -> User:
        """
        Get an active staff member of the organization.

        Raises:
            NotFoundException: Organization missing, or the user is not an
                active staff member of it
        """
        await self.organization_service.ensure_exists(organization_id)

        user = await User.get_for_organization(
            self.db_session, organization_id, user_id, include_inactive=include_inactive
        )
        if not user:
            raise NotFoundException("Staff member not found")
        return user

    async def list_staff(
        self, organization_id: str, role: Optional[Role] = None
    ) -> Sequence[User]:
        """List active staff ordered by last then first name."""
        await self.organization_service.ensure_exists(organization_id)
        return await User.get_active_by_organization(
            self.db_session, organization_id, roles=(role,) if role else STAFF_ROLES
        )

    async def _commit(self) -> None:
        try:
            await self.db_session.commit()
        except IntegrityError as e:
            if is_unique_violation(e, "ix_users_organization_email", "users.email"):
                raise ConflictException(EMAIL_CONFLICT) from e
            raise

    async def create_staff(self, organization_id: str, data: StaffCreate) -> User:
        """
        Add a staff member.

        Raises:
            NotFoundException: Organization not found
            ConflictException: Email already used by any user of the organization
        """
        async with service_operation(self.db_session, "Failed to create staff member"):
            await self.organization_service.ensure_exists(organization_id)

            if await User.get_by_email(self.db_session, organization_id, data.email):
                raise ConflictException(EMAIL_CONFLICT)

            values = data.model_dump()
            values["email"] = User.normalize_email(data.email)
            user = User(organization_id=organization_id, **values)
            self.db_session.add(user)
            await self._commit()

        logger.info(f"Created {user.role.value} {user.id} for organization {organization_id}")
        return await self.get_staff(organization_id, user.id)

    async def update_staff(
        self, organization_id: str, user_id: str, data: StaffUpdate
    ) -> User:
        """Apply a partial update to a staff member, re-checking a changed email."""
        async with service_operation(self.db_session, "Failed to update staff member"):
            user = await self.get_staff(organization_id, user_id)

            values = data.model_dump(exclude_unset=True)
            if "email" in values:
                values["email"] = User.normalize_email(values["email"])
                if values["email"] != user.email and await User.get_by_email(
                    self.db_session, organization_id, values["email"], exclude_id=user_id
                ):
                    raise ConflictException(EMAIL_CONFLICT)

            is_active = values.pop("is_active", None)
            for field, value in values.items():
                setattr(user, field, value)
            if is_active is not None:
                user.set_active(is_active)

            await self._commit()

        logger.info(f"Updated staff member {user_id}")
        return await self.get_staff(organization_id, user_id, include_inactive=True)

    async def delete_staff(self, organization_id: str, user_id: str) -> None:
        """Soft delete a staff member. Services keep their instructor references."""
        async with service_operation(self.db_session, "Failed to delete staff member"):
            user = await self.get_staff(organization_id, user_id)
            user.soft_delete()
            await self.db_session.commit()

        logger.info(f"Soft deleted staff member {user_id}")

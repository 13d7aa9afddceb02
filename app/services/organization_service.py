"""Organization management: tenant CRUD, cascade soft delete and settings."""

from typing import Dict, Iterable, Optional, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.location import Location
from app.models.organization import DEFAULT_SETTINGS, Organization, OrganizationSettings
from app.models.resource import Resource
from app.models.service import Service
from app.models.user import User
from app.schemas.organization import (
    OrganizationCounts,
    OrganizationCreate,
    OrganizationUpdate,
)
from app.schemas.settings import OrganizationSettingsUpdate
from app.utils.errors import is_unique_violation, service_operation
from core.exceptions.base import ConflictException, NotFoundException
from core.logging import get_logger

logger = get_logger(__name__)


class OrganizationService:
    """Service for managing organizations and their settings."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def get_organization(self, organization_id: str) -> Organization:
        """
        Get an organization by ID, active or not.

        Raises:
            NotFoundException: Organization does not exist
        """
        organization = await Organization.get_by_id(self.db_session, organization_id)
        if not organization:
            raise NotFoundException("Organization not found")
        return organization

    async def ensure_exists(self, organization_id: str) -> None:
        """Raise NotFoundException unless the organization exists."""
        if not await Organization.exists(self.db_session, organization_id):
            raise NotFoundException("Organization not found")

    async def get_organization_by_slug(self, slug: str) -> Organization:
        """Get an organization by its slug."""
        organization = await Organization.get_by_slug(self.db_session, slug)
        if not organization:
            raise NotFoundException("Organization not found")
        return organization

    async def list_organizations(
        self, is_active: Optional[bool] = None
    ) -> Sequence[Organization]:
        """List organizations, newest first."""
        return await Organization.get_all(self.db_session, is_active=is_active)

    async def create_organization(self, data: OrganizationCreate) -> Organization:
        """
        Create an organization together with its default settings.

        Raises:
            ConflictException: Slug is already taken (by any organization)
            BadRequestException: Any other failure while persisting
        """
        async with service_operation(self.db_session, "Failed to create organization"):
            if await Organization.slug_exists(self.db_session, data.slug):
                raise ConflictException("Organization slug already exists")

            organization = Organization(**data.model_dump())
            organization.settings = OrganizationSettings(**DEFAULT_SETTINGS)
            self.db_session.add(organization)
            try:
                await self.db_session.commit()
            except IntegrityError as e:
                # A concurrent create took the slug after the check above
                if is_unique_violation(e, "uq_organizations_slug", "organizations.slug"):
                    logger.warning(f"Slug {data.slug} taken concurrently")
                    raise ConflictException("Organization slug already exists") from e
                raise

        logger.info(f"Created organization {organization.id} ({organization.slug})")
        return await self.get_organization(organization.id)

    async def update_organization(
        self, organization_id: str, data: OrganizationUpdate
    ) -> Organization:
        """
        Apply a partial update to an organization.

        Setting ``is_active`` to false on an active organization deactivates
        its facilities exactly as ``delete_organization`` does.
        """
        async with service_operation(self.db_session, "Failed to update organization"):
            organization = await self.get_organization(organization_id)

            values = data.model_dump(exclude_unset=True)
            is_active = values.pop("is_active", None)
            for field, value in values.items():
                setattr(organization, field, value)
            if is_active is False and organization.is_active:
                await self._deactivate(organization)
            elif is_active is not None:
                organization.set_active(is_active)

            await self.db_session.commit()

        logger.info(f"Updated organization {organization_id}")
        return await self.get_organization(organization_id)

    async def delete_organization(self, organization_id: str) -> Organization:
        """
        Soft delete an organization.

        The organization row is kept with ``is_active`` cleared; its
        locations, resources and services are deactivated alongside it.
        """
        async with service_operation(self.db_session, "Failed to delete organization"):
            organization = await self.get_organization(organization_id)
            await self._deactivate(organization)
            await self.db_session.commit()

        logger.info(f"Soft deleted organization {organization_id} and its facilities")
        return organization

    async def _deactivate(self, organization: Organization) -> None:
        """Soft delete the organization and its active locations, resources and services."""
        organization.soft_delete()

        for model in (Location, Resource, Service):
            await self.db_session.execute(
                update(model)
                .where(
                    model.organization_id == organization.id,
                    model.is_active == True,
                )
                .values(is_active=False, deleted_at=organization.deleted_at)
                .execution_options(synchronize_session=False)
            )

    async def get_counts(
        self, organization_ids: Iterable[str]
    ) -> Dict[str, OrganizationCounts]:
        """Count users, locations, resources and services per organization."""
        ids = list(organization_ids)
        counts = {org_id: OrganizationCounts() for org_id in ids}
        if not ids:
            return counts

        for field, model in (
            ("users", User),
            ("locations", Location),
            ("resources", Resource),
            ("services", Service),
        ):
            result = await self.db_session.execute(
                select(model.organization_id, func.count(model.id))
                .where(model.organization_id.in_(ids))
                .group_by(model.organization_id)
            )
            for org_id, total in result.all():
                setattr(counts[org_id], field, total)

        return counts

    async def get_settings(self, organization_id: str) -> OrganizationSettings:
        """
        Get the settings of an organization.

        Raises:
            NotFoundException: Organization or its settings do not exist
        """
        await self.ensure_exists(organization_id)

        settings = await OrganizationSettings.get_by_organization(
            self.db_session, organization_id
        )
        if not settings:
            raise NotFoundException("Organization settings not found")
        return settings

    async def update_settings(
        self, organization_id: str, data: OrganizationSettingsUpdate
    ) -> OrganizationSettings:
        """
        Upsert organization settings.

        Supplied fields overwrite existing values. When the organization has
        no settings yet, a record is created from the supplied fields merged
        onto the organization ID; unsupplied fields take column defaults.
        """
        async with service_operation(
            self.db_session, "Failed to update organization settings"
        ):
            await self.ensure_exists(organization_id)

            # business_hours is nested; dump it to plain dicts for the JSON column
            values = data.model_dump(exclude_unset=True)

            settings = await OrganizationSettings.get_by_organization(
                self.db_session, organization_id
            )
            if settings is None:
                settings = OrganizationSettings(organization_id=organization_id, **values)
                self.db_session.add(settings)
                logger.info(f"Creating settings for organization {organization_id}")
            else:
                for field, value in values.items():
                    setattr(settings, field, value)

            await self.db_session.commit()

        return await self.get_settings(organization_id)

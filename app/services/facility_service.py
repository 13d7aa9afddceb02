"""Facility management: locations and the rooms/equipment inside them."""

from typing import Optional, Sequence

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.location import Location
from app.models.resource import Resource, ResourceType
from app.schemas.location import LocationCreate, LocationUpdate
from app.schemas.resource import ResourceCreate, ResourceUpdate
from app.services.organization_service import OrganizationService
from app.utils.errors import service_operation
from core.exceptions.base import NotFoundException
from core.logging import get_logger

logger = get_logger(__name__)


class FacilityService:
    """Service for organization-scoped locations and resources."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session
        self.organization_service = OrganizationService(db_session)

    # Locations

    async def get_location(
        self, organization_id: str, location_id: str, include_inactive: bool = False
    ) -> Location:
        """
        Get a location owned by the organization, active only unless asked.

        Raises:
            NotFoundException: Location missing, inactive or owned by another organization
        """
        location = await Location.get_for_organization(
            self.db_session, organization_id, location_id, include_inactive
        )
        if not location:
            raise NotFoundException("Location not found")
        return location

    async def list_locations(self, organization_id: str) -> Sequence[Location]:
        """List active locations of an organization ordered by name."""
        await self.organization_service.ensure_exists(organization_id)
        return await Location.get_active_by_organization(self.db_session, organization_id)

    async def create_location(
        self, organization_id: str, data: LocationCreate
    ) -> Location:
        """Create a location for an organization."""
        async with service_operation(self.db_session, "Failed to create location"):
            await self.organization_service.ensure_exists(organization_id)

            location = Location(organization_id=organization_id, **data.model_dump())
            self.db_session.add(location)
            await self.db_session.commit()

        logger.info(f"Created location {location.id} for organization {organization_id}")
        return await self.get_location(organization_id, location.id)

    async def update_location(
        self, organization_id: str, location_id: str, data: LocationUpdate
    ) -> Location:
        """
        Apply a partial update to a location.

        Deactivating through ``is_active`` also deactivates the resources
        placed in the location, as ``delete_location`` does.
        """
        async with service_operation(self.db_session, "Failed to update location"):
            location = await self.get_location(organization_id, location_id)

            values = data.model_dump(exclude_unset=True)
            is_active = values.pop("is_active", None)
            for field, value in values.items():
                setattr(location, field, value)
            if is_active is False:
                await self._deactivate_location(location)
            elif is_active is not None:
                location.set_active(is_active)

            await self.db_session.commit()

        logger.info(f"Updated location {location_id}")
        return await self.get_location(organization_id, location_id, include_inactive=True)

    async def delete_location(self, organization_id: str, location_id: str) -> None:
        """Soft delete a location and the resources placed in it."""
        async with service_operation(self.db_session, "Failed to delete location"):
            location = await self.get_location(organization_id, location_id)
            await self._deactivate_location(location)
            await self.db_session.commit()

        logger.info(f"Soft deleted location {location_id}")

    async def _deactivate_location(self, location: Location) -> None:
        location.soft_delete()

        await self.db_session.execute(
            update(Resource)
            .where(Resource.location_id == location.id, Resource.is_active == True)
            .values(is_active=False, deleted_at=location.deleted_at)
            .execution_options(synchronize_session=False)
        )

    # Resources

    async def get_resource(
        self, organization_id: str, resource_id: str, include_inactive: bool = False
    ) -> Resource:
        """Get a resource owned by the organization, active only unless asked."""
        resource = await Resource.get_for_organization(
            self.db_session, organization_id, resource_id, include_inactive
        )
        if not resource:
            raise NotFoundException("Resource not found")
        return resource

    async def list_resources(
        self,
        organization_id: str,
        type: Optional[ResourceType] = None,
        location_id: Optional[str] = None,
    ) -> Sequence[Resource]:
        """List active resources ordered by type then name."""
        await self.organization_service.ensure_exists(organization_id)
        return await Resource.get_active_by_organization(
            self.db_session, organization_id, type=type, location_id=location_id
        )

    async def create_resource(
        self, organization_id: str, data: ResourceCreate
    ) -> Resource:
        """
        Create a resource, optionally placed in a location.

        Raises:
            NotFoundException: Organization missing, or location_id does not
                name an active location of the same organization
        """
        async with service_operation(self.db_session, "Failed to create resource"):
            await self.organization_service.ensure_exists(organization_id)
            if data.location_id:
                await self.get_location(organization_id, data.location_id)

            resource = Resource(organization_id=organization_id, **data.model_dump())
            self.db_session.add(resource)
            await self.db_session.commit()

        logger.info(f"Created resource {resource.id} for organization {organization_id}")
        return await self.get_resource(organization_id, resource.id)

    async def update_resource(
        self, organization_id: str, resource_id: str, data: ResourceUpdate
    ) -> Resource:
        """Apply a partial update to a resource, re-checking any new location."""
        async with service_operation(self.db_session, "Failed to update resource"):
            resource = await self.get_resource(organization_id, resource_id)
            if data.location_id:
                await self.get_location(organization_id, data.location_id)

            values = data.model_dump(exclude_unset=True)
            is_active = values.pop("is_active", None)
            for field, value in values.items():
                setattr(resource, field, value)
            if is_active is not None:
                resource.set_active(is_active)

            await self.db_session.commit()

        logger.info(f"Updated resource {resource_id}")
        return await self.get_resource(organization_id, resource_id, include_inactive=True)

    async def delete_resource(self, organization_id: str, resource_id: str) -> None:
        """Soft delete a resource."""
        async with service_operation(self.db_session, "Failed to delete resource"):
            resource = await self.get_resource(organization_id, resource_id)
            resource.soft_delete()
            await self.db_session.commit()

        logger.info(f"Soft deleted resource {resource_id}")

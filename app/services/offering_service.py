"""Service catalog management: classes, appointments, workshops and PT sessions."""

from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.booking import Booking
from app.models.resource import Resource
from app.models.service import Service, ServiceType
from app.models.user import User
from app.schemas.service import ServiceCreate, ServiceUpdate
from app.services.facility_service import FacilityService
from app.services.organization_service import OrganizationService
from app.utils.errors import service_operation
from core.exceptions.base import BadRequestException, ConflictException, NotFoundException
from core.logging import get_logger

logger = get_logger(__name__)


class OfferingService:
    """Service for the bookable offerings of an organization."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session
        self.organization_service = OrganizationService(db_session)
        self.facility_service = FacilityService(db_session)

    async def get_service(
        self, organization_id: str, service_id: str, include_inactive: bool = False
    ) -> Service:
        """
        Get a service owned by the organization, active only unless asked.

        Raises:
            NotFoundException: Organization or service not found
        """
        await self.organization_service.ensure_exists(organization_id)

        service = await Service.get_for_organization(
            self.db_session, organization_id, service_id, include_inactive
        )
        if not service:
            raise NotFoundException("Service not found")
        return service

    async def list_services(
        self, organization_id: str, type: Optional[ServiceType] = None
    ) -> Sequence[Service]:
        """List active services ordered by name, optionally of one type."""
        await self.organization_service.ensure_exists(organization_id)
        return await Service.get_active_by_organization(
            self.db_session, organization_id, type=type
        )

    async def _validate_references(
        self,
        organization_id: str,
        location_id: Optional[str],
        instructor_ids: Sequence[Optional[str]],
        resource_ids: Optional[Sequence[str]],
    ) -> None:
        """Check that referenced location, instructors and resources belong to the organization."""
        if location_id:
            await self.facility_service.get_location(organization_id, location_id)

        for instructor_id in instructor_ids:
            if instructor_id and not await User.get_in_organization(
                self.db_session, organization_id, instructor_id
            ):
                raise NotFoundException("Instructor not found")

        if resource_ids:
            found = await Resource.count_active_in(
                self.db_session, organization_id, resource_ids
            )
            if found != len(set(resource_ids)):
                raise BadRequestException("One or more resource IDs are invalid")

    async def create_service(self, organization_id: str, data: ServiceCreate) -> Service:
        """
        Create a service.

        Raises:
            NotFoundException: Organization, location or instructor not found
            ConflictException: Name already used in this organization
            BadRequestException: Unknown resource IDs, or any persistence failure
        """
        async with service_operation(self.db_session, "Failed to create service"):
            await self.organization_service.ensure_exists(organization_id)

            if await Service.get_by_name(self.db_session, organization_id, data.name):
                raise ConflictException(
                    "Service name already exists in this organization"
                )

            await self._validate_references(
                organization_id,
                data.location_id,
                (data.primary_instructor_id, data.assistant_instructor_id),
                data.resource_ids,
            )

            service = Service(organization_id=organization_id, **data.model_dump())
            self.db_session.add(service)
            await self.db_session.commit()

        logger.info(f"Created service {service.id} ({service.type.value}) for organization {organization_id}")
        return await self.get_service(organization_id, service.id)

    async def update_service(
        self, organization_id: str, service_id: str, data: ServiceUpdate
    ) -> Service:
        """Apply a partial update to a service, re-checking name and references."""
        async with service_operation(self.db_session, "Failed to update service"):
            service = await self.get_service(organization_id, service_id)

            if data.name and data.name != service.name:
                if await Service.get_by_name(
                    self.db_session, organization_id, data.name, exclude_id=service_id
                ):
                    raise ConflictException(
                        "Service name already exists in this organization"
                    )

            await self._validate_references(
                organization_id,
                data.location_id,
                (data.primary_instructor_id, data.assistant_instructor_id),
                data.resource_ids,
            )

            values = data.model_dump(exclude_unset=True)
            is_active = values.pop("is_active", None)
            for field, value in values.items():
                setattr(service, field, value)
            if is_active is not None:
                service.set_active(is_active)

            await self.db_session.commit()

        logger.info(f"Updated service {service_id}")
        return await self.get_service(organization_id, service_id, include_inactive=True)

    async def delete_service(self, organization_id: str, service_id: str) -> None:
        """
        Soft delete a service.

        Raises:
            BadRequestException: The service is referenced by bookings
        """
        service = await self.get_service(organization_id, service_id)

        if await Booking.exists_for_service(self.db_session, service_id):
            raise BadRequestException(
                "Cannot delete service that has existing bookings. "
                "Consider deactivating instead."
            )

        service.soft_delete()
        await self.db_session.commit()
        logger.info(f"Soft deleted service {service_id}")

"""Service catalog API endpoints: classes, appointments, workshops."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.service import ServiceType
from app.schemas.service import ServiceCreate, ServiceResponse, ServiceUpdate
from app.services.offering_service import OfferingService
from core.db import get_db
from core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/organizations", tags=["Services"])


@router.post(
    "/{organization_id}/services",
    response_model=ServiceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_service(
    organization_id: str,
    data: ServiceCreate,
    db_session: AsyncSession = Depends(get_db),
) -> ServiceResponse:
    """
    Create a service.

    Validates:
    - Name is unique within the organization (409)
    - Location and instructors belong to the organization (404)
    - All resource IDs are active resources of the organization (400)
    """
    logger.info(f"Create service request for organization: {organization_id}")

    service = OfferingService(db_session)
    offering = await service.create_service(organization_id, data)

    return ServiceResponse.model_validate(offering)


@router.get("/{organization_id}/services", response_model=list[ServiceResponse])
async def list_services(
    organization_id: str,
    db_session: AsyncSession = Depends(get_db),
) -> list[ServiceResponse]:
    """List active services ordered by name."""
    service = OfferingService(db_session)
    offerings = await service.list_services(organization_id)

    return [ServiceResponse.model_validate(s) for s in offerings]


@router.get(
    "/{organization_id}/services/type/{service_type}",
    response_model=list[ServiceResponse],
)
async def list_services_by_type(
    organization_id: str,
    service_type: ServiceType,
    db_session: AsyncSession = Depends(get_db),
) -> list[ServiceResponse]:
    """List active services of one type ordered by name."""
    service = OfferingService(db_session)
    offerings = await service.list_services(organization_id, type=service_type)

    return [ServiceResponse.model_validate(s) for s in offerings]


@router.get(
    "/{organization_id}/services/{service_id}", response_model=ServiceResponse
)
async def get_service(
    organization_id: str,
    service_id: str,
    db_session: AsyncSession = Depends(get_db),
) -> ServiceResponse:
    """Get an active service of the organization."""
    service = OfferingService(db_session)
    offering = await service.get_service(organization_id, service_id)

    return ServiceResponse.model_validate(offering)


@router.patch(
    "/{organization_id}/services/{service_id}", response_model=ServiceResponse
)
async def update_service(
    organization_id: str,
    service_id: str,
    data: ServiceUpdate,
    db_session: AsyncSession = Depends(get_db),
) -> ServiceResponse:
    """Update a service."""
    service = OfferingService(db_session)
    offering = await service.update_service(organization_id, service_id, data)

    return ServiceResponse.model_validate(offering)


@router.delete(
    "/{organization_id}/services/{service_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_service(
    organization_id: str,
    service_id: str,
    db_session: AsyncSession = Depends(get_db),
) -> None:
    """
    Soft delete a service.

    Services with bookings cannot be deleted; deactivate them instead.
    """
    logger.info(f"Delete service request: {service_id}")

    service = OfferingService(db_session)
    await service.delete_service(organization_id, service_id)

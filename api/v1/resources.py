"""Resource (rooms and equipment) API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.resource import ResourceType
from app.schemas.resource import ResourceCreate, ResourceResponse, ResourceUpdate
from app.services.facility_service import FacilityService
from core.db import get_db
from core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/organizations", tags=["Resources"])


@router.post(
    "/{organization_id}/resources",
    response_model=ResourceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_resource(
    organization_id: str,
    data: ResourceCreate,
    db_session: AsyncSession = Depends(get_db),
) -> ResourceResponse:
    """
    Create a room or piece of equipment.

    If a location is given it must be an active location of the same
    organization.
    """
    logger.info(f"Create resource request for organization: {organization_id}")

    service = FacilityService(db_session)
    resource = await service.create_resource(organization_id, data)

    return ResourceResponse.model_validate(resource)


@router.get("/{organization_id}/resources", response_model=list[ResourceResponse])
async def list_resources(
    organization_id: str,
    type: Optional[ResourceType] = Query(None),
    location_id: Optional[str] = Query(None),
    db_session: AsyncSession = Depends(get_db),
) -> list[ResourceResponse]:
    """List active resources ordered by type then name."""
    service = FacilityService(db_session)
    resources = await service.list_resources(
        organization_id, type=type, location_id=location_id
    )

    return [ResourceResponse.model_validate(r) for r in resources]


@router.get(
    "/{organization_id}/resources/{resource_id}", response_model=ResourceResponse
)
async def get_resource(
    organization_id: str,
    resource_id: str,
    db_session: AsyncSession = Depends(get_db),
) -> ResourceResponse:
    """Get an active resource of the organization."""
    service = FacilityService(db_session)
    resource = await service.get_resource(organization_id, resource_id)

    return ResourceResponse.model_validate(resource)


@router.patch(
    "/{organization_id}/resources/{resource_id}", response_model=ResourceResponse
)
async def update_resource(
    organization_id: str,
    resource_id: str,
    data: ResourceUpdate,
    db_session: AsyncSession = Depends(get_db),
) -> ResourceResponse:
    """Update a resource."""
    service = FacilityService(db_session)
    resource = await service.update_resource(organization_id, resource_id, data)

    return ResourceResponse.model_validate(resource)


@router.delete(
    "/{organization_id}/resources/{resource_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_resource(
    organization_id: str,
    resource_id: str,
    db_session: AsyncSession = Depends(get_db),
) -> None:
    """Soft delete a resource."""
    service = FacilityService(db_session)
    await service.delete_resource(organization_id, resource_id)

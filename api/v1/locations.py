"""Location API endpoints, nested under an organization."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.location import LocationCreate, LocationResponse, LocationUpdate
from app.services.facility_service import FacilityService
from core.db import get_db
from core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/organizations", tags=["Locations"])


@router.post(
    "/{organization_id}/locations",
    response_model=LocationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_location(
    organization_id: str,
    data: LocationCreate,
    db_session: AsyncSession = Depends(get_db),
) -> LocationResponse:
    """Create a location for an organization."""
    logger.info(f"Create location request for organization: {organization_id}")

    service = FacilityService(db_session)
    location = await service.create_location(organization_id, data)

    return LocationResponse.model_validate(location)


@router.get("/{organization_id}/locations", response_model=list[LocationResponse])
async def list_locations(
    organization_id: str,
    db_session: AsyncSession = Depends(get_db),
) -> list[LocationResponse]:
    """List active locations ordered by name, each with its active resources."""
    service = FacilityService(db_session)
    locations = await service.list_locations(organization_id)

    return [LocationResponse.model_validate(loc) for loc in locations]


@router.get(
    "/{organization_id}/locations/{location_id}", response_model=LocationResponse
)
async def get_location(
    organization_id: str,
    location_id: str,
    db_session: AsyncSession = Depends(get_db),
) -> LocationResponse:
    """Get an active location of the organization."""
    service = FacilityService(db_session)
    location = await service.get_location(organization_id, location_id)

    return LocationResponse.model_validate(location)


@router.patch(
    "/{organization_id}/locations/{location_id}", response_model=LocationResponse
)
async def update_location(
    organization_id: str,
    location_id: str,
    data: LocationUpdate,
    db_session: AsyncSession = Depends(get_db),
) -> LocationResponse:
    """Update a location."""
    service = FacilityService(db_session)
    location = await service.update_location(organization_id, location_id, data)

    return LocationResponse.model_validate(location)


@router.delete(
    "/{organization_id}/locations/{location_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_location(
    organization_id: str,
    location_id: str,
    db_session: AsyncSession = Depends(get_db),
) -> None:
    """Soft delete a location together with the resources inside it."""
    logger.info(f"Delete location request: {location_id}")

    service = FacilityService(db_session)
    await service.delete_location(organization_id, location_id)

"""Organization API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.organization import Organization
from app.schemas.organization import (
    OrganizationCounts,
    OrganizationCreate,
    OrganizationResponse,
    OrganizationUpdate,
)
from app.services.organization_service import OrganizationService
from core.db import get_db
from core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/organizations", tags=["Organizations"])


def organization_to_response(
    organization: Organization, counts: Optional[OrganizationCounts] = None
) -> OrganizationResponse:
    """Convert Organization model to response, attaching counts when known."""
    response = OrganizationResponse.model_validate(organization)
    if counts is not None:
        response = response.model_copy(update={"counts": counts})
    return response


async def _with_counts(
    service: OrganizationService, organization: Organization
) -> OrganizationResponse:
    counts = await service.get_counts([organization.id])
    return organization_to_response(organization, counts[organization.id])


@router.post(
    "/", response_model=OrganizationResponse, status_code=status.HTTP_201_CREATED
)
async def create_organization(
    data: OrganizationCreate,
    db_session: AsyncSession = Depends(get_db),
) -> OrganizationResponse:
    """
    Create a new organization.

    Default settings are created in the same transaction.
    Returns 409 if the slug is already in use.
    """
    logger.info(f"Create organization request: {data.slug}")

    service = OrganizationService(db_session)
    organization = await service.create_organization(data)

    return organization_to_response(organization)


@router.get("/", response_model=list[OrganizationResponse])
async def list_organizations(
    is_active: Optional[bool] = Query(None),
    db_session: AsyncSession = Depends(get_db),
) -> list[OrganizationResponse]:
    """
    List organizations, newest first.

    Each entry includes settings, active locations and resources, and
    counts of related records. Optionally filter by active status.
    """
    service = OrganizationService(db_session)
    organizations = await service.list_organizations(is_active=is_active)
    counts = await service.get_counts(o.id for o in organizations)

    return [organization_to_response(o, counts[o.id]) for o in organizations]


@router.get("/slug/{slug}", response_model=OrganizationResponse)
async def get_organization_by_slug(
    slug: str,
    db_session: AsyncSession = Depends(get_db),
) -> OrganizationResponse:
    """Get organization by slug."""
    service = OrganizationService(db_session)
    organization = await service.get_organization_by_slug(slug)

    return await _with_counts(service, organization)


@router.get("/{organization_id}", response_model=OrganizationResponse)
async def get_organization(
    organization_id: str,
    db_session: AsyncSession = Depends(get_db),
) -> OrganizationResponse:
    """Get organization by ID."""
    service = OrganizationService(db_session)
    organization = await service.get_organization(organization_id)

    return await _with_counts(service, organization)


@router.patch("/{organization_id}", response_model=OrganizationResponse)
async def update_organization(
    organization_id: str,
    data: OrganizationUpdate,
    db_session: AsyncSession = Depends(get_db),
) -> OrganizationResponse:
    """Update an organization. The slug cannot be changed."""
    logger.info(f"Update organization request: {organization_id}")

    service = OrganizationService(db_session)
    organization = await service.update_organization(organization_id, data)

    return organization_to_response(organization)


@router.delete("/{organization_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_organization(
    organization_id: str,
    db_session: AsyncSession = Depends(get_db),
) -> None:
    """
    Soft delete an organization.

    The record is kept but marked inactive, and its locations, resources
    and services are deactivated with it.
    """
    logger.info(f"Delete organization request: {organization_id}")

    service = OrganizationService(db_session)
    await service.delete_organization(organization_id)

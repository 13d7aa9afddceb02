"""Organization settings API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.settings import (
    OrganizationSettingsResponse,
    OrganizationSettingsUpdate,
)
from app.services.organization_service import OrganizationService
from core.db import get_db
from core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/organizations", tags=["Organization Settings"])


@router.get(
    "/{organization_id}/settings", response_model=OrganizationSettingsResponse
)
async def get_settings(
    organization_id: str,
    db_session: AsyncSession = Depends(get_db),
) -> OrganizationSettingsResponse:
    """Get booking policy, notification and branding settings."""
    service = OrganizationService(db_session)
    settings = await service.get_settings(organization_id)

    return OrganizationSettingsResponse.model_validate(settings)


@router.patch(
    "/{organization_id}/settings", response_model=OrganizationSettingsResponse
)
async def update_settings(
    organization_id: str,
    data: OrganizationSettingsUpdate,
    db_session: AsyncSession = Depends(get_db),
) -> OrganizationSettingsResponse:
    """
    Update organization settings.

    Only supplied fields change. If the organization has no settings
    record yet, one is created.
    """
    logger.info(f"Update settings request for organization: {organization_id}")

    service = OrganizationService(db_session)
    settings = await service.update_settings(organization_id, data)

    return OrganizationSettingsResponse.model_validate(settings)

"""Staff roster API endpoints, nested under an organization."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import Role
from app.schemas.user import StaffCreate, StaffResponse, StaffUpdate
from app.services.staff_service import StaffService
from core.db import get_db
from core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/organizations", tags=["Staff"])


@router.post(
    "/{organization_id}/staff",
    response_model=StaffResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_staff(
    organization_id: str,
    data: StaffCreate,
    db_session: AsyncSession = Depends(get_db),
) -> StaffResponse:
    """
    Add a staff member or instructor.

    Emails are unique per organization, case-insensitively (409).
    """
    logger.info(f"Create staff request for organization: {organization_id}")

    service = StaffService(db_session)
    user = await service.create_staff(organization_id, data)

    return StaffResponse.model_validate(user)


@router.get("/{organization_id}/staff", response_model=list[StaffResponse])
async def list_staff(
    organization_id: str,
    role: Optional[Role] = Query(None, description="Only staff holding this role"),
    db_session: AsyncSession = Depends(get_db),
) -> list[StaffResponse]:
    """List active staff ordered by name."""
    service = StaffService(db_session)
    users = await service.list_staff(organization_id, role=role)

    return [StaffResponse.model_validate(u) for u in users]


@router.get("/{organization_id}/staff/{user_id}", response_model=StaffResponse)
async def get_staff(
    organization_id: str,
    user_id: str,
    db_session: AsyncSession = Depends(get_db),
) -> StaffResponse:
    """Get an active staff member of the organization."""
    service = StaffService(db_session)
    user = await service.get_staff(organization_id, user_id)

    return StaffResponse.model_validate(user)


@router.patch("/{organization_id}/staff/{user_id}", response_model=StaffResponse)
async def update_staff(
    organization_id: str,
    user_id: str,
    data: StaffUpdate,
    db_session: AsyncSession = Depends(get_db),
) -> StaffResponse:
    """Update a staff member."""
    service = StaffService(db_session)
    user = await service.update_staff(organization_id, user_id, data)

    return StaffResponse.model_validate(user)


@router.delete(
    "/{organization_id}/staff/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_staff(
    organization_id: str,
    user_id: str,
    db_session: AsyncSession = Depends(get_db),
) -> None:
    """Soft delete a staff member."""
    logger.info(f"Delete staff request: {user_id}")

    service = StaffService(db_session)
    await service.delete_staff(organization_id, user_id)

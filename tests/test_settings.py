from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.organization import Organization, OrganizationSettings

pytestmark = pytest.mark.asyncio


def settings_url(organization_id: str) -> str:
    return f"/api/v1/organizations/{organization_id}/settings"


WEEKDAY_HOURS = [
    {"day_of_week": day, "open_time": "06:00", "close_time": "21:00", "is_open": True}
    for day in range(1, 6)
]


class TestGetSettings:
    """Tests for reading organization settings."""

    async def test_get_settings(
        self, client: AsyncClient, test_organization: Organization
    ):
        """Test default settings are returned."""
        response = await client.get(settings_url(test_organization.id))

        assert response.status_code == 200
        data = response.json()
        assert data["organization_id"] == test_organization.id
        assert data["waitlist_enabled"] is True
        assert data["default_class_duration"] == 60
        assert data["secondary_color"] == "#6c757d"
        assert data["time_format"] == "12h"

    async def test_get_settings_missing(
        self, client: AsyncClient, create_organization
    ):
        """Test an organization without settings answers 404."""
        organization = await create_organization(with_settings=False)

        response = await client.get(settings_url(organization.id))

        assert response.status_code == 404
        assert response.json()["message"] == "Organization settings not found"

    async def test_get_settings_organization_not_found(self, client: AsyncClient):
        """Test settings of a missing organization."""
        response = await client.get(settings_url("missing"))

        assert response.status_code == 404
        assert response.json()["message"] == "Organization not found"


class TestUpdateSettings:
    """Tests for updating organization settings."""

    async def test_update_settings(
        self, client: AsyncClient, test_organization: Organization
    ):
        """Test only supplied fields change."""
        response = await client.patch(
            settings_url(test_organization.id),
            json={
                "booking_window_days": 14,
                "primary_color": "#112233",
                "business_hours": WEEKDAY_HOURS,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["booking_window_days"] == 14
        assert data["primary_color"] == "#112233"
        assert data["cancellation_window_hours"] == 24
        assert len(data["business_hours"]) == 5
        assert data["business_hours"][0]["open_time"] == "06:00"

    async def test_update_settings_creates_missing_record(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        create_organization,
    ):
        """Test settings are created when the organization has none."""
        organization = await create_organization(with_settings=False)

        response = await client.patch(
            settings_url(organization.id),
            json={"reminder_hours": 2, "enable_payments": True},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["organization_id"] == organization.id
        assert data["reminder_hours"] == 2
        assert data["enable_payments"] is True
        assert data["booking_window_days"] == 30

        result = await db_session.execute(
            select(OrganizationSettings).where(
                OrganizationSettings.organization_id == organization.id
            )
        )
        assert len(result.scalars().all()) == 1

    async def test_update_settings_organization_not_found(self, client: AsyncClient):
        """Test updating settings of a missing organization."""
        response = await client.patch(
            settings_url("missing"), json={"booking_window_days": 7}
        )

        assert response.status_code == 404

    @pytest.mark.parametrize(
        "payload",
        [
            {"primary_color": "blue"},
            {"booking_window_days": 0},
            {"time_format": "military"},
            {"minimum_advance_booking": 120, "maximum_advance_booking": 60},
            {"booking_window_days": None},
            {"waitlist_enabled": None},
            {"time_format": None},
            {
                "business_hours": [
                    {"day_of_week": 7, "open_time": "08:00", "close_time": "17:00", "is_open": True}
                ]
            },
            {
                "business_hours": [
                    {"day_of_week": 1, "open_time": "8:00", "close_time": "17:00", "is_open": True}
                ]
            },
            {
                "business_hours": [
                    {"day_of_week": 1, "open_time": "18:00", "close_time": "09:00", "is_open": True}
                ]
            },
            {
                "business_hours": [
                    {"day_of_week": 2, "open_time": "08:00", "close_time": "12:00", "is_open": True},
                    {"day_of_week": 2, "open_time": "13:00", "close_time": "17:00", "is_open": True},
                ]
            },
        ],
    )
    async def test_update_settings_validation(
        self, client: AsyncClient, test_organization: Organization, payload: dict
    ):
        """Test settings validation rules."""
        response = await client.patch(settings_url(test_organization.id), json=payload)

        assert response.status_code == 422

    async def test_update_settings_clears_optional_fields(
        self, client: AsyncClient, test_organization: Organization
    ):
        """Test nullable settings may be cleared with null."""
        response = await client.patch(
            settings_url(test_organization.id),
            json={"max_waitlist_size": None, "logo_url": None},
        )

        assert response.status_code == 200
        assert response.json()["max_waitlist_size"] is None
        assert response.json()["waitlist_enabled"] is True

    async def test_closed_day_ignores_time_order(
        self, client: AsyncClient, test_organization: Organization
    ):
        """Test a closed day may carry placeholder times."""
        response = await client.patch(
            settings_url(test_organization.id),
            json={
                "business_hours": [
                    {"day_of_week": 0, "open_time": "00:00", "close_time": "00:00", "is_open": False}
                ]
            },
        )

        assert response.status_code == 200
        assert response.json()["business_hours"][0]["is_open"] is False

    async def test_update_settings_persistence_failure(
        self, client: AsyncClient, test_organization: Organization
    ):
        """Test a database error surfaces as a flat 400."""
        with patch.object(
            AsyncSession, "commit", new=AsyncMock(side_effect=SQLAlchemyError("database is locked"))
        ):
            response = await client.patch(
                settings_url(test_organization.id), json={"booking_window_days": 7}
            )

        assert response.status_code == 400
        assert response.json()["message"] == "Failed to update organization settings"

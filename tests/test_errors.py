from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError

from app.utils.errors import is_unique_violation, service_operation
from core.exceptions.base import BadRequestException, ConflictException, NotFoundException

pytestmark = pytest.mark.asyncio


class TestServiceOperation:
    """Tests for the service error-mapping context manager."""

    async def test_success_does_not_roll_back(self):
        session = AsyncMock()

        async with service_operation(session, "Failed to create thing"):
            pass

        session.rollback.assert_not_awaited()

    @pytest.mark.parametrize("exc_class", [NotFoundException, ConflictException])
    async def test_application_errors_propagate(self, exc_class):
        """Test not-found and conflict errors keep their type."""
        session = AsyncMock()

        with pytest.raises(exc_class):
            async with service_operation(session, "Failed to create thing"):
                raise exc_class("boom")

        session.rollback.assert_awaited_once()

    async def test_unexpected_error_becomes_bad_request(self):
        """Test any other error is flattened into the failure message."""
        session = AsyncMock()

        with pytest.raises(BadRequestException) as exc_info:
            async with service_operation(session, "Failed to create thing"):
                raise RuntimeError("driver exploded")

        assert exc_info.value.code == 400
        assert exc_info.value.message == "Failed to create thing"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        session.rollback.assert_awaited_once()


class TestIsUniqueViolation:
    """Tests for recognising unique-key failures."""

    @pytest.mark.parametrize(
        "message",
        [
            "UNIQUE constraint failed: organizations.slug",
            'duplicate key value violates unique constraint "uq_organizations_slug"',
        ],
    )
    async def test_matches_slug_constraint(self, message):
        error = IntegrityError("INSERT INTO organizations", {}, Exception(message))

        assert is_unique_violation(error, "uq_organizations_slug", "organizations.slug")

    async def test_ignores_other_constraints(self):
        error = IntegrityError(
            "INSERT INTO organizations", {}, Exception("NOT NULL constraint failed: organizations.name")
        )

        assert not is_unique_violation(error, "uq_organizations_slug", "organizations.slug")

    async def test_ignores_other_unique_keys(self):
        error = IntegrityError(
            "INSERT INTO users", {}, Exception("UNIQUE constraint failed: users.organization_id, users.email")
        )

        assert not is_unique_violation(error, "uq_organizations_slug", "organizations.slug")

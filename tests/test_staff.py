import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.organization import Organization
from app.models.service import Service
from app.models.user import Role, User

pytestmark = pytest.mark.asyncio


def staff_url(organization_id: str) -> str:
    return f"/api/v1/organizations/{organization_id}/staff"


class TestCreateStaff:
    """Tests for adding staff members."""

    async def test_create_staff(self, client: AsyncClient, test_organization: Organization):
        """Test an instructor is created with a normalized email."""
        response = await client.post(
            staff_url(test_organization.id),
            json={
                "email": "Maya.Patel@Example.com",
                "first_name": "Maya",
                "last_name": "Patel",
                "role": "instructor",
                "specialty": "Vinyasa",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "maya.patel@example.com"
        assert data["full_name"] == "Maya Patel"
        assert data["role"] == "instructor"
        assert data["organization_id"] == test_organization.id
        assert data["is_active"] is True

    async def test_create_staff_defaults_to_staff_role(
        self, client: AsyncClient, test_organization: Organization
    ):
        response = await client.post(
            staff_url(test_organization.id),
            json={"email": "desk@example.com", "first_name": "Dana", "last_name": "Lee"},
        )

        assert response.status_code == 201
        assert response.json()["role"] == "staff"

    async def test_create_staff_duplicate_email(
        self, client: AsyncClient, test_organization: Organization, test_instructor: User
    ):
        """Test emails are unique per organization regardless of case."""
        response = await client.post(
            staff_url(test_organization.id),
            json={"email": "COACH@example.com", "first_name": "Sam", "last_name": "Other"},
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Email already exists in this organization"

    async def test_create_staff_email_of_deleted_staff(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        test_organization: Organization,
        test_instructor: User,
    ):
        """Test a soft-deleted staff member still holds their email."""
        test_instructor.soft_delete()
        await db_session.commit()

        response = await client.post(
            staff_url(test_organization.id),
            json={"email": test_instructor.email, "first_name": "Sam", "last_name": "Rivera"},
        )

        assert response.status_code == 409

    async def test_create_staff_same_email_in_other_organization(
        self, client: AsyncClient, other_organization: Organization, test_instructor: User
    ):
        """Test the same email may be used by another organization."""
        response = await client.post(
            staff_url(other_organization.id),
            json={"email": test_instructor.email, "first_name": "Sam", "last_name": "Rivera"},
        )

        assert response.status_code == 201

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "member@example.com", "first_name": "M", "last_name": "B", "role": "member"},
            {"email": "not-an-email", "first_name": "M", "last_name": "B"},
            {"email": "x@example.com", "first_name": "", "last_name": "B"},
            {"email": "x@example.com", "first_name": "M", "last_name": "B", "password": "secret"},
        ],
    )
    async def test_create_staff_validation(
        self, client: AsyncClient, test_organization: Organization, payload: dict
    ):
        """Test member roles, bad emails, blank names and unknown fields are rejected."""
        response = await client.post(staff_url(test_organization.id), json=payload)

        assert response.status_code == 422

    async def test_create_staff_organization_not_found(self, client: AsyncClient):
        response = await client.post(
            staff_url("missing"),
            json={"email": "x@example.com", "first_name": "M", "last_name": "B"},
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Organization not found"


class TestListAndGetStaff:
    """Tests for reading the staff roster."""

    async def test_list_staff(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        test_organization: Organization,
        test_instructor: User,
    ):
        """Test active staff are listed by name while members and inactive staff are not."""
        db_session.add_all(
            [
                User(
                    organization_id=test_organization.id,
                    email="admin@example.com",
                    first_name="Alex",
                    last_name="Adams",
                    role=Role.ADMIN,
                ),
                User(
                    organization_id=test_organization.id,
                    email="member@example.com",
                    first_name="Morgan",
                    last_name="Baker",
                    role=Role.MEMBER,
                ),
                User(
                    organization_id=test_organization.id,
                    email="gone@example.com",
                    first_name="Gale",
                    last_name="Carter",
                    role=Role.STAFF,
                    is_active=False,
                ),
            ]
        )
        await db_session.commit()

        response = await client.get(staff_url(test_organization.id))

        assert response.status_code == 200
        assert [u["last_name"] for u in response.json()] == ["Adams", "Rivera"]

        response = await client.get(
            staff_url(test_organization.id), params={"role": "instructor"}
        )
        assert [u["id"] for u in response.json()] == [test_instructor.id]

    async def test_list_staff_organization_not_found(self, client: AsyncClient):
        response = await client.get(staff_url("missing"))

        assert response.status_code == 404

    async def test_get_staff(
        self, client: AsyncClient, test_organization: Organization, test_instructor: User
    ):
        response = await client.get(f"{staff_url(test_organization.id)}/{test_instructor.id}")

        assert response.status_code == 200
        assert response.json()["specialty"] == "Strength"

    async def test_get_staff_of_other_organization(
        self, client: AsyncClient, other_organization: Organization, test_instructor: User
    ):
        """Test staff cannot be read through another organization."""
        response = await client.get(f"{staff_url(other_organization.id)}/{test_instructor.id}")

        assert response.status_code == 404
        assert response.json()["message"] == "Staff member not found"

    async def test_get_member_is_not_staff(
        self, client: AsyncClient, db_session: AsyncSession, test_organization: Organization
    ):
        member = User(
            organization_id=test_organization.id,
            email="member@example.com",
            first_name="Morgan",
            last_name="Baker",
            role=Role.MEMBER,
        )
        db_session.add(member)
        await db_session.commit()

        response = await client.get(f"{staff_url(test_organization.id)}/{member.id}")

        assert response.status_code == 404


class TestUpdateAndDeleteStaff:
    """Tests for changing staff members."""

    async def test_update_staff(
        self, client: AsyncClient, test_organization: Organization, test_instructor: User
    ):
        """Test partial update including a normalized email change."""
        response = await client.patch(
            f"{staff_url(test_organization.id)}/{test_instructor.id}",
            json={"email": "Sam.Rivera@Example.com", "role": "staff", "phone": "555-0101"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "sam.rivera@example.com"
        assert data["role"] == "staff"
        assert data["phone"] == "555-0101"
        assert data["first_name"] == "Sam"

    async def test_update_staff_keeps_own_email(
        self, client: AsyncClient, test_organization: Organization, test_instructor: User
    ):
        response = await client.patch(
            f"{staff_url(test_organization.id)}/{test_instructor.id}",
            json={"email": "Coach@Example.com"},
        )

        assert response.status_code == 200

    async def test_update_staff_email_conflict(
        self, client: AsyncClient, test_organization: Organization, test_instructor: User
    ):
        created = await client.post(
            staff_url(test_organization.id),
            json={"email": "desk@example.com", "first_name": "Dana", "last_name": "Lee"},
        )

        response = await client.patch(
            f"{staff_url(test_organization.id)}/{created.json()['id']}",
            json={"email": test_instructor.email},
        )

        assert response.status_code == 409

    @pytest.mark.parametrize(
        "payload", [{"email": None}, {"last_name": None}, {"role": None}, {"role": "member"}]
    )
    async def test_update_staff_validation(
        self,
        client: AsyncClient,
        test_organization: Organization,
        test_instructor: User,
        payload: dict,
    ):
        response = await client.patch(
            f"{staff_url(test_organization.id)}/{test_instructor.id}", json=payload
        )

        assert response.status_code == 422

    async def test_delete_staff(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        test_organization: Organization,
        test_instructor: User,
    ):
        """Test soft delete keeps the row and hides the staff member."""
        url = f"{staff_url(test_organization.id)}/{test_instructor.id}"

        response = await client.delete(url)
        assert response.status_code == 204

        response = await client.get(url)
        assert response.status_code == 404

        result = await db_session.execute(
            select(User.is_active, User.deleted_at).where(User.id == test_instructor.id)
        )
        is_active, deleted_at = result.one()
        assert is_active is False
        assert deleted_at is not None


class TestStaffAsInstructors:
    """Tests for staff created through the API being used by services."""

    async def test_created_instructor_can_teach_service(
        self, client: AsyncClient, test_organization: Organization
    ):
        created = await client.post(
            staff_url(test_organization.id),
            json={
                "email": "olivia@example.com",
                "first_name": "Olivia",
                "last_name": "Bennett",
                "role": "instructor",
                "specialty": "Reformer",
            },
        )
        instructor_id = created.json()["id"]

        response = await client.post(
            f"/api/v1/organizations/{test_organization.id}/services",
            json={
                "name": "Reformer Pilates",
                "type": "CLASS",
                "duration": 50,
                "primary_instructor_id": instructor_id,
            },
        )

        assert response.status_code == 201
        assert response.json()["primary_instructor"]["first_name"] == "Olivia"

    async def test_deleted_instructor_cannot_be_assigned(
        self,
        client: AsyncClient,
        test_organization: Organization,
        test_instructor: User,
        test_service: Service,
    ):
        await client.delete(f"{staff_url(test_organization.id)}/{test_instructor.id}")

        response = await client.patch(
            f"/api/v1/organizations/{test_organization.id}/services/{test_service.id}",
            json={"primary_instructor_id": test_instructor.id},
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Instructor not found"

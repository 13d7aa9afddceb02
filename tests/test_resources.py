import pytest
from httpx import AsyncClient

from app.models.location import Location
from app.models.organization import Organization
from app.models.resource import Resource, ResourceType

pytestmark = pytest.mark.asyncio


def resources_url(organization_id: str) -> str:
    return f"/api/v1/organizations/{organization_id}/resources"


class TestCreateResource:
    """Tests for creating resources."""

    async def test_create_resource(
        self, client: AsyncClient, test_organization: Organization, test_location: Location
    ):
        """Test creating a room placed in a location."""
        response = await client.post(
            resources_url(test_organization.id),
            json={
                "name": "Spin Studio",
                "type": "ROOM",
                "capacity": 24,
                "location_id": test_location.id,
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["type"] == "ROOM"
        assert data["capacity"] == 24
        assert data["is_bookable"] is True
        assert data["location"]["id"] == test_location.id
        assert data["location"]["name"] == test_location.name

    async def test_create_equipment_without_location(
        self, client: AsyncClient, test_organization: Organization
    ):
        """Test creating equipment not tied to a location."""
        response = await client.post(
            resources_url(test_organization.id),
            json={"name": "Reformer", "type": "EQUIPMENT"},
        )

        assert response.status_code == 201
        assert response.json()["location"] is None

    async def test_create_resource_invalid_type(
        self, client: AsyncClient, test_organization: Organization
    ):
        """Test unknown resource types are rejected."""
        response = await client.post(
            resources_url(test_organization.id),
            json={"name": "Pool", "type": "POOL"},
        )

        assert response.status_code == 422

    async def test_create_resource_with_other_organization_location(
        self,
        client: AsyncClient,
        other_organization: Organization,
        test_location: Location,
    ):
        """Test a location from another organization cannot be referenced."""
        response = await client.post(
            resources_url(other_organization.id),
            json={"name": "Mat", "type": "EQUIPMENT", "location_id": test_location.id},
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Location not found"

    async def test_create_resource_organization_not_found(self, client: AsyncClient):
        """Test creating a resource for a missing organization."""
        response = await client.post(
            resources_url("missing"), json={"name": "Mat", "type": "EQUIPMENT"}
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Organization not found"


class TestListAndGetResources:
    """Tests for reading resources."""

    async def test_list_resources_ordered_by_type_then_name(
        self, client: AsyncClient, test_organization: Organization, create_resource
    ):
        """Test active resources are ordered by type then name."""
        await create_resource(test_organization, name="Yoga Room")
        await create_resource(test_organization, name="Barbell", type=ResourceType.EQUIPMENT)
        await create_resource(test_organization, name="Annex")
        await create_resource(test_organization, name="Retired", is_active=False)

        response = await client.get(resources_url(test_organization.id))

        assert response.status_code == 200
        names = [r["name"] for r in response.json()]
        assert names == ["Barbell", "Annex", "Yoga Room"]

    async def test_list_resources_filtered(
        self,
        client: AsyncClient,
        test_organization: Organization,
        test_location: Location,
        create_resource,
    ):
        """Test filtering resources by type and location."""
        await create_resource(test_organization, name="Studio B", location=test_location)
        await create_resource(
            test_organization, name="Kettlebell", type=ResourceType.EQUIPMENT
        )

        response = await client.get(
            resources_url(test_organization.id), params={"type": "EQUIPMENT"}
        )
        assert [r["name"] for r in response.json()] == ["Kettlebell"]

        response = await client.get(
            resources_url(test_organization.id),
            params={"location_id": test_location.id},
        )
        assert [r["name"] for r in response.json()] == ["Studio B"]

    async def test_get_resource(
        self, client: AsyncClient, test_organization: Organization, test_resource: Resource
    ):
        """Test getting a single resource."""
        response = await client.get(
            f"{resources_url(test_organization.id)}/{test_resource.id}"
        )

        assert response.status_code == 200
        assert response.json()["id"] == test_resource.id

    async def test_get_resource_of_other_organization(
        self, client: AsyncClient, other_organization: Organization, test_resource: Resource
    ):
        """Test resources are scoped to their organization."""
        response = await client.get(
            f"{resources_url(other_organization.id)}/{test_resource.id}"
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Resource not found"


class TestUpdateAndDeleteResource:
    """Tests for changing resources."""

    async def test_update_resource(
        self, client: AsyncClient, test_organization: Organization, test_resource: Resource
    ):
        """Test partial update of a resource."""
        response = await client.patch(
            f"{resources_url(test_organization.id)}/{test_resource.id}",
            json={"capacity": 30, "is_bookable": False},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["capacity"] == 30
        assert data["is_bookable"] is False
        assert data["name"] == test_resource.name

    async def test_update_resource_with_other_organization_location(
        self,
        client: AsyncClient,
        create_location,
        other_organization: Organization,
        test_organization: Organization,
        test_resource: Resource,
    ):
        """Test moving a resource into a foreign location is rejected."""
        foreign = await create_location(other_organization, name="Foreign")

        response = await client.patch(
            f"{resources_url(test_organization.id)}/{test_resource.id}",
            json={"location_id": foreign.id},
        )

        assert response.status_code == 404

    async def test_update_resource_rejects_null_type(
        self, client: AsyncClient, test_organization: Organization, test_resource: Resource
    ):
        """Test the resource type cannot be cleared while capacity can."""
        url = f"{resources_url(test_organization.id)}/{test_resource.id}"

        response = await client.patch(url, json={"type": None})
        assert response.status_code == 422

        response = await client.patch(url, json={"capacity": None})
        assert response.status_code == 200
        assert response.json()["capacity"] is None
        assert response.json()["type"] == "ROOM"

    async def test_delete_resource(
        self, client: AsyncClient, test_organization: Organization, test_resource: Resource
    ):
        """Test soft deleting a resource hides it from reads."""
        url = f"{resources_url(test_organization.id)}/{test_resource.id}"

        response = await client.delete(url)
        assert response.status_code == 204

        response = await client.get(url)
        assert response.status_code == 404

        response = await client.get(resources_url(test_organization.id))
        assert response.json() == []

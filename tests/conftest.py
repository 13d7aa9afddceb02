import os
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

# Ensure critical settings exist before the app/config modules import.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./dev.db")

from app.models import (
    DEFAULT_SETTINGS,
    Booking,
    Location,
    Organization,
    OrganizationSettings,
    Resource,
    ResourceType,
    Role,
    Service,
    ServiceType,
    User,
)
from core.db import get_db
from core.db.base import Base
from main import app

# Use SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"

engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@event.listens_for(engine.sync_engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture(autouse=True)
async def setup_db():
    """Create and drop all tables for each test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for testing."""
    async with TestSessionLocal() as session:
        yield session


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client for testing."""

    async def override_get_db():
        async with TestSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def create_organization(db_session: AsyncSession):
    """Factory fixture to create organizations with default settings."""

    async def _create(
        name: str = "FitCore Gym", slug: str = "fitcore-gym", with_settings: bool = True, **kwargs
    ) -> Organization:
        organization = Organization(name=name, slug=slug, **kwargs)
        if with_settings:
            organization.settings = OrganizationSettings(**DEFAULT_SETTINGS)
        db_session.add(organization)
        await db_session.commit()
        await db_session.refresh(organization)
        return organization

    return _create


@pytest.fixture
async def test_organization(create_organization) -> Organization:
    """Create a test organization."""
    return await create_organization()


@pytest.fixture
async def other_organization(create_organization) -> Organization:
    """Create a second, unrelated organization."""
    return await create_organization(name="Zen Flow Yoga", slug="zen-flow-yoga")


@pytest.fixture
async def create_location(db_session: AsyncSession):
    """Factory fixture to create locations."""

    async def _create(organization: Organization, name: str = "Downtown", **kwargs) -> Location:
        location = Location(
            organization_id=organization.id,
            name=name,
            address=kwargs.pop("address", "100 Main St"),
            city=kwargs.pop("city", "Springfield"),
            state=kwargs.pop("state", "IL"),
            zip_code=kwargs.pop("zip_code", "62701"),
            **kwargs,
        )
        db_session.add(location)
        await db_session.commit()
        await db_session.refresh(location)
        return location

    return _create


@pytest.fixture
async def test_location(create_location, test_organization: Organization) -> Location:
    """Create a test location."""
    return await create_location(test_organization, is_primary=True)


@pytest.fixture
async def create_resource(db_session: AsyncSession):
    """Factory fixture to create resources."""

    async def _create(
        organization: Organization,
        name: str = "Studio A",
        type: ResourceType = ResourceType.ROOM,
        location: Location = None,
        **kwargs,
    ) -> Resource:
        resource = Resource(
            organization_id=organization.id,
            name=name,
            type=type,
            location_id=location.id if location else None,
            **kwargs,
        )
        db_session.add(resource)
        await db_session.commit()
        await db_session.refresh(resource)
        return resource

    return _create


@pytest.fixture
async def test_resource(
    create_resource, test_organization: Organization, test_location: Location
) -> Resource:
    """Create a test room in the test location."""
    return await create_resource(test_organization, location=test_location, capacity=20)


@pytest.fixture
async def test_instructor(db_session: AsyncSession, test_organization: Organization) -> User:
    """Create an instructor in the test organization."""
    user = User(
        organization_id=test_organization.id,
        email="coach@example.com",
        first_name="Sam",
        last_name="Rivera",
        role=Role.INSTRUCTOR,
        specialty="Strength",
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def create_service(db_session: AsyncSession):
    """Factory fixture to create services."""

    async def _create(
        organization: Organization,
        name: str = "Morning HIIT",
        type: ServiceType = ServiceType.CLASS,
        **kwargs,
    ) -> Service:
        service = Service(
            organization_id=organization.id,
            name=name,
            type=type,
            duration=kwargs.pop("duration", 45),
            price=kwargs.pop("price", Decimal("20.00")),
            **kwargs,
        )
        db_session.add(service)
        await db_session.commit()
        await db_session.refresh(service)
        return service

    return _create


@pytest.fixture
async def test_service(create_service, test_organization: Organization) -> Service:
    """Create a test class."""
    return await create_service(test_organization, capacity=15)


@pytest.fixture
async def test_booking(
    db_session: AsyncSession, test_service: Service, test_instructor: User
) -> Booking:
    """Create a booking against the test service."""
    start = datetime.now(timezone.utc) + timedelta(days=1)
    booking = Booking(
        organization_id=test_service.organization_id,
        service_id=test_service.id,
        user_id=test_instructor.id,
        start_time=start,
        end_time=start + timedelta(minutes=test_service.duration),
    )
    db_session.add(booking)
    await db_session.commit()
    await db_session.refresh(booking)
    return booking

"""
Seed script for Studio Scheduler.
Populates the database with demo gym, yoga and pilates organizations.
"""

import asyncio
import sys
from decimal import Decimal
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.models.location import Location
from app.models.organization import DEFAULT_SETTINGS, Organization, OrganizationSettings
from app.models.resource import Resource, ResourceType
from app.models.service import Service, ServiceType
from app.models.user import Role, User
from core.config import config


def weekly_hours(open_time: str, close_time: str, weekend_open: str, weekend_close: str):
    """Business hours with one schedule for weekdays and another for weekends."""
    return [
        {
            "day_of_week": day,
            "open_time": weekend_open if day in (0, 6) else open_time,
            "close_time": weekend_close if day in (0, 6) else close_time,
            "is_open": True,
        }
        for day in range(7)
    ]


ORGANIZATIONS = [
    {
        "organization": {
            "name": "FitCore Gymnasium",
            "slug": "fitcore-gym",
            "description": "Premium fitness facility offering comprehensive training programs and modern equipment.",
            "website": "https://fitcore-gym.com",
            "phone": "+1 (555) 123-4567",
            "email": "info@fitcore-gym.com",
            "address": "123 Fitness Avenue",
            "city": "San Francisco",
            "state": "CA",
            "zip_code": "94105",
            "timezone": "America/Los_Angeles",
            "business_type": "gym",
            "subscription_tier": "pro",
        },
        "settings": {
            "late_cancel_penalty": True,
            "max_waitlist_size": 15,
            "max_bookings_per_member": 12,
            "primary_color": "#e63946",
            "secondary_color": "#1d3557",
            "business_hours": weekly_hours("05:00", "23:00", "07:00", "21:00"),
        },
        "locations": [
            {
                "name": "Main Training Floor",
                "description": "Primary workout area with cardio and strength equipment",
                "email": "mainfloor@fitcore-gym.com",
                "is_primary": True,
                "resources": [
                    ("Cardio Section", ResourceType.ROOM, 25),
                    ("Free Weight Area", ResourceType.ROOM, 15),
                    ("Squat Rack 1", ResourceType.EQUIPMENT, 1),
                    ("Squat Rack 2", ResourceType.EQUIPMENT, 1),
                ],
            },
            {
                "name": "Group Fitness Studio",
                "description": "Dedicated space for group fitness classes",
                "email": "studio@fitcore-gym.com",
                "resources": [
                    ("Group Fitness Room", ResourceType.ROOM, 30),
                    ("Spinning Bikes", ResourceType.EQUIPMENT, 20),
                ],
            },
        ],
        "instructors": [
            ("marcus@fitcore-gym.com", "Marcus", "Johnson", "Strength & Conditioning"),
            ("sarah@fitcore-gym.com", "Sarah", "Chen", "HIIT & Cycling"),
        ],
        "services": [
            ("HIIT Training", ServiceType.CLASS, 45, "25.00", 20, "Group Fitness Studio"),
            ("Strength & Conditioning", ServiceType.CLASS, 60, "30.00", 15, "Main Training Floor"),
            ("Personal Training Session", ServiceType.PERSONAL_TRAINING, 60, "85.00", 1, "Main Training Floor"),
            ("Spin Class", ServiceType.CLASS, 45, "22.00", 20, "Group Fitness Studio"),
        ],
    },
    {
        "organization": {
            "name": "Zen Flow Yoga Studio",
            "slug": "zen-flow-yoga",
            "description": "Peaceful yoga studio offering various styles of yoga for all levels in a serene environment.",
            "website": "https://zenflow-yoga.com",
            "phone": "+1 (555) 987-6543",
            "email": "namaste@zenflow-yoga.com",
            "address": "456 Serenity Lane",
            "city": "Portland",
            "state": "OR",
            "zip_code": "97205",
            "timezone": "America/Los_Angeles",
            "business_type": "studio",
            "subscription_tier": "basic",
        },
        "settings": {
            "booking_window_days": 21,
            "cancellation_window_hours": 12,
            "max_waitlist_size": 8,
            "default_class_duration": 75,
            "max_bookings_per_member": 8,
            "reminder_hours": 12,
            "primary_color": "#2a9d8f",
            "secondary_color": "#e9c46a",
            "business_hours": weekly_hours("06:00", "21:00", "08:00", "18:00"),
        },
        "locations": [
            {
                "name": "Main Studio",
                "description": "Primary yoga practice space with natural lighting",
                "email": "studio@zenflow-yoga.com",
                "is_primary": True,
                "resources": [
                    ("Main Yoga Studio", ResourceType.ROOM, 24),
                    ("Yoga Props", ResourceType.EQUIPMENT, 30),
                ],
            },
            {
                "name": "Meditation Room",
                "description": "Quiet space for meditation and restorative practices",
                "email": "meditation@zenflow-yoga.com",
                "resources": [
                    ("Meditation Space", ResourceType.ROOM, 12),
                ],
            },
        ],
        "instructors": [
            ("maya@zenflow-yoga.com", "Maya", "Patel", "Vinyasa & Hot Yoga"),
            ("elena@zenflow-yoga.com", "Elena", "Rodriguez", "Restorative & Yin"),
        ],
        "services": [
            ("Vinyasa Flow", ServiceType.CLASS, 75, "28.00", 24, "Main Studio"),
            ("Hot Yoga", ServiceType.CLASS, 90, "32.00", 20, "Main Studio"),
            ("Restorative Yoga", ServiceType.CLASS, 75, "25.00", 12, "Meditation Room"),
            ("Private Yoga Session", ServiceType.PERSONAL_TRAINING, 60, "95.00", 1, "Meditation Room"),
        ],
    },
    {
        "organization": {
            "name": "CoreStrength Pilates",
            "slug": "corestrength-pilates",
            "description": "Boutique Pilates studio specializing in equipment-based classes and personal training.",
            "website": "https://corestrength-pilates.com",
            "phone": "+1 (555) 456-7890",
            "email": "hello@corestrength-pilates.com",
            "address": "789 Wellness Way",
            "city": "Austin",
            "state": "TX",
            "zip_code": "73301",
            "timezone": "America/Chicago",
            "business_type": "studio",
            "subscription_tier": "enterprise",
        },
        "settings": {
            "booking_window_days": 45,
            "cancellation_window_hours": 48,
            "late_cancel_penalty": True,
            "max_waitlist_size": 5,
            "default_class_duration": 50,
            "max_bookings_per_member": 15,
            "reminder_hours": 48,
            "primary_color": "#6d597a",
            "secondary_color": "#eaac8b",
            "business_hours": weekly_hours("06:30", "20:00", "08:00", "14:00"),
        },
        "locations": [
            {
                "name": "Reformer Studio A",
                "description": "Fully equipped reformer studio",
                "email": "reformera@corestrength-pilates.com",
                "is_primary": True,
                "resources": [
                    ("Reformer Studio", ResourceType.ROOM, 8),
                    ("Reformer 1", ResourceType.EQUIPMENT, 1),
                    ("Reformer 2", ResourceType.EQUIPMENT, 1),
                ],
            },
            {
                "name": "Mat Studio",
                "description": "Mat work and small-group classes",
                "email": "mat@corestrength-pilates.com",
                "resources": [
                    ("Mat Studio", ResourceType.ROOM, 16),
                ],
            },
        ],
        "instructors": [
            ("olivia@corestrength-pilates.com", "Olivia", "Bennett", "Reformer Pilates"),
        ],
        "services": [
            ("Reformer Pilates", ServiceType.CLASS, 50, "38.00", 8, "Reformer Studio A"),
            ("Mat Pilates", ServiceType.CLASS, 50, "28.00", 16, "Mat Studio"),
            ("Private Reformer Session", ServiceType.PERSONAL_TRAINING, 55, "110.00", 1, "Reformer Studio A"),
            ("Advanced Reformer", ServiceType.CLASS, 50, "42.00", 8, "Reformer Studio A"),
        ],
    },
]


class DataSeeder:
    """Seed data generator."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def seed_all(self):
        """Seed all data."""
        print("🌱 Starting database seeding...")
        try:
            for entry in ORGANIZATIONS:
                await self.seed_organization(entry)
            print("\n✅ Database seeding completed successfully!")
        except Exception as e:
            await self.session.rollback()
            print(f"\n❌ Error during seeding: {e}")
            raise

    async def seed_organization(self, entry: dict):
        """Create an organization with its settings, facilities, staff and services."""
        data = entry["organization"]
        print(f"\n🏢 Seeding {data['name']}...")

        result = await self.session.execute(
            select(Organization.id).where(Organization.slug == data["slug"])
        )
        if result.first():
            print(f"  Skipping existing organization: {data['slug']}")
            return

        organization = Organization(**data)
        organization.settings = OrganizationSettings(
            **{**DEFAULT_SETTINGS, **entry["settings"]}
        )
        self.session.add(organization)
        await self.session.flush()

        locations = await self.seed_locations(organization, entry["locations"])
        instructors = await self.seed_instructors(organization, entry["instructors"])
        await self.seed_services(organization, entry["services"], locations, instructors)

        await self.session.commit()

    async def seed_locations(self, organization: Organization, definitions: list) -> dict:
        """Create locations and the resources inside them."""
        locations = {}
        resource_count = 0
        for definition in definitions:
            definition = dict(definition)
            resources = definition.pop("resources")
            location = Location(
                organization_id=organization.id,
                address=organization.address,
                city=organization.city,
                state=organization.state,
                zip_code=organization.zip_code,
                phone=organization.phone,
                **definition,
            )
            self.session.add(location)
            await self.session.flush()
            locations[location.name] = location

            for name, type, capacity in resources:
                self.session.add(
                    Resource(
                        organization_id=organization.id,
                        location_id=location.id,
                        name=name,
                        type=type,
                        capacity=capacity,
                    )
                )
                resource_count += 1

        await self.session.flush()
        print(f"  Created {len(locations)} locations and {resource_count} resources")
        return locations

    async def seed_instructors(self, organization: Organization, definitions: list) -> list:
        """Create instructor accounts."""
        instructors = []
        for email, first_name, last_name, specialty in definitions:
            user = User(
                organization_id=organization.id,
                email=User.normalize_email(email),
                first_name=first_name,
                last_name=last_name,
                role=Role.INSTRUCTOR,
                specialty=specialty,
            )
            self.session.add(user)
            instructors.append(user)

        await self.session.flush()
        print(f"  Created {len(instructors)} instructors")
        return instructors

    async def seed_services(
        self,
        organization: Organization,
        definitions: list,
        locations: dict,
        instructors: list,
    ):
        """Create services, rotating through the instructors."""
        for index, (name, type, duration, price, capacity, location_name) in enumerate(definitions):
            location = locations[location_name]
            instructor = instructors[index % len(instructors)]
            self.session.add(
                Service(
                    organization_id=organization.id,
                    location_id=location.id,
                    primary_instructor_id=instructor.id,
                    name=name,
                    type=type,
                    duration=duration,
                    price=Decimal(price),
                    capacity=capacity,
                    requires_approval=type == ServiceType.PERSONAL_TRAINING,
                    allow_waitlist=type == ServiceType.CLASS,
                )
            )

        await self.session.flush()
        print(f"  Created {len(definitions)} services")


async def main():
    """Main seeding function."""
    # Create async engine
    engine = create_async_engine(config.DATABASE_URL, echo=False)
    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        seeder = DataSeeder(session)
        await seeder.seed_all()

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())

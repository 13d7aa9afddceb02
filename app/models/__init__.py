from app.models.booking import Booking, BookingStatus
from app.models.location import Location
from app.models.organization import DEFAULT_SETTINGS, Organization, OrganizationSettings
from app.models.resource import Resource, ResourceType
from app.models.service import Service, ServiceType
from app.models.user import STAFF_ROLES, Role, User

__all__ = [
    # Organization
    "Organization",
    "OrganizationSettings",
    "DEFAULT_SETTINGS",
    # Facilities
    "Location",
    "Resource",
    "ResourceType",
    # Catalog
    "Service",
    "ServiceType",
    # People
    "User",
    "Role",
    "STAFF_ROLES",
    # Scheduling
    "Booking",
    "BookingStatus",
]

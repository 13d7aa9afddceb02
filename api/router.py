from fastapi import APIRouter

from api.v1.locations import router as locations_router
from api.v1.organizations import router as organizations_router
from api.v1.resources import router as resources_router
from api.v1.services import router as services_router
from api.v1.settings import router as settings_router
from api.v1.staff import router as staff_router

router = APIRouter()

# Mounted under config.API_PREFIX (/api/v1 by default)
router.include_router(organizations_router)

# Organization sub-resources
router.include_router(locations_router)
router.include_router(resources_router)
router.include_router(services_router)
router.include_router(settings_router)
router.include_router(staff_router)

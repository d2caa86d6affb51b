from fastapi import APIRouter

from api.routes.discovery import router as discovery_router
from api.routes.system import router as system_router
from packages.geolocate.routes import router as geolocate_router
from packages.mcp.routes import router as mcp_router

api_router = APIRouter()

api_router.include_router(system_router)
api_router.include_router(discovery_router)
api_router.include_router(mcp_router)
api_router.include_router(geolocate_router)

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from infrastructure.services import SettingsDep

router = APIRouter(tags=["System"])


# Load balancers poll this; keep it free of lookups
@router.get("/health", response_class=PlainTextResponse)
def get_health() -> str:
    """Healthcheck endpoint."""
    return "OK"


@router.get("/version")
def get_version(settings: SettingsDep):
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}

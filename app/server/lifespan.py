from contextlib import asynccontextmanager
from typing import AsyncIterator, TYPE_CHECKING

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.logging.setup import configure_logging
from infrastructure.services import (
    get_country_reference,
    get_geo_lookup,
    get_geolocation_service,
    get_mcp_dispatcher,
    get_settings,
    get_timezone_names,
)

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def _load_reference_data(logger: BoundLogger) -> None:
    """Open the GeoIP database and load static tables before serving.

    Any failure here aborts startup; nothing is opened lazily mid-request.
    """
    try:
        get_geo_lookup()
        get_country_reference()
        get_timezone_names()
    except Exception as exc:
        logger.error("reference_data_load_failed", error=str(exc))
        raise
    logger.info("reference_data_loaded")


def _release_reference_data(logger: BoundLogger) -> None:
    get_geo_lookup().close()
    # Providers holding the closed reader must be rebuilt on next use
    get_mcp_dispatcher.cache_clear()
    get_geolocation_service.cache_clear()
    get_geo_lookup.cache_clear()
    logger.info("geoip_database_closed")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = configure_logging()

    app.state.settings = settings
    app.state.logger = logger

    logger.info("application_startup")
    _list_configs(settings, logger)
    _load_reference_data(logger)

    yield

    logger.info("application_shutdown")
    _release_reference_data(logger)

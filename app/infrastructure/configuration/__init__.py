"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the IP
geolocation service using Pydantic BaseSettings with domain-based
organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    CacheSettings: Result cache settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    db_path = settings.maxmind.GEOIP_DB_PATH
    cache_size = settings.cache.CACHE_SIZE
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.infrastructure.cache import CacheSettings

__all__ = ["Settings", "CacheSettings"]

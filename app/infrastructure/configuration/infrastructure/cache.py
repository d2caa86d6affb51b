"""Result cache settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class CacheSettings(InfrastructureSettings):
    """Server-side lookup result cache configuration.

    The cache only holds simple-format responses for the REST surface.
    Its TTL is unrelated to the Cache-Control lifetime sent to clients.

    Environment Variables:
        CACHE_SIZE: Maximum number of cached entries (default: 10000)
        CACHE_TTL_SECS: Seconds an entry stays valid (default: 3600)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.cache.CACHE_SIZE > 0:
            ...
        ```
    """

    CACHE_SIZE: int = Field(default=10_000, gt=0, alias="CACHE_SIZE")
    CACHE_TTL_SECS: int = Field(default=3600, gt=0, alias="CACHE_TTL_SECS")

"""HTTP server settings."""

from pydantic import Field, field_validator

from infrastructure.configuration.base import InfrastructureSettings


class ServerSettings(InfrastructureSettings):
    """Server and application runtime configuration.

    Environment Variables:
        HOST: Interface uvicorn binds to (default: 0.0.0.0)
        PORT: Port uvicorn listens on (default: 3000)
        BASE_URL: Public base URL used in discovery documents
            (default: https://geoip.vpetersson.com)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        base_url = settings.server.BASE_URL
        ```
    """

    HOST: str = Field(default="0.0.0.0", alias="HOST")
    PORT: int = Field(default=3000, alias="PORT")
    BASE_URL: str = Field(default="https://geoip.vpetersson.com", alias="BASE_URL")

    @field_validator("BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Discovery documents append paths to BASE_URL."""
        return v.rstrip("/")

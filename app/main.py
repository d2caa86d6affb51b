"""Process entry point for the HTTP server (``ipgeo-server``)."""

import uvicorn

from infrastructure.services.providers import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "server.server:handler",
        host=settings.server.HOST,
        port=settings.server.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    main()

"""Structlog configuration for the HTTP server and the stdio MCP transport.

Both entry points call ``configure_logging()`` once at startup. Output always
goes to stderr: stdout belongs to the JSON-RPC stream when serving over stdio.

Usage:
    import structlog
    from infrastructure.logging import configure_logging

    configure_logging()
    logger = structlog.get_logger()
    logger.info("ipgeo_lookup_completed", found=True)
"""

import logging
import sys
from typing import Any, Callable, Optional

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.logging.formatters import (
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
)

APP_NAME = "ipgeo"

# Above CRITICAL, so nothing is ever emitted
SILENT = logging.CRITICAL + 1

Processor = Callable[..., Any]


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def build_processors(version: str, production: bool) -> list[Processor]:
    """Processor chain shared by both transports, ending in the renderer.

    Masking runs after truncation so a secret split by truncation is still
    caught by key name.
    """
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        add_app_info(APP_NAME, version),
        truncate_large_values(),
        mask_sensitive_data(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    chain.append(
        structlog.processors.JSONRenderer()
        if production
        else structlog.dev.ConsoleRenderer()
    )
    return chain


def _apply(processors: list[Processor], level: int) -> BoundLogger:
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=level, stream=sys.stderr, force=True)
    return structlog.stdlib.get_logger()


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and the stdlib root logger.

    Under pytest every record is dropped and settings are never read.

    Args:
        log_level: Overrides ``settings.LOG_LEVEL``.
        is_production: Overrides ``settings.is_production``; selects JSON
            output over the console renderer.

    Returns:
        A bound logger for the caller's startup messages.
    """
    if _is_test_environment():
        return _apply(
            [
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            SILENT,
        )

    # Lazy: providers imports every lookup client
    from infrastructure.services.providers import get_settings

    settings = get_settings()
    production = settings.is_production if is_production is None else is_production
    level_name = (log_level or settings.LOG_LEVEL).upper()

    return _apply(
        build_processors(settings.GIT_SHA, production),
        getattr(logging, level_name, logging.INFO),
    )

"""Request context binding for structured logging.

Binds a correlation id and request metadata to structlog's context vars so
every log entry emitted while a request is served carries them.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(request_path="/ipgeo", request_method="GET"):
        logger.info("ipgeo_lookup_completed")
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator
import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    request_path: Optional[str] = None,
    request_method: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind request-scoped context to all logs within the context manager.

    Args:
        correlation_id: Unique request identifier. Auto-generated if not provided.
        request_path: HTTP request path (e.g., "/v1/ipgeo").
        request_method: HTTP method (e.g., "GET", "POST").
        **extra_context: Additional key-value pairs to include in logs,
            such as ``transport="stdio"``.

    Yields:
        The correlation id in effect for the block.

    See ``server.middleware.RequestContextMiddleware`` for the HTTP binding
    and ``packages.mcp.stdio.serve`` for the per-line stdio binding.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if request_path is not None:
        context["request_path"] = request_path

    if request_method is not None:
        context["request_method"] = request_method

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context.

    Returns:
        The correlation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")

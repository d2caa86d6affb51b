"""Structlog processors for the ipgeo pipeline.

Each factory returns a ``(logger, method_name, event_dict)`` processor; see
``setup.build_processors`` for the order they run in.
"""

from typing import Any

# Keys whose values are replaced with the mask value
SENSITIVE_PATTERNS = frozenset(
    {
        "api_key",
        "apikey",
        "authorization",
        "cookie",
        "password",
        "secret",
        "token",
    }
)

# Keys carrying caller or queried addresses; dropped from every entry
ADDRESS_KEYS = frozenset(
    {
        "ip",
        "ips",
        "ip_address",
        "caller_ip",
        "client_ip",
        "cf_connecting_ip",
        "x_forwarded_for",
        "x_real_ip",
    }
)


def add_app_info(app_name: str, app_version: str = "unknown"):
    """Stamp ``app_name``/``app_version`` unless the caller bound its own."""

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.setdefault("app_name", app_name)
        event_dict.setdefault("app_version", app_version)
        return event_dict

    return processor


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: frozenset[str] | None = None,
):
    """Create a processor that masks credentials and drops address fields.

    Keys containing a sensitive pattern (case-insensitive) keep their key
    but lose their value. Keys naming an IP address are removed outright,
    so lookups never leave a trace of who asked or what was asked.

    Args:
        mask_value: The string to replace sensitive values with.
        additional_patterns: Extra patterns to consider sensitive.

    Returns:
        A structlog processor function.
    """
    patterns = SENSITIVE_PATTERNS
    if additional_patterns:
        patterns = patterns | additional_patterns

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in event_dict.items():
            key_lower = key.lower()
            if key_lower in ADDRESS_KEYS:
                continue
            if value is not None and any(p in key_lower for p in patterns):
                cleaned[key] = mask_value
            else:
                cleaned[key] = value
        return cleaned

    return processor


def truncate_large_values(max_length: int = 500):
    """Cut string values longer than ``max_length``, noting the original size.

    Tool arguments and JSON-RPC payloads can be large.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor

"""Business error taxonomy shared by the REST and MCP surfaces."""

from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable codes carried in ``{error, code}`` bodies."""

    INVALID_IP = "INVALID_IP"
    PRIVATE_IP = "PRIVATE_IP"
    NOT_FOUND = "NOT_FOUND"
    BULK_LIMIT_EXCEEDED = "BULK_LIMIT_EXCEEDED"
    INVALID_LATITUDE = "INVALID_LATITUDE"
    INVALID_LONGITUDE = "INVALID_LONGITUDE"
    STDIO_NO_CALLER_IP = "STDIO_NO_CALLER_IP"


class GeoValidationError(ValueError):
    """Raised when a request is rejected with a business error code.

    Args:
        code: The business error code.
        message: Human-readable message, echoed to the caller.
    """

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message, "code": self.code.value}

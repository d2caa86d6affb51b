"""Operation result dataclass.

Uniform result type returned by the lookup ports: a found record, a miss,
or a rejected input, with the reason carried alongside.
"""

from typing import Optional, Any
from dataclasses import dataclass

from infrastructure.operations.status import OperationStatus


@dataclass(frozen=True)
class OperationResult:
    """Uniform result returned from lookups.

    Attributes:
        status: OperationStatus -- high-level outcome
        message: str -- human-friendly message for logs and error bodies
        data: Optional[Any] -- the record on success
        error_code: Optional[str] -- machine error code on failure
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """True if status is SUCCESS."""
        return self.status == OperationStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """True if the input was valid but had no record."""
        return self.status == OperationStatus.NOT_FOUND

    @classmethod
    def success(
        cls, data: Optional[Any] = None, message: str = "ok"
    ) -> "OperationResult":
        """Found: ``data`` carries the record."""
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def not_found(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Create a NOT_FOUND result for a valid input with no record."""
        return cls(
            status=OperationStatus.NOT_FOUND, message=message, error_code=error_code
        )

    @classmethod
    def permanent_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Invalid: the data source refused the input outright."""
        return cls(
            status=OperationStatus.PERMANENT_ERROR,
            message=message,
            error_code=error_code,
        )

    @classmethod
    def transient_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """The data source itself failed (corrupt record, I/O error)."""
        return cls(
            status=OperationStatus.TRANSIENT_ERROR,
            message=message,
            error_code=error_code,
        )

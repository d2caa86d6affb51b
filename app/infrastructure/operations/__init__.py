"""Operation result types and status enums.

Standardized result types returned by the lookup ports. They model the
``Found | Missing | Invalid`` outcome of a lookup without raising.
"""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]

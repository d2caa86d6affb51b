"""Operation status enumeration.

Status codes for lookup results, used by the facades to decide between a
built response, a soft-fail default, or an error.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: A record was found
        NOT_FOUND: Input was valid but the data source has no record for it
        PERMANENT_ERROR: Input was rejected (bad syntax, out of range)
        TRANSIENT_ERROR: The data source failed while reading
    """

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    PERMANENT_ERROR = "permanent_error"
    TRANSIENT_ERROR = "transient_error"

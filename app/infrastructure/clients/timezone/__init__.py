"""Timezone clients for infrastructure layer.

Public API (Package Level):
- TimezoneFinderClient: TimezoneNamePort over timezonefinder
- PytzDetailsClient: TimezoneDetailPort over pytz

Note: Application code should import from infrastructure.services, not directly from this package.
"""

from infrastructure.clients.timezone.client import (
    PytzDetailsClient,
    TimezoneFinderClient,
)

__all__ = [
    "PytzDetailsClient",
    "TimezoneFinderClient",
]

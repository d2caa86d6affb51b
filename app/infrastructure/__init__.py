"""Infrastructure modules for the IP geolocation service.

Centralized infrastructure components:
- clients: MaxMind GeoIP2 and timezone adapters
- configuration: Settings management (Settings, CacheSettings)
- logging: Structured logging setup and request context
- operations: Operation results (OperationResult, OperationStatus)
- services: Dependency injection services (SettingsDep, get_settings)
"""

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    # Operations
    "OperationResult",
    "OperationStatus",
]

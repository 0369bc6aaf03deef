"""Infrastructure modules for the push gateway.

Centralized infrastructure components:
- configuration: Settings management (Settings, RelaySettings)
- logging: Structured logging (configure_logging, get_module_logger)
- operations: Delivery results and provider error classification
- services: Dependency injection services (SettingsDep, get_settings)
"""

# Operations
from infrastructure.operations.result import DeliveryResult
from infrastructure.operations.status import DeliveryStatus

# Dependency Injection Services
from infrastructure.services import (
    SettingsDep,
    get_settings,
)

__all__ = [
    # Operations
    "DeliveryResult",
    "DeliveryStatus",
    # Dependency Injection Services
    "SettingsDep",
    "get_settings",
]

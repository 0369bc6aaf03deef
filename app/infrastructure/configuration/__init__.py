"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the push
gateway using Pydantic BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    RelaySettings: Forwarding settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    apns_topic = settings.apns.APNS_TOPIC
    cooldown = settings.relay.FORWARDING_DISABLE_SECONDS
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.infrastructure.relay import RelaySettings

__all__ = ["Settings", "RelaySettings"]

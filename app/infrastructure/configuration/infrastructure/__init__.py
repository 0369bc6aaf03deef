"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.relay import RelaySettings
from infrastructure.configuration.infrastructure.server import ServerSettings

__all__ = [
    "RelaySettings",
    "ServerSettings",
]

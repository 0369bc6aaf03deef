"""Root settings object for the push gateway."""

from typing import Dict, Type

from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.configuration.integrations import (
    ApnsSettings,
    FcmSettings,
)
from infrastructure.configuration.infrastructure import (
    RelaySettings,
    ServerSettings,
)

# Section name -> settings class; each section reads its own env variables
SECTIONS: Dict[str, Type[BaseSettings]] = {
    "apns": ApnsSettings,
    "fcm": FcmSettings,
    "relay": RelaySettings,
    "server": ServerSettings,
}


class Settings(BaseSettings):
    """Gateway configuration, one attribute per section.

    Sections:
        apns: Direct APNs delivery (topic served by this instance, auth key)
        fcm: Direct FCM delivery (service account file, request timeout)
        relay: Upstream gateway used for forwarding, and the circuit breaker
        server: Bind address of the HTTP server

    Top-level variables are ENVIRONMENT, LOG_LEVEL and GIT_SHA. Sections not
    passed to the constructor are built from the environment, so tests can
    override a single section:

        Settings(relay=RelaySettings(UPSTREAM_GATEWAY="relay.test"))
    """

    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    apns: ApnsSettings
    fcm: FcmSettings
    relay: RelaySettings
    server: ServerSettings

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    def __init__(self, **kwargs):
        for name, section_class in SECTIONS.items():
            kwargs.setdefault(name, section_class())
        super().__init__(**kwargs)

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

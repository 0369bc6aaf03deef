"""Apple Push Notification service integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class ApnsSettings(IntegrationSettings):
    """APNs client configuration.

    Either a client certificate (APNS_CERT_FILE) or a token signing key
    (APNS_KEY_FILE + APNS_KEY_ID + APNS_TEAM_ID) enables direct delivery.
    Without either, requests to the APNs endpoint can only be forwarded.

    Environment Variables:
        APNS_TOPIC: Bundle id this instance delivers for directly
        APNS_CERT_FILE: Path to the PEM client certificate
        APNS_KEY_FILE: Path to the .p8 token signing key
        APNS_KEY_ID: Key id of the signing key
        APNS_TEAM_ID: Apple developer team id
        APNS_USE_SANDBOX: Use the APNs development environment

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.apns.is_configured:
            topic = settings.apns.APNS_TOPIC
        ```
    """

    APNS_TOPIC: str = Field(default="", alias="APNS_TOPIC")
    APNS_CERT_FILE: str | None = Field(default=None, alias="APNS_CERT_FILE")
    APNS_KEY_FILE: str | None = Field(default=None, alias="APNS_KEY_FILE")
    APNS_KEY_ID: str | None = Field(default=None, alias="APNS_KEY_ID")
    APNS_TEAM_ID: str | None = Field(default=None, alias="APNS_TEAM_ID")
    APNS_USE_SANDBOX: bool = Field(default=False, alias="APNS_USE_SANDBOX")

    @property
    def is_configured(self) -> bool:
        """Check whether credentials for direct delivery are present."""
        return bool(self.APNS_CERT_FILE) or bool(
            self.APNS_KEY_FILE and self.APNS_KEY_ID and self.APNS_TEAM_ID
        )

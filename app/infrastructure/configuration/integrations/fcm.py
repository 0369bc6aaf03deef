"""Firebase Cloud Messaging integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class FcmSettings(IntegrationSettings):
    """FCM client configuration.

    Environment Variables:
        FCM_CREDENTIALS_FILE: Path to the Firebase service account JSON
        FCM_REQUEST_TIMEOUT_SECONDS: HTTP timeout for a single FCM send

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        credentials_path = settings.fcm.FCM_CREDENTIALS_FILE
        ```
    """

    FCM_CREDENTIALS_FILE: str | None = Field(default=None, alias="FCM_CREDENTIALS_FILE")
    FCM_REQUEST_TIMEOUT_SECONDS: int = Field(
        default=5, alias="FCM_REQUEST_TIMEOUT_SECONDS"
    )

    @property
    def is_configured(self) -> bool:
        """Check whether a service account is available for direct delivery."""
        return bool(self.FCM_CREDENTIALS_FILE)

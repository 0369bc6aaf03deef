"""APNs provider adapter built on aioapns."""

from typing import Any, Dict

from aioapns import APNs, NotificationRequest

from infrastructure.configuration.integrations import ApnsSettings
from infrastructure.logging import get_module_logger
from infrastructure.operations import (
    DeliveryResult,
    classify_apns_error,
    classify_apns_result,
)
from modules.push.models import PushNotification
from modules.push.providers.base import PushProvider

logger = get_module_logger()


def build_apns_message(notification: PushNotification) -> Dict[str, Any]:
    """Build the APNs JSON payload (`aps` dictionary plus `ejson`).

    `apn.text` overrides the alert body and `apn.category` sets the
    category. A message-id-only notification is marked mutable so the
    app's notification service extension can fetch the content.
    """
    opt = notification.options
    alert = {"title": opt.title, "body": opt.text}
    aps: Dict[str, Any] = {"alert": alert, "badge": opt.badge, "sound": opt.sound}

    if opt.apn is not None:
        if opt.apn.category:
            aps["category"] = opt.apn.category
        if opt.apn.text:
            alert["body"] = opt.apn.text

    if notification.is_message_id_only:
        aps["mutable-content"] = 1

    return {"aps": aps, "ejson": notification.ejson()}


class ApnsProvider(PushProvider):
    """Direct delivery through Apple Push Notification service."""

    def __init__(self, client: APNs):
        self.client = client

    @classmethod
    def from_settings(cls, settings: ApnsSettings) -> "ApnsProvider":
        """Create the aioapns client; must run inside the event loop."""
        key = None
        if settings.APNS_KEY_FILE:
            with open(settings.APNS_KEY_FILE) as f:
                key = f.read()

        client = APNs(
            client_cert=settings.APNS_CERT_FILE,
            key=key,
            key_id=settings.APNS_KEY_ID,
            team_id=settings.APNS_TEAM_ID,
            topic=settings.APNS_TOPIC,
            use_sandbox=settings.APNS_USE_SANDBOX,
        )
        return cls(client)

    @property
    def provider_name(self) -> str:
        return "apns"

    def build_request(self, notification: PushNotification) -> NotificationRequest:
        return NotificationRequest(
            device_token=notification.token,
            message=build_apns_message(notification),
            apns_topic=notification.options.topic,
        )

    async def send(self, notification: PushNotification) -> DeliveryResult:
        request = self.build_request(notification)
        logger.debug("sending_apns_notification", message=request.message)

        try:
            result = await self.client.send_notification(request)
        except Exception as e:
            return classify_apns_error(e)

        return classify_apns_result(result)

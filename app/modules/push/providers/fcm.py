"""FCM provider adapter built on firebase-admin."""

import asyncio

import firebase_admin
from firebase_admin import credentials, messaging

from infrastructure.configuration.integrations import FcmSettings
from infrastructure.logging import get_module_logger
from infrastructure.operations import DeliveryResult, classify_fcm_error
from modules.push.models import PushNotification
from modules.push.providers.base import PushProvider

logger = get_module_logger()

FCM_APP_NAME = "push-gateway"


def build_fcm_message(notification: PushNotification) -> messaging.Message:
    """Build an Android data message in the layout the mobile app reads."""
    opt = notification.options
    gcm_image = opt.gcm.image if opt.gcm is not None else ""
    gcm_style = opt.gcm.style if opt.gcm is not None else ""

    data = {
        "ejson": notification.ejson(),
        "title": opt.title,
        "message": opt.text,
        "text": opt.text,
        "image": gcm_image,
        "msgcnt": str(opt.badge),
        "sound": opt.sound,
        "notId": str(opt.not_id),
        "style": gcm_style,
    }

    return messaging.Message(
        token=notification.token,
        android=messaging.AndroidConfig(
            collapse_key=opt.from_ or None,
            priority="high",
            data=data,
        ),
    )


class FcmProvider(PushProvider):
    """Direct delivery through Firebase Cloud Messaging."""

    def __init__(self, app: firebase_admin.App):
        self.app = app

    @classmethod
    def from_settings(cls, settings: FcmSettings) -> "FcmProvider":
        cred = credentials.Certificate(settings.FCM_CREDENTIALS_FILE)
        app = firebase_admin.initialize_app(
            cred,
            options={"httpTimeout": settings.FCM_REQUEST_TIMEOUT_SECONDS},
            name=FCM_APP_NAME,
        )
        return cls(app)

    @property
    def provider_name(self) -> str:
        return "fcm"

    async def send(self, notification: PushNotification) -> DeliveryResult:
        message = build_fcm_message(notification)
        logger.debug("sending_fcm_notification", collapse_key=message.android.collapse_key)

        try:
            # firebase-admin is blocking; keep the event loop free
            await asyncio.to_thread(messaging.send, message, app=self.app)
        except Exception as e:
            return classify_fcm_error(e)

        return DeliveryResult.sent("Notification sent to FCM")

    def close(self) -> None:
        firebase_admin.delete_app(self.app)

"""Push provider abstract base class.

All provider adapters (APNs, FCM) implement this interface.
"""

from abc import ABC, abstractmethod

from infrastructure.operations import DeliveryResult
from modules.push.models import PushNotification


class PushProvider(ABC):
    """Abstract base class for direct delivery through a platform push service.

    Each adapter turns a canonical notification into the provider's message
    format, sends it once, and classifies the outcome. No retries.

    Example Implementation:
        class ApnsProvider(PushProvider):

            @property
            def provider_name(self) -> str:
                return "apns"

            async def send(self, notification: PushNotification) -> DeliveryResult:
                result = await self.client.send_notification(self.build_request(notification))
                return classify_apns_result(result)
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (apns, fcm).

        Returns:
            Provider name string for logging
        """
        pass

    @abstractmethod
    async def send(self, notification: PushNotification) -> DeliveryResult:
        """Deliver the notification to its device token.

        Must handle provider errors and return a DeliveryResult with a
        non-SENT status rather than raising.

        Args:
            notification: Canonical (possibly filtered) notification

        Returns:
            DeliveryResult describing the outcome
        """
        pass

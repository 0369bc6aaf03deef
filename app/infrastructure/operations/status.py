"""Delivery status enumeration.

Coarse outcome of a single direct delivery attempt through a push
provider, used by the dispatcher to pick the response for the caller.
"""

from enum import Enum


class DeliveryStatus(Enum):
    """Status codes for delivery results.

    Attributes:
        SENT: Provider accepted the notification
        INVALID_TOKEN: Device token is permanently bad (unregistered, wrong topic)
        SENDER_MISMATCH: FCM token belongs to another sender; forward instead
        TRANSIENT_FAILURE: Network or provider error not classified as permanent
    """

    SENT = "sent"
    INVALID_TOKEN = "invalid_token"
    SENDER_MISMATCH = "sender_mismatch"
    TRANSIENT_FAILURE = "transient_failure"

"""Delivery result dataclass.

Uniform result type returned by push provider adapters, including status,
a human-friendly message and the provider's own reason code.
"""

from typing import Optional
from dataclasses import dataclass

from infrastructure.operations.status import DeliveryStatus


@dataclass(frozen=True)
class DeliveryResult:
    """Uniform result returned from a push provider.

    Attributes:
        status: DeliveryStatus -- high-level outcome
        message: str -- human-friendly message for logs/troubleshooting
        reason: Optional[str] -- provider reason code (e.g. "BadDeviceToken")
    """

    status: DeliveryStatus
    message: str
    reason: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Helper property to check if the notification was delivered.

        Returns:
            True if status is SENT, False otherwise
        """
        return self.status == DeliveryStatus.SENT

    @classmethod
    def sent(cls, message: str = "ok") -> "DeliveryResult":
        """Create a SENT DeliveryResult."""
        return cls(status=DeliveryStatus.SENT, message=message)

    @classmethod
    def invalid_token(
        cls, message: str, reason: Optional[str] = None
    ) -> "DeliveryResult":
        """Create an INVALID_TOKEN result.

        The caller is told to purge the device token; nothing is retried.

        Args:
            message: Human-friendly error message
            reason: Provider reason code

        Returns:
            DeliveryResult with INVALID_TOKEN status
        """
        return cls(status=DeliveryStatus.INVALID_TOKEN, message=message, reason=reason)

    @classmethod
    def sender_mismatch(
        cls, message: str, reason: Optional[str] = None
    ) -> "DeliveryResult":
        """Create a SENDER_MISMATCH result (FCM only)."""
        return cls(
            status=DeliveryStatus.SENDER_MISMATCH, message=message, reason=reason
        )

    @classmethod
    def transient_failure(
        cls, message: str, reason: Optional[str] = None
    ) -> "DeliveryResult":
        """Create a TRANSIENT_FAILURE result.

        Use for errors that are not proof the token is bad, such as:
        - Network timeouts and connection errors
        - Provider server errors
        - Unclassified provider rejections

        Args:
            message: Human-friendly error message
            reason: Provider reason code

        Returns:
            DeliveryResult with TRANSIENT_FAILURE status
        """
        return cls(
            status=DeliveryStatus.TRANSIENT_FAILURE, message=message, reason=reason
        )

"""Outcome classifiers for push provider responses.

Converts provider-specific results and exceptions (aioapns, firebase-admin)
into standardized DeliveryResult objects, so the dispatcher never needs to
know either SDK's error vocabulary.

Key Functions:
- classify_apns_result(): aioapns NotificationResult → DeliveryResult
- classify_apns_error(): exception raised by aioapns → DeliveryResult
- classify_fcm_error(): exception raised by firebase_admin.messaging → DeliveryResult

Usage:
    from infrastructure.operations.classifiers import classify_fcm_error

    try:
        messaging.send(message, app=app)
    except Exception as exc:
        return classify_fcm_error(exc)
"""

from aioapns.common import NotificationResult
from aioapns.exceptions import ConnectionError as APNsConnectionError
from firebase_admin import exceptions as firebase_exceptions
from firebase_admin import messaging

from infrastructure.operations.result import DeliveryResult

# APNs reasons meaning the token will never work for this topic again
APNS_INVALID_TOKEN_REASONS = frozenset(
    {
        "BadDeviceToken",
        "DeviceTokenNotForTopic",
        "Unregistered",
    }
)


def classify_apns_result(result: NotificationResult) -> DeliveryResult:
    """Classify an APNs response into a DeliveryResult.

    Reason Mapping:
    - success: SENT
    - BadDeviceToken, DeviceTokenNotForTopic, Unregistered: INVALID_TOKEN
    - Other: TRANSIENT_FAILURE

    Args:
        result: NotificationResult returned by aioapns.APNs.send_notification

    Returns:
        DeliveryResult with the provider reason attached
    """
    if result.is_successful:
        return DeliveryResult.sent("Notification sent to APNs")

    if result.description in APNS_INVALID_TOKEN_REASONS:
        return DeliveryResult.invalid_token(
            f"APNs rejected device token ({result.description})",
            reason=result.description,
        )

    return DeliveryResult.transient_failure(
        f"APNs rejected notification ({result.status}): {result.description}",
        reason=result.description,
    )


def classify_apns_error(exc: Exception) -> DeliveryResult:
    """Classify an exception raised while talking to APNs.

    Every exception is transient: a connection failure says nothing about
    the device token.
    """
    if isinstance(exc, APNsConnectionError):
        return DeliveryResult.transient_failure(
            f"APNs connection error: {exc}",
            reason="CONNECTION_ERROR",
        )

    return DeliveryResult.transient_failure(
        f"APNs error: {type(exc).__name__}: {exc}",
        reason="UNKNOWN_ERROR",
    )


def classify_fcm_error(exc: Exception) -> DeliveryResult:
    """Classify an exception raised by firebase_admin.messaging.send.

    Exception Mapping:
    - UnregisteredError: INVALID_TOKEN
    - SenderIdMismatchError: SENDER_MISMATCH (token registered to another sender)
    - FirebaseError: TRANSIENT_FAILURE with the Firebase error code
    - Other: TRANSIENT_FAILURE

    Args:
        exc: Exception raised by firebase_admin

    Returns:
        DeliveryResult with appropriate status
    """
    if isinstance(exc, messaging.UnregisteredError):
        return DeliveryResult.invalid_token(
            f"FCM reports token unregistered: {exc}",
            reason="UNREGISTERED",
        )

    if isinstance(exc, messaging.SenderIdMismatchError):
        return DeliveryResult.sender_mismatch(
            f"FCM token registered for another sender: {exc}",
            reason="SENDER_ID_MISMATCH",
        )

    if isinstance(exc, firebase_exceptions.FirebaseError):
        return DeliveryResult.transient_failure(
            f"FCM error: {exc}",
            reason=str(exc.code),
        )

    return DeliveryResult.transient_failure(
        f"FCM connection error: {type(exc).__name__}: {exc}",
        reason="CONNECTION_ERROR",
    )

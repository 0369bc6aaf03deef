"""Privacy filter for push notifications.

Filtered routes strip message content before a notification leaves this
instance, so neither the provider nor the upstream relay ever sees it. The
device receives only enough metadata (`host`, `messageId`) to fetch the
message from the chat server itself.
"""

from modules.push.models import MESSAGE_ID_ONLY, MessagePayload, PushNotification

DEFAULT_PLACEHOLDER_TEXT = "You have a new message"


def apply_privacy_filter(
    notification: PushNotification,
    enabled: bool,
    placeholder: str = DEFAULT_PLACEHOLDER_TEXT,
) -> PushNotification:
    """Return a content-free variant of the notification.

    Title is emptied, the body replaced by the placeholder, and the payload
    reduced to host and message id with `notificationType` forced to
    `message-id-only`. The returned notification has no raw body, so it is
    re-serialized before forwarding.

    A notification that is already `message-id-only`, or filtering that is
    not enabled, returns the input untouched (raw body included).

    Args:
        notification: Parsed notification
        enabled: Whether the invoked route asks for filtering
        placeholder: Body text shown on the device

    Returns:
        The filtered copy, or the input notification itself.
    """
    if not enabled or notification.is_message_id_only:
        return notification

    payload = MessagePayload(
        host=notification.host,
        message_id=notification.message_id,
        notification_type=MESSAGE_ID_ONLY,
    )
    update = {"title": "", "text": placeholder, "payload": payload}
    # apn.text overrides the alert body on iOS and carries the message text
    if notification.options.apn is not None:
        update["apn"] = notification.options.apn.model_copy(update={"text": ""})
    options = notification.options.model_copy(update=update)
    return notification.with_options(options)

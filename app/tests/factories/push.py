"""Test factories for push gateway requests.

Factories return raw request bodies (bytes) the way the chat backend sends
them, or parsed PushNotification models when a test needs the model.
"""

import json
from typing import Any, Dict, Optional

from modules.push.forwarder import InboundRequest
from modules.push.models import PushNotification, parse_notification

DEFAULT_TOKEN = "a1b2c3d4e5f6"
DEFAULT_HOST = "https://chat.example.com"
DEFAULT_TOPIC = "chat.example.ios"
UPSTREAM_TOPIC = "chat.rocket.ios"


def make_payload_dict(
    host: str = DEFAULT_HOST,
    message_id: str = "msg-1",
    notification_type: Optional[str] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """Create an inner payload as a JSON-ready dict.

    Example:
        >>> make_payload_dict(notification_type="message-id-only")
    """
    payload: Dict[str, Any] = {
        "host": host,
        "messageId": message_id,
        "rid": "room-1",
        "sender": {"_id": "user-1", "username": "alice", "name": "Alice"},
        "senderName": "Alice",
        "type": "d",
    }
    if notification_type is not None:
        payload["notificationType"] = notification_type
    payload.update(extra)
    return payload


def make_request_dict(
    token: str = DEFAULT_TOKEN,
    topic: str = DEFAULT_TOPIC,
    title: str = "Alice",
    text: str = "Secret lunch plans",
    unique_id: str = "workspace-1",
    payload: Optional[Dict[str, Any]] = None,
    include_payload: bool = True,
    **options: Any,
) -> Dict[str, Any]:
    """Create a push request body as a JSON-ready dict."""
    opts: Dict[str, Any] = {
        "createdAt": "2026-10-18T10:00:00.000Z",
        "createdBy": "<SERVER>",
        "sent": False,
        "sending": 0,
        "from": "push",
        "title": title,
        "text": text,
        "userId": "user-2",
        "badge": 3,
        "sound": "default",
        "notId": 42,
        "topic": topic,
        "uniqueId": unique_id,
    }
    if include_payload:
        opts["payload"] = payload if payload is not None else make_payload_dict()
    opts.update(options)
    return {"token": token, "options": opts}


def make_request_body(**kwargs: Any) -> bytes:
    """Create a raw push request body. Accepts make_request_dict arguments."""
    return json.dumps(make_request_dict(**kwargs)).encode()


def make_notification(**kwargs: Any) -> PushNotification:
    """Create a parsed PushNotification. Accepts make_request_dict arguments."""
    return parse_notification(make_request_body(**kwargs))


def make_inbound_request(
    path: str = "/push/gcm/send",
    method: str = "POST",
    query: str = "",
    headers: Optional[list] = None,
    client_ip: str = "10.0.0.1",
) -> InboundRequest:
    return InboundRequest(
        method=method,
        path=path,
        query=query,
        headers=headers
        if headers is not None
        else [
            ("host", "push.example.com"),
            ("content-type", "application/json"),
            ("connection", "close"),
            ("authorization", "Bearer abc"),
        ],
        client_ip=client_ip,
    )

"""Tests for the privacy filter."""

import json

from modules.push.models import MESSAGE_ID_ONLY
from modules.push.privacy import DEFAULT_PLACEHOLDER_TEXT, apply_privacy_filter
from tests.factories.push import DEFAULT_HOST, make_notification, make_payload_dict


def test_disabled_returns_input_unchanged():
    notification = make_notification()
    assert apply_privacy_filter(notification, enabled=False) is notification


def test_strips_content():
    notification = make_notification()

    filtered = apply_privacy_filter(notification, enabled=True)

    opt = filtered.options
    assert opt.title == ""
    assert opt.text == DEFAULT_PLACEHOLDER_TEXT
    assert opt.payload.host == DEFAULT_HOST
    assert opt.payload.message_id == "msg-1"
    assert opt.payload.notification_type == MESSAGE_ID_ONLY
    assert opt.payload.sender is None
    assert opt.payload.rid is None
    assert opt.payload.sender_name is None
    assert filtered.raw_body is None


def test_keeps_routing_fields():
    notification = make_notification()
    filtered = apply_privacy_filter(notification, enabled=True)
    assert filtered.token == notification.token
    assert filtered.options.topic == notification.options.topic
    assert filtered.options.unique_id == notification.options.unique_id
    assert filtered.options.badge == notification.options.badge


def test_custom_placeholder():
    filtered = apply_privacy_filter(make_notification(), True, "New activity")
    assert filtered.options.text == "New activity"


def test_clears_apn_text_override():
    notification = make_notification(apn={"category": "MESSAGE", "text": "Secret"})
    filtered = apply_privacy_filter(notification, enabled=True)
    assert filtered.options.apn.text == ""
    assert filtered.options.apn.category == "MESSAGE"


def test_already_message_id_only_is_untouched():
    body_payload = make_payload_dict(notification_type=MESSAGE_ID_ONLY)
    notification = make_notification(payload=body_payload)

    filtered = apply_privacy_filter(notification, enabled=True)

    assert filtered is notification
    assert filtered.raw_body is not None


def test_is_idempotent():
    once = apply_privacy_filter(make_notification(), enabled=True)
    twice = apply_privacy_filter(once, enabled=True)
    assert twice.options == once.options


def test_does_not_mutate_input():
    notification = make_notification()
    apply_privacy_filter(notification, enabled=True)
    assert notification.options.title == "Alice"
    assert notification.options.payload.sender is not None


def test_rebuilt_body_contains_no_content():
    filtered = apply_privacy_filter(make_notification(), enabled=True)
    body = filtered.body_bytes().decode()
    assert "Secret lunch plans" not in body
    assert "Alice" not in body
    assert json.loads(body)["options"]["payload"]["notificationType"] == MESSAGE_ID_ONLY

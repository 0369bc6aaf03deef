"""Canonical push notification model.

The chat backend posts `{"token": ..., "options": {...}}`. The body is parsed
into a PushNotification that keeps the exact bytes received, so a request
that was not altered can be forwarded byte for byte. Any mutation (the
privacy filter) produces a copy without those bytes, and the body is then
rebuilt from the canonical fields.
"""

from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError
from pydantic import field_validator

from modules.push.errors import MalformedRequest

MESSAGE_ID_ONLY = "message-id-only"


class _Model(BaseModel):
    """Shared config: camelCase aliases on the wire, unknown fields ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Sender(_Model):
    id: Optional[str] = Field(default=None, alias="_id")
    username: Optional[str] = None
    name: Optional[str] = None


class MessagePayload(_Model):
    """Application payload delivered to the device as `ejson`.

    `host` and `message_id` are enough for the app to fetch the message
    itself; everything else identifies the sender and the room.
    """

    host: str = ""
    message_id: str = Field(default="", alias="messageId")
    notification_type: str = Field(default="", alias="notificationType")
    rid: Optional[str] = None
    sender: Optional[Sender] = None
    sender_name: Optional[str] = Field(default=None, alias="senderName")
    type: Optional[str] = None

    @field_validator("host", "message_id", "notification_type", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v


class ApnOptions(_Model):
    category: str = ""
    text: str = ""

    @field_validator("category", "text", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v


class GcmOptions(_Model):
    image: str = ""
    style: str = ""

    @field_validator("image", "style", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v


class PushOptions(_Model):
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    created_by: Optional[str] = Field(default=None, alias="createdBy")
    sent: Optional[bool] = None
    sending: Optional[int] = None
    from_: str = Field(default="", alias="from")
    title: str = ""
    text: str = ""
    user_id: Optional[str] = Field(default=None, alias="userId")
    payload: Optional[MessagePayload] = None
    badge: int = 0
    sound: str = ""
    not_id: int = Field(default=0, alias="notId")
    apn: Optional[ApnOptions] = None
    gcm: Optional[GcmOptions] = None
    topic: str = ""
    unique_id: str = Field(default="", alias="uniqueId")

    @field_validator("from_", "title", "text", "sound", "topic", "unique_id", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v

    @field_validator("badge", "not_id", mode="before")
    @classmethod
    def _null_as_zero(cls, v):
        return 0 if v is None else v


class PushNotification(_Model):
    token: str = ""
    options: PushOptions = Field(default_factory=PushOptions)

    _raw_body: Optional[bytes] = PrivateAttr(default=None)

    @field_validator("token", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v

    @field_validator("options", mode="before")
    @classmethod
    def _null_as_default_options(cls, v):
        return PushOptions() if v is None else v

    @property
    def raw_body(self) -> Optional[bytes]:
        """Exact bytes received, or None once the notification was altered."""
        return self._raw_body

    @property
    def host(self) -> str:
        return self.options.payload.host if self.options.payload is not None else ""

    @property
    def message_id(self) -> str:
        if self.options.payload is None:
            return ""
        return self.options.payload.message_id

    @property
    def notification_type(self) -> str:
        if self.options.payload is None:
            return ""
        return self.options.payload.notification_type

    @property
    def is_message_id_only(self) -> bool:
        return self.notification_type == MESSAGE_ID_ONLY

    def with_options(self, options: PushOptions) -> "PushNotification":
        """Return a copy carrying new options and no raw body."""
        return PushNotification(token=self.token, options=options)

    def body_bytes(self) -> bytes:
        """Bytes to send upstream: the original body if untouched, else re-serialized."""
        if self._raw_body is not None:
            return self._raw_body
        return self.model_dump_json(by_alias=True, exclude_none=True).encode()

    def ejson(self) -> str:
        """JSON of the application payload, as embedded in provider messages."""
        payload = self.options.payload or MessagePayload()
        return payload.model_dump_json(by_alias=True, exclude_none=True)


class DestinationKey(NamedTuple):
    """Who a stream of push traffic is for: recipient id, caller address, server host."""

    unique_id: str
    client_ip: str
    host: str

    @classmethod
    def for_notification(
        cls, notification: PushNotification, client_ip: str
    ) -> "DestinationKey":
        return cls(notification.options.unique_id, client_ip, notification.host)


def parse_notification(raw: bytes) -> PushNotification:
    """Parse a request body into a PushNotification that remembers its bytes.

    Raises:
        MalformedRequest: If the body is not a JSON object of the expected shape.
    """
    try:
        notification = PushNotification.model_validate_json(raw)
    except ValidationError as e:
        raise MalformedRequest(f"Failed to parse request body: {e}") from e
    notification._raw_body = raw
    return notification

"""Destination resolver: deliver directly or forward upstream.

Decision table, evaluated per request:

| Condition                                    | Route       |
|----------------------------------------------|-------------|
| topic is the upstream sentinel topic         | FORWARD     |
| APNs endpoint, topic != configured topic     | MisroutedTopic |
| APNs endpoint, topic == configured topic     | DIRECT_APN  |
| FCM endpoint                                 | DIRECT_FCM  |

A DIRECT_FCM delivery that reports a sender mismatch is forwarded by the
dispatcher afterwards; that fallback is not decided here.
"""

from enum import Enum

from modules.push.errors import MisroutedTopic
from modules.push.models import PushNotification


class PushEndpoint(Enum):
    """Provider named by the invoked route."""

    APN = "apn"
    GCM = "gcm"


class Route(Enum):
    FORWARD = "forward"
    DIRECT_APN = "direct_apn"
    DIRECT_FCM = "direct_fcm"


class DestinationResolver:
    """Routes notifications according to this instance's topics.

    Args:
        apns_topic: Topic (bundle id) this instance delivers for via APNs
        upstream_topic: Sentinel topic that is always forwarded
    """

    def __init__(self, apns_topic: str, upstream_topic: str):
        self.apns_topic = apns_topic
        self.upstream_topic = upstream_topic

    def resolve(self, endpoint: PushEndpoint, notification: PushNotification) -> Route:
        """Pick the route for a notification received on `endpoint`.

        Raises:
            MisroutedTopic: APNs endpoint with a topic this instance does not serve.
        """
        topic = notification.options.topic

        if topic == self.upstream_topic:
            return Route.FORWARD

        if endpoint is PushEndpoint.APN:
            if topic != self.apns_topic:
                raise MisroutedTopic(f"Unknown APNs topic: {topic!r}")
            return Route.DIRECT_APN

        return Route.DIRECT_FCM

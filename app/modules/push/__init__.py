"""Push notification gateway: direct APNs/FCM delivery and upstream forwarding."""

from modules.push.dispatcher import PushDispatcher
from modules.push.errors import PushGatewayError
from modules.push.forwarder import Forwarder, GatewayResponse, InboundRequest
from modules.push.resolver import DestinationResolver, PushEndpoint
from modules.push.stats import StatsRegistry

__all__ = [
    "DestinationResolver",
    "Forwarder",
    "GatewayResponse",
    "InboundRequest",
    "PushDispatcher",
    "PushEndpoint",
    "PushGatewayError",
    "StatsRegistry",
]

"""Push dispatcher: drives a push request from raw body to response.

parse → privacy filter → stats entry → resolve route → provider or forwarder

Provider outcomes map to the caller's response:
- SENT: 200, empty body
- INVALID_TOKEN: InvalidDestination (406), the chat backend purges the token
- SENDER_MISMATCH (FCM only): the request is forwarded upstream instead
- TRANSIENT_FAILURE: ProviderTransientFailure (500)

Provider outcomes never touch the forwarding breaker.
"""

from typing import Optional

from infrastructure.logging import get_module_logger
from infrastructure.operations import DeliveryResult, DeliveryStatus
from modules.push.errors import (
    InvalidDestination,
    ProviderNotConfigured,
    ProviderTransientFailure,
)
from modules.push.forwarder import Forwarder, GatewayResponse, InboundRequest
from modules.push.models import DestinationKey, PushNotification, parse_notification
from modules.push.privacy import DEFAULT_PLACEHOLDER_TEXT, apply_privacy_filter
from modules.push.providers.base import PushProvider
from modules.push.resolver import DestinationResolver, PushEndpoint, Route
from modules.push.stats import StatsEntry, StatsRegistry

logger = get_module_logger()


class PushDispatcher:
    """Handles one push request end to end.

    Args:
        registry: Stats and breaker registry shared by all requests
        resolver: Routing rules for this instance
        forwarder: Upstream relay client
        apns: APNs adapter, or None when APNs credentials are not configured
        fcm: FCM adapter, or None when FCM credentials are not configured
        placeholder_text: Body text used by the privacy filter
    """

    def __init__(
        self,
        registry: StatsRegistry,
        resolver: DestinationResolver,
        forwarder: Forwarder,
        apns: Optional[PushProvider] = None,
        fcm: Optional[PushProvider] = None,
        placeholder_text: str = DEFAULT_PLACEHOLDER_TEXT,
    ):
        self.registry = registry
        self.resolver = resolver
        self.forwarder = forwarder
        self.apns = apns
        self.fcm = fcm
        self.placeholder_text = placeholder_text

    async def dispatch(
        self,
        endpoint: PushEndpoint,
        request: InboundRequest,
        body: bytes,
        filtered: bool,
    ) -> GatewayResponse:
        """Deliver or forward a push request.

        Args:
            endpoint: Provider named by the invoked route
            request: Inbound request metadata, replayed when forwarding
            body: Raw request body
            filtered: Whether the route asks for the privacy filter

        Returns:
            Empty 200 response on direct delivery, or the relayed upstream response

        Raises:
            PushGatewayError: Any failure, carrying the status for the caller
        """
        notification = parse_notification(body)
        logger.info(
            "push_requested",
            endpoint=endpoint.value,
            filtered=filtered,
            unique_id=notification.options.unique_id,
            host=notification.host,
            topic=notification.options.topic,
            client_ip=request.client_ip,
        )

        notification = apply_privacy_filter(
            notification, filtered, self.placeholder_text
        )
        entry = self.registry.get_or_create(
            DestinationKey.for_notification(notification, request.client_ip)
        )

        route = self.resolver.resolve(endpoint, notification)

        if route is Route.FORWARD:
            return await self.forwarder.forward(request, notification, entry)

        if route is Route.DIRECT_APN:
            self.registry.record_direct_apn(entry)
            result = await self._send(self.apns, "apns", notification)
        else:
            self.registry.record_direct_fcm(entry)
            result = await self._send(self.fcm, "fcm", notification)

        return await self._handle_result(result, request, notification, entry)

    async def _send(
        self,
        provider: Optional[PushProvider],
        provider_name: str,
        notification: PushNotification,
    ) -> DeliveryResult:
        if provider is None:
            raise ProviderNotConfigured(f"{provider_name} credentials are not configured")
        return await provider.send(notification)

    async def _handle_result(
        self,
        result: DeliveryResult,
        request: InboundRequest,
        notification: PushNotification,
        entry: StatsEntry,
    ) -> GatewayResponse:
        if result.is_success:
            logger.info("push_delivered", message=result.message)
            return GatewayResponse(status_code=200)

        if result.status is DeliveryStatus.SENDER_MISMATCH:
            logger.info("push_sender_mismatch_forwarding", reason=result.reason)
            self.registry.record_mismatch_forwarded(entry)
            return await self.forwarder.forward(request, notification, entry)

        if result.status is DeliveryStatus.INVALID_TOKEN:
            raise InvalidDestination(result.message)

        raise ProviderTransientFailure(result.message)

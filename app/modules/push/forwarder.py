"""Forwarding of push requests to the upstream relay.

The inbound request is replayed against the upstream host with the same
method, query and headers. Only these parts change:

- scheme and host point at the upstream relay
- the path keeps only the suffix from the last `/push/` (dropping e.g. the
  `/filter` prefix of this instance's own routes)
- the `Connection` header is stripped, and `Host`, `Content-Length` and
  `Transfer-Encoding` are recomputed by the HTTP client
- the body is the notification's original bytes, or a fresh serialization
  if the notification was altered

The upstream status, headers and raw body are relayed to the caller as is.
A 422 from upstream means the relay will never accept traffic for this
destination, so forwarding for it is disabled for the cooldown.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import httpx

from infrastructure.logging import get_module_logger
from modules.push.errors import ForwardingDisabled, UpstreamUnreachable
from modules.push.models import PushNotification
from modules.push.stats import StatsEntry, StatsRegistry

logger = get_module_logger()

PUSH_ROUTE_MARKER = "/push/"
PERMANENT_REJECTION_STATUS = 422

# Request headers the client must compute itself for the new target and body
_REQUEST_HEADERS_DROPPED = frozenset(
    {"connection", "host", "content-length", "transfer-encoding"}
)
# Hop-by-hop response headers; the server recomputes framing for the relayed body
_RESPONSE_HEADERS_DROPPED = frozenset(
    {"connection", "keep-alive", "transfer-encoding", "content-length"}
)

Headers = List[Tuple[str, str]]


@dataclass(frozen=True)
class InboundRequest:
    """The parts of an inbound HTTP request needed to replay it.

    Attributes:
        method: HTTP method
        path: Request path as received (e.g. "/filter/push/gcm/send")
        query: Raw query string without the leading "?"
        headers: Header pairs in received order
        client_ip: Network address of the caller
    """

    method: str
    path: str
    query: str = ""
    headers: Sequence[Tuple[str, str]] = ()
    client_ip: str = "unknown"


@dataclass(frozen=True)
class GatewayResponse:
    """Response handed back to the caller."""

    status_code: int
    headers: Sequence[Tuple[str, str]] = field(default_factory=tuple)
    body: bytes = b""


def upstream_path(path: str) -> str:
    """Keep only the path suffix starting at the last `/push/`."""
    index = path.rfind(PUSH_ROUTE_MARKER)
    if index < 0:
        return path
    return path[index:]


def forwardable_headers(headers: Sequence[Tuple[str, str]]) -> Headers:
    return [(k, v) for k, v in headers if k.lower() not in _REQUEST_HEADERS_DROPPED]


def relayable_headers(headers: Sequence[Tuple[str, str]]) -> Headers:
    return [(k, v) for k, v in headers if k.lower() not in _RESPONSE_HEADERS_DROPPED]


class Forwarder:
    """Replays push requests to the upstream relay behind the circuit breaker.

    Args:
        client: Shared async HTTP client (owned by the application lifespan)
        registry: Stats and breaker registry
        upstream_host: Host name of the upstream relay
        scheme: URL scheme for the upstream relay
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        registry: StatsRegistry,
        upstream_host: str,
        scheme: str = "https",
    ):
        self.client = client
        self.registry = registry
        self.upstream_host = upstream_host
        self.scheme = scheme

    def upstream_url(self, request: InboundRequest) -> str:
        url = f"{self.scheme}://{self.upstream_host}{upstream_path(request.path)}"
        if request.query:
            url = f"{url}?{request.query}"
        return url

    def build_request(
        self, request: InboundRequest, notification: PushNotification
    ) -> httpx.Request:
        return self.client.build_request(
            request.method,
            self.upstream_url(request),
            headers=forwardable_headers(request.headers),
            content=notification.body_bytes(),
        )

    async def forward(
        self,
        request: InboundRequest,
        notification: PushNotification,
        entry: StatsEntry,
    ) -> GatewayResponse:
        """Forward a notification upstream and relay the answer.

        The forward is counted before the breaker gate, so the forwarded
        counter also includes requests refused while the destination is
        disabled.

        Raises:
            ForwardingDisabled: The destination is inside its cooldown; no
                network call is made.
            UpstreamUnreachable: Connection error or timeout; the breaker is
                left untouched.
        """
        self.registry.record_forwarded(entry)

        if self.registry.is_disabled(entry):
            raise ForwardingDisabled(
                f"Forwarding disabled until {entry.disabled_until.get()}"
            )

        upstream_request = self.build_request(request, notification)
        logger.info(
            "forwarding_request",
            upstream_url=str(upstream_request.url),
            rebuilt_body=notification.raw_body is None,
        )

        try:
            response = await self.client.send(upstream_request, stream=True)
            try:
                body = b"".join([chunk async for chunk in response.aiter_raw()])
            finally:
                await response.aclose()
        except httpx.HTTPError as e:
            raise UpstreamUnreachable(
                f"Failed to forward request: {type(e).__name__}: {e}"
            ) from e

        logger.debug(
            "upstream_response",
            status_code=response.status_code,
            body=body.decode("utf-8", errors="replace"),
        )

        if response.status_code == PERMANENT_REJECTION_STATUS:
            disabled_until = self.registry.disable(entry)
            logger.error(
                "forwarding_rejected_destination_disabled",
                status_code=response.status_code,
                unique_id=entry.key.unique_id,
                client_ip=entry.key.client_ip,
                host=entry.key.host,
                disabled_until=disabled_until.isoformat(),
            )
        elif response.status_code >= 300:
            logger.error(
                "forwarding_failed",
                status_code=response.status_code,
                host=entry.key.host,
            )

        return GatewayResponse(
            status_code=response.status_code,
            headers=relayable_headers(response.headers.multi_items()),
            body=body,
        )


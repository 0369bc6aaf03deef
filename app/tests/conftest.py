from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import httpx
import pytest

from infrastructure.operations import DeliveryResult
from modules.push import (
    DestinationResolver,
    Forwarder,
    PushDispatcher,
    StatsRegistry,
)
from tests.factories.push import DEFAULT_TOPIC, UPSTREAM_TOPIC

UPSTREAM_HOST = "gateway.example.net"


class FakeClock:
    """Manually advanced clock for breaker cooldown tests."""

    def __init__(self, start=None):
        self.now = start or datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


class UpstreamRecorder:
    """httpx.MockTransport handler that records requests and replies canned responses."""

    def __init__(self, status_code=200, headers=None, content=b'{"ok":true}'):
        self.status_code = status_code
        self.headers = headers or {"content-type": "application/json"}
        self.content = content
        self.requests = []
        self.error = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        # streamed so the forwarder can read the raw, undecoded body
        return httpx.Response(
            self.status_code,
            headers=self.headers,
            stream=httpx.ByteStream(self.content),
        )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    return StatsRegistry(disable_seconds=3600, clock=clock)


@pytest.fixture
def upstream():
    return UpstreamRecorder()


@pytest.fixture
def http_client(upstream):
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def forwarder(http_client, registry):
    return Forwarder(client=http_client, registry=registry, upstream_host=UPSTREAM_HOST)


@pytest.fixture
def resolver():
    return DestinationResolver(apns_topic=DEFAULT_TOPIC, upstream_topic=UPSTREAM_TOPIC)


@pytest.fixture
def apns_provider():
    provider = AsyncMock()
    provider.provider_name = "apns"
    provider.send.return_value = DeliveryResult.sent()
    return provider


@pytest.fixture
def fcm_provider():
    provider = AsyncMock()
    provider.provider_name = "fcm"
    provider.send.return_value = DeliveryResult.sent()
    return provider


@pytest.fixture
def dispatcher(registry, resolver, forwarder, apns_provider, fcm_provider):
    return PushDispatcher(
        registry=registry,
        resolver=resolver,
        forwarder=forwarder,
        apns=apns_provider,
        fcm=fcm_provider,
    )

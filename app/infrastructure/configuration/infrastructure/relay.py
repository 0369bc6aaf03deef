"""Upstream relay and forwarding infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class RelaySettings(InfrastructureSettings):
    """Forwarding configuration for the upstream push relay.

    Requests this instance does not deliver itself are replayed to the
    upstream gateway. A destination whose forwards are rejected with 422 is
    disabled for FORWARDING_DISABLE_SECONDS.

    Environment Variables:
        UPSTREAM_GATEWAY: Host name of the upstream relay
        UPSTREAM_SCHEME: URL scheme used to reach the relay (default: https)
        UPSTREAM_APNS_TOPIC: Topic that is never delivered directly
        FORWARDING_DISABLE_SECONDS: Cooldown after a permanent rejection
        FORWARD_TIMEOUT_SECONDS: HTTP timeout for a forwarded request
        FILTER_PLACEHOLDER_TEXT: Body text used by the privacy filter

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        cooldown = settings.relay.FORWARDING_DISABLE_SECONDS
        upstream = settings.relay.UPSTREAM_GATEWAY
        ```
    """

    UPSTREAM_GATEWAY: str = Field(
        default="gateway.rocket.chat", alias="UPSTREAM_GATEWAY"
    )
    UPSTREAM_SCHEME: str = Field(default="https", alias="UPSTREAM_SCHEME")
    UPSTREAM_APNS_TOPIC: str = Field(
        default="chat.rocket.ios", alias="UPSTREAM_APNS_TOPIC"
    )
    FORWARDING_DISABLE_SECONDS: int = Field(
        default=3600, alias="FORWARDING_DISABLE_SECONDS"
    )
    FORWARD_TIMEOUT_SECONDS: float = Field(
        default=30.0, alias="FORWARD_TIMEOUT_SECONDS"
    )
    FILTER_PLACEHOLDER_TEXT: str = Field(
        default="You have a new message", alias="FILTER_PLACEHOLDER_TEXT"
    )

"""Errors for the push module.

Every failure of a push request is terminal for that request and is
reported to the caller through the HTTP status carried by the error.
"""


class PushGatewayError(Exception):
    """Base class for errors surfaced to the caller as a status code.

    Attributes:
        message: human-friendly message for logs
        status_code: HTTP status returned to the caller
    """

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedRequest(PushGatewayError):
    """The request body could not be parsed into a notification."""

    status_code = 400


class MisroutedTopic(PushGatewayError):
    """Direct APNs delivery was requested for a topic this instance does not serve."""

    status_code = 400


class InvalidDestination(PushGatewayError):
    """The provider reported the device token as permanently bad.

    Answered with 406 so the chat backend purges the token.
    """

    status_code = 406


class ForwardingDisabled(PushGatewayError):
    """Forwarding for this destination is suspended after an upstream rejection."""

    status_code = 422


class ProviderNotConfigured(PushGatewayError):
    """Direct delivery was routed to a provider without credentials."""

    status_code = 500


class ProviderTransientFailure(PushGatewayError):
    """The provider failed for a reason that says nothing about the token."""

    status_code = 500


class UpstreamUnreachable(PushGatewayError):
    """The upstream relay could not be reached (connection error, timeout)."""

    status_code = 500

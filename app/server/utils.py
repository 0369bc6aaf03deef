from fastapi import Request

from infrastructure.services.providers import get_settings


def get_client_ip(request: Request) -> str:
    """Network address of the caller.

    The first `X-Forwarded-For` entry is used only when
    TRUST_FORWARDED_FOR is enabled; otherwise callers could pick their own
    destination key.
    """
    if get_settings().server.TRUST_FORWARDED_FOR:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            first = forwarded_for.split(",")[0].strip()
            if first:
                return first
    if request.client:
        return request.client.host
    return "unknown"

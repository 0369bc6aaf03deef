"""Request-scoped logging context.

Every log line emitted while a push request is handled carries the same
correlation id, path, method and caller address. Values live in
structlog's contextvars, so they follow the request across awaits.
"""

import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import structlog

CORRELATION_ID = "correlation_id"


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    request_path: Optional[str] = None,
    request_method: Optional[str] = None,
    client_ip: Optional[str] = None,
    **extra_context: Any,
) -> Iterator[None]:
    """Bind request fields for the duration of the block.

    A correlation id is generated when none is given. Fields passed as None
    are not bound. Everything bound here is unbound on exit, even on error.

    Example:
        with bind_request_context(
            correlation_id=request.headers.get("X-Request-ID"),
            request_path=request.url.path,
        ):
            response = await call_next(request)
    """
    optional = {
        "request_path": request_path,
        "request_method": request_method,
        "client_ip": client_ip,
    }
    context: Dict[str, Any] = {CORRELATION_ID: correlation_id or str(uuid.uuid4())}
    context.update({k: v for k, v in optional.items() if v is not None})
    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context)


def get_correlation_id() -> Optional[str]:
    """Correlation id of the request being handled, if any."""
    return structlog.contextvars.get_contextvars().get(CORRELATION_ID)

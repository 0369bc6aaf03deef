from starlette.middleware.base import BaseHTTPMiddleware

from infrastructure.logging import bind_request_context, get_correlation_id
from server.utils import get_client_ip

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds a correlation id and request details to every log of the request."""

    async def dispatch(self, request, call_next):
        with bind_request_context(
            correlation_id=request.headers.get(REQUEST_ID_HEADER),
            request_path=request.url.path,
            request_method=request.method,
            client_ip=get_client_ip(request),
        ):
            correlation_id = get_correlation_id()
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = correlation_id
            return response

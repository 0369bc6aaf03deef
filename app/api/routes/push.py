from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.dependencies.dispatcher import DispatcherDep
from infrastructure.logging import get_module_logger
from modules.push import (
    GatewayResponse,
    InboundRequest,
    PushDispatcher,
    PushEndpoint,
    PushGatewayError,
)
from server.utils import get_client_ip

logger = get_module_logger()
router = APIRouter(tags=["Push"])

PUSH_PATHS = frozenset(
    {
        "/push/apn/send",
        "/push/gcm/send",
        "/filter/push/apn/send",
        "/filter/push/gcm/send",
    }
)


def _to_response(gateway_response: GatewayResponse) -> Response:
    response = Response(
        content=gateway_response.body, status_code=gateway_response.status_code
    )
    for key, value in gateway_response.headers:
        response.headers.append(key, value)
    return response


async def _handle_push(
    request: Request,
    dispatcher: PushDispatcher,
    endpoint: PushEndpoint,
    filtered: bool,
) -> Response:
    """Run a push request through the dispatcher and shape the HTTP answer.

    Every PushGatewayError becomes an empty response with the error's status.
    """
    inbound = InboundRequest(
        method=request.method,
        path=request.url.path,
        query=request.url.query,
        headers=request.headers.items(),
        client_ip=get_client_ip(request),
    )
    body = await request.body()

    try:
        gateway_response = await dispatcher.dispatch(endpoint, inbound, body, filtered)
    except PushGatewayError as e:
        logger.error(
            "push_request_failed",
            error_type=type(e).__name__,
            error=e.message,
            status_code=e.status_code,
            endpoint=endpoint.value,
        )
        return Response(status_code=e.status_code)

    return _to_response(gateway_response)


@router.post("/push/apn/send")
async def push_apn(request: Request, dispatcher: DispatcherDep):
    """Deliver through APNs or forward upstream."""
    return await _handle_push(request, dispatcher, PushEndpoint.APN, filtered=False)


@router.post("/push/gcm/send")
async def push_gcm(request: Request, dispatcher: DispatcherDep):
    """Deliver through FCM or forward upstream."""
    return await _handle_push(request, dispatcher, PushEndpoint.GCM, filtered=False)


@router.post("/filter/push/apn/send")
async def push_apn_filtered(request: Request, dispatcher: DispatcherDep):
    """Same as /push/apn/send with message content stripped first."""
    return await _handle_push(request, dispatcher, PushEndpoint.APN, filtered=True)


@router.post("/filter/push/gcm/send")
async def push_gcm_filtered(request: Request, dispatcher: DispatcherDep):
    """Same as /push/gcm/send with message content stripped first."""
    return await _handle_push(request, dispatcher, PushEndpoint.GCM, filtered=True)


async def push_http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Push routes answer with empty bodies, including 405 for other methods."""
    if request.url.path in PUSH_PATHS:
        return Response(status_code=exc.status_code, headers=exc.headers)
    return await http_exception_handler(request, exc)


def setup_push_error_handlers(app: FastAPI):
    app.add_exception_handler(StarletteHTTPException, push_http_exception_handler)

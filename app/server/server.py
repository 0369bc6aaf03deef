from fastapi import FastAPI

from api.router import api_router
from api.routes.push import setup_push_error_handlers
from server.lifespan import lifespan
from server.middleware import RequestContextMiddleware

handler = FastAPI(title="Push Gateway", lifespan=lifespan)
handler.add_middleware(RequestContextMiddleware)
setup_push_error_handlers(handler)

handler.include_router(api_router)

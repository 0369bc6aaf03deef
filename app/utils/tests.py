from fastapi import FastAPI


def create_test_app(routers, middlewares=None, state=None) -> FastAPI:
    """
    Create a FastAPI test application with the given routers and middlewares.

    Args:
        routers: The router (or list of routers) to include in the app.
        middlewares: Optional list of (middleware_class, config_dict) tuples.
        state: Optional mapping of attributes to set on app.state.

    Returns:
        FastAPI: A configured FastAPI application.

    Example:
        app = create_test_app([router1, router2], state={"dispatcher": dispatcher})
    """
    app = FastAPI()

    for key, value in (state or {}).items():
        setattr(app.state, key, value)

    if middlewares:
        for middleware_class, middleware_config in middlewares:
            app.add_middleware(middleware_class, **middleware_config)

    if not isinstance(routers, list):
        routers = [routers]
    for router in routers:
        app.include_router(router)

    return app

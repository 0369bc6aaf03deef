"""Server infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class ServerSettings(InfrastructureSettings):
    """HTTP server configuration.

    Environment Variables:
        HOST: Interface uvicorn binds to (default: 0.0.0.0)
        PORT: Port uvicorn listens on (default: 8000)
        TRUST_FORWARDED_FOR: Take the caller address from the first
            X-Forwarded-For entry (default: False). Enable only behind a proxy
            that overwrites the header, since the address is part of the
            stats and circuit breaker key.

    Example:
        ```python
        from infrastructure.configuration import Settings

        settings = Settings()
        port = settings.server.PORT
        ```
    """

    HOST: str = Field(default="0.0.0.0", alias="HOST")
    PORT: int = Field(default=8000, alias="PORT")
    TRUST_FORWARDED_FOR: bool = Field(default=False, alias="TRUST_FORWARDED_FOR")

import uvicorn

from infrastructure.services import get_settings
from server import server

server_app = server.handler


def main():
    """Run the push gateway."""
    settings = get_settings()
    uvicorn.run(server_app, host=settings.server.HOST, port=settings.server.PORT)


if __name__ == "__main__":
    main()

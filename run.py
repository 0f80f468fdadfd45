"""Entry point for the Restaurant Directory API.

Reads the settings from the environment once, builds the application
and serves it with Uvicorn on ``HOST``/``PORT`` (defaults ``0.0.0.0``
and ``80``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from restaurant_directory_api.app.core.config import Settings
from restaurant_directory_api.app.main import create_app


async def main() -> None:
    """Serve the API until interrupted."""
    settings = Settings.from_env()
    app = create_app(settings)
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info(
        "Server is running on http://%s:%s", settings.host, settings.port
    )
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass

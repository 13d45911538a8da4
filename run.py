"""Entry point for the Booking Platform API.

Starts the FastAPI application with Uvicorn.  Run it from the project
root, for example under Docker, where only a single Python file is
given to the interpreter.  Configuration (``DATABASE_URL``,
``SECRET_KEY``, ``UPLOAD_DIR``, ...) is read from the environment.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from booking_platform_api.app.main import app


async def main() -> None:
    """Serve the API.

    Host and port are read from ``API_HOST`` and ``API_PORT``; defaults
    are ``0.0.0.0`` and ``8000``.
    """
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    logging.getLogger(__name__).info("Serving Booking Platform API on %s:%s", host, port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Stopped")

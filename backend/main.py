"""FastAPI backend application entry point.

This module builds the application with the factory and serves it with
uvicorn. The module-level ``app`` is what uvicorn imports.
"""
import logging
import os

import uvicorn

from backend.app_factory import create_app, get_network_addresses

logger = logging.getLogger(__name__)

app = create_app()


def main() -> None:
    """Run the application using uvicorn when executed directly."""
    ctx = app.state.context
    port = ctx.api_port
    host = os.getenv("HOST", "0.0.0.0")

    logger.info("Server running at:")
    logger.info("  Local:   http://localhost:%d", port)
    for address in get_network_addresses():
        logger.info("  Network: http://%s:%d", address, port)

    # Reloading would fork a second world; the simulation state is in-process
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=os.getenv("FISHFIGHT_LOG_LEVEL", "info").lower(),
        loop="asyncio" if os.name == "nt" else "auto",
    )


if __name__ == "__main__":
    main()

"""
FastAPI application entry point for the Students API.

This module creates the FastAPI app instance, registers the students router,
and provides `run()`, the process entry point that serves the app until a
shutdown signal arrives.
"""

import logging
from typing import Optional, Sequence

from fastapi import FastAPI

from students_api.config import must_load
from students_api.routes.students import router as students_router
from students_api.server import ServerLifecycle, ShutdownTimeoutError
from students_api.utils.logging import LOG_FORMAT, configure_logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT
)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the application with its single route."""
    app = FastAPI(
        title="Students API",
        description="Create-student validation service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.include_router(students_router)

    return app


app = create_app()


def run(argv: Optional[Sequence[str]] = None) -> None:
    """
    Serve the API until SIGINT/SIGTERM, then drain and stop.

    Configuration errors terminate the process with exit status 1.
    A drain that exceeds the grace period is logged and the process
    still exits.
    """
    config = must_load(argv)
    configure_logging(config.log_level)

    lifecycle = ServerLifecycle(config, app)
    lifecycle.listen_for_signals()
    lifecycle.start()

    received = lifecycle.wait_for_shutdown_signal()
    logger.info(f"shutting down the server (signal: {received.name})")

    try:
        lifecycle.shutdown()
    except ShutdownTimeoutError as e:
        logger.error(f"Failed to shutdown server: {e}")
    else:
        logger.info("server shutdown successfully")


if __name__ == "__main__":
    run()

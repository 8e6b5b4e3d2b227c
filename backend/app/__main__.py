from __future__ import annotations

import logging

import uvicorn

from app.config import get_settings
from app.main import VERSION, configure_logging, create_app

logger = logging.getLogger("app")

ENDPOINTS = (
    ("GET", "/", "Root"),
    ("GET", "/health", "Health check"),
    ("GET", "/api/users", "Get all users"),
    ("POST", "/api/users", "Create user"),
    ("GET", "/api/users/{id}", "Get user by ID"),
    ("PUT", "/api/users/{id}", "Update user"),
    ("DELETE", "/api/users/{id}", "Delete user"),
)


def main() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    logger.info("Starting User Service API %s on %s", VERSION, settings.server_address)
    app = create_app(settings=settings)

    for method, path, summary in ENDPOINTS:
        logger.info("  %-6s %-16s - %s", method, path, summary)

    uvicorn.run(app, host=settings.SERVER_HOST, port=settings.SERVER_PORT, log_config=None)


if __name__ == "__main__":
    main()

"""Main entry point - runs the API server."""

import logging

import uvicorn

from vyswap.api.app import create_app
from vyswap.config import get_settings

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    settings = get_settings()

    # Configure logging
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info("Starting VyFinance Swap API...")
    logger.info(f"Environment: {settings.environment}")
    if not (settings.has_kupo or settings.has_blockfrost):
        logger.warning("KUPO_URL / BLOCKFROST credentials not set - pool endpoints will fail")

    app = create_app(settings)
    logger.info(f"Starting API server on {settings.api_host}:{settings.api_port}")
    logger.info(f"API docs: http://{settings.api_host}:{settings.api_port}/docs")

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()

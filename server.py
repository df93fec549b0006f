#!/usr/bin/env python3
"""
Server entry point for the DSA Coach relay.
"""
import sys

import uvicorn

from relay.config import Settings, settings, logger


def require_api_key(settings: Settings) -> None:
    """Exit when no model credential is configured."""
    if not settings.GEMINI_API_KEY:
        logger.error("GEMINI_API_KEY not found in environment variables")
        logger.error("Create a .env file with: GEMINI_API_KEY=your_key_here")
        sys.exit(1)


def main():
    """Run the server."""
    require_api_key(settings)
    logger.info(f"Starting DSA Coach relay on {settings.HOST}:{settings.PORT}")

    uvicorn.run(
        "relay.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()

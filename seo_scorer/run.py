#!/usr/bin/env python
"""Entry point for running the seo-scorer application."""

import uvicorn

from seo_scorer.app.config import settings


def main() -> None:
    """Run the application using uvicorn server."""
    uvicorn.run(
        "seo_scorer.app.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.SERVER_RELOAD,
    )


if __name__ == "__main__":
    main()

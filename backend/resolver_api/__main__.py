"""CLI entry point for launching the resolver service with Uvicorn."""
import logging

import uvicorn

from .app import create_app
from .settings import ResolverSettings


def main() -> None:
    """Start a development server for the resolver service."""

    settings = ResolverSettings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(create_app(settings), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()

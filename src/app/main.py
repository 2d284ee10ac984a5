import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from src.app.containers import Container
from src.app.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(container: Container) -> AsyncIterator[Container]:
    """
    Run the core for the lifetime of the calling application.

    Configures logging, checks the record store is reachable and closes the
    shared connection pool on exit.
    """
    config = container.config()
    configure_logging(config.logging.level)
    logger.info("Starting %s %s...", config.app_name, config.app_version)

    db = container.database()
    await db.ping()
    logger.info("Connected to database '%s'", db.name)

    try:
        yield container
    finally:
        logger.info("Shutting down %s...", config.app_name)
        await db.close()


def create_container() -> Container:
    """Create the dependency injection container for the application."""
    return Container()

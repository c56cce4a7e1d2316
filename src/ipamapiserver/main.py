# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

import asyncio
import logging

import structlog

from ipamapiserver.app import create_app
from ipamapiserver.settings import Config, read_config
from ipamservicelayer.db import Database
from ipamservicelayer.logging.configure import configure_logging

logger = structlog.getLogger()

DATABASE_STARTUP_ATTEMPTS = 10
DATABASE_STARTUP_DELAY_SECONDS = 2


def config_uvicorn_logging(level=logging.INFO) -> None:
    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("uvicorn.asgi").setLevel(level)
    # We have already a middleware to log this info: let's log only ERROR unless debug is enabled.
    logging.getLogger("uvicorn.access").setLevel(
        logging.ERROR if level == logging.INFO else level
    )


async def wait_for_database(
    db: Database,
    attempts: int = DATABASE_STARTUP_ATTEMPTS,
    delay: float = DATABASE_STARTUP_DELAY_SECONDS,
):
    """
    Wait until the database accepts connections. The last error is raised if
    it never does.
    """
    for attempt in range(1, attempts + 1):
        try:
            await db.ping()
        except Exception as e:
            if attempt == attempts:
                logger.error(
                    "Database is not reachable, giving up", attempts=attempts
                )
                raise
            logger.info(
                f"Database is not ready. Retrying in {delay} seconds",
                attempt=attempt,
                error=str(e),
            )
            await asyncio.sleep(delay)
        else:
            return


async def serve(config: Config):
    db = Database(config.db, echo=config.debug_queries)
    try:
        await wait_for_database(db)
        await db.create_schema()
        app = create_app(config, db)
        logger.info(
            "Starting the API server", host=config.host, port=config.port
        )
        await app.server.serve()
    finally:
        await db.dispose()


def run(app_config: Config | None = None):
    if app_config is None:
        app_config = read_config()

    configure_logging(
        level=logging.DEBUG if app_config.debug else logging.INFO,
        query_level=(
            logging.DEBUG if app_config.debug_queries else logging.WARNING
        ),
    )
    config_uvicorn_logging(
        logging.DEBUG if app_config.debug else logging.INFO
    )
    asyncio.run(serve(app_config))


if __name__ == "__main__":
    run()

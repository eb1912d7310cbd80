"""
Database initialization and verification script.

Creates any missing tables and verifies connectivity. Run it with
``python -m app.db.init_db``.

Note:
    Production schema is managed by Alembic migrations.
    Run 'alembic upgrade head' to apply migrations.
"""

from asyncio import run as asyncio_run
from logging import getLogger

from app.configs import file_logger, settings
from app.db.database import Database
from app.errors.database import DatabaseInitializationError

logger = file_logger(getLogger(__name__))


async def main() -> None:
    """Create tables and verify the database connection."""
    database = Database.from_settings(settings)
    try:
        logger.info("Verifying database connection...")
        await database.create_all()
        ready = await database.ping()
    except Exception as e:
        logger.exception("Failed to connect to database")
        raise DatabaseInitializationError from e
    finally:
        await database.dispose()

    if not ready:
        raise DatabaseInitializationError
    logger.info("Database ready!")


if __name__ == "__main__":
    asyncio_run(main())

"""
Initialize database schema directly using SQLModel.

Creates the five tables and their partial unique indexes on the configured
database. Existing tables are left untouched.

Usage:
    python -m asset_allocation.scripts.init_db_schema
"""

import sys

from sqlalchemy.exc import SQLAlchemyError

from asset_allocation.core.config import settings
from asset_allocation.core.db import build_engine, init_db
from asset_allocation.core.observability import configure_logging, get_logger
from asset_allocation.infrastructure.database.models import TABLE_NAMES

logger = get_logger(__name__)


def create_database_schema() -> bool:
    """Create all database tables using SQLModel."""
    logger.info(
        "Initializing database schema",
        database=settings.POSTGRES_DB,
        host=settings.POSTGRES_SERVER,
    )

    engine = build_engine(settings)
    try:
        init_db(engine)
    except SQLAlchemyError as e:
        logger.error("Failed to create database schema", error=str(e))
        return False
    finally:
        engine.dispose()

    logger.info("Database schema created", tables=list(TABLE_NAMES))
    return True


def main() -> int:
    configure_logging(settings)
    return 0 if create_database_schema() else 1


if __name__ == "__main__":
    sys.exit(main())

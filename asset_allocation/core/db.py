from collections.abc import Callable
from functools import partial

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from asset_allocation.core.config import Settings, get_settings


def build_engine(settings: Settings | None = None) -> Engine:
    """Create the application engine.

    PostgreSQL connections run every transaction at the configured isolation
    level (Read Committed by default). Other backends keep their driver default.
    """
    settings = settings or get_settings()
    url = str(settings.SQLALCHEMY_DATABASE_URI)

    engine_kwargs = {
        "echo": settings.LOG_SQL,
        "pool_pre_ping": settings.DATABASE_POOL_PRE_PING,
    }
    if url.startswith("postgresql"):
        engine_kwargs.update(
            {
                "isolation_level": settings.DATABASE_ISOLATION_LEVEL,
                "pool_recycle": settings.DATABASE_POOL_RECYCLE,
                "pool_size": settings.DATABASE_POOL_SIZE,
                "max_overflow": settings.DATABASE_MAX_OVERFLOW,
                "connect_args": {"application_name": settings.PROJECT_NAME},
            }
        )

    return create_engine(url, **engine_kwargs)


_engine: Engine | None = None


def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first use."""
    global _engine
    if _engine is None:
        _engine = build_engine()
    return _engine


def init_db(engine: Engine) -> None:
    """Create all tables and indexes known to the SQLModel metadata."""
    # Table models must be registered on the metadata before create_all
    from asset_allocation.infrastructure.database import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def create_session_factory(engine: Engine) -> Callable[[], Session]:
    """Session factory handed to units of work. Loaded rows stay readable after commit."""
    return partial(Session, engine, expire_on_commit=False)

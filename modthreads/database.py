from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from modthreads.config import get_settings

settings = get_settings()


def _engine_options() -> dict[str, Any]:
    options: dict[str, Any] = {"echo": settings.debug, "future": True}
    # SQLite uses a singleton/static pool that rejects sizing arguments
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_pre_ping=True,
        )
    return options


engine = create_engine(settings.database_url, **_engine_options())
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


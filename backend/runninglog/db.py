import os

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from runninglog.core.config import settings

# SQLAlchemy Base class for models to inherit
Base = declarative_base()


def make_engine(url: str):
    """Create an engine; in-memory sqlite shares one connection across threads."""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


engine = make_engine(settings.resolved_database_url)

# Factory that creates DB sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None) -> None:
    if bind is None:
        os.makedirs(settings.data_dir, exist_ok=True)
    from runninglog.models.run import RunData  # noqa: F401  (registers table)

    Base.metadata.create_all(bind=bind or engine)


# Dependency we will use in FastAPI routes
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

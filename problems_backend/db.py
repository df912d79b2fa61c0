from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


# PUBLIC_INTERFACE
def build_engine(database_url: str) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL.

    SQLite connections are shared across the FastAPI threadpool, and an
    in-memory SQLite database is pinned to a single connection so every
    session sees the same data. Client/server databases get pre-ping.
    """
    url = make_url(database_url)
    engine_args: Dict[str, Any] = {}
    if url.get_backend_name() == "sqlite":
        engine_args["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            engine_args["poolclass"] = StaticPool
    else:
        engine_args["pool_pre_ping"] = True

    return create_engine(url, **engine_args)


# PUBLIC_INTERFACE
def build_session_factory(engine: Engine) -> sessionmaker:
    """Session factory; objects stay readable after commit."""
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def create_tables(engine: Engine) -> None:
    """Create tables for every registered model if they do not exist."""
    # Registers the models on Base.metadata.
    from problems_backend import models  # noqa: F401

    Base.metadata.create_all(bind=engine)

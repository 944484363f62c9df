"""SQLAlchemy engine and session factory configuration."""

from __future__ import annotations

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from hyperinvoice.db.base import Base

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    """Create an engine; SQLite connections may be used from worker threads."""

    url = make_url(database_url)
    kwargs: dict[str, object] = {"future": True}
    if url.drivername.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    engine = create_engine(url, **kwargs)
    logger.info("Database engine initialised for %s", url.render_as_string(hide_password=True))
    return engine


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


def init_db(engine: Engine) -> None:
    """Create missing tables."""

    # Imported for its side effect of registering the table on Base.metadata
    from hyperinvoice.models import invoice  # noqa: F401

    Base.metadata.create_all(bind=engine)


__all__ = ["build_engine", "build_session_factory", "init_db"]

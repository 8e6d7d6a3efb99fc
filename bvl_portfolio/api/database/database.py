from __future__ import annotations

from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from bvl_portfolio.config import Settings

Base = declarative_base()


def build_url(settings: Settings) -> URL:
    """
    Database URL with the datastore key merged in as the connection password.
    The key is kept out of DATABASE_URL; SQLite URLs take no password.
    """
    url = make_url(settings.datastore_url)
    if url.password is None and not url.drivername.startswith("sqlite"):
        url = url.set(password=settings.datastore_key)
    return url


def build_engine(settings: Settings) -> Engine:
    """Create the process-wide engine."""
    return create_engine(build_url(settings), pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db(request: Request) -> Iterator[Session]:
    # Session factory is attached to app.state by create_app().
    session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()

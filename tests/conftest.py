from __future__ import annotations

import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

# Keep Settings.from_env() usable during test discovery without a real .env file.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("DATABASE_KEY", "test-key")

from bvl_portfolio.api.database.database import Base, build_session_factory  # noqa: E402
from bvl_portfolio.config import Settings  # noqa: E402
from bvl_portfolio.models import price_history, stock, stock_operation  # noqa: E402,F401


@pytest.fixture
def settings() -> Settings:
    return Settings(
        feed_base_url="https://feed.test/v1/stock-quote/daily",
        datastore_url="sqlite://",
        datastore_key="test-key",
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)

# ABOUTME: Shared pytest fixtures for store-backed tests
# ABOUTME: Provides an in-memory record store and a fresh configuration per test

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession

from webdev_scraper.config import reload_config
from webdev_scraper.persistence import RecordStore

LISTING_HTML = """
<html>
  <body>
    <div class="listing">
      <p class="title"><a href="/a">Post A</a></p>
      <p class="title">Post B</p>
    </div>
  </body>
</html>
"""


@pytest.fixture
def listing_html() -> str:
    """Listing page with one linked title and one bare title."""
    return LISTING_HTML


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Ignore any WEBDEV_SCRAPER_* variables from the developer's shell."""
    for key in list(os.environ):
        if key.startswith("WEBDEV_SCRAPER_"):
            monkeypatch.delenv(key)
    reload_config()
    yield
    reload_config()


@pytest_asyncio.fixture
async def store() -> AsyncGenerator[RecordStore, None]:
    """Provide an in-memory record store for async tests."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    db = RecordStore("sqlite+aiosqlite:///:memory:")
    db.engine = engine
    db.async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await db.create_tables()
    yield db
    await db.close()

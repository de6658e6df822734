"""Shared fixtures: a throwaway SQLite blog per test."""

import pytest

from inkwell.app import Blog
from inkwell.config import BlogConfig
from inkwell.data.database import Database
from inkwell.data.migrate import migrate
from inkwell.data.posts import PostStore
from inkwell.testing import TestClient


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'blog.db'}"


@pytest.fixture
async def db(db_url):
    """A connected, migrated database."""
    db = Database(db_url)
    await db.connect()
    await migrate(db)
    yield db
    await db.disconnect()


@pytest.fixture
def store(db) -> PostStore:
    return PostStore(db)


@pytest.fixture
def blog(db_url) -> Blog:
    return Blog(BlogConfig(database_url=db_url))


@pytest.fixture
async def client(blog):
    async with TestClient(blog) as client:
        yield client

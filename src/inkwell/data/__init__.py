"""Typed async database access and the post store.

SQL in, frozen dataclasses out. Not an ORM::

    from inkwell.data import Database, PostStore

    db = Database("sqlite:///blog.db")
    store = PostStore(db)
    posts = await store.list_all()
"""

from inkwell.data.database import Database
from inkwell.data.errors import DataError, DriverNotInstalledError, MigrationError, StoreError
from inkwell.data.migrate import MigrationResult, migrate
from inkwell.data.posts import PostStore

__all__ = [
    "DataError",
    "Database",
    "DriverNotInstalledError",
    "MigrationError",
    "MigrationResult",
    "PostStore",
    "StoreError",
    "migrate",
]

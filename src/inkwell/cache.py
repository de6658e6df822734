"""Process-wide read cache of all posts.

Readers get an immutable tuple snapshot. A mutation only flips the stale
flag; the next reader refreshes the whole snapshot with one store query
and publishes a new tuple. There is no partial invalidation.

Refresh is serialized with an ``anyio.Lock`` so concurrent readers racing a
refresh wait for it instead of triggering their own query, and no reader
ever sees a half-built snapshot.
"""

import logging
from typing import Protocol

import anyio

from inkwell.models import Post

logger = logging.getLogger("inkwell.cache")


class PostSource(Protocol):
    """Anything that can list every post (``PostStore`` in production)."""

    async def list_all(self) -> list[Post]: ...


class PostCache:
    """Snapshot of all posts plus a staleness flag.

    Usage::

        cache = PostCache(store)
        posts = await cache.all_posts()   # first read queries the store
        posts = await cache.all_posts()   # served from memory
        cache.invalidate()                # after a successful write
        posts = await cache.all_posts()   # queries the store again
    """

    __slots__ = ("_generation", "_lock", "_posts", "_refresh_count", "_source", "_stale")

    def __init__(self, source: PostSource) -> None:
        self._source = source
        self._posts: tuple[Post, ...] = ()
        self._stale = True
        # Bumped by every invalidate(); a refresh that overlaps one stays stale
        self._generation = 0
        self._refresh_count = 0
        # Created lazily: the lock binds to the running event loop
        self._lock: anyio.Lock | None = None

    @property
    def stale(self) -> bool:
        return self._stale

    @property
    def refresh_count(self) -> int:
        """Number of completed refreshes since creation."""
        return self._refresh_count

    async def all_posts(self) -> tuple[Post, ...]:
        """Return the current snapshot, refreshing it first if stale.

        Raises ``StoreError`` if the refresh query fails; the cache then
        stays stale and keeps its previous snapshot.
        """
        if not self._stale:
            return self._posts

        if self._lock is None:
            self._lock = anyio.Lock()
        async with self._lock:
            # Another reader may have refreshed while we waited
            if not self._stale:
                return self._posts

            generation = self._generation
            posts = await self._source.list_all()

            self._posts = tuple(posts)
            self._stale = generation != self._generation
            self._refresh_count += 1
            logger.debug("Post cache refreshed with %d post(s)", len(self._posts))
            return self._posts

    def invalidate(self) -> None:
        """Mark the snapshot out of date. Does not refresh eagerly."""
        self._generation += 1
        self._stale = True

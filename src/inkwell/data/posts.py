"""Post store: parameterized SQL against the ``posts`` table.

Rows-affected counts distinguish "succeeded but matched nothing" (0) from
a genuine failure (``StoreError``); callers check both.
"""

from inkwell.data.database import Database
from inkwell.models import Post

_SELECT_ALL = "SELECT header, content, slug FROM posts ORDER BY id"
_SELECT_BY_SLUG = "SELECT header, content, slug FROM posts WHERE slug = $1"
_INSERT = (
    "INSERT INTO posts (header, content, slug) VALUES ($1, $2, $3) "
    "ON CONFLICT (slug) DO NOTHING"
)
_UPDATE = "UPDATE posts SET header = $1, content = $2 WHERE slug = $3"
_DELETE = "DELETE FROM posts WHERE slug = $1"
_COUNT = "SELECT COUNT(*) FROM posts"


class PostStore:
    """Data access for posts.

    Every method checks a connection out of the database pool for its own
    duration and raises ``StoreError`` on connection or query failure.
    """

    __slots__ = ("_db",)

    def __init__(self, db: Database) -> None:
        self._db = db

    @property
    def db(self) -> Database:
        return self._db

    async def list_all(self) -> list[Post]:
        """All posts in insertion order."""
        return await self._db.fetch(Post, _SELECT_ALL)

    async def get_by_slug(self, slug: str) -> Post | None:
        """The post with *slug*, or ``None`` when there is none."""
        return await self._db.fetch_one(Post, _SELECT_BY_SLUG, slug)

    async def insert(self, post: Post) -> int:
        """Insert *post*; a duplicate slug is skipped and reports 0 rows."""
        return await self._db.execute(_INSERT, post.header, post.content, post.slug)

    async def update(self, slug: str, header: str, content: str) -> int:
        """Replace header and content of the post with *slug*."""
        return await self._db.execute(_UPDATE, header, content, slug)

    async def delete_by_slug(self, slug: str) -> int:
        return await self._db.execute(_DELETE, slug)

    async def count(self) -> int:
        value = await self._db.fetch_val(_COUNT)
        return int(value or 0)

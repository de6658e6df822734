"""Inkwell: a small blog served over ASGI.

Posts live in a relational ``posts`` table; the list page is served from
an in-memory snapshot that is refreshed after every successful write.

Basic usage::

    from inkwell import Blog, BlogConfig

    blog = Blog(BlogConfig(database_url="sqlite:///blog.db"))
    blog.run()
"""

__version__ = "0.1.0"
__all__ = [
    "Blog",
    "BlogConfig",
    "InkwellError",
    "Post",
    "PostCache",
    "PostStore",
    "create_app",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import inkwell`` fast while providing a clean top-level API.
    """
    if name in ("Blog", "create_app"):
        from inkwell import app as _app

        return getattr(_app, name)

    if name == "BlogConfig":
        from inkwell.config import BlogConfig

        return BlogConfig

    if name == "Post":
        from inkwell.models import Post

        return Post

    if name == "PostCache":
        from inkwell.cache import PostCache

        return PostCache

    if name == "PostStore":
        from inkwell.data.posts import PostStore

        return PostStore

    if name == "InkwellError":
        from inkwell.errors import InkwellError

        return InkwellError

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)

"""The blog application.

``Blog`` owns every piece of process-wide state: the database pool, the
post store, the read cache, the jinja2 environment and the frozen route
table. It is compiled on first use and is an ASGI 3.0 callable.
"""

import logging
import threading

from jinja2 import Environment

from inkwell import handlers
from inkwell._internal.asgi import Receive, Scope, Send
from inkwell.cache import PostCache
from inkwell.config import BlogConfig
from inkwell.data.database import Database
from inkwell.data.migrate import migrate
from inkwell.data.posts import PostStore
from inkwell.handlers import Services
from inkwell.routing.route import Route
from inkwell.routing.router import Router
from inkwell.server.handler import handle_request
from inkwell.templating.integration import create_environment

logger = logging.getLogger("inkwell.app")

_GET = frozenset({"GET"})
_POST = frozenset({"POST"})

# prefix -> (handler, methods); static, compiled once at freeze time
ROUTES = (
    (handlers.HOME, handlers.home, _GET),
    (handlers.NEW, handlers.new_post, _GET),
    (handlers.SAVE, handlers.save, _POST),
    (handlers.EDIT, handlers.edit_post, _GET),
    (handlers.DELETE, handlers.delete_post, _GET),
    (handlers.POST, handlers.view_post, _GET),
)


class Blog:
    """The blog ASGI application.

    Usage::

        blog = Blog(BlogConfig(database_url="sqlite:///blog.db"))
        blog.run()

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the app, even if several server workers call
        ``__call__()`` concurrently on the first request.
    """

    __slots__ = (
        "_cache",
        "_db",
        "_env",
        "_freeze_lock",
        "_frozen",
        "_router",
        "_services",
        "_store",
        "config",
    )

    def __init__(self, config: BlogConfig | None = None, *, db: Database | None = None) -> None:
        self.config: BlogConfig = config or BlogConfig()
        self._db: Database = db or Database(
            self.config.database_url,
            pool_size=self.config.pool_size,
            statement_timeout=self.config.statement_timeout,
            echo=self.config.echo_sql,
        )
        self._store = PostStore(self._db)
        self._cache = PostCache(self._store)
        self._services = Services(store=self._store, cache=self._cache)

        self._frozen = False
        self._freeze_lock = threading.Lock()
        self._router: Router | None = None
        self._env: Environment | None = None

    @property
    def db(self) -> Database:
        return self._db

    @property
    def store(self) -> PostStore:
        return self._store

    @property
    def cache(self) -> PostCache:
        return self._cache

    @property
    def router(self) -> Router:
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    # -- Lifecycle --

    async def startup(self) -> None:
        """Connect the database and apply pending migrations."""
        self._ensure_frozen()
        await self._db.connect()
        if self.config.migrate_on_startup:
            result = await migrate(self._db)
            logger.info(result.summary)

    async def shutdown(self) -> None:
        await self._db.disconnect()

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the blog with uvicorn."""
        from inkwell.server.dev import run_server

        self._ensure_frozen()
        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._router is not None
        assert self._env is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            services=self._services,
            env=self._env,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("Blog startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the route table and template environment.

        MUST only be called while holding _freeze_lock.
        """
        router = Router()
        for prefix, handler, methods in ROUTES:
            router.add(Route(prefix=prefix, handler=handler, methods=methods, name=handler.__name__))
        router.compile()
        self._router = router

        self._env = create_environment(self.config.template_dir, debug=self.config.debug)
        self._frozen = True


def create_app() -> Blog:
    """Build a Blog from the process environment.

    Usable as an ASGI factory::

        uvicorn --factory inkwell.app:create_app
    """
    return Blog(BlogConfig.from_env())

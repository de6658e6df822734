"""Serve a Blog with uvicorn.

uvicorn is given the live ``Blog`` object, so the lifespan protocol runs
on the blog that was configured in-process. Auto-reload needs an import
string instead; ``reload=True`` therefore serves ``create_app`` from the
environment.
"""

from typing import Any


def run_server(
    app: Any,
    host: str,
    port: int,
    *,
    log_level: str = "info",
    reload: bool = False,
) -> None:
    """Start uvicorn in the foreground until interrupted."""
    import uvicorn

    if reload:
        uvicorn.run(
            "inkwell.app:create_app",
            factory=True,
            host=host,
            port=port,
            log_level=log_level,
            reload=True,
            lifespan="on",
        )
        return

    uvicorn.run(app, host=host, port=port, log_level=log_level, lifespan="on")

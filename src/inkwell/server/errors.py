"""Error handling pipeline for blog requests.

Maps exceptions raised while serving a request to a Response so that a
failure never escapes the request that caused it.
"""

import logging

from markupsafe import escape

from inkwell.data.errors import StoreError
from inkwell.errors import HTTPError
from inkwell.http.request import Request
from inkwell.http.response import Response

logger = logging.getLogger("inkwell.server")


def _error_page(status: int, title: str, detail: str = "") -> str:
    """Minimal HTML for error responses; never depends on templates."""
    body = f"<h1>{status} {title}</h1>"
    if detail:
        body += f"<p>{escape(detail)}</p>"
    return f'<!DOCTYPE html>\n<html><body><div class="inkwell-error" data-status="{status}">{body}</div></body></html>'


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a Response with its status and headers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    resp = Response(body=_error_page(exc.status, "Error", exc.detail)).with_status(exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_store_error(exc: StoreError, request: Request, *, debug: bool) -> Response:
    """A database failure is a 503 for this request only."""
    logger.exception("503 %s %s", request.method, request.path)
    detail = str(exc) if debug else "The blog's database is unavailable. Please try again."
    return Response(body=_error_page(503, "Service Unavailable", detail), status=503)


def handle_internal_error(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Handle unexpected exceptions (including template failures) as 500."""
    logger.exception("500 %s %s", request.method, request.path)
    detail = f"{type(exc).__name__}: {exc}" if debug else ""
    return Response(body=_error_page(500, "Internal Server Error", detail), status=500)

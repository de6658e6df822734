"""ASGI handler: translates ASGI scope/messages to inkwell types.

The only component that touches raw HTTP ASGI messages. Builds a Request,
dispatches through the prefix router, and sends the Response back through
ASGI send(). It is also the error boundary: nothing raised while serving
one request escapes it.
"""

from jinja2 import Environment

from inkwell._internal.asgi import Receive, Scope, Send
from inkwell._internal.invoke import invoke
from inkwell.data.errors import StoreError
from inkwell.errors import HTTPError
from inkwell.handlers import HOME, Services
from inkwell.http.request import Request
from inkwell.http.response import Redirect, Response
from inkwell.routing.router import Router
from inkwell.server.errors import handle_http_error, handle_internal_error, handle_store_error
from inkwell.server.negotiation import negotiate
from inkwell.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    services: Services,
    env: Environment,
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        response = await dispatch(request, router=router, services=services, env=env)
    except HTTPError as exc:
        response = handle_http_error(exc, request)
    except StoreError as exc:
        response = handle_store_error(exc, request, debug=debug)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug=debug)

    await send_response(response, send, head=request.method == "HEAD")


async def dispatch(
    request: Request,
    *,
    router: Router,
    services: Services,
    env: Environment,
) -> Response:
    """Route *request* and render what its handler returns.

    Paths with no registered prefix are redirected home.
    """
    match = router.match(request.method, request.path)
    if match is None:
        return negotiate(Redirect(HOME), env=env)

    routed = request.with_remainder(match.remainder)
    result = await invoke(match.route.handler, routed, services)
    return negotiate(result, env=env)

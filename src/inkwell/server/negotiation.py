"""Content negotiation: maps handler return values to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

from typing import Any

from jinja2 import Environment

from inkwell.http.response import Redirect, Response
from inkwell.templating.integration import render_template
from inkwell.templating.returns import Template


def negotiate(value: Any, *, env: Environment) -> Response:
    """Convert a handler's return value to a Response.

    Dispatch order:

    1. ``Response``  -> pass through
    2. ``Redirect``  -> status (302 by default) with Location header
    3. ``Template``  -> render via jinja2 with the template's status
    4. ``str``       -> 200, text/html
    """
    match value:
        case Response():
            return value
        case Redirect():
            return Response(body="").with_status(value.status).with_header("Location", value.url)
        case Template():
            return Response(body=render_template(env, value), status=value.status)
        case str():
            return Response(body=value)
    msg = f"Handler returned unsupported type {type(value).__name__}"
    raise TypeError(msg)

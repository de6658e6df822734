"""Immutable HTTP request.

Frozen metadata with async body access.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from inkwell._internal.asgi import Receive
from inkwell.http.forms import FormData, parse_form_data


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``remainder`` is the part of the path after the matched route prefix
    (``"my-slug"`` for ``/post/my-slug``). It is empty until the router
    has matched the request.
    """

    method: str
    path: str
    content_type: str | None = None
    remainder: str = ""

    # Private: ASGI receive callable for body streaming
    _receive: Receive | None = field(default=None, repr=False, compare=False)

    # Private: mutable cache for body and parsed form data
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def with_remainder(self, remainder: str) -> Request:
        """Return a copy carrying the path remainder; body cache is shared."""
        return replace(self, remainder=remainder)

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached: the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        if self._receive is None:
            return
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def form(self) -> FormData:
        """Parse the body as URL-encoded form data (cached).

        Raises:
            ValueError: If Content-Type is not a URL-encoded form.
        """
        if "_form" in self._cache:
            return self._cache["_form"]
        ct = self.content_type or "application/x-www-form-urlencoded"
        raw = await self.body()
        result = parse_form_data(raw, ct)
        self._cache["_form"] = result
        return result

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        return cls(
            method=scope["method"],
            path=scope["path"],
            content_type=_content_type(scope.get("headers", ())),
            _receive=receive,
        )


def _content_type(raw_headers: Iterable[tuple[bytes, bytes]]) -> str | None:
    """First Content-Type value from raw ASGI header pairs."""
    for name, value in raw_headers:
        if name.lower() == b"content-type":
            return value.decode("latin-1")
    return None

"""Inkwell exception hierarchy.

Shared across Router, handlers, templating and the ASGI pipeline so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class InkwellError(Exception):
    """Base for all inkwell-specific errors."""


class ConfigurationError(InkwellError):
    """Raised when blog configuration is invalid.

    Typically raised by ``BlogConfig.from_env()`` at startup.
    """


class TemplateError(InkwellError):
    """Raised when a template cannot be loaded or rendered."""

    def __init__(self, template_name: str, reason: str) -> None:
        self.template_name = template_name
        self.reason = reason
        super().__init__(f"Template {template_name!r} failed: {reason}")


@dataclass(frozen=True, slots=True)
class HTTPError(InkwellError):
    """An error that maps directly to an HTTP status code.

    Raised by the router or handlers. The ASGI handler catches these
    and turns them into a response with the matching status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BadRequest(HTTPError):  # noqa: N818
    """400: the request could not be understood (e.g. unknown mutation kind)."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )

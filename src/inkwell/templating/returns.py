"""Template return type.

Handlers return a frozen ``Template``; the negotiation step renders it
through the jinja2 environment.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Template:
    """Render a full template.

    Usage::

        return Template("home.html", posts=posts)
        return Template("post.html", status=404, post=EMPTY_POST)
    """

    name: str
    context: dict[str, Any] = field(default_factory=dict)
    status: int = 200

    def __init__(self, name: str, /, *, status: int = 200, **context: Any) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "context", context)
        object.__setattr__(self, "status", status)

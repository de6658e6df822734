"""Blog domain types.

``Post`` is the same frozen object from the database row through the
cache to the template.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")


@dataclass(frozen=True, slots=True)
class Post:
    """One blog article. ``slug`` is its unique, immutable URL key."""

    header: str
    content: str
    slug: str


EMPTY_POST = Post(header="", content="", slug="")


class MutationKind(StrEnum):
    """The write a ``/save/`` request asks for."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"

    @classmethod
    def parse(cls, value: str) -> MutationKind | None:
        """Exact-match a path segment or form value; ``del`` means delete."""
        normalized = value.strip().lower()
        if normalized == "del":
            return cls.DELETE
        try:
            return cls(normalized)
        except ValueError:
            return None

    @property
    def verb(self) -> str:
        return {"add": "add a new post", "update": "update the post", "delete": "delete the post"}[
            self.value
        ]


SUCCESS_MESSAGE = "Thanks for editing the blog, and sharing your expertise!"


@dataclass(frozen=True, slots=True)
class MutationOutcome:
    """Human-readable result of a mutation attempt. Never persisted."""

    kind: MutationKind | None
    slug: str
    succeeded: bool
    message: str

    @classmethod
    def success(cls, kind: MutationKind, slug: str) -> MutationOutcome:
        return cls(kind=kind, slug=slug, succeeded=True, message=SUCCESS_MESSAGE)

    @classmethod
    def failure(cls, kind: MutationKind | None, slug: str, reason: str = "") -> MutationOutcome:
        verb = kind.verb if kind is not None else "edit the blog"
        message = f"Sorry! This attempt to {verb} failed"
        if reason:
            message = f"{message}: {reason}"
        return cls(kind=kind, slug=slug, succeeded=False, message=message)


def normalize_slug(raw: str) -> str:
    """Trim and lower-case a submitted slug."""
    return raw.strip().lower()


def is_valid_slug(slug: str) -> bool:
    return bool(SLUG_PATTERN.match(slug))

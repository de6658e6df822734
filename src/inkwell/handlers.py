"""Route handlers: one per path prefix.

Each handler receives the matched ``Request`` and the blog's ``Services``
and returns a ``Template`` for the negotiation step to render. Reads of the
post list go through the shared ``PostCache``; writes go through the
``PostStore`` and invalidate the cache on success.

``StoreError`` and ``TemplateError`` are left to the request pipeline,
which turns them into a scoped 5xx response. The save handler is the
exception: a failed write is rendered as a failure outcome.
"""

import logging
from dataclasses import dataclass

from inkwell.cache import PostCache
from inkwell.data.errors import StoreError
from inkwell.data.posts import PostStore
from inkwell.errors import BadRequest
from inkwell.http.request import Request
from inkwell.models import (
    EMPTY_POST,
    MutationKind,
    MutationOutcome,
    Post,
    is_valid_slug,
    normalize_slug,
)
from inkwell.templating.returns import Template

logger = logging.getLogger("inkwell.handlers")

HOME = "/home/"
POST = "/post/"
NEW = "/new/"
EDIT = "/edit/"
DELETE = "/delete/"
SAVE = "/save/"


@dataclass(frozen=True, slots=True)
class Services:
    """Everything a handler may touch, owned by the ``Blog`` instance."""

    store: PostStore
    cache: PostCache


def _slug_from(request: Request) -> str:
    """The first remainder segment as a normalized slug (may be empty)."""
    return normalize_slug(request.remainder.split("/", 1)[0])


async def home(request: Request, services: Services) -> Template:
    """List every post, served from the read cache."""
    posts = await services.cache.all_posts()
    return Template("home.html", posts=posts)


async def view_post(request: Request, services: Services) -> Template:
    """Show one post; an unknown or missing slug renders an empty post."""
    slug = _slug_from(request)
    post = await services.store.get_by_slug(slug) if slug else None
    if post is None:
        return Template("post.html", status=404, post=EMPTY_POST)
    return Template("post.html", post=post)


def new_post(request: Request, services: Services) -> Template:
    return Template("new_post.html", post=EMPTY_POST)


async def edit_post(request: Request, services: Services) -> Template:
    """Edit form, prefilled when ``/edit/<slug>`` names a stored post."""
    slug = _slug_from(request)
    post = await services.store.get_by_slug(slug) if slug else None
    return Template("edit.html", post=post or Post(header="", content="", slug=slug))


def delete_post(request: Request, services: Services) -> Template:
    return Template("delete.html", slug=_slug_from(request))


def _mutation_kind(request: Request, action: str | None) -> MutationKind:
    """Resolve the mutation from the ``action`` field or ``/save/<kind>/``.

    Raises ``BadRequest`` when neither names a known mutation.
    """
    raw = action if action else request.remainder.split("/", 1)[0]
    kind = MutationKind.parse(raw)
    if kind is None:
        msg = f"Unknown mutation {raw!r}; expected add, update or del"
        raise BadRequest(msg)
    return kind


def _validate(kind: MutationKind, post: Post) -> str:
    """Return a reason the submission is unusable, or an empty string."""
    if not post.slug:
        return "a slug is required"
    if not is_valid_slug(post.slug):
        return "slugs may only contain lower-case letters, digits, '-' and '_'"
    if kind is not MutationKind.DELETE and (not post.header or not post.content):
        return "both a header and content are required"
    return ""


async def _apply(kind: MutationKind, post: Post, store: PostStore) -> int:
    match kind:
        case MutationKind.ADD:
            return await store.insert(post)
        case MutationKind.UPDATE:
            return await store.update(post.slug, post.header, post.content)
        case MutationKind.DELETE:
            return await store.delete_by_slug(post.slug)


async def save(request: Request, services: Services) -> Template:
    """Run an add/update/delete from a submitted form and report the outcome.

    - invalid submission: failure outcome, 422, store untouched
    - 0 rows affected: failure outcome, 422
    - ``StoreError``: failure outcome, 500
    - otherwise: success outcome, 200, cache invalidated
    """
    try:
        form = await request.form()
    except (ValueError, UnicodeDecodeError) as exc:
        raise BadRequest(f"Could not read the submitted form: {exc}") from exc

    kind = _mutation_kind(request, form.get("action"))
    post = Post(
        header=(form.get("header") or "").strip(),
        content=(form.get("content") or "").strip(),
        slug=normalize_slug(form.get("slug") or ""),
    )

    reason = _validate(kind, post)
    if reason:
        logger.warning("Rejected %s for slug %r: %s", kind, post.slug, reason)
        outcome = MutationOutcome.failure(kind, post.slug, reason)
        return Template("result.html", status=422, outcome=outcome)

    try:
        rows = await _apply(kind, post, services.store)
    except StoreError:
        logger.exception("Store failure during %s of slug %r", kind, post.slug)
        outcome = MutationOutcome.failure(kind, post.slug)
        return Template("result.html", status=500, outcome=outcome)

    if rows == 0:
        logger.warning("%s of slug %r affected no rows", kind, post.slug)
        outcome = MutationOutcome.failure(kind, post.slug)
        return Template("result.html", status=422, outcome=outcome)

    services.cache.invalidate()
    logger.info("%s of slug %r succeeded (%d row(s))", kind, post.slug, rows)
    return Template("result.html", outcome=MutationOutcome.success(kind, post.slug))

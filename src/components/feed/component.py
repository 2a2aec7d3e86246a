"""
Feed component - filtered, sorted, bounded reads of published posts.

Filter precedence (first match wins, all branches restricted to published):

1. user_id: posts by that author, newest first (genre and sort ignored)
2. genre: posts tagged with the genre, ordered by sort mode
3. otherwise: all published posts, ordered by sort mode

Sort mode ``popular`` orders by likes, ``latest`` by creation time, both
descending. The limit is a hard cap on the result count.
"""

from __future__ import annotations

import logging

from src.domain.entities import SORT_MODES
from src.domain.errors import PostError, StoreUnavailableError, store_error
from src.domain.projection import project_document
from src.domain.query import FeedQuery, OrderField
from src.rules.models import FeedRules, Rules

from .models import FeedOutput, FeedQueryInput, GetPostInput, PostOutput
from .ports import PostQueryPort

logger = logging.getLogger(__name__)


def _order_for(sort_by: str) -> OrderField:
    return "likes" if sort_by == "popular" else "createdAt"


def build_feed_query(inp: FeedQueryInput, feed_rules: FeedRules | None = None) -> FeedQuery:
    """
    Translate a feed request into a store query.

    Pure; raises ValueError for a non-positive limit, or for an unknown sort
    mode when the sort mode applies (author queries ignore it).
    Limits above the configured maximum are clamped.
    """
    feed_rules = feed_rules or FeedRules()

    limit = feed_rules.default_limit if inp.limit is None else inp.limit
    if limit <= 0:
        raise ValueError("limit must be a positive integer")
    limit = min(limit, feed_rules.max_limit)

    if inp.user_id:
        return FeedQuery(limit=limit, order_by="createdAt", author_id=inp.user_id)

    if inp.sort_by not in SORT_MODES:
        raise ValueError(f"Unknown sortBy '{inp.sort_by}'. Allowed: {list(SORT_MODES)}")
    if inp.genre:
        return FeedQuery(limit=limit, order_by=_order_for(inp.sort_by), genre=inp.genre)
    return FeedQuery(limit=limit, order_by=_order_for(inp.sort_by))


def run_feed(
    inp: FeedQueryInput,
    *,
    posts: PostQueryPort,
    rules: Rules | None = None,
) -> FeedOutput:
    """
    Serve a page of the published feed.

    Args:
        inp: Filters, sort mode and limit.
        posts: Post document store.
        rules: Optional rules for limit defaults.

    Returns:
        FeedOutput with projected posts; an empty list is a valid result.
    """
    try:
        query = build_feed_query(inp, rules.feed if rules else None)
    except ValueError as e:
        return FeedOutput(
            posts=[],
            errors=[PostError(kind="invalid_input", message=str(e))],
            success=False,
        )

    try:
        docs = posts.query(query)
    except StoreUnavailableError as e:
        logger.exception("Error fetching posts")
        return FeedOutput(posts=[], errors=[store_error(e, "fetch posts")], success=False)

    return FeedOutput(posts=[project_document(d) for d in docs], errors=[], success=True)


def run_get_post(inp: GetPostInput, *, posts: PostQueryPort) -> PostOutput:
    """Fetch a single published post. Unpublished posts read as not found."""
    try:
        doc = posts.get(inp.post_id)
    except StoreUnavailableError as e:
        logger.exception("Error fetching post %s", inp.post_id)
        return PostOutput(errors=[store_error(e, "fetch post")], success=False)

    if doc is None or doc.data.get("status") != "published":
        return PostOutput(
            errors=[PostError(kind="not_found", message="Post not found", field="id")],
            success=False,
        )

    return PostOutput(post=project_document(doc))


def run(
    inp: FeedQueryInput | GetPostInput,
    *,
    posts: PostQueryPort,
    rules: Rules | None = None,
) -> FeedOutput | PostOutput:
    """Main entry point - dispatches on input type."""
    if isinstance(inp, FeedQueryInput):
        return run_feed(inp, posts=posts, rules=rules)
    elif isinstance(inp, GetPostInput):
        return run_get_post(inp, posts=posts)
    raise TypeError(f"Unknown input type: {type(inp)}")

"""
Submission component - validates, authorizes and persists new review posts.

Steps run strictly in order and stop at the first failure:

1. required fields (title, bookTitle, content, userId)
2. rating in range, requested status recognized
3. submitter profile lookup (not_found if absent)
4. role may submit (forbidden otherwise)

Then the workflow status is derived from (role, requested status), derived
fields are filled in and exactly one document is written.
"""

from __future__ import annotations

import logging
import math
from typing import Any, cast

from src.domain.entities import POST_STATUSES, PostStatus
from src.domain.errors import PostError, StoreUnavailableError, store_error
from src.domain.normalize import make_excerpt, normalize_genre, slugify
from src.domain.projection import project_document
from src.domain.state import STATUS_TABLE, StatusTable, derive_status
from src.rules.loader import status_table_from_rules
from src.rules.models import PostRules, Rules

from .models import SubmitPostInput, SubmitPostOutput
from .ports import PolicyPort, PostRepoPort, UserRepoPort

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    ("title", "title"),
    ("book_title", "bookTitle"),
    ("content", "content"),
    ("user_id", "userId"),
)


# --- Validation ---


def parse_rating(value: Any) -> float | None:
    """Parse a rating to float. Returns None if it is not a number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        rating = float(value)
    elif isinstance(value, str):
        try:
            rating = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(rating) else rating


def _requested_status(inp: SubmitPostInput) -> PostStatus | None:
    # Empty string counts as "not requested"
    return inp.status or None  # type: ignore[return-value]


def _validate(inp: SubmitPostInput, post_rules: PostRules) -> PostError | None:
    for attr, name in REQUIRED_FIELDS:
        if not getattr(inp, attr):
            return PostError(
                kind="invalid_input",
                message="Missing required fields",
                field=name,
            )

    rating = parse_rating(inp.rating)
    if rating is None or not (post_rules.rating_min <= rating <= post_rules.rating_max):
        return PostError(
            kind="invalid_input",
            message=(
                f"Rating must be between {post_rules.rating_min:g} "
                f"and {post_rules.rating_max:g}"
            ),
            field="rating",
        )

    requested = _requested_status(inp)
    if requested is not None and requested not in POST_STATUSES:
        return PostError(
            kind="invalid_input",
            message=f"Unknown status '{requested}'. Allowed: {list(POST_STATUSES)}",
            field="status",
        )

    return None


# --- Normalization ---


def build_post_document(
    inp: SubmitPostInput,
    *,
    author_role: str,
    author_display_name: str | None,
    status: PostStatus,
    post_rules: PostRules,
) -> dict[str, Any]:
    """Build the document to store. Assumes the input already validated."""
    title = inp.title or ""
    content = inp.content or ""
    return {
        "title": title,
        "slug": inp.slug or slugify(title),
        "excerpt": inp.excerpt
        or make_excerpt(content, post_rules.excerpt_length, post_rules.excerpt_suffix),
        "content": content,
        "bookTitle": inp.book_title,
        "authorName": inp.author_name or inp.user_name or author_display_name,
        "genre": normalize_genre(inp.genre, post_rules.default_genre),
        "rating": parse_rating(inp.rating),
        "coverImage": inp.book_cover or None,
        "publicationYear": inp.publication_year or None,
        "status": status,
        "authorId": inp.user_id,
        "authorRole": author_role,
        "likes": 0,
        "comments": 0,
    }


# --- Entry point ---


def _fail(error: PostError) -> SubmitPostOutput:
    return SubmitPostOutput(post=None, errors=[error], success=False)


def run_submit(
    inp: SubmitPostInput,
    *,
    posts: PostRepoPort,
    users: UserRepoPort,
    policy: PolicyPort,
    rules: Rules | None = None,
) -> SubmitPostOutput:
    """
    Validate, authorize and persist a post submission.

    Args:
        inp: The submission.
        posts: Post document store.
        users: Identity/profile lookup.
        policy: Permission checks.
        rules: Optional rules; defaults apply when omitted.

    Returns:
        SubmitPostOutput with the persisted post, or a single error.
    """
    post_rules = rules.posts if rules else PostRules()
    status_table: StatusTable = status_table_from_rules(rules) if rules else STATUS_TABLE

    error = _validate(inp, post_rules)
    if error:
        logger.info("Rejected submission: %s (%s)", error.message, error.field)
        return _fail(error)

    user_id = cast(str, inp.user_id)
    try:
        profile = users.lookup(user_id)
    except StoreUnavailableError as e:
        logger.exception("User lookup failed for %s", user_id)
        return _fail(store_error(e, "create post"))

    if profile is None:
        return _fail(PostError(kind="not_found", message="User not found", field="userId"))

    requested = _requested_status(inp)
    role = profile.role
    if not policy.can_submit(profile) or role is None or (role, requested) not in status_table:
        logger.warning("User %s with role %r may not submit posts", profile.id, role)
        return _fail(
            PostError(
                kind="forbidden",
                message="Only admins and editors can create posts",
                field="userId",
            )
        )

    status = derive_status(role, requested, status_table)  # type: ignore[arg-type]
    data = build_post_document(
        inp,
        author_role=role,
        author_display_name=profile.display_name,
        status=status,
        post_rules=post_rules,
    )

    try:
        stored = posts.create(data)
    except StoreUnavailableError as e:
        logger.exception("Error creating post for %s", profile.id)
        return _fail(store_error(e, "create post"))

    logger.info("Created post %s (%s) by %s", stored.id, status, profile.id)
    return SubmitPostOutput(post=project_document(stored), errors=[], success=True)


run = run_submit

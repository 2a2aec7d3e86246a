"""Submission component models - frozen dataclass inputs and outputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.domain.entities import Post
from src.domain.errors import PostError


@dataclass(frozen=True)
class SubmitPostInput:
    """
    A post submission as received from the caller.

    Everything is optional at this level; required fields and ranges are
    checked by the component so that missing data becomes an
    invalid_input result rather than a construction error.
    """

    user_id: str | None = None
    title: str | None = None
    book_title: str | None = None
    content: str | None = None
    rating: Any = None
    author_name: str | None = None
    excerpt: str | None = None
    book_cover: str | None = None
    user_name: str | None = None
    genre: str | list[str] | None = None
    slug: str | None = None
    status: str | None = None
    publication_year: int | None = None


@dataclass(frozen=True)
class SubmitPostOutput:
    """Output for a submission: the persisted post, or exactly one error."""

    post: Post | None = None
    errors: list[PostError] = field(default_factory=list)
    success: bool = True

"""Feed component models - frozen dataclass inputs and outputs."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.entities import Post
from src.domain.errors import PostError


@dataclass(frozen=True)
class FeedQueryInput:
    """Feed request. ``limit`` of None means the configured default."""

    user_id: str | None = None
    genre: str | None = None
    sort_by: str = "latest"
    limit: int | None = None


@dataclass(frozen=True)
class FeedOutput:
    """Published posts in feed order, or a single error."""

    posts: list[Post] = field(default_factory=list)
    errors: list[PostError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class GetPostInput:
    post_id: str


@dataclass(frozen=True)
class PostOutput:
    post: Post | None = None
    errors: list[PostError] = field(default_factory=list)
    success: bool = True

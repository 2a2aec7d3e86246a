from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from src.domain.entities import PostStatus

OrderField = Literal["createdAt", "likes"]


@dataclass(frozen=True)
class FeedQuery:
    """
    Store-independent description of a feed read.

    Filters are ANDed. ``genre`` matches posts whose genre list contains
    the label. Results are ordered by ``order_by`` descending and capped
    at ``limit``.
    """

    limit: int
    order_by: OrderField = "createdAt"
    status: PostStatus = "published"
    author_id: str | None = None
    genre: str | None = None

"""
Feed component unit tests.

Tests query construction precedence, ordering, limits and timestamp
projection against an in-memory store.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest

from src.components.feed import (
    FeedQueryInput,
    GetPostInput,
    build_feed_query,
    run,
    run_feed,
    run_get_post,
)
from src.domain.errors import StoreUnavailableError
from src.domain.projection import StoredDocument
from src.domain.query import FeedQuery
from src.rules.loader import load_rules
from src.rules.models import FeedRules, Rules

PROJECT_ROOT = Path(__file__).resolve().parents[4]
BASE_TIME = datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)

# --- Mock Implementations ---


class MockPostStore:
    """In-memory document store that evaluates FeedQuery like the SQLite adapter."""

    def __init__(self) -> None:
        self.docs: list[StoredDocument] = []
        self.queries: list[FeedQuery] = []
        self.fail_with: str | None = None

    def add(
        self,
        *,
        status: str = "published",
        author_id: str = "admin-1",
        genre: list[str] | None = None,
        likes: int = 0,
        minutes: int = 0,
    ) -> StoredDocument:
        created = (BASE_TIME + timedelta(minutes=minutes)).isoformat()
        n = len(self.docs) + 1
        doc = StoredDocument(
            id=f"post-{n:02d}",
            data={
                "title": f"Post {n}",
                "slug": f"post-{n}",
                "excerpt": "...",
                "content": "body",
                "bookTitle": "Book",
                "authorName": "Ada",
                "genre": genre or ["General"],
                "rating": 4.0,
                "coverImage": None,
                "publicationYear": None,
                "status": status,
                "authorId": author_id,
                "authorRole": "admin",
                "likes": likes,
                "comments": 0,
                "createdAt": created,
                "updatedAt": created,
            },
        )
        self.docs.append(doc)
        return doc

    def query(self, q: FeedQuery) -> list[StoredDocument]:
        if self.fail_with:
            raise StoreUnavailableError("query posts", self.fail_with)
        self.queries.append(q)
        matches = [d for d in self.docs if d.data["status"] == q.status]
        if q.author_id is not None:
            matches = [d for d in matches if d.data["authorId"] == q.author_id]
        if q.genre is not None:
            matches = [d for d in matches if q.genre in d.data["genre"]]
        matches.sort(key=lambda d: d.id)
        matches.sort(key=lambda d: d.data[q.order_by], reverse=True)
        return matches[: q.limit]

    def get(self, post_id: str) -> StoredDocument | None:
        if self.fail_with:
            raise StoreUnavailableError("get post", self.fail_with)
        return next((d for d in self.docs if d.id == post_id), None)


# --- Fixtures ---


@pytest.fixture
def rules() -> Rules:
    return load_rules(PROJECT_ROOT / "rules.yaml")


@pytest.fixture
def store() -> MockPostStore:
    return MockPostStore()


def _ids(output: Any) -> list[str]:
    return [p.id for p in output.posts]


# --- Query Construction ---


class TestBuildFeedQuery:
    def test_no_filters_latest(self) -> None:
        q = build_feed_query(FeedQueryInput())
        assert q == FeedQuery(limit=10, order_by="createdAt", status="published")

    def test_no_filters_popular(self) -> None:
        q = build_feed_query(FeedQueryInput(sort_by="popular", limit=5))
        assert q.order_by == "likes"
        assert q.limit == 5
        assert q.author_id is None and q.genre is None

    def test_user_filter_ignores_genre_and_sort(self) -> None:
        q = build_feed_query(FeedQueryInput(user_id="u1", genre="Fiction", sort_by="popular"))
        assert q.author_id == "u1"
        assert q.genre is None
        assert q.order_by == "createdAt"
        assert q.status == "published"

    def test_user_filter_ignores_unknown_sort(self) -> None:
        q = build_feed_query(FeedQueryInput(user_id="u1", sort_by="oldest"))
        assert q.author_id == "u1"
        assert q.order_by == "createdAt"

    def test_genre_filter_uses_sort_mode(self) -> None:
        q = build_feed_query(FeedQueryInput(genre="Fiction", sort_by="popular"))
        assert q.genre == "Fiction"
        assert q.order_by == "likes"

    def test_limit_clamped_to_max(self) -> None:
        q = build_feed_query(FeedQueryInput(limit=500), FeedRules(default_limit=10, max_limit=100))
        assert q.limit == 100

    @pytest.mark.parametrize("limit", [0, -3])
    def test_non_positive_limit_rejected(self, limit: int) -> None:
        with pytest.raises(ValueError):
            build_feed_query(FeedQueryInput(limit=limit))

    def test_unknown_sort_rejected(self) -> None:
        with pytest.raises(ValueError, match="sortBy"):
            build_feed_query(FeedQueryInput(sort_by="oldest"))
        with pytest.raises(ValueError, match="sortBy"):
            build_feed_query(FeedQueryInput(genre="Fiction", sort_by="oldest"))


# --- Feed ---


class TestRunFeed:
    def test_only_published_returned(self, store, rules) -> None:
        store.add(status="draft")
        store.add(status="review")
        published = store.add(status="published")

        result = run_feed(FeedQueryInput(), posts=store, rules=rules)

        assert result.success is True
        assert _ids(result) == [published.id]

    def test_latest_orders_by_creation_desc(self, store, rules) -> None:
        store.add(minutes=1)
        store.add(minutes=3)
        store.add(minutes=2)

        result = run_feed(FeedQueryInput(sort_by="latest"), posts=store, rules=rules)
        assert _ids(result) == ["post-02", "post-03", "post-01"]

    def test_popular_orders_by_likes_and_truncates(self, store, rules) -> None:
        store.add(likes=3)
        store.add(likes=10)
        store.add(likes=7, status="draft")
        store.add(likes=5)

        result = run_feed(FeedQueryInput(sort_by="popular", limit=2), posts=store, rules=rules)

        assert _ids(result) == ["post-02", "post-04"]
        assert all(p.status == "published" for p in result.posts)

    def test_genre_popular_scenario(self, store, rules) -> None:
        for likes in (4, 9, 1, 7, 3):
            store.add(genre=["Fiction"], likes=likes)
        store.add(genre=["History"], likes=100)

        result = run_feed(
            FeedQueryInput(genre="Fiction", sort_by="popular", limit=2), posts=store, rules=rules
        )

        assert len(result.posts) == 2
        assert [p.likes for p in result.posts] == [9, 7]

    def test_genre_matches_any_label(self, store, rules) -> None:
        store.add(genre=["Mystery", "Fiction"])
        result = run_feed(FeedQueryInput(genre="Fiction"), posts=store, rules=rules)
        assert _ids(result) == ["post-01"]

    def test_user_filter_orders_by_creation(self, store, rules) -> None:
        store.add(author_id="u1", likes=100, minutes=1, genre=["History"])
        store.add(author_id="u1", likes=0, minutes=5)
        store.add(author_id="u2", likes=50, minutes=9, genre=["Fiction"])

        result = run_feed(
            FeedQueryInput(user_id="u1", genre="Fiction", sort_by="popular"),
            posts=store,
            rules=rules,
        )

        assert _ids(result) == ["post-02", "post-01"]

    def test_default_limit_is_ten(self, store, rules) -> None:
        for i in range(12):
            store.add(minutes=i)

        result = run_feed(FeedQueryInput(), posts=store, rules=rules)
        assert len(result.posts) == 10

    def test_empty_result_is_success(self, store) -> None:
        result = run_feed(FeedQueryInput(genre="Poetry"), posts=store)

        assert result.success is True
        assert result.posts == []

    def test_timestamps_projected_to_datetime(self, store) -> None:
        store.add(minutes=30)
        post = run_feed(FeedQueryInput(), posts=store).posts[0]

        assert isinstance(post.created_at, datetime)
        assert post.created_at == BASE_TIME + timedelta(minutes=30)
        assert post.updated_at == post.created_at
        assert post.id == "post-01"
        assert post.book_title == "Book"

    def test_store_failure(self, store) -> None:
        store.fail_with = "no such table: posts"
        result = run_feed(FeedQueryInput(), posts=store)

        assert result.success is False
        assert result.errors[0].kind == "store_unavailable"
        assert result.errors[0].cause == "no such table: posts"

    def test_bad_input_is_invalid_input(self, store) -> None:
        result = run_feed(FeedQueryInput(limit=0), posts=store)

        assert result.errors[0].kind == "invalid_input"
        assert store.queries == []


# --- Single Post ---


class TestRunGetPost:
    def test_published_post_found(self, store) -> None:
        doc = store.add()
        result = run_get_post(GetPostInput(post_id=doc.id), posts=store)

        assert result.success is True
        assert result.post.id == doc.id

    def test_unpublished_post_hidden(self, store) -> None:
        doc = store.add(status="review")
        result = run_get_post(GetPostInput(post_id=doc.id), posts=store)

        assert result.errors[0].kind == "not_found"

    def test_missing_post(self, store) -> None:
        result = run_get_post(GetPostInput(post_id="nope"), posts=store)
        assert result.errors[0].kind == "not_found"

    def test_dispatch(self, store) -> None:
        doc = store.add()
        assert run(GetPostInput(post_id=doc.id), posts=store).success is True
        assert _ids(run(FeedQueryInput(), posts=store)) == [doc.id]

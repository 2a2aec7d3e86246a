"""Feed component port definitions."""

from typing import Protocol

from src.domain.projection import StoredDocument
from src.domain.query import FeedQuery


class PostQueryPort(Protocol):
    """Read side of the post document store."""

    def query(self, q: FeedQuery) -> list[StoredDocument]:
        """Return documents matching the query, ordered and capped.

        Raises StoreUnavailableError if the store fails.
        """
        ...

    def get(self, post_id: str) -> StoredDocument | None:
        """Return one document by id, or None."""
        ...

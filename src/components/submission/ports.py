"""Submission component port definitions - protocols for dependencies."""

from typing import Any, Protocol

from src.domain.entities import UserProfile
from src.domain.projection import StoredDocument


class PostRepoPort(Protocol):
    """Append-only post document store."""

    def create(self, data: dict[str, Any]) -> StoredDocument:
        """Persist a new post document, assigning id and timestamps.

        Raises StoreUnavailableError if the store fails.
        """
        ...


class UserRepoPort(Protocol):
    """Identity/profile lookup."""

    def lookup(self, user_id: str) -> UserProfile | None:
        """Return the user's profile, or None if no such user."""
        ...


class PolicyPort(Protocol):
    """Protocol for permission checks."""

    def can_submit(self, user: UserProfile | None) -> bool:
        """Check if the user may submit posts."""
        ...

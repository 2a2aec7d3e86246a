from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# --- Enums / Literals ---
RoleType = Literal["reader", "editor", "admin"]
PostStatus = Literal["draft", "review", "published"]
SortMode = Literal["latest", "popular"]

POST_STATUSES: tuple[PostStatus, ...] = ("draft", "review", "published")
SORT_MODES: tuple[SortMode, ...] = ("latest", "popular")

# --- Identity ---


class UserProfile(BaseModel):
    """Read-only view of a user as published by the identity collaborator."""

    id: str
    # Unknown role strings are kept; the policy treats them as unprivileged.
    role: str | None = None
    display_name: str | None = None


# --- Posts ---


class Post(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    slug: str
    excerpt: str
    content: str
    book_title: str
    author_name: str | None = None
    genre: list[str] = Field(default_factory=lambda: ["General"])
    rating: float
    cover_image: str | None = None
    publication_year: int | None = None
    status: PostStatus

    author_id: str
    author_role: RoleType

    likes: int = 0
    comments: int = 0

    created_at: datetime
    updated_at: datetime

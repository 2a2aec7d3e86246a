from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.domain.entities import Post


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Posts ---
class PostSubmitRequest(CamelModel):
    # All optional here: missing fields are reported as 400 by the component
    title: str | None = None
    book_title: str | None = None
    author_name: str | None = None
    # Passed through untyped so the component rejects booleans and parses strings
    rating: Any = None
    content: str | None = None
    excerpt: str | None = None
    book_cover: str | None = None
    user_id: str | None = None
    user_name: str | None = None
    genre: list[str] | str | None = None
    slug: str | None = None
    status: str | None = None
    publication_year: int | None = None


class FeedResponse(BaseModel):
    posts: list[Post]


class ErrorResponse(BaseModel):
    detail: str

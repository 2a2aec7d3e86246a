from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query

from src.adapters.sqlite.repos import SQLitePostRepo, SQLiteUserRepo
from src.api.deps import get_policy, get_post_repo, get_rules, get_user_repo
from src.api.schemas import ErrorResponse, FeedResponse, PostSubmitRequest
from src.components.feed import FeedQueryInput, GetPostInput, run_feed, run_get_post
from src.components.submission import SubmitPostInput, run_submit
from src.domain.entities import Post
from src.domain.errors import PostError
from src.domain.policy import PolicyEngine
from src.rules.models import Rules

router = APIRouter()

ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _raise(errors: list[PostError]) -> NoReturn:
    err = errors[0]
    raise HTTPException(status_code=err.http_status, detail=err.message)


@router.post("", response_model=Post, responses=ERROR_RESPONSES)
def create_post(
    req: PostSubmitRequest,
    posts: SQLitePostRepo = Depends(get_post_repo),
    users: SQLiteUserRepo = Depends(get_user_repo),
    policy: PolicyEngine = Depends(get_policy),
    rules: Rules = Depends(get_rules),
) -> Post:
    """Submit a new review post."""
    inp = SubmitPostInput(
        user_id=req.user_id,
        title=req.title,
        book_title=req.book_title,
        content=req.content,
        rating=req.rating,
        author_name=req.author_name,
        excerpt=req.excerpt,
        book_cover=req.book_cover,
        user_name=req.user_name,
        genre=req.genre,
        slug=req.slug,
        status=req.status,
        publication_year=req.publication_year,
    )

    result = run_submit(inp, posts=posts, users=users, policy=policy, rules=rules)
    if not result.success or result.post is None:
        _raise(result.errors)

    return result.post


@router.get("", response_model=FeedResponse, responses=ERROR_RESPONSES)
def list_posts(
    user_id: str | None = Query(None, alias="userId"),
    genre: str | None = None,
    sort_by: str = Query("latest", alias="sortBy"),
    limit: int | None = None,
    posts: SQLitePostRepo = Depends(get_post_repo),
    rules: Rules = Depends(get_rules),
) -> FeedResponse:
    """List published posts."""
    inp = FeedQueryInput(user_id=user_id, genre=genre, sort_by=sort_by, limit=limit)

    result = run_feed(inp, posts=posts, rules=rules)
    if not result.success:
        _raise(result.errors)

    return FeedResponse(posts=result.posts)


@router.get("/{post_id}", response_model=Post, responses=ERROR_RESPONSES)
def get_post(
    post_id: str,
    posts: SQLitePostRepo = Depends(get_post_repo),
) -> Post:
    """Get a single published post."""
    result = run_get_post(GetPostInput(post_id=post_id), posts=posts)
    if not result.success or result.post is None:
        _raise(result.errors)

    return result.post

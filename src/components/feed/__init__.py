"""Feed component - published post queries."""

from src.components.feed.component import build_feed_query, run, run_feed, run_get_post
from src.components.feed.models import FeedOutput, FeedQueryInput, GetPostInput, PostOutput
from src.components.feed.ports import PostQueryPort

__all__ = [
    # Entry points
    "run",
    "run_feed",
    "run_get_post",
    "build_feed_query",
    # Models
    "FeedQueryInput",
    "FeedOutput",
    "GetPostInput",
    "PostOutput",
    # Ports
    "PostQueryPort",
]

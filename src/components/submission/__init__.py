"""Submission component - role-gated creation of review posts."""

from src.components.submission.component import (
    build_post_document,
    parse_rating,
    run,
    run_submit,
)
from src.components.submission.models import SubmitPostInput, SubmitPostOutput
from src.components.submission.ports import PolicyPort, PostRepoPort, UserRepoPort

__all__ = [
    # Entry points
    "run",
    "run_submit",
    # Helpers
    "build_post_document",
    "parse_rating",
    # Models
    "SubmitPostInput",
    "SubmitPostOutput",
    # Ports
    "PostRepoPort",
    "UserRepoPort",
    "PolicyPort",
]

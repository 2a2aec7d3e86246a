"""
Workflow status derivation.

A new post's status is decided once, at submission, from the submitter's
role and the status the caller asked for. The decision is a lookup in a
table keyed by (role, requested status); ``None`` stands for "not
requested". There is no transition operation after creation.
"""

from __future__ import annotations

from collections.abc import Mapping

from src.domain.entities import POST_STATUSES, PostStatus, RoleType

StatusTable = dict[tuple[RoleType, PostStatus | None], PostStatus]

# admin: honored verbatim, defaults to published
# editor: published is downgraded to review, defaults to draft
STATUS_TABLE: StatusTable = {
    ("admin", None): "published",
    ("admin", "draft"): "draft",
    ("admin", "review"): "review",
    ("admin", "published"): "published",
    ("editor", None): "draft",
    ("editor", "draft"): "draft",
    ("editor", "review"): "review",
    ("editor", "published"): "review",
}


def build_status_table(
    defaults: Mapping[RoleType, PostStatus],
    downgrades: Mapping[RoleType, Mapping[PostStatus, PostStatus]],
) -> StatusTable:
    """
    Expand per-role workflow settings into a full lookup table.

    Every requested status maps to itself unless the role's downgrade map
    says otherwise; the unrequested case maps to the role's default.
    """
    table: StatusTable = {}
    for role, default in defaults.items():
        table[(role, None)] = default
        role_downgrades = downgrades.get(role, {})
        for status in POST_STATUSES:
            table[(role, status)] = role_downgrades.get(status, status)
    return table


def derive_status(
    role: RoleType,
    requested: PostStatus | None,
    table: Mapping[tuple[RoleType, PostStatus | None], PostStatus] | None = None,
) -> PostStatus:
    """
    Return the status a new post gets.

    Raises KeyError if the role has no workflow entry (it may not submit).
    """
    table = table if table is not None else STATUS_TABLE
    return table[(role, requested)]

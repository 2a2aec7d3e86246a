"""Projection of stored post documents into caller-facing Post values."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from src.domain.entities import Post

TIMESTAMP_FIELDS = ("createdAt", "updatedAt")


@dataclass(frozen=True)
class StoredDocument:
    """A document as the store hands it back: assigned id plus raw fields."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)


def to_datetime(value: Any) -> Any:
    """
    Convert a store-native timestamp to a datetime.

    The SQLite store keeps ISO-8601 text. Values that are already datetimes
    and anything unrecognized are returned unchanged.
    """
    if isinstance(value, str):
        parsed = datetime.fromisoformat(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed
    return value


def project_document(doc: StoredDocument) -> Post:
    data = dict(doc.data)
    for key in TIMESTAMP_FIELDS:
        if key in data:
            data[key] = to_datetime(data[key])
    data["id"] = doc.id
    return Post.model_validate(data)

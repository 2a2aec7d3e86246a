import re
from typing import Any

_NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """
    Derive a URL-safe slug from a title.

    Lowercases, collapses every run of characters outside [a-z0-9] into a
    single hyphen, and strips hyphens from both ends. Idempotent on
    strings that are already slugs.
    """
    return _NON_SLUG_RUN.sub("-", title.lower()).strip("-")


def make_excerpt(content: str, length: int = 297, suffix: str = "...") -> str:
    # Cuts by raw character count, words may be split.
    return content[:length] + suffix


def normalize_genre(genre: Any, default: str = "General") -> list[str]:
    """
    Normalize a genre input to a non-empty list of labels.

    Lists and tuples pass through in order, a scalar becomes a
    single-element list, and a missing value gets the default genre.
    """
    if isinstance(genre, (list, tuple)):
        labels = [str(g) for g in genre]
        return labels or [default]
    if genre is None or genre == "":
        return [default]
    return [str(genre)]

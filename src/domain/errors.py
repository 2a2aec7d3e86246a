"""
Error taxonomy shared by the submission and feed components.

Components never raise for expected failures. They return a single
PostError inside their output object; the HTTP shell maps the kind to a
status code with HTTP_STATUS_BY_KIND.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ErrorKind = Literal["invalid_input", "not_found", "forbidden", "store_unavailable"]

HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    "invalid_input": 400,
    "not_found": 404,
    "forbidden": 403,
    "store_unavailable": 500,
}


@dataclass(frozen=True)
class PostError:
    """Classified failure of a post operation."""

    kind: ErrorKind
    message: str
    field: str | None = None
    # Underlying store error text, for logs only.
    cause: str | None = None

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]


class StoreUnavailableError(Exception):
    """Raised by store adapters when the persistence layer fails."""

    def __init__(self, operation: str, cause: BaseException | str) -> None:
        self.operation = operation
        self.cause = str(cause)
        super().__init__(f"{operation} failed: {self.cause}")


def store_error(exc: StoreUnavailableError, action: str) -> PostError:
    """Convert an adapter failure into a store_unavailable result."""
    return PostError(
        kind="store_unavailable",
        message=f"Failed to {action}: {exc.cause}",
        cause=exc.cause,
    )

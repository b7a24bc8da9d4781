"""Errors raised by the post store.

Routes map these to HTTP responses:
- ValidationError -> 422 (field-level detail)
- NotFoundError -> 404
- StorageError -> 503 (generic message, details only in logs)
"""


class PostStoreError(Exception):
    """Base class for post store errors."""


class ValidationError(PostStoreError):
    """Caller input is missing, oversized or outside an allowed set."""

    def __init__(self, fields: dict[str, str]) -> None:
        self.fields = dict(fields)
        summary = "; ".join(f"{name}: {msg}" for name, msg in self.fields.items())
        super().__init__(f"Invalid post input ({summary})")


class NotFoundError(PostStoreError):
    """The targeted post does not exist."""

    def __init__(self, post_id: str) -> None:
        self.post_id = post_id
        super().__init__(f"Post {post_id} not found")


class StorageError(PostStoreError):
    """The persistence layer failed (connection, constraint, disk)."""

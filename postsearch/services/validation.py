"""Validation of post input.

Rules:
- title: required (not blank), at most 255 characters, no NUL
- content: required (not blank), no NUL
- status: "draft" or "published"; missing means "draft"
- metadata: a JSON object that PostgreSQL JSONB accepts (no NaN/Infinity, no NUL)

Title and content are stored exactly as given; trimming belongs to the HTTP layer.

All field problems are collected and raised together as one ValidationError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any

from postsearch.models.post import POST_STATUSES, TITLE_MAX_LENGTH
from postsearch.services.errors import ValidationError


DEFAULT_STATUS = "draft"
NUL = "\x00"


@dataclass(frozen=True)
class PostInput:
    """Validated, normalized writable fields of a post."""

    title: str
    content: str
    status: str
    metadata: dict[str, Any] = field(default_factory=dict)


def validate_post_input(
    title: str | None,
    content: str | None,
    status: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> PostInput:
    """Validate and normalize writable post fields.

    Raises:
        ValidationError: with one message per invalid field.
    """
    errors: dict[str, str] = {}

    title = title if isinstance(title, str) else ""
    if not title.strip():
        errors["title"] = "The title field is required."
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = f"The title may not be greater than {TITLE_MAX_LENGTH} characters."
    elif NUL in title:
        errors["title"] = "The title may not contain NUL characters."

    content = content if isinstance(content, str) else ""
    if not content.strip():
        errors["content"] = "The content field is required."
    elif NUL in content:
        errors["content"] = "The content may not contain NUL characters."

    if status is None or (isinstance(status, str) and not status.strip()):
        status = DEFAULT_STATUS
    elif not isinstance(status, str) or status.strip() not in POST_STATUSES:
        errors["status"] = f"The status must be one of: {', '.join(POST_STATUSES)}."
    else:
        status = status.strip()

    if metadata is None:
        metadata = {}
    elif not isinstance(metadata, dict):
        errors["metadata"] = "The metadata must be an object."
    else:
        try:
            # JSONB rejects NaN/Infinity
            json.dumps(metadata, allow_nan=False)
        except (TypeError, ValueError):
            errors["metadata"] = "The metadata must be a valid JSON document."
        else:
            if _contains_nul(metadata):
                errors["metadata"] = "The metadata may not contain NUL characters."

    if errors:
        raise ValidationError(errors)

    return PostInput(title=title, content=content, status=status, metadata=dict(metadata))


def _contains_nul(value: Any) -> bool:
    if isinstance(value, str):
        return NUL in value
    if isinstance(value, dict):
        return any(_contains_nul(k) or _contains_nul(v) for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return any(_contains_nul(v) for v in value)
    return False


def split_tags(raw: str | None) -> list[str]:
    """Split a comma-separated tag string into an ordered list.

    "a,b,c" -> ["a", "b", "c"]; pieces are trimmed and empty pieces dropped.
    """
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def build_metadata(author: str | None, tags: str | None) -> dict[str, Any]:
    """Build the metadata document for a post from form-style fields."""
    author = author.strip() if author else None
    return {
        "author": author or None,
        "tags": split_tags(tags),
    }


def validate_page(page: int, page_size: int, max_page_size: int) -> None:
    """Validate pagination arguments."""
    errors: dict[str, str] = {}
    if page < 1:
        errors["page"] = "The page must be at least 1."
    if page_size < 1 or page_size > max_page_size:
        errors["page_size"] = f"The page size must be between 1 and {max_page_size}."
    if errors:
        raise ValidationError(errors)

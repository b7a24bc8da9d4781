"""Pydantic schemas for API request/response validation."""

from postsearch.schemas.common import ErrorDetail, ErrorResponse
from postsearch.schemas.posts import (
    PostEditForm,
    PostListResponse,
    PostOut,
    PostSearchResponse,
    PostWrite,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "PostEditForm",
    "PostListResponse",
    "PostOut",
    "PostSearchResponse",
    "PostWrite",
]

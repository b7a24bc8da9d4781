"""Schemas for the posts endpoints (/posts, /posts-search)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from postsearch.services.posts import Post, PostPage


class PostWrite(BaseModel):
    """Request body for creating or updating a post.

    Strings are trimmed here, at the HTTP edge. Field rules (required
    title/content, allowed status values) are enforced by the post store so
    that every writer gets the same validation.
    """

    title: str | None = None
    content: str | None = None
    status: str | None = None
    author: str | None = None
    tags: str | None = Field(default=None, description="Comma-separated tags, e.g. 'demo,test'")

    @field_validator("title", "content", "status", "author", "tags", mode="before")
    @classmethod
    def _strip_strings(cls, v: object) -> object:
        """Trim surrounding whitespace from form-style input."""
        return v.strip() if isinstance(v, str) else v


class PostOut(BaseModel):
    """A stored post."""

    id: str
    title: str
    content: str
    status: str
    metadata: dict[str, Any]
    slug: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_post(cls, post: Post) -> PostOut:
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            status=post.status,
            metadata=post.metadata,
            slug=post.slug,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class PostEditForm(BaseModel):
    """Editable fields of a post, shaped like the create/update body."""

    id: str
    title: str
    content: str
    status: str
    author: str | None = None
    tags: str = ""

    @classmethod
    def from_post(cls, post: Post) -> PostEditForm:
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            status=post.status,
            author=post.author,
            tags=",".join(post.tags),
        )


class PostListResponse(BaseModel):
    """Paginated list of posts."""

    items: list[PostOut]
    total: int = Field(ge=0)
    page: int = Field(ge=1)
    page_size: int = Field(alias="pageSize", ge=1)
    last_page: int = Field(alias="lastPage", ge=1)

    model_config = {"populate_by_name": True}

    @classmethod
    def from_page(cls, page: PostPage) -> PostListResponse:
        return cls(
            items=[PostOut.from_post(p) for p in page.items],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
            last_page=page.last_page,
        )


class PostSearchResponse(PostListResponse):
    """Ranked search results (most relevant first)."""

    query: str

    @classmethod
    def from_search(cls, query: str, page: PostPage) -> PostSearchResponse:
        return cls(
            query=query,
            items=[PostOut.from_post(p) for p in page.items],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
            last_page=page.last_page,
        )

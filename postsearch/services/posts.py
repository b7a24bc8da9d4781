"""Post store: CRUD and ranked full-text search over posts.

Write path:
- create: validate -> generate id -> one INSERT ... RETURNING that also sets
  searchable from the same title/content parameters
- update: validate -> one UPDATE ... RETURNING that sets the fields,
  searchable and updated_at together
- delete: DELETE ... RETURNING id (a missing row is NotFoundError)

Each operation runs in its own session/transaction (see stores.postgres.get_session),
so a reader never sees new text paired with a stale search vector.
Concurrent writes to the same id are last-write-wins.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime
import logging
import math
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from postsearch.models.post import PostRow
from postsearch.services.errors import NotFoundError, StorageError
from postsearch.services.search import (
    DEFAULT_SEARCH_CONFIG,
    build_search_count,
    build_search_select,
    normalize_query,
    search_vector,
)
from postsearch.services.validation import validate_page, validate_post_input
from postsearch.stores.postgres import DatabaseNotInitializedError, get_session

logger = logging.getLogger("uvicorn.error")

SessionProvider = Callable[[], AbstractAsyncContextManager[AsyncSession]]


def generate_post_id() -> str:
    """Generate unique post ID (random, so ids don't leak insertion order)."""
    return str(uuid4())


@dataclass(frozen=True)
class Post:
    """A stored post."""

    id: str
    title: str
    content: str
    status: str
    metadata: dict[str, Any]
    slug: str
    created_at: datetime
    updated_at: datetime

    @property
    def author(self) -> str | None:
        author = self.metadata.get("author")
        return author if isinstance(author, str) else None

    @property
    def tags(self) -> list[str]:
        tags = self.metadata.get("tags")
        if not isinstance(tags, list):
            return []
        return [str(t) for t in tags]

    @classmethod
    def from_row(cls, row: PostRow) -> Post:
        return cls(
            id=str(row.id),
            title=row.title,
            content=row.content,
            status=row.status,
            metadata=dict(row.meta or {}),
            slug=row.slug,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


@dataclass(frozen=True)
class PostPage:
    """One page of posts plus the total number of matches."""

    items: list[Post] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.page_size))


class PostStore:
    """Durable storage of posts with a search vector kept in step with the text."""

    def __init__(
        self,
        session_provider: SessionProvider = get_session,
        *,
        search_config: str = DEFAULT_SEARCH_CONFIG,
        max_page_size: int = 100,
    ) -> None:
        self._session = session_provider
        self.search_config = search_config
        self.max_page_size = max_page_size

    async def create(
        self,
        title: str | None,
        content: str | None,
        status: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Post:
        """Validate and insert a new post.

        Raises:
            ValidationError: invalid title/content/status/metadata.
            StorageError: the database write failed (nothing is persisted).
        """
        data = validate_post_input(title, content, status, metadata)
        post_id = generate_post_id()

        stmt = (
            insert(PostRow)
            .values(
                {
                    PostRow.id: post_id,
                    PostRow.title: data.title,
                    PostRow.content: data.content,
                    PostRow.status: data.status,
                    PostRow.meta: data.metadata,
                    PostRow.searchable: search_vector(data.title, data.content, self.search_config),
                }
            )
            .returning(PostRow)
        )

        async with self._storage_errors("create"):
            async with self._session() as session:
                row = (await session.execute(stmt)).scalar_one()
                post = Post.from_row(row)

        logger.info(f"Post created: {post.id} ({post.status})")
        return post

    async def update(
        self,
        post_id: str,
        title: str | None,
        content: str | None,
        status: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Post:
        """Validate and overwrite an existing post.

        Raises:
            ValidationError: invalid input.
            NotFoundError: no post with this id.
            StorageError: the database write failed.
        """
        data = validate_post_input(title, content, status, metadata)
        key = _parse_post_id(post_id)

        stmt = (
            update(PostRow)
            .where(PostRow.id == key)
            .values(
                {
                    PostRow.title: data.title,
                    PostRow.content: data.content,
                    PostRow.status: data.status,
                    PostRow.meta: data.metadata,
                    PostRow.searchable: search_vector(data.title, data.content, self.search_config),
                    PostRow.updated_at: func.now(),
                }
            )
            .returning(PostRow)
            .execution_options(synchronize_session=False)
        )

        async with self._storage_errors("update"):
            async with self._session() as session:
                row = (await session.execute(stmt)).scalar_one_or_none()
                if row is None:
                    raise NotFoundError(post_id)
                post = Post.from_row(row)

        logger.info(f"Post updated: {post.id} ({post.status})")
        return post

    async def delete(self, post_id: str) -> None:
        """Hard-delete a post.

        Raises:
            NotFoundError: no post with this id (including an already deleted one).
            StorageError: the database write failed.
        """
        key = _parse_post_id(post_id)
        stmt = (
            delete(PostRow)
            .where(PostRow.id == key)
            .returning(PostRow.id)
            .execution_options(synchronize_session=False)
        )

        async with self._storage_errors("delete"):
            async with self._session() as session:
                deleted = (await session.execute(stmt)).scalar_one_or_none()
                if deleted is None:
                    raise NotFoundError(post_id)

        logger.info(f"Post deleted: {post_id}")

    async def get(self, post_id: str) -> Post:
        """Fetch a single post.

        Raises:
            NotFoundError: no post with this id.
        """
        key = _parse_post_id(post_id)
        async with self._storage_errors("read"):
            async with self._session() as session:
                row = (
                    await session.execute(select(PostRow).where(PostRow.id == key))
                ).scalar_one_or_none()
                if row is None:
                    raise NotFoundError(post_id)
                return Post.from_row(row)

    async def list(self, page: int = 1, page_size: int = 10) -> PostPage:
        """List posts newest first (ties broken by id)."""
        validate_page(page, page_size, self.max_page_size)

        query = (
            select(PostRow)
            .order_by(PostRow.created_at.desc(), PostRow.id.desc())
            .limit(page_size)
            .offset((page - 1) * page_size)
        )

        async with self._storage_errors("list"):
            async with self._session() as session:
                total = (
                    await session.execute(select(func.count()).select_from(PostRow))
                ).scalar() or 0
                rows = (await session.execute(query)).scalars().all()

        return PostPage(
            items=[Post.from_row(row) for row in rows],
            total=total,
            page=page,
            page_size=page_size,
        )

    async def search(self, query: str | None, page: int = 1, page_size: int = 10) -> PostPage:
        """Ranked full-text search.

        The query uses web-search syntax ("quoted phrase", or, -exclude).
        Blank input returns an empty page without querying the database.
        """
        validate_page(page, page_size, self.max_page_size)

        q = normalize_query(query)
        if not q:
            return PostPage(items=[], total=0, page=page, page_size=page_size)

        stmt = (
            build_search_select(q, self.search_config)
            .limit(page_size)
            .offset((page - 1) * page_size)
        )

        async with self._storage_errors("search"):
            async with self._session() as session:
                total = (await session.execute(build_search_count(q, self.search_config))).scalar() or 0
                rows = (await session.execute(stmt)).scalars().all()

        logger.info(f"Post search: q={q!r} total={total}")
        return PostPage(
            items=[Post.from_row(row) for row in rows],
            total=total,
            page=page,
            page_size=page_size,
        )

    @asynccontextmanager
    async def _storage_errors(self, action: str) -> AsyncGenerator[None, None]:
        """Re-raise persistence failures as StorageError."""
        try:
            yield
        except (SQLAlchemyError, OSError, DatabaseNotInitializedError) as exc:
            logger.exception(f"Post {action} failed")
            raise StorageError(f"Post {action} failed") from exc


def _parse_post_id(post_id: str) -> str:
    """Normalize a post id; anything that isn't a UUID cannot exist."""
    try:
        return str(UUID(str(post_id)))
    except ValueError:
        raise NotFoundError(post_id) from None

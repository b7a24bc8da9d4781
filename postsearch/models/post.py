"""Post model.

A post is a titled text document with a JSONB metadata payload (author, tags)
and two derived columns:
- searchable: tsvector over title + content, written by PostStore in the same
  statement as the text it is derived from
- slug: generated column lower(title), maintained by PostgreSQL
"""

from datetime import datetime
from typing import Any

from sqlalchemy import CheckConstraint, Computed, DateTime, Index, String, Text, func, text
from sqlalchemy.dialects.postgresql import JSONB, TSVECTOR, UUID
from sqlalchemy.orm import Mapped, mapped_column

from postsearch.stores.postgres import Base


POST_STATUSES = ("draft", "published")
TITLE_MAX_LENGTH = 255


class PostRow(Base):
    """Row in the posts table."""

    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint(
            "status IN ('draft', 'published')",
            name="ck_posts_status",
        ),
        # Reserved for a "published only" listing; no query filters on it yet.
        Index(
            "posts_published_idx",
            "status",
            postgresql_where=text("status = 'published'"),
        ),
        Index("posts_searchable_gin_idx", "searchable", postgresql_using="gin"),
    )

    # Assigned by PostStore.create before insert, never by the database
    id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)

    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH))
    content: Mapped[str] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(20), default="draft", server_default="draft")

    # "metadata" is reserved on declarative classes, hence the attribute name
    meta: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSONB,
        default=dict,
        server_default=text("'{}'::jsonb"),
    )

    # Derived columns (never set by callers)
    searchable: Mapped[str | None] = mapped_column(TSVECTOR, deferred=True)
    slug: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        Computed("lower(title)", persisted=True),
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<PostRow {self.id} {self.status}>"


# JSONB containment / key lookups
Index("posts_metadata_gin_idx", PostRow.meta, postgresql_using="gin")

# Expression index for case-insensitive title lookup
Index("posts_title_lower_idx", func.lower(PostRow.title))

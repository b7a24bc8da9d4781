"""create_posts_table

Revision ID: 1f4e2b7c9a30
Revises:
Create Date: 2026-02-23

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "1f4e2b7c9a30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "posts",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=20), server_default="draft", nullable=False),
        sa.Column(
            "metadata",
            postgresql.JSONB(astext_type=sa.Text()),
            server_default=sa.text("'{}'::jsonb"),
            nullable=False,
        ),
        # Written by the application together with title/content
        sa.Column("searchable", postgresql.TSVECTOR(), nullable=True),
        sa.Column(
            "slug",
            sa.String(length=255),
            sa.Computed("lower(title)", persisted=True),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint("status IN ('draft', 'published')", name="ck_posts_status"),
        sa.PrimaryKeyConstraint("id"),
    )

    # JSONB containment / key lookups
    op.create_index("posts_metadata_gin_idx", "posts", ["metadata"], unique=False, postgresql_using="gin")
    # Full-text search
    op.create_index("posts_searchable_gin_idx", "posts", ["searchable"], unique=False, postgresql_using="gin")
    # Case-insensitive title lookup
    op.create_index("posts_title_lower_idx", "posts", [sa.text("lower(title)")], unique=False)
    # Published-only listings (not queried yet)
    op.create_index(
        "posts_published_idx",
        "posts",
        ["status"],
        unique=False,
        postgresql_where=sa.text("status = 'published'"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("posts_published_idx", table_name="posts")
    op.drop_index("posts_title_lower_idx", table_name="posts")
    op.drop_index("posts_searchable_gin_idx", table_name="posts")
    op.drop_index("posts_metadata_gin_idx", table_name="posts")
    op.drop_table("posts")

"""SQLAlchemy ORM models.

Models represent database tables:
- posts: Posts with JSONB metadata and a derived full-text search vector
"""

from postsearch.models.post import PostRow

__all__ = ["PostRow"]

#!/usr/bin/env python3
"""Seed database with demo posts.

Creates a handful of draft/published posts through PostStore, so the search
vector and slug are filled exactly as they are for API writes.

Usage:
    python -m scripts.seed_posts
    python -m scripts.seed_posts --create-tables   # dev DB without Alembic
"""

import argparse
import asyncio
import os
import sys

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv  # noqa: E402

from postsearch.services.posts import PostStore  # noqa: E402
from postsearch.services.validation import build_metadata  # noqa: E402
from postsearch.settings import get_settings  # noqa: E402
from postsearch.stores.postgres import close_db, create_tables, init_db, ping_db  # noqa: E402

load_dotenv()

DEMO_POSTS = [
    {
        "title": "Hello World",
        "content": "A first post to show off the full text search demo.",
        "status": "published",
        "author": "Alice",
        "tags": "demo,test",
    },
    {
        "title": "Indexing JSONB metadata",
        "content": "GIN indexes make containment queries on tags and authors fast.",
        "status": "published",
        "author": "Bob",
        "tags": "postgres,jsonb",
    },
    {
        "title": "Ranking search results",
        "content": "ts_rank orders matches so the most relevant posts come first.",
        "status": "draft",
        "author": "Alice",
        "tags": "postgres,search",
    },
    {
        "title": "Weekend gardening notes",
        "content": "Tomatoes need sun, water, and patience.",
        "status": "draft",
        "author": "Carol",
        "tags": "garden",
    },
]


async def seed_posts(create: bool) -> None:
    settings = get_settings()
    await init_db()
    try:
        await ping_db()
        if create:
            await create_tables()
            print("Tables created")

        store = PostStore(search_config=settings.search_config)
        for post_def in DEMO_POSTS:
            post = await store.create(
                title=post_def["title"],
                content=post_def["content"],
                status=post_def["status"],
                metadata=build_metadata(post_def["author"], post_def["tags"]),
            )
            print(f"  {post.id}  [{post.status}] {post.title}")
    finally:
        await close_db()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo posts")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create tables from the ORM models before seeding (dev only)",
    )
    args = parser.parse_args()
    asyncio.run(seed_posts(create=args.create_tables))


if __name__ == "__main__":
    main()

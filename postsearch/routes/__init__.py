"""API routes."""

from fastapi import APIRouter

from postsearch.routes import posts

api_router = APIRouter()

# Post CRUD + full-text search
api_router.include_router(posts.router, tags=["posts"])

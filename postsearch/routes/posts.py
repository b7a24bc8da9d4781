"""Post endpoints.

POST   /posts              - create
GET    /posts              - list, newest first
GET    /posts/{id}         - read one
GET    /posts/{id}/edit    - editable fields (tags as a comma-separated string)
PUT    /posts/{id}         - update
DELETE /posts/{id}         - delete
GET    /posts-search?q=    - ranked full-text search

Routers are thin: the post store does validation and persistence. Store errors
are turned into responses by the handlers registered in main.create_app().
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from postsearch.schemas import (
    PostEditForm,
    PostListResponse,
    PostOut,
    PostSearchResponse,
    PostWrite,
)
from postsearch.services.posts import PostStore
from postsearch.services.validation import build_metadata
from postsearch.settings import get_settings

router = APIRouter()


def get_post_store() -> PostStore:
    """Post store dependency (overridden in tests)."""
    settings = get_settings()
    return PostStore(
        search_config=settings.search_config,
        max_page_size=settings.max_page_size,
    )


StoreDep = Annotated[PostStore, Depends(get_post_store)]


@router.post("/posts", response_model=PostOut, status_code=status.HTTP_201_CREATED)
async def create_post(body: PostWrite, store: StoreDep) -> PostOut:
    """Create a post; author and tags go into its metadata document."""
    post = await store.create(
        title=body.title,
        content=body.content,
        status=body.status,
        metadata=build_metadata(body.author, body.tags),
    )
    return PostOut.from_post(post)


@router.get("/posts", response_model=PostListResponse)
async def list_posts(
    store: StoreDep,
    page: int = Query(default=1, ge=1, description="1-based page number"),
) -> PostListResponse:
    """List posts, newest first."""
    result = await store.list(page=page, page_size=get_settings().page_size)
    return PostListResponse.from_page(result)


@router.get("/posts-search", response_model=PostSearchResponse)
async def search_posts(
    store: StoreDep,
    q: str = Query(default="", description="Web-search style query"),
    page: int = Query(default=1, ge=1, description="1-based page number"),
) -> PostSearchResponse:
    """Ranked full-text search over title and content."""
    result = await store.search(q, page=page, page_size=get_settings().page_size)
    return PostSearchResponse.from_search(q, result)


@router.get("/posts/{post_id}", response_model=PostOut)
async def get_post(post_id: str, store: StoreDep) -> PostOut:
    post = await store.get(post_id)
    return PostOut.from_post(post)


@router.get("/posts/{post_id}/edit", response_model=PostEditForm)
async def edit_post(post_id: str, store: StoreDep) -> PostEditForm:
    post = await store.get(post_id)
    return PostEditForm.from_post(post)


@router.put("/posts/{post_id}", response_model=PostOut)
async def update_post(post_id: str, body: PostWrite, store: StoreDep) -> PostOut:
    """Update a post; same validation and metadata shape as create."""
    post = await store.update(
        post_id,
        title=body.title,
        content=body.content,
        status=body.status,
        metadata=build_metadata(body.author, body.tags),
    )
    return PostOut.from_post(post)


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: str, store: StoreDep) -> Response:
    await store.delete(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

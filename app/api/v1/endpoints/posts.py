"""Posts API: CRUD with optimistic concurrency on update."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from app.api.v1.dependencies import get_current_user, get_post_service
from app.application.dtos.user import UserResult
from app.application.services.post_service import PostService
from app.schemas.post import PostCreateRequest, PostResponse, PostUpdateRequest

router = APIRouter()


@router.post("", response_model=PostResponse, status_code=201)
async def create_post(
    body: PostCreateRequest,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    posts: Annotated[PostService, Depends(get_post_service)],
):
    """Create a post authored by the current user (version 0)."""
    created = await posts.create_post(
        current_user.id, body.title, body.content, body.tags
    )
    return PostResponse.model_validate(created)


@router.get("", response_model=list[PostResponse])
async def list_posts(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    posts: Annotated[PostService, Depends(get_post_service)],
    user_id: str | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
):
    """List posts newest first, optionally filtered by author."""
    items = await posts.list_posts(user_id=user_id, skip=skip, limit=limit)
    return [PostResponse.model_validate(p) for p in items]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    posts: Annotated[PostService, Depends(get_post_service)],
):
    post = await posts.get_post(post_id)
    return PostResponse.model_validate(post)


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    body: PostUpdateRequest,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    posts: Annotated[PostService, Depends(get_post_service)],
):
    """Update a post (author, or moderator and above). 409 when version is stale."""
    updated = await posts.update_post(
        post_id,
        current_user,
        title=body.title,
        content=body.content,
        tags=body.tags,
        version=body.version,
    )
    return PostResponse.model_validate(updated)


@router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: str,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    posts: Annotated[PostService, Depends(get_post_service)],
) -> Response:
    """Delete a post (author, or admin)."""
    await posts.delete_post(post_id, current_user)
    return Response(status_code=204)

"""CRUD endpoints for blog posts."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.core.deps import Identity, get_current_identity
from app.core.pagination import PageWindow, get_page_window
from app.schemas.common import MessageResponse
from app.schemas.post import PostCreate, PostListResponse, PostRead, PostUpdate
from app.services.posts import PostService, get_post_service

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.post("", response_model=PostRead, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreate,
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> PostRead:
    post = service.create_post(identity.user_id, title=payload.title, body=payload.body)
    return PostRead.model_validate(post)


@router.get("", response_model=PostListResponse)
def list_posts(
    window: PageWindow = Depends(get_page_window),
    service: PostService = Depends(get_post_service),
) -> PostListResponse:
    """List posts newest first, with author name and email."""

    posts = service.list_posts(window)
    return PostListResponse(
        posts=[PostRead.model_validate(post) for post in posts],
        page=window.page,
        limit=window.limit,
    )


@router.put("/{post_id}", response_model=PostRead)
def update_post(
    post_id: str,
    payload: PostUpdate,
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> PostRead:
    """Update a post; only its author or an administrator may do so."""

    post = service.update_post(
        post_id, identity, payload.model_dump(exclude_unset=True, exclude_none=True)
    )
    return PostRead.model_validate(post)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    service.delete_post(post_id, identity)
    return MessageResponse(detail="Post deleted")

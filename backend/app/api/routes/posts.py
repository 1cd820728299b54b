"""Post Routes — thin HTTP surface over PostManager.

Invariants:
    - Routes contain no business logic: parse, delegate, wrap in envelope
    - Status codes: create 201, read/list/update 200, delete 204
    - Typed failures propagate to the global PostServiceError handler
    - page/limit arrive as raw strings so non-numeric input degrades to defaults

Design Decisions:
    - post_id typed as str: an unparsable id is NotFound (404), not a 400
    - PUT and PATCH share one handler; both are partial updates
"""

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.dependencies import get_current_user, get_post_manager
from app.core.domain_types import Requester
from app.schemas.post import (
    PostCreate, PostEnvelope, PostListEnvelope, PostResponse, PostUpdate,
)
from app.services.post_manager import PostManager

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


@router.post(
    "", response_model=PostEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    body: PostCreate,
    requester: Requester = Depends(get_current_user),
    manager: PostManager = Depends(get_post_manager),
):
    """Create a post owned by the requester."""
    post = await manager.create_post(requester, body.to_fields())
    return PostEnvelope(data=PostResponse.from_post(post))


@router.get("", response_model=PostListEnvelope)
async def list_posts(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    manager: PostManager = Depends(get_post_manager),
):
    """List posts with offset/limit pagination."""
    result = await manager.list_posts(page, limit)
    return PostListEnvelope(
        results=result.count,
        page=result.window.page,
        limit=result.window.limit,
        data=[PostResponse.from_post(p) for p in result.posts],
    )


@router.get("/{post_id}", response_model=PostEnvelope)
async def get_post(
    post_id: str, manager: PostManager = Depends(get_post_manager),
):
    """Get a single post."""
    post = await manager.get_post(post_id)
    return PostEnvelope(data=PostResponse.from_post(post))


@router.api_route(
    "/{post_id}", methods=["PATCH", "PUT"], response_model=PostEnvelope,
)
async def update_post(
    post_id: str,
    body: PostUpdate,
    requester: Requester = Depends(get_current_user),
    manager: PostManager = Depends(get_post_manager),
):
    """Partially update a post. Returns the updated state."""
    post = await manager.update_post(post_id, requester, body.to_changes())
    return PostEnvelope(data=PostResponse.from_post(post))


@router.delete(
    "/{post_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_post(
    post_id: str,
    requester: Requester = Depends(get_current_user),
    manager: PostManager = Depends(get_post_manager),
):
    """Delete a post permanently."""
    await manager.delete_post(post_id, requester)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Post API endpoints."""

import logging

from fastapi import APIRouter, Depends, Path, status

from microblog.api.deps import get_current_account_id, get_post_store
from microblog.schemas.auth import StatusResponse
from microblog.schemas.post import PostCreateRequest, PostResponse
from microblog.services.errors import ForbiddenError, NotFoundError
from microblog.services.stores import PostStore

logger = logging.getLogger(__name__)

MAX_POST_ID = 2**63 - 1

router = APIRouter(prefix="/post", tags=["posts"])


@router.post("", response_model=StatusResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    body: PostCreateRequest,
    account_id: int = Depends(get_current_account_id),
    posts: PostStore = Depends(get_post_store),
) -> StatusResponse:
    """Publish a post as the account behind the auth cookie."""
    if not body.content:
        raise ForbiddenError("Empty posts are not allowed")
    post = await posts.create(body.content, account_id)
    logger.info(f"Account {account_id} created post {post.id}")
    return StatusResponse(status=status.HTTP_201_CREATED)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int = Path(..., ge=0, le=MAX_POST_ID),
    posts: PostStore = Depends(get_post_store),
) -> PostResponse:
    post = await posts.get(post_id)
    if post is None:
        raise NotFoundError(f"Post {post_id} not found")
    return PostResponse.from_model(post)

"""Account API endpoints."""

import logging

from fastapi import APIRouter, Depends, Path, status

from microblog.api.deps import get_account_service, get_account_store, get_post_store
from microblog.schemas.account import AccountResponse
from microblog.schemas.auth import RegisterRequest, StatusResponse
from microblog.schemas.post import PostListResponse, PostResponse
from microblog.services.accounts import AccountService
from microblog.services.errors import NotFoundError
from microblog.services.stores import AccountStore, PostStore

logger = logging.getLogger(__name__)

# accounts.id is a 32-bit serial
MAX_ACCOUNT_ID = 2**31 - 1

router = APIRouter(tags=["accounts"])


@router.post("/register", response_model=StatusResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
) -> StatusResponse:
    """Create an account.

    Returns 400 for invalid input and 403 if the handle or email is taken.
    """
    await accounts.register(body.handle, body.email, body.password)
    return StatusResponse(status=status.HTTP_201_CREATED)


@router.get("/account/{account_id}/info", response_model=AccountResponse)
async def account_info(
    account_id: int = Path(..., ge=0, le=MAX_ACCOUNT_ID),
    store: AccountStore = Depends(get_account_store),
) -> AccountResponse:
    """Public information about an account."""
    account = await store.get_by_id(account_id)
    if account is None:
        raise NotFoundError(f"Account {account_id} not found")
    return AccountResponse.model_validate(account)


@router.get("/account/{account_id}/posts", response_model=PostListResponse)
async def account_posts(
    account_id: int = Path(..., ge=0, le=MAX_ACCOUNT_ID),
    posts: PostStore = Depends(get_post_store),
) -> PostListResponse:
    """All posts by an account, newest first.

    An account with no posts and an unknown account both give an empty list.
    """
    rows = await posts.list_by_author(account_id)
    return PostListResponse(posts=[PostResponse.from_model(p) for p in rows])

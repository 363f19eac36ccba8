"""Pydantic schemas for API request/response validation."""

from microblog.schemas.account import AccountResponse
from microblog.schemas.auth import (
    LoggedInResponse,
    LoginRequest,
    RegisterRequest,
    StatusResponse,
)
from microblog.schemas.post import PostCreateRequest, PostListResponse, PostResponse

__all__ = [
    "AccountResponse",
    "LoggedInResponse",
    "LoginRequest",
    "PostCreateRequest",
    "PostListResponse",
    "PostResponse",
    "RegisterRequest",
    "StatusResponse",
]

"""Microblog API Router - aggregates all routes."""

from fastapi import APIRouter

from microblog.api import accounts, auth, health, posts

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(accounts.router)
api_router.include_router(auth.router)
api_router.include_router(posts.router)

__all__ = ["api_router"]

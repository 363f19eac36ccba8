"""Dependency wiring: builds stores and services per request.

Long-lived objects (settings, password hasher, Redis client, session maker)
are created once by the application factory and kept on app.state; nothing
here reads module-level globals.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from microblog.core.config import Settings
from microblog.core.database import get_db
from microblog.services.accounts import AccountService
from microblog.services.passwords import PasswordHasher
from microblog.services.revocation import RevocationStore
from microblog.services.sessions import SessionService
from microblog.services.stores import AccountStore, PostStore
from microblog.services.tokens import CredentialIssuer, CredentialVerifier

ACCESS_COOKIE = "auth"
REFRESH_COOKIE = "refresh"


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_revocation_store(
    request: Request, settings: Settings = Depends(get_app_settings)
) -> RevocationStore:
    return RevocationStore(request.app.state.redis, settings.store_timeout_seconds)


def get_account_store(
    db: AsyncSession = Depends(get_db), settings: Settings = Depends(get_app_settings)
) -> AccountStore:
    return AccountStore(db, settings.store_timeout_seconds)


def get_post_store(
    db: AsyncSession = Depends(get_db), settings: Settings = Depends(get_app_settings)
) -> PostStore:
    return PostStore(db, settings.store_timeout_seconds)


def get_account_service(
    store: AccountStore = Depends(get_account_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    settings: Settings = Depends(get_app_settings),
) -> AccountService:
    """Dependency to get account service."""
    return AccountService(store, hasher, settings)


def get_session_service(
    accounts: AccountStore = Depends(get_account_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    revocations: RevocationStore = Depends(get_revocation_store),
    settings: Settings = Depends(get_app_settings),
) -> SessionService:
    """Dependency to get session service."""
    return SessionService(
        accounts=accounts,
        hasher=hasher,
        issuer=CredentialIssuer(settings),
        verifier=CredentialVerifier(settings, revocations),
        revocations=revocations,
    )


async def get_current_account_id(
    request: Request,
    sessions: SessionService = Depends(get_session_service),
) -> int:
    """Dependency to get the account id from the auth cookie.

    Missing, invalid, expired and revoked tokens all raise ForbiddenError.
    """
    return await sessions.authenticate(request.cookies.get(ACCESS_COOKIE))

"""Authentication API endpoints.

Tokens travel only in HttpOnly cookies: the access token as "auth" on every
path, the refresh token as "refresh" on /auth only, so it is never sent
along with ordinary API requests.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from microblog.api.deps import (
    ACCESS_COOKIE,
    REFRESH_COOKIE,
    get_app_settings,
    get_current_account_id,
    get_session_service,
)
from microblog.core.config import Settings
from microblog.schemas.auth import LoggedInResponse, LoginRequest, StatusResponse
from microblog.services.sessions import SessionService
from microblog.services.tokens import ACCESS_TOKEN_LIFETIME, REFRESH_TOKEN_LIFETIME

logger = logging.getLogger(__name__)

ACCESS_COOKIE_PATH = "/"
REFRESH_COOKIE_PATH = "/auth"


class CookieConfig:
    """Sets and clears the session cookies."""

    ACCESS_MAX_AGE = int(ACCESS_TOKEN_LIFETIME.total_seconds())
    REFRESH_MAX_AGE = int(REFRESH_TOKEN_LIFETIME.total_seconds())

    def __init__(self, settings: Settings):
        self.secure = settings.cookie_secure
        self.samesite = settings.cookie_samesite

    def _set(self, response: Response, name: str, token: str, path: str, max_age: int) -> None:
        response.set_cookie(
            key=name,
            value=token,
            max_age=max_age,
            path=path,
            httponly=True,
            secure=self.secure,
            samesite=self.samesite,
        )

    def set_access(self, response: Response, token: str) -> None:
        self._set(response, ACCESS_COOKIE, token, ACCESS_COOKIE_PATH, self.ACCESS_MAX_AGE)

    def set_refresh(self, response: Response, token: str) -> None:
        self._set(response, REFRESH_COOKIE, token, REFRESH_COOKIE_PATH, self.REFRESH_MAX_AGE)

    def clear(self, response: Response) -> None:
        for name, path in [
            (ACCESS_COOKIE, ACCESS_COOKIE_PATH),
            (REFRESH_COOKIE, REFRESH_COOKIE_PATH),
        ]:
            response.delete_cookie(
                name, path=path, httponly=True, secure=self.secure, samesite=self.samesite
            )


def get_cookie_config(settings: Settings = Depends(get_app_settings)) -> CookieConfig:
    return CookieConfig(settings)


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=StatusResponse)
async def login(
    body: LoginRequest,
    response: Response,
    sessions: SessionService = Depends(get_session_service),
    cookies: CookieConfig = Depends(get_cookie_config),
) -> StatusResponse:
    """Authenticate and set the auth and refresh cookies.

    Unknown handle and wrong password both return 404.
    """
    pair = await sessions.login(body.handle, body.password)
    cookies.set_access(response, pair.access_token)
    cookies.set_refresh(response, pair.refresh_token)
    return StatusResponse(status=status.HTTP_200_OK)


@router.post("/refresh", response_model=StatusResponse, status_code=status.HTTP_201_CREATED)
async def refresh(
    request: Request,
    response: Response,
    sessions: SessionService = Depends(get_session_service),
    cookies: CookieConfig = Depends(get_cookie_config),
) -> StatusResponse:
    """Issue a new access cookie from the refresh cookie.

    The refresh cookie itself is left untouched.
    """
    access_token = await sessions.refresh(request.cookies.get(REFRESH_COOKIE))
    cookies.set_access(response, access_token)
    return StatusResponse(status=status.HTTP_201_CREATED)


@router.post("/expire", response_model=StatusResponse, status_code=status.HTTP_201_CREATED)
async def expire(
    request: Request,
    response: Response,
    sessions: SessionService = Depends(get_session_service),
    cookies: CookieConfig = Depends(get_cookie_config),
) -> StatusResponse:
    """Log out: revoke both tokens and clear the cookies."""
    await sessions.logout(
        request.cookies.get(ACCESS_COOKIE),
        request.cookies.get(REFRESH_COOKIE),
    )
    cookies.clear(response)
    return StatusResponse(status=status.HTTP_201_CREATED)


@router.get("/logged_in", response_model=LoggedInResponse)
async def logged_in(
    account_id: int = Depends(get_current_account_id),
) -> LoggedInResponse:
    """Report which account the auth cookie belongs to."""
    return LoggedInResponse(status=status.HTTP_200_OK, id=account_id)

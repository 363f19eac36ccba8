"""Signed access/refresh tokens (JWT, HS256)."""

import logging
import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

import jwt
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    InvalidAlgorithmError,
    PyJWTError,
)

from microblog.core.config import Settings
from microblog.services.errors import SigningError, TokenError, TokenFailure
from microblog.services.revocation import RevocationStore

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"

ACCESS_TOKEN_LIFETIME = timedelta(minutes=15)
REFRESH_TOKEN_LIFETIME = timedelta(hours=24)


class TokenKind(str, Enum):
    """Which issuing operation produced a token. Carried in the "type" claim."""

    ACCESS = "access"
    REFRESH = "refresh"


_LIFETIMES = {
    TokenKind.ACCESS: ACCESS_TOKEN_LIFETIME,
    TokenKind.REFRESH: REFRESH_TOKEN_LIFETIME,
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CredentialIssuer:
    """Builds signed tokens for an account id."""

    def __init__(self, settings: Settings, clock: Callable[[], datetime] = _utcnow):
        self._secret = settings.secret_key
        self._clock = clock

    def issue_access(self, account_id: int) -> str:
        """Create a short-lived access token."""
        return self._issue(account_id, TokenKind.ACCESS)

    def issue_refresh(self, account_id: int) -> str:
        """Create a long-lived refresh token."""
        return self._issue(account_id, TokenKind.REFRESH)

    def _issue(self, account_id: int, kind: TokenKind) -> str:
        now = self._clock()
        payload = {
            "sub": str(account_id),
            "iat": now,
            "exp": now + _LIFETIMES[kind],
            "type": kind.value,
            # Two tokens minted in the same second must still differ
            "jti": secrets.token_hex(16),
        }
        try:
            token = jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)
        except (PyJWTError, TypeError, ValueError) as e:
            logger.error("Failed to sign %s token: %s", kind.value, e)
            raise SigningError(f"Could not sign {kind.value} token") from e
        # PyJWT 2.x returns str; older type stubs may declare bytes
        return str(token)


class CredentialVerifier:
    """Validates a token and returns the account id it was issued for.

    Checks run in a fixed order and the first failure wins: signature,
    expiry, claim shape and kind, then the revocation denylist. An expired
    token therefore reports EXPIRED whether or not it was also revoked.
    """

    def __init__(self, settings: Settings, revocations: RevocationStore):
        self._secret = settings.secret_key
        self._revocations = revocations

    def _decode(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp", "iat", "sub"]},
            )
        except ExpiredSignatureError as e:
            raise TokenError(TokenFailure.EXPIRED) from e
        except (DecodeError, InvalidAlgorithmError) as e:
            # Bad signature, a header alg other than HS256, or not a JWT at all
            raise TokenError(TokenFailure.SIGNATURE) from e
        except PyJWTError as e:
            raise TokenError(TokenFailure.MALFORMED, f"Invalid claims: {e}") from e

    async def verify(self, token: str, kind: TokenKind = TokenKind.ACCESS) -> int:
        """Verify a token of the expected kind. Raises TokenError."""
        try:
            payload = self._decode(token)

            try:
                account_id = int(payload["sub"])
            except (TypeError, ValueError) as e:
                raise TokenError(TokenFailure.MALFORMED, "Subject is not an account id") from e

            if payload.get("type") != kind.value:
                raise TokenError(
                    TokenFailure.MALFORMED,
                    f"Expected {kind.value} token, got {payload.get('type')!r}",
                )

            if await self._revocations.is_revoked(token):
                raise TokenError(TokenFailure.REVOKED)
        except TokenError as e:
            logger.info("Rejected %s token: %s", kind.value, e.failure.value)
            raise

        return account_id

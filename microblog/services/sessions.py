"""Login, refresh and logout."""

import asyncio
import logging
from dataclasses import dataclass

from microblog.services.errors import ForbiddenError, NotFoundError
from microblog.services.passwords import PasswordHasher
from microblog.services.revocation import RevocationStore
from microblog.services.stores import AccountStore
from microblog.services.tokens import CredentialIssuer, CredentialVerifier, TokenKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class SessionService:
    """Session lifecycle on top of stateless signed tokens.

    Tokens are never stored. Logout works by adding both token strings to
    the revocation store, which the verifier consults on every request.
    """

    def __init__(
        self,
        accounts: AccountStore,
        hasher: PasswordHasher,
        issuer: CredentialIssuer,
        verifier: CredentialVerifier,
        revocations: RevocationStore,
    ):
        self.accounts = accounts
        self.hasher = hasher
        self.issuer = issuer
        self.verifier = verifier
        self.revocations = revocations

    async def login(self, handle: str, password: str) -> TokenPair:
        """Check credentials and issue an access/refresh pair.

        Raises NotFoundError for both "no such handle" and "wrong password"
        so the response does not reveal whether an account exists.
        """
        account = await self.accounts.get_by_handle(handle)

        if account is None:
            # Perform a dummy verification to prevent timing attacks
            await asyncio.to_thread(self.hasher.burn, password)
            raise NotFoundError(f"No account with handle {handle!r}")

        if not await asyncio.to_thread(self.hasher.verify, account.pw_hash, password):
            raise NotFoundError(f"Wrong password for account {account.id}")

        pair = TokenPair(
            access_token=self.issuer.issue_access(account.id),
            refresh_token=self.issuer.issue_refresh(account.id),
        )
        logger.info(f"Account {account.id} logged in")
        return pair

    async def authenticate(self, access_token: str | None) -> int:
        """Resolve the account behind an access token for a protected endpoint."""
        if not access_token:
            raise ForbiddenError("Missing access token")
        return await self.verifier.verify(access_token, TokenKind.ACCESS)

    async def refresh(self, refresh_token: str | None) -> str:
        """Mint a new access token from a refresh token.

        The refresh token is not rotated; it stays valid until it expires or
        is revoked by logout.
        """
        if not refresh_token:
            raise ForbiddenError("Missing refresh token")
        account_id = await self.verifier.verify(refresh_token, TokenKind.REFRESH)
        return self.issuer.issue_access(account_id)

    async def logout(self, access_token: str | None, refresh_token: str | None) -> None:
        """Revoke both tokens of a session. Both must currently verify."""
        if not access_token or not refresh_token:
            raise ForbiddenError("Logout requires both tokens")

        account_id = await self.verifier.verify(access_token, TokenKind.ACCESS)
        refresh_account_id = await self.verifier.verify(refresh_token, TokenKind.REFRESH)
        if account_id != refresh_account_id:
            raise ForbiddenError("Access and refresh tokens belong to different accounts")

        # One transaction, so a store failure cannot leave the refresh token live
        await self.revocations.revoke_all(access_token, refresh_token)
        logger.info(f"Account {account_id} logged out")

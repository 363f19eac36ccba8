"""Redis-backed denylist for revoked tokens."""

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from microblog.core.config import Settings
from microblog.services.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Longest token lifetime (24h refresh) plus a one hour buffer
REVOCATION_TTL_SECONDS = 25 * 60 * 60


def create_redis_client(settings: Settings) -> aioredis.Redis:
    """Build the shared async Redis client for the revocation store."""
    return aioredis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_timeout=settings.store_timeout_seconds,
        socket_connect_timeout=settings.store_timeout_seconds,
    )


class RevocationStore:
    """Denylist of token strings that were explicitly logged out.

    Entries expire on their own after REVOCATION_TTL_SECONDS, by which time
    every token they could refer to has expired anyway. The store must be a
    single Redis primary: a revoke has to be visible to the very next verify.
    """

    def __init__(self, client: Any, timeout: float):
        self._client = client
        self._timeout = timeout

    async def _call(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)
        except TimeoutError as e:
            logger.error("Revocation store %s timed out after %.1fs", operation, self._timeout)
            raise StoreUnavailableError(f"Revocation store {operation} timed out") from e
        except (RedisError, OSError) as e:
            logger.error("Revocation store %s failed: %s", operation, e)
            raise StoreUnavailableError(f"Revocation store {operation} failed") from e

    async def revoke(self, token: str) -> None:
        """Add a token to the denylist. Revoking twice is harmless."""
        await self._call("revoke", self._client.set(token, "1", ex=REVOCATION_TTL_SECONDS))

    async def revoke_all(self, *tokens: str) -> None:
        """Revoke several tokens in one MULTI/EXEC: either all land or none do."""
        pipe = self._client.pipeline(transaction=True)
        for token in tokens:
            pipe.set(token, "1", ex=REVOCATION_TTL_SECONDS)
        await self._call("revoke", pipe.execute())

    async def is_revoked(self, token: str) -> bool:
        """Check whether a token has been revoked. The key is the raw token string."""
        count = await self._call("lookup", self._client.exists(token))
        return bool(count)

    async def ping(self) -> bool:
        """Health probe. Returns False instead of raising."""
        try:
            return bool(await self._call("ping", self._client.ping()))
        except StoreUnavailableError:
            return False

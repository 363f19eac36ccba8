"""Relational persistence for accounts and posts."""

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from sqlalchemy import or_, select
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from microblog.models.account import Account
from microblog.models.post import Post
from microblog.services.errors import AlreadyExistsError, ForbiddenError, StoreUnavailableError

logger = logging.getLogger(__name__)


class _SessionStore:
    """Shared deadline and error translation for session-backed stores."""

    def __init__(self, session: AsyncSession, timeout: float):
        self.session = session
        self._timeout = timeout

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncIterator[None]:
        try:
            async with asyncio.timeout(self._timeout):
                yield
        except TimeoutError as e:
            logger.error("Database %s timed out after %.1fs", operation, self._timeout)
            raise StoreUnavailableError(f"Database {operation} timed out") from e
        except (DBAPIError, OSError) as e:
            logger.error("Database %s failed: %s", operation, e)
            raise StoreUnavailableError(f"Database {operation} failed") from e


class AccountStore(_SessionStore):
    """Keyed create/read access to accounts."""

    async def create(self, handle: str, email: str, pw_hash: str) -> Account:
        """Insert an account.

        Raises AlreadyExistsError when the unique constraint on handle or
        email rejects the row.
        """
        account = Account(handle=handle, email=email, pw_hash=pw_hash)
        async with self._guard("create account"):
            self.session.add(account)
            try:
                await self.session.flush()
            except IntegrityError as e:
                await self.session.rollback()
                raise AlreadyExistsError("Handle or email already registered") from e
            await self.session.commit()
        return account

    async def get_by_id(self, account_id: int) -> Account | None:
        async with self._guard("account lookup"):
            result = await self.session.execute(select(Account).where(Account.id == account_id))
            return result.scalar_one_or_none()

    async def get_by_handle(self, handle: str) -> Account | None:
        async with self._guard("account lookup"):
            result = await self.session.execute(select(Account).where(Account.handle == handle))
            return result.scalar_one_or_none()

    async def handle_or_email_taken(self, handle: str, email: str) -> bool:
        """Check if any account already uses this handle or this email."""
        async with self._guard("uniqueness check"):
            result = await self.session.execute(
                select(Account.id)
                .where(or_(Account.handle == handle, Account.email == email))
                .limit(1)
            )
            return result.scalar_one_or_none() is not None


class PostStore(_SessionStore):
    """Keyed create/read access to posts."""

    async def create(self, content: str, author: int) -> Post:
        """Insert a post.

        Raises ForbiddenError when the author no longer exists, which the
        foreign key on posts.author reports as an IntegrityError.
        """
        post = Post(
            content=content,
            author=author,
            post_time=int(datetime.now(UTC).timestamp()),
        )
        async with self._guard("create post"):
            self.session.add(post)
            try:
                await self.session.flush()
            except IntegrityError as e:
                await self.session.rollback()
                raise ForbiddenError(f"Author account {author} does not exist") from e
            await self.session.commit()
        return post

    async def get(self, post_id: int) -> Post | None:
        async with self._guard("post lookup"):
            result = await self.session.execute(select(Post).where(Post.id == post_id))
            return result.scalar_one_or_none()

    async def list_by_author(self, author: int) -> Sequence[Post]:
        """All posts by an account, newest first."""
        async with self._guard("post listing"):
            result = await self.session.execute(
                select(Post)
                .where(Post.author == author)
                .order_by(Post.post_time.desc(), Post.id.desc())
            )
            return result.scalars().all()

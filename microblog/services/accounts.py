"""Account registration."""

import asyncio
import logging
import re

from microblog.core.config import Settings
from microblog.models.account import MAX_EMAIL_LENGTH, MAX_HANDLE_LENGTH, Account
from microblog.services.errors import AlreadyExistsError, InvalidInputError
from microblog.services.passwords import PasswordHasher
from microblog.services.stores import AccountStore

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


class AccountService:
    """Creates accounts with validated input and hashed passwords."""

    def __init__(self, store: AccountStore, hasher: PasswordHasher, settings: Settings):
        self.store = store
        self.hasher = hasher
        self.min_password = settings.minimum_password_length
        self.max_password = settings.maximum_password_length

    def _validate(self, handle: str, email: str, password: str) -> None:
        if not handle or not email:
            raise InvalidInputError("Handle and email are required")
        if len(handle) > MAX_HANDLE_LENGTH or len(email) > MAX_EMAIL_LENGTH:
            raise InvalidInputError(
                f"Handle is limited to {MAX_HANDLE_LENGTH} characters"
                f" and email to {MAX_EMAIL_LENGTH}"
            )
        if not self.min_password <= len(password) <= self.max_password:
            raise InvalidInputError(
                f"Password length must be between {self.min_password} and {self.max_password}"
            )
        if not is_valid_email(email):
            raise InvalidInputError("Email address is not valid")

    async def register(self, handle: str, email: str, password: str) -> Account:
        """Register a new account.

        The existence check only saves a hash on the common path. Two
        concurrent registrations can both pass it; the unique constraints
        in the accounts table decide which one commits, and the loser gets
        AlreadyExistsError from the store.
        """
        self._validate(handle, email, password)

        if await self.store.handle_or_email_taken(handle, email):
            raise AlreadyExistsError("Handle or email already registered")

        pw_hash = await asyncio.to_thread(self.hasher.hash, password)
        account = await self.store.create(handle, email, pw_hash)

        logger.info(f"Registered account {account.id}: {handle}")
        return account

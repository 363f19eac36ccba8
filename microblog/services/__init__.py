"""Microblog services."""

from microblog.services.accounts import AccountService
from microblog.services.passwords import PasswordHasher
from microblog.services.revocation import RevocationStore
from microblog.services.sessions import SessionService, TokenPair
from microblog.services.stores import AccountStore, PostStore
from microblog.services.tokens import CredentialIssuer, CredentialVerifier, TokenKind

__all__ = [
    "AccountService",
    "AccountStore",
    "CredentialIssuer",
    "CredentialVerifier",
    "PasswordHasher",
    "PostStore",
    "RevocationStore",
    "SessionService",
    "TokenKind",
    "TokenPair",
]

"""Account model for registration and login."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from microblog.core.database import Base

# Column widths; registration rejects longer values before they reach the table
MAX_HANDLE_LENGTH = 255
MAX_EMAIL_LENGTH = 320


class Account(Base):
    """A registered account.

    Handle and email are each unique across all accounts. The constraint
    lives in the table itself so two concurrent registrations cannot both
    commit, whatever the application-level pre-check saw.
    """

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    handle: Mapped[str] = mapped_column(
        String(MAX_HANDLE_LENGTH), nullable=False, unique=True, index=True
    )
    email: Mapped[str] = mapped_column(String(MAX_EMAIL_LENGTH), nullable=False, unique=True)

    # Argon2 encoded hash; never serialized
    pw_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Account {self.id} {self.handle}>"

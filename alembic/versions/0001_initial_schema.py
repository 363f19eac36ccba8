"""Create accounts and posts tables.

Handle and email uniqueness is enforced here, by the database, so that
concurrent registrations cannot both commit.

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("handle", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("pw_hash", sa.String(255), nullable=False),
        sa.UniqueConstraint("email", name="uq_accounts_email"),
    )
    op.create_index("ix_accounts_handle", "accounts", ["handle"], unique=True)

    op.create_table(
        "posts",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("post_time", sa.BigInteger(), nullable=False),
    )
    op.create_index("ix_posts_author", "posts", ["author"])


def downgrade() -> None:
    op.drop_index("ix_posts_author", table_name="posts")
    op.drop_table("posts")
    op.drop_index("ix_accounts_handle", table_name="accounts")
    op.drop_table("accounts")

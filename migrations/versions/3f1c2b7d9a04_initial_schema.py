"""initial_schema

Create the schema for federated login:
- Accounts (local accounts, created by first logins or beforehand)
- External identities (provider account linked to a local account)
- Access tokens (issued after a successful login)

Revision ID: 3f1c2b7d9a04
Revises:
Create Date: 2026-10-19 10:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c2b7d9a04"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # ACCOUNTS table
    # ========================================================================
    op.create_table(
        "accounts",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("username", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("password", sa.String(255), nullable=False),  # Salted hash
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("gender", sa.String(50), nullable=True),
        sa.Column("prefered_language", sa.String(8), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column(
            "external_refs",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_accounts_username"),
        sa.UniqueConstraint("email", name="uq_accounts_email"),
    )

    # ========================================================================
    # EXTERNAL_IDENTITIES table
    # ========================================================================
    op.create_table(
        "external_identities",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("account_id", sa.UUID(), nullable=False),
        sa.Column("provider", sa.String(100), nullable=False),  # 'facebook', 'google'
        sa.Column("auth_scheme", sa.String(50), nullable=False),  # 'oauth2', 'openid'
        sa.Column("external_id", sa.String(255), nullable=False),
        sa.Column("profile", postgresql.JSONB(), nullable=False),
        sa.Column("credentials", postgresql.JSONB(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "modified_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("provider", "external_id", name="uq_provider_external_id"),
    )
    op.create_index(
        "idx_external_identities_account_id", "external_identities", ["account_id"]
    )
    op.create_index(
        "idx_external_identities_external_id", "external_identities", ["external_id"]
    )

    # ========================================================================
    # ACCESS_TOKENS table
    # ========================================================================
    op.create_table(
        "access_tokens",
        sa.Column("id", sa.String(1024), nullable=False),  # Signed token string
        sa.Column("account_id", sa.UUID(), nullable=False),
        sa.Column("ttl", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_access_tokens_account_id", "access_tokens", ["account_id"])


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_index("idx_access_tokens_account_id", table_name="access_tokens")
    op.drop_table("access_tokens")
    op.drop_index(
        "idx_external_identities_external_id", table_name="external_identities"
    )
    op.drop_index("idx_external_identities_account_id", table_name="external_identities")
    op.drop_table("external_identities")
    op.drop_table("accounts")

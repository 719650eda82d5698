"""SQLAlchemy table definitions for federated login.

These table definitions match the schema defined in Alembic migrations.
Column types are portable so the same tables run on PostgreSQL and SQLite.
"""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.dialects import postgresql

metadata = MetaData()

# JSONB on PostgreSQL, plain JSON elsewhere
JSONPayload = JSON().with_variant(postgresql.JSONB(), "postgresql")

# ============================================================================
# ACCOUNTS TABLE
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("username", String(255), nullable=True, unique=True),
    Column("email", String(255), nullable=True, unique=True),
    Column("password", String(255), nullable=False),  # Salted hash
    Column("name", String(255), nullable=True),
    Column("gender", String(50), nullable=True),
    Column("prefered_language", String(8), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column("external_refs", JSONPayload, nullable=False, default=dict),
    Column(
        "created_at", DateTime(timezone=True), nullable=False, server_default=func.now()
    ),
    Column(
        "updated_at", DateTime(timezone=True), nullable=False, server_default=func.now()
    ),
)

# ============================================================================
# EXTERNAL IDENTITIES TABLE
# ============================================================================
external_identities_table = Table(
    "external_identities",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "account_id",
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("provider", String(100), nullable=False),  # 'facebook', 'google', ...
    Column("auth_scheme", String(50), nullable=False),  # 'oauth2', 'openid', ...
    Column("external_id", String(255), nullable=False),  # Provider user ID
    Column("profile", JSONPayload, nullable=False),
    Column("credentials", JSONPayload, nullable=False),
    Column(
        "created_at", DateTime(timezone=True), nullable=False, server_default=func.now()
    ),
    Column(
        "modified_at", DateTime(timezone=True), nullable=False, server_default=func.now()
    ),
    UniqueConstraint("provider", "external_id", name="uq_provider_external_id"),
)

Index("idx_external_identities_account_id", external_identities_table.c.account_id)
Index("idx_external_identities_external_id", external_identities_table.c.external_id)

# ============================================================================
# ACCESS TOKENS TABLE
# ============================================================================
access_tokens_table = Table(
    "access_tokens",
    metadata,
    Column("id", String(1024), primary_key=True),  # Signed token string
    Column(
        "account_id",
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("ttl", Integer, nullable=False),  # Seconds
    Column(
        "created_at", DateTime(timezone=True), nullable=False, server_default=func.now()
    ),
)

Index("idx_access_tokens_account_id", access_tokens_table.c.account_id)

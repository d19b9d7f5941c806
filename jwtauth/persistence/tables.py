"""SQLAlchemy table definitions.

These table definitions match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False),
    Column("nickname", String(20), nullable=False),
    Column("role", String(20), nullable=False, server_default="USER"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    UniqueConstraint("email", name="uq_users_email"),
)

Index("idx_users_nickname", users_table.c.nickname)

# ============================================================================
# USER IDENTITIES TABLE (local password + federated providers)
# ============================================================================
user_identities_table = Table(
    "user_identities",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column(
        "user_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("provider", String(20), nullable=False),  # 'local', 'google', ...
    Column("provider_id", String(255), nullable=True),  # NULL only for 'local'
    Column("password_hash", Text, nullable=True),  # Set only for 'local'
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    # NULL provider_id values never collide, so local identities are exempt
    UniqueConstraint("provider", "provider_id", name="uq_provider_identity"),
    UniqueConstraint("user_id", "provider", name="uq_user_provider"),
    CheckConstraint(
        "(provider = 'local') = (provider_id IS NULL)",
        name="ck_identity_provider_id",
    ),
)

Index("idx_user_identities_user_id", user_identities_table.c.user_id)

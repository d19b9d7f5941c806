"""initial_schema

Create the authentication schema:
- Users (unique email, nickname, role)
- User Identities (local password + federated providers, cascade delete)

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-10-19 09:12:44.118204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # USERS
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("nickname", sa.String(20), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="USER"),
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
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("idx_users_nickname", "users", ["nickname"])

    # ========================================================================
    # USER IDENTITIES
    # ========================================================================
    op.create_table(
        "user_identities",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("provider", sa.String(20), nullable=False),  # 'local', 'google', ...
        sa.Column("provider_id", sa.String(255), nullable=True),  # NULL for 'local'
        sa.Column("password_hash", sa.Text(), nullable=True),  # 'local' only
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("provider", "provider_id", name="uq_provider_identity"),
        sa.UniqueConstraint("user_id", "provider", name="uq_user_provider"),
        sa.CheckConstraint(
            "(provider = 'local') = (provider_id IS NULL)",
            name="ck_identity_provider_id",
        ),
    )
    op.create_index("idx_user_identities_user_id", "user_identities", ["user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_user_identities_user_id", table_name="user_identities")
    op.drop_table("user_identities")
    op.drop_index("idx_users_nickname", table_name="users")
    op.drop_table("users")

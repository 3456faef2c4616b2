"""create authorization tables

Revision ID: 7c1e4a2b9d10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "7c1e4a2b9d10"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "roles",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False, comment="Role name (unique within scope)"),
        sa.Column("actions", sa.JSON(), nullable=False, comment="Granted action names"),
        sa.Column("community_id", sa.String(length=36), nullable=True, comment="Owning community (NULL for instance roles)"),
        sa.Column("is_instance_role", sa.Boolean(), nullable=False),
        sa.Column("scope_key", sa.String(length=64), nullable=False, comment="Composite scope key used for uniqueness"),
        sa.Column("is_default", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("scope_key", "name", name="uq_roles_scope_key_name"),
    )
    op.create_index("ix_roles_community_id", "roles", ["community_id"])
    op.create_index("ix_roles_scope_key", "roles", ["scope_key"])

    op.create_table(
        "user_roles",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("role_id", sa.String(length=36), nullable=False, comment="Foreign key to roles table"),
        sa.Column("community_id", sa.String(length=36), nullable=True),
        sa.Column("is_instance_role", sa.Boolean(), nullable=False),
        sa.Column("scope_key", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "role_id", "scope_key", name="uq_user_roles_user_role_scope"),
    )
    op.create_index("ix_user_roles_user_id", "user_roles", ["user_id"])
    op.create_index("ix_user_roles_role_id", "user_roles", ["role_id"])
    op.create_index("ix_user_roles_community_id", "user_roles", ["community_id"])
    op.create_index("ix_user_roles_scope_key", "user_roles", ["scope_key"])

    op.create_table(
        "channels",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("community_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_channels_community_id", "channels", ["community_id"])

    op.create_table(
        "messages",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("channel_id", sa.String(length=36), nullable=True),
        sa.Column("direct_message_group_id", sa.String(length=36), nullable=True),
        sa.ForeignKeyConstraint(["channel_id"], ["channels.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_messages_channel_id", "messages", ["channel_id"])
    op.create_index("ix_messages_direct_message_group_id", "messages", ["direct_message_group_id"])

    op.create_table(
        "direct_message_group_members",
        sa.Column("group_id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.PrimaryKeyConstraint("group_id", "user_id"),
    )
    op.create_index("ix_direct_message_group_members_user_id", "direct_message_group_members", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_direct_message_group_members_user_id", table_name="direct_message_group_members")
    op.drop_table("direct_message_group_members")
    op.drop_index("ix_messages_direct_message_group_id", table_name="messages")
    op.drop_index("ix_messages_channel_id", table_name="messages")
    op.drop_table("messages")
    op.drop_index("ix_channels_community_id", table_name="channels")
    op.drop_table("channels")
    op.drop_index("ix_user_roles_scope_key", table_name="user_roles")
    op.drop_index("ix_user_roles_community_id", table_name="user_roles")
    op.drop_index("ix_user_roles_role_id", table_name="user_roles")
    op.drop_index("ix_user_roles_user_id", table_name="user_roles")
    op.drop_table("user_roles")
    op.drop_index("ix_roles_scope_key", table_name="roles")
    op.drop_index("ix_roles_community_id", table_name="roles")
    op.drop_table("roles")

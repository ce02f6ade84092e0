"""Initial schema - workspace hierarchy, membership and scope overrides.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

OVERRIDE_SCOPES = (
    ("space_override", "space"),
    ("folder_override", "folder"),
    ("list_override", "task_list"),
)


def upgrade() -> None:
    op.create_table(
        "workspace",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "workspace_member",
        sa.Column("workspace_id", sa.UUID(), sa.ForeignKey("workspace.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("user_id", sa.String(255), primary_key=True),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("role IN ('owner', 'admin', 'member', 'guest')", name="ck_workspace_member_role"),
    )
    op.create_index("ix_workspace_member_user", "workspace_member", ["user_id"])

    op.create_table(
        "space",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("workspace_id", sa.UUID(), sa.ForeignKey("workspace.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_space_workspace", "space", ["workspace_id"])

    op.create_table(
        "folder",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("space_id", sa.UUID(), sa.ForeignKey("space.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_folder_space", "folder", ["space_id"])

    op.create_table(
        "task_list",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("space_id", sa.UUID(), sa.ForeignKey("space.id", ondelete="CASCADE"), nullable=False),
        sa.Column("folder_id", sa.UUID(), sa.ForeignKey("folder.id", ondelete="CASCADE"), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_task_list_space", "task_list", ["space_id"])
    op.create_index("ix_task_list_folder", "task_list", ["folder_id"])

    op.create_table(
        "task",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("list_id", sa.UUID(), sa.ForeignKey("task_list.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_task_list_id", "task", ["list_id"])

    # Three structurally identical override tables; resource_id points at the scope's own table.
    for table, resource_table in OVERRIDE_SCOPES:
        op.create_table(
            table,
            sa.Column("id", sa.UUID(), primary_key=True),
            sa.Column("user_id", sa.String(255), nullable=False),
            sa.Column(
                "resource_id",
                sa.UUID(),
                sa.ForeignKey(f"{resource_table}.id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column("workspace_id", sa.UUID(), sa.ForeignKey("workspace.id", ondelete="CASCADE"), nullable=False),
            sa.Column("level", sa.String(20), nullable=False),
            sa.Column("granted_by", sa.String(255), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("space_id", sa.UUID(), nullable=True),
            sa.Column("folder_id", sa.UUID(), nullable=True),
            sa.ForeignKeyConstraint(
                ["workspace_id", "user_id"],
                ["workspace_member.workspace_id", "workspace_member.user_id"],
                ondelete="CASCADE",
            ),
            sa.CheckConstraint("level IN ('FULL', 'EDIT', 'COMMENT', 'VIEW')", name=f"ck_{table}_level"),
        )
        op.create_index(f"ix_{table}_user_resource", table, ["user_id", "resource_id"], unique=True)
        op.create_index(f"ix_{table}_resource", table, ["resource_id"])
        op.create_index(f"ix_{table}_workspace_user", table, ["workspace_id", "user_id"])


def downgrade() -> None:
    for table, _ in reversed(OVERRIDE_SCOPES):
        op.drop_table(table)
    op.drop_table("task")
    op.drop_table("task_list")
    op.drop_table("folder")
    op.drop_table("space")
    op.drop_table("workspace_member")
    op.drop_table("workspace")

"""users and sportsmonks types

Revision ID: 0001_init
Revises:
Create Date: 2026-01-10
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "user",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("email", sa.Text(), nullable=True, unique=True),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("password_hash", sa.Text(), nullable=True),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_table(
        "sportsmonks_types",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column(
            "parent_id",
            sa.Integer(),
            sa.ForeignKey("sportsmonks_types.id", ondelete="SET NULL", onupdate="CASCADE"),
            nullable=True,
        ),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("code", sa.Text(), nullable=False),
        sa.Column("developer_name", sa.Text(), nullable=False),
        sa.Column("model_type", sa.Text(), nullable=False),
        sa.Column("group", sa.Text(), nullable=True),
        sa.Column("stat_group", sa.Text(), nullable=True),
        sa.Column("last_synced_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("sportsmonks_types_model_type_idx", "sportsmonks_types", ["model_type"])
    op.create_index("sportsmonks_types_code_idx", "sportsmonks_types", ["code"])
    op.create_index("sportsmonks_types_developer_name_idx", "sportsmonks_types", ["developer_name"])


def downgrade() -> None:
    op.drop_index("sportsmonks_types_developer_name_idx", table_name="sportsmonks_types")
    op.drop_index("sportsmonks_types_code_idx", table_name="sportsmonks_types")
    op.drop_index("sportsmonks_types_model_type_idx", table_name="sportsmonks_types")
    op.drop_table("sportsmonks_types")
    op.drop_table("user")

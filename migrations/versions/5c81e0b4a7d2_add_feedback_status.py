"""add feedback.status

Revision ID: 5c81e0b4a7d2
Revises: 1a2f7c3d9e01
Create Date: 2026-10-12 09:31:47.552190

"""
from alembic import context, op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5c81e0b4a7d2"
down_revision = "1a2f7c3d9e01"
branch_labels = None
depends_on = None


def _has_status_column():
    if context.is_offline_mode():
        return False
    columns = sa.inspect(op.get_bind()).get_columns("feedback")
    return any(c["name"] == "status" for c in columns)


def upgrade():
    if _has_status_column():
        return
    # Existing rows become Open
    op.add_column(
        "feedback",
        sa.Column("status", sa.String(length=20), nullable=False, server_default="Open"),
    )


def downgrade():
    with op.batch_alter_table("feedback") as batch:
        batch.drop_column("status")

"""create feedback, upvotes and comments tables

Revision ID: 1a2f7c3d9e01
Revises:
Create Date: 2026-10-12 09:14:02.118734

"""
from alembic import context, op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "1a2f7c3d9e01"
down_revision = None
branch_labels = None
depends_on = None


def _existing_tables():
    # Offline (--sql) runs have no connection to inspect
    if context.is_offline_mode():
        return set()
    return set(sa.inspect(op.get_bind()).get_table_names())


def upgrade():
    # Databases created before migrations existed already hold these tables
    existing = _existing_tables()

    if "feedback" not in existing:
        op.create_table(
            "feedback",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("title", sa.Text(), nullable=False),
            sa.Column("description", sa.Text(), nullable=False),
            sa.Column("user_email", sa.Text(), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
            sa.PrimaryKeyConstraint("id"),
        )

    if "upvotes" not in existing:
        op.create_table(
            "upvotes",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("feedback_id", sa.Integer(), nullable=False),
            sa.Column("user_email", sa.Text(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
            sa.ForeignKeyConstraint(["feedback_id"], ["feedback.id"]),
            sa.UniqueConstraint("feedback_id", "user_email", name="uq_upvotes_feedback_user"),
        )

    if "comments" not in existing:
        op.create_table(
            "comments",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("feedback_id", sa.Integer(), nullable=False),
            sa.Column("user_email", sa.Text(), nullable=False),
            sa.Column("comment_text", sa.Text(), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
            sa.PrimaryKeyConstraint("id"),
            sa.ForeignKeyConstraint(["feedback_id"], ["feedback.id"]),
        )
        op.create_index("ix_comments_feedback_created_at", "comments", ["feedback_id", "created_at"], unique=False)


def downgrade():
    op.drop_index("ix_comments_feedback_created_at", table_name="comments")
    op.drop_table("comments")
    op.drop_table("upvotes")
    op.drop_table("feedback")

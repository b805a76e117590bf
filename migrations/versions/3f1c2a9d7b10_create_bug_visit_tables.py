"""create users, bugs and bug_user_last_visit

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-16 09:12:40.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255)),
        sa.Column("password_hash", sa.String(255)),
        sa.Column("api_key", sa.String(64)),
        sa.Column("is_active", sa.Integer(), nullable=False, server_default=sa.text("1")),
    )
    op.create_index("ix_user_email", "user", ["email"], unique=True)
    op.create_index("ix_user_api_key", "user", ["api_key"], unique=True)

    op.create_table(
        "groups",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("description", sa.String(255)),
    )

    op.create_table(
        "user_group_map",
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("group_id", sa.Integer(), sa.ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "bugs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("alias", sa.String(40), unique=True),
        sa.Column("summary", sa.String(255), nullable=False, server_default=""),
        sa.Column("reporter_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("assigned_to_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("qa_contact_id", sa.Integer(), sa.ForeignKey("user.id")),
        sa.Column("reporter_accessible", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("cclist_accessible", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("creation_ts", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_bugs_reporter_id", "bugs", ["reporter_id"])
    op.create_index("ix_bugs_assigned_to_id", "bugs", ["assigned_to_id"])
    op.create_index("ix_bugs_qa_contact_id", "bugs", ["qa_contact_id"])

    op.create_table(
        "cc",
        sa.Column("bug_id", sa.Integer(), sa.ForeignKey("bugs.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "bug_group_map",
        sa.Column("bug_id", sa.Integer(), sa.ForeignKey("bugs.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("group_id", sa.Integer(), sa.ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "bug_user_last_visit",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id", ondelete="CASCADE"), nullable=False),
        sa.Column("bug_id", sa.Integer(), sa.ForeignKey("bugs.id", ondelete="CASCADE"), nullable=False),
        sa.Column("last_visit_ts", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("user_id", "bug_id", name="bug_user_last_visit_idx"),
    )
    op.create_index("ix_bug_user_last_visit_bug_id", "bug_user_last_visit", ["bug_id"])


def downgrade():
    op.drop_index("ix_bug_user_last_visit_bug_id", table_name="bug_user_last_visit")
    op.drop_table("bug_user_last_visit")
    op.drop_table("bug_group_map")
    op.drop_table("cc")
    op.drop_index("ix_bugs_qa_contact_id", table_name="bugs")
    op.drop_index("ix_bugs_assigned_to_id", table_name="bugs")
    op.drop_index("ix_bugs_reporter_id", table_name="bugs")
    op.drop_table("bugs")
    op.drop_table("user_group_map")
    op.drop_table("groups")
    op.drop_index("ix_user_api_key", table_name="user")
    op.drop_index("ix_user_email", table_name="user")
    op.drop_table("user")

"""Add role table and app_user.role_id.

Revision ID: b4d6f8a0c2e1
Revises: a1c3e5f7b9d2
Create Date: 2026-10-19

Seeds user (1), moderator (2) and admin (3). Existing users get the
"user" role through the column's server default.
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

revision: str = "b4d6f8a0c2e1"
down_revision: Union[str, Sequence[str], None] = "a1c3e5f7b9d2"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    role = op.create_table(
        "role",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.bulk_insert(
        role,
        [
            {
                "id": 1,
                "name": "user",
                "level": 1,
                "description": "A user can create posts and comments",
            },
            {
                "id": 2,
                "name": "moderator",
                "level": 2,
                "description": "A moderator can update other users' posts",
            },
            {
                "id": 3,
                "name": "admin",
                "level": 3,
                "description": "An admin can update and delete other users' posts",
            },
        ],
    )
    # Explicit ids above; move the sequence past them.
    op.execute("SELECT setval(pg_get_serial_sequence('role', 'id'), 3)")

    op.add_column(
        "app_user",
        sa.Column("role_id", sa.Integer(), server_default=sa.text("1"), nullable=False),
    )
    op.create_foreign_key("fk_app_user_role_id", "app_user", "role", ["role_id"], ["id"])


def downgrade() -> None:
    op.drop_constraint("fk_app_user_role_id", "app_user", type_="foreignkey")
    op.drop_column("app_user", "role_id")
    op.drop_table("role")

"""quiz sessions

Revision ID: base_0001
Revises:
Create Date: 2026-10-19 10:12:41.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "base_0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "quiz_sessions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("collection", sa.String(length=16), nullable=False),
        sa.Column("quiz_path", sa.String(length=512), nullable=False),
        sa.Column("teacher", sa.String(length=128), nullable=True),
        sa.Column("username", sa.String(length=128), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("questions", sa.JSON(), nullable=False),
        sa.Column("state", sa.JSON(), nullable=False),
        sa.Column("score", sa.Float(), nullable=True),
        sa.Column("finished_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_quiz_sessions_created_at", "quiz_sessions", ["created_at"])
    op.create_index("ix_quiz_sessions_username", "quiz_sessions", ["username"])


def downgrade() -> None:
    op.drop_index("ix_quiz_sessions_username", table_name="quiz_sessions")
    op.drop_index("ix_quiz_sessions_created_at", table_name="quiz_sessions")
    op.drop_table("quiz_sessions")

"""create entries table

Revision ID: 3f2a9c1d7b44
Revises:
Create Date: 2026-10-19 10:12:31.508214

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7b44"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the `entries` table holding every feed item already sent to Mendable.

    `guid` is the primary key, so a second insert of the same feed item fails.
    """
    op.create_table(
        "entries",
        sa.Column("guid", sa.String(), nullable=False),
        sa.Column("link", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("task_id", sa.String(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False
        ),
        sa.PrimaryKeyConstraint("guid"),
    )


def downgrade() -> None:
    """Drop the `entries` table."""
    op.drop_table("entries")

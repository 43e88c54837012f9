"""Create notes table

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates the `notes` table holding owner-scoped text notes.
How:   Text primary key (opaque identifiers), owner column, timezone-aware
       timestamps, and a composite index for "my notes, newest first".

Rollback: downgrade() drops the table entirely (destructive, all data lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the notes table with all columns, constraints, and indexes."""
    op.create_table(
        "notes",
        sa.Column(
            "id",
            sa.String(64),
            nullable=False,
            comment="Opaque note identifier",
        ),
        sa.Column(
            "user_id",
            sa.String(255),
            nullable=False,
            comment="Owner: subject of the identity provider session",
        ),
        sa.Column(
            "title",
            sa.String(255),
            nullable=False,
            comment="Note title (non-blank)",
        ),
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            comment="Note body (non-blank, unbounded length)",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was last edited (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index(
        "idx_notes_user_id_created_at",
        "notes",
        ["user_id", sa.text("created_at DESC")],
    )


def downgrade() -> None:
    """Drop the notes table entirely. All note data is permanently lost."""
    op.drop_index("idx_notes_user_id_created_at", table_name="notes")
    op.drop_table("notes")

"""Create cats and favorites tables

Revision ID: 5c1f0e2a9b7d
Revises:
Create Date: 2026-10-18

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# deal with alembic stuff
# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "5c1f0e2a9b7d"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "cats",
        sa.Column(
            "id",
            sa.Uuid(),
            nullable=False,
            comment="Cat identifier; equal to the billing ledger product id.",
        ),
        sa.Column(
            "added_by",
            sa.Uuid(),
            nullable=False,
            comment="User who put the cat up for sale.",
        ),
        sa.Column("name", sa.String(length=200), nullable=False, comment="Cat name."),
        sa.Column(
            "photo", sa.LargeBinary(), nullable=True, comment="Optional cat photo."
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_cats")),
        comment="Persisted cat records. Immutable once written.",
    )

    op.create_table(
        "favorites",
        sa.Column(
            "user_id", sa.Uuid(), nullable=False, comment="Owner of the favourite."
        ),
        sa.Column("cat_id", sa.Uuid(), nullable=False, comment="Favourite cat id."),
        sa.PrimaryKeyConstraint("user_id", "cat_id", name=op.f("pk_favorites")),
        comment="User favourites. One row per (user, cat) pair.",
    )
    op.create_index(
        op.f("ix_favorites_user_id"), "favorites", ["user_id"], unique=False
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index(op.f("ix_favorites_user_id"), table_name="favorites")
    op.drop_table("favorites")
    op.drop_table("cats")

"""Document table for the portfolio collections

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates app_documents, one row per top-level collection
(estates, landlords, propertyTypes, archivedItems, registeredUsers).
"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the document table."""
    op.create_table(
        "app_documents",
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("name"),
    )


def downgrade() -> None:
    """Drop the document table."""
    op.drop_table("app_documents")

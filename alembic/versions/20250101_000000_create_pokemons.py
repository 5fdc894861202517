"""
Create the pokemons table.

Revision ID: 20250101_000000_create_pokemons
Revises:
Create Date: 2025-01-01 00:00:00
"""

import sqlalchemy as sa

from alembic import op  # type: ignore[reportMissingImports]

# revision identifiers, used by Alembic.
revision = "20250101_000000_create_pokemons"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "pokemons",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("hp", sa.Integer(), nullable=False),
        sa.Column("attack", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pokemons_pkey"),
    )
    op.create_index("idx_pokemons_name", "pokemons", ["name"])


def downgrade() -> None:
    op.drop_index("idx_pokemons_name", table_name="pokemons")
    op.drop_table("pokemons")

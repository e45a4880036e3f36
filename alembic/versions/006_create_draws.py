"""006: create draws table

Revision ID: 006
Revises: 005
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE draws (
            id          VARCHAR(64)     PRIMARY KEY,
            numbers     SMALLINT[]      NOT NULL,
            name        VARCHAR(120),
            created_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_draws_numbers_len CHECK (cardinality(numbers) IN (5, 10)),
            CONSTRAINT ck_draws_numbers_range CHECK (1 <= ALL(numbers) AND 25 >= ALL(numbers))
        );
    """)
    op.execute("CREATE INDEX idx_draws_created_at ON draws (created_at DESC);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS draws CASCADE;")

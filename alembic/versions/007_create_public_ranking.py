"""007: create public_ranking table

Revision ID: 007
Revises: 006
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "007"
down_revision: Union[str, None] = "006"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE public_ranking (
            id              SMALLINT    PRIMARY KEY,
            ranking         JSONB       NOT NULL DEFAULT '[]'::jsonb,
            last_updated    TIMESTAMPTZ,
            CONSTRAINT ck_public_ranking_single_row CHECK (id = 1)
        );
    """)
    op.execute("INSERT INTO public_ranking (id) VALUES (1) ON CONFLICT (id) DO NOTHING;")
    op.execute(
        "COMMENT ON TABLE public_ranking IS 'Anonymized top-N board, replaced whole on every write';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS public_ranking CASCADE;")

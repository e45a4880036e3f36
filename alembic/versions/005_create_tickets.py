"""005: create tickets table

Revision ID: 005
Revises: 004
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE tickets (
            id              VARCHAR(64)     PRIMARY KEY,
            numbers         SMALLINT[]      NOT NULL,
            status          VARCHAR(10)     NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            buyer_name      VARCHAR(120),
            buyer_phone     VARCHAR(32),
            buyer_id        VARCHAR(64)     REFERENCES accounts (id),
            seller_id       VARCHAR(64)     REFERENCES accounts (id),
            seller_username VARCHAR(64),
            CONSTRAINT ck_tickets_status CHECK (
                status IN ('active', 'winning', 'unpaid', 'expired')
            ),
            CONSTRAINT ck_tickets_numbers_len CHECK (cardinality(numbers) = 10),
            CONSTRAINT ck_tickets_numbers_range CHECK (1 <= ALL(numbers) AND 25 >= ALL(numbers))
        );
    """)
    op.execute("CREATE INDEX idx_tickets_status ON tickets (status, created_at);")
    op.execute("CREATE INDEX idx_tickets_buyer ON tickets (buyer_id, created_at DESC);")
    op.execute("CREATE INDEX idx_tickets_seller ON tickets (seller_id, created_at DESC);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS tickets CASCADE;")

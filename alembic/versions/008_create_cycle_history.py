"""008: create cycle history tables

Revision ID: 008
Revises: 007
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "008"
down_revision: Union[str, None] = "007"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE seller_history (
            id                      BIGSERIAL   PRIMARY KEY,
            seller_id               VARCHAR(64) NOT NULL REFERENCES accounts (id),
            seller_username         VARCHAR(64) NOT NULL,
            active_tickets_count    INTEGER     NOT NULL,
            total_revenue           BIGINT      NOT NULL,
            total_commission        BIGINT      NOT NULL,
            end_date                TIMESTAMPTZ NOT NULL
        );
    """)
    op.execute("CREATE INDEX idx_seller_history_seller ON seller_history (seller_id, end_date DESC);")
    op.execute("""
        CREATE TABLE admin_history (
            id                      BIGSERIAL   PRIMARY KEY,
            end_date                TIMESTAMPTZ NOT NULL,
            total_revenue           BIGINT      NOT NULL,
            total_seller_commission BIGINT      NOT NULL,
            total_owner_commission  BIGINT      NOT NULL,
            total_prize_pool        BIGINT      NOT NULL,
            client_ticket_count     INTEGER     NOT NULL,
            seller_ticket_count     INTEGER     NOT NULL
        );
    """)
    op.execute("CREATE INDEX idx_admin_history_end_date ON admin_history (end_date DESC);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS admin_history CASCADE;")
    op.execute("DROP TABLE IF EXISTS seller_history CASCADE;")

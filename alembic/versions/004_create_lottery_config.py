"""004: create lottery_config table

Revision ID: 004
Revises: 003
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE lottery_config (
            id                          SMALLINT    PRIMARY KEY,
            ticket_price_cents          BIGINT      NOT NULL,
            seller_commission_bps       INTEGER     NOT NULL,
            owner_commission_bps        INTEGER     NOT NULL,
            client_sales_commission_bps INTEGER     NOT NULL,
            updated_at                  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_lottery_config_single_row CHECK (id = 1),
            CONSTRAINT ck_lottery_config_price_gt_0 CHECK (ticket_price_cents > 0),
            CONSTRAINT ck_lottery_config_bps CHECK (
                seller_commission_bps BETWEEN 0 AND 10000
                AND owner_commission_bps BETWEEN 0 AND 10000
                AND client_sales_commission_bps BETWEEN 0 AND 10000
            ),
            CONSTRAINT ck_lottery_config_commission_total CHECK (
                owner_commission_bps
                + GREATEST(seller_commission_bps, client_sales_commission_bps) <= 10000
            )
        );
    """)
    op.execute("""
        INSERT INTO lottery_config
            (id, ticket_price_cents, seller_commission_bps,
             owner_commission_bps, client_sales_commission_bps)
        VALUES (1, 200, 1000, 500, 1000)
        ON CONFLICT (id) DO NOTHING;
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS lottery_config CASCADE;")

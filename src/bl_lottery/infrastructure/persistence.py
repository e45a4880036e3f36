"""LotteryConfigRepository: single-row table, defaults until first save."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_lottery.domain.models import LotteryConfig

_CONFIG_ID = 1

_GET_CONFIG_SQL = text("""
    SELECT ticket_price_cents, seller_commission_bps,
           owner_commission_bps, client_sales_commission_bps
    FROM lottery_config
    WHERE id = :id
""")

_UPSERT_CONFIG_SQL = text("""
    INSERT INTO lottery_config
        (id, ticket_price_cents, seller_commission_bps,
         owner_commission_bps, client_sales_commission_bps)
    VALUES
        (:id, :ticket_price_cents, :seller_commission_bps,
         :owner_commission_bps, :client_sales_commission_bps)
    ON CONFLICT (id) DO UPDATE
        SET ticket_price_cents = EXCLUDED.ticket_price_cents,
            seller_commission_bps = EXCLUDED.seller_commission_bps,
            owner_commission_bps = EXCLUDED.owner_commission_bps,
            client_sales_commission_bps = EXCLUDED.client_sales_commission_bps,
            updated_at = NOW()
""")


class LotteryConfigRepository:
    async def get(self, db: AsyncSession) -> LotteryConfig:
        row = (await db.execute(_GET_CONFIG_SQL, {"id": _CONFIG_ID})).fetchone()
        if row is None:
            return LotteryConfig.defaults()
        return LotteryConfig(
            ticket_price_cents=row.ticket_price_cents,
            seller_commission_bps=row.seller_commission_bps,
            owner_commission_bps=row.owner_commission_bps,
            client_sales_commission_bps=row.client_sales_commission_bps,
        )

    async def save(self, db: AsyncSession, config: LotteryConfig) -> LotteryConfig:
        await db.execute(
            _UPSERT_CONFIG_SQL,
            {
                "id": _CONFIG_ID,
                "ticket_price_cents": config.ticket_price_cents,
                "seller_commission_bps": config.seller_commission_bps,
                "owner_commission_bps": config.owner_commission_bps,
                "client_sales_commission_bps": config.client_sales_commission_bps,
            },
        )
        return config

"""HistoryRepository: append-only seller/admin cycle history."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_cycle.domain.models import AdminHistoryEntry, SellerHistoryEntry

_INSERT_SELLER_SQL = text("""
    INSERT INTO seller_history
        (seller_id, seller_username, active_tickets_count,
         total_revenue, total_commission, end_date)
    VALUES
        (:seller_id, :seller_username, :active_tickets_count,
         :total_revenue, :total_commission, :end_date)
""")

_INSERT_ADMIN_SQL = text("""
    INSERT INTO admin_history
        (end_date, total_revenue, total_seller_commission, total_owner_commission,
         total_prize_pool, client_ticket_count, seller_ticket_count)
    VALUES
        (:end_date, :total_revenue, :total_seller_commission, :total_owner_commission,
         :total_prize_pool, :client_ticket_count, :seller_ticket_count)
""")

_LIST_SELLER_SQL = text("""
    SELECT id, seller_id, seller_username, active_tickets_count,
           total_revenue, total_commission, end_date
    FROM seller_history
    WHERE (CAST(:seller_id AS VARCHAR) IS NULL OR seller_id = CAST(:seller_id AS VARCHAR))
    ORDER BY end_date DESC, id DESC
    LIMIT :limit
""")

_LIST_ADMIN_SQL = text("""
    SELECT id, end_date, total_revenue, total_seller_commission, total_owner_commission,
           total_prize_pool, client_ticket_count, seller_ticket_count
    FROM admin_history
    ORDER BY end_date DESC, id DESC
    LIMIT :limit
""")


class HistoryRepository:
    async def insert_seller_entries(
        self, db: AsyncSession, entries: list[SellerHistoryEntry]
    ) -> None:
        if not entries:
            return
        await db.execute(
            _INSERT_SELLER_SQL,
            [
                {
                    "seller_id": e.seller_id,
                    "seller_username": e.seller_username,
                    "active_tickets_count": e.active_tickets_count,
                    "total_revenue": e.total_revenue,
                    "total_commission": e.total_commission,
                    "end_date": e.end_date,
                }
                for e in entries
            ],
        )

    async def insert_admin_entry(self, db: AsyncSession, entry: AdminHistoryEntry) -> None:
        await db.execute(
            _INSERT_ADMIN_SQL,
            {
                "end_date": entry.end_date,
                "total_revenue": entry.total_revenue,
                "total_seller_commission": entry.total_seller_commission,
                "total_owner_commission": entry.total_owner_commission,
                "total_prize_pool": entry.total_prize_pool,
                "client_ticket_count": entry.client_ticket_count,
                "seller_ticket_count": entry.seller_ticket_count,
            },
        )

    async def list_seller_history(
        self, db: AsyncSession, seller_id: str | None, limit: int
    ) -> list[SellerHistoryEntry]:
        result = await db.execute(_LIST_SELLER_SQL, {"seller_id": seller_id, "limit": limit})
        return [
            SellerHistoryEntry(
                id=row.id,
                seller_id=row.seller_id,
                seller_username=row.seller_username,
                active_tickets_count=row.active_tickets_count,
                total_revenue=row.total_revenue,
                total_commission=row.total_commission,
                end_date=row.end_date,
            )
            for row in result.fetchall()
        ]

    async def list_admin_history(self, db: AsyncSession, limit: int) -> list[AdminHistoryEntry]:
        result = await db.execute(_LIST_ADMIN_SQL, {"limit": limit})
        return [
            AdminHistoryEntry(
                id=row.id,
                end_date=row.end_date,
                total_revenue=row.total_revenue,
                total_seller_commission=row.total_seller_commission,
                total_owner_commission=row.total_owner_commission,
                total_prize_pool=row.total_prize_pool,
                client_ticket_count=row.client_ticket_count,
                seller_ticket_count=row.seller_ticket_count,
            )
            for row in result.fetchall()
        ]

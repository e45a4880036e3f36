"""TicketRepository: concrete implementation of TicketRepositoryProtocol.

Transaction ownership: the CALLER (application service) commits or rolls back.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.enums import TicketStatus
from src.bl_ticket.domain.models import Ticket

_COLUMNS = """
    id, numbers, status, created_at,
    buyer_name, buyer_phone, buyer_id, seller_id, seller_username
"""

_INSERT_TICKET_SQL = text("""
    INSERT INTO tickets
        (id, numbers, status, created_at,
         buyer_name, buyer_phone, buyer_id, seller_id, seller_username)
    VALUES
        (:id, :numbers, :status, :created_at,
         :buyer_name, :buyer_phone, :buyer_id, :seller_id, :seller_username)
""")

_GET_TICKET_SQL = text(f"SELECT {_COLUMNS} FROM tickets WHERE id = :ticket_id")

_GET_TICKET_FOR_UPDATE_SQL = text(
    f"SELECT {_COLUMNS} FROM tickets WHERE id = :ticket_id FOR UPDATE"
)

_LIST_BY_STATUSES_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM tickets
    WHERE status = ANY(:statuses)
    ORDER BY created_at ASC, id ASC
""")

_LIST_BY_ACCOUNT_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM tickets
    WHERE buyer_id = :account_id OR seller_id = :account_id
    ORDER BY created_at DESC, id DESC
    LIMIT :limit
""")

_UPDATE_STATUS_SQL = text("""
    UPDATE tickets
    SET status = :status
    WHERE id = :ticket_id
""")

_BULK_TRANSITION_SQL = text("""
    UPDATE tickets
    SET status = :to_status
    WHERE status = ANY(:from_statuses)
""")


def _row_to_ticket(row: object) -> Ticket:
    return Ticket(
        id=row.id,  # type: ignore[attr-defined]
        numbers=list(row.numbers),  # type: ignore[attr-defined]
        status=TicketStatus(row.status),  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        buyer_name=row.buyer_name,  # type: ignore[attr-defined]
        buyer_phone=row.buyer_phone,  # type: ignore[attr-defined]
        buyer_id=row.buyer_id,  # type: ignore[attr-defined]
        seller_id=row.seller_id,  # type: ignore[attr-defined]
        seller_username=row.seller_username,  # type: ignore[attr-defined]
    )


class TicketRepository:
    async def insert_many(self, db: AsyncSession, tickets: list[Ticket]) -> None:
        if not tickets:
            return
        await db.execute(
            _INSERT_TICKET_SQL,
            [
                {
                    "id": t.id,
                    "numbers": t.numbers,
                    "status": t.status.value,
                    "created_at": t.created_at,
                    "buyer_name": t.buyer_name,
                    "buyer_phone": t.buyer_phone,
                    "buyer_id": t.buyer_id,
                    "seller_id": t.seller_id,
                    "seller_username": t.seller_username,
                }
                for t in tickets
            ],
        )

    async def get_by_id(
        self, db: AsyncSession, ticket_id: str, for_update: bool = False
    ) -> Ticket | None:
        sql = _GET_TICKET_FOR_UPDATE_SQL if for_update else _GET_TICKET_SQL
        row = (await db.execute(sql, {"ticket_id": ticket_id})).fetchone()
        return _row_to_ticket(row) if row else None

    async def list_by_statuses(
        self, db: AsyncSession, statuses: list[TicketStatus]
    ) -> list[Ticket]:
        result = await db.execute(
            _LIST_BY_STATUSES_SQL, {"statuses": [s.value for s in statuses]}
        )
        return [_row_to_ticket(row) for row in result.fetchall()]

    async def list_by_account(
        self, db: AsyncSession, account_id: str, limit: int
    ) -> list[Ticket]:
        result = await db.execute(
            _LIST_BY_ACCOUNT_SQL, {"account_id": account_id, "limit": limit}
        )
        return [_row_to_ticket(row) for row in result.fetchall()]

    async def update_statuses(
        self, db: AsyncSession, changes: dict[str, TicketStatus]
    ) -> None:
        if not changes:
            return
        await db.execute(
            _UPDATE_STATUS_SQL,
            [
                {"ticket_id": ticket_id, "status": status.value}
                for ticket_id, status in changes.items()
            ],
        )

    async def bulk_transition(
        self,
        db: AsyncSession,
        from_statuses: list[TicketStatus],
        to_status: TicketStatus,
    ) -> int:
        result = await db.execute(
            _BULK_TRANSITION_SQL,
            {
                "from_statuses": [s.value for s in from_statuses],
                "to_status": to_status.value,
            },
        )
        return result.rowcount  # type: ignore[attr-defined]

"""Repository Protocol: dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.enums import TicketStatus
from src.bl_ticket.domain.models import Ticket


class TicketRepositoryProtocol(Protocol):
    async def insert_many(self, db: AsyncSession, tickets: list[Ticket]) -> None: ...

    async def get_by_id(
        self, db: AsyncSession, ticket_id: str, for_update: bool = False
    ) -> Ticket | None: ...

    async def list_by_statuses(
        self, db: AsyncSession, statuses: list[TicketStatus]
    ) -> list[Ticket]: ...

    async def list_by_account(
        self, db: AsyncSession, account_id: str, limit: int
    ) -> list[Ticket]: ...

    async def update_statuses(
        self, db: AsyncSession, changes: dict[str, TicketStatus]
    ) -> None: ...

    async def bulk_transition(
        self,
        db: AsyncSession,
        from_statuses: list[TicketStatus],
        to_status: TicketStatus,
    ) -> int: ...

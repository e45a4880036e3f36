"""Repository Protocol for cycle history."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_cycle.domain.models import AdminHistoryEntry, SellerHistoryEntry


class HistoryRepositoryProtocol(Protocol):
    async def insert_seller_entries(
        self, db: AsyncSession, entries: list[SellerHistoryEntry]
    ) -> None: ...

    async def insert_admin_entry(self, db: AsyncSession, entry: AdminHistoryEntry) -> None: ...

    async def list_seller_history(
        self, db: AsyncSession, seller_id: str | None, limit: int
    ) -> list[SellerHistoryEntry]: ...

    async def list_admin_history(self, db: AsyncSession, limit: int) -> list[AdminHistoryEntry]: ...

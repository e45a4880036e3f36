"""DrawRepository Protocol: interface contract for persistence layer."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_draw.domain.models import Draw


class DrawRepositoryProtocol(Protocol):
    async def insert(self, db: AsyncSession, draw: Draw) -> None: ...

    async def list_all(self, db: AsyncSession) -> list[Draw]: ...

    async def delete(self, db: AsyncSession, draw_id: str) -> bool: ...

    async def delete_all(self, db: AsyncSession) -> int: ...

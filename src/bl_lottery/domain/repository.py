from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_lottery.domain.models import LotteryConfig


class LotteryConfigRepositoryProtocol(Protocol):
    async def get(self, db: AsyncSession) -> LotteryConfig: ...

    async def save(self, db: AsyncSession, config: LotteryConfig) -> LotteryConfig: ...

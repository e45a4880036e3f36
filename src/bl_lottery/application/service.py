"""LotteryConfigService: read and partially update pricing/commissions."""

import dataclasses
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.transaction import run_in_transaction
from src.bl_lottery.application.schemas import (
    LotteryConfigResponse,
    UpdateLotteryConfigRequest,
)
from src.bl_lottery.domain.models import LotteryConfig
from src.bl_lottery.domain.repository import LotteryConfigRepositoryProtocol
from src.bl_lottery.infrastructure.persistence import LotteryConfigRepository

logger = logging.getLogger(__name__)


class LotteryConfigService:
    def __init__(self, repo: LotteryConfigRepositoryProtocol | None = None) -> None:
        self._repo: LotteryConfigRepositoryProtocol = repo or LotteryConfigRepository()

    async def get_config(self, db: AsyncSession) -> LotteryConfigResponse:
        return LotteryConfigResponse.from_domain(await self._repo.get(db))

    async def update_config(
        self, db: AsyncSession, req: UpdateLotteryConfigRequest
    ) -> LotteryConfigResponse:
        async def unit(session: AsyncSession) -> LotteryConfig:
            current = await self._repo.get(session)
            changes = req.model_dump(exclude_none=True)
            return await self._repo.save(session, dataclasses.replace(current, **changes))

        saved = await run_in_transaction(db, unit)
        logger.info("Lottery config updated: %s", saved)
        return LotteryConfigResponse.from_domain(saved)

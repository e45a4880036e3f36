"""DrawService: record and correct draws, then re-evaluate every ticket.

The draw write and the re-evaluation share one transaction under the
draw-pool advisory lock: if re-scoring fails the draw is rolled back too, so a
retried call never records the same draw twice.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.database import lock_draw_pool
from src.bl_common.datetime_utils import utc_now
from src.bl_common.errors import DrawNotFoundError
from src.bl_common.id_generator import generate_id
from src.bl_common.transaction import run_in_transaction
from src.bl_draw.application.schemas import (
    DrawListResponse,
    DrawMutationResponse,
    DrawResponse,
)
from src.bl_draw.domain.models import Draw, pool_of, validate_draw_numbers
from src.bl_draw.domain.repository import DrawRepositoryProtocol
from src.bl_draw.infrastructure.persistence import DrawRepository
from src.bl_ranking.application.schemas import (
    PublicRankingResponse,
    ReevaluationResponse,
)
from src.bl_ranking.application.service import (
    ReevaluationResult,
    ReevaluationService,
    log_reevaluation,
)

logger = logging.getLogger(__name__)


def _reevaluation_response(result: ReevaluationResult) -> ReevaluationResponse:
    return ReevaluationResponse(
        pool_size=result.pool_size,
        updated_ticket_ids=result.updated_ticket_ids,
        public_ranking=PublicRankingResponse.from_domain(result.public_ranking),
    )


class DrawService:
    def __init__(
        self,
        repo: DrawRepositoryProtocol | None = None,
        reevaluation: ReevaluationService | None = None,
    ) -> None:
        self._repo: DrawRepositoryProtocol = repo or DrawRepository()
        self._reevaluation = reevaluation or ReevaluationService(draws=self._repo)

    async def add_draw(
        self, db: AsyncSession, numbers: list[int], name: str | None = None
    ) -> DrawMutationResponse:
        validate_draw_numbers(numbers)
        draw = Draw(id=generate_id(), numbers=tuple(numbers), created_at=utc_now(), name=name)

        async def unit(session: AsyncSession) -> ReevaluationResult:
            await lock_draw_pool(session)
            await self._repo.insert(session, draw)
            return await self._reevaluation.apply(session)

        result = await run_in_transaction(db, unit)
        logger.info("Draw recorded: id=%s numbers=%s", draw.id, list(draw.numbers))
        log_reevaluation(result)
        return DrawMutationResponse(
            draw=DrawResponse.from_domain(draw),
            reevaluation=_reevaluation_response(result),
        )

    async def delete_draw(self, db: AsyncSession, draw_id: str) -> DrawMutationResponse:
        """Administrative correction. Winning tickets may revert to active."""

        async def unit(session: AsyncSession) -> ReevaluationResult:
            await lock_draw_pool(session)
            if not await self._repo.delete(session, draw_id):
                raise DrawNotFoundError(draw_id)
            return await self._reevaluation.apply(session)

        result = await run_in_transaction(db, unit)
        logger.info("Draw deleted: id=%s", draw_id)
        log_reevaluation(result)
        return DrawMutationResponse(draw=None, reevaluation=_reevaluation_response(result))

    async def list_draws(self, db: AsyncSession) -> DrawListResponse:
        draws = await self._repo.list_all(db)
        return DrawListResponse.build(draws, pool_of(draws))

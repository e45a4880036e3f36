"""TicketService: ticket lookup and the administrative payment hold.

hold/release take the draw-pool lock like every other status writer and
re-evaluate in the same transaction, so a released ticket is re-scored and the
public board drops (or regains) held tickets atomically with the status change.
"""

import logging
from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_common.database import lock_draw_pool
from src.bl_common.enums import TicketStatus
from src.bl_common.errors import TicketNotFoundError
from src.bl_common.transaction import run_in_transaction
from src.bl_draw.domain.models import pool_of
from src.bl_draw.domain.repository import DrawRepositoryProtocol
from src.bl_draw.infrastructure.persistence import DrawRepository
from src.bl_ranking.application.service import (
    ReevaluationResult,
    ReevaluationService,
    log_reevaluation,
)
from src.bl_ticket.application.schemas import ScoredTicketResponse, TicketListResponse
from src.bl_ticket.domain.repository import TicketRepositoryProtocol
from src.bl_ticket.domain.status import hold, release
from src.bl_ticket.infrastructure.persistence import TicketRepository

logger = logging.getLogger(__name__)


class TicketService:
    def __init__(
        self,
        repo: TicketRepositoryProtocol | None = None,
        draws: DrawRepositoryProtocol | None = None,
        reevaluation: ReevaluationService | None = None,
    ) -> None:
        self._repo: TicketRepositoryProtocol = repo or TicketRepository()
        self._draws: DrawRepositoryProtocol = draws or DrawRepository()
        self._reevaluation = reevaluation or ReevaluationService(
            tickets=self._repo, draws=self._draws
        )

    async def get_ticket(self, db: AsyncSession, ticket_id: str) -> ScoredTicketResponse:
        ticket = await self._repo.get_by_id(db, ticket_id)
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        pool = pool_of(await self._draws.list_all(db))
        return ScoredTicketResponse.score(ticket, pool)

    async def list_tickets(
        self, db: AsyncSession, account_id: str, limit: int = 100
    ) -> TicketListResponse:
        tickets = await self._repo.list_by_account(db, account_id, limit)
        pool = pool_of(await self._draws.list_all(db))
        return TicketListResponse(
            items=[ScoredTicketResponse.score(t, pool) for t in tickets]
        )

    async def hold_ticket(self, db: AsyncSession, ticket_id: str) -> ScoredTicketResponse:
        return await self._transition(db, ticket_id, hold)

    async def release_ticket(self, db: AsyncSession, ticket_id: str) -> ScoredTicketResponse:
        return await self._transition(db, ticket_id, release)

    async def _transition(
        self,
        db: AsyncSession,
        ticket_id: str,
        step: Callable[[TicketStatus], TicketStatus],
    ) -> ScoredTicketResponse:
        async def unit(session: AsyncSession) -> tuple[TicketStatus, ReevaluationResult]:
            await lock_draw_pool(session)
            ticket = await self._repo.get_by_id(session, ticket_id, for_update=True)
            if ticket is None:
                raise TicketNotFoundError(ticket_id)
            target = step(ticket.status)
            await self._repo.update_statuses(session, {ticket_id: target})
            return target, await self._reevaluation.apply(session)

        status, result = await run_in_transaction(db, unit)
        logger.info("Ticket %s moved to %s", ticket_id, status.value)
        log_reevaluation(result)
        return await self.get_ticket(db, ticket_id)

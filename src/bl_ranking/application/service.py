"""Ranking services.

ReevaluationService.apply is the single place ticket statuses are recomputed
from the draw pool. Every event that changes the pool or a ticket status
calls it inside its own transaction, after taking the draw-pool lock, so the
event and the recomputed statuses and board commit or roll back together.
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.bl_common.datetime_utils import utc_now
from src.bl_common.enums import TicketStatus
from src.bl_draw.domain.models import pool_of
from src.bl_draw.domain.repository import DrawRepositoryProtocol
from src.bl_draw.infrastructure.persistence import DrawRepository
from src.bl_ranking.application.schemas import (
    CycleRankingItem,
    CycleRankingResponse,
    PublicRankingResponse,
)
from src.bl_ranking.domain.models import PublicRanking
from src.bl_ranking.domain.ranking import build_public_ranking, rank_tickets
from src.bl_ranking.infrastructure.snapshot import PublicRankingStore
from src.bl_ticket.domain.repository import TicketRepositoryProtocol
from src.bl_ticket.domain.status import reevaluate_status
from src.bl_ticket.infrastructure.persistence import TicketRepository

logger = logging.getLogger(__name__)

_LIVE = [TicketStatus.ACTIVE, TicketStatus.WINNING]


@dataclass
class ReevaluationResult:
    pool_size: int
    updated_ticket_ids: list[str] = field(default_factory=list)
    public_ranking: PublicRanking = field(default_factory=PublicRanking)


def log_reevaluation(result: ReevaluationResult) -> None:
    logger.info(
        "Re-evaluation done: pool_size=%d updated=%d ranked=%d",
        result.pool_size,
        len(result.updated_ticket_ids),
        len(result.public_ranking.ranking),
    )


class ReevaluationService:
    def __init__(
        self,
        tickets: TicketRepositoryProtocol | None = None,
        draws: DrawRepositoryProtocol | None = None,
        store: PublicRankingStore | None = None,
    ) -> None:
        self._tickets: TicketRepositoryProtocol = tickets or TicketRepository()
        self._draws: DrawRepositoryProtocol = draws or DrawRepository()
        self._store = store or PublicRankingStore()

    async def apply(self, session: AsyncSession) -> ReevaluationResult:
        """Re-score live tickets and replace the public board.

        Runs inside the caller's transaction, which must already hold the
        draw-pool lock, so the event and its re-evaluation commit together.
        """
        draws = await self._draws.list_all(session)
        pool = pool_of(draws)
        tickets = await self._tickets.list_by_statuses(session, _LIVE)

        changes: dict[str, TicketStatus] = {}
        for ticket in tickets:
            new_status = reevaluate_status(ticket.status, ticket.numbers, pool)
            if new_status != ticket.status:
                changes[ticket.id] = new_status
                ticket.status = new_status
        await self._tickets.update_statuses(session, changes)

        snapshot = build_public_ranking(
            tickets, pool, settings.PUBLIC_RANKING_SIZE, utc_now()
        )
        await self._store.replace(session, snapshot)
        return ReevaluationResult(
            pool_size=sum(pool.values()),
            updated_ticket_ids=list(changes),
            public_ranking=snapshot,
        )


class RankingQueryService:
    def __init__(
        self,
        tickets: TicketRepositoryProtocol | None = None,
        draws: DrawRepositoryProtocol | None = None,
        store: PublicRankingStore | None = None,
    ) -> None:
        self._tickets: TicketRepositoryProtocol = tickets or TicketRepository()
        self._draws: DrawRepositoryProtocol = draws or DrawRepository()
        self._store = store or PublicRankingStore()

    async def get_public_ranking(self, db: AsyncSession) -> PublicRankingResponse:
        return PublicRankingResponse.from_domain(await self._store.get(db))

    async def get_cycle_ranking(self, db: AsyncSession) -> CycleRankingResponse:
        """Every live ticket of the cycle, ranked, with full buyer identity."""
        pool = pool_of(await self._draws.list_all(db))
        tickets = await self._tickets.list_by_statuses(db, _LIVE)
        return CycleRankingResponse(
            pool_size=sum(pool.values()),
            items=[CycleRankingItem.from_ranked(r) for r in rank_tickets(tickets, pool)],
        )

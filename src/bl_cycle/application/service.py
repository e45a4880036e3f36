"""CycleResetService: close the current cycle and start a clean one.

Single transaction, serialized against draw mutations by the draw-pool lock:
  1. seller history (live tickets per seller)
  2. admin history (financial report), skipped for an empty cycle
  3. delete every draw
  4. ACTIVE / WINNING / UNPAID → EXPIRED
  5. replace the public board with the empty snapshot

A failure anywhere rolls back the whole reset; nothing is half-closed.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_account.domain.repository import AccountRepositoryProtocol
from src.bl_account.infrastructure.persistence import AccountRepository
from src.bl_common.database import lock_draw_pool
from src.bl_common.datetime_utils import utc_now
from src.bl_common.enums import AccountRole, TicketStatus
from src.bl_common.transaction import run_in_transaction
from src.bl_cycle.application.schemas import (
    AdminHistoryItem,
    AdminHistoryResponse,
    CycleResetResponse,
    FinancialReportResponse,
    SellerHistoryItem,
    SellerHistoryResponse,
)
from src.bl_cycle.domain.models import AdminHistoryEntry, FinancialReport
from src.bl_cycle.domain.report import generate_financial_report, seller_history_entries
from src.bl_cycle.domain.repository import HistoryRepositoryProtocol
from src.bl_cycle.infrastructure.persistence import HistoryRepository
from src.bl_draw.domain.repository import DrawRepositoryProtocol
from src.bl_draw.infrastructure.persistence import DrawRepository
from src.bl_lottery.domain.repository import LotteryConfigRepositoryProtocol
from src.bl_lottery.infrastructure.persistence import LotteryConfigRepository
from src.bl_ranking.domain.models import PublicRanking
from src.bl_ranking.infrastructure.snapshot import PublicRankingStore
from src.bl_ticket.domain.repository import TicketRepositoryProtocol
from src.bl_ticket.domain.status import expire
from src.bl_ticket.infrastructure.persistence import TicketRepository

logger = logging.getLogger(__name__)

_LIVE = [TicketStatus.ACTIVE, TicketStatus.WINNING]
# Every status expire() actually moves
_EXPIRABLE = [s for s in TicketStatus if expire(s) != s]


@dataclass
class CycleResetSummary:
    seller_history_written: int
    admin_history_written: bool
    draws_deleted: int
    tickets_expired: int
    report: FinancialReport


class CycleService:
    def __init__(
        self,
        accounts: AccountRepositoryProtocol | None = None,
        tickets: TicketRepositoryProtocol | None = None,
        draws: DrawRepositoryProtocol | None = None,
        config: LotteryConfigRepositoryProtocol | None = None,
        history: HistoryRepositoryProtocol | None = None,
        store: PublicRankingStore | None = None,
    ) -> None:
        self._accounts: AccountRepositoryProtocol = accounts or AccountRepository()
        self._tickets: TicketRepositoryProtocol = tickets or TicketRepository()
        self._draws: DrawRepositoryProtocol = draws or DrawRepository()
        self._config: LotteryConfigRepositoryProtocol = config or LotteryConfigRepository()
        self._history: HistoryRepositoryProtocol = history or HistoryRepository()
        self._store = store or PublicRankingStore()

    async def reset_cycle(self, db: AsyncSession) -> CycleResetResponse:
        async def unit(session: AsyncSession) -> CycleResetSummary:
            await lock_draw_pool(session)
            end_date = utc_now()
            config = await self._config.get(session)
            tickets = await self._tickets.list_by_statuses(session, _LIVE)
            sellers = await self._accounts.list_by_role(session, AccountRole.SELLER)

            seller_entries = seller_history_entries(sellers, tickets, config, end_date)
            await self._history.insert_seller_entries(session, seller_entries)

            report = generate_financial_report(tickets, config)
            if not report.is_empty:
                await self._history.insert_admin_entry(
                    session,
                    AdminHistoryEntry(
                        end_date=end_date,
                        total_revenue=report.total_revenue,
                        total_seller_commission=report.seller_commission,
                        total_owner_commission=report.owner_commission,
                        total_prize_pool=report.prize_pool,
                        client_ticket_count=report.client_ticket_count,
                        seller_ticket_count=report.seller_ticket_count,
                    ),
                )

            draws_deleted = await self._draws.delete_all(session)
            expired = await self._tickets.bulk_transition(
                session, _EXPIRABLE, TicketStatus.EXPIRED
            )
            await self._store.replace(session, PublicRanking())
            return CycleResetSummary(
                seller_history_written=len(seller_entries),
                admin_history_written=not report.is_empty,
                draws_deleted=draws_deleted,
                tickets_expired=expired,
                report=report,
            )

        summary = await run_in_transaction(db, unit)
        logger.info(
            "Cycle reset: sellers=%d draws_deleted=%d tickets_expired=%d revenue=%d",
            summary.seller_history_written,
            summary.draws_deleted,
            summary.tickets_expired,
            summary.report.total_revenue,
        )
        return CycleResetResponse(
            seller_history_written=summary.seller_history_written,
            admin_history_written=summary.admin_history_written,
            draws_deleted=summary.draws_deleted,
            tickets_expired=summary.tickets_expired,
            report=FinancialReportResponse.from_domain(summary.report),
        )

    async def get_financial_report(self, db: AsyncSession) -> FinancialReportResponse:
        """Running report for the open cycle."""
        config = await self._config.get(db)
        tickets = await self._tickets.list_by_statuses(db, _LIVE)
        return FinancialReportResponse.from_domain(generate_financial_report(tickets, config))

    async def list_seller_history(
        self, db: AsyncSession, seller_id: str | None = None, limit: int = 50
    ) -> SellerHistoryResponse:
        entries = await self._history.list_seller_history(db, seller_id, limit)
        return SellerHistoryResponse(items=[SellerHistoryItem.from_domain(e) for e in entries])

    async def list_admin_history(self, db: AsyncSession, limit: int = 50) -> AdminHistoryResponse:
        entries = await self._history.list_admin_history(db, limit)
        return AdminHistoryResponse(items=[AdminHistoryItem.from_domain(e) for e in entries])

"""SettlementTransactor: atomic multi-ticket purchase.

Transaction flow (one unit, retried whole on serialization conflict):
  1. validate the cart (no I/O)
  2. SELECT ... FOR UPDATE the account
  3. read ticket price, check balance >= n * price
  4. conditional debit (WHERE balance >= :amount)
  5. insert n ACTIVE tickets + one TICKET_PURCHASE ledger row
  6. commit, then hand the tickets to the background exporter

Two concurrent purchases against the same account serialize on the row lock,
so the balance can never be debited below zero.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_account.domain.models import Account
from src.bl_account.domain.repository import AccountRepositoryProtocol
from src.bl_account.infrastructure.persistence import AccountRepository
from src.bl_common.datetime_utils import utc_now
from src.bl_common.enums import AccountRole, LedgerEntryType, TicketStatus
from src.bl_common.errors import AccountNotFoundError, InsufficientFundsError
from src.bl_common.id_generator import generate_id, generate_ticket_id
from src.bl_common.transaction import run_in_transaction
from src.bl_lottery.domain.repository import LotteryConfigRepositoryProtocol
from src.bl_lottery.infrastructure.persistence import LotteryConfigRepository
from src.bl_settlement.domain.rules import check_buyer_name, validate_cart
from src.bl_settlement.infrastructure.export_sink import BackgroundExporter
from src.bl_ticket.domain.models import Ticket
from src.bl_ticket.domain.repository import TicketRepositoryProtocol
from src.bl_ticket.infrastructure.persistence import TicketRepository

logger = logging.getLogger(__name__)


@dataclass
class SettlementResult:
    tickets: list[Ticket]
    new_balance: int
    total_cost: int
    reference_id: str


def _attribute(
    account: Account,
    numbers: Sequence[int],
    buyer_name: str | None,
    buyer_phone: str | None,
) -> Ticket:
    ticket = Ticket(
        id=generate_ticket_id(),
        numbers=sorted(numbers),
        status=TicketStatus.ACTIVE,
        created_at=utc_now(),
        buyer_phone=buyer_phone,
    )
    if account.role == AccountRole.CLIENT:
        ticket.buyer_id = account.id
        ticket.buyer_name = account.username
    else:
        ticket.seller_id = account.id
        ticket.seller_username = account.username
        ticket.buyer_name = buyer_name.strip() if buyer_name else buyer_name
    return ticket


class SettlementTransactor:
    def __init__(
        self,
        accounts: AccountRepositoryProtocol | None = None,
        tickets: TicketRepositoryProtocol | None = None,
        config: LotteryConfigRepositoryProtocol | None = None,
        exporter: BackgroundExporter | None = None,
    ) -> None:
        self._accounts: AccountRepositoryProtocol = accounts or AccountRepository()
        self._tickets: TicketRepositoryProtocol = tickets or TicketRepository()
        self._config: LotteryConfigRepositoryProtocol = config or LotteryConfigRepository()
        self._exporter = exporter or BackgroundExporter()

    @property
    def exporter(self) -> BackgroundExporter:
        return self._exporter

    async def purchase(
        self,
        db: AsyncSession,
        account_id: str,
        number_sets: Sequence[Sequence[int]],
        buyer_name: str | None = None,
        buyer_phone: str | None = None,
    ) -> SettlementResult:
        validate_cart(number_sets)

        async def unit(session: AsyncSession) -> SettlementResult:
            account = await self._accounts.get_by_id(session, account_id, for_update=True)
            if account is None:
                raise AccountNotFoundError(account_id)
            check_buyer_name(account.role, buyer_name)

            config = await self._config.get(session)
            total = len(number_sets) * config.ticket_price_cents
            if account.balance < total:
                raise InsufficientFundsError(total, account.balance)

            tickets = [
                _attribute(account, numbers, buyer_name, buyer_phone)
                for numbers in number_sets
            ]
            debited = await self._accounts.debit(session, account_id, total)
            if debited is None:
                # Row lock makes this unreachable unless the lock was bypassed
                raise InsufficientFundsError(total, account.balance)
            await self._tickets.insert_many(session, tickets)

            reference_id = generate_id()
            await self._accounts.insert_ledger(
                session,
                account_id=account_id,
                entry_type=LedgerEntryType.TICKET_PURCHASE.value,
                amount=-total,
                balance_after=debited.balance,
                reference_type="PURCHASE",
                reference_id=reference_id,
                description=f"{len(tickets)} ticket(s)",
            )
            return SettlementResult(
                tickets=tickets,
                new_balance=debited.balance,
                total_cost=total,
                reference_id=reference_id,
            )

        result = await run_in_transaction(db, unit)
        logger.info(
            "Purchase settled: account=%s tickets=%d total=%d balance=%d ref=%s",
            account_id,
            len(result.tickets),
            result.total_cost,
            result.new_balance,
            result.reference_id,
        )
        self._exporter.dispatch(result.tickets)
        return result

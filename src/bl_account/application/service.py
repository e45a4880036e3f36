"""AccountApplicationService: thin composition layer.

Mutations (create, credit adjustment) run through run_in_transaction, which
owns commit/rollback. Reads run without an explicit transaction.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_account.application.schemas import (
    AccountResponse,
    CreditAdjustmentResponse,
    LedgerEntryItem,
    LedgerResponse,
    cursor_decode,
    cursor_encode,
)
from src.bl_account.domain.repository import AccountRepositoryProtocol
from src.bl_account.infrastructure.persistence import AccountRepository
from src.bl_common.cents import cents_to_display
from src.bl_common.enums import AccountRole, LedgerEntryType
from src.bl_common.errors import (
    AccountNotFoundError,
    InsufficientFundsError,
    UsernameExistsError,
)
from src.bl_common.transaction import run_in_transaction

logger = logging.getLogger(__name__)


class AccountApplicationService:
    def __init__(self, repo: AccountRepositoryProtocol | None = None) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()

    async def get_account(self, db: AsyncSession, account_id: str) -> AccountResponse:
        account = await self._repo.get_by_id(db, account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return AccountResponse.from_domain(account)

    async def create_account(
        self, db: AsyncSession, username: str, role: AccountRole, initial_balance: int
    ) -> AccountResponse:
        async def unit(session: AsyncSession) -> AccountResponse:
            # DB UNIQUE constraint is the final guard
            if await self._repo.get_by_username(session, username) is not None:
                raise UsernameExistsError(username)
            account = await self._repo.create(session, username, role, initial_balance)
            return AccountResponse.from_domain(account)

        created = await run_in_transaction(db, unit)
        logger.info("Account created: id=%s role=%s", created.id, role.value)
        return created

    async def adjust_credits(
        self,
        db: AsyncSession,
        account_id: str,
        amount_cents: int,
        description: str | None = None,
    ) -> CreditAdjustmentResponse:
        """Administrative top-up (positive) or removal (negative) of credits."""

        async def unit(session: AsyncSession) -> CreditAdjustmentResponse:
            current = await self._repo.get_by_id(session, account_id, for_update=True)
            if current is None:
                raise AccountNotFoundError(account_id)
            account = await self._repo.adjust(session, account_id, amount_cents)
            if account is None:
                raise InsufficientFundsError(-amount_cents, current.balance)
            entry = await self._repo.insert_ledger(
                session,
                account_id=account_id,
                entry_type=LedgerEntryType.CREDIT_ADJUSTMENT.value,
                amount=amount_cents,
                balance_after=account.balance,
                reference_type="ADMIN",
                reference_id=None,
                description=description or "Credit adjustment",
            )
            return CreditAdjustmentResponse.from_result(account.balance, amount_cents, entry.id)

        result = await run_in_transaction(db, unit)
        logger.info(
            "Credits adjusted: account=%s amount=%d balance=%d",
            account_id,
            amount_cents,
            result.balance_cents,
        )
        return result

    async def list_ledger(
        self,
        db: AsyncSession,
        account_id: str,
        cursor: str | None,
        limit: int,
    ) -> LedgerResponse:
        cursor_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        entries = await self._repo.list_ledger_entries(db, account_id, cursor_id, limit + 1)
        has_more = len(entries) > limit
        page = entries[:limit]

        items = [
            LedgerEntryItem(
                id=e.id,
                entry_type=e.entry_type,
                amount_cents=e.amount,
                amount_display=cents_to_display(e.amount),
                balance_after_cents=e.balance_after,
                balance_after_display=cents_to_display(e.balance_after),
                reference_type=e.reference_type,
                reference_id=e.reference_id,
                description=e.description,
                created_at=e.created_at.isoformat() if e.created_at else "",
            )
            for e in page
        ]

        next_cursor = cursor_encode(page[-1].id) if has_more and page else None
        return LedgerResponse(items=items, next_cursor=next_cursor, has_more=has_more)

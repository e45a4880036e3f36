"""Repository Protocol: dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_account.domain.models import Account, LedgerEntry
from src.bl_common.enums import AccountRole


class AccountRepositoryProtocol(Protocol):
    async def get_by_id(
        self, db: AsyncSession, account_id: str, for_update: bool = False
    ) -> Account | None: ...

    async def get_by_username(self, db: AsyncSession, username: str) -> Account | None: ...

    async def create(
        self, db: AsyncSession, username: str, role: AccountRole, balance: int
    ) -> Account: ...

    async def list_by_role(self, db: AsyncSession, role: AccountRole) -> list[Account]: ...

    async def debit(self, db: AsyncSession, account_id: str, amount: int) -> Account | None: ...

    async def adjust(self, db: AsyncSession, account_id: str, amount: int) -> Account | None: ...

    async def insert_ledger(
        self,
        db: AsyncSession,
        account_id: str,
        entry_type: str,
        amount: int,
        balance_after: int,
        reference_type: str | None,
        reference_id: str | None,
        description: str | None,
    ) -> LedgerEntry: ...

    async def list_ledger_entries(
        self,
        db: AsyncSession,
        account_id: str,
        cursor_id: int | None,
        limit: int,
    ) -> list[LedgerEntry]: ...

"""AccountRepository: concrete implementation of AccountRepositoryProtocol.

Balance mutations are conditional UPDATE ... RETURNING statements: the WHERE
clause carries the business constraint (balance stays >= 0), so a result of
0 rows means the constraint would have been violated (or the account is gone).

Transaction ownership: The CALLER (application service) is responsible for
committing or rolling back.
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bl_account.domain.models import Account, LedgerEntry
from src.bl_common.enums import AccountRole
from src.bl_common.errors import InternalError

_ACCOUNT_COLUMNS = "id, username, role, balance, version, created_at, updated_at"

_GET_ACCOUNT_SQL = text(f"""
    SELECT {_ACCOUNT_COLUMNS}
    FROM accounts
    WHERE id = :account_id
""")

_GET_ACCOUNT_FOR_UPDATE_SQL = text(f"""
    SELECT {_ACCOUNT_COLUMNS}
    FROM accounts
    WHERE id = :account_id
    FOR UPDATE
""")

_GET_ACCOUNT_BY_USERNAME_SQL = text(f"""
    SELECT {_ACCOUNT_COLUMNS}
    FROM accounts
    WHERE username = :username
""")

_LIST_BY_ROLE_SQL = text(f"""
    SELECT {_ACCOUNT_COLUMNS}
    FROM accounts
    WHERE role = :role
    ORDER BY username
""")

_INSERT_ACCOUNT_SQL = text(f"""
    INSERT INTO accounts (username, role, balance)
    VALUES (:username, :role, :balance)
    RETURNING {_ACCOUNT_COLUMNS}
""")

_DEBIT_SQL = text(f"""
    UPDATE accounts
    SET balance = balance - :amount,
        version = version + 1,
        updated_at = NOW()
    WHERE id = :account_id AND balance >= :amount
    RETURNING {_ACCOUNT_COLUMNS}
""")

_ADJUST_SQL = text(f"""
    UPDATE accounts
    SET balance = balance + :amount,
        version = version + 1,
        updated_at = NOW()
    WHERE id = :account_id AND balance + :amount >= 0
    RETURNING {_ACCOUNT_COLUMNS}
""")

_INSERT_LEDGER_SQL = text("""
    INSERT INTO ledger_entries
        (account_id, entry_type, amount, balance_after,
         reference_type, reference_id, description)
    VALUES
        (:account_id, :entry_type, :amount, :balance_after,
         :reference_type, :reference_id, :description)
    RETURNING id, account_id, entry_type, amount, balance_after,
              reference_type, reference_id, description, created_at
""")

_LIST_LEDGER_SQL = text("""
    SELECT id, account_id, entry_type, amount, balance_after,
           reference_type, reference_id, description, created_at
    FROM ledger_entries
    WHERE account_id = :account_id
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < CAST(:cursor_id AS BIGINT))
    ORDER BY id DESC
    LIMIT :limit
""")


def _row_to_account(row: object) -> Account:
    return Account(
        id=str(row.id),  # type: ignore[attr-defined]
        username=row.username,  # type: ignore[attr-defined]
        role=AccountRole(row.role),  # type: ignore[attr-defined]
        balance=row.balance,  # type: ignore[attr-defined]
        version=row.version,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _row_to_ledger(row: object) -> LedgerEntry:
    return LedgerEntry(
        id=row.id,  # type: ignore[attr-defined]
        account_id=row.account_id,  # type: ignore[attr-defined]
        entry_type=row.entry_type,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        balance_after=row.balance_after,  # type: ignore[attr-defined]
        reference_type=row.reference_type,  # type: ignore[attr-defined]
        reference_id=row.reference_id,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class AccountRepository:
    """Concrete repository: all balance mutations atomic at the SQL level."""

    async def get_by_id(
        self, db: AsyncSession, account_id: str, for_update: bool = False
    ) -> Account | None:
        sql = _GET_ACCOUNT_FOR_UPDATE_SQL if for_update else _GET_ACCOUNT_SQL
        row = (await db.execute(sql, {"account_id": account_id})).fetchone()
        return _row_to_account(row) if row else None

    async def get_by_username(self, db: AsyncSession, username: str) -> Account | None:
        row = (
            await db.execute(_GET_ACCOUNT_BY_USERNAME_SQL, {"username": username})
        ).fetchone()
        return _row_to_account(row) if row else None

    async def create(
        self, db: AsyncSession, username: str, role: AccountRole, balance: int
    ) -> Account:
        row = (
            await db.execute(
                _INSERT_ACCOUNT_SQL,
                {"username": username, "role": role.value, "balance": balance},
            )
        ).fetchone()
        if row is None:
            raise InternalError("Account insert returned no rows; this should never happen")
        return _row_to_account(row)

    async def list_by_role(self, db: AsyncSession, role: AccountRole) -> list[Account]:
        result = await db.execute(_LIST_BY_ROLE_SQL, {"role": role.value})
        return [_row_to_account(row) for row in result.fetchall()]

    async def debit(self, db: AsyncSession, account_id: str, amount: int) -> Account | None:
        row = (
            await db.execute(_DEBIT_SQL, {"account_id": account_id, "amount": amount})
        ).fetchone()
        return _row_to_account(row) if row else None

    async def adjust(self, db: AsyncSession, account_id: str, amount: int) -> Account | None:
        row = (
            await db.execute(_ADJUST_SQL, {"account_id": account_id, "amount": amount})
        ).fetchone()
        return _row_to_account(row) if row else None

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
    ) -> LedgerEntry:
        row = (
            await db.execute(
                _INSERT_LEDGER_SQL,
                {
                    "account_id": account_id,
                    "entry_type": entry_type,
                    "amount": amount,
                    "balance_after": balance_after,
                    "reference_type": reference_type,
                    "reference_id": reference_id,
                    "description": description,
                },
            )
        ).fetchone()
        if row is None:
            raise InternalError("Ledger insert returned no rows; this should never happen")
        return _row_to_ledger(row)

    async def list_ledger_entries(
        self,
        db: AsyncSession,
        account_id: str,
        cursor_id: int | None,
        limit: int,
    ) -> list[LedgerEntry]:
        result = await db.execute(
            _LIST_LEDGER_SQL,
            {"account_id": account_id, "cursor_id": cursor_id, "limit": limit},
        )
        return [_row_to_ledger(row) for row in result.fetchall()]

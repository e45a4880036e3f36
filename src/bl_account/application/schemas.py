"""Pydantic schemas and cursor utilities for bl_account API."""

import base64
import json

from pydantic import BaseModel, Field

from src.bl_account.domain.models import Account
from src.bl_common.cents import cents_to_display
from src.bl_common.enums import AccountRole

# ---------------------------------------------------------------------------
# Cursor-based pagination utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_id: int) -> str:
    """Encode a BIGINT primary key into an opaque Base64 cursor string."""
    payload = json.dumps({"id": last_id})
    return base64.b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Decode a cursor string back to the last seen id. Returns None on error."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.b64decode(cursor.encode()).decode())
        return int(payload["id"])
    except (ValueError, KeyError, TypeError):
        return None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateAccountRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    role: AccountRole
    initial_balance_cents: int = Field(0, ge=0)


class CreditAdjustmentRequest(BaseModel):
    amount_cents: int = Field(..., description="Signed: positive credits, negative debits")
    description: str | None = Field(None, max_length=500)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AccountResponse(BaseModel):
    id: str
    username: str
    role: AccountRole
    balance_cents: int
    balance_display: str

    @classmethod
    def from_domain(cls, account: Account) -> "AccountResponse":
        return cls(
            id=account.id,
            username=account.username,
            role=account.role,
            balance_cents=account.balance,
            balance_display=cents_to_display(account.balance),
        )


class CreditAdjustmentResponse(BaseModel):
    balance_cents: int
    balance_display: str
    adjusted_cents: int
    adjusted_display: str
    ledger_entry_id: int

    @classmethod
    def from_result(cls, balance: int, amount: int, entry_id: int) -> "CreditAdjustmentResponse":
        return cls(
            balance_cents=balance,
            balance_display=cents_to_display(balance),
            adjusted_cents=amount,
            adjusted_display=cents_to_display(amount),
            ledger_entry_id=entry_id,
        )


class LedgerEntryItem(BaseModel):
    id: int
    entry_type: str
    amount_cents: int
    amount_display: str
    balance_after_cents: int
    balance_after_display: str
    reference_type: str | None
    reference_id: str | None
    description: str | None
    created_at: str  # ISO8601 string


class LedgerResponse(BaseModel):
    items: list[LedgerEntryItem]
    next_cursor: str | None
    has_more: bool

"""Pydantic schemas for bl_settlement API.

Shape checks only; the pick-count / range / repetition rules live in
bl_settlement.domain.rules so every entry point reports them the same way.
"""

from pydantic import BaseModel, Field

from src.bl_common.cents import cents_to_display
from src.bl_ticket.application.schemas import TicketResponse


class PurchaseRequest(BaseModel):
    account_id: str = Field(..., min_length=1, max_length=64)
    tickets: list[list[int]] = Field(..., description="One list of 10 numbers per ticket")
    buyer_name: str | None = Field(None, max_length=120)
    buyer_phone: str | None = Field(None, max_length=32)


class PurchaseResponse(BaseModel):
    tickets: list[TicketResponse]
    total_cost_cents: int
    total_cost_display: str
    balance_cents: int
    balance_display: str

    @classmethod
    def from_result(
        cls, tickets: list[TicketResponse], total_cost: int, balance: int
    ) -> "PurchaseResponse":
        return cls(
            tickets=tickets,
            total_cost_cents=total_cost,
            total_cost_display=cents_to_display(total_cost),
            balance_cents=balance,
            balance_display=cents_to_display(balance),
        )

"""Pydantic schemas for ticket responses."""

from collections.abc import Mapping

from pydantic import BaseModel

from src.bl_common.enums import TicketStatus
from src.bl_ticket.domain.matching import count_matches, match_flags
from src.bl_ticket.domain.models import Ticket


class TicketResponse(BaseModel):
    id: str
    numbers: list[int]
    status: TicketStatus
    created_at: str  # ISO8601 string
    buyer_name: str | None
    buyer_phone: str | None
    buyer_id: str | None
    seller_id: str | None
    seller_username: str | None

    @classmethod
    def from_domain(cls, ticket: Ticket) -> "TicketResponse":
        return cls(
            id=ticket.id,
            numbers=list(ticket.numbers),
            status=ticket.status,
            created_at=ticket.created_at.isoformat(),
            buyer_name=ticket.buyer_name,
            buyer_phone=ticket.buyer_phone,
            buyer_id=ticket.buyer_id,
            seller_id=ticket.seller_id,
            seller_username=ticket.seller_username,
        )


class ScoredTicketResponse(TicketResponse):
    """Ticket plus its score against the current draw pool."""

    matches: int
    matched_positions: list[bool]

    @classmethod
    def score(cls, ticket: Ticket, pool: Mapping[int, int]) -> "ScoredTicketResponse":
        base = TicketResponse.from_domain(ticket)
        return cls(
            **base.model_dump(),
            matches=count_matches(ticket.numbers, pool),
            matched_positions=match_flags(ticket.numbers, pool),
        )


class TicketListResponse(BaseModel):
    items: list[ScoredTicketResponse]

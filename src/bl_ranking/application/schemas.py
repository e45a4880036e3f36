"""Pydantic schemas for bl_ranking API."""

from pydantic import BaseModel

from src.bl_common.enums import TicketStatus
from src.bl_ranking.domain.models import PublicRanking, RankedTicket


class PublicRankingEntryResponse(BaseModel):
    initials: str
    matches: int
    ticket_id: str


class PublicRankingResponse(BaseModel):
    ranking: list[PublicRankingEntryResponse]
    last_updated: str | None

    @classmethod
    def from_domain(cls, snapshot: PublicRanking) -> "PublicRankingResponse":
        return cls(
            ranking=[
                PublicRankingEntryResponse(
                    initials=e.initials, matches=e.matches, ticket_id=e.ticket_id
                )
                for e in snapshot.ranking
            ],
            last_updated=snapshot.last_updated.isoformat() if snapshot.last_updated else None,
        )


class CycleRankingItem(BaseModel):
    """Admin view: full identity, not anonymized."""

    ticket_id: str
    buyer_name: str | None
    seller_username: str | None
    numbers: list[int]
    matches: int
    status: TicketStatus

    @classmethod
    def from_ranked(cls, ranked: RankedTicket) -> "CycleRankingItem":
        t = ranked.ticket
        return cls(
            ticket_id=t.id,
            buyer_name=t.buyer_name,
            seller_username=t.seller_username,
            numbers=list(t.numbers),
            matches=ranked.matches,
            status=t.status,
        )


class CycleRankingResponse(BaseModel):
    pool_size: int
    items: list[CycleRankingItem]


class ReevaluationResponse(BaseModel):
    pool_size: int
    updated_ticket_ids: list[str]
    public_ranking: PublicRankingResponse

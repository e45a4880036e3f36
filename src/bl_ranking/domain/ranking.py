"""Ranking engine: score, order and truncate the eligible tickets.

Order is matches descending, then issue time ascending (earlier ticket ranks
higher), then ticket id so equal timestamps still sort deterministically.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime

from src.bl_ranking.domain.anonymize import initials_of, public_ticket_id
from src.bl_ranking.domain.models import PublicRanking, PublicRankingEntry, RankedTicket
from src.bl_ticket.domain.matching import count_matches
from src.bl_ticket.domain.models import Ticket


def rank_tickets(
    tickets: Iterable[Ticket],
    pool: Mapping[int, int],
    limit: int | None = None,
) -> list[RankedTicket]:
    """Score every live ticket; ACTIVE and WINNING are the only eligible states."""
    ranked = [
        RankedTicket(ticket=t, matches=count_matches(t.numbers, pool))
        for t in tickets
        if t.is_live
    ]
    ranked.sort(key=lambda r: (-r.matches, r.ticket.created_at, r.ticket.id))
    return ranked if limit is None else ranked[:limit]


def build_public_ranking(
    tickets: Iterable[Ticket],
    pool: Mapping[int, int],
    size: int,
    now: datetime,
) -> PublicRanking:
    """Anonymized top-N board. Zero-match tickets never appear on it."""
    if not pool:
        return PublicRanking(ranking=[], last_updated=None)
    scoring = [r for r in rank_tickets(tickets, pool) if r.matches > 0][:size]
    return PublicRanking(
        ranking=[
            PublicRankingEntry(
                initials=initials_of(r.ticket.buyer_name),
                matches=r.matches,
                ticket_id=public_ticket_id(r.ticket.id),
            )
            for r in scoring
        ],
        last_updated=now,
    )

"""Domain models for bl_ranking."""

from dataclasses import dataclass, field
from datetime import datetime

from src.bl_ticket.domain.models import Ticket


@dataclass
class RankedTicket:
    ticket: Ticket
    matches: int


@dataclass(frozen=True)
class PublicRankingEntry:
    initials: str
    matches: int
    ticket_id: str  # truncated, never the full id


@dataclass
class PublicRanking:
    """The public board document. Always written whole, never patched."""

    ranking: list[PublicRankingEntry] = field(default_factory=list)
    last_updated: datetime | None = None

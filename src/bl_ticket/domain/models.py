"""Domain models for bl_ticket: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.bl_common.enums import TicketStatus


@dataclass
class Ticket:
    id: str
    numbers: list[int]
    status: TicketStatus
    created_at: datetime
    buyer_name: str | None = None
    buyer_phone: str | None = None
    # Client purchase sets buyer_id; a seller-recorded sale sets seller_id + seller_username
    buyer_id: str | None = None
    seller_id: str | None = None
    seller_username: str | None = None

    @property
    def is_seller_sale(self) -> bool:
        return bool(self.seller_username)

    @property
    def is_live(self) -> bool:
        """Still in play for the current cycle (counts for ranking and revenue)."""
        return self.status in (TicketStatus.ACTIVE, TicketStatus.WINNING)

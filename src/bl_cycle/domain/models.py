"""Cycle history records. Written once at cycle reset, never updated."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class FinancialReport:
    client_ticket_count: int = 0
    seller_ticket_count: int = 0
    client_revenue: int = 0
    seller_revenue: int = 0
    total_revenue: int = 0
    seller_commission: int = 0
    owner_commission: int = 0
    prize_pool: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.total_revenue or self.client_ticket_count or self.seller_ticket_count)


@dataclass
class SellerHistoryEntry:
    seller_id: str
    seller_username: str
    active_tickets_count: int
    total_revenue: int
    total_commission: int
    end_date: datetime
    id: int | None = None


@dataclass
class AdminHistoryEntry:
    end_date: datetime
    total_revenue: int
    total_seller_commission: int
    total_owner_commission: int
    total_prize_pool: int
    client_ticket_count: int
    seller_ticket_count: int
    id: int | None = None

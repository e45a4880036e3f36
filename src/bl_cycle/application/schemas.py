"""Pydantic schemas for bl_cycle API."""

from pydantic import BaseModel

from src.bl_common.cents import cents_to_display
from src.bl_cycle.domain.models import AdminHistoryEntry, FinancialReport, SellerHistoryEntry


class FinancialReportResponse(BaseModel):
    client_ticket_count: int
    seller_ticket_count: int
    client_revenue_cents: int
    seller_revenue_cents: int
    total_revenue_cents: int
    total_revenue_display: str
    seller_commission_cents: int
    owner_commission_cents: int
    prize_pool_cents: int
    prize_pool_display: str

    @classmethod
    def from_domain(cls, report: FinancialReport) -> "FinancialReportResponse":
        return cls(
            client_ticket_count=report.client_ticket_count,
            seller_ticket_count=report.seller_ticket_count,
            client_revenue_cents=report.client_revenue,
            seller_revenue_cents=report.seller_revenue,
            total_revenue_cents=report.total_revenue,
            total_revenue_display=cents_to_display(report.total_revenue),
            seller_commission_cents=report.seller_commission,
            owner_commission_cents=report.owner_commission,
            prize_pool_cents=report.prize_pool,
            prize_pool_display=cents_to_display(report.prize_pool),
        )


class SellerHistoryItem(BaseModel):
    id: int | None
    seller_id: str
    seller_username: str
    active_tickets_count: int
    total_revenue_cents: int
    total_commission_cents: int
    end_date: str  # ISO8601 string

    @classmethod
    def from_domain(cls, e: SellerHistoryEntry) -> "SellerHistoryItem":
        return cls(
            id=e.id,
            seller_id=e.seller_id,
            seller_username=e.seller_username,
            active_tickets_count=e.active_tickets_count,
            total_revenue_cents=e.total_revenue,
            total_commission_cents=e.total_commission,
            end_date=e.end_date.isoformat(),
        )


class AdminHistoryItem(BaseModel):
    id: int | None
    end_date: str  # ISO8601 string
    total_revenue_cents: int
    total_seller_commission_cents: int
    total_owner_commission_cents: int
    total_prize_pool_cents: int
    client_ticket_count: int
    seller_ticket_count: int

    @classmethod
    def from_domain(cls, e: AdminHistoryEntry) -> "AdminHistoryItem":
        return cls(
            id=e.id,
            end_date=e.end_date.isoformat(),
            total_revenue_cents=e.total_revenue,
            total_seller_commission_cents=e.total_seller_commission,
            total_owner_commission_cents=e.total_owner_commission,
            total_prize_pool_cents=e.total_prize_pool,
            client_ticket_count=e.client_ticket_count,
            seller_ticket_count=e.seller_ticket_count,
        )


class SellerHistoryResponse(BaseModel):
    items: list[SellerHistoryItem]


class AdminHistoryResponse(BaseModel):
    items: list[AdminHistoryItem]


class CycleResetResponse(BaseModel):
    seller_history_written: int
    admin_history_written: bool
    draws_deleted: int
    tickets_expired: int
    report: FinancialReportResponse

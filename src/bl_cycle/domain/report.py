"""Financial arithmetic for a closing cycle. Integer cents, floor division.

The prize pool is whatever remains after both commissions, so the three
shares always add back up to total revenue exactly.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime

from src.bl_account.domain.models import Account
from src.bl_common.cents import apply_bps
from src.bl_cycle.domain.models import FinancialReport, SellerHistoryEntry
from src.bl_lottery.domain.models import LotteryConfig
from src.bl_ticket.domain.models import Ticket


def generate_financial_report(
    tickets: Iterable[Ticket], config: LotteryConfig
) -> FinancialReport:
    live = [t for t in tickets if t.is_live]
    seller_count = sum(1 for t in live if t.is_seller_sale)
    client_count = len(live) - seller_count

    price = config.ticket_price_cents
    client_revenue = client_count * price
    seller_revenue = seller_count * price
    total = client_revenue + seller_revenue

    seller_commission = apply_bps(seller_revenue, config.seller_commission_bps)
    owner_commission = apply_bps(total, config.owner_commission_bps) + apply_bps(
        client_revenue, config.client_sales_commission_bps
    )
    return FinancialReport(
        client_ticket_count=client_count,
        seller_ticket_count=seller_count,
        client_revenue=client_revenue,
        seller_revenue=seller_revenue,
        total_revenue=total,
        seller_commission=seller_commission,
        owner_commission=owner_commission,
        prize_pool=total - seller_commission - owner_commission,
    )


def seller_history_entries(
    sellers: Sequence[Account],
    tickets: Iterable[Ticket],
    config: LotteryConfig,
    end_date: datetime,
) -> list[SellerHistoryEntry]:
    """One entry per seller that sold at least one live ticket this cycle."""
    counts: dict[str, int] = {}
    for t in tickets:
        if t.is_live and t.seller_id:
            counts[t.seller_id] = counts.get(t.seller_id, 0) + 1

    entries = []
    for seller in sellers:
        count = counts.get(seller.id, 0)
        if count == 0:
            continue
        revenue = count * config.ticket_price_cents
        entries.append(
            SellerHistoryEntry(
                seller_id=seller.id,
                seller_username=seller.username,
                active_tickets_count=count,
                total_revenue=revenue,
                total_commission=apply_bps(revenue, config.seller_commission_bps),
                end_date=end_date,
            )
        )
    return entries

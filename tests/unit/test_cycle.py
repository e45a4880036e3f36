"""Unit tests for the financial report and the cycle reset."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.bl_account.domain.models import Account
from src.bl_common.enums import AccountRole, TicketStatus
from src.bl_cycle.application.service import CycleService
from src.bl_cycle.domain.models import AdminHistoryEntry
from src.bl_cycle.domain.report import generate_financial_report, seller_history_entries
from src.bl_lottery.domain.models import LotteryConfig
from src.bl_ranking.domain.models import PublicRanking
from src.bl_ticket.domain.models import Ticket

NOW = datetime(2026, 6, 1, tzinfo=UTC)
CONFIG = LotteryConfig(
    ticket_price_cents=200,
    seller_commission_bps=1000,  # 10%
    owner_commission_bps=500,  # 5%
    client_sales_commission_bps=1000,  # 10%
)


def _ticket(
    n: int,
    status: TicketStatus = TicketStatus.ACTIVE,
    seller_id: str | None = None,
) -> Ticket:
    return Ticket(
        id=f"t{n}",
        numbers=[1, 2, 3, 4, 5, 6, 7, 8, 9, 10],
        status=status,
        created_at=NOW,
        seller_id=seller_id,
        seller_username="vend01" if seller_id else None,
    )


def _seller(account_id: str, username: str) -> Account:
    return Account(
        id=account_id,
        username=username,
        role=AccountRole.SELLER,
        balance=0,
        version=0,
        created_at=NOW,
        updated_at=NOW,
    )


class TestFinancialReport:
    def test_split(self) -> None:
        # 3 client tickets (600) + 2 seller tickets (400)
        tickets = [_ticket(i) for i in range(3)] + [_ticket(i, seller_id="s1") for i in range(3, 5)]

        report = generate_financial_report(tickets, CONFIG)

        assert report.client_ticket_count == 3
        assert report.seller_ticket_count == 2
        assert report.total_revenue == 1000
        assert report.seller_commission == 40
        # 5% of 1000 + 10% of 600
        assert report.owner_commission == 110
        assert report.prize_pool == 850

    def test_shares_add_up(self) -> None:
        config = LotteryConfig(333, 1234, 777, 999)
        tickets = [_ticket(i, seller_id="s1" if i % 3 else None) for i in range(7)]
        r = generate_financial_report(tickets, config)
        assert r.seller_commission + r.owner_commission + r.prize_pool == r.total_revenue

    def test_only_live_tickets_count(self) -> None:
        tickets = [
            _ticket(1, TicketStatus.WINNING),
            _ticket(2, TicketStatus.UNPAID),
            _ticket(3, TicketStatus.EXPIRED),
        ]
        report = generate_financial_report(tickets, CONFIG)
        assert report.client_ticket_count == 1
        assert report.total_revenue == 200

    def test_empty_cycle(self) -> None:
        assert generate_financial_report([], CONFIG).is_empty


class TestSellerHistoryEntries:
    def test_one_entry_per_seller_with_sales(self) -> None:
        sellers = [_seller("s1", "vend01"), _seller("s2", "vend02")]
        tickets = [_ticket(1, seller_id="s1"), _ticket(2, seller_id="s1"), _ticket(3)]

        entries = seller_history_entries(sellers, tickets, CONFIG, NOW)

        assert len(entries) == 1
        entry = entries[0]
        assert entry.seller_username == "vend01"
        assert entry.active_tickets_count == 2
        assert entry.total_revenue == 400
        assert entry.total_commission == 40
        assert entry.end_date == NOW

    def test_held_tickets_not_counted(self) -> None:
        sellers = [_seller("s1", "vend01")]
        tickets = [_ticket(1, TicketStatus.UNPAID, seller_id="s1")]
        assert seller_history_entries(sellers, tickets, CONFIG, NOW) == []


def _cycle_service(tickets: list[Ticket], sellers: list[Account]):
    repos = {
        "accounts": AsyncMock(),
        "tickets": AsyncMock(),
        "draws": AsyncMock(),
        "config": AsyncMock(),
        "history": AsyncMock(),
        "store": AsyncMock(),
    }
    repos["accounts"].list_by_role.return_value = sellers
    repos["tickets"].list_by_statuses.return_value = tickets
    repos["tickets"].bulk_transition.return_value = len(tickets)
    repos["draws"].delete_all.return_value = 3
    repos["config"].get.return_value = CONFIG
    return CycleService(**repos), repos


class TestCycleReset:
    async def test_full_reset(self) -> None:
        tickets = [_ticket(1), _ticket(2, seller_id="s1")]
        svc, repos = _cycle_service(tickets, [_seller("s1", "vend01")])
        db = AsyncMock()

        result = await svc.reset_cycle(db)

        assert result.seller_history_written == 1
        assert result.admin_history_written is True
        assert result.draws_deleted == 3
        assert result.tickets_expired == 2
        assert result.report.total_revenue_cents == 400

        admin_entry = repos["history"].insert_admin_entry.await_args.args[1]
        assert isinstance(admin_entry, AdminHistoryEntry)
        assert admin_entry.client_ticket_count == 1

        from_statuses, to_status = repos["tickets"].bulk_transition.await_args.args[1:]
        assert set(from_statuses) == {
            TicketStatus.ACTIVE,
            TicketStatus.WINNING,
            TicketStatus.UNPAID,
        }
        assert to_status == TicketStatus.EXPIRED

        snapshot = repos["store"].replace.await_args.args[1]
        assert snapshot == PublicRanking()
        # draw-pool advisory lock
        assert db.execute.await_count >= 1
        db.commit.assert_awaited_once()

    async def test_empty_cycle_writes_no_admin_history(self) -> None:
        svc, repos = _cycle_service([], [_seller("s1", "vend01")])

        result = await svc.reset_cycle(AsyncMock())

        assert result.admin_history_written is False
        repos["history"].insert_admin_entry.assert_not_awaited()
        repos["draws"].delete_all.assert_awaited_once()

    async def test_failure_rolls_back_everything(self) -> None:
        svc, repos = _cycle_service([_ticket(1)], [])
        repos["draws"].delete_all.side_effect = RuntimeError("disk full")
        db = AsyncMock()

        with pytest.raises(RuntimeError):
            await svc.reset_cycle(db)

        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()
        repos["tickets"].bulk_transition.assert_not_awaited()


class TestHistoryQueries:
    async def test_financial_report_for_open_cycle(self) -> None:
        svc, _ = _cycle_service([_ticket(1), _ticket(2)], [])
        report = await svc.get_financial_report(MagicMock())
        assert report.total_revenue_cents == 400
        assert report.total_revenue_display == "R$ 4,00"

    async def test_seller_history_filtered(self) -> None:
        svc, repos = _cycle_service([], [])
        repos["history"].list_seller_history.return_value = []
        await svc.list_seller_history(MagicMock(), "s1", 10)
        repos["history"].list_seller_history.assert_awaited_once()
        assert repos["history"].list_seller_history.await_args.args[1:] == ("s1", 10)

    async def test_admin_history_items(self) -> None:
        svc, repos = _cycle_service([], [])
        repos["history"].list_admin_history.return_value = [
            AdminHistoryEntry(
                id=3,
                end_date=NOW,
                total_revenue=2400,
                total_seller_commission=120,
                total_owner_commission=180,
                total_prize_pool=2100,
                client_ticket_count=6,
                seller_ticket_count=6,
            )
        ]
        result = await svc.list_admin_history(MagicMock(), 5)
        item = result.items[0]
        assert item.id == 3
        assert item.total_prize_pool_cents == 2100
        assert item.end_date == NOW.isoformat()

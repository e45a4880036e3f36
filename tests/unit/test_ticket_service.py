"""Unit tests for TicketService (lookup and payment hold)."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from src.bl_common.enums import TicketStatus
from src.bl_common.errors import (
    InvalidTicketTransitionError,
    TicketNotFoundError,
    TransactionConflictError,
)
from src.bl_draw.domain.models import Draw
from src.bl_ranking.application.service import ReevaluationResult
from src.bl_ticket.application.service import TicketService
from src.bl_ticket.domain.models import Ticket

NOW = datetime(2026, 4, 1, tzinfo=UTC)


def _ticket(status: TicketStatus = TicketStatus.ACTIVE) -> Ticket:
    return Ticket(
        id="t1",
        numbers=[5, 5, 9, 12, 3, 1, 1, 1, 1, 1],
        status=status,
        created_at=NOW,
        buyer_id="acc-1",
        buyer_name="maria",
    )


def _service(ticket: Ticket | None):
    repo = AsyncMock()
    repo.get_by_id.return_value = ticket
    repo.list_by_account.return_value = [ticket] if ticket else []
    draws = AsyncMock()
    draws.list_all.return_value = [Draw(id="d1", numbers=(5, 9, 12, 3, 20), created_at=NOW)]
    reevaluation = AsyncMock()
    reevaluation.apply.return_value = ReevaluationResult(pool_size=5)
    return TicketService(repo=repo, draws=draws, reevaluation=reevaluation), repo, reevaluation


class TestGetTicket:
    async def test_scores_against_current_pool(self) -> None:
        svc, _, _ = _service(_ticket())

        result = await svc.get_ticket(AsyncMock(), "t1")

        assert result.matches == 4
        assert result.matched_positions == [
            True, False, True, True, True, False, False, False, False, False,
        ]

    async def test_not_found(self) -> None:
        svc, _, _ = _service(None)
        with pytest.raises(TicketNotFoundError) as exc_info:
            await svc.get_ticket(AsyncMock(), "missing")
        assert exc_info.value.http_status == 404

    async def test_list_by_account(self) -> None:
        svc, repo, _ = _service(_ticket())
        result = await svc.list_tickets(AsyncMock(), "acc-1", limit=10)
        assert [t.id for t in result.items] == ["t1"]
        assert repo.list_by_account.await_args.args[1:] == ("acc-1", 10)


class TestHoldRelease:
    async def test_hold_active_ticket(self) -> None:
        svc, repo, reevaluation = _service(_ticket())
        db = AsyncMock()

        await svc.hold_ticket(db, "t1")

        repo.update_statuses.assert_awaited_once_with(db, {"t1": TicketStatus.UNPAID})
        db.commit.assert_awaited_once()
        reevaluation.apply.assert_awaited_once_with(db)

    async def test_release_unpaid_ticket(self) -> None:
        svc, repo, _ = _service(_ticket(TicketStatus.UNPAID))
        db = AsyncMock()

        await svc.release_ticket(db, "t1")

        repo.update_statuses.assert_awaited_once_with(db, {"t1": TicketStatus.ACTIVE})

    async def test_hold_winning_rejected(self) -> None:
        svc, repo, reevaluation = _service(_ticket(TicketStatus.WINNING))
        db = AsyncMock()

        with pytest.raises(InvalidTicketTransitionError):
            await svc.hold_ticket(db, "t1")

        repo.update_statuses.assert_not_awaited()
        reevaluation.apply.assert_not_awaited()
        db.rollback.assert_awaited_once()

    async def test_failed_reevaluation_rolls_back_hold(self) -> None:
        svc, repo, reevaluation = _service(_ticket())
        reevaluation.apply.side_effect = TransactionConflictError(3)
        db = AsyncMock()

        with pytest.raises(TransactionConflictError):
            await svc.hold_ticket(db, "t1")

        repo.update_statuses.assert_awaited_once()
        db.commit.assert_not_awaited()
        db.rollback.assert_awaited_once()

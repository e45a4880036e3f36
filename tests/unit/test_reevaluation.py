"""Unit tests for the explicit re-evaluation pass."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

from src.bl_common.enums import TicketStatus
from src.bl_draw.domain.models import Draw
from src.bl_ranking.application.service import RankingQueryService, ReevaluationService
from src.bl_ranking.domain.models import PublicRanking
from src.bl_ticket.domain.models import Ticket

T0 = datetime(2026, 4, 1, tzinfo=UTC)
WINNER = [1, 1, 2, 3, 4, 5, 6, 7, 8, 9]


def _draw(draw_id: str, numbers: list[int]) -> Draw:
    return Draw(id=draw_id, numbers=tuple(numbers), created_at=T0)


def _ticket(
    ticket_id: str,
    numbers: list[int],
    status: TicketStatus = TicketStatus.ACTIVE,
    minutes: int = 0,
) -> Ticket:
    return Ticket(
        id=ticket_id,
        numbers=list(numbers),
        status=status,
        created_at=T0 + timedelta(minutes=minutes),
        buyer_name="Joao Pereira",
    )


def _service(draws: list[Draw], tickets: list[Ticket]):
    draw_repo = AsyncMock()
    draw_repo.list_all.return_value = draws
    ticket_repo = AsyncMock()
    ticket_repo.list_by_statuses.return_value = tickets
    store = AsyncMock()
    return ReevaluationService(tickets=ticket_repo, draws=draw_repo, store=store), ticket_repo, store


class TestReevaluationService:
    async def test_full_cover_promotes_to_winning(self) -> None:
        draws = [_draw("d1", [1, 2, 3, 4, 5]), _draw("d2", [1, 6, 7, 8, 9])]
        svc, ticket_repo, store = _service(draws, [_ticket("win1", WINNER)])
        db = AsyncMock()

        result = await svc.apply(db)

        assert result.pool_size == 10
        assert result.updated_ticket_ids == ["win1"]
        ticket_repo.update_statuses.assert_awaited_once_with(
            db, {"win1": TicketStatus.WINNING}
        )
        snapshot = store.replace.await_args.args[1]
        assert snapshot.ranking[0].matches == 10
        assert snapshot.ranking[0].initials == "JP"

    async def test_shrunk_pool_reverts_winning(self) -> None:
        draws = [_draw("d1", [1, 2, 3, 4, 5])]
        svc, ticket_repo, _ = _service(draws, [_ticket("w", WINNER, TicketStatus.WINNING)])

        result = await svc.apply(AsyncMock())

        assert result.updated_ticket_ids == ["w"]
        ticket_repo.update_statuses.assert_awaited_once()
        assert ticket_repo.update_statuses.await_args.args[1] == {"w": TicketStatus.ACTIVE}

    async def test_unchanged_tickets_not_written(self) -> None:
        draws = [_draw("d1", [1, 2, 3, 4, 5])]
        svc, ticket_repo, _ = _service(draws, [_ticket("a", WINNER)])

        result = await svc.apply(AsyncMock())

        assert result.updated_ticket_ids == []
        ticket_repo.update_statuses.assert_awaited_once()
        assert ticket_repo.update_statuses.await_args.args[1] == {}

    async def test_only_live_tickets_loaded(self) -> None:
        svc, ticket_repo, _ = _service([], [])
        await svc.apply(AsyncMock())
        statuses = ticket_repo.list_by_statuses.await_args.args[1]
        assert set(statuses) == {TicketStatus.ACTIVE, TicketStatus.WINNING}

    async def test_empty_pool_publishes_empty_board(self) -> None:
        svc, _, store = _service([], [_ticket("a", WINNER)])

        result = await svc.apply(AsyncMock())

        assert result.pool_size == 0
        assert result.public_ranking == PublicRanking(ranking=[], last_updated=None)
        store.replace.assert_awaited_once()

    async def test_idempotent(self) -> None:
        draws = [_draw("d1", [1, 2, 3, 4, 5]), _draw("d2", [1, 6, 7, 8, 9])]
        tickets = [_ticket("win1", WINNER), _ticket("other", [20] * 4 + [21] * 4 + [1, 2])]
        svc, _, _ = _service(draws, tickets)

        first = await svc.apply(AsyncMock())
        statuses_after_first = {t.id: t.status for t in tickets}
        second = await svc.apply(AsyncMock())

        assert first.updated_ticket_ids == ["win1"]
        assert second.updated_ticket_ids == []
        assert {t.id: t.status for t in tickets} == statuses_after_first


class TestRankingQueryService:
    async def test_cycle_ranking_shows_full_identity(self) -> None:
        draw_repo = AsyncMock()
        draw_repo.list_all.return_value = [_draw("d1", [1, 2, 3, 4, 5])]
        ticket_repo = AsyncMock()
        ticket_repo.list_by_statuses.return_value = [
            _ticket("late", WINNER, minutes=5),
            _ticket("early", WINNER, minutes=1),
        ]
        svc = RankingQueryService(tickets=ticket_repo, draws=draw_repo, store=AsyncMock())

        result = await svc.get_cycle_ranking(AsyncMock())

        assert result.pool_size == 5
        assert [i.ticket_id for i in result.items] == ["early", "late"]
        assert result.items[0].buyer_name == "Joao Pereira"
        assert result.items[0].matches == 5

    async def test_public_ranking_from_snapshot(self) -> None:
        store = AsyncMock()
        store.get.return_value = PublicRanking()
        svc = RankingQueryService(tickets=AsyncMock(), draws=AsyncMock(), store=store)

        result = await svc.get_public_ranking(AsyncMock())

        assert result.ranking == []
        assert result.last_updated is None

"""Unit tests for the restricted ticket transition functions."""

from collections import Counter

import pytest

from src.bl_common.enums import TicketStatus
from src.bl_common.errors import InvalidTicketTransitionError
from src.bl_ticket.domain.multiset import draw_pool_frequency
from src.bl_ticket.domain.status import (
    expire,
    hold,
    is_fully_covered,
    reevaluate_status,
    release,
)

TICKET = [1, 1, 2, 3, 4, 5, 6, 7, 8, 9]
FULL_POOL = draw_pool_frequency([[1, 2, 3, 4, 5], [1, 6, 7, 8, 9]])


class TestReevaluateStatus:
    def test_full_cover_becomes_winning(self) -> None:
        assert reevaluate_status(TicketStatus.ACTIVE, TICKET, FULL_POOL) == TicketStatus.WINNING

    def test_partial_cover_stays_active(self) -> None:
        pool = Counter({5: 1, 9: 1, 12: 1, 3: 1})
        ticket = [5, 5, 9, 12, 3, 1, 1, 1, 1, 1]
        assert reevaluate_status(TicketStatus.ACTIVE, ticket, pool) == TicketStatus.ACTIVE

    def test_winning_reverts_when_pool_shrinks(self) -> None:
        smaller = draw_pool_frequency([[1, 2, 3, 4, 5]])
        assert reevaluate_status(TicketStatus.WINNING, TICKET, smaller) == TicketStatus.ACTIVE

    def test_empty_pool_is_never_winning(self) -> None:
        assert reevaluate_status(TicketStatus.WINNING, TICKET, Counter()) == TicketStatus.ACTIVE

    @pytest.mark.parametrize("status", [TicketStatus.UNPAID, TicketStatus.EXPIRED])
    def test_held_and_expired_pass_through(self, status: TicketStatus) -> None:
        assert reevaluate_status(status, TICKET, FULL_POOL) == status

    def test_idempotent(self) -> None:
        once = reevaluate_status(TicketStatus.ACTIVE, TICKET, FULL_POOL)
        assert reevaluate_status(once, TICKET, FULL_POOL) == once

    def test_short_ticket_never_wins(self) -> None:
        assert reevaluate_status(TicketStatus.ACTIVE, [1, 2, 3], FULL_POOL) == TicketStatus.ACTIVE


class TestExpire:
    @pytest.mark.parametrize(
        "status", [TicketStatus.ACTIVE, TicketStatus.WINNING, TicketStatus.UNPAID]
    )
    def test_live_and_held_expire(self, status: TicketStatus) -> None:
        assert expire(status) == TicketStatus.EXPIRED

    def test_expired_stays_expired(self) -> None:
        assert expire(TicketStatus.EXPIRED) == TicketStatus.EXPIRED


class TestHoldRelease:
    def test_hold_active(self) -> None:
        assert hold(TicketStatus.ACTIVE) == TicketStatus.UNPAID

    def test_hold_winning_rejected(self) -> None:
        with pytest.raises(InvalidTicketTransitionError) as exc_info:
            hold(TicketStatus.WINNING)
        assert exc_info.value.code == 4003

    def test_release_unpaid(self) -> None:
        assert release(TicketStatus.UNPAID) == TicketStatus.ACTIVE

    @pytest.mark.parametrize("status", [TicketStatus.ACTIVE, TicketStatus.EXPIRED])
    def test_release_requires_unpaid(self, status: TicketStatus) -> None:
        with pytest.raises(InvalidTicketTransitionError):
            release(status)


class TestIsFullyCovered:
    def test_duplicates_need_matching_pool_count(self) -> None:
        single_one = draw_pool_frequency([[1, 2, 3, 4, 5], [6, 7, 8, 9, 10]])
        assert not is_fully_covered(TICKET, single_one)
        assert is_fully_covered(TICKET, FULL_POOL)

    def test_short_ticket_never_covered(self) -> None:
        assert not is_fully_covered([1, 2, 3], FULL_POOL)

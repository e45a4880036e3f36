"""Ticket lifecycle transitions.

Each caller gets its own restricted transition function:

  reevaluate_status: draw-pool re-evaluation; only produces ACTIVE/WINNING
  expire: cycle reset; the only way into EXPIRED
  hold / release: administrative payment hold (ACTIVE <-> UNPAID)

    ACTIVE ──full cover──▶ WINNING ──pool shrank──▶ ACTIVE
    ACTIVE ──hold──▶ UNPAID ──release──▶ ACTIVE
    ACTIVE | WINNING | UNPAID ──cycle reset──▶ EXPIRED
"""

from collections.abc import Mapping, Sequence

from src.bl_common.enums import TicketStatus
from src.bl_common.errors import InvalidTicketTransitionError
from src.bl_ticket.domain.constants import PICKS_PER_TICKET
from src.bl_ticket.domain.matching import count_matches

_REEVALUATED = (TicketStatus.ACTIVE, TicketStatus.WINNING)
_EXPIRABLE = (TicketStatus.ACTIVE, TicketStatus.WINNING, TicketStatus.UNPAID)


def is_fully_covered(numbers: Sequence[int], pool: Mapping[int, int]) -> bool:
    return len(numbers) == PICKS_PER_TICKET and count_matches(numbers, pool) == PICKS_PER_TICKET


def reevaluate_status(
    status: TicketStatus, numbers: Sequence[int], pool: Mapping[int, int]
) -> TicketStatus:
    """Status after re-scoring against the current pool. Idempotent.

    UNPAID and EXPIRED pass through untouched.
    """
    if status not in _REEVALUATED:
        return status
    if is_fully_covered(numbers, pool):
        return TicketStatus.WINNING
    return TicketStatus.ACTIVE


def expire(status: TicketStatus) -> TicketStatus:
    if status in _EXPIRABLE:
        return TicketStatus.EXPIRED
    return status


def hold(status: TicketStatus) -> TicketStatus:
    if status != TicketStatus.ACTIVE:
        raise InvalidTicketTransitionError(status.value, TicketStatus.UNPAID.value)
    return TicketStatus.UNPAID


def release(status: TicketStatus) -> TicketStatus:
    if status != TicketStatus.UNPAID:
        raise InvalidTicketTransitionError(status.value, TicketStatus.ACTIVE.value)
    return TicketStatus.ACTIVE

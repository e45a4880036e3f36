"""Pre-settlement validation. Runs before any I/O; failures never mutate state."""

from collections import Counter
from collections.abc import Sequence

from src.bl_common.enums import AccountRole
from src.bl_common.errors import MalformedTicketError
from src.bl_ticket.domain.constants import (
    MAX_NUMBER,
    MAX_REPEATS_PER_TICKET,
    MIN_NUMBER,
    PICKS_PER_TICKET,
)

MAX_TICKETS_PER_PURCHASE = 50


def validate_ticket_numbers(numbers: Sequence[int]) -> None:
    if len(numbers) != PICKS_PER_TICKET:
        raise MalformedTicketError(
            f"a ticket needs exactly {PICKS_PER_TICKET} numbers, got {len(numbers)}"
        )
    out_of_range = [n for n in numbers if not (MIN_NUMBER <= n <= MAX_NUMBER)]
    if out_of_range:
        raise MalformedTicketError(
            f"numbers must be between {MIN_NUMBER} and {MAX_NUMBER}, got {out_of_range}"
        )
    over_cap = sorted(v for v, c in Counter(numbers).items() if c > MAX_REPEATS_PER_TICKET)
    if over_cap:
        raise MalformedTicketError(
            f"a number may repeat at most {MAX_REPEATS_PER_TICKET} times, exceeded by {over_cap}"
        )


def validate_cart(number_sets: Sequence[Sequence[int]]) -> None:
    if not number_sets:
        raise MalformedTicketError("at least one ticket is required")
    if len(number_sets) > MAX_TICKETS_PER_PURCHASE:
        raise MalformedTicketError(
            f"at most {MAX_TICKETS_PER_PURCHASE} tickets per purchase, got {len(number_sets)}"
        )
    for numbers in number_sets:
        validate_ticket_numbers(numbers)


def check_buyer_name(role: AccountRole, buyer_name: str | None) -> None:
    """Seller-recorded sales must name the customer; clients buy under their username."""
    if role != AccountRole.CLIENT and not (buyer_name and buyer_name.strip()):
        raise MalformedTicketError("buyer name is required for seller sales")

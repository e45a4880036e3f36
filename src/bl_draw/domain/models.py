"""Domain models for bl_draw: draws are immutable once recorded."""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from src.bl_common.errors import MalformedDrawError
from src.bl_ticket.domain.constants import DRAW_SIZES, MAX_NUMBER, MIN_NUMBER
from src.bl_ticket.domain.multiset import draw_pool_frequency


@dataclass(frozen=True)
class Draw:
    id: str
    numbers: tuple[int, ...]
    created_at: datetime
    name: str | None = None


def validate_draw_numbers(numbers: Sequence[int]) -> None:
    """5 or 10 values in [1, 25]; duplicates are allowed."""
    if len(numbers) not in DRAW_SIZES:
        raise MalformedDrawError(f"expected 5 or 10 numbers, got {len(numbers)}")
    out_of_range = [n for n in numbers if not (MIN_NUMBER <= n <= MAX_NUMBER)]
    if out_of_range:
        raise MalformedDrawError(
            f"numbers must be between {MIN_NUMBER} and {MAX_NUMBER}, got {out_of_range}"
        )


def pool_of(draws: Sequence[Draw]) -> Counter[int]:
    """Frequency map of the whole cycle's draw pool."""
    return draw_pool_frequency(d.numbers for d in draws)

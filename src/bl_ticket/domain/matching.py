"""Capped multiset intersection between a ticket and the draw pool.

A value picked 3 times in the ticket but drawn twice across the cycle scores
2, not 3 and not 1. Malformed tickets (any length, out-of-range values) are
scored by the same rule and never rejected here.
"""

from collections.abc import Mapping, Sequence

from src.bl_ticket.domain.multiset import count_occurrences


def count_matches(numbers: Sequence[int], pool: Mapping[int, int]) -> int:
    """Σ over distinct v in the ticket of min(count in ticket, count in pool)."""
    if not pool:
        return 0
    return sum(
        min(in_ticket, pool.get(value, 0))
        for value, in_ticket in count_occurrences(numbers).items()
    )


def match_flags(numbers: Sequence[int], pool: Mapping[int, int]) -> list[bool]:
    """Per-position matched flags; earlier occurrences of a value win.

    Works on a copy of the pool so the caller's mapping is left untouched.
    sum(match_flags(t, p)) == count_matches(t, p) for every t, p.
    """
    remaining = dict(pool)
    flags: list[bool] = []
    for value in numbers:
        left = remaining.get(value, 0)
        if left > 0:
            remaining[value] = left - 1
            flags.append(True)
        else:
            flags.append(False)
    return flags

"""Frequency multiset: value -> occurrence count.

Shared by draw pools and single tickets. Pure functions; inputs are never
mutated.
"""

from collections import Counter
from collections.abc import Iterable


def count_occurrences(numbers: Iterable[int]) -> Counter[int]:
    """O(n) count-by-value. An empty sequence gives an empty mapping."""
    return Counter(numbers)


def draw_pool_frequency(draw_numbers: Iterable[Iterable[int]]) -> Counter[int]:
    """Multiset sum of every draw in the cycle."""
    pool: Counter[int] = Counter()
    for numbers in draw_numbers:
        pool.update(numbers)
    return pool

"""
Shuffle - Unbiased Fisher-Yates permutation.

Uses the operating system's random source by default. A seeded
random.Random can be passed for reproducible orders.
"""

from __future__ import annotations
import random
from typing import Sequence, TypeVar

T = TypeVar("T")

_system_random = random.SystemRandom()


def shuffle(cards: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a new, uniformly shuffled list. Never mutates the input."""
    rng = rng or _system_random
    result = list(cards)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randrange(i + 1)
        result[i], result[j] = result[j], result[i]
    return result

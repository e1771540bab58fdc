from __future__ import annotations

import random
from collections import Counter
from itertools import accumulate
from typing import Sequence, TypeVar

T = TypeVar("T")


def weighted_choice(items: Sequence[T], frequencies: Sequence[float], rng=random) -> T:
    """Pick an item with probability given by the aligned ``frequencies``.

    Items are scanned in order and the one whose cumulative interval
    ``[previous, cumulative)`` contains a uniform draw is returned. If the
    cumulative sums fall short of 1.0 the last item with a positive weight
    absorbs the remainder.
    """
    if not items:
        raise ValueError("Cannot choose from an empty sequence")
    x = rng.random()
    previous = 0.0
    for item, cumulative in zip(items, accumulate(frequencies)):
        if previous <= x < cumulative:
            return item
        previous = cumulative
    # Drift: fall back to the last item that can be drawn at all.
    for item, weight in zip(reversed(items), reversed(frequencies)):
        if weight > 0:
            return item
    return items[-1]


def sample_distribution(items: Sequence[T], frequencies: Sequence[float], n: int = 1000, rng=random) -> dict[T, float]:
    """Empirical share of each item over ``n`` draws, for checking a distribution."""
    counts = Counter(weighted_choice(items, frequencies, rng) for _ in range(n))
    return {item: counts[item] / n for item in items if counts[item]}

"""Weighted random selection over histogram counts.

Counts are treated as unnormalized weights. We build a running total
(the cumulative weight array), draw a uniform value in [0, total), and
binary-search for the first position whose cumulative weight exceeds
the draw. Each key owns the half-open interval
[cumulative[i-1], cumulative[i]), so its chance of selection is
count / total.

Integer totals draw with randrange() so every unit of weight is equally
likely. Other counter types (float, Decimal, Fraction) scale random()
by the total, converting the draw into the counter type first so the
comparison stays within one numeric type.
"""
from __future__ import annotations

import bisect
import itertools
import random
from typing import Any, Iterable, Sequence


def cumulative_weights(weights: Iterable[Any]) -> list[Any]:
    """Running totals of *weights*: [w0, w0+w1, w0+w1+w2, ...]."""
    return list(itertools.accumulate(weights))


def uniform_draw(total: Any, rng: random.Random | None = None) -> Any:
    """Return a value uniformly distributed in [0, total).

    *total* must be positive. Uses the module-level generator when
    *rng* is None.
    """
    source: Any = random if rng is None else rng
    if isinstance(total, int):
        return source.randrange(total)
    return total * type(total)(source.random())


def weighted_index(cumulative: Sequence[Any], draw: Any) -> int:
    """Index of the first cumulative weight strictly greater than *draw*."""
    idx = bisect.bisect_right(cumulative, draw)
    # Rounding in non-integer counter types can push the draw onto the
    # final boundary.
    return min(idx, len(cumulative) - 1)

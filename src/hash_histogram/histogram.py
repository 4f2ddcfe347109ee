"""Hash-backed histogram over arbitrary hashable keys.

A HashHistogram maps each observed key to how many times it has been
seen. Internally it is a plain dict[K, C] where C is the counter type:
int by default, but float, Decimal and Fraction work too, which makes
fractional weights and exact normalization possible.

Invariant: every stored key has a strictly positive count. A key that
was never observed is absent, not present with zero. bump_by(key, 0)
therefore does nothing at all, and normalization drops any entry that
truncates to zero.

Ordering: the dict keeps insertion order and Python's sort is stable,
so keys with equal counts rank in the order they were first seen.
mode() follows the same rule, so mode() == ranking()[0] whenever the
histogram is non-empty.
"""
from __future__ import annotations

import json
import logging
import random
from decimal import Decimal
from fractions import Fraction
from typing import (
    Any,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    Mapping,
    TypeVar,
)

from hash_histogram.errors import (
    InvalidTargetError,
    NegativeCountError,
    ZeroTotalError,
)
from hash_histogram.sampling import (
    cumulative_weights,
    uniform_draw,
    weighted_index,
)

log = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
C = TypeVar("C")

# Counter types that to_json()/from_json() know how to round-trip.
_JSON_COUNTER_TYPES: dict[str, type] = {
    "int": int,
    "float": float,
    "Decimal": Decimal,
    "Fraction": Fraction,
}


def _freeze(value: Any) -> Any:
    """Turn JSON arrays back into tuples so they can be dict keys."""
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


class HashHistogram(Generic[K, C]):
    """Frequency counter mapping keys to positive counts.

    Parameters:
        values: Keys to count on construction (each bumped once).
        counter_type: Numeric type of the counts (default int). Its
            zero value is counter_type() and one unit is counter_type(1).
    """

    __slots__ = ("_counts", "_counter_type")

    def __init__(
        self,
        values: Iterable[K] = (),
        *,
        counter_type: type = int,
    ) -> None:
        self._counts: dict[K, C] = {}
        self._counter_type = counter_type
        self.extend(values)

    @classmethod
    def from_counts(
        cls,
        pairs: Iterable[tuple[K, C]] | Mapping[K, C],
        *,
        counter_type: type | None = None,
    ) -> HashHistogram[K, C]:
        """Build a histogram from (key, amount) pairs or a mapping.

        Repeated keys accumulate. When counter_type is None it is taken
        from the first amount, or int for an empty input.
        """
        if isinstance(pairs, Mapping):
            pairs = pairs.items()
        it = iter(pairs)
        first = next(it, None)
        if counter_type is None:
            counter_type = int if first is None else type(first[1])
        hist: HashHistogram[K, C] = cls(counter_type=counter_type)
        if first is not None:
            hist.bump_by(*first)
            hist.extend_counts(it)
        return hist

    @property
    def counter_type(self) -> type:
        return self._counter_type

    @property
    def zero(self) -> C:
        """The zero value of the counter type."""
        return self._counter_type()

    # ---- mutation --------------------------------------------------------

    def bump(self, key: K) -> None:
        """Count one more observation of *key*."""
        self.bump_by(key, self._counter_type(1))

    def bump_by(self, key: K, amount: C) -> None:
        """Add *amount* to the count of *key*.

        A zero amount is a no-op and never creates an entry. Negative
        amounts raise NegativeCountError.
        """
        if amount < 0:
            raise NegativeCountError(key, amount)
        updated = self._counts.get(key, self.zero) + amount
        if updated == 0:
            # only reachable for a zero amount on an absent key
            self._counts.pop(key, None)
        else:
            self._counts[key] = updated

    def extend(self, values: Iterable[K]) -> None:
        """Bump every key in *values* once."""
        for value in values:
            self.bump(value)

    def extend_counts(self, pairs: Iterable[tuple[K, C]]) -> None:
        """Apply bump_by for every (key, amount) pair."""
        for key, amount in pairs:
            self.bump_by(key, amount)

    def merge(self, other: HashHistogram[K, C]) -> None:
        """Add every count of *other* into this histogram.

        Merging is commutative and associative; an empty histogram is
        the identity. Both sides must share a counter type; an empty
        histogram takes on the counter type of whatever is merged into it.
        """
        if not other._counts:
            return
        if not self._counts:
            self._counter_type = other._counter_type
        elif other._counter_type is not self._counter_type:
            raise TypeError(
                f"Cannot merge histograms with different counter types: "
                f"{self._counter_type.__name__} vs {other._counter_type.__name__}"
            )
        # snapshot so that h.merge(h) doubles every count
        for key, amount in list(other._counts.items()):
            self.bump_by(key, amount)
        log.debug("merged %d keys, now %d keys", len(other), len(self))

    def normalize(self, target_total: C) -> None:
        """Rescale counts in place so they add up to *target_total*.

        Each count becomes count * target_total / total. When both the
        counts and the target are ints the division floors, so the new
        total can fall short of the target; entries that floor to zero
        are removed. Int counts rescaled to a non-int target take on the
        target's type (normalize(1.0) yields float probabilities).

        Raises InvalidTargetError for a negative or NaN target and
        ZeroTotalError when the histogram is empty. Neither leaves the
        histogram modified.
        """
        if not target_total >= 0:
            raise InvalidTargetError(target_total)
        total = self.total_count()
        if total == 0:
            raise ZeroTotalError(target_total)

        integral = isinstance(total, int) and isinstance(target_total, int)
        rescaled: dict[K, C] = {}
        for key, value in self._counts.items():
            if integral:
                new_value = value * target_total // total
            else:
                new_value = value * target_total / total
            if new_value > 0:
                rescaled[key] = new_value

        dropped = len(self._counts) - len(rescaled)
        if dropped:
            log.debug("normalize(%r) dropped %d zero entries", target_total, dropped)
        self._counts = rescaled
        if self._counter_type is int and not integral:
            self._counter_type = type(target_total)

    def normalized(self, target_total: C) -> HashHistogram[K, C]:
        """Return a normalized copy, leaving this histogram unchanged."""
        result = self.copy()
        result.normalize(target_total)
        return result

    def copy(self) -> HashHistogram[K, C]:
        result: HashHistogram[K, C] = type(self)(counter_type=self._counter_type)
        result._counts = dict(self._counts)
        return result

    # ---- queries ---------------------------------------------------------

    def count(self, key: K) -> C:
        """Count for *key*, or zero if it was never observed."""
        return self._counts.get(key, self.zero)

    def total_count(self) -> C:
        return sum(self._counts.values(), self.zero)

    def counts(self) -> Iterator[tuple[K, C]]:
        """(key, count) pairs in first-seen order."""
        return iter(self._counts.items())

    def values(self) -> Iterator[C]:
        return iter(self._counts.values())

    def keys(self) -> Iterator[K]:
        return iter(self._counts)

    def all_labels(self) -> set[K]:
        return set(self._counts)

    def ranking(self) -> list[K]:
        """Keys by descending count; ties keep first-seen order."""
        return [key for key, _ in self.ranking_with_counts()]

    def ranking_with_counts(self) -> list[tuple[K, C]]:
        # reverse=True keeps the sort stable for equal counts
        return sorted(self._counts.items(), key=lambda kc: kc[1], reverse=True)

    def mode(self) -> K | None:
        """Key with the largest count, or None if the histogram is empty.

        Ties go to the key seen first.
        """
        if not self._counts:
            return None
        return max(self._counts, key=self._counts.__getitem__)

    def pick_random_key(self, rng: random.Random | None = None) -> K | None:
        """Pick a key with probability proportional to its count.

        Pass a seeded random.Random for reproducible draws; otherwise
        the module-level generator is used. Returns None when the
        histogram is empty.
        """
        if not self._counts:
            return None
        keys = list(self._counts)
        cumulative = cumulative_weights(self._counts.values())
        draw = uniform_draw(cumulative[-1], rng)
        return keys[weighted_index(cumulative, draw)]

    # ---- serialization ---------------------------------------------------

    def to_dict(self) -> dict[K, C]:
        return dict(self._counts)

    def to_json(self) -> str:
        """Serialize to a JSON string.

        Entries are stored as [key, count] pairs so that non-string keys
        (ints, tuples) survive the round trip. Decimal and Fraction
        counts are written as strings.
        """
        type_name = self._counter_type.__name__
        if _JSON_COUNTER_TYPES.get(type_name) is not self._counter_type:
            raise TypeError(f"Cannot serialize counter type {type_name} to JSON")
        as_text = self._counter_type in (Decimal, Fraction)
        return json.dumps({
            "counter_type": type_name,
            "counts": [
                [key, str(value) if as_text else value]
                for key, value in self._counts.items()
            ],
        })

    @classmethod
    def from_json(cls, data: str) -> HashHistogram[Any, Any]:
        obj = json.loads(data)
        if not isinstance(obj, dict) or not isinstance(obj.get("counts"), list):
            raise ValueError(
                "Histogram JSON must be an object with a \"counts\" array"
            )
        try:
            counter_type = _JSON_COUNTER_TYPES[obj.get("counter_type")]
        except (KeyError, TypeError):
            raise ValueError(
                f"Unknown counter type in JSON: {obj.get('counter_type')!r}"
            ) from None
        hist: HashHistogram[Any, Any] = cls(counter_type=counter_type)
        for entry in obj["counts"]:
            if not isinstance(entry, list) or len(entry) != 2:
                raise ValueError(
                    f"Histogram JSON entry must be a [key, count] pair: {entry!r}"
                )
            key, value = entry
            if isinstance(value, str):
                value = counter_type(value)
            hist.bump_by(_freeze(key), value)
        return hist

    # ---- dunder ----------------------------------------------------------

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, key: object) -> bool:
        return key in self._counts

    def __iter__(self) -> Iterator[K]:
        return iter(self._counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashHistogram):
            return NotImplemented
        return self._counts == other._counts

    __hash__ = None  # type: ignore[assignment]

    def __iadd__(self, other: object) -> HashHistogram[K, C]:
        if not isinstance(other, HashHistogram):
            return NotImplemented
        self.merge(other)
        return self

    def __add__(self, other: object) -> HashHistogram[K, C]:
        if not isinstance(other, HashHistogram):
            return NotImplemented
        result = self.copy()
        result.merge(other)
        return result

    def __str__(self) -> str:
        try:
            keys = sorted(self._counts)
        except TypeError:
            keys = list(self._counts)
        return "".join(f"{key}:{self._counts[key]}; " for key in keys)

    def __repr__(self) -> str:
        return (
            f"HashHistogram({self._counts!r}, "
            f"counter_type={self._counter_type.__name__})"
        )


def mode_values(values: Iterable[K]) -> K | None:
    """Most frequent element of *values*, or None for an empty input."""
    return HashHistogram(values).mode()

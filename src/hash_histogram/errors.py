"""Exceptions raised by histogram operations.

Queries on an empty histogram (mode, random pick) return None instead
of raising. These exceptions cover the cases where an operation cannot
produce a meaningful result at all.
"""
from __future__ import annotations


class HistogramError(ValueError):
    """Base class for histogram errors."""


class ZeroTotalError(HistogramError):
    """Raised when normalizing a histogram whose counts sum to zero."""

    def __init__(self, target_total: object) -> None:
        self.target_total = target_total
        super().__init__(
            f"Cannot normalize to {target_total!r}: histogram total is zero"
        )


class NegativeCountError(HistogramError):
    """Raised when bump_by() is given a negative amount."""

    def __init__(self, key: object, amount: object) -> None:
        self.key = key
        self.amount = amount
        super().__init__(f"Negative amount {amount!r} for key {key!r}")


class InvalidTargetError(HistogramError):
    """Raised when normalize() is given a negative or NaN target."""

    def __init__(self, target_total: object) -> None:
        self.target_total = target_total
        super().__init__(
            f"Cannot normalize to {target_total!r}: target must be non-negative"
        )

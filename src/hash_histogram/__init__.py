"""Hash-backed frequency histogram.

Public API:
    HashHistogram: key -> count mapping with ranking, mode, normalization,
        weighted random selection and additive merge
    mode_values: mode of an arbitrary iterable of keys
    HistogramError, ZeroTotalError, NegativeCountError, InvalidTargetError:
        error types
"""

from hash_histogram.errors import (
    HistogramError,
    InvalidTargetError,
    NegativeCountError,
    ZeroTotalError,
)
from hash_histogram.histogram import HashHistogram, mode_values

__all__ = [
    "HashHistogram",
    "HistogramError",
    "InvalidTargetError",
    "NegativeCountError",
    "ZeroTotalError",
    "mode_values",
]

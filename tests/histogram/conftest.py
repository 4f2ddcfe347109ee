"""Shared fixtures for histogram tests."""
from __future__ import annotations

import random

import pytest

from hash_histogram import HashHistogram

SEED = 42

LETTERS = ["a", "b", "a", "b", "c", "b", "a", "b"]


@pytest.fixture
def rng() -> random.Random:
    return random.Random(SEED)


@pytest.fixture
def letters() -> HashHistogram[str, int]:
    """a:3, b:4, c:1"""
    return HashHistogram(LETTERS)


@pytest.fixture
def empty() -> HashHistogram[str, int]:
    return HashHistogram()

"""Shared test fixtures."""

from __future__ import annotations

import pytest

from sfc4q.curve.hilbert import HilbertStrategy
from sfc4q.curve.morton import MortonStrategy


# Integer and half levels small enough to walk exhaustively
INTEGER_LEVELS = [0, 1, 2, 3, 4, 5]
HALF_LEVELS = [0.5, 1.5, 2.5, 3.5, 4.5]
ALL_LEVELS = sorted(INTEGER_LEVELS + HALF_LEVELS)

HIERARCHICAL_BASES = ["4h", "8h", "16h"]
PLAIN_BASES = ["4js", "8js", "16js", "32hex", "32nvu", "32rfc", "32ghs", "64url"]

# Bit strings of assorted lengths, including odd ones and leading zeros
BIT_STRINGS = [
    "0",
    "1",
    "00",
    "01",
    "011",
    "0001",
    "10110",
    "000000",
    "1111111",
    "01011010",
    "101101110",
    "0000111100001",
    "110010101111000011",
]


@pytest.fixture
def morton() -> MortonStrategy:
    return MortonStrategy()


@pytest.fixture
def hilbert() -> HilbertStrategy:
    return HilbertStrategy()


@pytest.fixture(params=["morton", "hilbert"])
def strategy(request):
    return MortonStrategy() if request.param == "morton" else HilbertStrategy()

"""Tests for the Hilbert strategy."""

import numpy as np
import pytest

from sfc4q.curve.hilbert import rotate
from sfc4q.errors import OutOfRange
from tests.conftest import INTEGER_LEVELS


def test_rotate():
    assert rotate(4, 1, 2, 0, 1) == (1, 2)
    assert rotate(4, 1, 2, 0, 0) == (2, 1)
    assert rotate(4, 1, 2, 1, 0) == (1, 2)
    assert rotate(4, 0, 3, 1, 0) == (0, 3)


def test_first_level(hilbert):
    assert [hilbert.decode(k, 2) for k in range(4)] == [(0, 0), (0, 1), (1, 1), (1, 0)]


def test_level_two_start(hilbert):
    assert [hilbert.decode(k, 4) for k in range(4)] == [(0, 0), (1, 0), (1, 1), (0, 1)]


def test_level_zero(hilbert):
    assert hilbert.decode(0, 1) == (0, 0)
    assert hilbert.encode(0, 0, 1) == 0


@pytest.mark.parametrize("level", INTEGER_LEVELS)
def test_bijection(hilbert, level):
    n = 2**level
    seen = set()
    for key in range(n * n):
        i, j = hilbert.decode(key, n)
        assert 0 <= i < n and 0 <= j < n
        assert hilbert.encode(i, j, n) == key
        seen.add((i, j))
    assert len(seen) == n * n


@pytest.mark.parametrize("level", [1, 2, 3, 4, 5])
def test_consecutive_cells_are_adjacent(hilbert, level):
    n = 2**level
    prev = hilbert.decode(0, n)
    for key in range(1, n * n):
        cur = hilbert.decode(key, n)
        assert abs(cur[0] - prev[0]) + abs(cur[1] - prev[1]) == 1
        prev = cur


def test_large_level(hilbert):
    n = 2**40
    key = n * n - 1
    assert hilbert.encode(*hilbert.decode(key, n), n) == key


def test_out_of_range(hilbert):
    with pytest.raises(OutOfRange):
        hilbert.decode(16, 4)
    with pytest.raises(OutOfRange):
        hilbert.encode(4, 0, 4)
    with pytest.raises(OutOfRange):
        hilbert.decode_array(np.zeros(1, dtype=np.uint64), 2**33)


def test_strategy_flags(hilbert):
    assert hilbert.need_swap is True
    assert hilbert.max_level is None


@pytest.mark.parametrize("n", [1, 2, 8, 64])
def test_arrays_match_scalar(hilbert, n):
    keys = np.arange(n * n, dtype=np.uint64)
    i, j = hilbert.decode_array(keys, n)
    for k in range(n * n):
        assert (int(i[k]), int(j[k])) == hilbert.decode(k, n)
    assert np.array_equal(hilbert.encode_array(i, j, n), keys)


def test_arrays_full_width(hilbert):
    n = 2**32
    rng = np.random.default_rng(11)
    keys = rng.integers(0, 2**63, size=50, dtype=np.uint64)
    i, j = hilbert.decode_array(keys, n)
    for k, a, b in zip(keys, i, j):
        assert hilbert.decode(int(k), n) == (int(a), int(b))
    assert np.array_equal(hilbert.encode_array(i, j, n), keys)

"""Tests for the Morton (Z-order) strategy."""

import numpy as np
import pytest

from sfc4q.curve.morton import collapse_bits, spread_bits
from sfc4q.errors import OutOfRange
from tests.conftest import INTEGER_LEVELS


def test_spread_and_collapse():
    assert spread_bits(0b1011) == 0b1000101
    assert collapse_bits(0b1000101) == 0b1011
    assert spread_bits(0xFFFFFFFF) == 0x5555555555555555
    assert collapse_bits(0xFFFFFFFFFFFFFFFF) == 0xFFFFFFFF


def test_first_level(morton):
    assert morton.decode(0) == (0, 0)
    assert morton.decode(1) == (1, 0)
    assert morton.decode(2) == (0, 1)
    assert morton.decode(3) == (1, 1)


def test_level_two(morton):
    # 0110: i from bits 0 and 2, j from bits 1 and 3
    assert morton.decode(6) == (2, 1)
    assert morton.encode(2, 1) == 6
    assert morton.encode(3, 3) == 15


@pytest.mark.parametrize("level", INTEGER_LEVELS)
def test_bijection(morton, level):
    n = 2**level
    seen = set()
    for key in range(n * n):
        i, j = morton.decode(key, n)
        assert 0 <= i < n and 0 <= j < n
        assert morton.encode(i, j, n) == key
        seen.add((i, j))
    assert len(seen) == n * n


def test_full_width(morton):
    top = 2**32 - 1
    assert morton.encode(top, top) == 2**64 - 1
    assert morton.decode(2**64 - 1) == (top, top)
    assert morton.decode(0x5555555555555555) == (top, 0)


def test_out_of_range(morton):
    with pytest.raises(OutOfRange):
        morton.encode(2**32, 0)
    with pytest.raises(OutOfRange):
        morton.encode(-1, 0)
    with pytest.raises(OutOfRange):
        morton.decode(2**64)


def test_max_level(morton):
    assert morton.max_level == 32
    assert morton.need_swap is False


def test_arrays_match_scalar(morton):
    rng = np.random.default_rng(7)
    i = rng.integers(0, 2**32, size=200, dtype=np.uint64)
    j = rng.integers(0, 2**32, size=200, dtype=np.uint64)
    keys = morton.encode_array(i, j)
    assert keys.dtype == np.uint64
    for a, b, k in zip(i, j, keys):
        assert int(k) == morton.encode(int(a), int(b))

    di, dj = morton.decode_array(keys)
    assert np.array_equal(di, i)
    assert np.array_equal(dj, j)

"""Morton (Z-order) curve — bit interleaving of the two coordinates.

``i`` takes the even bit positions of the key and ``j`` the odd ones, so
within each base-4 digit the ``j`` bit is the more significant. Coordinates
of up to 32 bits pack into a 64-bit key.

References: "Interleave bits by Binary Magic Numbers",
http://graphics.stanford.edu/~seander/bithacks.html#InterleaveBMN
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from sfc4q.curve.registry import curve
from sfc4q.errors import OutOfRange

_COORD_BITS = 32
_KEY_BITS = 64

# (shift, mask) pairs from the widest gap down to adjacent bits
_SPREAD_STEPS = (
    (16, 0x0000FFFF0000FFFF),
    (8, 0x00FF00FF00FF00FF),
    (4, 0x0F0F0F0F0F0F0F0F),
    (2, 0x3333333333333333),
    (1, 0x5555555555555555),
)
# Narrowest gap first, ending on the low 32-bit word
_COLLAPSE_STEPS = (
    (1, 0x3333333333333333),
    (2, 0x0F0F0F0F0F0F0F0F),
    (4, 0x00FF00FF00FF00FF),
    (8, 0x0000FFFF0000FFFF),
    (16, 0x00000000FFFFFFFF),
)
_EVEN_BITS = 0x5555555555555555
_LOW_WORD = 0x00000000FFFFFFFF

_SPREAD_STEPS_U64 = tuple((np.uint64(s), np.uint64(m)) for s, m in _SPREAD_STEPS)
_COLLAPSE_STEPS_U64 = tuple((np.uint64(s), np.uint64(m)) for s, m in _COLLAPSE_STEPS)
_EVEN_BITS_U64 = np.uint64(_EVEN_BITS)
_LOW_WORD_U64 = np.uint64(_LOW_WORD)
_ONE_U64 = np.uint64(1)


def spread_bits(x: int) -> int:
    """Insert a zero bit after every bit of a 32-bit value: abcd -> 0a0b0c0d."""
    for shift, mask in _SPREAD_STEPS:
        x = (x | (x << shift)) & mask
    return x


def collapse_bits(x: int) -> int:
    """Inverse of :func:`spread_bits`; keeps the even bits of a 64-bit value."""
    x &= _EVEN_BITS
    for shift, mask in _COLLAPSE_STEPS:
        x = (x | (x >> shift)) & mask
    return x


@curve(name="morton", description="Z-order curve: bit interleaving, i on even bits, j on odd bits")
class MortonStrategy:
    name = "morton"
    need_swap = False
    max_level: int | None = _COORD_BITS

    def encode(self, i: int, j: int, n_ref_rows: int = 0) -> int:
        if not (0 <= i < 1 << _COORD_BITS and 0 <= j < 1 << _COORD_BITS):
            raise OutOfRange(
                f"Morton coordinates must fit in {_COORD_BITS} bits, got ({i}, {j})",
                context={"i": i, "j": j},
            )
        return spread_bits(i) | (spread_bits(j) << 1)

    def decode(self, bkey: int, n_ref_rows: int = 0) -> tuple[int, int]:
        if not 0 <= bkey < 1 << _KEY_BITS:
            raise OutOfRange(
                f"Morton keys must fit in {_KEY_BITS} bits, got {bkey}",
                context={"bkey": bkey},
            )
        return collapse_bits(bkey), collapse_bits(bkey >> 1)

    # --- numpy bulk forms ---

    def encode_array(
        self, i: NDArray[np.uint64], j: NDArray[np.uint64], n_ref_rows: int = 0
    ) -> NDArray[np.uint64]:
        x = _spread_array(np.asarray(i, dtype=np.uint64))
        y = _spread_array(np.asarray(j, dtype=np.uint64))
        return x | (y << _ONE_U64)

    def decode_array(
        self, bkeys: NDArray[np.uint64], n_ref_rows: int = 0
    ) -> tuple[NDArray[np.uint64], NDArray[np.uint64]]:
        keys = np.asarray(bkeys, dtype=np.uint64)
        return _collapse_array(keys), _collapse_array(keys >> _ONE_U64)


def _spread_array(x: NDArray[np.uint64]) -> NDArray[np.uint64]:
    x = x & _LOW_WORD_U64
    for shift, mask in _SPREAD_STEPS_U64:
        x = (x | (x << shift)) & mask
    return x


def _collapse_array(x: NDArray[np.uint64]) -> NDArray[np.uint64]:
    x = x & _EVEN_BITS_U64
    for shift, mask in _COLLAPSE_STEPS_U64:
        x = (x | (x >> shift)) & mask
    return x

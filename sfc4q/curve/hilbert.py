"""Hilbert curve — quadrant-recursive space-filling index.

Decode walks from the finest quadrant (s=1) up to the coarsest; encode walks
from the coarsest (s=n/2) down. Both apply the same rotate/reflect step, so
``encode(*decode(k, n), n) == k`` for every ``k < n*n``.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from sfc4q.curve.registry import curve
from sfc4q.errors import OutOfRange

# Bulk forms work on uint64 arrays
_ARRAY_MAX_LEVEL = 32


def rotate(s: int, i: int, j: int, rx: int, ry: int) -> tuple[int, int]:
    """Rotate/reflect a quadrant of side ``s``: reflect about s-1 when rx, then swap i and j."""
    if ry == 0:
        if rx == 1:
            i = s - 1 - i
            j = s - 1 - j
        i, j = j, i
    return i, j


@curve(name="hilbert", description="Hilbert curve: quadrant recursion with rotate/reflect")
class HilbertStrategy:
    name = "hilbert"
    need_swap = True
    max_level: int | None = None

    def decode(self, bkey: int, n_ref_rows: int) -> tuple[int, int]:
        """Convert Hilbert index ``bkey`` to (i, j) on an n_ref_rows x n_ref_rows grid."""
        if not 0 <= bkey < n_ref_rows * n_ref_rows:
            raise OutOfRange(
                f"Hilbert key {bkey} outside a {n_ref_rows}x{n_ref_rows} grid",
                context={"bkey": bkey, "n_ref_rows": n_ref_rows},
            )
        i = j = 0
        t = bkey
        s = 1
        while s < n_ref_rows:
            rx = 1 & (t >> 1)
            ry = 1 & (t ^ rx)
            i, j = rotate(s, i, j, rx, ry)
            i += s * rx
            j += s * ry
            t >>= 2
            s <<= 1
        return i, j

    def encode(self, i: int, j: int, n_ref_rows: int) -> int:
        """Convert (i, j) to the Hilbert index."""
        if not (0 <= i < n_ref_rows and 0 <= j < n_ref_rows):
            raise OutOfRange(
                f"coordinate ({i}, {j}) outside a {n_ref_rows}x{n_ref_rows} grid",
                context={"i": i, "j": j, "n_ref_rows": n_ref_rows},
            )
        d = 0
        s = n_ref_rows >> 1
        while s > 0:
            rx = 1 if (i & s) > 0 else 0
            ry = 1 if (j & s) > 0 else 0
            d += s * s * ((3 * rx) ^ ry)
            i, j = rotate(s, i, j, rx, ry)
            s >>= 1
        return d

    # --- numpy bulk forms ---

    def encode_array(
        self, i: NDArray[np.uint64], j: NDArray[np.uint64], n_ref_rows: int
    ) -> NDArray[np.uint64]:
        _check_array_grid(n_ref_rows)
        x = np.asarray(i, dtype=np.uint64).copy()
        y = np.asarray(j, dtype=np.uint64).copy()
        d = np.zeros(x.shape, dtype=np.uint64)
        s = n_ref_rows >> 1
        while s > 0:
            s64 = np.uint64(s)
            rx = ((x & s64) > 0).astype(np.uint64)
            ry = ((y & s64) > 0).astype(np.uint64)
            d += s64 * s64 * ((np.uint64(3) * rx) ^ ry)
            x, y = _rotate_array(s64, x, y, rx, ry)
            s >>= 1
        return d

    def decode_array(
        self, bkeys: NDArray[np.uint64], n_ref_rows: int
    ) -> tuple[NDArray[np.uint64], NDArray[np.uint64]]:
        _check_array_grid(n_ref_rows)
        t = np.asarray(bkeys, dtype=np.uint64).copy()
        x = np.zeros(t.shape, dtype=np.uint64)
        y = np.zeros(t.shape, dtype=np.uint64)
        one = np.uint64(1)
        s = 1
        while s < n_ref_rows:
            s64 = np.uint64(s)
            rx = one & (t >> one)
            ry = one & (t ^ rx)
            x, y = _rotate_array(s64, x, y, rx, ry)
            x += s64 * rx
            y += s64 * ry
            t >>= np.uint64(2)
            s <<= 1
        return x, y


def _rotate_array(
    s: np.uint64,
    x: NDArray[np.uint64],
    y: NDArray[np.uint64],
    rx: NDArray[np.uint64],
    ry: NDArray[np.uint64],
) -> tuple[NDArray[np.uint64], NDArray[np.uint64]]:
    """Vectorised :func:`rotate`; unsigned wrap-around keeps the low bits exact."""
    reflect = (ry == 0) & (rx == 1)
    swap = ry == 0
    last = s - np.uint64(1)
    x = np.where(reflect, last - x, x)
    y = np.where(reflect, last - y, y)
    return np.where(swap, y, x), np.where(swap, x, y)


def _check_array_grid(n_ref_rows: int) -> None:
    if n_ref_rows > 1 << _ARRAY_MAX_LEVEL:
        raise OutOfRange(
            f"bulk Hilbert forms support grids up to 2**{_ARRAY_MAX_LEVEL} rows, got {n_ref_rows}",
            context={"n_ref_rows": n_ref_rows},
        )

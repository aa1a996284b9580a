"""CurveGrid — grid constants of a (possibly half) level and key <-> (i, j) translation.

Concepts:

level   public hierarchical level, a multiple of 0.5 (0, 0.5, 1, 1.5, ...)
blevel  "blind" integer level used for bit-level work, ceil(level)
key     index along the public curve, in [0, n_keys)
bkey    index along the blind curve, in [0, n_bkeys); equals key unless is_half
(i, j)  blind-grid cell, each in [0, n_ref_rows); i left to right, j top to bottom

At a half level every public cell is the union of the two blind cells
``2*key`` and ``2*key + 1``, so public cells may be non-square.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from fractions import Fraction
from numbers import Integral, Real

import numpy as np
from numpy.typing import NDArray

from sfc4q.curve.registry import CurveStrategy, get_curve_registry
from sfc4q.errors import InvalidLevel, OutOfRange
from sfc4q.utils.bit_helpers import bit_length

logger = logging.getLogger(__name__)

Coordinate = tuple[int, int]


def _is_index(value: object) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def parse_level(level: float | int | Fraction | str) -> Fraction:
    """Validate a public level and return it as an exact multiple of 1/2."""
    if isinstance(level, bool) or not isinstance(level, (Real, str)):
        raise InvalidLevel(f"level must be a real number, got {level!r}", context={"level": repr(level)})
    try:
        exact = Fraction(level)
    except (ValueError, OverflowError):
        raise InvalidLevel(f"level must be a finite number, got {level!r}", context={"level": repr(level)}) from None
    if exact < 0 or (exact * 2).denominator != 1:
        raise InvalidLevel(
            f"level must be a non-negative multiple of 0.5, got {level!r}",
            context={"level": str(level)},
        )
    return exact


@dataclass(frozen=True)
class GridConstants:
    """Pure derivations of a level."""

    level: float
    blevel: int
    is_half: bool
    n_bkeys: int
    n_keys: int
    key_bits: int
    bkey_bits: int
    n_ref_rows: int

    @classmethod
    def for_level(cls, level: float | int | Fraction | str) -> GridConstants:
        exact = parse_level(level)
        blevel = math.ceil(exact)
        is_half = blevel != exact
        n_bkeys = 4**blevel
        n_keys = n_bkeys // 2 if is_half else n_bkeys
        return cls(
            level=float(exact),
            blevel=blevel,
            is_half=is_half,
            n_bkeys=n_bkeys,
            n_keys=n_keys,
            key_bits=bit_length(n_keys - 1),
            bkey_bits=bit_length(n_bkeys - 1),
            n_ref_rows=2**blevel,
        )


class CurveGrid:
    """A curve strategy bound to the grid of one level."""

    def __init__(self, level: float | int | Fraction | str, strategy: CurveStrategy) -> None:
        self.strategy = strategy
        self.configure(level)

    def configure(self, level: float | int | Fraction | str) -> CurveGrid:
        """Recompute all grid constants for ``level``."""
        constants = GridConstants.for_level(level)
        max_level = self.strategy.max_level
        if max_level is not None and constants.blevel > max_level:
            raise InvalidLevel(
                f"{self.strategy.name} supports levels up to {max_level}, got {level!r}",
                context={"level": str(level), "curve": self.strategy.name},
            )
        self.constants = constants
        logger.debug(
            "Configured %s grid: level %s (blevel %d, %d keys, %d bits)",
            self.strategy.name,
            constants.level,
            constants.blevel,
            constants.n_keys,
            constants.key_bits,
        )
        return self

    # --- Shortcuts to the constants ---

    @property
    def level(self) -> float:
        return self.constants.level

    @property
    def blevel(self) -> int:
        return self.constants.blevel

    @property
    def is_half(self) -> bool:
        return self.constants.is_half

    @property
    def n_keys(self) -> int:
        return self.constants.n_keys

    @property
    def n_bkeys(self) -> int:
        return self.constants.n_bkeys

    @property
    def key_bits(self) -> int:
        return self.constants.key_bits

    @property
    def bkey_bits(self) -> int:
        return self.constants.bkey_bits

    @property
    def n_ref_rows(self) -> int:
        return self.constants.n_ref_rows

    @property
    def need_swap(self) -> bool:
        return self.strategy.need_swap

    @property
    def curve_name(self) -> str:
        return self.strategy.name

    # --- Validation ---

    def check_key(self, key: int) -> None:
        if not 0 <= key < self.n_keys:
            raise OutOfRange(
                f"key {key} outside [0, {self.n_keys}) at level {self.level}",
                context={"key": key, "n_keys": self.n_keys, "level": self.level},
            )

    def check_bkey(self, bkey: int) -> None:
        if not 0 <= bkey < self.n_bkeys:
            raise OutOfRange(
                f"bkey {bkey} outside [0, {self.n_bkeys}) at blevel {self.blevel}",
                context={"bkey": bkey, "n_bkeys": self.n_bkeys, "blevel": self.blevel},
            )

    def contains(self, i: int, j: int) -> bool:
        """True for integer coordinates inside the blind grid."""
        if not (_is_index(i) and _is_index(j)):
            return False
        return 0 <= i < self.n_ref_rows and 0 <= j < self.n_ref_rows

    def check_coordinate(self, i: int, j: int) -> None:
        if not self.contains(i, j):
            raise OutOfRange(
                f"coordinate ({i}, {j}) outside a {self.n_ref_rows}x{self.n_ref_rows} grid",
                context={"i": i, "j": j, "n_ref_rows": self.n_ref_rows},
            )

    # --- Blind level ---

    def bkey_decode(self, bkey: int) -> Coordinate:
        self.check_bkey(bkey)
        return self.strategy.decode(bkey, self.n_ref_rows)

    def bkey_encode(self, i: int, j: int) -> int:
        self.check_coordinate(i, j)
        return self.strategy.encode(int(i), int(j), self.n_ref_rows)

    # --- Public level ---

    def key_decode(self, key: int) -> tuple[Coordinate, Coordinate | None]:
        """Cell(s) of ``key``: one coordinate, or the two blind cells of a half-level cell."""
        self.check_key(key)
        if not self.is_half:
            return self.strategy.decode(key, self.n_ref_rows), None
        bkey = 2 * key
        return (
            self.strategy.decode(bkey, self.n_ref_rows),
            self.strategy.decode(bkey + 1, self.n_ref_rows),
        )

    def key_encode(self, i: int, j: int) -> tuple[int, int | None]:
        """Blind key(s) of the public cell containing (i, j).

        At half levels the pair is snapped to its even member, so both blind
        cells of a public cell encode to the same ``(bkey1, bkey2)``.
        """
        bkey1 = self.bkey_encode(i, j)
        if not self.is_half:
            return bkey1, None
        key = bkey1 >> 1
        bkey1 = key << 1
        return bkey1, bkey1 + 1

    def key_to_bkeys(self, key: int) -> tuple[int, int | None]:
        self.check_key(key)
        if not self.is_half:
            return key, None
        return 2 * key, 2 * key + 1

    def bkey_to_key(self, bkey: int) -> int:
        self.check_bkey(bkey)
        return bkey >> 1 if self.is_half else bkey

    def key_of(self, i: int, j: int) -> int:
        """Public key of the cell containing (i, j)."""
        return self.bkey_to_key(self.bkey_encode(i, j))

    # --- Bulk ---

    def decode_all(self) -> NDArray[np.uint64]:
        """Every public cell in curve order.

        Shape ``(n_keys, 2)`` of (i, j) rows, or ``(n_keys, 2, 2)`` at half
        levels where ``[k, 0]`` and ``[k, 1]`` are the two blind cells of key k.
        """
        bkeys = np.arange(self.n_bkeys, dtype=np.uint64)
        i, j = self.strategy.decode_array(bkeys, self.n_ref_rows)
        cells = np.stack([i, j], axis=-1)
        if self.is_half:
            cells = cells.reshape(self.n_keys, 2, 2)
        return cells

    def __repr__(self) -> str:
        return f"CurveGrid(level={self.level}, curve={self.curve_name!r}, n_keys={self.n_keys})"


def configure(level: float | int | Fraction | str, curve: str = "morton") -> CurveGrid:
    """Build a grid of ``level`` for the curve registered as ``curve``."""
    return CurveGrid(level, get_curve_registry().get(curve))

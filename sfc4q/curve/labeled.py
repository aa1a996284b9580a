"""LabeledCurve — human-readable hierarchical cell identifiers on top of CurveGrid.

The current cell is held as a SizedInteger of ``key_bits`` (or ``bkey_bits``
for blind-level access). An optional fixed-width grid identifier ``id0`` is
prepended as the more significant part, making identifiers unique across
several independently configured grids. Setters return ``self``:

    lbl = LabeledCurve(2.5, MortonStrategy(), base="16h", id0=3, id0_bits=4)
    lbl.set_by_key(17).id_to_string()
    lbl.set_by_string("38H")
"""

from __future__ import annotations

import logging
from fractions import Fraction

from sfc4q.curve.grid import CurveGrid
from sfc4q.curve.registry import CurveStrategy, get_curve_registry
from sfc4q.errors import BitWidthExceeded, InvalidFormat, OutOfRange
from sfc4q.numeral.registry import get_numeral_registry
from sfc4q.numeral.sized_integer import SizedInteger

logger = logging.getLogger(__name__)


class LabeledCurve:
    def __init__(
        self,
        level: float | int | Fraction | str,
        strategy: CurveStrategy,
        base: str | int = "4h",
        id0: int | None = None,
        id0_bits: int | None = None,
    ) -> None:
        self.grid = CurveGrid(level, strategy)
        self.base = get_numeral_registry().resolve(base).label
        self._id0: SizedInteger | None = None
        self._key = SizedInteger.empty()
        self._blind = False
        if id0 is not None:
            self.set_id0(id0, id0_bits)

    @classmethod
    def configured(
        cls,
        level: float | int | Fraction | str,
        curve: str = "morton",
        base: str | int = "4h",
        id0: int | None = None,
        id0_bits: int | None = None,
    ) -> LabeledCurve:
        return cls(level, get_curve_registry().get(curve), base=base, id0=id0, id0_bits=id0_bits)

    def configure(self, level: float | int | Fraction | str) -> LabeledCurve:
        """Move to another level; the current cell no longer applies and is cleared."""
        self.grid.configure(level)
        self._key = SizedInteger.empty()
        return self

    def set_base(self, base: str | int) -> LabeledCurve:
        self.base = get_numeral_registry().resolve(base).label
        return self

    def set_id0(self, id0: int, id0_bits: int | None = None) -> LabeledCurve:
        """Grid identifier prefix; ``id0_bits`` fixes its width (natural width when None)."""
        self._id0 = SizedInteger.from_int(id0, id0_bits)
        self._key = SizedInteger.empty()
        logger.debug("Grid id0 set to %s", self._id0)
        return self

    @property
    def id0(self) -> int | None:
        return self._id0.value if self._id0 is not None else None

    @property
    def id0_bits(self) -> int:
        return self._id0.bits if self._id0 is not None else 0

    # --- Setters ---

    def set_by_key(self, key: int) -> LabeledCurve:
        self.grid.check_key(key)
        self._key = SizedInteger.from_int(key, self.grid.key_bits)
        self._blind = False
        return self

    def set_by_bkey(self, bkey: int) -> LabeledCurve:
        self.grid.check_bkey(bkey)
        self._key = SizedInteger.from_int(bkey, self.grid.bkey_bits)
        self._blind = True
        return self

    def set_id(self, cell_id: int) -> LabeledCurve:
        """Set from a full identifier (grid id bits followed by key bits)."""
        return self._set_full(SizedInteger.from_int(cell_id, self.grid.key_bits + self.id0_bits))

    def set_by_string(self, text: str, base: str | int | None = None) -> LabeledCurve:
        """Set from a label as produced by :meth:`id_to_string`.

        The label must carry exactly ``key_bits + id0_bits`` bits; a shorter
        ancestor code names a coarser cell and is rejected.
        """
        label = base or self.base
        full = SizedInteger.from_string(text, label)
        expected = self.grid.key_bits + self.id0_bits
        if full.bits > expected:
            raise BitWidthExceeded(
                f"{text!r} carries {full.bits} bits, cells at level {self.grid.level} take {expected}",
                context={"label": text, "bits": full.bits, "expected": expected},
            )
        if full.bits < expected:
            raise InvalidFormat(
                f"{text!r} carries {full.bits} bits, cells at level {self.grid.level} take {expected}",
                context={"label": text, "bits": full.bits, "expected": expected},
            )
        return self._set_full(full)

    def _set_full(self, full: SizedInteger) -> LabeledCurve:
        key = full.value & ((1 << self.grid.key_bits) - 1)
        prefix = full.value >> self.grid.key_bits
        if self._id0 is not None and prefix != self._id0.value:
            raise OutOfRange(
                f"identifier {full} belongs to grid {prefix}, not {self._id0.value}",
                context={"id": full.value, "id0": self._id0.value},
            )
        return self.set_by_key(key)

    def set_by_coordinate(self, i: int, j: int) -> LabeledCurve:
        """Set from a blind-grid cell; out-of-grid coordinates leave the state unchanged."""
        if not self.grid.contains(i, j):
            return self
        return self.set_by_key(self.grid.key_of(i, j))

    # --- State ---

    @property
    def key(self) -> SizedInteger:
        """The bare key (or bkey) without the grid prefix."""
        return self._key

    @property
    def id(self) -> SizedInteger:
        """Grid id prefix followed by the key, or the key alone."""
        if self._id0 is None or self._key.bits == 0:
            return self._key
        return self._id0.concat(self._key)

    @property
    def is_set(self) -> bool:
        return self._key.bits > 0

    def cells(self) -> tuple[tuple[int, int], tuple[int, int] | None]:
        """Blind-grid cell(s) of the current key."""
        if not self.is_set:
            raise ValueError("no cell selected; call one of the set_* methods first")
        if self._blind:
            return self.grid.bkey_decode(self._key.value), None
        return self.grid.key_decode(self._key.value)

    # --- Output ---

    def id_to_string(self, base: str | int | None = None) -> str:
        return self.id.to_string(base or self.base)

    def key_to_string(self, base: str | int | None = None) -> str:
        return self._key.to_string(base or self.base)

    def __repr__(self) -> str:
        return (
            f"LabeledCurve(level={self.grid.level}, curve={self.grid.curve_name!r}, "
            f"base={self.base!r}, id={self.id})"
        )

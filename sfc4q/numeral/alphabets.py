"""Alphabet definitions and the fixed catalogue of base labels.

The catalogue is the wire format for geocodes: any storage or transport
layer that exchanges cell identifiers must agree on these alphabets.

Hierarchical alphabets ("h" labels) carry ``2*base - 2`` symbols: the first
``base`` are full digits, the rest are short codes for a trailing group of
1..bits_per_digit-1 bits, so that ``0`` and ``00`` render differently.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from sfc4q.errors import UnsupportedBase
from sfc4q.utils.bit_helpers import ilog2, is_power_of_two

SUPPORTED_BASES = (2, 4, 8, 16, 32, 64)


@dataclass(frozen=True)
class AlphabetDef:
    """One registered base: label, alphabet and the structural pattern of its strings."""

    label: str
    alphabet: str
    base: int = 0  # 0 = len(alphabet)
    is_hierarchical: bool = False
    # Whole-string pattern; None builds "^[<alphabet>]+$"
    pattern: str | None = None
    # Registers str(base) as an alias of this label
    is_default: bool = False
    reference: str = ""
    bits_per_digit: int = field(init=False)
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        base = self.base or len(self.alphabet)
        if not is_power_of_two(base) or base not in SUPPORTED_BASES:
            raise UnsupportedBase(
                f"base {base} of {self.label!r} is not a supported power of two",
                context={"label": self.label, "base": base},
            )
        if len(set(self.alphabet)) != len(self.alphabet):
            raise ValueError(f"alphabet of {self.label!r} has repeated symbols")
        min_len = 2 * base - 2 if self.is_hierarchical else base
        if len(self.alphabet) < min_len:
            raise ValueError(
                f"alphabet of {self.label!r} needs at least {min_len} symbols, has {len(self.alphabet)}"
            )
        pattern = self.pattern or "^[" + re.escape(self.alphabet) + "]+$"
        object.__setattr__(self, "base", base)
        object.__setattr__(self, "bits_per_digit", ilog2(base))
        object.__setattr__(self, "pattern", pattern)
        object.__setattr__(self, "regex", re.compile(pattern))

    @property
    def digits(self) -> str:
        """The full-digit symbols."""
        return self.alphabet[: self.base]

    @property
    def short_codes(self) -> str:
        """Symbols reserved for trailing partial digits (hierarchical only)."""
        return self.alphabet[self.base :] if self.is_hierarchical else ""


CATALOGUE: tuple[AlphabetDef, ...] = (
    AlphabetDef(
        label="2h",
        alphabet="01",
        is_hierarchical=True,
        is_default=True,
        reference="Sized naturals, bit-string",
    ),
    AlphabetDef(
        label="4h",
        alphabet="0123GH",
        base=4,
        is_hierarchical=True,
        pattern="^([0123]*)([GH])?$",
        reference="Sized naturals",
    ),
    AlphabetDef(
        label="8h",
        alphabet="01234567GHJKLM",
        base=8,
        is_hierarchical=True,
        pattern="^([0-7]*)([GHJ-M])?$",
        reference="Sized naturals",
    ),
    AlphabetDef(
        label="16h",
        alphabet="0123456789abcdefGHJKLMNPQRSTVZ",
        base=16,
        is_hierarchical=True,
        pattern="^([0-9a-f]*)([GHJ-NP-TVZ])?$",
        reference="Sized naturals",
    ),
    AlphabetDef(label="4js", alphabet="0123", is_default=True, reference="ECMA-262"),
    AlphabetDef(label="8js", alphabet="01234567", is_default=True, reference="ECMA-262"),
    AlphabetDef(label="16js", alphabet="0123456789abcdef", is_default=True, reference="ECMA-262"),
    AlphabetDef(
        label="32hex",
        alphabet="0123456789abcdefghijklmnopqrstuv",
        is_default=True,
        reference="RFC 4648 sec. 7",
    ),
    AlphabetDef(
        label="32nvu",
        alphabet="0123456789BCDFGHJKLMNPQRSTUVWXYZ",
        reference="No vowels except U",
    ),
    AlphabetDef(label="32rfc", alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZ234567", reference="RFC 4648 sec. 6"),
    AlphabetDef(
        label="32ghs",
        alphabet="0123456789bcdefghjkmnpqrstuvwxyz",
        reference="Geohash (2008)",
    ),
    AlphabetDef(
        label="64url",
        alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_",
        is_default=True,
        reference="RFC 4648 sec. 5",
    ),
)

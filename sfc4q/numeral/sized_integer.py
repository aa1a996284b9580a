"""SizedInteger — an unsigned integer tagged with an explicit bit width.

Leading zeros are significant: ``(1, bits=2)`` renders ``01`` and
``(1, bits=4)`` renders ``0001``. Hierarchical bases keep that distinction
in their string codes by mapping a trailing partial digit to a short-code
symbol, so codes of nested cells share their full-digit prefix.

Instances are built through named constructors that all end in
``SizedInteger._checked``:

    SizedInteger.from_int(5, 4)               # [4,5]   -> "0101"
    SizedInteger.from_bit_string("011")       # [3,3]
    SizedInteger.from_string("1G", "4h")      # [3,2]   -> "010"
    SizedInteger.empty()                      # [0,0]   -> ""
"""

from __future__ import annotations

from dataclasses import dataclass

from sfc4q.errors import BitWidthExceeded, InvalidFormat, InvalidSymbol
from sfc4q.numeral.registry import NumeralRegistry, get_numeral_registry
from sfc4q.utils.bit_helpers import bit_length


@dataclass(frozen=True)
class SizedInteger:
    value: int = 0
    bits: int = 0

    def __post_init__(self) -> None:
        if self.value < 0 or self.bits < 0:
            raise ValueError(f"SizedInteger is unsigned, got value={self.value} bits={self.bits}")
        if self.value.bit_length() > self.bits:
            raise BitWidthExceeded(
                f"value {self.value} needs {self.value.bit_length()} bits, more than the declared {self.bits}",
                context={"value": self.value, "bits": self.bits},
            )

    # --- Constructors ---

    @classmethod
    def empty(cls) -> SizedInteger:
        return cls(0, 0)

    @classmethod
    def from_int(
        cls,
        value: int,
        bits: int | None = None,
        *,
        max_bits: int | None = None,
        truncate: bool = False,
    ) -> SizedInteger:
        """Wrap ``value`` with width ``bits`` (natural width when None)."""
        if value < 0:
            raise ValueError(f"SizedInteger is unsigned, got {value}")
        if bits is None:
            bits = bit_length(value)
        return cls._checked(value, bits, max_bits, truncate)

    @classmethod
    def from_bit_string(
        cls,
        bit_string: str,
        *,
        max_bits: int | None = None,
        truncate: bool = False,
    ) -> SizedInteger:
        if not bit_string:
            return cls.empty()
        bad = set(bit_string) - {"0", "1"}
        if bad:
            raise InvalidSymbol(
                f"bit string contains non-binary symbols {sorted(bad)}",
                context={"symbols": sorted(bad)},
            )
        return cls._checked(int(bit_string, 2), len(bit_string), max_bits, truncate)

    @classmethod
    def from_string(
        cls,
        text: str,
        base: str | int = "4h",
        *,
        max_bits: int | None = None,
        truncate: bool = False,
        registry: NumeralRegistry | None = None,
    ) -> SizedInteger:
        """Parse a code written in a registered base."""
        registry = registry or get_numeral_registry()
        alpha = registry.resolve(base)
        if not text:
            return cls.empty()

        bad = sorted(set(text) - set(alpha.alphabet))
        if bad:
            raise InvalidSymbol(
                f"symbols {bad} are not in the alphabet of base {alpha.label}",
                context={"base": alpha.label, "symbols": bad},
            )
        if alpha.regex.match(text) is None:
            raise InvalidFormat(
                f"{text!r} is not a well-formed base {alpha.label} code",
                context={"base": alpha.label, "pattern": alpha.pattern},
            )

        to_bits = registry.tables(alpha.label).to_bits
        bit_string = "".join(to_bits[c] for c in text)
        return cls.from_bit_string(bit_string, max_bits=max_bits, truncate=truncate)

    @classmethod
    def _checked(cls, value: int, bits: int, max_bits: int | None, truncate: bool) -> SizedInteger:
        """Common validation path: apply the caller's max-width policy."""
        if max_bits is not None and bits > max_bits:
            if not truncate:
                raise BitWidthExceeded(
                    f"bit width {bits} exceeds the limit {max_bits}",
                    context={"bits": bits, "max_bits": max_bits},
                )
            # Keep the most significant bits: the coarser ancestor cell
            value >>= bits - max_bits
            bits = max_bits
        return cls(value, bits)

    # --- Output ---

    def to_bit_string(self) -> str:
        if self.bits == 0:
            return ""
        return format(self.value, f"0{self.bits}b")

    def to_string(self, base: str | int = "4h", *, registry: NumeralRegistry | None = None) -> str:
        registry = registry or get_numeral_registry()
        alpha = registry.resolve(base)
        bit_string = self.to_bit_string()
        if alpha.base == 2:
            return bit_string

        width = alpha.bits_per_digit
        if not alpha.is_hierarchical and self.bits % width:
            raise InvalidFormat(
                f"{self.bits} bits cannot be written in base {alpha.label} "
                f"without a partial digit; use a hierarchical base",
                context={"base": alpha.label, "bits": self.bits},
            )

        to_symbol = registry.tables(alpha.label).to_symbol
        return "".join(to_symbol[bit_string[i : i + width]] for i in range(0, self.bits, width))

    @property
    def value_pair(self) -> tuple[int, int]:
        return (self.bits, self.value)

    def __str__(self) -> str:
        return f"[{self.bits},{self.value}]"

    # --- Same-width arithmetic ---

    def last(self) -> int:
        """Largest value representable in ``bits``."""
        return (1 << self.bits) - 1

    def next(self, cycle: bool = False) -> int | None:
        """Same-width successor; at the maximum, 0 when cycling else None."""
        if self.value != self.last():
            return self.value + 1
        return 0 if cycle else None

    # --- Hierarchy ---

    def concat(self, other: SizedInteger) -> SizedInteger:
        """``self`` as the more significant part, ``other`` appended after it."""
        return SizedInteger((self.value << other.bits) | other.value, self.bits + other.bits)

    def truncated(self, bits: int) -> SizedInteger:
        """Ancestor prefix of width ``bits``."""
        return SizedInteger._checked(self.value, self.bits, bits, truncate=True)

    def is_prefix_of(self, other: SizedInteger) -> bool:
        if self.bits > other.bits:
            return False
        return (other.value >> (other.bits - self.bits)) == self.value

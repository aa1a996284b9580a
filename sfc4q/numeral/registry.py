"""Numeral registry — base labels, aliases and lazily built translation tables.

Usage:
    reg = get_numeral_registry()
    alpha = reg.resolve("base16h")          # label normalisation + aliases
    table = reg.tables("16h")               # built once, then read-only
    table.to_symbol["0101"]                 # -> "5"
    table.to_bits["J"]                      # -> "00"

Tables are published with ``dict.setdefault``: two threads racing to build
the same label compute identical tables and the first one stored wins.
Readers only ever see a complete, immutable table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from sfc4q.errors import UnsupportedBase
from sfc4q.numeral.alphabets import CATALOGUE, AlphabetDef

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslationTable:
    label: str
    # symbol -> bit group ("0101"); short codes map to groups narrower than a digit
    to_bits: Mapping[str, str]
    # bit group -> symbol
    to_symbol: Mapping[str, str]


def build_table(alpha: AlphabetDef) -> TranslationTable:
    """Pure construction of the symbol <-> bit-group maps of one alphabet."""
    width = alpha.bits_per_digit
    to_bits: dict[str, str] = {}
    for value, symbol in enumerate(alpha.digits):
        to_bits[symbol] = format(value, f"0{width}b")

    if alpha.is_hierarchical:
        # Short codes in order: all 1-bit groups, then all 2-bit groups, ...
        pos = alpha.base
        for bits in range(1, width):
            for value in range(2**bits):
                to_bits[alpha.alphabet[pos]] = format(value, f"0{bits}b")
                pos += 1

    to_symbol = {group: symbol for symbol, group in to_bits.items()}
    return TranslationTable(
        label=alpha.label,
        to_bits=MappingProxyType(to_bits),
        to_symbol=MappingProxyType(to_symbol),
    )


def normalize_label(label: str | int) -> str:
    """``16`` -> ``"16"``, ``"Base16H"`` -> ``"16h"``."""
    text = str(label).strip().lower()
    if text.startswith("base"):
        text = text[4:]
    return text


class NumeralRegistry:
    """Catalogue of alphabets plus a per-label translation-table cache."""

    def __init__(self, alphabets: tuple[AlphabetDef, ...] = ()) -> None:
        self._alphabets: dict[str, AlphabetDef] = {}
        self._aliases: dict[str, str] = {}
        self._tables: dict[str, TranslationTable] = {}
        for alpha in alphabets:
            self.register(alpha)

    def register(self, alpha: AlphabetDef) -> None:
        label = normalize_label(alpha.label)
        if label in self._alphabets or label in self._aliases:
            raise ValueError(f"Duplicate base label: {label}")
        self._alphabets[label] = alpha
        if alpha.is_default:
            alias = str(alpha.base)
            if alias != label and alias not in self._alphabets:
                self._aliases.setdefault(alias, label)
        logger.debug("Registered base %s (base %d, %s)", label, alpha.base, alpha.reference or "-")

    def resolve(self, label: str | int) -> AlphabetDef:
        key = normalize_label(label)
        key = self._aliases.get(key, key)
        try:
            return self._alphabets[key]
        except KeyError:
            raise UnsupportedBase(
                f"base label {label!r} is not registered",
                context={"label": str(label)},
            ) from None

    def tables(self, label: str | int) -> TranslationTable:
        alpha = self.resolve(label)
        table = self._tables.get(alpha.label)
        if table is None:
            built = build_table(alpha)
            table = self._tables.setdefault(alpha.label, built)
            if table is built:
                logger.debug("Built translation table for %s (%d symbols)", alpha.label, len(built.to_bits))
        return table

    def labels(self) -> list[str]:
        return list(self._alphabets)

    def aliases(self) -> dict[str, str]:
        return dict(self._aliases)

    def all(self) -> list[AlphabetDef]:
        return list(self._alphabets.values())

    @property
    def count(self) -> int:
        return len(self._alphabets)


# Module-level singleton
_registry = NumeralRegistry(CATALOGUE)


def get_numeral_registry() -> NumeralRegistry:
    return _registry

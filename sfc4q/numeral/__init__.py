"""Sized integers and base/alphabet conversion, including hierarchical bases."""

from sfc4q.numeral.alphabets import CATALOGUE, AlphabetDef
from sfc4q.numeral.registry import NumeralRegistry, get_numeral_registry
from sfc4q.numeral.sized_integer import SizedInteger

__all__ = [
    "CATALOGUE",
    "AlphabetDef",
    "NumeralRegistry",
    "get_numeral_registry",
    "SizedInteger",
]

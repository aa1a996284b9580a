"""Curve registry — every curve strategy is a standalone class registered via decorator.

Usage:
    @curve(name="morton", description="Z-order bit interleaving")
    class MortonStrategy:
        need_swap = False
        max_level = 32

        def encode(self, i: int, j: int, n_ref_rows: int) -> int: ...
        def decode(self, bkey: int, n_ref_rows: int) -> tuple[int, int]: ...

Adding a new curve = creating one module with the decorator. Nothing else changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray

from sfc4q.errors import UnsupportedCurve

logger = logging.getLogger(__name__)


@runtime_checkable
class CurveStrategy(Protocol):
    """Bit-level key <-> (i, j) mapping of one space-filling curve."""

    name: str
    # Cells are not orientation-symmetric; non-square canvases need axis swaps
    need_swap: bool
    # Highest blind level the scalar forms support, None = unbounded
    max_level: int | None

    def encode(self, i: int, j: int, n_ref_rows: int) -> int: ...

    def decode(self, bkey: int, n_ref_rows: int) -> tuple[int, int]: ...

    def encode_array(
        self, i: NDArray[np.uint64], j: NDArray[np.uint64], n_ref_rows: int
    ) -> NDArray[np.uint64]: ...

    def decode_array(
        self, bkeys: NDArray[np.uint64], n_ref_rows: int
    ) -> tuple[NDArray[np.uint64], NDArray[np.uint64]]: ...


@dataclass
class CurveSpec:
    name: str
    factory: Callable[[], CurveStrategy]
    description: str = ""


class CurveRegistry:
    """Singleton registry of all curve strategies."""

    def __init__(self) -> None:
        self._curves: dict[str, CurveSpec] = {}

    def register(self, spec: CurveSpec) -> None:
        if spec.name in self._curves:
            raise ValueError(f"Duplicate curve name: {spec.name}")
        self._curves[spec.name] = spec
        logger.debug("Registered curve %s", spec.name)

    def get(self, name: str) -> CurveStrategy:
        """A fresh strategy instance for ``name`` (case-insensitive)."""
        spec = self._curves.get(name.lower())
        if spec is None:
            raise UnsupportedCurve(f"Unknown curve {name!r}; registered: {self.names()}")
        return spec.factory()

    def spec(self, name: str) -> CurveSpec:
        return self._curves[name.lower()]

    def names(self) -> list[str]:
        return sorted(self._curves)

    def all(self) -> list[CurveSpec]:
        return [self._curves[n] for n in self.names()]

    @property
    def count(self) -> int:
        return len(self._curves)


# Module-level singleton
_registry = CurveRegistry()


def get_curve_registry() -> CurveRegistry:
    return _registry


def curve(*, name: str, description: str = ""):
    """Decorator to register a curve strategy class."""

    def decorator(cls):
        cls.name = name
        _registry.register(CurveSpec(name=name, factory=cls, description=description))
        return cls

    return decorator

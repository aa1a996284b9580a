"""Generalized 4-partition space-filling curves (integer and half levels)."""

from sfc4q.curve.registry import CurveStrategy, curve, get_curve_registry
from sfc4q.curve.morton import MortonStrategy
from sfc4q.curve.hilbert import HilbertStrategy
from sfc4q.curve.grid import CurveGrid, GridConstants, configure
from sfc4q.curve.labeled import LabeledCurve
from sfc4q.curve.canvas import GridBox, preferred_label_base

__all__ = [
    "CurveStrategy",
    "curve",
    "get_curve_registry",
    "MortonStrategy",
    "HilbertStrategy",
    "CurveGrid",
    "GridConstants",
    "configure",
    "LabeledCurve",
    "GridBox",
    "preferred_label_base",
]

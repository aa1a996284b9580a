"""GridBox — projection of a curve grid onto a width x height box.

The unit square partitioned by the grid is scaled onto the box; (x, y) grow
right and down like SVG user space. Nothing here draws: renderers use these
numbers to place cells.
"""

from __future__ import annotations

from dataclasses import dataclass

from sfc4q.curve.grid import CurveGrid
from sfc4q.utils.bit_helpers import fixed_point_div


@dataclass
class GridBox:
    grid: CurveGrid
    box_width: float
    box_height: float | None = None

    def __post_init__(self) -> None:
        if self.box_width <= 0:
            raise ValueError(f"box_width must be positive, got {self.box_width}")
        if self.box_height is None:
            self.box_height = self.box_width
        elif self.box_height <= 0:
            raise ValueError(f"box_height must be positive, got {self.box_height}")

    @property
    def need_swap(self) -> bool:
        """True when the curve's cells are not orientation-symmetric and the box is not square."""
        return self.grid.need_swap and self.box_width != self.box_height

    @property
    def cell_width(self) -> float:
        return self.box_width / self.grid.n_ref_rows

    @property
    def cell_height(self) -> float:
        return self.box_height / self.grid.n_ref_rows

    @property
    def cell_area(self) -> float:
        """Area of one blind cell; constant over the grid."""
        return self.box_width * self.box_height / self.grid.n_bkeys

    @property
    def unit_cell_width(self) -> tuple[int, int]:
        """Blind cell side on the unit square as (integer, fraction * 2**64)."""
        return fixed_point_div(1, self.grid.n_ref_rows)

    def ij_to_xy(self, i: float, j: float, shift: float = 0.0) -> tuple[float, float]:
        """Top-left corner of cell (i, j), moved by ``shift`` cells on both axes."""
        return (i + shift) * self.cell_width, (j + shift) * self.cell_height

    def ij_to_xy_center(self, i: int, j: int) -> tuple[float, float]:
        return self.ij_to_xy(i, j, 0.5)

    def xy_to_ij(self, x: float, y: float) -> tuple[int, int]:
        if self.need_swap:
            # Axis-swap correction for non-square boxes is not provided
            raise NotImplementedError(f"xy_to_ij needs axis-swap correction for {self.grid.curve_name}")
        return int(x // self.cell_width), int(y // self.cell_height)

    def cell_rect(self, key: int) -> tuple[float, float, float, float]:
        """(x, y, width, height) of a public cell; half-level cells span two blind cells."""
        ij0, ij1 = self.grid.key_decode(key)
        x, y = self.ij_to_xy(*ij0)
        width, height = self.cell_width, self.cell_height
        if ij1 is not None:
            x1, y1 = self.ij_to_xy(*ij1)
            if x1 != x:
                width *= 2
            if y1 != y:
                height *= 2
            x, y = min(x, x1), min(y, y1)
        return x, y, width, height


def preferred_label_base(level: float, base: str | int | None = None) -> str:
    """Label base a renderer should show for ``level``.

    Decimal when asked for it, ``32ghs`` for base 32 on levels that are
    multiples of 2.5 (whole base-32 digits), else ``16h`` above level 2 and
    ``4h`` below.
    """
    requested = str(base).lower() if base is not None else "std"
    if requested in ("dec", "10"):
        return "dec"
    if requested == "32" and level % 2.5 == 0:
        return "32ghs"
    if requested == "16" or (requested != "4" and level > 2):
        return "16h"
    return "4h"

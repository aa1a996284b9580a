"""Bit helpers — bit lengths, power-of-two checks, fixed-point division. No curve imports."""

from __future__ import annotations


def bit_length(n: int) -> int:
    """Number of binary digits of a non-negative integer, counting 0 as one digit.

    Matches the width of ``format(n, "b")``, so ``bit_length(0) == 1``.
    """
    if n < 0:
        raise ValueError(f"bit_length expects a non-negative integer, got {n}")
    return max(n.bit_length(), 1)


def ilog2(n: int) -> int:
    """floor(log2(n)) for a positive integer."""
    if n <= 0:
        raise ValueError(f"ilog2 expects a positive integer, got {n}")
    return n.bit_length() - 1


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def fixed_point_div(numerator: int, denominator: int, power: int = 64) -> tuple[int, int]:
    """Integer division returning (integer part, fraction scaled by 2**power).

    Used for unit-square cell sizes: ``fixed_point_div(1, n_ref_rows)`` gives
    the cell width as a binary fixed-point fraction.
    """
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    if numerator < 0 or power <= 0:
        raise ValueError("numerator must be non-negative and power positive")
    integer, remainder = divmod(numerator, denominator)
    return integer, (remainder << power) // denominator

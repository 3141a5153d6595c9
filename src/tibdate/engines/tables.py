from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Sequence, Tuple, Union

Num = Union[int, Fraction]


def frac_turn(x: Fraction) -> Fraction:
    """Wraps a fractional turn to [0, 1)."""
    q = x.numerator // x.denominator
    return x - Fraction(q, 1)


def interpolate(x: Num, table: Sequence[int], half_period: int, full_period: int) -> Fraction:
    """
    Folded periodic lookup with linear interpolation between integer arguments.

    The table holds samples f(0..half_period); the full function satisfies
      f(2h - x) = f(x)      (symmetric about h)
      f(x + 2h) = -f(x)     (antisymmetric half-period)
    with period full_period = 4h. Arguments beyond the last sample clamp to it.
    """
    x = Fraction(x) % full_period

    sign = 1
    symmetry_point = 2 * half_period
    if x >= symmetry_point:
        sign = -1
        x -= symmetry_point

    if x > half_period:
        x = symmetry_point - x

    i = math.floor(x)
    if i >= len(table) - 1:
        return Fraction(sign * table[-1], 1)

    t = x - i
    v0 = Fraction(table[i], 1)
    v1 = Fraction(table[i + 1], 1)
    return sign * (v0 + t * (v1 - v0))


@dataclass(frozen=True)
class FoldedPeriodicTable:
    """
    Equation table given by its quarter-wave samples, as in Janson (7.17)-(7.21).

      quarter[i] = f(i) for i = 0..half_period
    """
    quarter: Tuple[int, ...]
    half_period: int

    def __post_init__(self) -> None:
        if self.half_period <= 0:
            raise ValueError("half_period must be positive")
        if len(self.quarter) != self.half_period + 1:
            raise ValueError("quarter must have length half_period + 1")

    @property
    def period(self) -> int:
        return 4 * self.half_period

    def eval_u(self, u: Num) -> Fraction:
        """Evaluate at argument u in grid units, returning table units."""
        return interpolate(u, self.quarter, self.half_period, self.period)

    def eval_turn(self, x_turn: Fraction) -> Fraction:
        """Evaluate at phase x in turns: u = period * frac(x)."""
        return self.eval_u(self.period * frac_turn(Fraction(x_turn)))


# Shared traditional tables (length = period/4 + 1)
MOON_TAB_QUARTER = (0, 5, 10, 15, 19, 22, 24, 25)
SUN_TAB_QUARTER = (0, 6, 10, 11)

MOON_TABLE = FoldedPeriodicTable(quarter=MOON_TAB_QUARTER, half_period=7)
SUN_TABLE = FoldedPeriodicTable(quarter=SUN_TAB_QUARTER, half_period=3)

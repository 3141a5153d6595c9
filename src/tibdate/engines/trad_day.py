"""
tibdate.engines.trad_day
------------------------
Traditional kinematic model. Maps a lunar day (n, d) -- lunar day d of
true month n -- to its true date, in local Julian Day units, using the
affine mean motions and the folded equation tables.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Any, Dict, Tuple

from .specs import EpochParams
from .tables import MOON_TABLE, SUN_TABLE, FoldedPeriodicTable, frac_turn


def normalize_nd(n: int, d: int) -> Tuple[int, int]:
    """Carry a lunar day outside 1..30 into the neighbouring month."""
    while d <= 0:
        n -= 1
        d += 30
    while d > 30:
        n += 1
        d -= 30
    return n, d


class TraditionalDayEngine:
    """
    Evaluates historical calendar kinematics for one EpochParams.
    """
    def __init__(
        self,
        p: EpochParams,
        *,
        moon_table: FoldedPeriodicTable = MOON_TABLE,
        sun_table: FoldedPeriodicTable = SUN_TABLE,
    ):
        self.p = p
        self.moon_table = moon_table
        self.sun_table = sun_table

    # ---------------------------------------------------------
    # Mean positions (Janson 7.1, 7.5, 7.11, 7.19)
    # ---------------------------------------------------------
    def mean_date(self, n: int, d: int) -> Fraction:
        return n * self.p.m1 + d * self.p.m2 + self.p.m0

    def mean_sun(self, n: int, d: int) -> Fraction:
        return frac_turn(n * self.p.s1 + d * self.p.s2 + self.p.s0)

    def moon_anomaly(self, n: int, d: int) -> Fraction:
        return frac_turn(n * self.p.a1 + d * self.p.a2 + self.p.a0)

    def sun_anomaly(self, n: int, d: int) -> Fraction:
        return frac_turn(self.mean_sun(n, d) - Fraction(1, 4))

    # ---------------------------------------------------------
    # Equations (table units; 60 units = 1 day)
    # ---------------------------------------------------------
    def moon_equ(self, n: int, d: int) -> Fraction:
        return self.moon_table.eval_turn(self.moon_anomaly(n, d))

    def sun_equ(self, n: int, d: int) -> Fraction:
        return self.sun_table.eval_turn(self.sun_anomaly(n, d))

    def true_date(self, n: int, d: int) -> Fraction:
        """True date (gza' dag) at the end of lunar day d of true month n (Janson 7.22)."""
        return self.mean_date(n, d) + self.moon_equ(n, d) / 60 - self.sun_equ(n, d) / 60

    def end_of_tithi(self, n: int, d: int) -> Fraction:
        """
        True date of the end of a lunar day, with d carried into 1..30 first.

        Day 0 of month n is day 30 of month n-1. The two are not numerically
        identical (30*a2 != a1), so every lookup of a label goes through here.
        """
        return self.true_date(*normalize_nd(n, d))

    def explain(self, n: int, d: int) -> Dict[str, Any]:
        return {
            "n": n,
            "d": d,
            "mean_date": self.mean_date(n, d),
            "mean_sun": self.mean_sun(n, d),
            "moon_anomaly": self.moon_anomaly(n, d),
            "sun_anomaly": self.sun_anomaly(n, d),
            "moon_equ": self.moon_equ(n, d),
            "sun_equ": self.sun_equ(n, d),
            "true_date": self.true_date(n, d),
        }

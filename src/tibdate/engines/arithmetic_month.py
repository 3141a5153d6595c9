"""
tibdate.engines.arithmetic_month
--------------------------------
Discrete arithmetic for mapping true month counts (n) to human calendar
labels (Year, Month, Leap status) and back (Janson, appendix C).

Y is the Tibetan year number, i.e. the Gregorian year in which it begins.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Tuple

from ..core.types import cycle_from_year, year_from_cycle
from .specs import P_TIB, Q_TIB, EpochParams


def _ceil_div(a: int, b: int) -> int:
    return -((-a) // b)


def amod12(x: int) -> int:
    """Arithmetic mod giving 1..12."""
    return ((x - 1) % 12) + 1


class ArithmeticMonthEngine:
    """
    Strictly handles discrete month arithmetic for one EpochParams.

    Standard rule: the first of two lunations sharing a label is the leap month.
    Bhutanese rule: the second one is.
    """
    def __init__(self, p: EpochParams):
        self.p = p

    @property
    def alpha(self):
        return self.p.alpha

    @property
    def beta(self) -> int:
        return self.p.beta

    @property
    def leap_labeling(self) -> str:
        return "second_is_leap" if self.p.bhutan_leap else "first_is_leap"

    # ---------------------------------------------------------
    # Year helpers
    # ---------------------------------------------------------

    def year_from_cycle(self, cycle: int, year: int) -> int:
        return year_from_cycle(cycle, year, rabjung_epoch=self.p.rabjung_epoch)

    def cycle_from_year(self, Y: int) -> Tuple[int, int]:
        return cycle_from_year(Y, rabjung_epoch=self.p.rabjung_epoch)

    # ---------------------------------------------------------
    # Forward: label -> true month count
    # ---------------------------------------------------------

    def mprime(self, Y: int, M: int) -> int:
        """Month count M' = 12*(Y - epoch_year) + M."""
        return 12 * (Y - self.p.epoch_year) + M

    def intercalation_index(self, Y: int, M: int) -> int:
        """(2*M' - beta) mod 65, in 0..64."""
        return (2 * self.mprime(Y, M) - self.beta) % P_TIB

    def is_leap_label(self, Y: int, M: int) -> bool:
        """True iff the label (Y, M) is repeated, i.e. one copy is a leap month (Janson C.27)."""
        return self.intercalation_index(Y, M) in (0, 1)

    def true_month_count(self, Y: int, M: int, is_leap: bool = False) -> int:
        """
        n = floor(67*(M' - alpha)/65)  (Janson C.25),
        moved to the leap copy when the label is repeated and is_leap is requested.
        """
        n = math.floor(Q_TIB * (self.mprime(Y, M) - self.alpha) / P_TIB)
        if is_leap and self.is_leap_label(Y, M):
            return n + (1 if self.p.bhutan_leap else -1)
        return n

    def get_lunations(self, Y: int, M: int) -> List[int]:
        """
        True month counts carrying the label (Y, M), in chronological order.
        """
        n = self.true_month_count(Y, M, False)
        if not self.is_leap_label(Y, M):
            return [n]
        n_leap = self.true_month_count(Y, M, True)
        return sorted((n, n_leap))

    def first_lunation(self, Y: int) -> int:
        """True month count of the very first month of Tibetan year Y."""
        return self.get_lunations(Y, 1)[0]

    # ---------------------------------------------------------
    # Inverse: true month count -> label
    # ---------------------------------------------------------

    def month_label_count(self, n: int) -> int:
        """x = ceil((65*n + beta)/67)  (Janson C.59); x = M' of the label carried by n."""
        return _ceil_div(P_TIB * n + self.beta, Q_TIB)

    def label_from_lunation(self, n: int) -> Tuple[int, int, bool]:
        """Returns (Y, M, is_leap) for true month count n."""
        x = self.month_label_count(n)
        M = amod12(x)
        Y = (x - M) // 12 + self.p.epoch_year
        neighbour = n - 1 if self.p.bhutan_leap else n + 1
        return Y, M, self.month_label_count(neighbour) == x

    def get_month_info(self, n: int) -> Dict[str, Any]:
        Y, M, is_leap = self.label_from_lunation(n)
        cycle, year = self.cycle_from_year(Y)
        return {
            "Y": Y,
            "cycle": cycle,
            "year": year,
            "month": M,
            "is_leap_month": is_leap,
            "linear_month": n - self.first_lunation(Y),
        }

    # ---------------------------------------------------------
    # Debug helpers
    # ---------------------------------------------------------

    def debug_label(self, Y: int, M: int) -> Dict[str, Any]:
        lunations = self.get_lunations(Y, M)
        out: Dict[str, Any] = {
            "label": {"Y": Y, "M": M},
            "Mprime": self.mprime(Y, M),
            "alpha": self.alpha,
            "beta": self.beta,
            "I": self.intercalation_index(Y, M),
            "trigger": self.is_leap_label(Y, M),
            "leap_labeling": self.leap_labeling,
            "n": self.true_month_count(Y, M, False),
        }
        if len(lunations) == 2:
            out["instances"] = {
                "leap": self.true_month_count(Y, M, True),
                "regular": self.true_month_count(Y, M, False),
            }
        else:
            out["instances"] = {"regular": lunations[0]}
        return out

    def debug_lunation(self, n: int) -> Dict[str, Any]:
        x = self.month_label_count(n)
        Y, M, is_leap = self.label_from_lunation(n)
        return {
            "n": n,
            "beta": self.beta,
            "x": x,
            "x_prev": self.month_label_count(n - 1),
            "x_next": self.month_label_count(n + 1),
            "decoded": {"Y": Y, "M": M, "is_leap_month": is_leap},
            "check": {
                "formula": "x = ceil((65*n + beta)/67)",
                "numerator": P_TIB * n + self.beta,
            },
        }

"""
tibdate.engines.calendar
------------------------
The Orchestrator. Binds the discrete month arithmetic and the continuous
day model together, resolving true dates into civil days (with skipped
and repeated labels) and handling the local Julian Day boundary.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from fractions import Fraction
from typing import Any, Dict, List, Optional, Tuple

from ..core.errors import InvalidLeapFlagError
from ..core.time import (
    NumT,
    datetime_to_jd,
    jd_to_datetime,
    jd_to_timestamp,
    jdn_to_date,
    timestamp_to_jd,
    to_fraction,
    ymd_to_jdn,
)
from ..core.types import DayInfo, TibetanDate
from .arithmetic_month import ArithmeticMonthEngine
from .specs import EpochParams
from .trad_day import TraditionalDayEngine, normalize_nd

logger = logging.getLogger(__name__)

# Upper bound on refinement steps of the initial (mean motion) guess.
MAX_REFINE_STEPS = 3


class CalendarEngine:
    """
    Translates Tibetan day labels to local Julian Day Numbers (JDN) and back.
    JDN here is the civil day number: floor of a local JD.
    """
    def __init__(
        self,
        params: EpochParams,
        month: ArithmeticMonthEngine,
        day: TraditionalDayEngine,
    ):
        self.params = params
        self.month = month
        self.day = day

    @property
    def name(self) -> str:
        return self.params.name

    # ---------------------------------------------------------
    # Local JD boundary
    # ---------------------------------------------------------

    def to_local(self, jd: NumT) -> Fraction:
        """UTC JD -> local JD whose floor is the civil day number."""
        return to_fraction(jd) + self.params.std_time_offset + self.params.day_start_offset

    def from_local(self, jd_local: NumT) -> Fraction:
        return to_fraction(jd_local) - self.params.std_time_offset - self.params.day_start_offset

    # ---------------------------------------------------------
    # Inverse: civil day number -> Tibetan date
    # ---------------------------------------------------------

    def resolve(self, jdn: int) -> Tuple[int, int, bool]:
        """
        Find the lunar day current at the start of civil day jdn.
        Returns (n, day, leap_day) with day in 1..30.
        """
        p = self.params
        elapsed = jdn - p.m0
        n = math.floor(elapsed / p.m1)
        day = math.floor((elapsed - n * p.m1) / p.m2)
        leap_day = False
        for _ in range(MAX_REFINE_STEPS):
            t = self.day.end_of_tithi(n, day)
            if t > jdn + 1:
                # the label spans this day and the next; this is the first of the two
                leap_day = True
                break
            if t > jdn:
                break
            day += 1
        else:
            logger.debug("%s: refinement of jdn=%d stopped at n=%d day=%d", self.name, jdn, n, day)
        n, day = normalize_nd(n, day)
        return n, day, leap_day

    def from_jdn(self, jdn: int) -> TibetanDate:
        n, day, leap_day = self.resolve(jdn)
        Y, M, is_leap = self.month.label_from_lunation(n)
        cycle, year = self.month.cycle_from_year(Y)
        if leap_day:
            logger.debug("%s: jdn=%d is the first of a repeated day %d", self.name, jdn, day)
        return TibetanDate(cycle, year, M, is_leap, day, leap_day, engine=self.name)

    def from_jd(self, jd: NumT) -> TibetanDate:
        """UTC Julian Date -> Tibetan date of the civil day containing it."""
        return self.from_jdn(math.floor(self.to_local(jd)))

    def from_gregorian(self, year: int, month: int, day: int) -> TibetanDate:
        return self.from_jdn(ymd_to_jdn(year, month, day))

    def from_date(self, d: date) -> TibetanDate:
        return self.from_gregorian(d.year, d.month, d.day)

    def from_datetime(self, dt: datetime) -> TibetanDate:
        return self.from_jd(datetime_to_jd(dt))

    def from_timestamp(self, ts: NumT) -> TibetanDate:
        return self.from_jd(timestamp_to_jd(ts))

    # ---------------------------------------------------------
    # Forward: Tibetan date -> civil day number
    # ---------------------------------------------------------

    def tibetan_year(self, t: TibetanDate, gregorian_year: Optional[int] = None) -> int:
        if gregorian_year is not None:
            return gregorian_year
        return self.month.year_from_cycle(t.cycle, t.year)

    def true_month_count(self, t: TibetanDate, gregorian_year: Optional[int] = None) -> int:
        return self.month.true_month_count(self.tibetan_year(t, gregorian_year), t.month, t.leap_month)

    def to_jdn(self, t: TibetanDate, gregorian_year: Optional[int] = None, *, strict: bool = False) -> int:
        """
        Civil day number of a Tibetan date (Janson section 8).

        A skipped label maps to the following civil day. A repeated label maps
        to its second day unless leap_day is set.
        """
        Y = self.tibetan_year(t, gregorian_year)
        if strict and t.leap_month and not self.month.is_leap_label(Y, t.month):
            raise InvalidLeapFlagError(f"Month {t.month} of year {Y} is not a leap month ({self.name}).")
        n = self.month.true_month_count(Y, t.month, t.leap_month)

        jdn = math.floor(self.day.end_of_tithi(n, t.day))
        prev_jdn = math.floor(self.day.end_of_tithi(n, t.day - 1))
        skipped = jdn == prev_jdn
        repeated = jdn == prev_jdn + 2

        if strict and t.leap_day and not repeated:
            raise InvalidLeapFlagError(f"Day {t.day} of month {t.month} ({Y}) is not repeated ({self.name}).")
        if repeated and t.leap_day:
            jdn -= 1
        if skipped:
            jdn += 1
        return jdn

    def to_gregorian(self, t: TibetanDate, gregorian_year: Optional[int] = None, *, strict: bool = False) -> date:
        return jdn_to_date(self.to_jdn(t, gregorian_year, strict=strict))

    def to_jd(self, t: TibetanDate, gregorian_year: Optional[int] = None, *, strict: bool = False) -> Fraction:
        """UTC JD of the start of the civil day (5am local mean time)."""
        return self.from_local(self.to_jdn(t, gregorian_year, strict=strict))

    def to_datetime(self, t: TibetanDate, gregorian_year: Optional[int] = None, *, strict: bool = False) -> datetime:
        return jd_to_datetime(self.to_jd(t, gregorian_year, strict=strict))

    def to_timestamp(self, t: TibetanDate, gregorian_year: Optional[int] = None, *, strict: bool = False) -> float:
        return jd_to_timestamp(self.to_jd(t, gregorian_year, strict=strict))

    # ---------------------------------------------------------
    # Month level
    # ---------------------------------------------------------

    def lunation(self, Y: int, M: int, is_leap: bool = False) -> int:
        """True month count of a month label; is_leap on a plain label is an error."""
        if is_leap and not self.month.is_leap_label(Y, M):
            raise InvalidLeapFlagError(f"Month {M} of year {Y} is not a leap month ({self.name}).")
        return self.month.true_month_count(Y, M, is_leap)

    def month_bounds_n(self, n: int) -> Tuple[int, int]:
        """(first, last) civil day numbers of true month n."""
        first = math.floor(self.day.end_of_tithi(n, 0)) - 1
        while self.resolve(first)[0] < n:
            first += 1
        last = math.floor(self.day.end_of_tithi(n, 30)) + 1
        while self.resolve(last)[0] > n:
            last -= 1
        return first, last

    def civil_month(self, n: int) -> List[DayInfo]:
        """Every civil day of true month n, in order."""
        first, last = self.month_bounds_n(n)
        return [self.day_info_jdn(j) for j in range(first, last + 1)]

    # ---------------------------------------------------------
    # Day level reports
    # ---------------------------------------------------------

    def day_info_jdn(self, jdn: int, *, debug: bool = False) -> DayInfo:
        n, day, leap_day = self.resolve(jdn)
        prev_n, prev_day, prev_leap = self.resolve(jdn - 1)
        Y, M, is_leap = self.month.label_from_lunation(n)
        cycle, year = self.month.cycle_from_year(Y)
        t = TibetanDate(cycle, year, M, is_leap, day, leap_day, engine=self.name)

        # second day of a repeated label: yesterday was its first
        duplicated = leap_day or prev_leap
        # a label was jumped over between yesterday and today
        skipped_before = (30 * n + day) - (30 * prev_n + prev_day) == 2

        dbg = None
        if debug:
            dbg = {
                "n": n,
                "day": day,
                "Y": Y,
                "true_date": self.day.end_of_tithi(n, day),
                "prev_true_date": self.day.end_of_tithi(n, day - 1),
                "jd_utc_start": self.from_local(jdn),
                "model": self.day.explain(n, day),
            }
        return DayInfo(
            civil_date=jdn_to_date(jdn),
            jdn=jdn,
            tibetan=t,
            status="duplicated" if duplicated else "normal",
            skipped_before=skipped_before,
            debug=dbg,
        )

    def day_info(self, d: date, *, debug: bool = False) -> DayInfo:
        return self.day_info_jdn(ymd_to_jdn(d.year, d.month, d.day), debug=debug)

    def explain(self, d: date) -> Dict[str, Any]:
        info = self.day_info(d, debug=True)
        return {
            "civil_date": info.civil_date,
            "jdn": info.jdn,
            "tibetan": info.tibetan,
            "status": info.status,
            "skipped_before": info.skipped_before,
            **(info.debug or {}),
        }

    def info(self) -> Dict[str, Any]:
        p = self.params
        return {
            "name": p.name,
            "epoch_year": p.epoch_year,
            "rabjung_epoch": p.rabjung_epoch,
            "alpha": p.alpha,
            "beta": p.beta,
            "leap_labeling": self.month.leap_labeling,
            "std_time_offset": p.std_time_offset,
            "day_start_offset": p.day_start_offset,
            "meta": dict(p.meta),
        }

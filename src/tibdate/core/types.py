from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Dict, Literal, Optional, Sequence, Tuple

from .errors import InvalidFieldError
from .time import NumT

# Gregorian year in which the first 60-year rab byung cycle began.
RABJUNG_EPOCH = 1027

DateTuple = Tuple[int, int, int, bool, int, bool]


def year_from_cycle(cycle: int, year: int, *, rabjung_epoch: int = RABJUNG_EPOCH) -> int:
    """(cycle, year-of-cycle) -> Tibetan year number Y (the Gregorian year in which it starts)."""
    return rabjung_epoch + (cycle - 1) * 60 + (year - 1)


def cycle_from_year(gyear: int, *, rabjung_epoch: int = RABJUNG_EPOCH) -> Tuple[int, int]:
    """Tibetan year number Y -> (cycle, year-of-cycle), both 1-based."""
    off = gyear - rabjung_epoch
    return off // 60 + 1, off % 60 + 1


def _check_int(name: str, value: Any, lo: int, hi: Optional[int]) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFieldError(f"{name} must be an int, got {value!r}")
    if value < lo or (hi is not None and value > hi):
        rng = f"{lo}..{hi}" if hi is not None else f">= {lo}"
        raise InvalidFieldError(f"{name} must be in {rng}, got {value}")


def _check_flag(name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise InvalidFieldError(f"{name} must be a bool, got {value!r}")


@dataclass(frozen=True)
class TibetanDate:
    """
    A day label in a Phugpa-family calendar.

    leap_month marks the intercalary copy of a repeated month label;
    leap_day marks the first of two consecutive civil days with the same label.
    """
    cycle: int
    year: int
    month: int
    leap_month: bool = False
    day: int = 1
    leap_day: bool = False
    engine: str = "phugpa"

    def __post_init__(self) -> None:
        _check_int("cycle", self.cycle, 1, None)
        _check_int("year", self.year, 1, 60)
        _check_int("month", self.month, 1, 12)
        _check_int("day", self.day, 1, 30)
        _check_flag("leap_month", self.leap_month)
        _check_flag("leap_day", self.leap_day)
        if not isinstance(self.engine, str) or not self.engine:
            raise InvalidFieldError(f"engine must be a non-empty str, got {self.engine!r}")

    # ---------------------------------------------------------
    # Construction
    # ---------------------------------------------------------

    @classmethod
    def from_fields(
        cls,
        cycle: int,
        year: int,
        month: int,
        leap_month: bool,
        day: int,
        leap_day: bool,
        *,
        engine: str = "phugpa",
    ) -> "TibetanDate":
        return cls(cycle, year, month, leap_month, day, leap_day, engine=engine)

    @classmethod
    def from_sequence(cls, seq: Sequence[Any], *, engine: str = "phugpa") -> "TibetanDate":
        """Build from [cycle, year, month, leap_month, day, leap_day]; flags are coerced with bool()."""
        if len(seq) != 6:
            raise InvalidFieldError(f"expected 6 fields, got {len(seq)}")
        cycle, year, month, leap_month, day, leap_day = seq
        return cls(cycle, year, month, bool(leap_month), day, bool(leap_day), engine=engine)

    @classmethod
    def copy_of(cls, other: "TibetanDate") -> "TibetanDate":
        return replace(other)

    def with_fields(
        self,
        cycle: int,
        year: int,
        month: int,
        leap_month: bool,
        day: int,
        leap_day: bool,
    ) -> "TibetanDate":
        """Return a date on the same engine with all six label fields replaced."""
        return replace(
            self,
            cycle=cycle,
            year=year,
            month=month,
            leap_month=leap_month,
            day=day,
            leap_day=leap_day,
        )

    def as_tuple(self) -> DateTuple:
        return (self.cycle, self.year, self.month, self.leap_month, self.day, self.leap_day)

    @property
    def gregorian_year(self) -> int:
        """Tibetan year number, counted from the rab byung epoch of this date's engine."""
        from ..api import get_engine
        return get_engine(self.engine).month.year_from_cycle(self.cycle, self.year)

    # ---------------------------------------------------------
    # Conversions (delegate to the engine registry)
    # ---------------------------------------------------------

    @classmethod
    def from_jd(cls, jd: NumT, *, engine: str = "phugpa") -> "TibetanDate":
        from ..api import from_jd
        return from_jd(jd, engine=engine)

    @classmethod
    def from_gregorian(cls, year: int, month: int, day: int, *, engine: str = "phugpa") -> "TibetanDate":
        from ..api import from_gregorian
        return from_gregorian(year, month, day, engine=engine)

    @classmethod
    def from_datetime(cls, dt: datetime, *, engine: str = "phugpa") -> "TibetanDate":
        from ..api import from_datetime
        return from_datetime(dt, engine=engine)

    @classmethod
    def from_timestamp(cls, ts: NumT, *, engine: str = "phugpa") -> "TibetanDate":
        from ..api import from_timestamp
        return from_timestamp(ts, engine=engine)

    def to_jdn(self, gregorian_year: Optional[int] = None, *, strict: bool = False) -> int:
        from ..api import to_jdn
        return to_jdn(self, gregorian_year=gregorian_year, strict=strict)

    def to_gregorian(self, gregorian_year: Optional[int] = None, *, strict: bool = False) -> date:
        from ..api import to_gregorian
        return to_gregorian(self, gregorian_year=gregorian_year, strict=strict)

    def to_datetime(self, gregorian_year: Optional[int] = None, *, strict: bool = False) -> datetime:
        from ..api import to_datetime
        return to_datetime(self, gregorian_year=gregorian_year, strict=strict)

    def to_timestamp(self, gregorian_year: Optional[int] = None, *, strict: bool = False) -> float:
        from ..api import to_timestamp
        return to_timestamp(self, gregorian_year=gregorian_year, strict=strict)


@dataclass(frozen=True)
class DayInfo:
    civil_date: date
    jdn: int
    tibetan: TibetanDate
    status: Literal["normal", "duplicated"]
    skipped_before: bool = False
    debug: Optional[Dict[str, Any]] = None

    @property
    def skipped_label(self) -> Optional[int]:
        """Lunar day jumped over just before this civil day; day 30 when today opens a month on day 1."""
        if not self.skipped_before:
            return None
        return (self.tibetan.day - 2) % 30 + 1

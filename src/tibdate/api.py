from __future__ import annotations

import math
from datetime import date, datetime
from fractions import Fraction
from typing import Any, Dict, List, Optional

from .core.engine import CalendarEngine, EngineRegistry
from .core.time import NumT, jdn_to_date
from .core.types import DayInfo, TibetanDate
from .engines.factory import make_engine as _make_engine
from .engines.specs import EpochParams

_registry: Optional[EngineRegistry] = None

def set_registry(reg: EngineRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> EngineRegistry:
    if _registry is None:
        raise RuntimeError("Engine registry not initialized")
    return _registry

def list_engines() -> List[str]:
    return _reg().list()

def engine_info(engine: str) -> Dict[str, Any]:
    return _reg().get(engine).info()

def get_engine(engine: str) -> CalendarEngine:
    return _reg().get(engine)

def make_engine(spec: EpochParams) -> CalendarEngine:
    return _make_engine(spec)

def register_engine(name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
    _reg().register(name, engine, overwrite=overwrite)

def _engine_for(t: TibetanDate, engine: Optional[str]) -> CalendarEngine:
    return _reg().get(engine if engine is not None else t.engine)

# ============================================================
# Conversions
# ============================================================

def from_jd(jd: NumT, *, engine: str = "phugpa") -> TibetanDate:
    """Tibetan date of the civil day containing the UTC Julian Date jd."""
    return _reg().get(engine).from_jd(jd)

def from_gregorian(year: int, month: int, day: int, *, engine: str = "phugpa") -> TibetanDate:
    return _reg().get(engine).from_gregorian(year, month, day)

def from_date(d: date, *, engine: str = "phugpa") -> TibetanDate:
    return _reg().get(engine).from_date(d)

def from_datetime(dt: datetime, *, engine: str = "phugpa") -> TibetanDate:
    return _reg().get(engine).from_datetime(dt)

def from_timestamp(ts: NumT, *, engine: str = "phugpa") -> TibetanDate:
    return _reg().get(engine).from_timestamp(ts)

def to_jdn(
    t: TibetanDate,
    *,
    gregorian_year: Optional[int] = None,
    strict: bool = False,
    engine: Optional[str] = None,
) -> int:
    """Local civil day number; engine defaults to the one the date was built with."""
    return _engine_for(t, engine).to_jdn(t, gregorian_year, strict=strict)

def to_gregorian(
    t: TibetanDate,
    *,
    gregorian_year: Optional[int] = None,
    strict: bool = False,
    engine: Optional[str] = None,
) -> date:
    return _engine_for(t, engine).to_gregorian(t, gregorian_year, strict=strict)

def to_datetime(
    t: TibetanDate,
    *,
    gregorian_year: Optional[int] = None,
    strict: bool = False,
    engine: Optional[str] = None,
) -> datetime:
    return _engine_for(t, engine).to_datetime(t, gregorian_year, strict=strict)

def to_timestamp(
    t: TibetanDate,
    *,
    gregorian_year: Optional[int] = None,
    strict: bool = False,
    engine: Optional[str] = None,
) -> float:
    return _engine_for(t, engine).to_timestamp(t, gregorian_year, strict=strict)

# ============================================================
# Day-level reports
# ============================================================

def day_info(d: date, *, engine: str = "phugpa", debug: bool = False) -> DayInfo:
    return _reg().get(engine).day_info(d, debug=debug)

def explain(d: date, *, engine: str = "phugpa") -> Dict[str, Any]:
    return _reg().get(engine).explain(d)

# ============================================================
# Month-level debug API
# ============================================================

def intercalation_index(Y: int, M: int, *, engine: str = "phugpa") -> int:
    return _reg().get(engine).month.intercalation_index(Y, M)

def month_info(Y: int, M: int, *, engine: str = "phugpa", debug: bool = False) -> Dict[str, Any]:
    eng = _reg().get(engine)
    out = eng.month.debug_label(Y, M)
    if debug:
        out["engine"] = eng.info()
    return out

def month_from_n(n: int, *, engine: str = "phugpa", debug: bool = False) -> Dict[str, Any]:
    eng = _reg().get(engine)
    out = eng.month.get_month_info(n)
    if debug:
        out["debug"] = eng.month.debug_lunation(n)
        out["engine"] = eng.info()
    return out

def months_in_year(Y: int, *, engine: str = "phugpa") -> List[Dict[str, Any]]:
    """All months of Tibetan year Y in chronological order (12 or 13 records)."""
    me = _reg().get(engine).month
    out = []
    for M in range(1, 13):
        trig = me.is_leap_label(Y, M)
        for n in me.get_lunations(Y, M):
            _, _, is_leap = me.label_from_lunation(n)
            out.append({
                "Y": Y, "M": M, "is_leap_month": is_leap, "n": n, "trigger": trig,
                "I": me.intercalation_index(Y, M),
            })
    return out

def days_in_month(Y: int, M: int, *, is_leap_month: bool = False, engine: str = "phugpa") -> List[Dict[str, Any]]:
    """Civil days of one Tibetan month with their lunar-day labels."""
    eng = _reg().get(engine)
    n = eng.lunation(Y, M, is_leap_month)

    rows = []
    for info in eng.civil_month(n):
        t = info.tibetan
        rows.append({
            "date": info.civil_date,
            "jdn": info.jdn,
            "tithi": t.day,
            "leap_day": t.leap_day,
            "repeated": info.status == "duplicated",
            "skipped_labels": [info.skipped_label] if info.skipped_before else [],
        })
    return rows

def true_date_dn(d: int, n: int, *, engine: str = "phugpa") -> Fraction:
    """True date (local JD units) at the end of lunar day d of true month n."""
    return _reg().get(engine).day.end_of_tithi(n, d)

def end_jd_dn(d: int, n: int, *, engine: str = "phugpa") -> int:
    """Civil day number in which lunar day d of true month n ends."""
    return math.floor(true_date_dn(d, n, engine=engine))

def civil_month_n(n: int, *, engine: str = "phugpa") -> List[Dict[str, Any]]:
    """Diagnostic: list civil day records for a specific lunation n."""
    eng = _reg().get(engine)
    out = []
    for info in eng.civil_month(n):
        out.append({
            "jdn": info.jdn,
            "label": info.tibetan.day,
            "repeated": info.status == "duplicated",
            "skipped": info.skipped_before,
            "date": info.civil_date,
        })
    return out

def month_bounds(Y: int, M: int, *, is_leap_month: bool = False, engine: str = "phugpa", as_date: bool = True) -> Dict[str, Any]:
    eng = _reg().get(engine)
    n = eng.lunation(Y, M, is_leap_month)
    first_jdn, last_jdn = eng.month_bounds_n(n)

    out: Dict[str, Any] = {"Y": Y, "M": M, "is_leap_month": is_leap_month, "n": n, "first_jdn": first_jdn, "last_jdn": last_jdn}
    if as_date:
        out["first_date"] = jdn_to_date(first_jdn)
        out["last_date"] = jdn_to_date(last_jdn)
    return out

def new_year_day(Y: int, *, engine: str = "phugpa", as_date: bool = True) -> Dict[str, Any]:
    """First civil day of Tibetan year Y (Losar / Tsagaan Sar)."""
    eng = _reg().get(engine)
    n1 = eng.month.first_lunation(Y)
    jdn, _ = eng.month_bounds_n(n1)
    Y_last, M_last, L_last = eng.month.label_from_lunation(n1 - 1)

    out: Dict[str, Any] = {
        "Y": Y,
        "jdn": jdn,
        "n": n1,
        "is_leap_month": eng.month.label_from_lunation(n1)[2],
        "prev_month": {"Y": Y_last, "M": M_last, "is_leap_month": L_last},
    }
    if as_date:
        out["date"] = jdn_to_date(jdn)
    return out

def _neighbour_month(Y: int, M: int, is_leap_month: bool, engine: str, step: int) -> Dict[str, Any]:
    eng = _reg().get(engine)
    n = eng.lunation(Y, M, is_leap_month) + step
    Y2, M2, L2 = eng.month.label_from_lunation(n)
    return {"Y": Y2, "M": M2, "is_leap_month": L2, "n": n}

def prev_month(Y: int, M: int, *, is_leap_month: bool = False, engine: str = "phugpa") -> Dict[str, Any]:
    return _neighbour_month(Y, M, is_leap_month, engine, -1)

def next_month(Y: int, M: int, *, is_leap_month: bool = False, engine: str = "phugpa") -> Dict[str, Any]:
    return _neighbour_month(Y, M, is_leap_month, engine, 1)

def first_day_of_month(Y: int, M: int, *, is_leap_month: bool = False, engine: str = "phugpa") -> date:
    b = month_bounds(Y, M, is_leap_month=is_leap_month, engine=engine)
    return b["first_date"]

def last_day_of_month(Y: int, M: int, *, is_leap_month: bool = False, engine: str = "phugpa") -> date:
    b = month_bounds(Y, M, is_leap_month=is_leap_month, engine=engine)
    return b["last_date"]

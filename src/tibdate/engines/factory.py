"""
tibdate.engines.factory
-----------------------
Transforms pure data specifications into live, executable Engine objects.
"""

from __future__ import annotations

from .arithmetic_month import ArithmeticMonthEngine
from .calendar import CalendarEngine
from .specs import EpochParams
from .trad_day import TraditionalDayEngine


def build_calendar_engine(spec: EpochParams) -> CalendarEngine:
    """Transforms an EpochParams record into a live CalendarEngine."""
    if not isinstance(spec, EpochParams):
        raise TypeError(f"Unknown spec type: {type(spec)}")

    # 1. Month layer: labels <-> true month count
    month_engine = ArithmeticMonthEngine(spec)

    # 2. Day layer: (n, d) -> true date
    day_engine = TraditionalDayEngine(spec)

    # 3. Orchestrate
    return CalendarEngine(spec, month=month_engine, day=day_engine)


def make_engine(spec: EpochParams) -> CalendarEngine:
    """The universal entry point."""
    return build_calendar_engine(spec)

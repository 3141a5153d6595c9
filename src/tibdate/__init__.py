"""tibdate public API.

Conversions between Gregorian dates / Julian Days and the Phugpa-family
Tibetan calendars (Phugpa, Mongolian, Bhutanese).
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    from_jd,
    from_gregorian,
    from_date,
    from_datetime,
    from_timestamp,
    to_jdn,
    to_gregorian,
    to_datetime,
    to_timestamp,
    day_info,
    explain,
    list_engines,
    engine_info,
    get_engine,
    make_engine,
    register_engine,
    intercalation_index,
    month_info,
    month_from_n,
    months_in_year,
    days_in_month,
    true_date_dn,
    end_jd_dn,
    civil_month_n,
    prev_month,
    next_month,
    month_bounds,
    new_year_day,
    first_day_of_month,
    last_day_of_month,
)
from .core.errors import InvalidFieldError, InvalidLeapFlagError, TibdateError
from .core.types import DayInfo, TibetanDate
from .engines.specs import ALL_SPECS, BHUTAN, MONGOL, PHUGPA, EpochParams

__all__ = [
    "from_jd",
    "from_gregorian",
    "from_date",
    "from_datetime",
    "from_timestamp",
    "to_jdn",
    "to_gregorian",
    "to_datetime",
    "to_timestamp",
    "day_info",
    "explain",
    "list_engines",
    "engine_info",
    "get_engine",
    "make_engine",
    "register_engine",
    "intercalation_index",
    "month_info",
    "month_from_n",
    "months_in_year",
    "days_in_month",
    "true_date_dn",
    "end_jd_dn",
    "civil_month_n",
    "prev_month",
    "next_month",
    "month_bounds",
    "new_year_day",
    "first_day_of_month",
    "last_day_of_month",
    "TibetanDate",
    "DayInfo",
    "EpochParams",
    "ALL_SPECS",
    "PHUGPA",
    "MONGOL",
    "BHUTAN",
    "TibdateError",
    "InvalidFieldError",
    "InvalidLeapFlagError",
]

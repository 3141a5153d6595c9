"""Diagnostics package.

Light-weight command line reports built on the public API. leap_months can
also draw a plot, which needs the optional "diagnostics" extras.
"""

__all__ = ["pretty_month", "new_years_table", "round_trip", "leap_months"]

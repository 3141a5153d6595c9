"""
New Year table with the shape of each year.

For every engine a cell shows the first civil day of the year, whether
lunar day 1 was skipped (*) or repeated (+), and the year's leap month.
"""

from __future__ import annotations

import argparse
from typing import Any, Dict, List, Optional

import tibdate


def year_summary(Y: int, engine: str) -> Dict[str, Any]:
    ny = tibdate.new_year_day(Y, engine=engine)
    first = tibdate.day_info(ny["date"], engine=engine)
    leap: List[int] = [m["M"] for m in tibdate.months_in_year(Y, engine=engine) if m["is_leap_month"]]

    if first.tibetan.day != 1:
        opening = "skipped"
    elif first.tibetan.leap_day:
        opening = "repeated"
    else:
        opening = "normal"

    return {
        "Y": Y,
        "date": ny["date"],
        "opening": opening,
        "months": 12 + len(leap),
        "leap_month": leap[0] if leap else None,
    }


_MARK = {"normal": "", "skipped": "*", "repeated": "+"}


def format_cell(s: Dict[str, Any], *, iso: bool = False) -> str:
    d = s["date"]
    out = d.isoformat() if iso else f"{d.month:02d}-{d.day:02d}"
    out += _MARK[s["opening"]]
    lm: Optional[int] = s["leap_month"]
    if lm is not None:
        out += f" L{lm}"
    return out


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="tibdate new-years",
        description="New Year day, day-1 status and leap month per year, side by side for several engines.",
    )
    p.add_argument("--from-year", type=int, default=2000)
    p.add_argument("--to-year", type=int, default=2030)
    p.add_argument("--engines", nargs="+", default=["phugpa", "mongol", "bhutan"])
    p.add_argument("--iso", action="store_true", help="full ISO dates instead of MM-DD")
    args = p.parse_args(argv)

    if args.to_year < args.from_year:
        raise SystemExit("--to-year must be >= --from-year")

    colw = [5] + [max(16 if args.iso else 11, len(e)) for e in args.engines]
    header = "  ".join(h.ljust(w) for h, w in zip(["Year"] + args.engines, colw))
    print(header)
    print("-" * len(header))

    leap_years = {e: 0 for e in args.engines}
    for Y in range(args.from_year, args.to_year + 1):
        cells = [str(Y).ljust(colw[0])]
        for eng, w in zip(args.engines, colw[1:]):
            s = year_summary(Y, eng)
            leap_years[eng] += s["leap_month"] is not None
            cells.append(format_cell(s, iso=args.iso).ljust(w))
        print("  ".join(cells).rstrip())

    print()
    print("*: day 1 skipped   +: day 1 repeated   L<m>: month m is doubled that year")
    print("leap years: " + ", ".join(f"{e}={n}" for e, n in leap_years.items()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

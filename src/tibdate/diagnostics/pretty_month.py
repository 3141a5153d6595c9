from __future__ import annotations

from datetime import date, timedelta
import calendar as pycal
import argparse

import tibdate


def dow_header() -> str:
    return "Mo     Tu     We     Th     Fr     Sa     Su"


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(dow_header())
    print("-" * len(dow_header()))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def to_weeks(first: date, cells: list[tuple[str, str]]) -> list[list[tuple[str, str]]]:
    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = [cell("", "")] * first.weekday()  # Monday=0
    for top, bot in cells:
        wk.append(cell(top, bot))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        wk += [cell("", "")] * (7 - len(wk))
        weeks.append(wk)
    return weeks


def lunar_month_calendar(engine: str, Y: int, M: int, is_leap: bool) -> None:
    b = tibdate.month_bounds(Y, M, is_leap_month=is_leap, engine=engine)
    d0 = b["first_date"]
    d1 = b["last_date"]

    cells = []
    d = d0
    while d <= d1:
        t = tibdate.from_date(d, engine=engine)
        top = f"{t.day:2d}{'*' if t.leap_day else ''}"
        bot = f"{d.month:02d}-{d.day:02d}"
        cells.append((top, bot))
        d += timedelta(days=1)

    leap_tag = "L" if is_leap else ""
    title = f"{engine} lunar month  Y={Y}  M={M}{leap_tag}   ({d0} .. {d1})"
    print_grid(title, to_weeks(d0, cells))


def gregorian_month_calendar(engine: str, gy: int, gm: int) -> None:
    first = date(gy, gm, 1)
    last = date(gy, gm, pycal.monthrange(gy, gm)[1])

    cells = []
    d = first
    while d <= last:
        t = tibdate.from_date(d, engine=engine)
        top = f"{d.day:2d}"
        leap_tag = "L" if t.leap_month else ""
        bot = f"{t.month:02d}{leap_tag}-{t.day:02d}"
        cells.append((top, bot))
        d += timedelta(days=1)

    title = f"{engine} Gregorian month  {gy}-{gm:02d}"
    print_grid(title, to_weeks(first, cells))


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a lunar-month calendar and/or a Gregorian-month calendar with paired labels."
    )
    p.add_argument("--engine", default="phugpa", help="phugpa|mongol|bhutan (default: phugpa)")

    p.add_argument("--lunar", nargs=2, type=int, metavar=("Y", "M"),
                   help="Lunar month to print: Y M (e.g. 2026 1)")
    p.add_argument("--leap", action="store_true",
                   help="If set, lunar month is the leap instance (only meaningful when the label repeats).")

    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"),
                   help="Gregorian month to print: GY GM (e.g. 2026 2)")

    args = p.parse_args(argv)

    if not args.lunar and not args.greg:
        lunar_month_calendar(args.engine, Y=2026, M=1, is_leap=False)
        gregorian_month_calendar(args.engine, gy=2026, gm=2)
        return 0

    if args.lunar:
        Y, M = args.lunar
        lunar_month_calendar(args.engine, Y=Y, M=M, is_leap=args.leap)

    if args.greg:
        gy, gm = args.greg
        gregorian_month_calendar(args.engine, gy=gy, gm=gm)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

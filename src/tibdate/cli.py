from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import os
import re
import sys
from datetime import date

from .core.errors import TibdateError


_DATE_RE = re.compile(r"^-?\d{1,4}-\d{2}-\d{2}$")

DEFAULT_ENGINE = os.environ.get("TIBDATE_ENGINE", "phugpa")


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _fmt_tib(t) -> str:
    month = f"{t.month}{'L' if t.leap_month else ''}"
    day = f"{t.day}{'L' if t.leap_day else ''}"
    return f"cycle {t.cycle}, year {t.year}, month {month}, day {day} ({t.engine})"


def cmd_day(argv: list[str]) -> int:
    import tibdate

    p = argparse.ArgumentParser(prog="tibdate day", description="Gregorian -> Tibetan day label")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--engine", default=DEFAULT_ENGINE)
    p.add_argument("--debug", action="store_true")
    args = p.parse_args(argv)

    info = tibdate.day_info(_parse_ymd(args.date), engine=args.engine, debug=args.debug)
    print(f"{info.civil_date.isoformat()}  {_fmt_tib(info.tibetan)}")
    if info.status == "duplicated":
        print("  repeated day")
    if info.skipped_before:
        print(f"  day {info.skipped_label} skipped")
    if args.debug:
        for k, v in (info.debug or {}).items():
            print(f"  {k}: {v}")
    return 0


def cmd_greg(argv: list[str]) -> int:
    import tibdate

    p = argparse.ArgumentParser(prog="tibdate greg", description="Tibetan day label -> Gregorian")
    p.add_argument("cycle", type=int)
    p.add_argument("year", type=int, help="year of the 60-year cycle (1..60)")
    p.add_argument("month", type=int)
    p.add_argument("day", type=int)
    p.add_argument("--leap-month", action="store_true")
    p.add_argument("--leap-day", action="store_true", help="first of two days with the same label")
    p.add_argument("--strict", action="store_true", help="reject leap flags on non-leap months/days")
    p.add_argument("--engine", default=DEFAULT_ENGINE)
    args = p.parse_args(argv)

    t = tibdate.TibetanDate(
        args.cycle, args.year, args.month, args.leap_month, args.day, args.leap_day, engine=args.engine
    )
    d = t.to_gregorian(strict=args.strict)
    print(f"{_fmt_tib(t)}  ->  {d.isoformat()}")
    return 0


def cmd_jd(argv: list[str]) -> int:
    import tibdate

    p = argparse.ArgumentParser(prog="tibdate jd", description="Julian Date (UTC) -> Tibetan day label")
    p.add_argument("jd", help="Julian Date, e.g. 2454150.5")
    p.add_argument("--engine", default=DEFAULT_ENGINE)
    args = p.parse_args(argv)

    from fractions import Fraction
    t = tibdate.from_jd(Fraction(args.jd), engine=args.engine)
    print(f"JD {args.jd}  {_fmt_tib(t)}")
    return 0


def cmd_month(argv: list[str]) -> int:
    import tibdate

    p = argparse.ArgumentParser(prog="tibdate month", description="Civil days of a Tibetan month")
    p.add_argument("Y", type=int, help="Tibetan year number (Gregorian year in which it begins)")
    p.add_argument("M", type=int, help="month 1..12")
    p.add_argument("--leap", action="store_true", help="the leap instance of a repeated month")
    p.add_argument("--engine", default=DEFAULT_ENGINE)
    args = p.parse_args(argv)

    rows = tibdate.days_in_month(args.Y, args.M, is_leap_month=args.leap, engine=args.engine)
    print(f"{args.engine}  Y={args.Y}  M={args.M}{'L' if args.leap else ''}")
    for r in rows:
        notes = []
        if r["repeated"]:
            notes.append("repeated")
        if r["skipped_labels"]:
            notes.append("skipped " + ",".join(str(x) for x in r["skipped_labels"]))
        print(f"  {r['date'].isoformat()}  {r['tithi']:2d}  {' '.join(notes)}".rstrip())
    return 0


def _dispatch(argv: list[str]) -> int:
    # Shorthand: `tibdate YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_day(argv)

    p = argparse.ArgumentParser(prog="tibdate", description="Tibetan calendar conversion CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Gregorian -> Tibetan day label", add_help=False)
    sub.add_parser("greg", help="Tibetan day label -> Gregorian", add_help=False)
    sub.add_parser("jd", help="Julian Date (UTC) -> Tibetan day label", add_help=False)
    sub.add_parser("month", help="Civil days of a Tibetan month", add_help=False)
    sub.add_parser("new-years", help="New Year day, day-1 status and leap month per year", add_help=False)

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["leap-months", "round-trip", "pretty-month"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    if args.cmd == "day":
        return cmd_day(rest)

    if args.cmd == "greg":
        return cmd_greg(rest)

    if args.cmd == "jd":
        return cmd_jd(rest)

    if args.cmd == "month":
        return cmd_month(rest)

    if args.cmd == "new-years":
        return _run_module_main("tibdate.diagnostics.new_years_table", rest)

    if args.cmd == "diag":
        tool_map = {
            "leap-months": "tibdate.diagnostics.leap_months",
            "round-trip": "tibdate.diagnostics.round_trip",
            "pretty-month": "tibdate.diagnostics.pretty_month",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # --log-level is global and may appear anywhere
    level = "WARNING"
    argv = list(argv)
    if "--log-level" in argv:
        i = argv.index("--log-level")
        if i + 1 >= len(argv):
            print("tibdate: error: --log-level needs a value", file=sys.stderr)
            return 2
        level = argv[i + 1].upper()
        del argv[i:i + 2]
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format="%(levelname)s %(name)s: %(message)s")

    try:
        return _dispatch(argv)
    except (TibdateError, KeyError, ValueError) as e:
        msg = e.args[0] if isinstance(e, KeyError) and e.args else e
        print(f"tibdate: error: {msg}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

import tibdate


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "tibdate[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "tibdate[diagnostics]"') from e


MARKERS = {"phugpa": ("o", 22, False), "mongol": ("o", 95, True), "bhutan": ("^", 90, True)}


def parse_engines(s: str) -> List[str]:
    out = [x.strip() for x in s.split(",") if x.strip()]
    if not (1 <= len(out) <= 3):
        raise SystemExit("--engines must contain 1 to 3 comma-separated engines")
    return out


def leap_grid(np, engine: str, start_year: int, end_year: int):
    """
    12 x (years) int array: 1 where (Y, M) is a repeated month label, else 0.
    """
    Z = np.zeros((12, end_year - start_year + 1), dtype=int)
    for Y in range(start_year, end_year + 1):
        for M in range(1, 13):
            if tibdate.month_info(Y, M, engine=engine)["trigger"]:
                Z[M - 1, Y - start_year] = 1
    return Z


def leap_points(np, engine: str, start_year: int, end_year: int) -> Tuple["np.ndarray", "np.ndarray"]:
    Z = leap_grid(np, engine, start_year, end_year)
    months, cols = np.nonzero(Z)
    return cols + start_year, months + 1


def print_table(np, engines: List[str], start_year: int, end_year: int) -> None:
    grids = {e: leap_grid(np, e, start_year, end_year) for e in engines}
    print("Year  " + "  ".join(e.ljust(7) for e in engines))
    for j, Y in enumerate(range(start_year, end_year + 1)):
        row = []
        for e in engines:
            ms = np.nonzero(grids[e][:, j])[0]
            row.append((str(int(ms[0]) + 1) if len(ms) else "-").ljust(7))
        print(f"{Y:<4}  " + "  ".join(row))


def plot_barcode(np, plt, engines: List[str], start_year: int, end_year: int, out: str, title: str) -> None:
    fig, ax = plt.subplots(figsize=(16, 3.6))
    ax.set_xlim(start_year - 0.5, end_year + 0.5)
    ax.set_ylim(0.5, 12.5)
    ax.tick_params(axis="both", which="both", length=0)
    ax.set_xlabel("Tibetan year number")
    ax.set_ylabel("Leap month label")

    for e in engines:
        marker, size, hollow = MARKERS.get(e, ("s", 60, True))
        x, m = leap_points(np, e, start_year, end_year)
        if hollow:
            ax.scatter(x, m, s=size, marker=marker, facecolors="none", edgecolors="0.15", label=e)
        else:
            ax.scatter(x, m, s=size, marker=marker, c="0.15", linewidths=0.0, label=e)

    ax.set_title(title)
    ax.legend(loc="center left", bbox_to_anchor=(1.01, 0.5), frameon=False)
    fig.tight_layout()
    fig.savefig(out, dpi=250)
    plt.close(fig)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Leap-month table (and optional barcode plot) across traditions.")
    p.add_argument("--start-year", type=int, default=1990)
    p.add_argument("--end-year", type=int, default=2030)
    p.add_argument("--engines", default="phugpa,mongol,bhutan", help="Comma list of 1-3 engines.")
    p.add_argument("--plot", default="", help="If given, save a barcode plot to this path (needs matplotlib).")
    p.add_argument("--title", default="Leap month pattern across traditions")
    args = p.parse_args(argv)

    if args.end_year < args.start_year:
        raise SystemExit("--end-year must be >= --start-year")

    np = _need_numpy()
    engines = parse_engines(args.engines)
    print_table(np, engines, args.start_year, args.end_year)

    if args.plot:
        plt = _need_matplotlib()
        plot_barcode(np, plt, engines, args.start_year, args.end_year, args.plot, args.title)
        print(f"Saved: {args.plot}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

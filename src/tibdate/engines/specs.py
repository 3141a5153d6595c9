from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from fractions import Fraction
from typing import Any, Dict

from ..core.types import RABJUNG_EPOCH


# ============================================================
# TRADITIONAL CONSTANTS
# ============================================================

# Shared month ratio: 65 lunations for every 67 month labels.
P_TIB = 65
Q_TIB = 67

# Shared mean motions for the Phugpa family
M1_TIB = Fraction(167025, 5656)
M2_TIB = Fraction(11135, 11312)
S1_TIB = Fraction(65, 804)
S2_TIB = Fraction(13, 4824)
A1_TIB = Fraction(253, 3528)
A2_STD = Fraction(1, 28)

# Civil day starts at 5am local mean time; JD starts at noon.
DAY_START_OFFSET = Fraction(-5 + 12, 24)


@dataclass(frozen=True)
class EpochParams:
    """
    Epoch constants of one calendar variant (Janson, "Tibetan calendar mathematics").

      mean date   = n*m1 + d*m2 + m0
      mean sun    = n*s1 + d*s2 + s0   (turns)
      moon anomaly= n*a1 + d*a2 + a0   (turns)

    p0 anchors the solar longitude used by the intercalation rule.
    """
    name: str

    m0: Fraction
    m1: Fraction
    m2: Fraction

    s0: Fraction
    s1: Fraction
    s2: Fraction

    a0: Fraction
    a1: Fraction
    a2: Fraction

    p0: Fraction

    epoch_year: int
    std_time_offset: Fraction
    day_start_offset: Fraction = DAY_START_OFFSET
    bhutan_leap: bool = False
    rabjung_epoch: int = RABJUNG_EPOCH
    meta: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name must be non-empty")
        if self.m1 <= 0 or self.m2 <= 0:
            raise ValueError("m1, m2 must be positive")

    @property
    def alpha(self) -> Fraction:
        """alpha = 12*(s0 - p0)  (Janson C.12)."""
        return 12 * (self.s0 - self.p0)

    @property
    def beta(self) -> int:
        """beta = ceil(67*alpha), shifted by 2 for the Bhutanese leap rule (Janson C.19, C.58)."""
        return math.ceil(Q_TIB * self.alpha) - (2 if self.bhutan_leap else 0)

    def tweak(self, **kwargs) -> "EpochParams":
        return replace(self, **kwargs)


# ============================================================
# HELPER FUNCTIONS
# ============================================================

def trad_epoch(
    *,
    name: str,
    m0: Fraction,
    s0: Fraction,
    a0: Fraction,
    p0: Fraction,
    epoch_year: int,
    std_time_offset: Fraction,
    bhutan_leap: bool = False,
    meta: Dict[str, Any] | None = None,
) -> EpochParams:
    return EpochParams(
        name=name,
        m0=m0,
        m1=M1_TIB,
        m2=M2_TIB,
        s0=s0,
        s1=S1_TIB,
        s2=S2_TIB,
        a0=a0,
        a1=A1_TIB,
        a2=A2_STD,
        p0=p0,
        epoch_year=epoch_year,
        std_time_offset=std_time_offset,
        bhutan_leap=bhutan_leap,
        meta=dict(meta or {}),
    )


# ============================================================
# TRADITIONAL ENGINE SPECIFICATIONS
# ============================================================

# ------------------------------------------------------------
# PHUGPA (E806, month 3)
# Lhasa mean time, UTC+6:04
# ------------------------------------------------------------
PHUGPA = trad_epoch(
    name="phugpa",
    m0=2015501 + Fraction(4783, 5656),
    s0=Fraction(743, 804),
    a0=Fraction(475, 3528),
    p0=Fraction(139, 180),
    epoch_year=806,
    std_time_offset=Fraction(6 * 60 + 4, 24 * 60),
    meta={"epoch": "E806", "tradition": "phugpa", "timezone": "LMT Lhasa"},
)

# ------------------------------------------------------------
# MONGOL (E1747)
# Ulaanbaatar time, UTC+8
# ------------------------------------------------------------
MONGOL = trad_epoch(
    name="mongol",
    m0=2359237 + Fraction(2603, 2828),
    s0=Fraction(397, 402),
    a0=Fraction(1523, 1764),
    p0=Fraction(209, 270),
    epoch_year=1747,
    std_time_offset=Fraction(8, 24),
    meta={"epoch": "E1747", "tradition": "mongol", "timezone": "ULAT"},
)

# ------------------------------------------------------------
# BHUTAN (E1754)
# Bhutan time, UTC+6
# NOTE: the second copy of a repeated month label is the leap month.
# ------------------------------------------------------------
BHUTAN = trad_epoch(
    name="bhutan",
    m0=2361807 + Fraction(52, 707),
    s0=1 + Fraction(1, 67),
    a0=Fraction(17, 147),
    p0=Fraction(31, 40),
    epoch_year=1754,
    std_time_offset=Fraction(6, 24),
    bhutan_leap=True,
    meta={"epoch": "E1754", "tradition": "bhutan", "timezone": "BTT", "leap_labeling": "second_is_leap"},
)


ALL_SPECS: Dict[str, EpochParams] = {
    "phugpa": PHUGPA,
    "mongol": MONGOL,
    "bhutan": BHUTAN,
}

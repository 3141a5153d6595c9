from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Protocol, Tuple

from .types import DayInfo, TibetanDate


class CalendarEngine(Protocol):
    name: str
    month: Any
    day: Any

    def info(self) -> Dict[str, Any]: ...
    def from_jdn(self, jdn: int) -> TibetanDate: ...
    def to_jdn(self, t: TibetanDate, gregorian_year: Optional[int] = None, *, strict: bool = False) -> int: ...
    def lunation(self, Y: int, M: int, is_leap: bool = False) -> int: ...
    def month_bounds_n(self, n: int) -> Tuple[int, int]: ...
    def day_info(self, d: date, *, debug: bool = False) -> DayInfo: ...


@dataclass
class EngineRegistry:
    _engines: Dict[str, CalendarEngine]

    def get(self, name: str) -> CalendarEngine:
        if name not in self._engines:
            raise KeyError(f"Unknown engine '{name}'. Available: {sorted(self._engines)}")
        return self._engines[name]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(self, name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Engine '{name}' already exists. Use overwrite=True to replace.")
        self._engines[name] = engine

"""
cache.py – Memoisation of rendered results.

Keys are quantised to 5 decimal places so that inputs which differ only by
float noise share an entry.  The cache is an optimisation only: a miss must
produce exactly the text a hit would have returned.
"""

from __future__ import annotations
from typing import NamedTuple, Optional

from airdensity.atmosphere import InputSet, PhysicalConstants
from airdensity.units import DisplayUnits

KEY_DECIMALS = 5


def _q(x: float) -> float:
    # + 0.0 folds -0.0 into 0.0
    return round(x, KEY_DECIMALS) + 0.0


class CacheKey(NamedTuple):
    altitude_m: float
    sea_level_temp_c: float
    sea_level_pressure_pa: float
    gravity: float
    gas_constant_r: float
    units: DisplayUnits

    @classmethod
    def build(cls, inputs: InputSet, constants: PhysicalConstants,
              units: DisplayUnits = DisplayUnits()) -> CacheKey:
        return cls(
            _q(inputs.altitude_m),
            _q(inputs.sea_level_temp_c),
            _q(inputs.sea_level_pressure_pa),
            _q(constants.gravity),
            _q(constants.gas_constant_r),
            units,
        )

    def __str__(self) -> str:
        u = self.units
        return (f"{self.altitude_m:.5f}_{self.sea_level_temp_c:.5f}_"
                f"{self.sea_level_pressure_pa:.5f}_{self.gravity:.5f}_"
                f"{self.gas_constant_r:.5f}"
                f"[{u.altitude.label},{u.temperature.label},{u.pressure.label}]")


class ResultCache:
    """Unbounded CacheKey → rendered text map.  Not thread-safe on its own."""

    def __init__(self):
        self._entries: dict[CacheKey, str] = {}

    def get(self, key: CacheKey) -> Optional[str]:
        return self._entries.get(key)

    def put(self, key: CacheKey, text: str) -> None:
        self._entries[key] = text

    def invalidate_all(self) -> int:
        """Drop every entry; return how many there were."""
        n = len(self._entries)
        self._entries.clear()
        return n

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key) -> bool:
        return key in self._entries

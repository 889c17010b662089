"""
units.py – Display-unit selectors and conversions to/from SI.

All conversions are plain linear or affine transforms.  The factors are the
ones the calculator has always used, so results do not drift:

    altitude     1 ft   = 0.3048 m
    temperature  °C     = (°F − 32) · 5/9
    pressure     1 inHg = 33.8639 hPa

Selector enums carry the same integer values as the persisted UI indices
(see ``airdensity.settings``).
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum

FEET_TO_METERS = 0.3048
INHG_TO_HPA = 33.8639
KELVIN_OFFSET = 273.15
PA_PER_HPA = 100.0


class AltitudeUnit(IntEnum):
    FEET = 0
    METERS = 1

    @property
    def label(self) -> str:
        return "Feet" if self is AltitudeUnit.FEET else "Meters"


class TemperatureUnit(IntEnum):
    CELSIUS = 0
    FAHRENHEIT = 1

    @property
    def label(self) -> str:
        return "°C" if self is TemperatureUnit.CELSIUS else "°F"


class PressureUnit(IntEnum):
    HPA = 0
    INHG = 1

    @property
    def label(self) -> str:
        return "hPa" if self is PressureUnit.HPA else "inHg"


class ModelKind(IntEnum):
    """Atmosphere model selector.  Both evaluate the extended ISA model."""
    ISA = 0
    EXTENDED_ISA = 1

    @property
    def label(self) -> str:
        return "ISA" if self is ModelKind.ISA else "Extended ISA"


@dataclass(frozen=True)
class DisplayUnits:
    """The units a user reads and types values in."""
    altitude: AltitudeUnit = AltitudeUnit.METERS
    temperature: TemperatureUnit = TemperatureUnit.CELSIUS
    pressure: PressureUnit = PressureUnit.HPA


def coerce_selector(value, enum_cls):
    """
    Return ``value`` as a member of ``enum_cls``, or None if it is unset.

    Accepts an enum member, its integer index, or its name (case-insensitive).
    Anything else, including an out-of-range index, counts as unset.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, int):
        try:
            return enum_cls(value)
        except ValueError:
            return None
    if isinstance(value, str):
        return enum_cls.__members__.get(value.strip().upper())
    return None


# ── Altitude ─────────────────────────────────────────────────────────

def feet_to_meters(ft: float) -> float:
    """h [m] = h [ft] · 0.3048"""
    return ft * FEET_TO_METERS


def meters_to_feet(m: float) -> float:
    """h [ft] = h [m] / 0.3048"""
    return m / FEET_TO_METERS


# ── Temperature ──────────────────────────────────────────────────────

def fahrenheit_to_celsius(f: float) -> float:
    """T [°C] = (T [°F] − 32) · 5/9"""
    return (f - 32.0) * 5.0 / 9.0


def celsius_to_fahrenheit(c: float) -> float:
    """T [°F] = T [°C] · 9/5 + 32"""
    return c * 9.0 / 5.0 + 32.0


def celsius_to_kelvin(c: float) -> float:
    return c + KELVIN_OFFSET


def kelvin_to_celsius(k: float) -> float:
    return k - KELVIN_OFFSET


# ── Pressure ─────────────────────────────────────────────────────────

def inhg_to_hpa(inhg: float) -> float:
    """p [hPa] = p [inHg] · 33.8639"""
    return inhg * INHG_TO_HPA


def hpa_to_inhg(hpa: float) -> float:
    """p [inHg] = p [hPa] / 33.8639"""
    return hpa / INHG_TO_HPA


def hpa_to_pa(hpa: float) -> float:
    return hpa * PA_PER_HPA


def pa_to_hpa(pa: float) -> float:
    return pa / PA_PER_HPA


# ── Unit-aware helpers ───────────────────────────────────────────────

def altitude_to_meters(value: float, unit: AltitudeUnit) -> float:
    return feet_to_meters(value) if unit is AltitudeUnit.FEET else value


def altitude_from_meters(m: float, unit: AltitudeUnit) -> float:
    return meters_to_feet(m) if unit is AltitudeUnit.FEET else m


def temperature_to_celsius(value: float, unit: TemperatureUnit) -> float:
    return fahrenheit_to_celsius(value) if unit is TemperatureUnit.FAHRENHEIT else value


def temperature_from_celsius(c: float, unit: TemperatureUnit) -> float:
    return celsius_to_fahrenheit(c) if unit is TemperatureUnit.FAHRENHEIT else c


def pressure_to_hpa(value: float, unit: PressureUnit) -> float:
    return inhg_to_hpa(value) if unit is PressureUnit.INHG else value


def pressure_from_hpa(hpa: float, unit: PressureUnit) -> float:
    return hpa_to_inhg(hpa) if unit is PressureUnit.INHG else hpa

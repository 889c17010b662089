"""
formatting.py – Render a CalculationResult in the user's display units.

Python's format specs always use '.' as the decimal separator, so the text
is identical under any locale.
"""

from __future__ import annotations

from airdensity.atmosphere import CalculationResult, InputSet
from airdensity.exceptions import UnselectedUnitError
from airdensity.units import (
    AltitudeUnit,
    DisplayUnits,
    PressureUnit,
    TemperatureUnit,
    altitude_from_meters,
    coerce_selector,
    pressure_from_hpa,
    temperature_from_celsius,
)

SEPARATOR = "-" * 26


def resolve_units(altitude_unit, temperature_unit, pressure_unit) -> DisplayUnits:
    """Build DisplayUnits from selectors; raise UnselectedUnitError if any is unset."""
    alt = coerce_selector(altitude_unit, AltitudeUnit)
    temp = coerce_selector(temperature_unit, TemperatureUnit)
    press = coerce_selector(pressure_unit, PressureUnit)
    if alt is None or temp is None or press is None:
        raise UnselectedUnitError("Error: Invalid unit selection.")
    return DisplayUnits(alt, temp, press)


def format_result(result: CalculationResult, inputs: InputSet,
                  units: DisplayUnits = DisplayUnits()) -> str:
    """
    Fixed-precision report.

    Altitude, temperature, pressure and percentages use 2 decimals, density 6,
    specific humidity 4.  Vapor pressure is always reported in hPa.
    """
    alt = altitude_from_meters(inputs.altitude_m, units.altitude)
    temp = temperature_from_celsius(result.temperature_c, units.temperature)
    press = pressure_from_hpa(result.pressure_hpa, units.pressure)

    lines = [
        f"At {alt:.2f} {units.altitude.label}:",
        SEPARATOR,
        f"Temperature = {temp:.2f} {units.temperature.label}",
        f"Pressure = {press:.2f} {units.pressure.label} "
        f"({result.percent_pressure:.2f}% of sea level)",
        f"Density = {result.density:.6f} kg/m³ "
        f"({result.percent_density:.2f}% of sea level)",
        f"Specific Humidity = {result.specific_humidity:.4f} g/kg",
        f"Vapor Pressure = {result.vapor_pressure_hpa:.2f} hPa",
    ]
    return "\n".join(lines)

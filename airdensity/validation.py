"""
validation.py – Turn raw user input into an SI ``InputSet``.

Hard failures come back as a ``Rejection`` and stop the pipeline before the
model runs.  Implausible-but-usable sea-level conditions produce at most one
``InputWarning`` per pass; a temperature warning takes precedence over a
pressure warning.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Optional, Union

from airdensity.atmosphere import InputSet, PhysicalConstants
from airdensity.exceptions import (
    AltitudeRangeError,
    AtmosphereError,
    InputParseError,
    InputWarning,
    MissingInputError,
    Rejection,
    UnselectedUnitError,
)
from airdensity.units import (
    AltitudeUnit,
    ModelKind,
    PressureUnit,
    TemperatureUnit,
    altitude_to_meters,
    coerce_selector,
    hpa_to_pa,
    pressure_to_hpa,
    temperature_to_celsius,
)

Number = Union[str, float, int, None]

ALTITUDE_MIN_M = -5000.0
ALTITUDE_MAX_M = 85000.0
TEMP_PLAUSIBLE_C = (-100.0, 100.0)
PRESSURE_PLAUSIBLE_HPA = (800.0, 1100.0)


@dataclass(frozen=True)
class ValidationResult:
    """Tagged outcome: exactly one of ``inputs`` / ``rejection`` is set."""
    inputs: Optional[InputSet] = None
    rejection: Optional[Rejection] = None
    warning: Optional[InputWarning] = None

    @property
    def ok(self) -> bool:
        return self.rejection is None


@dataclass(frozen=True)
class ConstantsValidation:
    constants: Optional[PhysicalConstants] = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _is_blank(value: Number) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def parse_number(value: Number) -> float:
    """
    Parse a number with a '.' decimal point regardless of locale.

    Raises ValueError for non-numeric or non-finite input.
    """
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    x = float(value.strip()) if isinstance(value, str) else float(value)
    if not math.isfinite(x):
        raise ValueError(f"not a finite number: {value!r}")
    return x


def _validate(altitude: Number, temperature: Number, pressure: Number,
              altitude_unit, temperature_unit, pressure_unit,
              model) -> tuple[InputSet, Optional[InputWarning]]:
    if _is_blank(altitude) or _is_blank(temperature) or _is_blank(pressure):
        raise MissingInputError(
            "Please enter values for Altitude, Temperature, and Pressure.")

    alt_u = coerce_selector(altitude_unit, AltitudeUnit)
    temp_u = coerce_selector(temperature_unit, TemperatureUnit)
    press_u = coerce_selector(pressure_unit, PressureUnit)
    model_k = coerce_selector(model, ModelKind)
    if None in (alt_u, temp_u, press_u, model_k):
        raise UnselectedUnitError("Please ensure unit and model selections are made.")

    values = {}
    for name, raw in (('altitude', altitude), ('temperature', temperature),
                      ('pressure', pressure)):
        try:
            values[name] = parse_number(raw)
        except (TypeError, ValueError):
            raise InputParseError(
                "Invalid numeric input detected. Please check values.", field=name)

    altitude_m = altitude_to_meters(values['altitude'], alt_u)
    temp_c = temperature_to_celsius(values['temperature'], temp_u)
    pressure_hpa = pressure_to_hpa(values['pressure'], press_u)

    if altitude_m < ALTITUDE_MIN_M or altitude_m > ALTITUDE_MAX_M:
        raise AltitudeRangeError(altitude_m)

    warning = None
    lo, hi = TEMP_PLAUSIBLE_C
    if temp_c < lo or temp_c > hi:
        warning = InputWarning(
            'temperature',
            "Sea-level temperature is outside the typical range (-100°C to 100°C).")
    lo, hi = PRESSURE_PLAUSIBLE_HPA
    if warning is None and (pressure_hpa < lo or pressure_hpa > hi):
        warning = InputWarning(
            'pressure',
            "Sea-level pressure is outside the typical range (800 hPa to 1100 hPa).")

    return InputSet(altitude_m, temp_c, hpa_to_pa(pressure_hpa)), warning


def validate_inputs(altitude: Number, temperature: Number, pressure: Number,
                    altitude_unit=AltitudeUnit.METERS,
                    temperature_unit=TemperatureUnit.CELSIUS,
                    pressure_unit=PressureUnit.HPA,
                    model=ModelKind.EXTENDED_ISA) -> ValidationResult:
    """
    Validate one request.

    Parameters
    ----------
    altitude, temperature, pressure : raw text or numbers, in display units
    *_unit, model                   : selectors (enum, index or name); None
                                      means the user has not chosen one

    Returns
    -------
    ValidationResult with the SI InputSet and at most one warning, or a
    Rejection (MissingInput, UnselectedUnit, ParseError, RangeError).
    """
    try:
        inputs, warning = _validate(altitude, temperature, pressure,
                                    altitude_unit, temperature_unit,
                                    pressure_unit, model)
    except AtmosphereError as err:
        return ValidationResult(rejection=err.to_rejection())
    return ValidationResult(inputs=inputs, warning=warning)


def validate_constants(gravity: Number, gas_constant: Number) -> ConstantsValidation:
    """Parse constant overrides; both must be strictly positive numbers."""
    errors = []
    parsed = {}
    for name, label, raw in (('gravity', 'Gravity', gravity),
                             ('gas_constant_r', 'Gas Constant', gas_constant)):
        try:
            x = parse_number(raw)
        except (TypeError, ValueError):
            x = None
        if x is None or x <= 0:
            errors.append(f"Invalid value for {label}. Must be a positive number.")
        else:
            parsed[name] = x
    if errors:
        return ConstantsValidation(errors=errors)
    return ConstantsValidation(constants=PhysicalConstants(**parsed))

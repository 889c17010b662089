"""
atmosphere.py – Extended ISA (International Standard Atmosphere) model.

Provides temperature, pressure, density and a humidity estimate at an
altitude from user-supplied sea-level conditions.  Uses the standard
7-layer piecewise-linear temperature model up to the 84 852 m ceiling.

Layer boundaries are geopotential heights; the geometric altitude the user
enters is compared against them directly.
"""

from __future__ import annotations
import math
from dataclasses import dataclass

from airdensity.exceptions import ComputationError, ModelRangeError
from airdensity.units import celsius_to_kelvin, kelvin_to_celsius, pa_to_hpa

# Default physical constants
G0 = 9.80665       # m/s²
R_AIR = 287.05     # J/(kg·K)

EPS = 1e-9         # tolerance for near-zero comparisons
CEILING_M = 84852.0

# Humidity estimate
RELATIVE_HUMIDITY = 50.0   # %, fixed assumption
MAGNUS_A = 6.1094          # hPa
MAGNUS_B = 17.625
MAGNUS_C = 243.04          # °C
EPSILON_WATER = 0.622      # Rd/Rv
VAPOR_CAP = 0.99           # e is held below total pressure


@dataclass(frozen=True)
class PhysicalConstants:
    """Overridable constants used by every evaluation."""
    gravity: float = G0             # m/s²
    gas_constant_r: float = R_AIR   # J/(kg·K)

    def __post_init__(self):
        if not self.gravity > 0:
            raise ValueError(f"gravity must be positive, got {self.gravity!r}")
        if not self.gas_constant_r > 0:
            raise ValueError(f"gas_constant_r must be positive, got {self.gas_constant_r!r}")

    def differs_from(self, other: PhysicalConstants, tol: float = EPS) -> bool:
        return (abs(self.gravity - other.gravity) > tol or
                abs(self.gas_constant_r - other.gas_constant_r) > tol)


@dataclass(frozen=True)
class AtmosphericLayer:
    base_height: float      # h₀  [m]
    base_temp: float        # T₀  [K]
    base_pressure: float    # P₀  [Pa]
    lapse_rate: float       # L   [K/m]

    def temperature_at(self, h: float, base_temp: float | None = None) -> float:
        """T = T₀ + L·(h − h₀), floored at 0 K."""
        t0 = self.base_temp if base_temp is None else base_temp
        return max(0.0, t0 + self.lapse_rate * (h - self.base_height))


# Layer 0 base temperature/pressure are placeholders: the caller's sea-level
# values replace them at evaluation time.
LAYERS: tuple[AtmosphericLayer, ...] = (
    AtmosphericLayer(0.0,     288.15, 101325.0, -0.0065),   # troposphere
    AtmosphericLayer(11000.0, 216.65, 22632.1,   0.0),      # tropopause
    AtmosphericLayer(20000.0, 216.65, 5474.89,   0.001),    # stratosphere 1
    AtmosphericLayer(32000.0, 228.65, 868.019,   0.0028),   # stratosphere 2
    AtmosphericLayer(47000.0, 270.65, 110.906,   0.0),      # stratopause
    AtmosphericLayer(51000.0, 270.65, 66.9389,  -0.0028),   # mesosphere 1
    AtmosphericLayer(71000.0, 214.65, 3.95642,  -0.002),    # mesosphere 2
)

UPPER_BOUNDARIES: tuple[float, ...] = tuple(
    layer.base_height for layer in LAYERS[1:]
) + (CEILING_M,)


@dataclass(frozen=True)
class InputSet:
    """Validated sea-level conditions and target altitude, all SI."""
    altitude_m: float
    sea_level_temp_c: float
    sea_level_pressure_pa: float

    @property
    def sea_level_pressure_hpa(self) -> float:
        return pa_to_hpa(self.sea_level_pressure_pa)


@dataclass(frozen=True)
class CalculationResult:
    temperature_c: float
    pressure_hpa: float
    density: float                  # kg/m³
    percent_pressure: float         # % of sea level
    percent_density: float          # % of sea level
    specific_humidity: float        # g/kg
    vapor_pressure_hpa: float


def select_layer(h: float) -> int:
    """
    Index of the layer containing altitude ``h`` [m].

    The first layer whose upper boundary is >= h wins, so a boundary altitude
    belongs to the lower layer.  Raises ModelRangeError above the ceiling.
    """
    for i, upper in enumerate(UPPER_BOUNDARIES):
        if h <= upper:
            return i
    raise ModelRangeError(h, CEILING_M)


def layer_pressure(layer: AtmosphericLayer, h: float, T: float,
                   T0: float, P0: float,
                   constants: PhysicalConstants) -> float:
    """
    Pressure [Pa] at ``h`` inside ``layer``.

    Isothermal   :  P = P₀ · exp(−g·(h − h₀) / (R·T₀))
    Lapse L ≠ 0  :  P = P₀ · (T/T₀)^(−g / (L·R))
    """
    g = constants.gravity
    R = constants.gas_constant_r
    L = layer.lapse_rate

    if abs(L) < EPS:
        if abs(T0) < EPS:
            raise ComputationError("Base temperature zero in isothermal layer calculation.")
        p = P0 * math.exp(-g * (h - layer.base_height) / (R * T0))
    else:
        if abs(T0) < EPS:
            raise ComputationError("Base temperature zero in non-isothermal layer calculation.")
        ratio = T / T0
        # T/T₀ <= 0 only happens at the 0 K floor
        p = 0.0 if ratio <= 0 else P0 * ratio ** (-g / (L * R))
    return max(0.0, p)


def saturation_vapor_pressure(tc: float) -> float:
    """Magnus formula, e_s [hPa] at temperature ``tc`` [°C]."""
    denom = tc + MAGNUS_C
    if abs(denom) <= EPS:
        return 0.0
    try:
        e_s = MAGNUS_A * math.exp(MAGNUS_B * tc / denom)
    except OverflowError:
        # just below the pole; any finite total pressure is exceeded
        e_s = math.inf
    return max(0.0, e_s)


def humidity(tc: float, p_hpa: float) -> tuple[float, float]:
    """
    Return (vapor pressure [hPa], specific humidity [g/kg]) at 50 % RH.

    Vapor pressure is capped at 0.99·P so the mixing ratio stays finite.
    """
    e = RELATIVE_HUMIDITY / 100.0 * saturation_vapor_pressure(tc)
    if e >= p_hpa:
        e = p_hpa * VAPOR_CAP
    e = max(0.0, e)

    w = 0.0
    diff = p_hpa - e
    if diff > EPS:
        w = EPSILON_WATER * e / diff
    w = max(0.0, w)
    return e, w * 1000.0


def extended_isa(inputs: InputSet,
                 constants: PhysicalConstants = PhysicalConstants()) -> CalculationResult:
    """
    Evaluate the extended ISA model.

    Parameters
    ----------
    inputs    : altitude and sea-level conditions (SI)
    constants : gravity and specific gas constant

    Returns
    -------
    CalculationResult

    Raises
    ------
    ModelRangeError  : altitude above the 84 852 m ceiling
    ComputationError : base temperature of the selected layer is ~0 K
    """
    h = inputs.altitude_m
    R = constants.gas_constant_r
    T_sea = celsius_to_kelvin(inputs.sea_level_temp_c)
    P_sea = inputs.sea_level_pressure_pa

    idx = select_layer(h)
    layer = LAYERS[idx]
    T0, P0 = layer.base_temp, layer.base_pressure
    if idx == 0:
        T0, P0 = T_sea, P_sea

    T = layer.temperature_at(h, T0)
    p = layer_pressure(layer, h, T, T0, P0, constants)

    rho = p / (R * T) if T > EPS else 0.0
    rho = max(0.0, rho)

    tc = kelvin_to_celsius(T)
    p_hpa = pa_to_hpa(p)

    rho_sea = P_sea / (R * T_sea) if T_sea > EPS else 0.0
    pct_p = p / P_sea * 100.0 if P_sea > EPS else 0.0
    pct_rho = rho / rho_sea * 100.0 if rho_sea > EPS else 0.0

    e, q = humidity(tc, p_hpa)

    return CalculationResult(
        temperature_c=tc,
        pressure_hpa=p_hpa,
        density=rho,
        percent_pressure=pct_p,
        percent_density=pct_rho,
        specific_humidity=q,
        vapor_pressure_hpa=e,
    )

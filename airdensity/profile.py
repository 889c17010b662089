"""
profile.py – Atmospheric state vs altitude.

Samples the extended ISA model on an altitude grid for fixed sea-level
conditions.  Each sample is an independent closed-form evaluation.
"""

from __future__ import annotations
import numpy as np

from airdensity.atmosphere import (
    CEILING_M,
    InputSet,
    PhysicalConstants,
    extended_isa,
)

PROFILE_FIELDS = (
    'temperature_c',
    'pressure_hpa',
    'density',
    'percent_pressure',
    'percent_density',
    'specific_humidity',
    'vapor_pressure_hpa',
)


def atmosphere_profile(
    sea_level_temp_c: float,
    sea_level_pressure_pa: float,
    constants: PhysicalConstants = PhysicalConstants(),
    h_min: float = 0.0,
    h_max: float = CEILING_M,
    n_points: int = 200,
) -> dict:
    """
    Evaluate the model from ``h_min`` to ``h_max``.

    Parameters
    ----------
    sea_level_temp_c      : sea-level temperature  [°C]
    sea_level_pressure_pa : sea-level pressure  [Pa]
    constants             : gravity / gas constant
    h_min, h_max          : altitude range  [m]  (h_max <= 84 852 m)
    n_points              : number of altitude samples

    Returns
    -------
    dict with arrays:
        'h'                  : altitudes  [m]
        'temperature_c'      : [°C]
        'pressure_hpa'       : [hPa]
        'density'            : [kg/m³]
        'percent_pressure'   : [% of sea level]
        'percent_density'    : [% of sea level]
        'specific_humidity'  : [g/kg]
        'vapor_pressure_hpa' : [hPa]
    plus 'sea_level_temp_c' and 'sea_level_pressure_pa' scalars.
    """
    if n_points < 2:
        raise ValueError("n_points must be >= 2")
    if h_max <= h_min:
        raise ValueError("h_max must be greater than h_min")

    altitudes = np.linspace(h_min, h_max, n_points)
    out = {name: np.zeros(n_points) for name in PROFILE_FIELDS}

    for i, h in enumerate(altitudes):
        r = extended_isa(
            InputSet(float(h), sea_level_temp_c, sea_level_pressure_pa), constants,
        )
        for name in PROFILE_FIELDS:
            out[name][i] = getattr(r, name)

    out['h'] = altitudes
    out['sea_level_temp_c'] = sea_level_temp_c
    out['sea_level_pressure_pa'] = sea_level_pressure_pa
    return out

"""
settings.py – Persisted calculator settings.

Stored as indented JSON using the calculator's established key names::

    {
      "Gravity": 9.80665,
      "GasConstantR": 287.05,
      "AltitudeUnitIndex": 1,
      "TemperatureUnitIndex": 0,
      "PressureUnitIndex": 0,
      "ModelIndex": 1
    }

Keys are matched case-insensitively on load.  Loading never raises: a
missing, unreadable or invalid file yields the defaults.
"""

from __future__ import annotations
import json
from dataclasses import dataclass, fields
from pathlib import Path

from airdensity.atmosphere import G0, R_AIR, PhysicalConstants
from airdensity.logger import logger
from airdensity.units import (
    AltitudeUnit,
    DisplayUnits,
    ModelKind,
    PressureUnit,
    TemperatureUnit,
    coerce_selector,
)

SETTINGS_FILE_NAME = "airdensity_settings.json"

_JSON_KEYS = {
    'gravity': 'Gravity',
    'gas_constant_r': 'GasConstantR',
    'altitude_unit_index': 'AltitudeUnitIndex',
    'temperature_unit_index': 'TemperatureUnitIndex',
    'pressure_unit_index': 'PressureUnitIndex',
    'model_index': 'ModelIndex',
}


def _selector_or_default(index, default):
    # FEET, CELSIUS, HPA and ISA have index 0, so test for None explicitly
    member = coerce_selector(index, type(default))
    return default if member is None else member


@dataclass
class Settings:
    gravity: float = G0
    gas_constant_r: float = R_AIR
    altitude_unit_index: int = int(AltitudeUnit.METERS)
    temperature_unit_index: int = int(TemperatureUnit.CELSIUS)
    pressure_unit_index: int = int(PressureUnit.HPA)
    model_index: int = int(ModelKind.EXTENDED_ISA)

    @property
    def constants(self) -> PhysicalConstants:
        return PhysicalConstants(self.gravity, self.gas_constant_r)

    @constants.setter
    def constants(self, value: PhysicalConstants) -> None:
        self.gravity = value.gravity
        self.gas_constant_r = value.gas_constant_r

    def display_units(self) -> DisplayUnits:
        """Unit indices as DisplayUnits; out-of-range indices fall back to defaults."""
        return DisplayUnits(
            _selector_or_default(self.altitude_unit_index, AltitudeUnit.METERS),
            _selector_or_default(self.temperature_unit_index, TemperatureUnit.CELSIUS),
            _selector_or_default(self.pressure_unit_index, PressureUnit.HPA),
        )

    def model(self) -> ModelKind:
        return _selector_or_default(self.model_index, ModelKind.EXTENDED_ISA)

    def to_dict(self) -> dict:
        return {_JSON_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> Settings:
        """Case-insensitive key lookup; unknown keys are ignored."""
        lowered = {str(k).lower(): v for k, v in data.items()}
        kwargs = {}
        for f in fields(cls):
            key = _JSON_KEYS[f.name].lower()
            if key in lowered:
                cast = float if f.type in ('float', float) else int
                kwargs[f.name] = cast(lowered[key])
        settings = cls(**kwargs)
        PhysicalConstants(settings.gravity, settings.gas_constant_r)
        return settings


def load_settings(path: str | Path = SETTINGS_FILE_NAME) -> Settings:
    path = Path(path).expanduser()
    if not path.exists():
        logger.info("%s not found. Using default settings data.", path.name)
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("settings file must hold a JSON object")
        settings = Settings.from_dict(data)
    except (OSError, ValueError, TypeError, OverflowError) as err:
        logger.warning("Error loading settings data: %s", err)
        return Settings()
    logger.info("Settings data loaded from %s", path.name)
    return settings


def save_settings(settings: Settings, path: str | Path = SETTINGS_FILE_NAME) -> Path:
    """Write ``settings`` as indented JSON; return the resolved Path."""
    path = Path(path).expanduser().resolve()
    path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
    logger.info("Settings saved to %s", path.name)
    return path

"""
Tests for airdensity.settings and airdensity.logger (the persistence and
audit-log collaborators).
"""

import json
import re

import pytest
from airdensity import logger as log_module
from airdensity.atmosphere import PhysicalConstants
from airdensity.engine import AtmosphereEngine
from airdensity.settings import Settings, load_settings, save_settings
from airdensity.units import AltitudeUnit, DisplayUnits, ModelKind, PressureUnit, TemperatureUnit


class TestSettings:

    def test_defaults(self):
        s = Settings()
        assert s.constants == PhysicalConstants()
        assert s.display_units() == DisplayUnits()
        assert s.model() is ModelKind.EXTENDED_ISA

    def test_round_trip(self, tmp_path):
        path = tmp_path / "settings.json"
        s = Settings(gravity=9.81, gas_constant_r=287.0, altitude_unit_index=0,
                     temperature_unit_index=1, pressure_unit_index=1, model_index=0)
        save_settings(s, path)
        assert load_settings(path) == s

    def test_json_keys(self, tmp_path):
        path = save_settings(Settings(), tmp_path / "settings.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert set(data) == {"Gravity", "GasConstantR", "AltitudeUnitIndex",
                             "TemperatureUnitIndex", "PressureUnitIndex", "ModelIndex"}
        assert data["Gravity"] == 9.80665

    def test_case_insensitive_load(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text('{"gravity": 3.71, "gasconstantr": 188.9, "Extra": 1}',
                        encoding="utf-8")
        s = load_settings(path)
        assert s.gravity == 3.71
        assert s.gas_constant_r == 188.9
        assert s.altitude_unit_index == 1

    def test_missing_file(self, tmp_path):
        assert load_settings(tmp_path / "nope.json") == Settings()

    @pytest.mark.parametrize("content", [
        "{not json", "[1, 2]", '{"Gravity": -1}', '{"GasConstantR": "abc"}',
        '{"ModelIndex": Infinity}',
    ])
    def test_bad_file_falls_back(self, tmp_path, content):
        path = tmp_path / "settings.json"
        path.write_text(content, encoding="utf-8")
        assert load_settings(path) == Settings()

    @pytest.mark.parametrize("index, unit", [
        (0, AltitudeUnit.FEET), (1, AltitudeUnit.METERS),
    ])
    def test_altitude_index(self, index, unit):
        assert Settings(altitude_unit_index=index).display_units().altitude is unit

    @pytest.mark.parametrize("index, unit", [
        (0, TemperatureUnit.CELSIUS), (1, TemperatureUnit.FAHRENHEIT),
    ])
    def test_temperature_index(self, index, unit):
        assert Settings(temperature_unit_index=index).display_units().temperature is unit

    @pytest.mark.parametrize("index, unit", [
        (0, PressureUnit.HPA), (1, PressureUnit.INHG),
    ])
    def test_pressure_index(self, index, unit):
        assert Settings(pressure_unit_index=index).display_units().pressure is unit

    @pytest.mark.parametrize("index, kind", [
        (0, ModelKind.ISA), (1, ModelKind.EXTENDED_ISA),
    ])
    def test_model_index(self, index, kind):
        assert Settings(model_index=index).model() is kind

    def test_zero_indices_survive_file(self, tmp_path):
        path = save_settings(Settings(altitude_unit_index=0, model_index=0),
                             tmp_path / "settings.json")
        s = load_settings(path)
        assert s.display_units() == DisplayUnits(AltitudeUnit.FEET,
                                                 TemperatureUnit.CELSIUS,
                                                 PressureUnit.HPA)
        assert s.model() is ModelKind.ISA

    def test_out_of_range_indices(self):
        s = Settings(altitude_unit_index=7, temperature_unit_index=-1,
                     pressure_unit_index=2, model_index=9)
        assert s.display_units() == DisplayUnits(AltitudeUnit.METERS,
                                                 TemperatureUnit.CELSIUS,
                                                 PressureUnit.HPA)
        assert s.model() is ModelKind.EXTENDED_ISA

    def test_constants_setter(self):
        s = Settings()
        s.constants = PhysicalConstants(9.7, 280.0)
        assert (s.gravity, s.gas_constant_r) == (9.7, 280.0)


class TestAuditLog:

    def test_file_logging(self, tmp_path):
        path = tmp_path / "audit.log"
        log_module.enable_file_logging(str(path))
        try:
            engine = AtmosphereEngine()
            engine.evaluate("0", "15", "1013.25")
            engine.evaluate("0", "15", "1013.25")
            engine.reset()
        finally:
            log_module.disable_file_logging()

        lines = path.read_text(encoding="utf-8").splitlines()
        assert any("Calculation successful for key" in line for line in lines)
        assert any("Used cached results for key" in line for line in lines)
        assert any("inputs cleared" in line for line in lines)
        assert all(re.match(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} - ", line)
                   for line in lines)
        assert log_module.file_handler is None

    def test_disable_twice_is_safe(self):
        log_module.disable_file_logging()
        log_module.disable_file_logging()

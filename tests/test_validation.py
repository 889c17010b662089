"""
Tests for airdensity.validation

Hard failures short-circuit in order: missing → unselected → parse → range.
At most one soft warning per pass, temperature first.
"""

import pytest
from airdensity.exceptions import ErrorKind
from airdensity.units import AltitudeUnit, ModelKind, PressureUnit, TemperatureUnit
from airdensity.validation import parse_number, validate_constants, validate_inputs


def _validate(altitude="1000", temperature="15", pressure="1013.25", **units):
    return validate_inputs(altitude, temperature, pressure, **units)


class TestHardFailures:
    @pytest.mark.parametrize("field", ["altitude", "temperature", "pressure"])
    @pytest.mark.parametrize("blank", ["", "   ", None])
    def test_missing(self, field, blank):
        res = _validate(**{field: blank})
        assert not res.ok
        assert res.inputs is None
        assert res.rejection.kind is ErrorKind.MISSING_INPUT

    @pytest.mark.parametrize("selector", [
        "altitude_unit", "temperature_unit", "pressure_unit", "model",
    ])
    def test_unselected(self, selector):
        res = _validate(**{selector: None})
        assert res.rejection.kind is ErrorKind.UNSELECTED_UNIT

    def test_out_of_range_index_is_unselected(self):
        assert _validate(model=5).rejection.kind is ErrorKind.UNSELECTED_UNIT

    def test_missing_beats_unselected(self):
        res = _validate(altitude="", altitude_unit=None)
        assert res.rejection.kind is ErrorKind.MISSING_INPUT

    @pytest.mark.parametrize("text", ["abc", "1,5", "12..3", "nan", "inf"])
    def test_parse_error(self, text):
        res = _validate(temperature=text)
        assert res.rejection.kind is ErrorKind.PARSE_ERROR
        assert res.rejection.field == "temperature"

    @pytest.mark.parametrize("alt, unit", [
        ("90000", AltitudeUnit.METERS),
        ("-5000.1", AltitudeUnit.METERS),
        ("300000", AltitudeUnit.FEET),
    ])
    def test_altitude_range(self, alt, unit):
        res = _validate(altitude=alt, altitude_unit=unit)
        assert res.rejection.kind is ErrorKind.RANGE_ERROR
        assert res.rejection.field == "altitude"

    @pytest.mark.parametrize("alt", ["-5000", "85000"])
    def test_altitude_limits_inclusive(self, alt):
        assert _validate(altitude=alt).ok


class TestConversionToSI:
    def test_metric_passthrough(self):
        res = _validate()
        assert res.ok and res.warning is None
        assert res.inputs.altitude_m == 1000.0
        assert res.inputs.sea_level_temp_c == 15.0
        assert res.inputs.sea_level_pressure_pa == pytest.approx(101325.0)

    def test_imperial(self):
        res = _validate(altitude="1000", temperature="59", pressure="29.92",
                        altitude_unit=AltitudeUnit.FEET,
                        temperature_unit=TemperatureUnit.FAHRENHEIT,
                        pressure_unit=PressureUnit.INHG)
        assert res.inputs.altitude_m == pytest.approx(304.8)
        assert res.inputs.sea_level_temp_c == 15.0
        assert res.inputs.sea_level_pressure_pa == pytest.approx(29.92 * 33.8639 * 100)

    def test_numbers_and_indices_accepted(self):
        res = validate_inputs(0, 15.0, 1013.25, 1, 0, 0, 1)
        assert res.ok

    def test_whitespace_and_sign(self):
        assert _validate(altitude="  +250.5 ").inputs.altitude_m == 250.5

    def test_isa_model_selector_accepted(self):
        assert _validate(model=ModelKind.ISA).ok


class TestWarnings:
    def test_temperature_warning(self):
        res = _validate(temperature="150")
        assert res.ok
        assert res.warning.field == "temperature"

    def test_pressure_warning(self):
        res = _validate(pressure="500")
        assert res.ok
        assert res.warning.field == "pressure"

    def test_pressure_warning_in_inhg(self):
        res = _validate(pressure="20", pressure_unit=PressureUnit.INHG)
        assert res.warning.field == "pressure"

    def test_temperature_takes_precedence(self):
        res = _validate(temperature="-150", pressure="500")
        assert res.warning.field == "temperature"

    def test_bounds_are_inclusive(self):
        assert _validate(temperature="100", pressure="800").warning is None
        assert _validate(temperature="-100", pressure="1100").warning is None


class TestParseNumber:
    def test_values(self):
        assert parse_number("1e3") == 1000.0
        assert parse_number(7) == 7.0

    @pytest.mark.parametrize("bad", [True, "", "x", float("nan")])
    def test_rejects(self, bad):
        with pytest.raises(ValueError):
            parse_number(bad)


class TestConstants:
    def test_valid(self):
        res = validate_constants("9.81", "287")
        assert res.ok
        assert res.constants.gravity == 9.81
        assert res.constants.gas_constant_r == 287.0

    def test_one_invalid(self):
        res = validate_constants("0", "287.05")
        assert res.errors == ["Invalid value for Gravity. Must be a positive number."]
        assert res.constants is None

    def test_both_invalid(self):
        res = validate_constants("abc", -1)
        assert len(res.errors) == 2
        assert "Gas Constant" in res.errors[1]

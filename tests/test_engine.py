"""
Tests for airdensity.engine

The engine is the validate → lookup → evaluate → format → store pipeline.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest
from airdensity.atmosphere import PhysicalConstants
from airdensity.engine import AtmosphereEngine
from airdensity.exceptions import ErrorKind
from airdensity.units import AltitudeUnit, TemperatureUnit


@pytest.fixture
def engine():
    return AtmosphereEngine()


class TestEvaluate:

    def test_standard_sea_level(self, engine):
        ev = engine.evaluate("0", "15", "1013.25")
        assert ev.ok
        assert ev.result.density == pytest.approx(1.225, abs=1e-3)
        assert ev.result.percent_pressure == pytest.approx(100.0)
        assert ev.result.percent_density == pytest.approx(100.0)
        assert ev.text.startswith("At 0.00 Meters:")
        assert engine.last_text == ev.text

    def test_idempotent_caching(self, engine):
        first = engine.evaluate("5000", "15", "1013.25")
        second = engine.evaluate("5000", "15", "1013.25")
        assert not first.from_cache
        assert second.from_cache
        assert second.text == first.text
        assert second.result is None
        assert len(engine.cache) == 1

    def test_cache_matches_fresh_computation(self, engine):
        cached = engine.evaluate("2500", "20", "1000")
        fresh = AtmosphereEngine().evaluate("2500", "20", "1000")
        assert cached.text == fresh.text

    def test_display_units_keyed_separately(self, engine):
        celsius = engine.evaluate("0", "15", "1013.25")
        fahrenheit = engine.evaluate("0", "59", "1013.25",
                                     temperature_unit=TemperatureUnit.FAHRENHEIT)
        assert not fahrenheit.from_cache
        assert "°F" in fahrenheit.text
        assert celsius.text != fahrenheit.text

    def test_feet_input(self, engine):
        ev = engine.evaluate("10000", "15", "1013.25", altitude_unit=AltitudeUnit.FEET)
        assert ev.ok
        assert ev.text.startswith("At 10000.00 Feet:")

    def test_warning_alongside_result(self, engine):
        ev = engine.evaluate("0", "150", "1013.25")
        assert ev.ok
        assert ev.warning.field == "temperature"

    def test_warning_on_cache_hit(self, engine):
        engine.evaluate("0", "15", "500")
        ev = engine.evaluate("0", "15", "500")
        assert ev.from_cache
        assert ev.warning.field == "pressure"


class TestRejections:

    def test_range_error(self, engine):
        ev = engine.evaluate("90000", "15", "1013.25")
        assert not ev.ok
        assert ev.rejection.kind is ErrorKind.RANGE_ERROR
        assert ev.text is None

    def test_model_range_error(self, engine):
        """Between the 84 852 m ceiling and the 85 km input limit."""
        ev = engine.evaluate("84900", "15", "1013.25")
        assert ev.rejection.kind is ErrorKind.MODEL_RANGE_ERROR

    def test_computation_error(self, engine):
        ev = engine.evaluate("100", "-273.15", "1013.25")
        assert ev.rejection.kind is ErrorKind.COMPUTATION_ERROR
        assert ev.warning.field == "temperature"

    def test_overflow_reported_as_computation_error(self):
        engine = AtmosphereEngine(PhysicalConstants(gravity=9.80665, gas_constant_r=1e-6))
        ev = engine.evaluate("-5000", "15", "1013.25")
        assert ev.rejection.kind is ErrorKind.COMPUTATION_ERROR

    def test_rejection_leaves_cache_untouched(self, engine):
        engine.evaluate("0", "15", "1013.25")
        engine.evaluate("90000", "15", "1013.25")
        engine.evaluate("84900", "15", "1013.25")
        engine.evaluate("", "15", "1013.25")
        assert len(engine.cache) == 1
        assert engine.evaluate("0", "15", "1013.25").from_cache

    def test_unselected_unit(self, engine):
        ev = engine.evaluate("0", "15", "1013.25", pressure_unit=None)
        assert ev.rejection.kind is ErrorKind.UNSELECTED_UNIT


class TestConstantsLifecycle:

    def test_change_invalidates(self, engine):
        before = engine.evaluate("5000", "15", "1013.25")
        changed = engine.set_constants(PhysicalConstants(gravity=9.0))
        assert changed
        assert len(engine.cache) == 0
        after = engine.evaluate("5000", "15", "1013.25")
        assert not after.from_cache
        assert after.text != before.text

    def test_gas_constant_change(self, engine):
        before = engine.evaluate("0", "15", "1013.25")
        engine.set_constants(PhysicalConstants(gas_constant_r=290.0))
        after = engine.evaluate("0", "15", "1013.25")
        assert not after.from_cache
        assert after.result.density < before.result.density

    def test_same_constants_keep_cache(self, engine):
        engine.evaluate("0", "15", "1013.25")
        assert not engine.set_constants(PhysicalConstants())
        assert len(engine.cache) == 1

    def test_reset(self, engine):
        engine.evaluate("0", "15", "1013.25")
        engine.reset()
        assert len(engine.cache) == 0
        assert engine.last_text is None


class TestLogging:

    def test_events(self, engine, caplog):
        caplog.set_level(logging.DEBUG, logger="airdensity")
        engine.evaluate("0", "15", "1013.25")
        engine.evaluate("0", "15", "1013.25")
        engine.evaluate("x", "15", "1013.25")
        engine.set_constants(PhysicalConstants(gravity=9.7))
        text = caplog.text
        assert "Cache miss for key" in text
        assert "Calculation successful for key: 0.00000_15.00000_101325.00000" in text
        assert "Used cached results for key" in text
        assert "Validation rejected input" in text
        assert "Calculation cache cleared due to settings change" in text


class TestConcurrency:

    def test_shared_engine(self, engine):
        def run(i):
            return engine.evaluate(str(1000 * (i % 5)), "15", "1013.25").text

        with ThreadPoolExecutor(max_workers=8) as pool:
            texts = list(pool.map(run, range(50)))
        assert len(engine.cache) == 5
        for i, t in enumerate(texts):
            assert t == texts[i % 5]

"""
engine.py – Atmospheric state engine.

Request pipeline:

    raw input ─► validate_inputs ─► cache lookup ─┬─ hit ─────────────► text
                                                  └─ miss ─► extended_isa
                                                             ─► format_result
                                                             ─► cache store ─► text

Each request runs as one critical section, and replacing the physical
constants invalidates the cache under the same lock, so a reader never sees
new constants paired with results computed under the old ones.
"""

from __future__ import annotations
import threading
from dataclasses import dataclass
from typing import Optional

from airdensity.atmosphere import CalculationResult, PhysicalConstants, extended_isa
from airdensity.cache import CacheKey, ResultCache
from airdensity.exceptions import (
    ErrorKind,
    InputWarning,
    ModelError,
    Rejection,
)
from airdensity.formatting import format_result, resolve_units
from airdensity.logger import logger
from airdensity.units import AltitudeUnit, ModelKind, PressureUnit, TemperatureUnit
from airdensity.validation import validate_inputs


@dataclass(frozen=True)
class Evaluation:
    """Outcome of one request: rendered ``text`` or a ``rejection``."""
    text: Optional[str] = None
    rejection: Optional[Rejection] = None
    warning: Optional[InputWarning] = None
    from_cache: bool = False
    result: Optional[CalculationResult] = None   # None on a cache hit
    key: Optional[CacheKey] = None

    @property
    def ok(self) -> bool:
        return self.rejection is None


class AtmosphereEngine:
    """
    Validates, evaluates, formats and memoises atmospheric state requests.

    Parameters
    ----------
    constants : gravity and gas constant (defaults to ISA values)
    """

    def __init__(self, constants: PhysicalConstants = PhysicalConstants()):
        self._constants = constants
        self._cache = ResultCache()
        self._lock = threading.RLock()
        self.last_text: Optional[str] = None

    @property
    def constants(self) -> PhysicalConstants:
        return self._constants

    @property
    def cache(self) -> ResultCache:
        return self._cache

    def evaluate(self, altitude, temperature, pressure,
                 altitude_unit=AltitudeUnit.METERS,
                 temperature_unit=TemperatureUnit.CELSIUS,
                 pressure_unit=PressureUnit.HPA,
                 model=ModelKind.EXTENDED_ISA) -> Evaluation:
        """
        Run one request.  The unit selectors are both the input and the
        display units.
        """
        with self._lock:
            checked = validate_inputs(altitude, temperature, pressure,
                                      altitude_unit, temperature_unit,
                                      pressure_unit, model)
            if not checked.ok:
                logger.warning("Validation rejected input: %s (%s)",
                               checked.rejection.message, checked.rejection.kind.value)
                return Evaluation(rejection=checked.rejection)
            if checked.warning is not None:
                logger.info("Validation warning: %s", checked.warning.message)

            inputs = checked.inputs
            units = resolve_units(altitude_unit, temperature_unit, pressure_unit)
            key = CacheKey.build(inputs, self._constants, units)

            cached = self._cache.get(key)
            if cached is not None:
                logger.info("Used cached results for key: %s", key)
                self.last_text = cached
                return Evaluation(text=cached, warning=checked.warning,
                                  from_cache=True, key=key)
            logger.debug("Cache miss for key: %s", key)

            try:
                result = extended_isa(inputs, self._constants)
            except ModelError as err:
                logger.error("Calculation Error: %s", err.message)
                return Evaluation(rejection=err.to_rejection(), warning=checked.warning)
            except ArithmeticError as err:
                logger.error("Unexpected Calculation Error: %s - %s",
                             type(err).__name__, err)
                return Evaluation(
                    rejection=Rejection(ErrorKind.COMPUTATION_ERROR,
                                        f"An unexpected calculation error occurred: {err}"),
                    warning=checked.warning,
                )

            text = format_result(result, inputs, units)
            self._cache.put(key, text)
            self.last_text = text
            logger.info("Calculation successful for key: %s", key)
            return Evaluation(text=text, warning=checked.warning,
                              result=result, key=key)

    def set_constants(self, constants: PhysicalConstants) -> bool:
        """
        Replace the physical constants.

        Returns True if they changed, in which case the cache was cleared.
        Recomputing any displayed result is up to the caller.
        """
        with self._lock:
            changed = constants.differs_from(self._constants)
            self._constants = constants
            logger.info("Settings updated: g=%s, R=%s",
                        constants.gravity, constants.gas_constant_r)
            if changed:
                self._invalidate("settings change")
            return changed

    def reset(self) -> None:
        """Forget cached results and the last rendered text ("clear inputs")."""
        with self._lock:
            self.last_text = None
            self._invalidate("inputs cleared")

    def _invalidate(self, reason: str) -> None:
        n = self._cache.invalidate_all()
        logger.info("Calculation cache cleared due to %s (%d entries).", reason, n)

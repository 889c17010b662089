"""airdensity error taxonomy.

Exception Hierarchy
-------------------

Exception (built-in Python)
└── AtmosphereError
    ├── InputError (also ValueError)
    │   ├── MissingInputError
    │   ├── UnselectedUnitError
    │   ├── InputParseError
    │   └── AltitudeRangeError
    └── ModelError (also RuntimeError)
        ├── ModelRangeError
        └── ComputationError

Input errors are detected before the model runs; the validator reports them
as a tagged ``Rejection`` rather than raising.  Model errors are raised by
``airdensity.atmosphere.extended_isa`` and turned into a ``Rejection`` by the
engine.  Every exception carries its ``ErrorKind`` so the two paths share one
vocabulary.

Soft warnings (implausible but usable sea-level conditions) are not errors:
they travel alongside a successful result as an ``InputWarning``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

__all__ = (
    'ErrorKind',
    'Rejection',
    'InputWarning',
    'AtmosphereError',
    'InputError',
    'MissingInputError',
    'UnselectedUnitError',
    'InputParseError',
    'AltitudeRangeError',
    'ModelError',
    'ModelRangeError',
    'ComputationError',
)


class ErrorKind(str, Enum):
    MISSING_INPUT = 'MissingInput'
    UNSELECTED_UNIT = 'UnselectedUnit'
    PARSE_ERROR = 'ParseError'
    RANGE_ERROR = 'RangeError'
    MODEL_RANGE_ERROR = 'ModelRangeError'
    COMPUTATION_ERROR = 'ComputationError'


@dataclass(frozen=True)
class Rejection:
    """A hard failure: no result was produced."""
    kind: ErrorKind
    message: str
    field: Optional[str] = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class InputWarning:
    """A non-fatal note about an input, surfaced next to a result."""
    field: str
    message: str

    def __str__(self) -> str:
        return self.message


class AtmosphereError(Exception):
    """Base class for every airdensity error."""
    kind: ErrorKind

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_rejection(self) -> Rejection:
        return Rejection(self.kind, self.message, self.field)


class InputError(AtmosphereError, ValueError):
    """Raw input could not be turned into a usable InputSet."""


class MissingInputError(InputError):
    kind = ErrorKind.MISSING_INPUT


class UnselectedUnitError(InputError):
    kind = ErrorKind.UNSELECTED_UNIT


class InputParseError(InputError):
    kind = ErrorKind.PARSE_ERROR


class AltitudeRangeError(InputError):
    kind = ErrorKind.RANGE_ERROR

    def __init__(self, altitude_m: float,
                 message: str = "Altitude is outside the model range (approx -5km to 85km)."):
        super().__init__(message, field='altitude')
        self.altitude_m = altitude_m


class ModelError(AtmosphereError, RuntimeError):
    """The atmosphere model could not be evaluated."""


class ModelRangeError(ModelError):
    kind = ErrorKind.MODEL_RANGE_ERROR

    def __init__(self, altitude_m: float, ceiling_m: float):
        super().__init__(
            f"Altitude {altitude_m} m exceeds the limits of this extended ISA "
            f"model (max {ceiling_m:g} m)",
            field='altitude',
        )
        self.altitude_m = altitude_m
        self.ceiling_m = ceiling_m


class ComputationError(ModelError):
    kind = ErrorKind.COMPUTATION_ERROR

"""py_servecalc exception types.

Exception Hierarchy
-------------------

Exception (built-in Python)
├── TypeError
│   └── UnitTypeError
│       └── UnitConversionError
├── ValueError
│   └── UnitAliasError
└── RuntimeError
    └── SolverRuntimeError
        └── BracketError

Unit-Related Exceptions:

- UnitTypeError: Base class for unit-related type errors. Raised when invalid unit types
  are passed to unit conversion functions.

- UnitConversionError: Raised when converting between incompatible dimensions,
  e.g. a Distance to miles per hour.

- UnitAliasError: Raised when unit alias parsing fails.

Solver-Related Exceptions:

- SolverRuntimeError: Base class for all solver-related runtime errors.

- BracketError: Raised by the root finder in strict mode when no sign change of the
  residual was found after all bracket expansions. Contains:
  - low_angle, high_angle: Final bracket ends (Angular instances)
  - f_low, f_high: Residual values at the bracket ends
  - expansions: Number of expansions performed
  - reason: Free-form description

The serve pipeline never raises `BracketError` with the default (non-strict) engine
configuration: an unbracketed search degrades to a best-effort angle instead.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from py_servecalc.unit import Angular

__all__ = (
    'UnitTypeError',
    'UnitConversionError',
    'UnitAliasError',
    'SolverRuntimeError',
    'BracketError',
)


class UnitTypeError(TypeError):
    """Unit type error."""


class UnitConversionError(UnitTypeError):
    """Unit conversion error."""


class UnitAliasError(ValueError):
    """Unit alias error."""


class SolverRuntimeError(RuntimeError):
    """Solver error."""


class BracketError(SolverRuntimeError):
    """Exception for root searches that never bracket a sign change.

    Contains:
    - Final bracket ends
    - Residuals at the bracket ends
    - Number of expansions
    """

    NO_SIGN_CHANGE = "No sign change"

    def __init__(self,
                 low_angle: Angular,
                 high_angle: Angular,
                 f_low: float,
                 f_high: float,
                 expansions: int,
                 reason: str = NO_SIGN_CHANGE):
        """
        Parameters:
        - low_angle: Low end of the last bracket tried
        - high_angle: High end of the last bracket tried
        - f_low: Residual at low_angle
        - f_high: Residual at high_angle
        - expansions: Number of bracket expansions performed
        """
        self.low_angle: Angular = low_angle
        self.high_angle: Angular = high_angle
        self.f_low: float = f_low
        self.f_high: float = f_high
        self.expansions: int = expansions
        self.reason: str = reason
        msg = (f'Residuals f(low)={f_low:.4f}, f(high)={f_high:.4f} '
               f'over bracket ({low_angle}, {high_angle}), '
               f'after {expansions} expansions.')
        if reason:
            msg = f"{reason}. " + msg
        super().__init__(msg)

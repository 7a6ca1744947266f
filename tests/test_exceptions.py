import pytest

from py_servecalc.exceptions import (BracketError, SolverRuntimeError, UnitAliasError, UnitConversionError,
                                     UnitTypeError)
from py_servecalc.unit import Angular


def test_bracket_error_message_and_attrs():
    err = BracketError(Angular.Degree(-85), Angular.Degree(40.1), -12.5, -3.25, 14)
    assert isinstance(err, SolverRuntimeError)
    assert isinstance(err, RuntimeError)
    assert "after 14 expansions" in str(err)
    assert "f(low)=-12.5000" in str(err)
    assert str(err).startswith(BracketError.NO_SIGN_CHANGE)
    assert err.expansions == 14
    assert err.f_high == -3.25
    assert (err.high_angle >> Angular.Degree) == pytest.approx(40.1)


def test_bracket_error_custom_reason():
    err = BracketError(Angular.Degree(0), Angular.Degree(1), 1.0, 2.0, 0, reason="")
    assert str(err).startswith("Residuals")


def test_unit_exception_hierarchy():
    assert issubclass(UnitConversionError, UnitTypeError)
    assert issubclass(UnitTypeError, TypeError)
    assert issubclass(UnitAliasError, ValueError)

import logging

import pytest

from py_servecalc.conditions import ServeInput, TargetZone
from py_servecalc.engine import ServeEngine
from py_servecalc.interface import Calculator, set_default_config
from py_servecalc.logger import logger
from py_servecalc.unit import Distance, PreferredUnits, Velocity

logger.setLevel(logging.DEBUG)

HEIGHT_5_5 = Distance.Foot(5) + Distance.Inch(5)


@pytest.fixture(autouse=True)
def _restore_globals():
    yield
    PreferredUnits.restore_defaults()
    set_default_config(None)


@pytest.fixture()
def engine():
    return ServeEngine()


@pytest.fixture()
def calc():
    return Calculator()


@pytest.fixture()
def serve_50_wide():
    return ServeInput(speed=Velocity.MPH(50), height=HEIGHT_5_5, target=TargetZone.WIDE,
                      step_in=Distance.Meter(0.5), clearance=Distance.Centimeter(20))


@pytest.fixture()
def serve_120_t():
    return ServeInput(speed=Velocity.MPH(120), height=HEIGHT_5_5, target=TargetZone.T,
                      step_in=Distance.Meter(0.5), clearance=Distance.Centimeter(10))

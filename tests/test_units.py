import math

import pytest

from py_servecalc import loadImperialUnits, loadMetricUnits
from py_servecalc.exceptions import UnitAliasError, UnitConversionError
from py_servecalc.unit import Angular, Distance, PreferredUnits, Unit, Velocity


class TestUnitLoaders:
    def test_loaders(self):
        PreferredUnits.restore_defaults()
        assert PreferredUnits.velocity == Unit.MPH
        loadMetricUnits()
        assert PreferredUnits.velocity == Unit.KMH
        assert PreferredUnits.height == Unit.Meter
        loadImperialUnits()
        assert PreferredUnits.velocity == Unit.MPH
        assert PreferredUnits.clearance == Unit.Inch
        PreferredUnits.restore_defaults()
        assert PreferredUnits.clearance == Unit.Centimeter


class TestUnitsParser:

    @pytest.mark.parametrize("alias, expected", [
        ('mph', Unit.MPH), ('km/h', Unit.KMH), ('feet', Unit.Foot), ('cm', Unit.Centimeter),
        ('degrees', Unit.Degree), ('clearance', Unit.Centimeter), ('velocity', Unit.MPH),
    ])
    def test_parse_units(self, alias, expected):
        assert Unit._parse_unit(alias) == expected

    def test_parse_unknown_unit(self):
        assert Unit._parse_unit('furlong') is None

    def test_parse_values(self):
        ret = Unit.parse('120mph')
        assert isinstance(ret, Velocity)
        assert (ret >> Unit.MPH) == pytest.approx(120)

        ret = Unit.parse(20, 'clearance')
        assert isinstance(ret, Distance)
        assert ret.units == Unit.Centimeter

    def test_parse_bad_alias(self):
        with pytest.raises(UnitAliasError):
            Unit.parse(10, 'furlong')


class TestConversions:

    @pytest.mark.parametrize("unit, raw", [
        (Unit.Inch, 0.0254), (Unit.Foot, 0.3048), (Unit.Centimeter, 0.01), (Unit.Meter, 1.0),
    ])
    def test_distance(self, unit, raw):
        assert Distance(1, unit).raw_value == pytest.approx(raw)
        assert (Distance.Meter(raw) >> unit) == pytest.approx(1)

    @pytest.mark.parametrize("unit, raw", [
        (Unit.MPS, 1.0), (Unit.KMH, 1 / 3.6), (Unit.FPS, 0.3048), (Unit.MPH, 0.44704),
    ])
    def test_velocity(self, unit, raw):
        assert Velocity(1, unit).raw_value == pytest.approx(raw)

    def test_angular(self):
        assert (Angular.Degree(180) >> Unit.Radian) == pytest.approx(math.pi)
        assert (Angular.Degree(-45) >> Unit.Degree) == pytest.approx(-45)
        assert (Angular.Degree(270) >> Unit.Degree) == pytest.approx(-90)

    def test_height_arithmetic(self):
        height = Distance.Foot(5) + Distance.Inch(5)
        assert height.units == Unit.Foot
        assert (height >> Unit.Inch) == pytest.approx(65)

    def test_incompatible_dimension(self):
        with pytest.raises(UnitConversionError):
            Distance.Meter(1) >> Unit.MPH

    def test_unit_call(self):
        assert isinstance(Unit.Centimeter(20), Distance)
        assert isinstance(Unit.MPH(Velocity.MPS(10)), Velocity)

    def test_str(self):
        assert str(Distance.Centimeter(20)) == '20.0cm'
        assert str(Velocity.MPH(120)) == '120.0mph'


class TestPreferredUnits:

    def test_set_and_restore(self):
        PreferredUnits.set(velocity='kmh', clearance=Unit.Inch)
        assert PreferredUnits.velocity == Unit.KMH
        assert PreferredUnits.clearance == Unit.Inch
        PreferredUnits.restore_defaults()
        assert PreferredUnits.velocity == Unit.MPH

    def test_set_ignores_invalid(self, caplog):
        PreferredUnits.set(velocity='furlong', nonsense='meter')
        assert PreferredUnits.velocity == Unit.MPH
        assert "not a member of Unit" in caplog.text
        assert "not found in preferred_units" in caplog.text

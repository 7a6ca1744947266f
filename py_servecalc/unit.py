"""Unit conversion system for serve calculations.

This module provides a type-safe unit conversion system for the physical dimensions
a serve calculation deals with: angles, distances and velocities.

The system uses a base class `GenericDimension` with specialized subclasses for each
physical dimension. Each dimension keeps its value internally in a fixed SI raw unit
(radians, meters, meters per second) and converts to any supported unit on request.

Examples:
    >>> # ----------------- Creation and conversion -----------------
    >>> v = Velocity.MPH(50)
    >>> round(v >> Velocity.MPS, 3)    # Conversion operator -> float
    22.352
    >>> h = Distance.Foot(5) + Distance.Inch(5)
    >>> round(h >> Distance.Meter, 3)
    1.651
    >>> Angular.Degree(90) << Angular.Radian
    <Angular: 1.570796rad (1.5708)>

Supported Dimensions:
    * Angular: `radian`, `degree`
    * Distance: `inch`, `foot`, `centimeter`, `meter`
    * Velocity: `m/s`, `km/h`, `ft/s`, `mph`
"""

# Standard library imports
from __future__ import annotations
from dataclasses import dataclass, fields, MISSING
from enum import IntEnum
from math import pi
import re
from typing import NamedTuple, Union, TypeVar, Optional, Tuple, Final, Mapping, Any

from typing_extensions import Self, TypeAlias, override

# Local imports
from py_servecalc.exceptions import UnitTypeError, UnitConversionError, UnitAliasError
from py_servecalc.logger import logger

Number: TypeAlias = Union[float, int]

_GenericDimensionType = TypeVar('_GenericDimensionType', bound='GenericDimension')


class Unit(IntEnum):
    """Enumeration of all supported unit types.

    - Angular: Radian, Degree
    - Distance: Inch, Foot, Centimeter, Meter
    - Velocity: MPS (meters/second), KMH (km/hour), FPS (feet/second), MPH (miles/hour)

    Each unit can be used as a callable constructor for creating unit instances:

    Examples:
        >>> serve_speed = Unit.MPH(120)
        >>> contact_height = Unit.Meter(2.6)
        >>> elevation = Unit.Degree(4.5)
    """

    Radian = 0
    Degree = 1

    Inch = 10
    Foot = 11
    Centimeter = 16
    Meter = 17

    MPS = 60
    KMH = 61
    FPS = 62
    MPH = 63

    @property
    def key(self) -> str:
        """Readable name of the unit of measure."""
        return UnitPropsDict[self].name

    @property
    def accuracy(self) -> int:
        """Default accuracy of the unit of measure."""
        return UnitPropsDict[self].accuracy

    @property
    def symbol(self) -> str:
        """Short symbol of the unit of measure."""
        return UnitPropsDict[self].symbol

    def __repr__(self) -> str:
        return UnitPropsDict[self].name

    def __call__(self: Self, value: Union[Number, _GenericDimensionType]) -> _GenericDimensionType:
        """Create a new unit instance using dot syntax.

        Args:
            value: Numeric value of the unit or an existing GenericDimension instance.

        Returns:
            An instance of the corresponding unit dimension.

        Raises:
            UnitTypeError: If the unit type is not supported.
        """
        obj: GenericDimension
        if isinstance(value, GenericDimension):
            return value << self  # type: ignore
        if 0 <= self < 10:
            obj = Angular(value, self)
        elif 10 <= self < 20:
            obj = Distance(value, self)
        elif 60 <= self < 70:
            obj = Velocity(value, self)
        else:
            raise UnitTypeError(f"{self} Unit is not supported")
        return obj  # type: ignore

    @staticmethod
    def _find_unit_by_alias(string_to_find: str, aliases: UnitAliasesType) -> Optional[Unit]:
        """Find a unit type by searching through a dictionary that maps strings to Units."""
        for aliases_tuple in aliases.keys():
            if string_to_find in (each.lower() for each in aliases_tuple):
                return aliases[aliases_tuple]
        return None

    @staticmethod
    def _parse_unit(input_: str) -> Union[Unit, None, Any]:
        """Parse a unit type from a string representation.

        Tries, in order: a PreferredUnits attribute name, a direct Unit enum name,
        then UnitAliases (with a simple plural fallback).

        Examples:
            >>> Unit._parse_unit('meter')
            meter
            >>> Unit._parse_unit('mph').name
            'MPH'
            >>> Unit._parse_unit('oops')      # None
        """
        if not isinstance(input_, str):
            raise TypeError(f"String expected, got {type(input_)=}, {input_=}")
        input_ = input_.strip().lower()
        input_ = re.sub(r"\s+", "", input_)
        if hasattr(PreferredUnits, input_):
            return getattr(PreferredUnits, input_)
        try:
            return Unit[input_]
        except KeyError:
            if (unit := Unit._find_unit_by_alias(input_, UnitAliases)) is not None:
                return unit
            if input_.endswith('s'):
                singular = input_[:-1]
                if (unit := Unit._find_unit_by_alias(singular, UnitAliases)) is not None:
                    return unit
            return None

    @staticmethod
    def parse(input_: Union[str, Number],
              preferred: Optional[Union[Unit, str]] = None) -> Optional[Union[GenericDimension, Any]]:
        """Parse a value with optional unit specification into a unit measurement.

        Args:
            input_: Value to parse - a number or a string with optional unit suffix.
            preferred: Unit used for bare numeric inputs, as Unit enum or string alias.

        Raises:
            TypeError: If input type is not supported.
            UnitAliasError: If unit alias cannot be parsed.

        Examples:
            >>> Unit.parse('120mph')
            <Velocity: 120.0mph (53.6448)>
            >>> Unit.parse(20, 'clearance')
            <Distance: 20.0cm (0.2)>
        """

        def create_as_preferred(value_):
            if isinstance(preferred, Unit):
                return preferred(float(value_))
            if isinstance(preferred, str):
                if units_ := Unit._parse_unit(preferred):
                    return units_(float(value_))
            raise UnitAliasError(f"Unsupported {preferred=} unit alias")

        if isinstance(input_, (float, int)):
            return create_as_preferred(input_)

        if not isinstance(input_, str):
            raise TypeError(f"type, [str, float, int] expected for 'input_', got {type(input_)}")

        input_string = input_.replace(" ", "")
        if match := re.match(r'^-?(?:\d+\.\d*|\.\d+|\d+\.?)$', input_string):
            return create_as_preferred(match.group())

        if match := re.match(r'(^-?(?:\d+\.\d*|\.\d+|\d+\.?))(.*$)', input_string):
            value, alias = match.groups()
            if units := Unit._parse_unit(alias):
                return units(float(value))
            raise UnitAliasError(f"Unsupported unit {alias=}")

        raise UnitAliasError(f"Can't parse unit {input_=}")


class UnitProps(NamedTuple):
    """Properties and display characteristics for unit measurements.

    Attributes:
        name: Human-readable name of the unit (e.g., 'meter').
        accuracy: Number of decimal places for formatting values for display.
        symbol: Standard symbol or abbreviation for the unit (e.g., 'm').
    """

    name: str
    accuracy: int
    symbol: str


#: Mapping from Unit -> UnitProps used for formatting/display of units.
UnitPropsDict: Mapping[Unit, UnitProps] = {
    Unit.Radian: UnitProps('radian', 6, 'rad'),
    Unit.Degree: UnitProps('degree', 1, '°'),

    Unit.Inch: UnitProps("inch", 1, "inch"),
    Unit.Foot: UnitProps("foot", 2, "ft"),
    Unit.Centimeter: UnitProps("centimeter", 0, "cm"),
    Unit.Meter: UnitProps("meter", 2, "m"),

    Unit.MPS: UnitProps('mps', 1, 'm/s'),
    Unit.KMH: UnitProps('kmh', 1, 'km/h'),
    Unit.FPS: UnitProps('fps', 1, 'ft/s'),
    Unit.MPH: UnitProps('mph', 1, 'mph'),
}

UnitAliasesType: TypeAlias = Mapping[Tuple[str, ...], Unit]

UnitAliases: UnitAliasesType = {
    ('radian', 'rad'): Unit.Radian,
    ('degree', 'deg'): Unit.Degree,

    ('inch', 'in'): Unit.Inch,
    ('foot', 'feet', 'ft'): Unit.Foot,
    ('centimeter', 'cm'): Unit.Centimeter,
    ('meter', 'm'): Unit.Meter,

    ('meter/second', 'm/s', 'meter/s', 'm/second', 'mps'): Unit.MPS,
    ('kilometer/hour', 'km/h', 'kilometer/h', 'km/hour', 'kmh'): Unit.KMH,
    ('foot/second', 'feet/second', 'ft/s', 'foot/s', 'feet/s', 'ft/second', 'fps'): Unit.FPS,
    ('mile/hour', 'mi/h', 'mile/h', 'mi/hour', 'mph'): Unit.MPH,
}


class GenericDimension:
    """Abstract base class for typed unit dimensions.

    Each dimension (Distance, Velocity, Angular) inherits from this class and defines
    its own conversion factors to the raw unit.

    Attributes:
        _value: Internal value stored in the dimension's raw unit.
        _defined_units: The unit type this instance was created with.
        _conversion_factors: Mapping of units to their conversion factors.
    """

    _value: Number
    _defined_units: Unit
    __slots__ = ('_value', '_defined_units')
    _conversion_factors: Mapping[Unit, float] = {}

    def __init__(self, value: Number, units: Unit):
        self._value: Number = self.__class__.to_raw(value, units)
        self._defined_units: Unit = units

    def __str__(self) -> str:
        units = self._defined_units
        props = UnitPropsDict[units]
        v = self.from_raw(self._value, units)
        return f'{round(v, props.accuracy)}{props.symbol}'

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}: {self << self.units} ({round(self._value, 4)})>'

    def __float__(self) -> float:
        return float(self._value)

    def __int__(self) -> int:
        return int(self._value)

    def __eq__(self, other) -> bool:
        return float(self) == other

    def __hash__(self) -> int:
        return hash((self._value, self._defined_units))

    def __lt__(self, other) -> bool:
        return float(self) < other

    def __gt__(self, other) -> bool:
        return float(self) > other

    def __le__(self, other) -> bool:
        return float(self) <= other

    def __ge__(self, other) -> bool:
        return float(self) >= other

    @classmethod
    def _validate_unit_type(cls, units: Unit):
        """Validate that units are compatible with this dimension.

        Raises:
            UnitConversionError: If the unit is not supported by this dimension.
        """
        if not isinstance(units, Unit):
            err_msg = f"Type expected: {Unit}, {type(Unit).__name__}; got: {type(units).__name__} ({units})"
            raise TypeError(err_msg)
        if units not in cls._conversion_factors.keys():
            raise UnitConversionError(f'{cls.__name__}: unit {units} is not supported')

    @classmethod
    def new_from_raw(cls, raw_value: float, to_units: Unit) -> Self:
        """Create a new instance from a raw value in base units."""
        cls._validate_unit_type(to_units)
        return cls(raw_value / cls._conversion_factors[to_units], to_units)

    @classmethod
    def from_raw(cls, raw_value: float, unit: Unit) -> Number:
        """Convert a raw value to the specified units."""
        cls._validate_unit_type(unit)
        return raw_value / cls._conversion_factors[unit]

    @classmethod
    def to_raw(cls, value: Number, units: Unit) -> Number:
        """Convert a value in specified units to the raw unit."""
        cls._validate_unit_type(units)
        return value * cls._conversion_factors[units]

    def convert(self, units: Unit) -> Self:
        """Convert this measurement to different units within the same dimension."""
        return self.__class__.new_from_raw(self._value, units)

    def get_in(self, units: Unit) -> Number:
        """Get the numeric value of this measurement in specified units.

        Examples:
            >>> Distance.Centimeter(20).get_in(Distance.Meter)
            0.2
        """
        return self.__class__.from_raw(self._value, units)

    @property
    def units(self) -> Unit:
        """Unit type this instance was defined with."""
        return self._defined_units

    @property
    def unit_value(self) -> Number:
        """Numeric value in the defined units."""
        return self.get_in(self.units)

    @property
    def raw_value(self) -> Number:
        """Internal raw (SI) value used for calculations."""
        return self._value

    # operators: prefer non-mutating behavior
    __rshift__ = get_in

    def __lshift__(self, units: Unit) -> Self:
        return self.__class__.new_from_raw(self._value, units)

    def __rlshift__(self, units: Unit) -> Self:
        return self.__class__.new_from_raw(self._value, units)

    #region GenericDimension arithmetic operators
    def __mul__(self, other: Number) -> Self:
        if isinstance(other, (int, float)):
            return self.__class__.new_from_raw(self._value * other, self.units)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other: Union[Number, Self]) -> Union[Self, float]:
        """Divide by a number (same dimension) or by the same dimension (float ratio)."""
        if isinstance(other, (int, float)):
            if other == 0:
                raise ZeroDivisionError("division by zero")
            return self.__class__.new_from_raw(self._value / other, self.units)
        if isinstance(other, self.__class__):
            if other._value == 0:
                raise ZeroDivisionError("division by zero")
            return float(self._value) / float(other.raw_value)
        return NotImplemented

    def __add__(self, other: Union[Number, Self]) -> Self:
        """Add a number (interpreted in current units) or same dimension value.

        The result keeps the left operand's units.
        """
        if isinstance(other, (int, float)):
            raw = self._value + float(other) * self._conversion_factors[self.units]
            return self.__class__.new_from_raw(raw, self.units)
        if isinstance(other, self.__class__):
            return self.__class__.new_from_raw(self._value + other._value, self.units)
        return NotImplemented

    def __radd__(self, other: Number) -> Self:
        if isinstance(other, (int, float)):
            raw = self._value + float(other) * self._conversion_factors[self.units]
            return self.__class__.new_from_raw(raw, self.units)
        return NotImplemented

    def __sub__(self, other: Union[Number, Self]) -> Self:
        if isinstance(other, (int, float)):
            raw = self._value - float(other) * self._conversion_factors[self.units]
            return self.__class__.new_from_raw(raw, self.units)
        if isinstance(other, self.__class__):
            return self.__class__.new_from_raw(self._value - other._value, self.units)
        return NotImplemented
    #endregion GenericDimension arithmetic operators


class Angular(GenericDimension):
    """Angular measurements.  Raw value is radians.

    Angles are normalized to the range (-π, π].
    """

    _conversion_factors = {
        Unit.Radian: 1.,
        Unit.Degree: pi / 180,
    }

    @property
    def _rad(self):
        """Shortcut for `>> Angular.Radian`."""
        return self._value

    @override
    @classmethod
    def to_raw(cls, value: Number, units: Unit) -> Number:
        """Normalize angle to (-π, π]."""
        radians = super().to_raw(value, units)
        r = (radians + pi) % (2.0 * pi) - pi
        return r if r > -pi else pi  # move -π to +π

    # Angular.* unit aliases
    Radian: Final[Unit] = Unit.Radian
    Degree: Final[Unit] = Unit.Degree


class Distance(GenericDimension):
    """Distance measurements.  Raw value is meters."""

    _conversion_factors = {
        Unit.Inch: 0.0254,
        Unit.Foot: 0.3048,
        Unit.Centimeter: 0.01,
        Unit.Meter: 1.,
    }

    @property
    def _meters(self) -> Number:
        """Shortcut for `>> Distance.Meter`."""
        return self._value

    # Distance.* unit aliases
    Inch: Final[Unit] = Unit.Inch
    Foot: Final[Unit] = Unit.Foot
    Feet: Final[Unit] = Unit.Foot
    Centimeter: Final[Unit] = Unit.Centimeter
    Meter: Final[Unit] = Unit.Meter


class Velocity(GenericDimension):
    """Velocity measurements.  Raw unit is meters per second."""

    _conversion_factors = {
        Unit.MPS: 1.,
        Unit.KMH: 1. / 3.6,
        Unit.FPS: 0.3048,
        Unit.MPH: 0.44704,
    }

    @property
    def _mps(self) -> Number:
        """Shortcut for `>> Velocity.MPS`."""
        return self._value

    # Velocity.* unit aliases
    MPS: Final[Unit] = Unit.MPS
    KMH: Final[Unit] = Unit.KMH
    FPS: Final[Unit] = Unit.FPS
    MPH: Final[Unit] = Unit.MPH


class PreferredUnitsMeta(type):
    """Provide representation method for static dataclasses."""

    def __repr__(cls):
        return '\n'.join(f'{field} = {getattr(cls, field)!r}'
                         for field in getattr(cls, '__dataclass_fields__'))


@dataclass
class PreferredUnits(metaclass=PreferredUnitsMeta):
    """Default units used for bare-number inputs and for formatted output.

    Default Configuration:
        * angular: Degree (elevation and azimuth display)
        * distance: Meter (landing distance, depth past the net)
        * velocity: MPH (serve speed)
        * height: Foot (contact height)
        * step_in: Meter (step-in distance past the baseline)
        * clearance: Centimeter (requested and achieved net clearance)

    Examples:
        >>> PreferredUnits.set(velocity='kmh', clearance='inch')
        >>> PreferredUnits.restore_defaults()

    Note:
        Preferred units only affect input interpretation and display. The solvers
        always work in SI units.
    """

    # Defaults
    angular: Unit = Unit.Degree
    distance: Unit = Unit.Meter
    velocity: Unit = Unit.MPH
    height: Unit = Unit.Foot
    step_in: Unit = Unit.Meter
    clearance: Unit = Unit.Centimeter

    @classmethod
    def restore_defaults(cls):
        """Reset all preferred units to their default values."""
        for f in fields(cls):
            if f.default is not MISSING:
                setattr(cls, f.name, f.default)

    @classmethod
    def set(cls, **kwargs: Union[Unit, str]):
        """Set preferred units from keyword arguments.

        Accepts Unit enum values or string aliases. Invalid attributes or values are
        logged as warnings and ignored.
        """
        for attribute, value in kwargs.items():
            if hasattr(PreferredUnits, attribute):
                if isinstance(value, Unit):
                    setattr(PreferredUnits, attribute, value)
                elif isinstance(value, str):
                    if _unit := Unit._parse_unit(value):
                        setattr(PreferredUnits, attribute, _unit)
                    else:
                        logger.warning(f"{value=} not a member of Unit")
                else:
                    logger.warning(f"type of {value=} have not been converted to a member of Unit")
            else:
                logger.warning(f"{attribute=} not found in preferred_units")


__all__ = (
    'Unit',
    'GenericDimension',
    'UnitProps',
    'UnitAliases',
    'UnitPropsDict',
    'Distance',
    'Velocity',
    'Angular',
    'PreferredUnits',
    'UnitAliasError',
    'UnitTypeError',
    'UnitConversionError',
)

"""Parameters for computing a serve.

Classes:
- TargetZone: Where in the service box the serve is aimed (WIDE or T).
- ServeSide: Which court the serve is hit from; only flips the azimuth sign.
- ServeInput: The raw, dimensioned input record, as a form or CLI would collect it.
- ServeProps: ServeInput translated into sanitized SI scalars for the solvers.

Notes:
- End users build ServeInput objects; engines construct ServeProps internally so the
    solvers never deal with units or out-of-range values.
- ServeSolution objects include the ServeProps instance used to compute them.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from typing_extensions import Optional, Union

from py_servecalc.constants import cBaselineToNet, cDefaultStepIn
from py_servecalc.logger import logger
from py_servecalc.unit import Distance, PreferredUnits, Velocity

if TYPE_CHECKING:
    from py_servecalc.engine import ServeEngineConfig

__all__ = ('TargetZone', 'ServeSide', 'ServeInput', 'ServeProps')


class TargetZone(Enum):
    """Aim point inside the service box."""

    WIDE = 'wide'
    T = 't'

    @classmethod
    def parse(cls, value: Union[str, TargetZone]) -> TargetZone:
        """Parse a target zone from its name or value, case-insensitively.

        Raises:
            ValueError: If `value` names no target zone.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown target zone {value!r}, expected one of "
                             f"{[zone.value for zone in cls]}") from None


class ServeSide(Enum):
    """Court the serve is hit from. Deuce-side azimuths are positive."""

    DEUCE = 'deuce'
    AD = 'ad'

    @property
    def sign(self) -> float:
        return 1.0 if self is ServeSide.DEUCE else -1.0

    @classmethod
    def parse(cls, value: Union[str, ServeSide]) -> ServeSide:
        """Parse a serve side from its name or value, case-insensitively.

        Raises:
            ValueError: If `value` names no serve side.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown serve side {value!r}, expected one of "
                             f"{[side.value for side in cls]}") from None


@dataclass
class ServeInput:
    """All information needed to compute a serve.

    Bare numbers are interpreted in `PreferredUnits`.

    Attributes:
        speed: Serve speed at contact.
        height: Contact height above the court.
        target: Aim point inside the service box.
        step_in: Contact point distance inside the baseline.
        clearance: Requested minimum clearance over the net.
        side: Court the serve is hit from.
    """

    speed: Velocity
    height: Distance
    target: TargetZone
    step_in: Distance
    clearance: Distance
    side: ServeSide

    def __init__(
        self,
        *,
        speed: Union[float, Velocity],
        height: Union[float, Distance],
        target: Union[str, TargetZone] = TargetZone.WIDE,
        step_in: Optional[Union[float, Distance]] = None,
        clearance: Optional[Union[float, Distance]] = None,
        side: Union[str, ServeSide] = ServeSide.DEUCE,
    ):
        self.speed = PreferredUnits.velocity(speed)
        self.height = PreferredUnits.height(height)
        self.target = TargetZone.parse(target)
        self.step_in = (PreferredUnits.step_in(step_in) if step_in is not None
                        else Distance.Meter(cDefaultStepIn))
        self.clearance = (PreferredUnits.clearance(clearance) if clearance is not None
                          else Distance.Centimeter(20))
        self.side = ServeSide.parse(side)

    @classmethod
    def from_record(cls,
                    speed_mph: Optional[float],
                    height_feet: Optional[float],
                    height_inches: Optional[float],
                    target_zone: Union[str, TargetZone],
                    step_in_meters: Optional[float] = cDefaultStepIn,
                    clearance_cm: Optional[float] = 20,
                    side: Union[str, ServeSide] = ServeSide.DEUCE) -> ServeInput:
        """Build an input from the flat form record (mph, feet + inches, m, cm).

        Missing numbers count as zero and are floored later, when props are built.
        """
        return cls(
            speed=Velocity.MPH(speed_mph or 0),
            height=Distance.Foot(height_feet or 0) + Distance.Inch(height_inches or 0),
            target=target_zone,
            step_in=Distance.Meter(step_in_meters or 0),
            clearance=Distance.Centimeter(clearance_cm or 0),
            side=side,
        )


@dataclass(frozen=True)
class ServeProps:
    """ServeInput reduced to sanitized SI scalars.

    Attributes:
        speed_mps: Serve speed (m/s), floored to the configured minimum.
        height_m: Contact height (m), floored to the configured minimum.
        step_in_m: Step-in distance (m), clamped to `[0, cMaxStepIn]`.
        x_net_m: Horizontal distance from contact point to the net (m), always positive.
        margin_m: Requested net clearance (m), floored to the configured minimum.
        target: Aim point inside the service box.
        side: Court the serve is hit from.
    """

    speed_mps: float
    height_m: float
    step_in_m: float
    x_net_m: float
    margin_m: float
    target: TargetZone
    side: ServeSide

    @classmethod
    def from_input(cls, serve_input: ServeInput, config: ServeEngineConfig) -> ServeProps:
        """Convert ServeInput into floats dimensioned in internal units.

        Values below the physical floors are raised silently (logged at DEBUG);
        step-in outside the accepted range is clamped with a warning.
        """
        speed = serve_input.speed >> Velocity.MPS
        v = max(config.cMinimumSpeed, speed)
        if v != speed:
            logger.debug(f"Serve speed {speed:.3f} m/s raised to {v:.3f} m/s")

        height = serve_input.height >> Distance.Meter
        h0 = max(config.cMinimumHeight, height)
        if h0 != height:
            logger.debug(f"Contact height {height:.3f} m raised to {h0:.3f} m")

        step_in = serve_input.step_in >> Distance.Meter
        step_in_m = min(config.cMaxStepIn, max(0.0, step_in))
        if step_in_m != step_in:
            logger.warning(f"Step-in {step_in:.3f} m outside [0, {config.cMaxStepIn}] m, "
                           f"clamped to {step_in_m:.3f} m")

        clearance = serve_input.clearance >> Distance.Meter
        margin = max(config.cMinimumClearance, clearance)
        if margin != clearance:
            logger.debug(f"Requested clearance {clearance:.3f} m raised to {margin:.3f} m")

        return cls(
            speed_mps=v,
            height_m=h0,
            step_in_m=step_in_m,
            x_net_m=cBaselineToNet - step_in_m,
            margin_m=margin,
            target=serve_input.target,
            side=serve_input.side,
        )

"""Result records of a serve computation.

Classes:
- ServeStatus: Terminal state of the reconciliation (UNCONSTRAINED or CLAMPED).
- ServeCandidates: The candidate angles the reconciler chose from.
- ServeSolution: Final elevation/azimuth with achieved clearance and landing geometry.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from typing_extensions import Any, Dict, List, NamedTuple, Optional, Tuple

from py_servecalc.conditions import ServeProps, TargetZone
from py_servecalc.constants import cGravityConstant
from py_servecalc.trajectory import TrajectorySample, sample_trajectory
from py_servecalc.unit import Angular, Distance, GenericDimension, PreferredUnits, Unit, Velocity

__all__ = ('ServeStatus', 'ServeCandidates', 'ServeSolution')


class ServeStatus(Enum):
    """Terminal states of the angle reconciliation.

    - UNCONSTRAINED: The preferred angle lands legally and is used as is.
    - CLAMPED: The preferred angle was reduced to the legal (service-line-limited) maximum.
    """

    UNCONSTRAINED = 'unconstrained'
    CLAMPED = 'clamped'


class ServeCandidates(NamedTuple):
    """Candidate elevation angles, in radians.

    Attributes:
        depth_angle: Angle landing at the preferred depth past the net.
        margin_angle: Angle clearing the net by exactly the requested margin
            (best effort if `margin_reachable` is False).
        service_max_angle: Steepest angle still landing inside the service box.
        margin_reachable: False if no angle within the admissible range reaches the
            requested net clearance.
    """

    depth_angle: float
    margin_angle: float
    service_max_angle: float
    margin_reachable: bool = True

    @property
    def preferred_angle(self) -> float:
        """The larger of the depth and margin angles."""
        return max(self.depth_angle, self.margin_angle)


@dataclass(frozen=True)
class ServeSolution:
    """Computed serve angles and the geometry they produce.

    Attributes:
        props: Sanitized inputs used for the computation.
        status: Terminal state of the reconciliation.
        elevation_rad: Elevation angle (radians).
        azimuth_rad: Azimuth angle (radians), positive on the deuce side.
        clearance_m: Height above the net at the net's position (m), negative if the ball hits it.
        landing_distance_m: Landing distance from the contact point (m).
        depth_past_net_m: Landing distance past the net (m).
        margin_satisfied: Achieved clearance meets the requested margin.
        candidates: Candidate angles the final angle was chosen from.
        lateral_offset_m: Lateral aim offset from the center line (m).
        aim_distance_m: Horizontal reference distance used for the azimuth (m).
    """

    props: ServeProps
    status: ServeStatus
    elevation_rad: float
    azimuth_rad: float
    clearance_m: float
    landing_distance_m: float
    depth_past_net_m: float
    margin_satisfied: bool
    candidates: ServeCandidates
    lateral_offset_m: float
    aim_distance_m: float
    gravity: float = cGravityConstant

    @property
    def clamped_to_service_line(self) -> bool:
        return self.status is ServeStatus.CLAMPED

    @property
    def elevation(self) -> Angular:
        return Angular.Radian(self.elevation_rad)

    @property
    def azimuth(self) -> Angular:
        return Angular.Radian(self.azimuth_rad)

    @property
    def clearance(self) -> Distance:
        return Distance.Meter(self.clearance_m)

    @property
    def landing_distance(self) -> Distance:
        return Distance.Meter(self.landing_distance_m)

    @property
    def depth_past_net(self) -> Distance:
        return Distance.Meter(self.depth_past_net_m)

    @property
    def speed(self) -> Velocity:
        return Velocity.MPS(self.props.speed_mps)

    @property
    def aim_hint(self) -> str:
        """Plain-language direction of the azimuth."""
        return "toward sideline" if self.props.target is TargetZone.WIDE else "toward center"

    @property
    def advisory(self) -> Optional[str]:
        """Warning to show the player when the requested clearance could not be met."""
        if self.margin_satisfied:
            return None
        if self.clamped_to_service_line:
            return ("Your requested clearance may be too large at this speed/height to still land "
                    "inside the box. Shown is the deepest legal angle (on the service line) "
                    "with the achieved clearance.")
        return "Your requested clearance is not met at this speed/height."

    def trajectory(self, points: int = 160) -> List[TrajectorySample]:
        """Sample the flight from contact to landing, for display.

        Args:
            points: Number of evenly spaced samples.
        """
        return sample_trajectory(self.props.speed_mps, self.elevation_rad, self.props.height_m,
                                 self.landing_distance_m, points, self.gravity)

    def formatted(self) -> Tuple[str, ...]:
        """Return the main results as strings, formatted per PreferredUnits.

        Returns:
            Elevation, azimuth (unsigned), clearance, landing distance, depth past net, status.
        """

        def _fmt(v: GenericDimension, u: Unit) -> str:
            """Format Dimension as a string."""
            return f"{v >> u:.{u.accuracy}f} {u.symbol}"

        return (
            _fmt(self.elevation, PreferredUnits.angular),
            _fmt(Angular.Radian(abs(self.azimuth_rad)), PreferredUnits.angular),
            _fmt(self.clearance, PreferredUnits.clearance),
            _fmt(self.landing_distance, PreferredUnits.distance),
            _fmt(self.depth_past_net, PreferredUnits.distance),
            self.status.value,
        )

    def in_def_units(self) -> Tuple[float, ...]:
        """Return the main results as floats converted to PreferredUnits."""
        return (
            self.elevation >> PreferredUnits.angular,
            self.azimuth >> PreferredUnits.angular,
            self.clearance >> PreferredUnits.clearance,
            self.landing_distance >> PreferredUnits.distance,
            self.depth_past_net >> PreferredUnits.distance,
        )

    def to_dict(self) -> Dict[str, Any]:
        """The output record, with SI values and camelCase keys."""
        return {
            'elevationRad': self.elevation_rad,
            'azimuthRad': self.azimuth_rad,
            'clearanceM': self.clearance_m,
            'landingDistanceM': self.landing_distance_m,
            'depthPastNetM': self.depth_past_net_m,
            'clampedToServiceLine': self.clamped_to_service_line,
            'marginSatisfied': self.margin_satisfied,
        }

    def __str__(self) -> str:
        elevation, azimuth, clearance, _, depth, status = self.formatted()
        return (f"elevation {elevation}, azimuth {azimuth} ({self.aim_hint}), "
                f"net clearance {clearance}, lands {depth} past the net [{status}]")

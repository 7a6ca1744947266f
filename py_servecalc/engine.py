"""Serve angle engine: depth and clearance solvers and the angle reconciler.

The module provides:
- Engine configuration through ServeEngineConfig and ServeEngineConfigDict
- ServeEngine, which solves for the elevation angle that lands at a target depth,
  the elevation angle that clears the net by a target margin, and reconciles the
  two into one legal serve angle

Classes:
    ServeEngineConfig: Dataclass configuration for engine parameters
    ServeEngineConfigDict: TypedDict version for flexible configuration
    ServeEngine: Solvers and reconciler

Reconciliation policy:
    The preferred angle is the larger of the depth angle and the margin angle. If it
    would land beyond the service line (less a small safety distance), or if no
    admissible angle reaches the requested clearance at all, the serve is CLAMPED to
    the steepest legal angle; otherwise it is UNCONSTRAINED. Whether the requested
    clearance was met is reported separately and never raises.

All calculations are done in SI units (meters, m/s, radians).
"""
from __future__ import annotations

import math
from dataclasses import dataclass, asdict

from typing_extensions import Optional, Tuple, TypedDict, Union

from py_servecalc import constants
from py_servecalc.conditions import ServeInput, ServeProps, TargetZone
from py_servecalc.logger import logger
from py_servecalc.roots import RootResult, find_root, golden_section_max
from py_servecalc.solution import ServeCandidates, ServeSolution, ServeStatus
from py_servecalc.trajectory import cLandingIterations, cMaxLandingDistance, height_at, landing_distance

__all__ = (
    'create_serve_engine_config',
    'ServeEngineConfig',
    'ServeEngineConfigDict',
    'DEFAULT_SERVE_ENGINE_CONFIG',
    'ServeEngine',
)

cBisectIterations: int = 90  # bisection steps for the angle solvers
cBracketLowDeg: float = -20.0  # initial bracket, degrees
cBracketHighDeg: float = 35.0
cBracketStepDeg: float = 5.0  # widening per side per expansion, degrees
cMaxBracketExpansions: int = 40
cMinimumElevationDeg: float = -85.0  # lowest admissible elevation, degrees
cMaximumElevationDeg: float = 89.9  # upper end of max-range and max-height searches, degrees


@dataclass
class ServeEngineConfig:
    """Configuration dataclass for the serve engine.

    Attributes:
        cGravityConstant: Gravitational acceleration (m/s²).
        cMinimumSpeed: Speeds below this are raised to it (m/s).
        cMinimumHeight: Contact heights below this are raised to it (m).
        cMinimumClearance: Requested clearances below this are raised to it (m).
        cMaxStepIn: Step-in is clamped to `[0, cMaxStepIn]` (m).
        cMaxLandingDistance: Upper end of the landing-distance bisection (m).
        cLandingIterations: Bisection steps for the landing distance.
        cBisectIterations: Bisection steps for the angle solvers.
        cBracketLowDeg: Initial low end of the angle bracket (degrees).
        cBracketHighDeg: Initial high end of the angle bracket (degrees).
        cBracketStepDeg: Bracket widening per side per expansion (degrees).
        cMaxBracketExpansions: Maximum number of bracket expansions.
        cMinimumElevationDeg: Lowest admissible elevation (degrees).
        cStrictBracketing: Raise BracketError instead of returning a best-effort angle
            when a solver finds no sign change.
        cServiceLineSafety: Legal maximum angle lands this far short of the service line (m).
        cMarginEpsilon: Tolerance for the requested-clearance check (m).
        cPreferredDepthWide: Target depth past the net for WIDE serves (m).
        cPreferredDepthT: Target depth past the net for T serves (m).
        cLateralOffsetWide: Lateral aim offset for WIDE serves (m).
        cLateralOffsetT: Lateral aim offset for T serves (m).

    Examples:
        >>> config = ServeEngineConfig(cPreferredDepthWide=5.5, cStrictBracketing=True)
    """

    cGravityConstant: float = constants.cGravityConstant
    cMinimumSpeed: float = constants.cMinimumSpeed
    cMinimumHeight: float = constants.cMinimumHeight
    cMinimumClearance: float = constants.cMinimumClearance
    cMaxStepIn: float = constants.cMaxStepIn
    cMaxLandingDistance: float = cMaxLandingDistance
    cLandingIterations: int = cLandingIterations
    cBisectIterations: int = cBisectIterations
    cBracketLowDeg: float = cBracketLowDeg
    cBracketHighDeg: float = cBracketHighDeg
    cBracketStepDeg: float = cBracketStepDeg
    cMaxBracketExpansions: int = cMaxBracketExpansions
    cMinimumElevationDeg: float = cMinimumElevationDeg
    cStrictBracketing: bool = False
    cServiceLineSafety: float = constants.cServiceLineSafety
    cMarginEpsilon: float = constants.cMarginEpsilon
    cPreferredDepthWide: float = constants.cPreferredDepthWide
    cPreferredDepthT: float = constants.cPreferredDepthT
    cLateralOffsetWide: float = constants.cLateralOffsetWide
    cLateralOffsetT: float = constants.cLateralOffsetT


#: Default configuration instance
DEFAULT_SERVE_ENGINE_CONFIG: ServeEngineConfig = ServeEngineConfig()


class ServeEngineConfigDict(TypedDict, total=False):
    """TypedDict for flexible engine configuration from dictionaries.

    All fields are optional; unspecified fields take their values from
    DEFAULT_SERVE_ENGINE_CONFIG when passed through create_serve_engine_config().

    Examples:
        >>> config: ServeEngineConfigDict = {'cPreferredDepthT': 5.0}
        >>> engine = ServeEngine(config)
    """

    cGravityConstant: Optional[float]
    cMinimumSpeed: Optional[float]
    cMinimumHeight: Optional[float]
    cMinimumClearance: Optional[float]
    cMaxStepIn: Optional[float]
    cMaxLandingDistance: Optional[float]
    cLandingIterations: Optional[int]
    cBisectIterations: Optional[int]
    cBracketLowDeg: Optional[float]
    cBracketHighDeg: Optional[float]
    cBracketStepDeg: Optional[float]
    cMaxBracketExpansions: Optional[int]
    cMinimumElevationDeg: Optional[float]
    cStrictBracketing: Optional[bool]
    cServiceLineSafety: Optional[float]
    cMarginEpsilon: Optional[float]
    cPreferredDepthWide: Optional[float]
    cPreferredDepthT: Optional[float]
    cLateralOffsetWide: Optional[float]
    cLateralOffsetT: Optional[float]


def create_serve_engine_config(
        interface_config: Optional[Union[ServeEngineConfigDict, ServeEngineConfig]] = None
) -> ServeEngineConfig:
    """Create ServeEngineConfig from optional dictionary configuration.

    Args:
        interface_config: Overrides as a dict, or a complete ServeEngineConfig.
            If None, returns a copy of the default configuration.

    Returns:
        ServeEngineConfig instance with merged configuration values.

    Raises:
        TypeError: If a key is not a ServeEngineConfig field.

    Examples:
        >>> config = create_serve_engine_config({'cBisectIterations': 120})
        >>> config.cBisectIterations
        120
    """
    if isinstance(interface_config, ServeEngineConfig):
        return ServeEngineConfig(**asdict(interface_config))
    config = asdict(DEFAULT_SERVE_ENGINE_CONFIG)
    if interface_config is not None and isinstance(interface_config, dict):
        config.update(interface_config)
    return ServeEngineConfig(**config)


class ServeEngine:
    """Solvers for serve elevation and azimuth. All calculations are in SI units."""

    def __init__(self, _config: Optional[Union[ServeEngineConfigDict, ServeEngineConfig]] = None):
        """Initialize the engine.

        Args:
            _config: The configuration object or override dict.
        """
        self._config: ServeEngineConfig = create_serve_engine_config(_config)

    @property
    def config(self) -> ServeEngineConfig:
        return self._config

    def _init_serve(self, serve_input: ServeInput) -> ServeProps:
        """Convert ServeInput into sanitized floats in internal units."""
        return ServeProps.from_input(serve_input, self._config)

    def height_at(self, props: ServeProps, theta: float, x: float) -> float:
        """Height of the ball (m) at horizontal distance `x` for elevation `theta`."""
        return height_at(props.speed_mps, theta, props.height_m, x, self._config.cGravityConstant)

    def landing_distance(self, props: ServeProps, theta: float) -> float:
        """Landing distance (m) from the contact point for elevation `theta`."""
        return landing_distance(props.speed_mps, theta, props.height_m,
                                self._config.cGravityConstant,
                                self._config.cMaxLandingDistance,
                                self._config.cLandingIterations)

    def _find_root(self, residual, high_limit: float) -> RootResult:
        """Run the shared bracket-expansion + bisection search up to `high_limit` radians."""
        cfg = self._config
        return find_root(residual,
                         math.radians(cfg.cBracketLowDeg),
                         math.radians(cfg.cBracketHighDeg),
                         step=math.radians(cfg.cBracketStepDeg),
                         max_expansions=cfg.cMaxBracketExpansions,
                         iterations=cfg.cBisectIterations,
                         limits=(math.radians(cfg.cMinimumElevationDeg), high_limit),
                         strict=cfg.cStrictBracketing)

    def find_max_range(self, props: ServeProps) -> Tuple[float, float]:
        """Find the maximum landing distance and the elevation that reaches it.

        Landing distance increases with elevation up to this angle, which bounds the
        depth solver's search.

        Returns:
            The maximum landing distance (m) and the launch angle (radians) to reach it.
        """
        angle, distance = golden_section_max(lambda t: self.landing_distance(props, t),
                                             0.0, math.radians(cMaximumElevationDeg))
        if distance >= self._config.cMaxLandingDistance - 1e-3:
            logger.debug(f"Landing saturates at the {self._config.cMaxLandingDistance:.1f} m search "
                         f"limit, true max range is longer; using {math.degrees(angle):.3f} deg "
                         f"as the depth bracket limit")
        else:
            logger.debug(f"Max range {distance:.3f} m at {math.degrees(angle):.3f} deg")
        return distance, angle

    def find_max_net_height(self, props: ServeProps) -> Tuple[float, float]:
        """Find the greatest height the ball can have over the net and the elevation that reaches it.

        Height over the net increases with elevation up to this angle, which bounds the
        clearance solver's search.

        Returns:
            The maximum height at the net (m) and the launch angle (radians) to reach it.
        """
        angle, height = golden_section_max(lambda t: self.height_at(props, t, props.x_net_m),
                                           0.0, math.radians(cMaximumElevationDeg))
        logger.debug(f"Max height at net {height:.3f} m at {math.degrees(angle):.3f} deg")
        return height, angle

    def _depth_root(self, props: ServeProps, depth: float,
                    max_range_angle: Optional[float] = None) -> RootResult:
        target_x = props.x_net_m + depth
        if max_range_angle is None:
            _, max_range_angle = self.find_max_range(props)

        def residual(theta: float) -> float:
            """Landing miss (m), positive when landing beyond the target."""
            return self.landing_distance(props, theta) - target_x

        return self._find_root(residual, max_range_angle)

    def _clearance_root(self, props: ServeProps, margin: float) -> RootResult:
        target_z = constants.cNetHeight + margin
        _, angle_at_max = self.find_max_net_height(props)

        def residual(theta: float) -> float:
            """Clearance miss (m) at the net, positive when passing higher than required."""
            return self.height_at(props, theta, props.x_net_m) - target_z

        return self._find_root(residual, angle_at_max)

    def find_depth_angle(self, props: ServeProps, depth: float,
                         max_range_angle: Optional[float] = None) -> float:
        """Find the elevation landing `depth` meters past the net.

        Args:
            props: Sanitized serve parameters.
            depth: Landing depth past the net (m).
            max_range_angle: Upper bracket limit (radians), as returned by
                `find_max_range`. Searched for when omitted.

        Returns:
            Elevation angle in radians. If the depth is out of reach this is the
            max-range angle; if even the lowest admissible angle lands too deep it is
            that angle.

        Raises:
            BracketError: Only with `cStrictBracketing`, if the depth is out of reach.
        """
        return self._depth_root(props, depth, max_range_angle).root

    def find_clearance_angle(self, props: ServeProps, margin: float) -> float:
        """Find the elevation passing exactly `margin` meters above the net.

        Args:
            props: Sanitized serve parameters.
            margin: Clearance above the net height (m).

        Returns:
            Elevation angle in radians; the angle of greatest height over the net if
            the margin is out of reach.

        Raises:
            BracketError: Only with `cStrictBracketing`, if the margin is out of reach.
        """
        return self._clearance_root(props, margin).root

    def find_service_max_angle(self, props: ServeProps, max_range_angle: Optional[float] = None) -> float:
        """Steepest elevation that still lands inside the service box (less the safety distance)."""
        return self.find_depth_angle(props, constants.cServiceDepth - self._config.cServiceLineSafety,
                                     max_range_angle)

    def preferred_depth(self, target: TargetZone) -> float:
        """Preferred landing depth past the net (m) for the target zone."""
        if target is TargetZone.WIDE:
            return self._config.cPreferredDepthWide
        return self._config.cPreferredDepthT

    def lateral_offset(self, target: TargetZone) -> float:
        """Lateral aim offset from the center line (m) for the target zone."""
        if target is TargetZone.WIDE:
            return self._config.cLateralOffsetWide
        return self._config.cLateralOffsetT

    def find_candidates(self, props: ServeProps) -> ServeCandidates:
        """Compute the depth, margin and service-max candidate angles."""
        _, max_range_angle = self.find_max_range(props)
        depth_angle = self.find_depth_angle(props, self.preferred_depth(props.target), max_range_angle)
        margin_root = self._clearance_root(props, props.margin_m)
        service_max_angle = self.find_service_max_angle(props, max_range_angle)
        # A margin still short at the highest admissible angle needs more than any legal angle
        margin_reachable = margin_root.bracketed or margin_root.residual >= 0
        return ServeCandidates(depth_angle, margin_root.root, service_max_angle, margin_reachable)

    def solve(self, serve_input: ServeInput) -> ServeSolution:
        """Compute the serve elevation and azimuth.

        Args:
            serve_input: The raw serve parameters.

        Returns:
            ServeSolution. Check `margin_satisfied` and `clamped_to_service_line`:
            infeasible requests still return the best legal answer.
        """
        props = self._init_serve(serve_input)
        return self._solve(props)

    def _solve(self, props: ServeProps) -> ServeSolution:
        cfg = self._config
        candidates = self.find_candidates(props)

        theta = candidates.preferred_angle
        status = ServeStatus.UNCONSTRAINED
        if theta > candidates.service_max_angle or not candidates.margin_reachable:
            theta = candidates.service_max_angle
            status = ServeStatus.CLAMPED

        x_land = self.landing_distance(props, theta)
        clearance = self.height_at(props, theta, props.x_net_m) - constants.cNetHeight
        margin_satisfied = clearance >= props.margin_m - cfg.cMarginEpsilon

        y_target = self.lateral_offset(props.target)
        x_aim = min(x_land, props.x_net_m + constants.cServiceDepth - cfg.cServiceLineSafety)
        phi = props.side.sign * math.atan2(y_target, x_aim)

        logger.debug(f"Serve {props.target.value}: theta={math.degrees(theta):.3f} deg "
                     f"(depth {math.degrees(candidates.depth_angle):.3f}, "
                     f"margin {math.degrees(candidates.margin_angle):.3f}, "
                     f"service max {math.degrees(candidates.service_max_angle):.3f}), "
                     f"{status.value}, clearance={clearance:.3f} m, {margin_satisfied=}")

        return ServeSolution(
            props=props,
            status=status,
            elevation_rad=theta,
            azimuth_rad=phi,
            clearance_m=clearance,
            landing_distance_m=x_land,
            depth_past_net_m=x_land - props.x_net_m,
            margin_satisfied=margin_satisfied,
            candidates=candidates,
            lateral_offset_m=y_target,
            aim_distance_m=x_aim,
            gravity=cfg.cGravityConstant,
        )

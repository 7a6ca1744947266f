"""Court geometry and physical constants for serve calculations.

All values are SI (meters, meters per second, m/s²). Court dimensions are the ITF
singles dimensions measured from the center of the net.

Constant Categories:
    - Physical constants
    - Court geometry
    - Input sanity limits
    - Serve placement policy defaults

References:
    - ITF Rules of Tennis, Appendix (court dimensions)
"""

# Third-party imports
from typing_extensions import Final

# =============================================================================
# Physical Constants
# =============================================================================

cGravityConstant: Final[float] = 9.81  # m/s²
"""Gravitational acceleration used by the trajectory equation (m/s²)"""

# =============================================================================
# Court Geometry (singles)
# =============================================================================

cBaselineToNet: Final[float] = 11.89  # m
"""Horizontal distance from the baseline to the net (m)"""

cNetHeight: Final[float] = 0.914  # m, at the center strap
"""Net height at the center (m)"""

cServiceDepth: Final[float] = 6.40  # m
"""Distance from the net to the service line (m)"""

cHalfServiceWidth: Final[float] = 4.115  # m
"""Distance from the center service line to the singles sideline (m)"""

# =============================================================================
# Input Sanity Limits
# =============================================================================

cDefaultStepIn: Final[float] = 0.5  # m
"""Default contact point inside the baseline (m)"""

cMaxStepIn: Final[float] = 1.2  # m
"""Largest accepted step-in; larger values are clamped (m)"""

cMinimumSpeed: Final[float] = 5.0  # m/s
"""Serve speed floor that keeps root searches well-conditioned (m/s)"""

cMinimumHeight: Final[float] = 1.2  # m
"""Contact height floor (m)"""

cMinimumClearance: Final[float] = 0.0  # m
"""Requested net clearance floor (m)"""

# =============================================================================
# Serve Placement Policy
# =============================================================================

cServiceLineSafety: Final[float] = 0.05  # m
"""Distance kept short of the service line for the legal maximum angle (m)"""

cPreferredDepthWide: Final[float] = 5.8  # m past the net
"""Preferred landing depth for a wide serve (m)"""

cPreferredDepthT: Final[float] = 5.4  # m past the net
"""Preferred landing depth for a serve down the T (m)"""

cLateralOffsetWide: Final[float] = min(3.85, cHalfServiceWidth - 0.25)  # 3.615 m
"""Lateral aim offset from the center line for a wide serve (m)"""

cLateralOffsetT: Final[float] = 0.5  # m
"""Lateral aim offset from the center line for a serve down the T (m)"""

cMarginEpsilon: Final[float] = 1e-6  # m
"""Tolerance when comparing achieved and requested clearance (m)"""

__all__ = (
    'cGravityConstant',
    'cBaselineToNet',
    'cNetHeight',
    'cServiceDepth',
    'cHalfServiceWidth',
    'cDefaultStepIn',
    'cMaxStepIn',
    'cMinimumSpeed',
    'cMinimumHeight',
    'cMinimumClearance',
    'cServiceLineSafety',
    'cPreferredDepthWide',
    'cPreferredDepthT',
    'cLateralOffsetWide',
    'cLateralOffsetT',
    'cMarginEpsilon',
)

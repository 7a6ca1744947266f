"""Closed-form projectile flight used by every serve solver.

Functions:
    height_at: Height of the ball at a horizontal distance from the contact point.
    landing_distance: Horizontal distance at which the ball first returns to the ground.
    sample_trajectory: Evenly spaced (distance, height) samples for renderers.

The ball is modelled under gravity only: no drag, no spin, no bounce.
`height_at` is the only place the flight equation is written down; all other
geometry in the library is derived from it.
"""
from __future__ import annotations

import math

from typing_extensions import List, NamedTuple

from py_servecalc.constants import cGravityConstant

__all__ = (
    'TrajectorySample',
    'height_at',
    'landing_distance',
    'sample_trajectory',
    'cMaxLandingDistance',
    'cLandingIterations',
)

cMaxLandingDistance: float = 50.0  # m, upper end of the landing bisection bracket
cLandingIterations: int = 120  # bisection steps; 60 already gives sub-millimeter accuracy


class TrajectorySample(NamedTuple):
    """Point of a sampled trajectory, for display only.

    Attributes:
        distance: Horizontal distance from the contact point (m).
        height: Height above the court (m).
    """

    distance: float
    height: float


def height_at(v: float, theta: float, h0: float, x: float, gravity: float = cGravityConstant) -> float:
    """Height of the ball at horizontal distance `x`.

    `z = h0 + x·tan(θ) − g·x² / (2·v²·cos²(θ))`

    Args:
        v: Launch speed (m/s).
        theta: Elevation angle (radians), may be negative. Must not be ±π/2.
        h0: Contact height (m).
        x: Horizontal distance from the contact point (m).
        gravity: Gravitational acceleration (m/s²).

    Returns:
        Height above the court (m).
    """
    cos_theta = math.cos(theta)
    return h0 + x * math.tan(theta) - (gravity * x * x) / (2.0 * v * v * cos_theta * cos_theta)


def landing_distance(v: float, theta: float, h0: float,
                     gravity: float = cGravityConstant,
                     max_distance: float = cMaxLandingDistance,
                     iterations: int = cLandingIterations) -> float:
    """Horizontal distance at which the ball comes down to the court.

    Bisects `[0, max_distance]` for a fixed number of iterations. Assumes the flight
    starts above the court and is unimodal, which holds for every elevation the
    solvers explore. If the ball is already falling below the court at x=0 the
    result converges to 0; if it is still in the air at `max_distance` the result
    converges to `max_distance`.

    Args:
        v: Launch speed (m/s).
        theta: Elevation angle (radians).
        h0: Contact height (m).
        gravity: Gravitational acceleration (m/s²).
        max_distance: Upper end of the search bracket (m).
        iterations: Number of bisection steps.

    Returns:
        Landing distance from the contact point (m).
    """
    lo, hi = 0.0, max_distance
    for _ in range(iterations):
        mid = 0.5 * (lo + hi)
        if height_at(v, theta, h0, mid, gravity) > 0:
            lo = mid
        else:
            hi = mid
    return 0.5 * (lo + hi)


def sample_trajectory(v: float, theta: float, h0: float, x_end: float,
                      points: int = 160,
                      gravity: float = cGravityConstant) -> List[TrajectorySample]:
    """Sample the flight from the contact point to `x_end` inclusive.

    Args:
        v: Launch speed (m/s).
        theta: Elevation angle (radians).
        h0: Contact height (m).
        x_end: Last sampled horizontal distance, usually the landing distance (m).
        points: Number of samples, at least 2.
        gravity: Gravitational acceleration (m/s²).

    Returns:
        `points` samples evenly spaced in horizontal distance.

    Raises:
        ValueError: If fewer than 2 points are requested.
    """
    if points < 2:
        raise ValueError(f"At least 2 trajectory points required, got {points}")
    step = max(x_end, 0.0) / (points - 1)
    return [TrajectorySample(i * step, height_at(v, theta, h0, i * step, gravity))
            for i in range(points)]

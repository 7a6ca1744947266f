"""Generic one-dimensional root finding and maximization over elevation angles.

Both serve solvers search for the elevation angle at which a residual changes sign.
They share one policy, implemented here once:

1. Start from a bracket `[low, high]` and widen it symmetrically by `step` per side
   until the residual changes sign (at most `max_expansions` times), never leaving
   the admissible `limits`.
2. Bisect the bracket for a fixed number of iterations.

The residual is assumed to be monotonic over the admissible limits. Callers choose
the limits so that this holds (e.g. up to the max-range angle for landing depth).

If no sign change is found the search cannot bisect. In strict mode `BracketError`
is raised. Otherwise a warning is logged and the endpoint the monotonic residual
points to is returned: the high end when the residual is negative throughout (the
root lies above), the low end when it is positive throughout.

All loops run a fixed, bounded number of iterations.
"""
from __future__ import annotations

import math

from typing_extensions import Callable, NamedTuple, Tuple

from py_servecalc.exceptions import BracketError
from py_servecalc.logger import logger
from py_servecalc.unit import Angular

__all__ = (
    'Residual',
    'Bracket',
    'RootResult',
    'find_bracket',
    'bisect',
    'find_root',
    'golden_section_max',
)

Residual = Callable[[float], float]


class Bracket(NamedTuple):
    """Result of a bracket search.

    Attributes:
        low: Low end (radians).
        high: High end (radians).
        f_low: Residual at `low`.
        f_high: Residual at `high`.
        expansions: Number of widening steps performed.
        bracketed: True if the residual changes sign (or vanishes) across the bracket.
    """

    low: float
    high: float
    f_low: float
    f_high: float
    expansions: int
    bracketed: bool


class RootResult(NamedTuple):
    """Result of `find_root`.

    Attributes:
        root: Best estimate of the root (radians).
        residual: Residual evaluated at `root`.
        expansions: Number of bracket widening steps performed.
        iterations: Number of bisection steps performed (0 if not bracketed).
        bracketed: False if the root is a best-effort endpoint rather than a true root.
    """

    root: float
    residual: float
    expansions: int
    iterations: int
    bracketed: bool


def find_bracket(f: Residual, low: float, high: float, step: float, max_expansions: int,
                 limits: Tuple[float, float] = (-math.inf, math.inf)) -> Bracket:
    """Widen `[low, high]` until `f` changes sign across it.

    Args:
        f: Residual function.
        low: Initial low end.
        high: Initial high end.
        step: Widening per side per expansion.
        max_expansions: Maximum number of widening steps.
        limits: Admissible interval; the bracket never leaves it.

    Returns:
        Bracket, with `bracketed` False if no sign change was found.
    """
    lim_low, lim_high = limits
    b = min(high, lim_high)
    a = min(max(low, lim_low), b)
    f_a, f_b = f(a), f(b)
    expansions = 0
    while f_a * f_b > 0 and expansions < max_expansions:
        if a <= lim_low and b >= lim_high:
            break  # Nothing left to widen
        expansions += 1
        a = max(a - step, lim_low)
        b = min(b + step, lim_high)
        f_a, f_b = f(a), f(b)
    bracketed = f_a * f_b <= 0
    logger.debug(f"find_bracket: [{math.degrees(a):.3f}, {math.degrees(b):.3f}] deg "
                 f"after {expansions} expansions, {bracketed=}")
    return Bracket(a, b, f_a, f_b, expansions, bracketed)


def bisect(f: Residual, low: float, high: float, f_low: float, iterations: int) -> float:
    """Bisect a bracket known to contain a sign change of `f`.

    Args:
        f: Residual function.
        low: Low end.
        high: High end.
        f_low: Residual at `low`.
        iterations: Number of halvings.

    Returns:
        Midpoint of the final bracket.
    """
    a, b, f_a = low, high, f_low
    for _ in range(iterations):
        m = 0.5 * (a + b)
        f_m = f(m)
        if f_a * f_m <= 0:
            b = m
        else:
            a, f_a = m, f_m
    return 0.5 * (a + b)


def find_root(f: Residual, low: float, high: float, *,
              step: float, max_expansions: int, iterations: int,
              limits: Tuple[float, float] = (-math.inf, math.inf),
              strict: bool = False) -> RootResult:
    """Find a root of a monotonic residual by bracket expansion followed by bisection.

    Args:
        f: Residual function of an angle in radians.
        low: Initial low end of the bracket (radians).
        high: Initial high end of the bracket (radians).
        step: Widening per side per expansion (radians).
        max_expansions: Maximum number of widening steps.
        iterations: Number of bisection steps.
        limits: Admissible angle interval (radians).
        strict: Raise instead of returning a best-effort endpoint when no sign change is found.

    Returns:
        RootResult.

    Raises:
        BracketError: If `strict` and no sign change was found.
    """
    bracket = find_bracket(f, low, high, step, max_expansions, limits)
    if not bracket.bracketed:
        if strict:
            raise BracketError(Angular.Radian(bracket.low), Angular.Radian(bracket.high),
                               bracket.f_low, bracket.f_high, bracket.expansions)
        root, residual = ((bracket.high, bracket.f_high) if bracket.f_high < 0
                          else (bracket.low, bracket.f_low))
        logger.warning(f"No sign change in [{math.degrees(bracket.low):.2f}, "
                       f"{math.degrees(bracket.high):.2f}] deg "
                       f"(f_low={bracket.f_low:.4f}, f_high={bracket.f_high:.4f}); "
                       f"using best-effort angle {math.degrees(root):.2f} deg")
        return RootResult(root, residual, bracket.expansions, 0, False)

    root = bisect(f, bracket.low, bracket.high, bracket.f_low, iterations)
    return RootResult(root, f(root), bracket.expansions, iterations, True)


def golden_section_max(f: Residual, low: float, high: float,
                       iterations: int = 100, tolerance: float = 1e-9) -> Tuple[float, float]:
    """Locate the maximum of a unimodal function on `[low, high]` by golden-section search.

    Args:
        f: Function to maximize.
        low: Low end of the search interval.
        high: High end of the search interval.
        iterations: Maximum number of interval reductions.
        tolerance: Stop once the interval is narrower than this.

    Returns:
        Argument of the maximum and the function value there.
    """
    inv_phi = (math.sqrt(5) - 1) / 2  # 0.618...
    inv_phi_sq = inv_phi ** 2
    a, b = low, high
    h = b - a
    c = a + inv_phi_sq * h
    d = a + inv_phi * h
    yc = f(c)
    yd = f(d)
    for _ in range(iterations):
        if h < tolerance:
            break
        if yc > yd:
            b, d, yd = d, c, yc
            h = b - a
            c = a + inv_phi_sq * h
            yc = f(c)
        else:
            a, c, yc = c, d, yd
            h = b - a
            d = a + inv_phi * h
            yd = f(d)
    x_max = (a + b) / 2
    return x_max, f(x_max)

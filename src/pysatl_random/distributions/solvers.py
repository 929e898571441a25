"""
Root Finding
============

Bounded iterative solvers used by quantile computations and shape
estimation:

- :func:`expand_bracket`: grow a sign-changing bracket around a start point,
  clipped to the support.
- :func:`newton_bisect`: guarded Newton iteration that falls back to
  bisection whenever a step leaves the bracket or does not decrease the
  residual.

Both functions stop after a fixed number of iterations and report the outcome
instead of looping indefinitely. :func:`solve` wraps them and raises
:class:`~pysatl_random.errors.WrongReturnError` on failure.

Notes
-----
The target function ``g`` is assumed increasing on the bracket (CDF minus
level, digamma minus constant, ...). Decreasing targets are passed negated.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pysatl_random.errors import WrongReturnError

if TYPE_CHECKING:
    from pysatl_random.types import ScalarFunc

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SolverSettings:
    """
    Tolerances and iteration budgets of the root finders.

    Parameters
    ----------
    x_rtol : float, default 1e-14
        Relative tolerance on the root.
    x_atol : float, default 0.0
        Absolute tolerance on the root.
    max_iter : int, default 200
        Maximum number of Newton/bisection iterations.
    max_expand : int, default 60
        Maximum number of bracket expansions.
    expand_factor : float, default 2.0
        Multiplicative step growth during bracket expansion.
    """

    x_rtol: float = 1e-14
    x_atol: float = 0.0
    max_iter: int = 200
    max_expand: int = 60
    expand_factor: float = 2.0


DEFAULT_SOLVER_SETTINGS = SolverSettings()


@dataclass(frozen=True, slots=True)
class Bracket:
    """Interval ``[lo, hi]`` with ``g(lo) <= 0 <= g(hi)``."""

    lo: float
    hi: float


@dataclass(frozen=True, slots=True)
class RootResult:
    """
    Outcome of a root search.

    Attributes
    ----------
    root : float
        Last iterate.
    converged : bool
        Whether a tolerance criterion was met.
    iterations : int
        Number of iterations performed.
    residual : float
        ``g(root)``.
    """

    root: float
    converged: bool
    iterations: int
    residual: float


def expand_bracket(
    func: ScalarFunc,
    x0: float,
    *,
    lower: float = -math.inf,
    upper: float = math.inf,
    step: float = 1.0,
    settings: SolverSettings = DEFAULT_SOLVER_SETTINGS,
) -> Bracket | None:
    """
    Find ``[lo, hi]`` containing a sign change of an increasing ``func``.

    Finite ``lower``/``upper`` are treated as hard limits of the search: the
    bracket end is moved to the limit instead of beyond it.

    Parameters
    ----------
    func : Callable[[float], float]
        Increasing scalar function.
    x0 : float
        Initial bracket center.
    lower, upper : float
        Limits of the search region (typically the support).
    step : float, default 1.0
        Initial half-width.
    settings : SolverSettings
        Expansion budget and growth factor.

    Returns
    -------
    Bracket or None
        ``None`` if no sign change was found within the budget.
    """
    step = abs(step) if step != 0.0 else 1.0
    if x0 <= lower:
        x0 = lower + step
    elif x0 >= upper:
        x0 = upper - step
    lo = max(x0 - step, lower)
    hi = min(x0 + step, upper)
    if lo >= hi:
        lo, hi = lower, upper
    g_lo = func(lo) if math.isfinite(lo) else -math.inf
    g_hi = func(hi) if math.isfinite(hi) else math.inf

    for _ in range(settings.max_expand):
        if g_lo <= 0.0 <= g_hi:
            return Bracket(lo, hi)
        step *= settings.expand_factor
        if g_lo > 0.0:
            hi, g_hi = lo, g_lo
            lo = lower if lo - step <= lower else lo - step
            g_lo = func(lo) if math.isfinite(lo) else -math.inf
        else:
            lo, g_lo = hi, g_hi
            hi = upper if hi + step >= upper else hi + step
            g_hi = func(hi) if math.isfinite(hi) else math.inf

    if g_lo <= 0.0 <= g_hi:
        return Bracket(lo, hi)
    _logger.debug("Bracket expansion around %r exhausted after %d steps", x0, settings.max_expand)
    return None


def newton_bisect(
    func: ScalarFunc,
    derivative: ScalarFunc,
    x0: float,
    bracket: Bracket,
    *,
    settings: SolverSettings = DEFAULT_SOLVER_SETTINGS,
) -> RootResult:
    """
    Guarded Newton iteration with bisection fallback.

    Parameters
    ----------
    func : Callable[[float], float]
        Increasing scalar function whose root is sought.
    derivative : Callable[[float], float]
        Derivative of ``func``.
    x0 : float
        Initial guess; replaced by the bracket midpoint if it lies outside.
    bracket : Bracket
        Interval with ``func(lo) <= 0 <= func(hi)``.
    settings : SolverSettings
        Tolerances and the iteration cap.

    Returns
    -------
    RootResult
        ``converged`` is ``False`` when the iteration cap was hit. A bracket
        shrunk to two adjacent doubles counts as converged.
    """
    lo, hi = bracket.lo, bracket.hi
    x = x0 if lo <= x0 <= hi and math.isfinite(x0) else 0.5 * (lo + hi)
    gx = func(x)

    for iteration in range(1, settings.max_iter + 1):
        if gx == 0.0:
            return RootResult(x, True, iteration, gx)
        if gx < 0.0:
            lo = x
        else:
            hi = x

        tol = settings.x_atol + settings.x_rtol * abs(x)
        if hi - lo <= tol:
            return RootResult(x, True, iteration, gx)
        midpoint = 0.5 * (lo + hi)
        # adjacent doubles: the bracket cannot be split any further
        if midpoint <= lo or midpoint >= hi:
            return RootResult(x, True, iteration, gx)

        dgx = derivative(x)
        candidate = x - gx / dgx if dgx > 0.0 and math.isfinite(dgx) else math.nan
        use_newton = lo < candidate < hi
        if use_newton:
            g_candidate = func(candidate)
            use_newton = abs(g_candidate) < abs(gx)
        if not use_newton:
            candidate = midpoint
            g_candidate = func(candidate)

        step = abs(candidate - x)
        x, gx = candidate, g_candidate
        if use_newton and step <= settings.x_atol + settings.x_rtol * abs(x):
            return RootResult(x, True, iteration, gx)

    _logger.debug(
        "Root search did not converge in %d iterations, last iterate %r", settings.max_iter, x
    )
    return RootResult(x, False, settings.max_iter, gx)


def solve(
    func: ScalarFunc,
    derivative: ScalarFunc,
    x0: float,
    *,
    lower: float = -math.inf,
    upper: float = math.inf,
    step: float = 1.0,
    settings: SolverSettings = DEFAULT_SOLVER_SETTINGS,
    what: str = "root",
) -> float:
    """
    Bracket and solve ``func(x) = 0``, raising on failure.

    Raises
    ------
    WrongReturnError
        If no bracket is found or the iteration does not converge.
    """
    bracket = expand_bracket(func, x0, lower=lower, upper=upper, step=step, settings=settings)
    if bracket is None:
        raise WrongReturnError(
            f"Could not bracket the {what} starting from {x0!r}.",
            iterations=settings.max_expand,
        )
    result = newton_bisect(func, derivative, x0, bracket, settings=settings)
    if not result.converged:
        raise WrongReturnError(
            f"Search for the {what} did not converge.",
            iterations=result.iterations,
            residual=result.residual,
        )
    return result.root


__all__ = [
    "SolverSettings",
    "DEFAULT_SOLVER_SETTINGS",
    "Bracket",
    "RootResult",
    "expand_bracket",
    "newton_bisect",
    "solve",
]

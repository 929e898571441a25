"""
Initial guesses for Gamma quantiles.

Approximations follow Gil, Segura and Temme, "Efficient and accurate
algorithms for the computation and inversion of the incomplete gamma function
ratios" (SIAM J. Sci. Comput., 2012). They are starting points of the
Newton/bisection solver, not final answers.

All functions work with the unit-rate distribution Gamma(α, 1) and receive
both tail probabilities in log form, so the lower and the upper quantile share
one implementation.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

from scipy import special

LARGE_SHAPE = 10.0
_BRANCH_POINT_GAP = 1e-8


def small_p_series(shape: float, r: float) -> float:
    """
    Inversion of ``P(α, x) ≈ x^α / Γ(α + 1)`` refined by a series in ``r``.

    ``r = (p·Γ(α + 1))^(1/α)`` is the leading term.
    """
    a = shape
    a1 = a + 1.0
    a2 = a + 2.0
    c2 = 1.0 / a1
    c3 = (3.0 * a + 5.0) / (2.0 * a1 * a1 * a2)
    c4 = (8.0 * a * a + 33.0 * a + 31.0) / (3.0 * a1**3 * a2 * (a + 3.0))
    c5 = (125.0 * a**4 + 1179.0 * a**3 + 3971.0 * a * a + 5661.0 * a + 2888.0) / (
        24.0 * a1**4 * a2 * a2 * (a + 3.0) * (a + 4.0)
    )
    return r * (1.0 + r * (c2 + r * (c3 + r * (c4 + r * c5))))


def large_p_lambert(shape: float, log_q: float) -> float:
    """
    Inversion of ``Q(α, x) ≈ x^α·e^(−x) / Γ(α)`` with the ``W₋₁`` branch.

    Valid when ``log Q ≤ α(log α − 1) − log Γ(α)``, which keeps the Lambert
    argument inside ``[−1/e, 0)``.
    """
    z = -math.exp((log_q + special.gammaln(shape)) / shape) / shape
    return float(-shape * special.lambertw(z, k=-1).real)


def temme_uniform(shape: float, y: float) -> float:
    """
    Temme's uniform asymptotic inversion.

    ``y`` is ``erfcinv(2P)``; ``λ = x/α`` solves ``λ − 1 − log λ = y²/α``
    with ``λ > 1`` above the median (``y < 0``) and ``λ < 1`` below. The
    median itself (``y = 0``) gives ``λ = 1``.
    """
    s = y * y / shape
    if s < _BRANCH_POINT_GAP:
        # the Lambert argument is within rounding of the branch point −1/e
        eta = -math.copysign(math.sqrt(2.0 * s), y)
        return shape * (1.0 + eta + eta * eta / 3.0)
    z = -math.exp(-(1.0 + s))
    branch = -1 if y < 0.0 else 0
    return float(-shape * special.lambertw(z, k=branch).real)


def initial_guess(shape: float, log_p: float, log_q: float, y: float) -> float:
    """
    Starting point for the unit-rate Gamma quantile.

    Parameters
    ----------
    shape : float
        Shape α.
    log_p, log_q : float
        Logarithms of the lower and upper tail probabilities.
    y : float
        ``erfcinv(2P)`` computed from the more accurate tail.

    Returns
    -------
    float
        Positive finite guess; falls back to the mean ``α``.
    """
    guess = math.nan
    if shape < LARGE_SHAPE:
        r = math.exp((log_p + special.gammaln(shape + 1.0)) / shape)
        gamma_log = special.gammaln(shape)
        if r < 0.2 * (shape + 1.0):
            guess = small_p_series(shape, r)
        elif log_q < -0.5 * shape - math.log(shape) - gamma_log and log_q < (
            shape * (math.log(shape) - 1.0) - gamma_log
        ):
            guess = large_p_lambert(shape, log_q)
        elif shape < 1.0:
            guess = small_p_series(shape, r)
    if not (math.isfinite(guess) and guess > 0.0):
        guess = temme_uniform(shape, y)
    if not (math.isfinite(guess) and guess > 0.0):
        guess = shape
    return guess


def lower_tail_guess(shape: float, p: float) -> float:
    """Guess for ``P(α, x) = p``."""
    return initial_guess(shape, math.log(p), math.log1p(-p), float(special.erfcinv(2.0 * p)))


def upper_tail_guess(shape: float, q: float) -> float:
    """Guess for ``Q(α, x) = q``."""
    return initial_guess(shape, math.log1p(-q), math.log(q), -float(special.erfcinv(2.0 * q)))


__all__ = [
    "initial_guess",
    "lower_tail_guess",
    "upper_tail_guess",
    "small_p_series",
    "large_p_lambert",
    "temme_uniform",
]

"""
Gamma variate generation.

The shape axis is split into regimes, each served by the algorithm that is
exact or most efficient there. Regimes are checked in order and the first
match wins:

==========================  ====================  ===============================
condition                   regime                algorithm
==========================  ====================  ===============================
α < 0.34                    SMALL_SHAPE           Best's RGS (Ahrens–Dieter GS
                                                  when no constants are cached)
α ∈ {1, 2, 3}               INTEGER_SHAPE         sum of α exponentials
α = 1.5                     ONE_AND_A_HALF_SHAPE  E + N²/2
1 < α < 1.2                 FISHMAN               Fishman's rejection
otherwise                   MARSAGLIA_TSANG       Marsaglia–Tsang squeeze
==========================  ====================  ===============================

All functions here draw from the unit-rate distribution Gamma(α, 1); callers
divide by the rate.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from pysatl_random.distributions.sampling import rejection_loop
from pysatl_random.sources import standard_exponential, standard_normal, standard_uniform

if TYPE_CHECKING:
    from pysatl_random.sources import UniformSource

_logger = logging.getLogger(__name__)

SHAPE_TOLERANCE = 1e-12
"""Relative tolerance of comparisons of the shape against 1, 1.5, 2 and 3."""

SMALL_SHAPE_THRESHOLD = 0.34
FISHMAN_UPPER = 1.2
MAX_INTEGER_SHAPE = 3


class GeneratorRegime(Enum):
    """
    Variate generation algorithms of the Gamma family.

    Attributes
    ----------
    INTEGER_SHAPE
        Sum of independent exponentials.
    ONE_AND_A_HALF_SHAPE
        Exponential plus half of a squared normal.
    SMALL_SHAPE
        Best's RGS rejection for α < 0.34.
    FISHMAN
        Fishman's rejection for 1 < α < 1.2.
    MARSAGLIA_TSANG
        Marsaglia–Tsang squeeze, the general case.
    """

    INTEGER_SHAPE = auto()
    ONE_AND_A_HALF_SHAPE = auto()
    SMALL_SHAPE = auto()
    FISHMAN = auto()
    MARSAGLIA_TSANG = auto()


def _is_close(value: float, target: float) -> bool:
    return abs(value - target) <= SHAPE_TOLERANCE * max(abs(value), abs(target))


def select_regime(shape: float) -> GeneratorRegime:
    """
    Select the generation algorithm for a shape parameter.

    The mapping is a pure function of ``shape`` and covers every positive
    value exactly once.
    """
    if shape < SMALL_SHAPE_THRESHOLD:
        return GeneratorRegime.SMALL_SHAPE
    nearest = round(shape)
    if 1 <= nearest <= MAX_INTEGER_SHAPE and _is_close(shape, nearest):
        return GeneratorRegime.INTEGER_SHAPE
    if _is_close(shape, 1.5):
        return GeneratorRegime.ONE_AND_A_HALF_SHAPE
    if 1.0 < shape < FISHMAN_UPPER:
        return GeneratorRegime.FISHMAN
    return GeneratorRegime.MARSAGLIA_TSANG


@dataclass(frozen=True, slots=True)
class GeneratorCoefficients:
    """
    Regime tag and the constants its algorithm needs.

    Attributes
    ----------
    regime : GeneratorRegime
        Selected algorithm.
    t, b : float
        Best's RGS constants ``t = 0.07 + 0.75·√(1−α)`` and
        ``b = 1 + e^(−t)·α/t``; zero outside ``SMALL_SHAPE``.
    d, c : float
        Marsaglia–Tsang constants ``d = α' − 1/3`` and ``c = 1/√(9d)`` with
        ``α' = α`` for α ≥ 1 and ``α' = α + 1`` below; zero outside
        ``MARSAGLIA_TSANG``.
    integer_shape : int
        Number of exponentials summed in ``INTEGER_SHAPE``.
    """

    regime: GeneratorRegime
    t: float = 0.0
    b: float = 0.0
    d: float = 0.0
    c: float = 0.0
    integer_shape: int = 0


def generator_coefficients(shape: float) -> GeneratorCoefficients:
    """Select the regime for ``shape`` and precompute its constants."""
    regime = select_regime(shape)
    _logger.debug("Gamma shape %r uses %s", shape, regime.name)
    if regime is GeneratorRegime.SMALL_SHAPE:
        t = 0.07 + 0.75 * math.sqrt(1.0 - shape)
        return GeneratorCoefficients(regime, t=t, b=1.0 + math.exp(-t) * shape / t)
    if regime is GeneratorRegime.INTEGER_SHAPE:
        return GeneratorCoefficients(regime, integer_shape=round(shape))
    if regime is GeneratorRegime.MARSAGLIA_TSANG:
        d = (shape if shape >= 1.0 else shape + 1.0) - 1.0 / 3.0
        return GeneratorCoefficients(regime, d=d, c=1.0 / math.sqrt(9.0 * d))
    return GeneratorCoefficients(regime)


def sum_of_exponentials(count: int, source: UniformSource) -> float:
    """Gamma(k, 1) as the sum of ``k`` standard exponentials."""
    total = 0.0
    for _ in range(count):
        total += standard_exponential(source)
    return total


def one_and_a_half_shape(source: UniformSource) -> float:
    """
    Gamma(3/2, 1) as ``E + N²/2`` without rejection.

    ``N`` is taken in the Box–Muller cosine form, so ``N²/2 = E′·cos²(2πU)``
    and every variate costs exactly three uniforms.
    """
    exponential = standard_exponential(source)
    cosine = math.cos(2.0 * math.pi * standard_uniform(source))
    return exponential + standard_exponential(source) * cosine * cosine


def best_rgs(shape: float, t: float, b: float, source: UniformSource) -> float:
    """
    Best's (1983) RGS rejection algorithm for α < 1.

    The envelope is ``x^(α−1)`` on ``[0, t]`` and ``e^(−x)`` beyond; the
    first comparison in each branch is a squeeze that avoids ``exp``/``pow``.
    """
    inverse_shape = 1.0 / shape

    def attempt() -> float | None:
        v = b * standard_uniform(source)
        w = standard_uniform(source)
        if v <= 1.0:
            x = t * v**inverse_shape
            if w <= (2.0 - x) / (2.0 + x) or w <= math.exp(-x):
                return x
            return None
        x = -math.log(t * (b - v) / shape)
        y = x / t
        if w * (shape + y - shape * y) <= 1.0 or w <= y ** (shape - 1.0):
            return x
        return None

    return rejection_loop(attempt, "Best's RGS algorithm")


def ahrens_dieter_gs(shape: float, source: UniformSource) -> float:
    """Ahrens–Dieter (1974) GS rejection algorithm for α < 1."""
    inverse_shape = 1.0 / shape
    t = inverse_shape + math.exp(-1.0)

    def attempt() -> float | None:
        u = standard_uniform(source)
        w = standard_exponential(source)
        p = shape * t * u
        if p <= 1.0:
            x = p**inverse_shape
            return x if x <= w else None
        x = -math.log(t * (1.0 - u))
        return x if (1.0 - shape) * math.log(x) <= w else None

    return rejection_loop(attempt, "Ahrens-Dieter GS algorithm")


def fishman(shape: float, source: UniformSource) -> float:
    """Fishman's (1976) rejection from Exp(1/α) for 1 < α < 1.2."""
    shape_minus_one = shape - 1.0

    def attempt() -> float | None:
        w1 = standard_exponential(source)
        w2 = standard_exponential(source)
        if w2 < shape_minus_one * (w1 - math.log(w1) - 1.0):
            return None
        return shape * w1

    return rejection_loop(attempt, "Fishman's algorithm")


def marsaglia_tsang(shape: float, d: float, c: float, source: UniformSource) -> float:
    """
    Marsaglia–Tsang (2000) rejection with a transformed normal envelope.

    For ``α < 1`` the variate is drawn for ``α + 1`` (the constants ``d`` and
    ``c`` already refer to it) and multiplied by ``U^(1/α)``.
    """

    def attempt() -> float | None:
        normal = standard_normal(source)
        v = 1.0 + c * normal
        if v <= 0.0:
            return None
        v = v * v * v
        u = standard_uniform(source)
        squared = normal * normal
        if u < 1.0 - 0.0331 * squared * squared:
            return d * v
        if math.log(u) < 0.5 * squared + d * (1.0 - v + math.log(v)):
            return d * v
        return None

    x = rejection_loop(attempt, "Marsaglia-Tsang algorithm")
    if shape < 1.0:
        x *= standard_uniform(source) ** (1.0 / shape)
    return x


def draw_standard(
    shape: float, coefficients: GeneratorCoefficients, source: UniformSource
) -> float:
    """Draw from Gamma(α, 1) with precomputed regime constants."""
    regime = coefficients.regime
    if regime is GeneratorRegime.INTEGER_SHAPE:
        return sum_of_exponentials(coefficients.integer_shape, source)
    if regime is GeneratorRegime.ONE_AND_A_HALF_SHAPE:
        return one_and_a_half_shape(source)
    if regime is GeneratorRegime.SMALL_SHAPE:
        return best_rgs(shape, coefficients.t, coefficients.b, source)
    if regime is GeneratorRegime.FISHMAN:
        return fishman(shape, source)
    return marsaglia_tsang(shape, coefficients.d, coefficients.c, source)


def draw_standard_uncached(shape: float, source: UniformSource) -> float:
    """
    Draw from Gamma(α, 1) without a parameter store.

    Small shapes use the Ahrens–Dieter algorithm, which needs no setup.
    """
    if select_regime(shape) is GeneratorRegime.SMALL_SHAPE:
        return ahrens_dieter_gs(shape, source)
    return draw_standard(shape, generator_coefficients(shape), source)


__all__ = [
    "GeneratorRegime",
    "GeneratorCoefficients",
    "select_regime",
    "generator_coefficients",
    "sum_of_exponentials",
    "one_and_a_half_shape",
    "best_rgs",
    "ahrens_dieter_gs",
    "fishman",
    "marsaglia_tsang",
    "draw_standard",
    "draw_standard_uncached",
]

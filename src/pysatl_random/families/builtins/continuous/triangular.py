"""
Triangular distribution family implementation.

Probability density function:
    f(x) = 2(x-a) / ((b-a)(c-a))   for a <= x < c
    f(x) = 2(b-x) / ((b-a)(b-c))   for c <= x <= b

The mode ``c`` may coincide with either end of the support.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

import numpy as np

from pysatl_random.distributions.distribution import ContinuousDistribution, as_float_array, pack
from pysatl_random.distributions.support import ContinuousSupport
from pysatl_random.families.parametrizations import (
    ParameterStore,
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_random.families.registry import FamilyRegister
from pysatl_random.sources import standard_uniform
from pysatl_random.types import FamilyName

if TYPE_CHECKING:
    from pysatl_random.distributions.solvers import SolverSettings
    from pysatl_random.sources import UniformSource
    from pysatl_random.types import ArrayLike


def configure_triangular_family() -> None:
    """
    Configure and register the triangular family.
    """
    if not FamilyRegister.contains(TriangularDistribution.family_name):
        FamilyRegister.register(TriangularDistribution)


@parametrization(name="standard")
class TriangularParametrization(Parametrization):
    """
    Lower limit, mode and upper limit.

    Parameters
    ----------
    lower : float
        Left end a of the support
    mode : float
        Peak c of the density
    upper : float
        Right end b of the support
    """

    lower: float
    mode: float
    upper: float

    @constraint(description="lower and upper are finite")
    def check_bounds_finite(self) -> bool:
        return math.isfinite(self.lower) and math.isfinite(self.upper)

    @constraint(description="lower < upper")
    def check_interval_nonempty(self) -> bool:
        return self.lower < self.upper

    @constraint(description="lower <= mode <= upper")
    def check_mode_inside(self) -> bool:
        return self.lower <= self.mode <= self.upper


@dataclass(frozen=True, slots=True)
class TriangularCache:
    lower: float
    mode: float
    upper: float
    width: float
    """b − a"""
    left_width: float
    """c − a"""
    right_width: float
    """b − c"""
    mode_level: float
    """F(c) = (c − a)/(b − a)"""
    support: ContinuousSupport


def _derive(parameters: TriangularParametrization, _: TriangularCache | None) -> TriangularCache:
    a, c, b = parameters.lower, parameters.mode, parameters.upper
    return TriangularCache(
        lower=a,
        mode=c,
        upper=b,
        width=b - a,
        left_width=c - a,
        right_width=b - c,
        mode_level=(c - a) / (b - a),
        support=ContinuousSupport(left=a, right=b),
    )


class TriangularDistribution(ContinuousDistribution):
    """
    Triangular distribution Triangular(a, c, b).

    Parameters
    ----------
    lower : float, default 0.0
        Left end a.
    mode : float, default 0.5
        Mode c with ``a <= c <= b``.
    upper : float, default 1.0
        Right end b > a.
    """

    family_name: ClassVar[str] = FamilyName.TRIANGULAR
    parametrizations: ClassVar[dict[str, type[Parametrization]]] = {
        "standard": TriangularParametrization,
    }
    base_parametrization: ClassVar[str] = "standard"

    _store: ParameterStore[TriangularParametrization, TriangularCache]

    def __init__(self, lower: float = 0.0, mode: float = 0.5, upper: float = 1.0) -> None:
        self._store = ParameterStore(
            TriangularParametrization(lower=lower, mode=mode, upper=upper), _derive
        )

    @property
    def support(self) -> ContinuousSupport:
        return self._store.cache.support

    @property
    def lower(self) -> float:
        return self._store.cache.lower

    @lower.setter
    def lower(self, value: float) -> None:
        self._store.update(lower=value)

    @property
    def peak(self) -> float:
        """Mode c of the density (``mode()`` returns the same value)."""
        return self._store.cache.mode

    @peak.setter
    def peak(self, value: float) -> None:
        self._store.update(mode=value)

    @property
    def upper(self) -> float:
        return self._store.cache.upper

    @upper.setter
    def upper(self, value: float) -> None:
        self._store.update(upper=value)

    def pdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        c = self._store.cache
        rising = (arr >= c.lower) & (arr < c.mode)
        falling = (arr >= c.mode) & (arr <= c.upper)
        with np.errstate(divide="ignore", invalid="ignore"):
            left = 2.0 * (arr - c.lower) / (c.width * c.left_width)
            right = 2.0 * (c.upper - arr) / (c.width * c.right_width)
        peak = 2.0 / c.width
        value = np.where(rising, left, np.where(falling, np.where(arr == c.mode, peak, right), 0.0))
        return pack(np.where(np.isnan(arr), np.nan, value), arr)

    def cdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        c = self._store.cache
        clipped = np.clip(arr, c.lower, c.upper)
        with np.errstate(divide="ignore", invalid="ignore"):
            left = (clipped - c.lower) ** 2 / (c.width * c.left_width)
            right = 1.0 - (c.upper - clipped) ** 2 / (c.width * c.right_width)
        value = np.where(clipped <= c.mode, np.where(c.left_width > 0.0, left, 0.0), right)
        return pack(value, arr)

    def sf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        c = self._store.cache
        clipped = np.clip(arr, c.lower, c.upper)
        with np.errstate(divide="ignore", invalid="ignore"):
            left = 1.0 - (clipped - c.lower) ** 2 / (c.width * c.left_width)
            right = (c.upper - clipped) ** 2 / (c.width * c.right_width)
        value = np.where(clipped >= c.mode, np.where(c.right_width > 0.0, right, 0.0), left)
        return pack(value, arr)

    def _quantile_impl(self, p: float, settings: SolverSettings) -> float:
        c = self._store.cache
        if p < c.mode_level:
            return c.lower + math.sqrt(p * c.width * c.left_width)
        return c.upper - math.sqrt((1.0 - p) * c.width * c.right_width)

    def _quantile1m_impl(self, p: float, settings: SolverSettings) -> float:
        c = self._store.cache
        if p > 1.0 - c.mode_level:
            return c.lower + math.sqrt((1.0 - p) * c.width * c.left_width)
        return c.upper - math.sqrt(p * c.width * c.right_width)

    def _spread(self) -> float:
        """``a² + b² + c² − ab − ac − bc``."""
        c = self._store.cache
        a, m, b = c.lower, c.mode, c.upper
        return a * a + b * b + m * m - a * b - a * m - b * m

    def mean(self) -> float:
        c = self._store.cache
        return (c.lower + c.mode + c.upper) / 3.0

    def var(self) -> float:
        return self._spread() / 18.0

    def mode(self) -> float:
        return self._store.cache.mode

    def skewness(self) -> float:
        c = self._store.cache
        a, m, b = c.lower, c.mode, c.upper
        numerator = math.sqrt(2.0) * (a + b - 2.0 * m) * (2.0 * a - b - m) * (a - 2.0 * b + m)
        return numerator / (5.0 * self._spread() ** 1.5)

    def excess_kurtosis(self) -> float:
        return -0.6

    def entropy(self) -> float:
        return 0.5 + math.log(0.5 * self._store.cache.width)

    def _cf_impl(self, t: float) -> complex:
        c = self._store.cache
        if c.left_width == 0.0 or c.right_width == 0.0:
            return super()._cf_impl(t)
        numerator = (
            c.right_width * np.exp(1j * c.lower * t)
            - c.width * np.exp(1j * c.mode * t)
            + c.left_width * np.exp(1j * c.upper * t)
        )
        return complex(-2.0 * numerator / (c.width * c.left_width * c.right_width * t * t))

    def variate(self, source: UniformSource) -> float:
        c = self._store.cache
        u = standard_uniform(source)
        if u < c.mode_level:
            return c.lower + math.sqrt(u * c.width * c.left_width)
        return c.upper - math.sqrt((1.0 - u) * c.width * c.right_width)

    @staticmethod
    def variate_with(lower: float, mode: float, upper: float, source: UniformSource) -> float:
        """
        Draw from Triangular(a, c, b) by inversion without constructing a distribution.

        Raises
        ------
        InvalidParameterError
            If the parameters violate ``a <= c <= b``, ``a < b``.
        """
        TriangularParametrization(lower=lower, mode=mode, upper=upper).validate()
        u = standard_uniform(source)
        width = upper - lower
        if u * width < mode - lower:
            return lower + math.sqrt(u * width * (mode - lower))
        return upper - math.sqrt((1.0 - u) * width * (upper - mode))


__all__ = [
    "TriangularParametrization",
    "TriangularDistribution",
    "configure_triangular_family",
]

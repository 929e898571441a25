"""
Maxwell-Boltzmann distribution family implementation.

Probability density function:
    f(x) = √(2/π) * x² * exp(-x²/(2a²)) / a³   for x > 0

``(X/a)²`` follows χ²(3); the distribution owns that chi-squared law and
routes its CDF, quantiles and variates through it.
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
from pysatl_random.distributions.estimation import validate_sample
from pysatl_random.distributions.support import POSITIVE_HALF_LINE
from pysatl_random.families.builtins.continuous.gamma import ChiSquaredDistribution
from pysatl_random.families.parametrizations import (
    ParameterStore,
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_random.families.registry import FamilyRegister
from pysatl_random.types import FamilyName

if TYPE_CHECKING:
    from pysatl_random.distributions.solvers import SolverSettings
    from pysatl_random.distributions.support import ContinuousSupport
    from pysatl_random.sources import UniformSource
    from pysatl_random.types import ArrayLike, FloatArray, SampleLike


_LOG_SQRT_2_OVER_PI = 0.5 * math.log(2.0 / math.pi)
_THREE_PI_MINUS_8 = 3.0 * math.pi - 8.0


def configure_maxwell_boltzmann_family() -> None:
    """
    Configure and register the Maxwell-Boltzmann family.
    """
    if not FamilyRegister.contains(MaxwellBoltzmannDistribution.family_name):
        FamilyRegister.register(MaxwellBoltzmannDistribution)


@parametrization(name="standard")
class MaxwellBoltzmannParametrization(Parametrization):
    """
    Scale parametrization.

    Parameters
    ----------
    scale : float
        Scale a
    """

    scale: float

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0


@dataclass(frozen=True, slots=True)
class MaxwellBoltzmannCache:
    scale: float
    log_scale: float
    chi_squared: ChiSquaredDistribution


def _derive(
    parameters: MaxwellBoltzmannParametrization, previous: MaxwellBoltzmannCache | None
) -> MaxwellBoltzmannCache:
    chi_squared = previous.chi_squared if previous is not None else ChiSquaredDistribution(3)
    return MaxwellBoltzmannCache(
        scale=parameters.scale,
        log_scale=math.log(parameters.scale),
        chi_squared=chi_squared,
    )


class MaxwellBoltzmannDistribution(ContinuousDistribution):
    """
    Maxwell-Boltzmann distribution Maxwell(a).

    Parameters
    ----------
    scale : float, default 1.0
        Scale a > 0.
    """

    family_name: ClassVar[str] = FamilyName.MAXWELL_BOLTZMANN
    parametrizations: ClassVar[dict[str, type[Parametrization]]] = {
        "standard": MaxwellBoltzmannParametrization,
    }
    base_parametrization: ClassVar[str] = "standard"

    _store: ParameterStore[MaxwellBoltzmannParametrization, MaxwellBoltzmannCache]

    def __init__(self, scale: float = 1.0) -> None:
        self._store = ParameterStore(MaxwellBoltzmannParametrization(scale=scale), _derive)

    @property
    def support(self) -> ContinuousSupport:
        return POSITIVE_HALF_LINE

    @property
    def scale(self) -> float:
        return self._store.cache.scale

    @scale.setter
    def scale(self, value: float) -> None:
        self._store.update(scale=value)

    def _squared(self, arr: FloatArray) -> FloatArray:
        """``(x/a)²`` for positive ``x``, ``0`` elsewhere."""
        z = np.where(arr > 0.0, arr, 0.0) / self._store.cache.scale
        return np.where(np.isnan(arr), np.nan, z * z)

    def logpdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        c = self._store.cache
        positive = (arr > 0.0) & np.isfinite(arr)
        safe = np.where(positive, arr, 1.0)
        z = safe / c.scale
        value = _LOG_SQRT_2_OVER_PI + 2.0 * np.log(z) - 0.5 * z * z - c.log_scale
        result = np.where(positive, value, -np.inf)
        return pack(np.where(np.isnan(arr), np.nan, result), arr)

    def pdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(np.exp(np.asarray(self.logpdf(arr))), arr)

    def cdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(self._store.cache.chi_squared.cdf(self._squared(arr)), arr)

    def sf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(self._store.cache.chi_squared.sf(self._squared(arr)), arr)

    def logcdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(self._store.cache.chi_squared.logcdf(self._squared(arr)), arr)

    def logsf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(self._store.cache.chi_squared.logsf(self._squared(arr)), arr)

    def _quantile_impl(self, p: float, settings: SolverSettings) -> float:
        c = self._store.cache
        return c.scale * math.sqrt(c.chi_squared.quantile(p, settings=settings))

    def _quantile1m_impl(self, p: float, settings: SolverSettings) -> float:
        c = self._store.cache
        return c.scale * math.sqrt(c.chi_squared.quantile1m(p, settings=settings))

    def mean(self) -> float:
        return 2.0 * self._store.cache.scale * math.sqrt(2.0 / math.pi)

    def var(self) -> float:
        a = self._store.cache.scale
        return a * a * _THREE_PI_MINUS_8 / math.pi

    def mode(self) -> float:
        return math.sqrt(2.0) * self._store.cache.scale

    def skewness(self) -> float:
        return 2.0 * math.sqrt(2.0) * (16.0 - 5.0 * math.pi) / _THREE_PI_MINUS_8**1.5

    def excess_kurtosis(self) -> float:
        return 4.0 * (-96.0 + 40.0 * math.pi - 3.0 * math.pi * math.pi) / _THREE_PI_MINUS_8**2

    def entropy(self) -> float:
        c = self._store.cache
        return c.log_scale + 0.5 * math.log(2.0 * math.pi) + np.euler_gamma - 0.5

    def variate(self, source: UniformSource) -> float:
        c = self._store.cache
        return c.scale * math.sqrt(c.chi_squared.variate(source))

    def fit_scale_mle(self, sample: SampleLike) -> None:
        """
        Maximum-likelihood scale ``a = √(Σ xᵢ² / (3n))``.

        Raises
        ------
        WrongSampleError
            If an element is not positive.
        """
        data = validate_sample(sample, support=POSITIVE_HALF_LINE, owner=self.family_name)
        self._store.update(scale=math.sqrt(float(np.mean(data * data)) / 3.0))


__all__ = [
    "MaxwellBoltzmannParametrization",
    "MaxwellBoltzmannDistribution",
    "configure_maxwell_boltzmann_family",
]

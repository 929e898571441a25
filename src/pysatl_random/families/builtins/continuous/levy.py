"""
Levy distribution family implementation.

Probability density function:
    f(x) = sqrt(σ/(2π)) * exp(-σ/(2(x-μ))) / (x-μ)^(3/2)   for x > μ

The Levy distribution is the stable law with exponent 1/2 and skewness 1.
Its mean and variance are infinite.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

import numpy as np
from scipy import special

from pysatl_random.distributions.distribution import ContinuousDistribution, as_float_array, pack
from pysatl_random.distributions.estimation import validate_sample
from pysatl_random.distributions.support import ContinuousSupport
from pysatl_random.families.parametrizations import (
    ParameterStore,
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_random.families.registry import FamilyRegister
from pysatl_random.sources import standard_normal
from pysatl_random.types import FamilyName

if TYPE_CHECKING:
    from pysatl_random.distributions.solvers import SolverSettings
    from pysatl_random.sources import UniformSource
    from pysatl_random.types import ArrayLike, FloatArray, SampleLike



def configure_levy_family() -> None:
    """
    Configure and register the Levy family.
    """
    if not FamilyRegister.contains(LevyDistribution.family_name):
        FamilyRegister.register(LevyDistribution)


@parametrization(name="standard")
class LevyParametrization(Parametrization):
    """
    Location-scale parametrization.

    Parameters
    ----------
    location : float
        Location μ, the left end of the support
    scale : float
        Scale σ
    """

    location: float
    scale: float

    @constraint(description="location is finite")
    def check_location_finite(self) -> bool:
        return math.isfinite(self.location)

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0


@dataclass(frozen=True, slots=True)
class LevyCache:
    location: float
    scale: float
    log_normalizer: float
    """0.5·log(σ/(2π))"""
    support: ContinuousSupport


def _derive(parameters: LevyParametrization, _: LevyCache | None) -> LevyCache:
    return LevyCache(
        location=parameters.location,
        scale=parameters.scale,
        log_normalizer=0.5 * math.log(parameters.scale / (2.0 * math.pi)),
        support=ContinuousSupport(left=parameters.location, left_closed=False),
    )


class LevyDistribution(ContinuousDistribution):
    """
    Levy distribution Levy(μ, σ).

    Parameters
    ----------
    location : float, default 0.0
        Location μ.
    scale : float, default 1.0
        Scale σ > 0.
    """

    family_name: ClassVar[str] = FamilyName.LEVY
    parametrizations: ClassVar[dict[str, type[Parametrization]]] = {
        "standard": LevyParametrization,
    }
    base_parametrization: ClassVar[str] = "standard"

    _store: ParameterStore[LevyParametrization, LevyCache]

    def __init__(self, location: float = 0.0, scale: float = 1.0) -> None:
        self._store = ParameterStore(LevyParametrization(location=location, scale=scale), _derive)

    @property
    def support(self) -> ContinuousSupport:
        return self._store.cache.support

    @property
    def location(self) -> float:
        return self._store.cache.location

    @location.setter
    def location(self, value: float) -> None:
        self._store.update(location=value)

    @property
    def scale(self) -> float:
        return self._store.cache.scale

    @scale.setter
    def scale(self, value: float) -> None:
        self._store.update(scale=value)

    def logpdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        c = self._store.cache
        y = arr - c.location
        positive = y > 0.0
        safe = np.where(positive, y, 1.0)
        inside = c.log_normalizer - 0.5 * c.scale / safe - 1.5 * np.log(safe)
        result = np.where(positive, inside, -np.inf)
        return pack(np.where(np.isnan(arr), np.nan, result), arr)

    def pdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(np.exp(np.asarray(self.logpdf(arr))), arr)

    def _erf_argument(self, arr: FloatArray) -> FloatArray:
        c = self._store.cache
        y = arr - c.location
        with np.errstate(divide="ignore"):
            return np.sqrt(0.5 * c.scale / np.where(y > 0.0, y, 0.0))

    def cdf(self, x: ArrayLike) -> Any:
        """``erfc(√(σ / (2(x − μ))))``."""
        arr = as_float_array(x)
        return pack(special.erfc(self._erf_argument(arr)), arr)

    def sf(self, x: ArrayLike) -> Any:
        """``erf(√(σ / (2(x − μ))))``."""
        arr = as_float_array(x)
        return pack(special.erf(self._erf_argument(arr)), arr)

    def _quantile_impl(self, p: float, settings: SolverSettings) -> float:
        c = self._store.cache
        y = float(special.erfcinv(p))
        return c.location + 0.5 * c.scale / (y * y)

    def _quantile1m_impl(self, p: float, settings: SolverSettings) -> float:
        c = self._store.cache
        y = float(special.erfinv(p))
        return c.location + 0.5 * c.scale / (y * y)

    def mean(self) -> float:
        return math.inf

    def var(self) -> float:
        return math.inf

    def median(self) -> float:
        c = self._store.cache
        y = float(special.erfcinv(0.5))
        return c.location + 0.5 * c.scale / (y * y)

    def mode(self) -> float:
        c = self._store.cache
        return c.location + c.scale / 3.0

    def skewness(self) -> float:
        return math.nan

    def excess_kurtosis(self) -> float:
        return math.nan

    def entropy(self) -> float:
        c = self._store.cache
        return 0.5 * (1.0 + 3.0 * np.euler_gamma + math.log(16.0 * math.pi * c.scale * c.scale))

    def cf(self, t: ArrayLike) -> Any:
        """``exp(iμt − √(−2iσt))``."""
        arr = as_float_array(t)
        c = self._store.cache
        return pack(np.exp(1j * c.location * arr - np.sqrt(-2j * c.scale * arr)), arr)

    def variate(self, source: UniformSource) -> float:
        c = self._store.cache
        return c.location + c.scale * self.standard_variate(source)

    @staticmethod
    def standard_variate(source: UniformSource) -> float:
        """Draw from Levy(0, 1) as ``1/N²``."""
        normal = standard_normal(source)
        return 1.0 / (normal * normal)

    @staticmethod
    def variate_with(location: float, scale: float, source: UniformSource) -> float:
        """
        Draw from Levy(μ, σ) without constructing a distribution.

        Raises
        ------
        InvalidParameterError
            If ``scale`` is not positive.
        """
        LevyParametrization(location=location, scale=scale).validate()
        return location + scale * LevyDistribution.standard_variate(source)

    def fit_scale_mle(self, sample: SampleLike) -> None:
        """
        Scale MLE ``σ = n / Σ 1/(xᵢ − μ)`` for the current location.

        Raises
        ------
        WrongSampleError
            If an element does not exceed the location.
        """
        data = validate_sample(sample, support=self.support, owner=self.family_name)
        self._store.update(scale=data.size / float(np.sum(1.0 / (data - self.location))))


__all__ = [
    "LevyParametrization",
    "LevyDistribution",
    "configure_levy_family",
]

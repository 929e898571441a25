"""
Log-normal distribution family implementation.

Probability density function:
    f(x) = 1 / (xσ√(2π)) * exp(-(log x - μ)² / (2σ²))   for x > 0

``log X`` is Normal(μ, σ²).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

import numpy as np
from scipy import special

from pysatl_random.distributions.distribution import ContinuousDistribution, as_float_array, pack
from pysatl_random.distributions.estimation import (
    sample_log_mean,
    sample_mean,
    sample_variance,
    validate_sample,
)
from pysatl_random.distributions.support import POSITIVE_HALF_LINE
from pysatl_random.errors import NotApplicableError
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
    from pysatl_random.distributions.support import ContinuousSupport
    from pysatl_random.sources import UniformSource
    from pysatl_random.types import ArrayLike, FloatArray, SampleLike

_logger = logging.getLogger(__name__)

_LOG_SQRT_2PI = 0.5 * math.log(2.0 * math.pi)


def configure_log_normal_family() -> None:
    """
    Configure and register the log-normal family.
    """
    if not FamilyRegister.contains(LogNormalDistribution.family_name):
        FamilyRegister.register(LogNormalDistribution)


@parametrization(name="standard")
class LogNormalParametrization(Parametrization):
    """
    Parameters of the underlying normal law.

    Parameters
    ----------
    location : float
        Mean μ of ``log X``
    scale : float
        Standard deviation σ of ``log X``
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
class LogNormalCache:
    location: float
    scale: float
    log_scale: float
    scale_squared: float


def _derive(parameters: LogNormalParametrization, _: LogNormalCache | None) -> LogNormalCache:
    return LogNormalCache(
        location=parameters.location,
        scale=parameters.scale,
        log_scale=math.log(parameters.scale),
        scale_squared=parameters.scale * parameters.scale,
    )


class LogNormalDistribution(ContinuousDistribution):
    """
    Log-normal distribution LogNormal(μ, σ).

    Parameters
    ----------
    location : float, default 0.0
        Mean μ of ``log X``.
    scale : float, default 1.0
        Standard deviation σ > 0 of ``log X``.
    """

    family_name: ClassVar[str] = FamilyName.LOG_NORMAL
    parametrizations: ClassVar[dict[str, type[Parametrization]]] = {
        "standard": LogNormalParametrization,
    }
    base_parametrization: ClassVar[str] = "standard"

    _store: ParameterStore[LogNormalParametrization, LogNormalCache]

    def __init__(self, location: float = 0.0, scale: float = 1.0) -> None:
        self._store = ParameterStore(
            LogNormalParametrization(location=location, scale=scale), _derive
        )

    @property
    def support(self) -> ContinuousSupport:
        return POSITIVE_HALF_LINE

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

    def _standardize(self, arr: FloatArray) -> FloatArray:
        """``(log x − μ)/σ``; ``-inf`` for ``x <= 0``."""
        c = self._store.cache
        with np.errstate(divide="ignore", invalid="ignore"):
            logs = np.log(np.where(np.isnan(arr) | (arr > 0.0), arr, 0.0))
        return (logs - c.location) / c.scale

    def logpdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        c = self._store.cache
        positive = (arr > 0.0) & np.isfinite(arr)
        safe = np.where(positive, arr, 1.0)
        log_safe = np.log(safe)
        z = (log_safe - c.location) / c.scale
        value = -0.5 * z * z - log_safe - c.log_scale - _LOG_SQRT_2PI
        result = np.where(positive, value, -np.inf)
        return pack(np.where(np.isnan(arr), np.nan, result), arr)

    def pdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(np.exp(np.asarray(self.logpdf(arr))), arr)

    def cdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(special.ndtr(self._standardize(arr)), arr)

    def sf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(special.ndtr(-self._standardize(arr)), arr)

    def logcdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(special.log_ndtr(self._standardize(arr)), arr)

    def logsf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(special.log_ndtr(-self._standardize(arr)), arr)

    def _quantile_impl(self, p: float, settings: SolverSettings) -> float:
        c = self._store.cache
        return math.exp(c.location + c.scale * float(special.ndtri(p)))

    def _quantile1m_impl(self, p: float, settings: SolverSettings) -> float:
        c = self._store.cache
        return math.exp(c.location - c.scale * float(special.ndtri(p)))

    def mean(self) -> float:
        c = self._store.cache
        return math.exp(c.location + 0.5 * c.scale_squared)

    def var(self) -> float:
        c = self._store.cache
        return math.expm1(c.scale_squared) * math.exp(2.0 * c.location + c.scale_squared)

    def median(self) -> float:
        return math.exp(self._store.cache.location)

    def mode(self) -> float:
        c = self._store.cache
        return math.exp(c.location - c.scale_squared)

    def skewness(self) -> float:
        s2 = self._store.cache.scale_squared
        return (math.exp(s2) + 2.0) * math.sqrt(math.expm1(s2))

    def excess_kurtosis(self) -> float:
        s2 = self._store.cache.scale_squared
        return math.exp(4.0 * s2) + 2.0 * math.exp(3.0 * s2) + 3.0 * math.exp(2.0 * s2) - 6.0

    def entropy(self) -> float:
        c = self._store.cache
        return c.location + 0.5 + c.log_scale + _LOG_SQRT_2PI

    def variate(self, source: UniformSource) -> float:
        c = self._store.cache
        return math.exp(c.location + c.scale * standard_normal(source))

    @staticmethod
    def variate_with(location: float, scale: float, source: UniformSource) -> float:
        LogNormalParametrization(location=location, scale=scale).validate()
        return math.exp(location + scale * standard_normal(source))

    # ---------------------------------------------------------------- fitting

    def _validate(self, sample: SampleLike, min_size: int = 1) -> FloatArray:
        return validate_sample(
            sample, support=POSITIVE_HALF_LINE, min_size=min_size, owner=self.family_name
        )

    def fit_location_mle(self, sample: SampleLike) -> None:
        """``μ = mean(log x)`` for the current scale."""
        data = self._validate(sample)
        self._store.update(location=sample_log_mean(data))

    def fit_scale_mle(self, sample: SampleLike) -> None:
        """
        ``σ = √mean((log x − μ)²)`` for the current location.

        Raises
        ------
        NotApplicableError
            If every ``log x`` equals the location.
        """
        data = self._validate(sample)
        logs = np.log(data)
        scale = math.sqrt(float(np.mean((logs - self.location) ** 2)))
        if scale == 0.0:
            raise NotApplicableError(
                f"{self.family_name}: All elements equal exp(location), scale is zero."
            )
        self._store.update(scale=scale)

    def fit_mle(self, sample: SampleLike) -> None:
        """
        Joint maximum-likelihood estimate: mean and standard deviation of ``log x``.

        Raises
        ------
        TooFewElementsError
            If the sample has fewer than two elements.
        NotApplicableError
            If all elements are equal.
        """
        data = self._validate(sample, min_size=2)
        logs = np.log(data)
        location = sample_mean(logs)
        variance = sample_variance(logs, location)
        if variance <= 0.0:
            raise NotApplicableError(f"{self.family_name}: Sample has zero dispersion.")
        self._store.replace(
            LogNormalParametrization(location=location, scale=math.sqrt(variance))
        )
        _logger.debug("LogNormal fitted to %r", self)

    def fit_location_mm(self, sample: SampleLike) -> None:
        """``μ = log(mean) − σ²/2`` for the current scale."""
        data = self._validate(sample)
        c = self._store.cache
        self._store.update(location=math.log(sample_mean(data)) - 0.5 * c.scale_squared)

    def fit_scale_mm(self, sample: SampleLike) -> None:
        """
        ``σ = √(2(log mean − μ))`` for the current location.

        Raises
        ------
        NotApplicableError
            If the sample mean does not exceed ``exp(μ)``.
        """
        data = self._validate(sample)
        twice = 2.0 * (math.log(sample_mean(data)) - self.location)
        if twice <= 0.0:
            raise NotApplicableError(
                f"{self.family_name}: Sample mean should be greater than exp(location)."
            )
        self._store.update(scale=math.sqrt(twice))

    def fit_mm(self, sample: SampleLike) -> None:
        """
        Method of moments: ``σ² = log(1 + var/mean²)``, ``μ = log(mean) − σ²/2``.

        Raises
        ------
        TooFewElementsError
            If the sample has fewer than two elements.
        NotApplicableError
            If the sample variance is zero.
        """
        data = self._validate(sample, min_size=2)
        mean = sample_mean(data)
        variance = sample_variance(data, mean)
        if variance <= 0.0:
            raise NotApplicableError(f"{self.family_name}: Sample has zero variance.")
        scale_squared = math.log1p(variance / (mean * mean))
        self._store.replace(
            LogNormalParametrization(
                location=math.log(mean) - 0.5 * scale_squared,
                scale=math.sqrt(scale_squared),
            )
        )


__all__ = [
    "LogNormalParametrization",
    "LogNormalDistribution",
    "configure_log_normal_family",
]

"""
Asymmetric Laplace distribution family implementation.

Probability density function:
    f(x) = κ / (σ(1+κ²)) * exp(-κ(x-m)/σ)   for x >= m
    f(x) = κ / (σ(1+κ²)) * exp((x-m)/(σκ))   for x < m

With κ = 1 this is the classical Laplace distribution. A variate is
``m + σ(E₁/κ − κE₂)`` with independent standard exponentials E₁, E₂.
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

from pysatl_random.distributions.distribution import ContinuousDistribution, as_float_array, pack
from pysatl_random.distributions.estimation import (
    sample_mean,
    sample_quantile,
    sample_skewness,
    sample_variance,
    validate_sample,
)
from pysatl_random.distributions.solvers import DEFAULT_SOLVER_SETTINGS, SolverSettings, solve
from pysatl_random.distributions.support import REAL_LINE
from pysatl_random.errors import NotApplicableError
from pysatl_random.families.parametrizations import (
    ParameterStore,
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_random.families.registry import FamilyRegister
from pysatl_random.sources import standard_exponential
from pysatl_random.types import FamilyName

if TYPE_CHECKING:
    from pysatl_random.distributions.support import ContinuousSupport
    from pysatl_random.sources import UniformSource
    from pysatl_random.types import ArrayLike, FloatArray, SampleLike

_logger = logging.getLogger(__name__)


def configure_laplace_family() -> None:
    """
    Configure and register the asymmetric Laplace family.
    """
    if not FamilyRegister.contains(LaplaceDistribution.family_name):
        FamilyRegister.register(LaplaceDistribution)


@parametrization(name="standard")
class LaplaceParametrization(Parametrization):
    """
    Location-scale-asymmetry parametrization.

    Parameters
    ----------
    location : float
        Shift m
    scale : float
        Scale σ
    asymmetry : float
        Asymmetry κ; values below one skew to the right
    """

    location: float
    scale: float
    asymmetry: float

    @constraint(description="location is finite")
    def check_location_finite(self) -> bool:
        return math.isfinite(self.location)

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    @constraint(description="asymmetry > 0")
    def check_asymmetry_positive(self) -> bool:
        return self.asymmetry > 0


@dataclass(frozen=True, slots=True)
class LaplaceCache:
    location: float
    scale: float
    asymmetry: float
    asymmetry_squared: float
    log_scale: float
    log_normalizer: float
    """log(κ / (σ(1+κ²)))"""
    left_mass: float
    """P(X < m) = κ²/(1+κ²)"""


def _derive(parameters: LaplaceParametrization, _: LaplaceCache | None) -> LaplaceCache:
    k = parameters.asymmetry
    k2 = k * k
    log_scale = math.log(parameters.scale)
    return LaplaceCache(
        location=parameters.location,
        scale=parameters.scale,
        asymmetry=k,
        asymmetry_squared=k2,
        log_scale=log_scale,
        log_normalizer=math.log(k) - log_scale - math.log1p(k2),
        left_mass=k2 / (1.0 + k2),
    )


def _tail_means(data: FloatArray, location: float) -> tuple[float, float]:
    """Mean positive and negative deviations ``X⁺``, ``X⁻`` from ``location``."""
    deviation = data - location
    upper = float(np.mean(np.maximum(deviation, 0.0)))
    lower = float(np.mean(np.maximum(-deviation, 0.0)))
    return upper, lower


def _skewness_of(asymmetry: float) -> float:
    k4 = asymmetry**4
    return 2.0 * (1.0 - asymmetry**6) / (1.0 + k4) ** 1.5


class LaplaceDistribution(ContinuousDistribution):
    """
    Asymmetric Laplace distribution Laplace(m, σ, κ).

    Parameters
    ----------
    location : float, default 0.0
        Shift m.
    scale : float, default 1.0
        Scale σ > 0.
    asymmetry : float, default 1.0
        Asymmetry κ > 0.
    """

    family_name: ClassVar[str] = FamilyName.LAPLACE
    parametrizations: ClassVar[dict[str, type[Parametrization]]] = {
        "standard": LaplaceParametrization,
    }
    base_parametrization: ClassVar[str] = "standard"

    _store: ParameterStore[LaplaceParametrization, LaplaceCache]

    def __init__(self, location: float = 0.0, scale: float = 1.0, asymmetry: float = 1.0) -> None:
        self._store = ParameterStore(
            LaplaceParametrization(location=location, scale=scale, asymmetry=asymmetry), _derive
        )

    @property
    def support(self) -> ContinuousSupport:
        return REAL_LINE

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

    @property
    def asymmetry(self) -> float:
        return self._store.cache.asymmetry

    @asymmetry.setter
    def asymmetry(self, value: float) -> None:
        self._store.update(asymmetry=value)

    # ------------------------------------------------------------ densities

    def logpdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        c = self._store.cache
        z = (arr - c.location) / c.scale
        exponent = np.where(z >= 0.0, -c.asymmetry * z, z / c.asymmetry)
        return pack(c.log_normalizer + exponent, arr)

    def pdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(np.exp(np.asarray(self.logpdf(arr))), arr)

    def cdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        c = self._store.cache
        z = (arr - c.location) / c.scale
        with np.errstate(over="ignore"):
            left = c.left_mass * np.exp(np.minimum(z, 0.0) / c.asymmetry)
            right = -np.expm1(-c.asymmetry * np.maximum(z, 0.0)) * (1.0 - c.left_mass)
        return pack(np.where(z < 0.0, left, c.left_mass + right), arr)

    def sf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        c = self._store.cache
        z = (arr - c.location) / c.scale
        right = (1.0 - c.left_mass) * np.exp(-c.asymmetry * np.maximum(z, 0.0))
        left = 1.0 - c.left_mass * np.exp(np.minimum(z, 0.0) / c.asymmetry)
        return pack(np.where(z >= 0.0, right, left), arr)

    # ------------------------------------------------------------ quantiles

    def _quantile_impl(self, p: float, settings: SolverSettings) -> float:
        c = self._store.cache
        if p < c.left_mass:
            return c.location + c.scale * c.asymmetry * math.log(p / c.left_mass)
        return c.location - c.scale / c.asymmetry * math.log1p(c.asymmetry_squared) - (
            c.scale / c.asymmetry * math.log1p(-p)
        )

    def _quantile1m_impl(self, p: float, settings: SolverSettings) -> float:
        c = self._store.cache
        if p > 1.0 - c.left_mass:
            return c.location + c.scale * c.asymmetry * math.log1p(-p) - (
                c.scale * c.asymmetry * math.log(c.left_mass)
            )
        return c.location - c.scale / c.asymmetry * (math.log(p) + math.log1p(c.asymmetry_squared))

    # ------------------------------------------------------------ moments

    def mean(self) -> float:
        c = self._store.cache
        return c.location + c.scale * (1.0 / c.asymmetry - c.asymmetry)

    def var(self) -> float:
        c = self._store.cache
        return c.scale * c.scale * (1.0 + c.asymmetry_squared**2) / c.asymmetry_squared

    def median(self) -> float:
        c = self._store.cache
        k, k2 = c.asymmetry, c.asymmetry_squared
        if k >= 1.0:
            return c.location + c.scale * k * math.log((1.0 + k2) / (2.0 * k2))
        return c.location - c.scale / k * math.log(0.5 * (1.0 + k2))

    def mode(self) -> float:
        return self._store.cache.location

    def skewness(self) -> float:
        return _skewness_of(self._store.cache.asymmetry)

    def excess_kurtosis(self) -> float:
        k4 = self._store.cache.asymmetry_squared ** 2
        return 6.0 * (1.0 + k4 * k4) / (1.0 + k4) ** 2

    def entropy(self) -> float:
        c = self._store.cache
        return 1.0 + c.log_scale + math.log1p(c.asymmetry_squared) - math.log(c.asymmetry)

    def cf(self, t: ArrayLike) -> Any:
        """``e^(imt) / (1 + σ²t² − iσt(1/κ − κ))``."""
        arr = as_float_array(t)
        c = self._store.cache
        st = c.scale * arr
        denominator = 1.0 + st * st - 1j * st * (1.0 / c.asymmetry - c.asymmetry)
        return pack(np.exp(1j * c.location * arr) / denominator, arr)

    # ------------------------------------------------------------ variates

    def variate(self, source: UniformSource) -> float:
        c = self._store.cache
        return self._variate(c.location, c.scale, c.asymmetry, source)

    @staticmethod
    def _variate(location: float, scale: float, asymmetry: float, source: UniformSource) -> float:
        e1 = standard_exponential(source)
        e2 = standard_exponential(source)
        return location + scale * (e1 / asymmetry - asymmetry * e2)

    @staticmethod
    def variate_with(
        location: float, scale: float, asymmetry: float, source: UniformSource
    ) -> float:
        """
        Draw from Laplace(m, σ, κ) without constructing a distribution.

        Raises
        ------
        InvalidParameterError
            If ``scale`` or ``asymmetry`` is not positive.
        """
        LaplaceParametrization(location=location, scale=scale, asymmetry=asymmetry).validate()
        return LaplaceDistribution._variate(location, scale, asymmetry, source)

    # ------------------------------------------------------------ MLE

    def _validate(self, sample: SampleLike, min_size: int = 1) -> FloatArray:
        return validate_sample(sample, min_size=min_size, owner=self.family_name)

    def fit_location_mle(self, sample: SampleLike) -> None:
        """Location MLE: the sample quantile of level ``κ²/(1+κ²)``."""
        data = self._validate(sample)
        self._store.update(location=sample_quantile(data, self._store.cache.left_mass))

    def fit_scale_mle(self, sample: SampleLike) -> None:
        """Scale MLE ``κ·X⁺ + X⁻/κ`` with mean deviations from the location."""
        data = self._validate(sample)
        c = self._store.cache
        upper, lower = _tail_means(data, c.location)
        scale = c.asymmetry * upper + lower / c.asymmetry
        if scale <= 0.0:
            raise NotApplicableError(
                f"{self.family_name}: All elements equal the location, scale estimate is zero."
            )
        self._store.update(scale=scale)

    def _asymmetry_mle(
        self, data: FloatArray, location: float, scale: float, settings: SolverSettings
    ) -> float:
        """
        Root of the asymmetry score for fixed location and scale.

        Multiplied by ``σκ²(1+κ²)`` the score becomes the quartic
        ``X⁺κ⁴ + σκ³ + (X⁺ − X⁻)κ² − σκ − X⁻``, which has exactly one
        positive root.
        """
        upper, lower = _tail_means(data, location)

        def quartic(k: float) -> float:
            return (((upper * k + scale) * k + upper - lower) * k - scale) * k - lower

        def derivative(k: float) -> float:
            return ((4.0 * upper * k + 3.0 * scale) * k + 2.0 * (upper - lower)) * k - scale

        return solve(
            quartic,
            derivative,
            1.0,
            lower=0.0,
            step=0.5,
            settings=settings,
            what="Laplace asymmetry estimate",
        )

    def fit_asymmetry_mle(
        self, sample: SampleLike, *, settings: SolverSettings = DEFAULT_SOLVER_SETTINGS
    ) -> None:
        """
        Asymmetry MLE for fixed location and scale.

        Raises
        ------
        WrongReturnError
            If the root search does not converge.
        """
        data = self._validate(sample)
        c = self._store.cache
        self._store.update(asymmetry=self._asymmetry_mle(data, c.location, c.scale, settings))

    def fit_location_and_scale_mle(self, sample: SampleLike) -> None:
        data = self._validate(sample)
        c = self._store.cache
        location = sample_quantile(data, c.left_mass)
        upper, lower = _tail_means(data, location)
        scale = c.asymmetry * upper + lower / c.asymmetry
        if scale <= 0.0:
            raise NotApplicableError(
                f"{self.family_name}: Sample has zero dispersion, scale estimate is zero."
            )
        self._store.replace(
            LaplaceParametrization(location=location, scale=scale, asymmetry=c.asymmetry)
        )

    def fit_location_and_asymmetry_mle(
        self, sample: SampleLike, *, settings: SolverSettings = DEFAULT_SOLVER_SETTINGS
    ) -> None:
        """
        Location and asymmetry MLE for a fixed scale.

        The location is searched over the order statistics; for each
        candidate the asymmetry solves its score equation.
        """
        data = self._validate(sample)
        scale = self._store.cache.scale
        best: tuple[float, float, float] | None = None
        for location in np.unique(data):
            k = self._asymmetry_mle(data, float(location), scale, settings)
            upper, lower = _tail_means(data, float(location))
            log_likelihood = (
                math.log(k) - math.log1p(k * k) - (k * upper + lower / k) / scale
            )
            if best is None or log_likelihood > best[0]:
                best = (log_likelihood, float(location), k)
        assert best is not None
        self._store.replace(
            LaplaceParametrization(location=best[1], scale=scale, asymmetry=best[2])
        )

    def fit_scale_and_asymmetry_mle(self, sample: SampleLike) -> None:
        """
        Closed-form scale and asymmetry MLE for a fixed location.

        ``κ = (X⁻/X⁺)^(1/4)`` and ``σ = (X⁺X⁻)^(1/4)(√X⁺ + √X⁻)``.

        Raises
        ------
        NotApplicableError
            If the sample lies on one side of the location.
        """
        data = self._validate(sample)
        location = self._store.cache.location
        upper, lower = _tail_means(data, location)
        if upper <= 0.0 or lower <= 0.0:
            raise NotApplicableError(
                f"{self.family_name}: Sample should have elements on both sides of the location."
            )
        self._store.replace(self._scale_and_asymmetry(location, upper, lower))

    @staticmethod
    def _scale_and_asymmetry(location: float, upper: float, lower: float) -> LaplaceParametrization:
        root_upper, root_lower = math.sqrt(upper), math.sqrt(lower)
        return LaplaceParametrization(
            location=location,
            scale=math.sqrt(root_upper * root_lower) * (root_upper + root_lower),
            asymmetry=math.sqrt(root_lower / root_upper),
        )

    def fit_mle(self, sample: SampleLike) -> None:
        """
        Joint MLE of all three parameters.

        For a fixed location the profile log-likelihood per element equals
        ``−2·log(√X⁺ + √X⁻) − 1``, so the location is the order statistic
        minimizing ``√X⁺ + √X⁻``.

        Raises
        ------
        TooFewElementsError
            If the sample has fewer than two elements.
        NotApplicableError
            If all elements are equal.
        """
        data = np.sort(self._validate(sample, min_size=2))
        n = data.size
        prefix = np.concatenate(([0.0], np.cumsum(data)))
        index = np.arange(n)
        below = index * data - prefix[:-1]
        above = (prefix[-1] - prefix[1:]) - (n - 1 - index) * data
        upper = above / n
        lower = below / n
        valid = (upper > 0.0) & (lower > 0.0)
        if not np.any(valid):
            raise NotApplicableError(f"{self.family_name}: Sample has zero dispersion.")
        criterion = np.where(valid, np.sqrt(upper) + np.sqrt(lower), np.inf)
        best = int(np.argmin(criterion))
        self._store.replace(
            self._scale_and_asymmetry(float(data[best]), float(upper[best]), float(lower[best]))
        )
        _logger.debug("Laplace fitted to %r", self)

    # ------------------------------------------------------------ MM

    def _asymmetry_from_skewness(self, skewness: float, settings: SolverSettings) -> float:
        """Solve ``2(1−κ⁶)/(1+κ⁴)^(3/2) = skewness`` for κ."""
        if abs(skewness) >= 2.0:
            raise NotApplicableError(
                f"{self.family_name}: Sample skewness {skewness} is out of (-2, 2)."
            )

        def target(k: float) -> float:
            return skewness - _skewness_of(k) if k > 0.0 else skewness - 2.0

        def derivative(k: float) -> float:
            k3 = k**3
            k4 = k3 * k
            base = 1.0 + k4
            return (12.0 * k3 * k * k * base + 12.0 * k3 * (1.0 - k4 * k * k)) / base**2.5

        return solve(
            target,
            derivative,
            1.0,
            lower=0.0,
            step=0.5,
            settings=settings,
            what="Laplace asymmetry from skewness",
        )

    def fit_location_mm(self, sample: SampleLike) -> None:
        """Location from the sample mean: ``m = mean − σ(1/κ − κ)``."""
        data = self._validate(sample)
        c = self._store.cache
        self._store.update(
            location=sample_mean(data) - c.scale * (1.0 / c.asymmetry - c.asymmetry)
        )

    def _scale_from_variance(self, variance: float, asymmetry: float) -> float:
        if variance <= 0.0:
            raise NotApplicableError(f"{self.family_name}: Sample has zero variance.")
        return asymmetry * math.sqrt(variance / (1.0 + asymmetry**4))

    def fit_scale_mm(self, sample: SampleLike) -> None:
        """Scale from the sample variance ``σ²(1+κ⁴)/κ²``."""
        data = self._validate(sample, min_size=2)
        self._store.update(
            scale=self._scale_from_variance(sample_variance(data), self._store.cache.asymmetry)
        )

    def fit_asymmetry_mm(self, sample: SampleLike) -> None:
        """Asymmetry from the sample mean: the positive root of ``κ² + dκ − 1 = 0``."""
        data = self._validate(sample)
        c = self._store.cache
        d = (sample_mean(data) - c.location) / c.scale
        self._store.update(asymmetry=0.5 * (math.sqrt(d * d + 4.0) - d))

    def fit_location_and_scale_mm(self, sample: SampleLike) -> None:
        data = self._validate(sample, min_size=2)
        k = self._store.cache.asymmetry
        mean = sample_mean(data)
        scale = self._scale_from_variance(sample_variance(data, mean), k)
        self._store.replace(
            LaplaceParametrization(location=mean - scale * (1.0 / k - k), scale=scale, asymmetry=k)
        )

    def fit_location_and_asymmetry_mm(self, sample: SampleLike) -> None:
        """
        Location and asymmetry for a fixed scale.

        The variance determines ``κ²`` up to inversion; the sign of the sample
        skewness picks the root.

        Raises
        ------
        NotApplicableError
            If the sample variance is below ``2σ²``, the minimum over κ.
        """
        data = self._validate(sample, min_size=2)
        scale = self._store.cache.scale
        mean = sample_mean(data)
        ratio = sample_variance(data, mean) / (scale * scale)
        if ratio < 2.0:
            raise NotApplicableError(
                f"{self.family_name}: Sample variance is below the minimum 2σ² for this scale."
            )
        k2 = 0.5 * (ratio + math.sqrt(ratio * ratio - 4.0))
        if sample_skewness(data, mean) > 0.0:
            k2 = 1.0 / k2
        k = math.sqrt(k2)
        self._store.replace(
            LaplaceParametrization(location=mean - scale * (1.0 / k - k), scale=scale, asymmetry=k)
        )

    def fit_scale_and_asymmetry_mm(
        self, sample: SampleLike, *, settings: SolverSettings = DEFAULT_SOLVER_SETTINGS
    ) -> None:
        """Asymmetry from the sample skewness, scale from the variance."""
        data = self._validate(sample, min_size=2)
        mean = sample_mean(data)
        k = self._asymmetry_from_skewness(sample_skewness(data, mean), settings)
        scale = self._scale_from_variance(sample_variance(data, mean), k)
        self._store.replace(
            LaplaceParametrization(location=self._store.cache.location, scale=scale, asymmetry=k)
        )

    def fit_mm(
        self, sample: SampleLike, *, settings: SolverSettings = DEFAULT_SOLVER_SETTINGS
    ) -> None:
        """
        Method of moments for all parameters.

        Raises
        ------
        TooFewElementsError
            If the sample has fewer than two elements.
        NotApplicableError
            If the sample variance is zero or ``|skewness| >= 2``.
        """
        data = self._validate(sample, min_size=2)
        mean = sample_mean(data)
        variance = sample_variance(data, mean)
        if variance <= 0.0:
            raise NotApplicableError(f"{self.family_name}: Sample has zero variance.")
        k = self._asymmetry_from_skewness(sample_skewness(data, mean), settings)
        scale = self._scale_from_variance(variance, k)
        self._store.replace(
            LaplaceParametrization(location=mean - scale * (1.0 / k - k), scale=scale, asymmetry=k)
        )


__all__ = [
    "LaplaceParametrization",
    "LaplaceDistribution",
    "configure_laplace_family",
]

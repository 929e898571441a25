"""
Gamma distribution family implementation.

Contains the Gamma family with rate and scale parametrizations, and its
integer-shape specializations Erlang and chi-squared.

Probability density function (rate parametrization):
    f(x) = β^α / Γ(α) * x^(α-1) * exp(-βx) for x > 0

Related distributions:
    σX ~ Γ(α, β/σ);
    Γ(1, β) is Exp(β);
    Γ(k/2, 1/2) is χ²(k);
    Γ(k, β) with integer k is Erlang(k, β).
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
from pysatl_random.distributions.solvers import DEFAULT_SOLVER_SETTINGS, SolverSettings, solve
from pysatl_random.distributions.support import POSITIVE_HALF_LINE
from pysatl_random.errors import NotApplicableError
from pysatl_random.families.builtins.continuous.gamma_quantile import (
    lower_tail_guess,
    upper_tail_guess,
)
from pysatl_random.families.builtins.continuous.gamma_sampling import (
    GeneratorCoefficients,
    GeneratorRegime,
    draw_standard,
    draw_standard_uncached,
    generator_coefficients,
)
from pysatl_random.families.parametrizations import (
    ParameterStore,
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_random.families.registry import FamilyRegister
from pysatl_random.types import FamilyName

if TYPE_CHECKING:
    from pysatl_random.distributions.support import ContinuousSupport
    from pysatl_random.sources import UniformSource
    from pysatl_random.types import ArrayLike, SampleLike

_logger = logging.getLogger(__name__)

_LOG_SMALLEST = math.log(math.ulp(0.0))
"""Logarithm of the smallest positive double; quantiles below it round to 0."""


def configure_gamma_families() -> None:
    """
    Register the Gamma, Erlang and chi-squared families.
    """
    for family in (GammaDistribution, ErlangDistribution, ChiSquaredDistribution):
        if not FamilyRegister.contains(family.family_name):
            FamilyRegister.register(family)


# ------------------------------------------------------------------ parameters


@parametrization(name="rate")
class GammaRateParametrization(Parametrization):
    """
    Shape-rate parametrization of the Gamma distribution.

    Parameters
    ----------
    shape : float
        Shape α
    rate : float
        Rate β
    """

    shape: float
    rate: float

    @constraint(description="shape > 0")
    def check_shape_positive(self) -> bool:
        return self.shape > 0

    @constraint(description="shape is finite")
    def check_shape_finite(self) -> bool:
        return math.isfinite(self.shape)

    @constraint(description="rate > 0")
    def check_rate_positive(self) -> bool:
        return self.rate > 0

    @constraint(description="rate is finite")
    def check_rate_finite(self) -> bool:
        return math.isfinite(self.rate)


@parametrization(name="scale")
class GammaScaleParametrization(Parametrization):
    """
    Shape-scale parametrization of the Gamma distribution.

    Parameters
    ----------
    shape : float
        Shape α
    scale : float
        Scale θ = 1/β
    """

    shape: float
    scale: float

    @constraint(description="shape > 0")
    def check_shape_positive(self) -> bool:
        return self.shape > 0

    @constraint(description="shape is finite")
    def check_shape_finite(self) -> bool:
        return math.isfinite(self.shape)

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    @constraint(description="scale is finite")
    def check_scale_finite(self) -> bool:
        return math.isfinite(self.scale)

    def transform_to_base_parametrization(self) -> Parametrization:
        return GammaRateParametrization(shape=self.shape, rate=1.0 / self.scale)


@parametrization(name="rate")
class ErlangRateParametrization(Parametrization):
    """
    Shape-rate parametrization of the Erlang distribution.

    Parameters
    ----------
    shape : int
        Number of exponential phases k
    rate : float
        Rate β of each phase
    """

    shape: int
    rate: float

    @constraint(description="shape is a positive integer")
    def check_shape_positive_integer(self) -> bool:
        return float(self.shape).is_integer() and self.shape >= 1

    @constraint(description="rate > 0")
    def check_rate_positive(self) -> bool:
        return self.rate > 0

    @constraint(description="rate is finite")
    def check_rate_finite(self) -> bool:
        return math.isfinite(self.rate)


@parametrization(name="scale")
class ErlangScaleParametrization(Parametrization):
    """
    Shape-scale parametrization of the Erlang distribution.
    """

    shape: int
    scale: float

    @constraint(description="shape is a positive integer")
    def check_shape_positive_integer(self) -> bool:
        return float(self.shape).is_integer() and self.shape >= 1

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    @constraint(description="scale is finite")
    def check_scale_finite(self) -> bool:
        return math.isfinite(self.scale)

    def transform_to_base_parametrization(self) -> Parametrization:
        return ErlangRateParametrization(shape=self.shape, rate=1.0 / self.scale)


@parametrization(name="degree")
class ChiSquaredParametrization(Parametrization):
    """
    Degrees-of-freedom parametrization of the chi-squared distribution.

    Parameters
    ----------
    degree : int
        Degrees of freedom k
    """

    degree: int

    @constraint(description="degree is a positive integer")
    def check_degree_positive_integer(self) -> bool:
        return float(self.degree).is_integer() and self.degree >= 1


@dataclass(frozen=True, slots=True)
class GammaCache:
    """
    Quantities derived from the shape and the rate.

    Attributes
    ----------
    shape, rate, scale : float
        α, β and θ = 1/β.
    log_shape, log_rate : float
        log(α) and log(β).
    log_gamma_shape : float
        log Γ(α).
    log_normalizer : float
        α·log(β) − log Γ(α), the additive constant of the log-density.
    coefficients : GeneratorCoefficients
        Variate generation regime and its constants; depends on α only.
    """

    shape: float
    rate: float
    scale: float
    log_shape: float
    log_rate: float
    log_gamma_shape: float
    log_normalizer: float
    coefficients: GeneratorCoefficients


def derive_gamma_cache(shape: float, rate: float, previous: GammaCache | None) -> GammaCache:
    """
    Build the cache for ``(shape, rate)``.

    The generator constants of ``previous`` are reused when the shape is
    unchanged.
    """
    if previous is not None and previous.shape == shape:
        coefficients = previous.coefficients
        log_shape = previous.log_shape
        log_gamma_shape = previous.log_gamma_shape
    else:
        coefficients = generator_coefficients(shape)
        log_shape = math.log(shape)
        log_gamma_shape = float(special.gammaln(shape))
    log_rate = math.log(rate)
    return GammaCache(
        shape=shape,
        rate=rate,
        scale=1.0 / rate,
        log_shape=log_shape,
        log_rate=log_rate,
        log_gamma_shape=log_gamma_shape,
        log_normalizer=shape * log_rate - log_gamma_shape,
        coefficients=coefficients,
    )


# ------------------------------------------------------------------ families


class GammaBase(ContinuousDistribution):
    """
    Shared engine of the Gamma-type families.

    Subclasses only declare their parametrizations and map them to
    ``(shape, rate)``; densities, quantiles, moments and variates live here.
    """

    _store: ParameterStore[Any, GammaCache]

    @staticmethod
    def _shape_and_rate(parameters: Any) -> tuple[float, float]:
        return float(parameters.shape), float(parameters.rate)

    def _derive(self, parameters: Any, previous: GammaCache | None) -> GammaCache:
        shape, rate = self._shape_and_rate(parameters)
        return derive_gamma_cache(shape, rate, previous)

    @property
    def _cache(self) -> GammaCache:
        return self._store.cache

    @property
    def support(self) -> ContinuousSupport:
        return POSITIVE_HALF_LINE

    # ----------------------------------------------------------- accessors

    @property
    def shape(self) -> float:
        """Shape α."""
        return self._cache.shape

    @property
    def rate(self) -> float:
        """Rate β."""
        return self._cache.rate

    @property
    def scale(self) -> float:
        """Scale θ = 1/β."""
        return self._cache.scale

    @property
    def log_shape(self) -> float:
        """log(α)."""
        return self._cache.log_shape

    @property
    def log_rate(self) -> float:
        """log(β)."""
        return self._cache.log_rate

    @property
    def log_gamma_shape(self) -> float:
        """log Γ(α)."""
        return self._cache.log_gamma_shape

    @property
    def regime(self) -> GeneratorRegime:
        """Variate generation algorithm selected for the current shape."""
        return self._cache.coefficients.regime

    # ----------------------------------------------------------- densities

    def logpdf(self, x: ArrayLike) -> Any:
        """
        Log-density ``(α−1)·log x + α·log β − log Γ(α) − βx``.

        At ``x = 0`` the density is ``β`` for ``α = 1`` and ``0`` otherwise.
        """
        arr = as_float_array(x)
        c = self._cache
        positive = (arr > 0.0) & np.isfinite(arr)
        safe = np.where(positive, arr, 1.0)
        inside = (c.shape - 1.0) * np.log(safe) + c.log_normalizer - c.rate * safe
        at_zero = c.log_rate if c.shape == 1.0 else -np.inf
        result = np.where(positive, inside, np.where(arr == 0.0, at_zero, -np.inf))
        result = np.where(np.isnan(arr), np.nan, result)
        return pack(result, arr)

    def pdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(np.exp(np.asarray(self.logpdf(arr))), arr)

    def cdf(self, x: ArrayLike) -> Any:
        """Regularized lower incomplete gamma ``P(α, βx)``."""
        arr = as_float_array(x)
        c = self._cache
        return pack(special.gammainc(c.shape, c.rate * np.clip(arr, 0.0, None)), arr)

    def sf(self, x: ArrayLike) -> Any:
        """Regularized upper incomplete gamma ``Q(α, βx)``, not ``1 − F``."""
        arr = as_float_array(x)
        c = self._cache
        return pack(special.gammaincc(c.shape, c.rate * np.clip(arr, 0.0, None)), arr)

    def logcdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        c = self._cache
        z = c.rate * np.clip(arr, 0.0, None)
        lower = special.gammainc(c.shape, z)
        upper = special.gammaincc(c.shape, z)
        with np.errstate(divide="ignore", invalid="ignore"):
            result = np.where(lower < 0.5, np.log(lower), np.log1p(-upper))
            # P underflows only for z far below α, where P ≈ z^α / Γ(α+1)
            leading = c.shape * np.log(z) - z - special.gammaln(c.shape + 1.0)
            result = np.where((lower == 0.0) & (z > 0.0), leading, result)
        return pack(result, arr)

    def logsf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        c = self._cache
        z = c.rate * np.clip(arr, 0.0, None)
        lower = special.gammainc(c.shape, z)
        upper = special.gammaincc(c.shape, z)
        with np.errstate(divide="ignore", invalid="ignore"):
            result = np.where(upper < 0.5, np.log(upper), np.log1p(-lower))
            # Q underflows only for z far above α, where Q ≈ z^(α−1)·e^(−z) / Γ(α)
            leading = (c.shape - 1.0) * np.log(z) - z - c.log_gamma_shape
            result = np.where((upper == 0.0) & np.isfinite(z), leading, result)
        return pack(result, arr)

    # ----------------------------------------------------------- quantiles

    def _unit_density(self, x: float) -> float:
        c = self._cache
        if x <= 0.0:
            return 0.0
        return math.exp((c.shape - 1.0) * math.log(x) - x - c.log_gamma_shape)

    def _underflows(self, log_p: float) -> bool:
        """Whether the quantile of lower tail ``exp(log_p)`` is below the smallest double."""
        c = self._cache
        log_leading = (log_p + float(special.gammaln(c.shape + 1.0))) / c.shape
        return log_leading - c.log_rate < _LOG_SMALLEST

    def _quantile_impl(self, p: float, settings: SolverSettings) -> float:
        shape = self._cache.shape
        if self._underflows(math.log(p)):
            return 0.0
        guess = lower_tail_guess(shape, p)
        root = solve(
            lambda x: float(special.gammainc(shape, x)) - p,
            self._unit_density,
            guess,
            lower=0.0,
            step=0.5 * guess,
            settings=settings,
            what=f"{p}-quantile of {self.family_name}",
        )
        return root / self._cache.rate

    def _quantile1m_impl(self, p: float, settings: SolverSettings) -> float:
        shape = self._cache.shape
        if self._underflows(math.log1p(-p)):
            return 0.0
        guess = upper_tail_guess(shape, p)
        root = solve(
            lambda x: p - float(special.gammaincc(shape, x)),
            self._unit_density,
            guess,
            lower=0.0,
            step=0.5 * guess,
            settings=settings,
            what=f"{p}-upper quantile of {self.family_name}",
        )
        return root / self._cache.rate

    # ----------------------------------------------------------- moments

    def mean(self) -> float:
        return self._cache.shape / self._cache.rate

    def var(self) -> float:
        c = self._cache
        return c.shape / (c.rate * c.rate)

    def mode(self) -> float:
        c = self._cache
        return (c.shape - 1.0) / c.rate if c.shape >= 1.0 else 0.0

    def skewness(self) -> float:
        return 2.0 / math.sqrt(self._cache.shape)

    def excess_kurtosis(self) -> float:
        return 6.0 / self._cache.shape

    def entropy(self) -> float:
        """Differential entropy ``α − log β + log Γ(α) + (1 − α)·ψ(α)``."""
        c = self._cache
        return (
            c.shape
            - c.log_rate
            + c.log_gamma_shape
            + (1.0 - c.shape) * float(special.digamma(c.shape))
        )

    def geometric_mean(self) -> float:
        """``E[log X] = ψ(α) − log β``."""
        return float(special.digamma(self._cache.shape)) - self._cache.log_rate

    def geometric_variance(self) -> float:
        """``Var[log X] = ψ′(α)``."""
        return float(special.polygamma(1, self._cache.shape))

    def cf(self, t: ArrayLike) -> Any:
        """
        Characteristic function ``(1 − it/β)^(−α)`` in polar form.

        The modulus ``(1 + (t/β)²)^(−α/2)`` goes through ``log1p`` and the
        argument is ``α·atan(t/β)``, so large ``|t|`` or ``α`` do not overflow.
        """
        arr = as_float_array(t)
        c = self._cache
        ratio = arr / c.rate
        modulus = np.exp(-0.5 * c.shape * np.log1p(ratio * ratio))
        argument = c.shape * np.arctan(ratio)
        return pack(modulus * np.exp(1j * argument), arr)

    # ----------------------------------------------------------- variates

    def variate(self, source: UniformSource) -> float:
        c = self._cache
        return draw_standard(c.shape, c.coefficients, source) / c.rate

    @staticmethod
    def standard_variate(shape: float, source: UniformSource) -> float:
        """
        Draw from Γ(α, 1) without constructing a distribution.

        Raises
        ------
        InvalidParameterError
            If ``shape`` is not positive.
        """
        GammaRateParametrization(shape=shape, rate=1.0).validate()
        return draw_standard_uncached(shape, source)

    @staticmethod
    def variate_with(shape: float, rate: float, source: UniformSource) -> float:
        """
        Draw from Γ(α, β) without constructing a distribution.

        Raises
        ------
        InvalidParameterError
            If ``shape`` or ``rate`` is not positive.
        """
        GammaRateParametrization(shape=shape, rate=rate).validate()
        return draw_standard_uncached(shape, source) / rate


# ------------------------------------------------------------------ estimators


def fit_gamma_rate(
    distribution: GammaDistribution | ErlangDistribution,
    sample: SampleLike,
    unbiased: bool = False,
) -> None:
    """
    Set the rate to its estimate for the current shape.

    The maximum-likelihood estimate is ``α / mean``. With ``unbiased`` it is
    multiplied by ``(nα − 1)/(nα)``, which gives the minimum-variance
    unbiased estimator.

    Raises
    ------
    TooFewElementsError
        If the sample is empty.
    WrongSampleError
        If an observation is not positive.
    """
    data = validate_sample(sample, support=POSITIVE_HALF_LINE, owner=distribution.family_name)
    shape = float(distribution.shape)
    rate = shape / sample_mean(data)
    if unbiased:
        total = data.size * shape
        rate *= (total - 1.0) / total
    distribution._store.update(rate=rate)
    _logger.debug("%s rate fitted to %r", distribution.family_name, rate)


def fit_gamma_rate_bayes(
    distribution: GammaDistribution | ErlangDistribution,
    sample: SampleLike,
    prior: GammaBase,
    map_estimate: bool = False,
) -> GammaDistribution:
    """
    Bayesian estimate of the rate under a conjugate Gamma prior.

    Parameters
    ----------
    distribution : GammaDistribution or ErlangDistribution
        Distribution whose rate is updated; its shape is the known shape of
        the likelihood.
    sample : Sequence[float] or numpy.ndarray
        Positive observations.
    prior : GammaBase
        Prior Γ(α₀, β₀) of the rate.
    map_estimate : bool, default False
        Set the rate to the posterior mode instead of the posterior mean.

    Returns
    -------
    GammaDistribution
        Posterior Γ(α₀ + nα, β₀ + Σx); independent of ``distribution``.

    Raises
    ------
    NotApplicableError
        If ``map_estimate`` is requested and the posterior shape is not
        greater than one.
    """
    data = validate_sample(sample, support=POSITIVE_HALF_LINE, owner=distribution.family_name)
    posterior = GammaDistribution(
        shape=prior.shape + data.size * distribution.shape,
        rate=prior.rate + float(np.sum(data)),
    )
    if map_estimate:
        if posterior.shape <= 1.0:
            raise NotApplicableError(
                f"{distribution.family_name}: Posterior mode is not defined for posterior "
                f"shape {posterior.shape} <= 1."
            )
        rate = posterior.mode()
    else:
        rate = posterior.mean()
    distribution._store.update(rate=rate)
    return posterior


class GammaDistribution(GammaBase):
    """
    Gamma distribution Γ(α, β).

    Parameters
    ----------
    shape : float, default 1.0
        Shape α > 0.
    rate : float, default 1.0
        Rate β > 0.

    Raises
    ------
    InvalidParameterError
        If a parameter is not positive.

    Examples
    --------
    >>> g = GammaDistribution(shape=2.0, rate=3.0)
    >>> g.mean()
    0.6666666666666666
    """

    family_name: ClassVar[str] = FamilyName.GAMMA
    parametrizations: ClassVar[dict[str, type[Parametrization]]] = {
        "rate": GammaRateParametrization,
        "scale": GammaScaleParametrization,
    }
    base_parametrization: ClassVar[str] = "rate"

    def __init__(self, shape: float = 1.0, rate: float = 1.0) -> None:
        self._store = ParameterStore(GammaRateParametrization(shape=shape, rate=rate), self._derive)

    @GammaBase.shape.setter  # type: ignore[attr-defined, untyped-decorator]
    def shape(self, value: float) -> None:
        self._store.update(shape=value)

    @GammaBase.rate.setter  # type: ignore[attr-defined, untyped-decorator]
    def rate(self, value: float) -> None:
        self._store.update(rate=value)

    @GammaBase.scale.setter  # type: ignore[attr-defined, untyped-decorator]
    def scale(self, value: float) -> None:
        self._store.replace(GammaScaleParametrization(shape=self.shape, scale=value))

    def fit_rate(self, sample: SampleLike, unbiased: bool = False) -> None:
        """Estimate the rate for the current shape; see :func:`fit_gamma_rate`."""
        fit_gamma_rate(self, sample, unbiased)

    def fit_rate_bayes(
        self, sample: SampleLike, prior: GammaBase, map_estimate: bool = False
    ) -> GammaDistribution:
        """Conjugate Bayesian rate estimate; see :func:`fit_gamma_rate_bayes`."""
        return fit_gamma_rate_bayes(self, sample, prior, map_estimate)

    def fit_shape(
        self, sample: SampleLike, *, settings: SolverSettings = DEFAULT_SOLVER_SETTINGS
    ) -> None:
        """
        Maximum-likelihood shape for the current rate.

        Solves ``ψ(α) = mean(log x) + log β`` starting from ``β·mean``.

        Raises
        ------
        WrongReturnError
            If the root search does not converge.
        """
        data = validate_sample(sample, support=POSITIVE_HALF_LINE, owner=self.family_name)
        target = sample_log_mean(data) + self.log_rate
        start = self.rate * sample_mean(data)

        def score(a: float) -> float:
            return float(special.digamma(a)) - target if a > 0.0 else -math.inf

        shape = solve(
            score,
            lambda a: float(special.polygamma(1, a)),
            start,
            lower=0.0,
            step=0.5 * start,
            settings=settings,
            what="Gamma shape estimate",
        )
        self._store.update(shape=shape)
        _logger.debug("Gamma shape fitted to %r", shape)

    def fit(
        self, sample: SampleLike, *, settings: SolverSettings = DEFAULT_SOLVER_SETTINGS
    ) -> None:
        """
        Joint maximum-likelihood estimate of shape and rate.

        The rate is profiled out (``β = α / mean``) and the shape solves
        ``log α − ψ(α) = log(mean) − mean(log x)`` from Minka's initial guess.

        Raises
        ------
        TooFewElementsError
            If the sample has fewer than two elements.
        NotApplicableError
            If all observations are equal.
        WrongReturnError
            If the root search does not converge.
        """
        data = validate_sample(
            sample, support=POSITIVE_HALF_LINE, min_size=2, owner=self.family_name
        )
        mean = sample_mean(data)
        s = math.log(mean) - sample_log_mean(data)
        if s <= 0.0:
            raise NotApplicableError(
                f"{self.family_name}: Sample has zero dispersion, shape is not identifiable."
            )
        start = (3.0 - s + math.sqrt((s - 3.0) ** 2 + 24.0 * s)) / (12.0 * s)

        def score(a: float) -> float:
            if a <= 0.0:
                return -math.inf
            return s - (math.log(a) - float(special.digamma(a)))

        shape = solve(
            score,
            lambda a: float(special.polygamma(1, a)) - 1.0 / a,
            start,
            lower=0.0,
            step=0.5 * start,
            settings=settings,
            what="Gamma shape estimate",
        )
        self._store.replace(GammaRateParametrization(shape=shape, rate=shape / mean))
        _logger.debug("Gamma fitted to shape=%r rate=%r", self.shape, self.rate)

    def fit_mm(self, sample: SampleLike) -> None:
        """
        Method-of-moments estimate ``α = mean²/var``, ``β = mean/var``.

        Raises
        ------
        TooFewElementsError
            If the sample has fewer than two elements.
        NotApplicableError
            If the sample variance is zero.
        """
        data = validate_sample(
            sample, support=POSITIVE_HALF_LINE, min_size=2, owner=self.family_name
        )
        mean = sample_mean(data)
        variance = sample_variance(data, mean)
        if variance <= 0.0:
            raise NotApplicableError(
                f"{self.family_name}: Sample has zero variance, method of moments fails."
            )
        self._store.replace(
            GammaRateParametrization(shape=mean * mean / variance, rate=mean / variance)
        )


class ErlangDistribution(GammaBase):
    """
    Erlang distribution: Γ(k, β) with a positive integer shape.

    Parameters
    ----------
    shape : int, default 1
        Number of phases k ≥ 1.
    rate : float, default 1.0
        Rate β > 0.
    """

    family_name: ClassVar[str] = FamilyName.ERLANG
    parametrizations: ClassVar[dict[str, type[Parametrization]]] = {
        "rate": ErlangRateParametrization,
        "scale": ErlangScaleParametrization,
    }
    base_parametrization: ClassVar[str] = "rate"

    def __init__(self, shape: int = 1, rate: float = 1.0) -> None:
        self._store = ParameterStore(
            ErlangRateParametrization(shape=shape, rate=rate), self._derive
        )

    @staticmethod
    def _shape_and_rate(parameters: Any) -> tuple[float, float]:
        return float(round(parameters.shape)), float(parameters.rate)

    @property
    def shape(self) -> int:  # type: ignore[override]
        """Number of phases k."""
        return round(self._cache.shape)

    @shape.setter
    def shape(self, value: int) -> None:
        self._store.update(shape=value)

    @GammaBase.rate.setter  # type: ignore[attr-defined, untyped-decorator]
    def rate(self, value: float) -> None:
        self._store.update(rate=value)

    @GammaBase.scale.setter  # type: ignore[attr-defined, untyped-decorator]
    def scale(self, value: float) -> None:
        self._store.replace(ErlangScaleParametrization(shape=self.shape, scale=value))

    def fit_rate(self, sample: SampleLike, unbiased: bool = False) -> None:
        """Estimate the rate for the current shape; see :func:`fit_gamma_rate`."""
        fit_gamma_rate(self, sample, unbiased)

    def fit_rate_bayes(
        self, sample: SampleLike, prior: GammaBase, map_estimate: bool = False
    ) -> GammaDistribution:
        """Conjugate Bayesian rate estimate; see :func:`fit_gamma_rate_bayes`."""
        return fit_gamma_rate_bayes(self, sample, prior, map_estimate)


class ChiSquaredDistribution(GammaBase):
    """
    Chi-squared distribution χ²(k) = Γ(k/2, 1/2).

    Parameters
    ----------
    degree : int, default 1
        Degrees of freedom k ≥ 1.
    """

    family_name: ClassVar[str] = FamilyName.CHI_SQUARED
    parametrizations: ClassVar[dict[str, type[Parametrization]]] = {
        "degree": ChiSquaredParametrization,
    }
    base_parametrization: ClassVar[str] = "degree"

    def __init__(self, degree: int = 1) -> None:
        self._store = ParameterStore(ChiSquaredParametrization(degree=degree), self._derive)

    @staticmethod
    def _shape_and_rate(parameters: Any) -> tuple[float, float]:
        return 0.5 * round(parameters.degree), 0.5

    @property
    def degree(self) -> int:
        """Degrees of freedom k."""
        return round(2.0 * self._cache.shape)

    @degree.setter
    def degree(self, value: int) -> None:
        self._store.update(degree=value)


__all__ = [
    "GammaRateParametrization",
    "GammaScaleParametrization",
    "ErlangRateParametrization",
    "ErlangScaleParametrization",
    "ChiSquaredParametrization",
    "GammaCache",
    "derive_gamma_cache",
    "fit_gamma_rate",
    "fit_gamma_rate_bayes",
    "GammaBase",
    "GammaDistribution",
    "ErlangDistribution",
    "ChiSquaredDistribution",
    "configure_gamma_families",
]

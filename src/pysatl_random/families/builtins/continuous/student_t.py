"""
Student's t distribution family implementation.

Probability density function:
    f(x) = Γ((ν+1)/2) / (σ√(νπ) Γ(ν/2)) * (1 + z²/ν)^(-(ν+1)/2),  z = (x-μ)/σ

A variate is ``μ + σ·N / √(V/ν)`` with ``N ~ Normal(0, 1)`` and
``V ~ χ²(ν) = Γ(ν/2, 1/2)``; the distribution owns the Gamma generator for V.
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
from pysatl_random.distributions.support import REAL_LINE
from pysatl_random.families.builtins.continuous.gamma import GammaDistribution
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
    from pysatl_random.types import ArrayLike, FloatArray


def configure_student_t_family() -> None:
    """
    Configure and register the Student's t family.
    """
    if not FamilyRegister.contains(StudentTDistribution.family_name):
        FamilyRegister.register(StudentTDistribution)


@parametrization(name="standard")
class StudentTParametrization(Parametrization):
    """
    Degree-location-scale parametrization.

    Parameters
    ----------
    degree : float
        Degrees of freedom ν
    location : float
        Location μ
    scale : float
        Scale σ
    """

    degree: float
    location: float
    scale: float

    @constraint(description="degree > 0")
    def check_degree_positive(self) -> bool:
        return self.degree > 0

    @constraint(description="location is finite")
    def check_location_finite(self) -> bool:
        return math.isfinite(self.location)

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0


@dataclass(frozen=True, slots=True)
class StudentTCache:
    degree: float
    location: float
    scale: float
    log_scale: float
    half_degree_plus_half: float
    """(ν + 1)/2"""
    log_normalizer: float
    """log Γ((ν+1)/2) − log Γ(ν/2) − ½·log(νπ) − log σ"""
    chi_squared: GammaDistribution
    """χ²(ν) generator, private to this cache."""


def _derive(parameters: StudentTParametrization, previous: StudentTCache | None) -> StudentTCache:
    nu = parameters.degree
    half = 0.5 * (nu + 1.0)
    log_scale = math.log(parameters.scale)
    if previous is not None and previous.degree == nu:
        chi_squared = previous.chi_squared
        log_normalizer = previous.log_normalizer + previous.log_scale - log_scale
    else:
        chi_squared = GammaDistribution(shape=0.5 * nu, rate=0.5)
        log_normalizer = (
            float(special.gammaln(half))
            - float(special.gammaln(0.5 * nu))
            - 0.5 * math.log(nu * math.pi)
            - log_scale
        )
    return StudentTCache(
        degree=nu,
        location=parameters.location,
        scale=parameters.scale,
        log_scale=log_scale,
        half_degree_plus_half=half,
        log_normalizer=log_normalizer,
        chi_squared=chi_squared,
    )


class StudentTDistribution(ContinuousDistribution):
    """
    Student's t distribution t(ν, μ, σ).

    Parameters
    ----------
    degree : float, default 1.0
        Degrees of freedom ν > 0.
    location : float, default 0.0
        Location μ.
    scale : float, default 1.0
        Scale σ > 0.
    """

    family_name: ClassVar[str] = FamilyName.STUDENT_T
    parametrizations: ClassVar[dict[str, type[Parametrization]]] = {
        "standard": StudentTParametrization,
    }
    base_parametrization: ClassVar[str] = "standard"

    _store: ParameterStore[StudentTParametrization, StudentTCache]

    def __init__(self, degree: float = 1.0, location: float = 0.0, scale: float = 1.0) -> None:
        self._store = ParameterStore(
            StudentTParametrization(degree=degree, location=location, scale=scale), _derive
        )

    @property
    def support(self) -> ContinuousSupport:
        return REAL_LINE

    @property
    def degree(self) -> float:
        return self._store.cache.degree

    @degree.setter
    def degree(self, value: float) -> None:
        self._store.update(degree=value)

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

    # ------------------------------------------------------------ densities

    def _standardize(self, arr: FloatArray) -> FloatArray:
        c = self._store.cache
        return (arr - c.location) / c.scale

    def logpdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        c = self._store.cache
        z = self._standardize(arr)
        return pack(c.log_normalizer - c.half_degree_plus_half * np.log1p(z * z / c.degree), arr)

    def pdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(np.exp(np.asarray(self.logpdf(arr))), arr)

    def _lower_tail(self, z: FloatArray) -> FloatArray:
        """``P(T <= z)`` of the standard t distribution."""
        nu = self._store.cache.degree
        if nu == 1.0:
            tail = np.arctan2(1.0, np.abs(z)) / math.pi
        elif nu == 2.0:
            root = np.sqrt(2.0 + z * z)
            tail = 1.0 / (root * (root + np.abs(z)))
        else:
            with np.errstate(divide="ignore", invalid="ignore"):
                tail = 0.5 * special.betainc(0.5 * nu, 0.5, nu / (nu + z * z))
        return np.where(z < 0.0, tail, 1.0 - tail)

    def cdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(self._lower_tail(self._standardize(arr)), arr)

    def sf(self, x: ArrayLike) -> Any:
        """By symmetry ``S(μ + σz) = F(μ − σz)``; both tails stay accurate."""
        arr = as_float_array(x)
        return pack(self._lower_tail(-self._standardize(arr)), arr)

    # ------------------------------------------------------------ quantiles

    def _upper_standard(self, q: float) -> float:
        """``z > 0`` with ``P(T > z) = q`` for ``q <= 1/2``."""
        nu = self._store.cache.degree
        if q == 0.5:
            return 0.0
        if nu == 1.0:
            return 1.0 / math.tan(math.pi * q)
        if nu == 2.0:
            return (1.0 - 2.0 * q) / math.sqrt(2.0 * q * (1.0 - q))
        if nu == 4.0:
            alpha = 4.0 * q * (1.0 - q)
            root = math.sqrt(alpha)
            return 2.0 * math.sqrt(math.cos(math.acos(root) / 3.0) / root - 1.0)
        x = float(special.betaincinv(0.5 * nu, 0.5, 2.0 * q))
        return math.sqrt(nu * (1.0 / x - 1.0))

    def _quantile_impl(self, p: float, settings: SolverSettings) -> float:
        c = self._store.cache
        z = -self._upper_standard(p) if p < 0.5 else self._upper_standard(1.0 - p)
        return c.location + c.scale * z

    def _quantile1m_impl(self, p: float, settings: SolverSettings) -> float:
        c = self._store.cache
        z = self._upper_standard(p) if p < 0.5 else -self._upper_standard(1.0 - p)
        return c.location + c.scale * z

    # ------------------------------------------------------------ moments

    def mean(self) -> float:
        c = self._store.cache
        return c.location if c.degree > 1.0 else math.nan

    def var(self) -> float:
        c = self._store.cache
        if c.degree > 2.0:
            return c.scale * c.scale * c.degree / (c.degree - 2.0)
        return math.inf if c.degree > 1.0 else math.nan

    def median(self) -> float:
        return self._store.cache.location

    def mode(self) -> float:
        return self._store.cache.location

    def skewness(self) -> float:
        return 0.0 if self._store.cache.degree > 3.0 else math.nan

    def excess_kurtosis(self) -> float:
        nu = self._store.cache.degree
        if nu > 4.0:
            return 6.0 / (nu - 4.0)
        return math.inf if nu > 2.0 else math.nan

    def entropy(self) -> float:
        c = self._store.cache
        half_nu = 0.5 * c.degree
        return (
            c.half_degree_plus_half
            * (float(special.digamma(c.half_degree_plus_half)) - float(special.digamma(half_nu)))
            + 0.5 * math.log(c.degree)
            + float(special.betaln(half_nu, 0.5))
            + c.log_scale
        )

    def cf(self, t: ArrayLike) -> Any:
        """
        ``K_{ν/2}(√ν|σt|)·(√ν|σt|)^{ν/2} / (Γ(ν/2)·2^{ν/2−1})·e^{iμt}``.

        The Bessel function is evaluated exponentially scaled, in log space.
        """
        arr = as_float_array(t)
        c = self._store.cache
        half_nu = 0.5 * c.degree
        z = math.sqrt(c.degree) * np.abs(c.scale * arr)
        with np.errstate(divide="ignore", invalid="ignore"):
            log_modulus = (
                np.log(special.kve(half_nu, z))
                - z
                + half_nu * np.log(z)
                - special.gammaln(half_nu)
                - (half_nu - 1.0) * math.log(2.0)
            )
        modulus = np.where(z == 0.0, 1.0, np.exp(log_modulus))
        return pack(modulus * np.exp(1j * c.location * arr), arr)

    # ------------------------------------------------------------ variates

    def variate(self, source: UniformSource) -> float:
        c = self._store.cache
        normal = standard_normal(source)
        chi_squared = c.chi_squared.variate(source)
        return c.location + c.scale * normal / math.sqrt(chi_squared / c.degree)


__all__ = [
    "StudentTParametrization",
    "StudentTDistribution",
    "configure_student_t_family",
]

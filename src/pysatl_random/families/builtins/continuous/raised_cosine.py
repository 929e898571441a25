"""
Raised cosine and Raab-Green distribution families.

Probability density function:
    f(x) = (1 + cos(πz)) / (2s),  z = (x-μ)/s,  for |x - μ| <= s

The Raab-Green distribution is the raised cosine with μ = 0 and s = π.
The inverse CDF has no closed form, so quantiles go through the generic
numerical engine.
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
from pysatl_random.distributions.sampling import rejection_loop
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
    from pysatl_random.sources import UniformSource
    from pysatl_random.types import ArrayLike, FloatArray

_PI_SQUARED = math.pi * math.pi
_EXCESS_KURTOSIS = 6.0 * (90.0 - _PI_SQUARED * _PI_SQUARED) / (5.0 * (_PI_SQUARED - 6.0) ** 2)


def configure_raised_cosine_families() -> None:
    """
    Configure and register the raised cosine and Raab-Green families.
    """
    for family in (RaisedCosineDistribution, RaabGreenDistribution):
        if not FamilyRegister.contains(family.family_name):
            FamilyRegister.register(family)


@parametrization(name="standard")
class RaisedCosineParametrization(Parametrization):
    """
    Location-scale parametrization.

    Parameters
    ----------
    location : float
        Center μ
    scale : float
        Half-width s of the support
    """

    location: float
    scale: float

    @constraint(description="location is finite")
    def check_location_finite(self) -> bool:
        return math.isfinite(self.location)

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0


@parametrization(name="standard")
class RaabGreenParametrization(Parametrization):
    """The Raab-Green distribution has no free parameters."""


@dataclass(frozen=True, slots=True)
class RaisedCosineCache:
    location: float
    scale: float
    support: ContinuousSupport


def _cache_for(location: float, scale: float) -> RaisedCosineCache:
    return RaisedCosineCache(
        location=location,
        scale=scale,
        support=ContinuousSupport(left=location - scale, right=location + scale),
    )


def _derive(
    parameters: RaisedCosineParametrization, _: RaisedCosineCache | None
) -> RaisedCosineCache:
    return _cache_for(parameters.location, parameters.scale)


def _derive_raab_green(
    _: RaabGreenParametrization, __: RaisedCosineCache | None
) -> RaisedCosineCache:
    return _cache_for(0.0, math.pi)


class RaisedCosineDistribution(ContinuousDistribution):
    """
    Raised cosine distribution RaisedCosine(μ, s).

    Parameters
    ----------
    location : float, default 0.0
        Center μ.
    scale : float, default 1.0
        Half-width s > 0.
    """

    family_name: ClassVar[str] = FamilyName.RAISED_COSINE
    parametrizations: ClassVar[dict[str, type[Parametrization]]] = {
        "standard": RaisedCosineParametrization,
    }
    base_parametrization: ClassVar[str] = "standard"

    _store: ParameterStore[Any, RaisedCosineCache]

    def __init__(self, location: float = 0.0, scale: float = 1.0) -> None:
        self._store = ParameterStore(
            RaisedCosineParametrization(location=location, scale=scale), _derive
        )

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

    def _lower_tail(self, arr: FloatArray, sign: float) -> FloatArray:
        """CDF (``sign = 1``) or survival function (``sign = −1``) of ``arr``."""
        c = self._store.cache
        z = sign * (arr - c.location) / c.scale
        inner = np.clip(z, -1.0, 1.0)
        value = np.clip(0.5 * (1.0 + inner + np.sin(math.pi * inner) / math.pi), 0.0, 1.0)
        return np.where(z <= -1.0, 0.0, np.where(z >= 1.0, 1.0, value))

    def pdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        c = self._store.cache
        z = (arr - c.location) / c.scale
        inside = np.abs(z) <= 1.0
        value = np.where(inside, (1.0 + np.cos(math.pi * z)) / (2.0 * c.scale), 0.0)
        return pack(np.where(np.isnan(arr), np.nan, value), arr)

    def cdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(self._lower_tail(arr, 1.0), arr)

    def sf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(self._lower_tail(arr, -1.0), arr)

    def mean(self) -> float:
        return self._store.cache.location

    def var(self) -> float:
        s = self._store.cache.scale
        return s * s * (1.0 / 3.0 - 2.0 / _PI_SQUARED)

    def median(self) -> float:
        return self._store.cache.location

    def mode(self) -> float:
        return self._store.cache.location

    def skewness(self) -> float:
        return 0.0

    def excess_kurtosis(self) -> float:
        return _EXCESS_KURTOSIS

    def entropy(self) -> float:
        return math.log(4.0 * self._store.cache.scale) - 1.0

    def cf(self, t: ArrayLike) -> Any:
        """
        ``π² sin(st) / (st(π² − s²t²))·e^{iμt}``.

        The removable singularities at ``st = 0`` and ``|st| = π`` take their
        limits ``1`` and ``1/2``.
        """
        arr = as_float_array(t)
        c = self._store.cache
        u = c.scale * arr
        singular = (u == 0.0) | (np.abs(u) == math.pi)
        safe = np.where(singular, 1.0, u)
        regular = _PI_SQUARED * np.sin(safe) / (safe * (_PI_SQUARED - safe * safe))
        modulus = np.where(u == 0.0, 1.0, np.where(singular, 0.5, regular))
        return pack(modulus * np.exp(1j * c.location * arr), arr)

    def variate(self, source: UniformSource) -> float:
        c = self._store.cache
        return c.location + c.scale / math.pi * self.standard_variate(source)

    @staticmethod
    def standard_variate(source: UniformSource) -> float:
        """
        Draw from the Raab-Green distribution by rejection from Uniform(-π, π).

        A candidate ``x`` is accepted with probability ``(1 + cos x)/2``; the
        expected number of candidates is two.
        """

        def attempt() -> float | None:
            x = math.pi * (2.0 * standard_uniform(source) - 1.0)
            if 2.0 * standard_uniform(source) <= 1.0 + math.cos(x):
                return x
            return None

        return rejection_loop(attempt, "Raised cosine rejection")

    @staticmethod
    def variate_with(location: float, scale: float, source: UniformSource) -> float:
        RaisedCosineParametrization(location=location, scale=scale).validate()
        return location + scale / math.pi * RaisedCosineDistribution.standard_variate(source)


class RaabGreenDistribution(RaisedCosineDistribution):
    """
    Raab-Green distribution, the raised cosine on ``[-π, π]``.

    The location and scale are fixed and read-only.
    """

    family_name: ClassVar[str] = FamilyName.RAAB_GREEN
    parametrizations: ClassVar[dict[str, type[Parametrization]]] = {
        "standard": RaabGreenParametrization,
    }
    base_parametrization: ClassVar[str] = "standard"

    def __init__(self) -> None:
        self._store = ParameterStore(RaabGreenParametrization(), _derive_raab_green)

    @property
    def location(self) -> float:
        return 0.0

    @property
    def scale(self) -> float:
        return math.pi

    def variate(self, source: UniformSource) -> float:
        return self.standard_variate(source)


__all__ = [
    "RaisedCosineParametrization",
    "RaabGreenParametrization",
    "RaisedCosineDistribution",
    "RaabGreenDistribution",
    "configure_raised_cosine_families",
]

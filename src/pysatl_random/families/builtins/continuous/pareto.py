"""
Pareto distribution family implementation.

Probability density function:
    f(x) = α * xₘ^α / x^(α+1)   for x >= xₘ

Moments of order k exist only for α > k.
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
from pysatl_random.distributions.estimation import validate_sample
from pysatl_random.distributions.support import POSITIVE_HALF_LINE, ContinuousSupport
from pysatl_random.errors import NotApplicableError
from pysatl_random.families.parametrizations import (
    ParameterStore,
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_random.families.registry import FamilyRegister
from pysatl_random.sources import standard_exponential, standard_uniform
from pysatl_random.types import FamilyName

if TYPE_CHECKING:
    from pysatl_random.distributions.solvers import SolverSettings
    from pysatl_random.sources import UniformSource
    from pysatl_random.types import ArrayLike, SampleLike

_logger = logging.getLogger(__name__)


def configure_pareto_family() -> None:
    """
    Configure and register the Pareto family.
    """
    if not FamilyRegister.contains(ParetoDistribution.family_name):
        FamilyRegister.register(ParetoDistribution)


@parametrization(name="standard")
class ParetoParametrization(Parametrization):
    """
    Shape-scale parametrization.

    Parameters
    ----------
    shape : float
        Tail index α
    scale : float
        Minimal value xₘ
    """

    shape: float
    scale: float

    @constraint(description="shape > 0")
    def check_shape_positive(self) -> bool:
        return self.shape > 0

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0


@dataclass(frozen=True, slots=True)
class ParetoCache:
    shape: float
    scale: float
    log_shape: float
    log_scale: float
    support: ContinuousSupport


def _derive(parameters: ParetoParametrization, _: ParetoCache | None) -> ParetoCache:
    return ParetoCache(
        shape=parameters.shape,
        scale=parameters.scale,
        log_shape=math.log(parameters.shape),
        log_scale=math.log(parameters.scale),
        support=ContinuousSupport(left=parameters.scale),
    )


class ParetoDistribution(ContinuousDistribution):
    """
    Pareto distribution Pareto(α, xₘ).

    Parameters
    ----------
    shape : float, default 1.0
        Tail index α > 0.
    scale : float, default 1.0
        Minimal value xₘ > 0.
    """

    family_name: ClassVar[str] = FamilyName.PARETO
    parametrizations: ClassVar[dict[str, type[Parametrization]]] = {
        "standard": ParetoParametrization,
    }
    base_parametrization: ClassVar[str] = "standard"

    _store: ParameterStore[ParetoParametrization, ParetoCache]

    def __init__(self, shape: float = 1.0, scale: float = 1.0) -> None:
        self._store = ParameterStore(ParetoParametrization(shape=shape, scale=scale), _derive)

    @property
    def support(self) -> ContinuousSupport:
        return self._store.cache.support

    @property
    def shape(self) -> float:
        return self._store.cache.shape

    @shape.setter
    def shape(self, value: float) -> None:
        self._store.update(shape=value)

    @property
    def scale(self) -> float:
        return self._store.cache.scale

    @scale.setter
    def scale(self, value: float) -> None:
        self._store.update(scale=value)

    @property
    def log_shape(self) -> float:
        return self._store.cache.log_shape

    @property
    def log_scale(self) -> float:
        return self._store.cache.log_scale

    def logpdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        c = self._store.cache
        inside = arr >= c.scale
        safe = np.where(inside, arr, c.scale)
        value = c.log_shape + c.shape * c.log_scale - (c.shape + 1.0) * np.log(safe)
        result = np.where(inside, value, -np.inf)
        return pack(np.where(np.isnan(arr), np.nan, result), arr)

    def pdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        return pack(np.exp(np.asarray(self.logpdf(arr))), arr)

    def sf(self, x: ArrayLike) -> Any:
        """``(xₘ/x)^α`` above the scale."""
        arr = as_float_array(x)
        c = self._store.cache
        ratio = c.scale / np.maximum(arr, c.scale)
        return pack(np.where(np.isnan(arr), np.nan, ratio**c.shape), arr)

    def cdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        c = self._store.cache
        log_ratio = c.log_scale - np.log(np.maximum(arr, c.scale))
        return pack(np.where(np.isnan(arr), np.nan, -np.expm1(c.shape * log_ratio)), arr)

    def _quantile_impl(self, p: float, settings: SolverSettings) -> float:
        c = self._store.cache
        return c.scale * math.exp(-math.log1p(-p) / c.shape)

    def _quantile1m_impl(self, p: float, settings: SolverSettings) -> float:
        c = self._store.cache
        return c.scale * p ** (-1.0 / c.shape)

    def mean(self) -> float:
        c = self._store.cache
        if c.shape <= 1.0:
            return math.inf
        return c.shape * c.scale / (c.shape - 1.0)

    def var(self) -> float:
        c = self._store.cache
        if c.shape <= 2.0:
            return math.inf
        a = c.shape
        return c.scale * c.scale * a / ((a - 1.0) ** 2 * (a - 2.0))

    def median(self) -> float:
        c = self._store.cache
        return c.scale * 2.0 ** (1.0 / c.shape)

    def mode(self) -> float:
        return self._store.cache.scale

    def skewness(self) -> float:
        a = self._store.cache.shape
        if a <= 3.0:
            return math.nan
        return 2.0 * (1.0 + a) / (a - 3.0) * math.sqrt((a - 2.0) / a)

    def excess_kurtosis(self) -> float:
        a = self._store.cache.shape
        if a <= 4.0:
            return math.nan
        return 6.0 * (a**3 + a * a - 6.0 * a - 2.0) / (a * (a - 3.0) * (a - 4.0))

    def entropy(self) -> float:
        c = self._store.cache
        return c.log_scale - c.log_shape + 1.0 / c.shape + 1.0

    def variate(self, source: UniformSource) -> float:
        c = self._store.cache
        return c.scale * self._standard(c.shape, source)

    @staticmethod
    def _standard(shape: float, source: UniformSource) -> float:
        if shape == 1.0:
            return 1.0 / standard_uniform(source)
        if shape == 2.0:
            return 1.0 / math.sqrt(standard_uniform(source))
        return math.exp(standard_exponential(source) / shape)

    @staticmethod
    def standard_variate(shape: float, source: UniformSource) -> float:
        """
        Draw from Pareto(α, 1).

        ``α = 1`` and ``α = 2`` use ``1/U`` and ``1/√U``; other shapes use
        ``exp(E/α)``.
        """
        ParetoParametrization(shape=shape, scale=1.0).validate()
        return ParetoDistribution._standard(shape, source)

    @staticmethod
    def variate_with(shape: float, scale: float, source: UniformSource) -> float:
        ParetoParametrization(shape=shape, scale=scale).validate()
        return scale * ParetoDistribution._standard(shape, source)

    def fit_mle(self, sample: SampleLike) -> None:
        """
        Maximum-likelihood estimate ``xₘ = min x``, ``α = n / Σ log(x/xₘ)``.

        Raises
        ------
        WrongSampleError
            If an element is not positive.
        NotApplicableError
            If all elements are equal.
        """
        data = validate_sample(sample, support=POSITIVE_HALF_LINE, owner=self.family_name)
        scale = float(np.min(data))
        total = float(np.sum(np.log(data / scale)))
        if total <= 0.0:
            raise NotApplicableError(
                f"{self.family_name}: All elements are equal, shape is not identifiable."
            )
        self._store.replace(ParetoParametrization(shape=data.size / total, scale=scale))
        _logger.debug("Pareto fitted to %r", self)


__all__ = [
    "ParetoParametrization",
    "ParetoDistribution",
    "configure_pareto_family",
]

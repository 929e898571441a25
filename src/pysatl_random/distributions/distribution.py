"""
Distribution Interfaces
=======================

This module defines the public :class:`Distribution` protocol and the shared
implementation of univariate continuous distributions:

- :class:`Distribution` protocol – capability interface used by callers.
- :class:`ContinuousDistribution` – abstract base that concrete families
  derive from. Families supply densities, variates and moments; the base adds
  probability-level validation, bulk evaluation into caller buffers, and
  numerical fallbacks for the quantile, the characteristic function and
  expectations.

Notes
-----
- Characteristics are vectorized: scalar input gives a ``float``, array
  input gives an array of the same shape.
- Randomness always comes from an explicitly passed
  :class:`~pysatl_random.sources.UniformSource`.
- Bulk calls with an output buffer shorter than the input write nothing and
  return; a :class:`~pysatl_random.errors.BufferSizeWarning` flags the skip.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import warnings
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, Self, runtime_checkable

import numpy as np
from scipy import integrate as _sp_integrate

from pysatl_random.distributions.computation import (
    AnalyticalComputation,
    constant_characteristic,
)
from pysatl_random.distributions.sampling import ArraySample
from pysatl_random.distributions.solvers import DEFAULT_SOLVER_SETTINGS, SolverSettings, solve
from pysatl_random.errors import BufferSizeWarning, WrongLevelError
from pysatl_random.types import CharacteristicName, UnivariateContinuous

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, MutableSequence, Sequence

    from pysatl_random.distributions.support import ContinuousSupport
    from pysatl_random.families.parametrizations import ParameterStore, Parametrization
    from pysatl_random.sources import UniformSource
    from pysatl_random.types import (
        ArrayLike,
        DistributionType,
        FloatArray,
        GenericCharacteristicName,
        ParametrizationName,
    )


def as_float_array(x: ArrayLike) -> FloatArray:
    """Convert characteristic input to a float64 array (0-d for scalars)."""
    return np.asarray(x, dtype=np.float64)


def pack(result: Any, x: FloatArray) -> Any:
    """Return a Python scalar for 0-d input and an array otherwise."""
    if np.ndim(x) == 0:
        value = np.asarray(result).item()
        return complex(value) if isinstance(value, complex) else float(value)
    return result


@runtime_checkable
class Distribution(Protocol):
    """Public distribution interface."""

    @property
    def distribution_type(self) -> DistributionType: ...

    @property
    def support(self) -> ContinuousSupport: ...

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]: ...

    def pdf(self, x: ArrayLike) -> Any: ...
    def cdf(self, x: ArrayLike) -> Any: ...
    def quantile(self, p: ArrayLike) -> Any: ...
    def variate(self, source: UniformSource) -> float: ...

    def query_method(
        self, characteristic_name: GenericCharacteristicName, **options: Any
    ) -> AnalyticalComputation[Any, Any]:
        try:
            return self.analytical_computations[characteristic_name]
        except KeyError as exc:
            raise KeyError(
                f"Characteristic '{characteristic_name}' is not provided by this distribution."
            ) from exc

    def calculate_characteristic(
        self, characteristic_name: GenericCharacteristicName, value: Any, **options: Any
    ) -> Any:
        return self.query_method(characteristic_name)(value, **options)


class ContinuousDistribution(Distribution, ABC):
    """
    Shared implementation of univariate continuous distributions.

    Subclasses own a :class:`~pysatl_random.families.parametrizations.ParameterStore`
    in ``_store`` and implement :meth:`pdf`, :meth:`cdf`, :meth:`variate` and
    the closed-form moments. Everything else has a generic implementation
    that families override where a better formula exists.
    """

    family_name: ClassVar[str]
    parametrizations: ClassVar[Mapping[ParametrizationName, type[Parametrization]]]
    base_parametrization: ClassVar[ParametrizationName]
    _store: ParameterStore[Any, Any]

    @classmethod
    def from_parametrization(cls, parameters: Parametrization) -> Self:
        """Construct a distribution from any of its parametrizations."""
        base = parameters.transform_to_base_parametrization()
        return cls(**base.parameters)

    def set_parameters(self, **values: Any) -> None:
        """
        Replace several base parameters at once.

        Raises
        ------
        InvalidParameterError
            If the combination violates a constraint; nothing is changed then.
        """
        self._store.update(**values)

    # ---------------------------------------------------------------- metadata

    @property
    def distribution_type(self) -> DistributionType:
        return UnivariateContinuous

    @property
    def parameters(self) -> dict[str, Any]:
        """Canonical parameters as a dictionary."""
        return self._store.parameters.parameters

    @property
    @abstractmethod
    def support(self) -> ContinuousSupport: ...

    def __repr__(self) -> str:
        args = ", ".join(f"{key}={value!r}" for key, value in self.parameters.items())
        return f"{type(self).__name__}({args})"

    # ------------------------------------------------------------- densities

    @abstractmethod
    def pdf(self, x: ArrayLike) -> Any:
        """Probability density function ``f(x)``."""

    def logpdf(self, x: ArrayLike) -> Any:
        """Logarithm of the density, ``-inf`` outside the support."""
        arr = as_float_array(x)
        with np.errstate(divide="ignore"):
            return pack(np.log(np.asarray(self.pdf(arr))), arr)

    @abstractmethod
    def cdf(self, x: ArrayLike) -> Any:
        """Cumulative distribution function ``F(x) = P(X <= x)``."""

    def sf(self, x: ArrayLike) -> Any:
        """Survival function ``S(x) = P(X > x)``."""
        arr = as_float_array(x)
        return pack(1.0 - np.asarray(self.cdf(arr)), arr)

    def logcdf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        with np.errstate(divide="ignore"):
            return pack(np.log(np.asarray(self.cdf(arr))), arr)

    def logsf(self, x: ArrayLike) -> Any:
        arr = as_float_array(x)
        with np.errstate(divide="ignore"):
            return pack(np.log(np.asarray(self.sf(arr))), arr)

    def hazard(self, x: ArrayLike) -> Any:
        """Hazard rate ``f(x) / S(x)``."""
        arr = as_float_array(x)
        with np.errstate(divide="ignore", invalid="ignore"):
            return pack(np.asarray(self.pdf(arr)) / np.asarray(self.sf(arr)), arr)

    def log_likelihood(self, sample: Sequence[float] | FloatArray | ArraySample) -> float:
        """Sum of ``logpdf`` over the sample; ``-inf`` if a point is outside the support."""
        data = np.array(sample, dtype=np.float64).ravel()
        return float(np.sum(np.asarray(self.logpdf(data))))

    def _pdf_scalar(self, x: float) -> float:
        return float(self.pdf(x))

    def _cdf_scalar(self, x: float) -> float:
        return float(self.cdf(x))

    def _sf_scalar(self, x: float) -> float:
        return float(self.sf(x))

    # -------------------------------------------------------------- quantiles

    def quantile(self, p: ArrayLike, *, settings: SolverSettings = DEFAULT_SOLVER_SETTINGS) -> Any:
        """
        Inverse CDF: ``x`` such that ``F(x) = p``.

        Parameters
        ----------
        p : float or array-like
            Probability levels from ``[0, 1]``. ``0`` and ``1`` map to the
            support bounds.
        settings : SolverSettings
            Tolerances for families without a closed form.

        Raises
        ------
        WrongLevelError
            If a level lies outside ``[0, 1]``.
        WrongReturnError
            If the numerical inversion fails to converge.
        """
        levels = self._check_levels(p)
        support = self.support
        out = np.empty(levels.shape, dtype=np.float64)
        for index, level in np.ndenumerate(levels):
            if level == 0.0:
                out[index] = support.left
            elif level == 1.0:
                out[index] = support.right
            else:
                out[index] = self._quantile_impl(float(level), settings)
        return pack(out, levels)

    def quantile1m(
        self, p: ArrayLike, *, settings: SolverSettings = DEFAULT_SOLVER_SETTINGS
    ) -> Any:
        """
        Inverse survival function: ``x`` such that ``S(x) = p``.

        Solves the right tail directly, so ``quantile1m(1e-20)`` stays
        accurate where ``quantile(1 - 1e-20)`` would not.
        """
        levels = self._check_levels(p)
        support = self.support
        out = np.empty(levels.shape, dtype=np.float64)
        for index, level in np.ndenumerate(levels):
            if level == 0.0:
                out[index] = support.right
            elif level == 1.0:
                out[index] = support.left
            else:
                out[index] = self._quantile1m_impl(float(level), settings)
        return pack(out, levels)

    def _check_levels(self, p: ArrayLike) -> FloatArray:
        levels = as_float_array(p)
        bad = ~((levels >= 0.0) & (levels <= 1.0))
        if np.any(bad):
            level = float(levels[bad].flat[0])
            raise WrongLevelError(
                f"{self.family_name}: Level alpha should be positive and less than one, "
                f"got {level}.",
                level=level,
            )
        return levels

    def _quantile_start(self) -> float:
        """Starting point of the numeric quantile search."""
        mean = self.mean()
        if math.isfinite(mean):
            return mean
        support = self.support
        if support.is_bounded_left:
            return support.left + 1.0
        if support.is_bounded_right:
            return support.right - 1.0
        return 0.0

    def _quantile_step(self) -> float:
        variance = self.var()
        if math.isfinite(variance) and variance > 0.0:
            return math.sqrt(variance)
        return 1.0

    def _quantile_impl(self, p: float, settings: SolverSettings) -> float:
        support = self.support
        return solve(
            lambda x: self._cdf_scalar(x) - p,
            self._pdf_scalar,
            self._quantile_start(),
            lower=support.left,
            upper=support.right,
            step=self._quantile_step(),
            settings=settings,
            what=f"{p}-quantile of {self.family_name}",
        )

    def _quantile1m_impl(self, p: float, settings: SolverSettings) -> float:
        support = self.support
        return solve(
            lambda x: p - self._sf_scalar(x),
            self._pdf_scalar,
            self._quantile_start(),
            lower=support.left,
            upper=support.right,
            step=self._quantile_step(),
            settings=settings,
            what=f"{p}-upper quantile of {self.family_name}",
        )

    # ---------------------------------------------------------------- moments

    @abstractmethod
    def mean(self) -> float: ...

    @abstractmethod
    def var(self) -> float: ...

    def std(self) -> float:
        return math.sqrt(self.var())

    def median(self) -> float:
        return float(self.quantile(0.5))

    @abstractmethod
    def mode(self) -> float: ...

    @abstractmethod
    def skewness(self) -> float: ...

    @abstractmethod
    def excess_kurtosis(self) -> float: ...

    def kurtosis(self) -> float:
        return self.excess_kurtosis() + 3.0

    def expected_value(self, func: Callable[[float], float]) -> float:
        """``E[func(X)]`` by adaptive quadrature over the support."""
        support = self.support
        value, _ = _sp_integrate.quad(
            lambda x: func(x) * self._pdf_scalar(x), support.left, support.right, limit=200
        )
        return float(value)

    # ---------------------------------------------------- characteristic func

    def cf(self, t: ArrayLike) -> Any:
        """
        Characteristic function ``E[exp(itX)]``.

        ``cf(0)`` is exactly ``1`` for every distribution.
        """
        arr = as_float_array(t)
        out = np.empty(arr.shape, dtype=np.complex128)
        for index, value in np.ndenumerate(arr):
            out[index] = 1.0 + 0.0j if value == 0.0 else self._cf_impl(float(value))
        return pack(out, arr)

    def _cf_impl(self, t: float) -> complex:
        support = self.support
        if support.is_bounded_left and support.is_bounded_right:
            left, right = support.left, support.right
            re, _ = _sp_integrate.quad(self._pdf_scalar, left, right, weight="cos", wvar=t)
            im, _ = _sp_integrate.quad(self._pdf_scalar, left, right, weight="sin", wvar=t)
            return complex(re, im)
        if support.is_bounded_left:
            left = support.left
            half = _fourier_half_line(lambda u: self._pdf_scalar(left + u), t)
            return complex(np.exp(1j * t * left) * half)
        if support.is_bounded_right:
            right = support.right
            half = _fourier_half_line(lambda u: self._pdf_scalar(right - u), -t)
            return complex(np.exp(1j * t * right) * half)
        positive = _fourier_half_line(self._pdf_scalar, t)
        negative = _fourier_half_line(lambda u: self._pdf_scalar(-u), -t)
        return positive + negative

    # ------------------------------------------------------------------ random

    @abstractmethod
    def variate(self, source: UniformSource) -> float:
        """Draw one random variate."""

    def sample(self, n: int, source: UniformSource) -> ArraySample:
        """Draw ``n`` independent variates."""
        out = np.empty(n, dtype=np.float64)
        self.sample_into(out, source)
        return ArraySample(out)

    def sample_into(self, out: MutableSequence[float] | FloatArray, source: UniformSource) -> None:
        """Fill every slot of ``out`` with an independent variate."""
        for index in range(len(out)):
            out[index] = self.variate(source)

    # -------------------------------------------------------- bulk evaluation

    def pdf_into(self, x: Sequence[float] | FloatArray, out: MutableSequence[float] | FloatArray) -> None:
        """Write ``pdf(x[i])`` into ``out[i]``."""
        self._evaluate_into(self.pdf, x, out)

    def cdf_into(self, x: Sequence[float] | FloatArray, out: MutableSequence[float] | FloatArray) -> None:
        """Write ``cdf(x[i])`` into ``out[i]``."""
        self._evaluate_into(self.cdf, x, out)

    def sf_into(self, x: Sequence[float] | FloatArray, out: MutableSequence[float] | FloatArray) -> None:
        """Write ``sf(x[i])`` into ``out[i]``."""
        self._evaluate_into(self.sf, x, out)

    def _evaluate_into(
        self,
        func: Callable[[ArrayLike], Any],
        x: Sequence[float] | FloatArray,
        out: MutableSequence[float] | FloatArray,
    ) -> None:
        size = len(x)
        if size > len(out):
            warnings.warn(
                f"Output buffer of length {len(out)} is shorter than the input of length "
                f"{size}; nothing was written.",
                BufferSizeWarning,
                stacklevel=3,
            )
            return
        values = np.asarray(func(as_float_array(x)), dtype=np.float64).ravel()
        if isinstance(out, np.ndarray):
            out[:size] = values
        else:
            for index in range(size):
                out[index] = float(values[index])

    # ---------------------------------------------------------- characteristics

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        def _kurtosis(excess: bool = False) -> float:
            return self.excess_kurtosis() if excess else self.kurtosis()

        funcs: dict[GenericCharacteristicName, Callable[..., Any]] = {
            CharacteristicName.PDF: lambda x, **_: self.pdf(x),
            CharacteristicName.LOGPDF: lambda x, **_: self.logpdf(x),
            CharacteristicName.CDF: lambda x, **_: self.cdf(x),
            CharacteristicName.LOGCDF: lambda x, **_: self.logcdf(x),
            CharacteristicName.SF: lambda x, **_: self.sf(x),
            CharacteristicName.LOGSF: lambda x, **_: self.logsf(x),
            CharacteristicName.PPF: self.quantile,
            CharacteristicName.ISF: self.quantile1m,
            CharacteristicName.CF: lambda t, **_: self.cf(t),
            CharacteristicName.MEAN: constant_characteristic(self.mean),
            CharacteristicName.VAR: constant_characteristic(self.var),
            CharacteristicName.MEDIAN: constant_characteristic(self.median),
            CharacteristicName.MODE: constant_characteristic(self.mode),
            CharacteristicName.SKEW: constant_characteristic(self.skewness),
            CharacteristicName.KURT: constant_characteristic(_kurtosis),
        }
        return {name: AnalyticalComputation(target=name, func=func) for name, func in funcs.items()}


def _fourier_half_line(func: Callable[[float], float], t: float) -> complex:
    """``∫_0^∞ func(u) exp(itu) du`` with QUADPACK's Fourier integration."""
    omega = abs(t)
    re, _ = _sp_integrate.quad(func, 0.0, np.inf, weight="cos", wvar=omega)
    im, _ = _sp_integrate.quad(func, 0.0, np.inf, weight="sin", wvar=omega)
    return complex(re, im if t > 0.0 else -im)


__all__ = [
    "Distribution",
    "ContinuousDistribution",
    "as_float_array",
    "pack",
]

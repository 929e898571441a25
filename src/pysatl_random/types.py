"""
Core Type Definitions
=====================

Type aliases, enumerations and interval primitives shared by PySATL Random.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from math import inf
from typing import Any, TypeAlias, cast, overload

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """Whether a distribution has a density or a probability mass function."""

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


class DistributionType:
    """Marker base of distribution type descriptors."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class EuclideanDistributionType(DistributionType):
    """
    Distribution on a Euclidean space.

    Parameters
    ----------
    kind : Kind
        Continuous or discrete.
    dimension : int
        Number of coordinates of a variate.
    """

    kind: Kind
    dimension: int


UnivariateContinuous = EuclideanDistributionType(kind=Kind.CONTINUOUS, dimension=1)
"""Descriptor shared by every family of this package."""

NumPyNumber = np.floating[Any] | np.integer[Any]
Number = NumPyNumber | int | float
NumericArray = NDArray[NumPyNumber]
BoolArray = NDArray[np.bool_]
FloatArray = NDArray[np.float64]

ArrayLike = Number | Sequence[float] | NumericArray
"""Argument of a vectorized characteristic: a scalar, a sequence or an array."""

SampleLike = Sequence[float] | NumericArray
"""Estimator input; it is copied and never modified."""

GenericCharacteristicName: TypeAlias = str
ParametrizationName: TypeAlias = str

ScalarFunc = Callable[[float], float]


@dataclass(frozen=True, slots=True)
class Interval1D:
    """
    Interval of the real line.

    Parameters
    ----------
    left : float, default -inf
        Left endpoint.
    right : float, default inf
        Right endpoint.
    left_closed : bool, default True
        Whether ``left`` belongs to the interval; forced to ``False`` for ``-inf``.
    right_closed : bool, default True
        Whether ``right`` belongs to the interval; forced to ``False`` for ``inf``.
    """

    left: float = -inf
    right: float = inf
    left_closed: bool = True
    right_closed: bool = True

    def __post_init__(self) -> None:
        if self.left == -inf:
            object.__setattr__(self, "left_closed", False)
        if self.right == inf:
            object.__setattr__(self, "right_closed", False)

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        """Elementwise membership test; a scalar argument gives a ``bool``."""
        arr = np.asarray(x)
        above = (arr > self.left) | (self.left_closed & (arr == self.left))
        below = (arr < self.right) | (self.right_closed & (arr == self.right))
        result = above & below
        if np.ndim(arr) == 0:
            return bool(result)
        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))


class CharacteristicName(StrEnum):
    """
    Names under which ``query_method`` exposes the characteristics.

    Moments ignore the argument they are called with.
    """

    PDF = "pdf"
    LOGPDF = "logpdf"
    CDF = "cdf"
    LOGCDF = "logcdf"
    SF = "sf"
    LOGSF = "logsf"
    PPF = "ppf"
    ISF = "isf"
    CF = "cf"
    MEAN = "mean"
    VAR = "var"
    MEDIAN = "median"
    MODE = "mode"
    SKEW = "skewness"
    KURT = "kurtosis"


class FamilyName(StrEnum):
    GAMMA = "Gamma"
    ERLANG = "Erlang"
    CHI_SQUARED = "ChiSquared"
    LAPLACE = "Laplace"
    LEVY = "Levy"
    PARETO = "Pareto"
    STUDENT_T = "StudentT"
    LOG_NORMAL = "LogNormal"
    RAISED_COSINE = "RaisedCosine"
    RAAB_GREEN = "RaabGreen"
    TRIANGULAR = "Triangular"
    MAXWELL_BOLTZMANN = "MaxwellBoltzmann"


__all__ = [
    "Kind",
    "DistributionType",
    "EuclideanDistributionType",
    "UnivariateContinuous",
    "GenericCharacteristicName",
    "ParametrizationName",
    "ScalarFunc",
    "Interval1D",
    "ArrayLike",
    "BoolArray",
    "FloatArray",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "SampleLike",
    "CharacteristicName",
    "FamilyName",
]
